import io

import pytest
from fastapi import HTTPException
from PIL import Image

from app.utils.images import MAX_WIDTH, compress_image


def encode(img, fmt):
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def decode(body):
    img = Image.open(io.BytesIO(body))
    img.load()
    return img


def test_wide_image_is_downscaled_keeping_ratio():
    out = decode(compress_image(encode(Image.new("RGB", (3000, 2000), "red"), "PNG")))
    assert out.format == "JPEG"
    assert out.size == (MAX_WIDTH, 800)


def test_narrow_image_keeps_its_size():
    out = decode(compress_image(encode(Image.new("RGB", (640, 480), "blue"), "JPEG")))
    assert out.size == (640, 480)


def test_transparency_is_flattened_on_white():
    img = Image.new("RGBA", (10, 10), (0, 0, 0, 0))
    out = decode(compress_image(encode(img, "PNG")))
    assert out.mode == "RGB"
    r, g, b = out.getpixel((5, 5))
    assert min(r, g, b) > 240


def test_palette_gif_is_converted():
    img = Image.new("P", (1600, 400))
    out = decode(compress_image(encode(img, "GIF")))
    assert out.format == "JPEG"
    assert out.size == (1200, 300)


def test_garbage_is_rejected():
    with pytest.raises(HTTPException) as exc:
        compress_image(b"definitely not an image")
    assert exc.value.status_code == 400
