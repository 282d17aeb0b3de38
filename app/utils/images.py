# app/utils/images.py
import io
import logging

from fastapi import HTTPException
from PIL import Image, ImageOps, UnidentifiedImageError

log = logging.getLogger(__name__)

MAX_WIDTH = 1200
JPEG_QUALITY = 80


def compress_image(body: bytes, max_width: int = MAX_WIDTH, quality: int = JPEG_QUALITY) -> bytes:
    """Downscale to at most ``max_width`` pixels wide and re-encode as JPEG.

    Runs synchronously; call it through a threadpool from async code.
    """
    try:
        with Image.open(io.BytesIO(body)) as img:
            img = ImageOps.exif_transpose(img)
            if img.mode in ("RGBA", "LA", "P"):
                img = img.convert("RGBA")
                background = Image.new("RGB", img.size, (255, 255, 255))
                background.paste(img, mask=img.getchannel("A"))
                img = background
            elif img.mode != "RGB":
                img = img.convert("RGB")

            if img.width > max_width:
                height = round(img.height * max_width / img.width)
                img = img.resize((max_width, height), Image.Resampling.LANCZOS)

            out = io.BytesIO()
            img.save(out, format="JPEG", quality=quality, optimize=True)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        log.info("could not decode uploaded image: %s", e)
        raise HTTPException(status_code=400, detail="Invalid image file.")

    data = out.getvalue()
    log.debug("compressed image %s -> %s bytes", len(body), len(data))
    return data
