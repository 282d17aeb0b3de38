# app/utils/security.py

from fastapi import UploadFile, HTTPException

MAX_FILE_SIZE = 20 * 1024 * 1024  # 20MB
# Formats Pillow can decode; everything is re-encoded to JPEG before upload
ALLOWED_IMAGE_TYPES = ["image/jpeg", "image/png", "image/webp", "image/gif"]

async def validate_and_read_image(file: UploadFile) -> bytes:
    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=400, detail="Only images can be uploaded.")

    contents = await file.read()

    if len(contents) > MAX_FILE_SIZE:
        raise HTTPException(status_code=400, detail="File too large (20MB max).")
    if not contents:
        raise HTTPException(status_code=400, detail="Empty file.")

    return contents
