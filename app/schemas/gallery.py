from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import List, Optional


class GalleryPhotoRead(BaseModel):
    id: str
    image_url: str
    storage_path: Optional[str] = None
    caption: str = ""
    uploaded_by: str
    uploaded_by_name: str
    uploaded_by_photo: Optional[str] = None
    likes: List[str] = []
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
