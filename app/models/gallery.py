from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.models.base import Base
from app.utils.timezones import utcnow
import uuid


class GalleryPhoto(Base):
    __tablename__ = "gallery_photos"

    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))
    image_url = Column(String, nullable=False)
    storage_path = Column(String, nullable=True)  # object key, used for deletion
    caption = Column(String, nullable=False, default="")

    uploaded_by = Column(String, nullable=False)
    uploaded_by_name = Column(String, nullable=False)
    uploaded_by_photo = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)

    like_rows = relationship(
        "PhotoLike",
        back_populates="photo",
        cascade="all, delete-orphan",
        passive_deletes=True,
        lazy="selectin",
        order_by="PhotoLike.created_at",
    )

    @property
    def likes(self):
        return [row.uid for row in self.like_rows]


# One row per (photo, user); the primary key makes liking a set operation
class PhotoLike(Base):
    __tablename__ = "gallery_likes"

    photo_id = Column(String, ForeignKey("gallery_photos.id", ondelete="CASCADE"), primary_key=True)
    uid = Column(String, primary_key=True)
    created_at = Column(DateTime, default=utcnow)

    photo = relationship("GalleryPhoto", back_populates="like_rows")
