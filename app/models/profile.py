from sqlalchemy import Column, String, Boolean, Date, DateTime, Numeric, Text, Enum
from app.models.base import Base
from app.utils.timezones import utcnow
import enum


class UserRole(str, enum.Enum):
    admin = "admin"
    employee = "employee"


class Profile(Base):
    __tablename__ = "profiles"

    # Same value as users.id, stored as text
    uid = Column(String, primary_key=True)
    email = Column(String, nullable=False, index=True)
    display_name = Column(String, nullable=False)
    photo_url = Column(String, nullable=True)

    role = Column(Enum(UserRole), nullable=False, default=UserRole.employee)
    is_active = Column(Boolean, nullable=False, default=True)

    # Self-editable
    phone = Column(String, nullable=True)
    address = Column(String, nullable=True)
    birth_date = Column(Date, nullable=True)

    # Admin-editable
    start_date = Column(Date, nullable=True)
    position = Column(String, nullable=True)
    admin_notes = Column(Text, nullable=True)
    hourly_rate = Column(Numeric(10, 2), nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
