from fastapi_users_db_sqlalchemy import SQLAlchemyBaseUserTableUUID
from sqlalchemy import Column, String
from app.models.base import Base

class User(SQLAlchemyBaseUserTableUUID, Base):
    """Login identity. Everything the dashboard shows about a person lives on Profile."""
    __tablename__ = "users"

    display_name = Column(String, nullable=True)  # optional name given at registration
