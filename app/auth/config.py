from typing import Optional

from pydantic_settings import BaseSettings

class AuthConfig(BaseSettings):
    jwt_secret: str = "hospoda-super-secret-key"  # 🔐 Replace with something strong and secure
    jwt_lifetime_seconds: int = 60 * 60 * 12
    jwt_algorithm: str = "HS256"
    jwt_audience: str = "fastapi-users:auth"

    # Bootstrap admin: logging in as "admin" uses this password
    admin_password: Optional[str] = None
    admin_email: str = "admin@hospoda-vesnice.cz"
    admin_display_name: str = "Administrátor"
    min_password_length: int = 6

auth_config = AuthConfig()
