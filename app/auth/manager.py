import uuid
import logging
from typing import Optional, Union

from fastapi import HTTPException, Request
from fastapi.security import OAuth2PasswordRequestForm
from fastapi_users import BaseUserManager, UUIDIDMixin, exceptions
from fastapi_users.schemas import BaseUserCreate

from app.models.user import User
from app.auth.config import auth_config
from app.crud.profile import is_bootstrap_admin, resolve_profile

log = logging.getLogger(__name__)

ADMIN_LOGIN_NAME = "admin"


class UserManager(UUIDIDMixin, BaseUserManager[User, uuid.UUID]):
    reset_password_token_secret = auth_config.jwt_secret
    verification_token_secret = auth_config.jwt_secret

    async def validate_password(self, password: str, user: Union[BaseUserCreate, User]) -> None:
        if len(password) < auth_config.min_password_length:
            raise exceptions.InvalidPasswordException(
                reason=f"weak-password: at least {auth_config.min_password_length} characters"
            )

    # The bootstrap admin email carries the admin role, so only
    # _authenticate_bootstrap_admin may create an account with it.
    async def create(self, user_create, safe: bool = False, request: Optional[Request] = None) -> User:
        if is_bootstrap_admin(user_create.email):
            log.warning("refused registration with the bootstrap admin email")
            raise exceptions.UserAlreadyExists()
        return await super().create(user_create, safe=safe, request=request)

    async def update(self, user_update, user: User, safe: bool = False, request: Optional[Request] = None) -> User:
        email = getattr(user_update, "email", None)
        if email and is_bootstrap_admin(email) and not is_bootstrap_admin(user.email):
            log.warning("user %s tried to take the bootstrap admin email", user.id)
            raise exceptions.UserAlreadyExists()
        return await super().update(user_update, user, safe=safe, request=request)

    async def authenticate(self, credentials: OAuth2PasswordRequestForm) -> Optional[User]:
        if credentials.username.strip().lower() == ADMIN_LOGIN_NAME:
            return await self._authenticate_bootstrap_admin(credentials.password)
        return await super().authenticate(credentials)

    async def _authenticate_bootstrap_admin(self, password: str) -> Optional[User]:
        """Sign in the shared admin account, creating it on first use.

        The configured ADMIN_PASSWORD is the only source of truth for this
        account, so the stored hash follows it when it changes.
        """
        if not auth_config.admin_password:
            raise HTTPException(status_code=400, detail="ADMIN_PASSWORD_NOT_CONFIGURED")
        if password != auth_config.admin_password:
            log.warning("failed bootstrap admin login")
            raise HTTPException(status_code=400, detail="ADMIN_BAD_PASSWORD")

        try:
            user = await self.get_by_email(auth_config.admin_email)
        except exceptions.UserNotExists:
            user = await self.user_db.create({
                "email": auth_config.admin_email,
                "hashed_password": self.password_helper.hash(password),
                "display_name": auth_config.admin_display_name,
                "is_active": True,
                "is_superuser": False,
                "is_verified": True,
            })
            log.info("bootstrap admin account created: %s", user.id)
            return user

        verified, _ = self.password_helper.verify_and_update(password, user.hashed_password)
        if not verified:
            user = await self.user_db.update(user, {"hashed_password": self.password_helper.hash(password)})
        return user

    async def on_after_register(self, user: User, request: Optional[Request] = None):
        profile = await resolve_profile(self.user_db.session, user)
        log.info("user registered: %s (%s)", user.email, profile.role.value)

    async def on_after_login(self, user: User, request: Optional[Request] = None, response=None):
        # Every login re-runs the profile check, which also repairs the admin role
        await resolve_profile(self.user_db.session, user)
