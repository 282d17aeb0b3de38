from types import SimpleNamespace

import pytest
from fastapi import HTTPException
from fastapi_users import exceptions
from fastapi_users_db_sqlalchemy import SQLAlchemyUserDatabase

from app.auth.config import auth_config
from app.auth.manager import UserManager
from app.auth.messages import translate_auth_error
from app.crud.profile import get_profile
from app.models.profile import UserRole
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate


@pytest.fixture
def manager(db):
    return UserManager(SQLAlchemyUserDatabase(db, User))


@pytest.fixture
def admin_password(monkeypatch):
    monkeypatch.setattr(auth_config, "admin_password", "pivo-na-cepu")
    return "pivo-na-cepu"


def creds(username, password):
    return SimpleNamespace(username=username, password=password)


async def test_bootstrap_admin_created_on_first_login(db, manager, admin_password, alice):
    user = await manager.authenticate(creds("admin", admin_password))
    assert user.email == auth_config.admin_email

    await manager.on_after_login(user)
    profile = await get_profile(db, str(user.id))
    assert profile.role == UserRole.admin
    assert profile.display_name == auth_config.admin_display_name

    again = await manager.authenticate(creds("Admin", admin_password))
    assert again.id == user.id


async def test_bootstrap_admin_role_repaired_on_login(db, manager, admin_password):
    user = await manager.authenticate(creds("admin", admin_password))
    await manager.on_after_login(user)
    profile = await get_profile(db, str(user.id))
    profile.role = UserRole.employee
    await db.commit()

    await manager.on_after_login(await manager.authenticate(creds("admin", admin_password)))
    await db.refresh(profile)
    assert profile.role == UserRole.admin


async def test_bootstrap_admin_follows_password_change(db, manager, admin_password, monkeypatch):
    user = await manager.authenticate(creds("admin", admin_password))
    monkeypatch.setattr(auth_config, "admin_password", "novy-sud")

    same = await manager.authenticate(creds("admin", "novy-sud"))
    assert same.id == user.id
    assert manager.password_helper.verify_and_update("novy-sud", same.hashed_password)[0]


async def test_bootstrap_admin_bad_password(manager, admin_password):
    with pytest.raises(HTTPException) as exc:
        await manager.authenticate(creds("admin", "spatne"))
    assert exc.value.detail == "ADMIN_BAD_PASSWORD"


async def test_bootstrap_admin_not_configured(manager):
    with pytest.raises(HTTPException) as exc:
        await manager.authenticate(creds("admin", "cokoliv"))
    assert exc.value.detail == "ADMIN_PASSWORD_NOT_CONFIGURED"


async def test_short_password_rejected(manager):
    with pytest.raises(exceptions.InvalidPasswordException) as exc:
        await manager.validate_password("12345", None)
    assert "weak-password" in exc.value.reason
    assert translate_auth_error(exc.value.reason) == "Heslo musí mít alespoň 6 znaků"


@pytest.mark.parametrize(
    "detail,message",
    [
        ("LOGIN_BAD_CREDENTIALS", "Nesprávný email nebo heslo"),
        ("REGISTER_USER_ALREADY_EXISTS", "Email je již registrován"),
        ({"code": "REGISTER_INVALID_PASSWORD", "reason": "weak-password: at least 6"}, "Heslo musí mít alespoň 6 znaků"),
        ("ADMIN_BAD_PASSWORD", "Nesprávné admin heslo"),
    ],
)
def test_translate_known_errors(detail, message):
    assert translate_auth_error(detail) == message


def test_unknown_error_has_no_translation():
    assert translate_auth_error("SOMETHING_ELSE") is None
    assert translate_auth_error(None) is None


async def test_registration_with_admin_email_refused(db, manager, alice):
    for email in (auth_config.admin_email, auth_config.admin_email.upper()):
        with pytest.raises(exceptions.UserAlreadyExists):
            await manager.create(UserCreate(email=email, password="heslo123"), safe=True)
    with pytest.raises(exceptions.UserNotExists):
        await manager.get_by_email(auth_config.admin_email)


async def test_employee_cannot_take_admin_email(db, manager, alice):
    mallory = await manager.create(UserCreate(email="mallory@example.com", password="heslo123"), safe=True)

    with pytest.raises(exceptions.UserAlreadyExists):
        await manager.update(UserUpdate(email=auth_config.admin_email), mallory, safe=True)

    await manager.on_after_login(mallory)
    profile = await get_profile(db, str(mallory.id))
    assert mallory.email == "mallory@example.com"
    assert profile.role == UserRole.employee


async def test_bootstrap_admin_can_still_edit_itself(db, manager, admin_password):
    user = await manager.authenticate(creds("admin", admin_password))
    updated = await manager.update(
        UserUpdate(email=auth_config.admin_email, display_name="Hospodský"), user, safe=True
    )
    assert updated.display_name == "Hospodský"
