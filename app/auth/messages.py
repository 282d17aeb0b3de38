from typing import Optional

# Known auth failures -> message shown to the user.
# Keys are matched as substrings of the error code or message.
AUTH_ERROR_MESSAGES = [
    (("LOGIN_BAD_CREDENTIALS", "invalid-credential", "wrong-password"), "Nesprávný email nebo heslo"),
    (("user-not-found", "USER_NOT_EXISTS"), "Uživatel s tímto emailem neexistuje"),
    (("REGISTER_USER_ALREADY_EXISTS", "UPDATE_USER_EMAIL_ALREADY_EXISTS", "email-already-in-use"), "Email je již registrován"),
    (("weak-password",), "Heslo musí mít alespoň 6 znaků"),
    (("invalid-email", "value is not a valid email"), "Neplatný formát emailu"),
    (("ADMIN_PASSWORD_NOT_CONFIGURED",), "Admin heslo není nakonfigurované"),
    (("ADMIN_BAD_PASSWORD",), "Nesprávné admin heslo"),
    (("LOGIN_USER_NOT_VERIFIED",), "Účet zatím není ověřený"),
]


def _flatten(detail) -> str:
    if isinstance(detail, dict):
        return " ".join(str(v) for v in detail.values())
    if isinstance(detail, (list, tuple)):
        return " ".join(_flatten(d) for d in detail)
    return str(detail or "")


def translate_auth_error(detail) -> Optional[str]:
    text = _flatten(detail)
    for needles, message in AUTH_ERROR_MESSAGES:
        if any(n in text for n in needles):
            return message
    return None
