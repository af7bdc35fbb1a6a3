import re
from typing import Any

from email_validator import EmailNotValidError, validate_email

from tasktrack.utils.auth import BCRYPT_MAX_BYTES
from tasktrack.validators.base import MISSING, ValidationResult, clean_string, require_object

_PASSWORD_SHAPE = re.compile(r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)")


def _clean_email(payload: dict, result: ValidationResult) -> None:
    email = clean_string(payload, "email", result, label="Email", required=True)
    if email is MISSING:
        return
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        del result.data["email"]
        result.add_error("email", "Please provide a valid email")
        return
    result.data["email"] = email.lower()


def validate_register(payload: Any) -> ValidationResult:
    result = ValidationResult()
    payload = require_object(payload, result)
    if payload is None:
        return result

    clean_string(payload, "name", result, label="Name", required=True, min_length=2, max_length=50)
    _clean_email(payload, result)

    password = clean_string(payload, "password", result, label="Password", required=True, trim=False)
    if password is not MISSING:
        if len(password) < 6:
            result.add_error("password", "Password must be at least 6 characters long")
        elif not _PASSWORD_SHAPE.match(password):
            result.add_error(
                "password",
                "Password must contain at least one uppercase letter, one lowercase letter, and one number",
            )
        elif len(password.encode("utf-8")) > BCRYPT_MAX_BYTES:
            result.add_error("password", "Password too long: must be at most 72 bytes when UTF-8 encoded")
        if not result.ok:
            result.data.pop("password", None)
    return result


def validate_login(payload: Any) -> ValidationResult:
    result = ValidationResult()
    payload = require_object(payload, result)
    if payload is None:
        return result

    _clean_email(payload, result)
    clean_string(payload, "password", result, label="Password", required=True, trim=False)
    return result
