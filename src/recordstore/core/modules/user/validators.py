from recordstore.errors import ValidationError

BCRYPT_MAX_PASSWORD_BYTES = 72


def validate_password(password: str) -> None:
    """Validate password meets requirements.

    Requirements:
    - Not empty
    - At most 72 bytes when UTF-8 encoded (bcrypt input limit)

    Raises:
        ValidationError: If password doesn't meet requirements
    """
    if not password:
        raise ValidationError("Password cannot be empty")

    if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
        raise ValidationError(f"Password cannot be longer than {BCRYPT_MAX_PASSWORD_BYTES} bytes")


def validate_email(email: str) -> None:
    """Validate that the email looks like an address (one '@' with text on both sides)."""
    local, sep, domain = email.partition("@")
    if not sep or not local or not domain or "@" in domain:
        raise ValidationError(f"Invalid email address '{email}'")
