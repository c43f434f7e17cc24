"""Bearer token generation.

Tokens keep the historical header format (``"Bearer "`` followed by a
zero-padded decimal number) but are drawn from the ``secrets`` module.
"""

import secrets
from collections.abc import Callable, Container

from recordstore.core.modules.session.models import AuthToken
from recordstore.errors import TokenSpaceExhaustedError

TOKEN_PREFIX = "Bearer "
TOKEN_DIGITS = 40
MAX_TOKEN_ATTEMPTS = 100


def random_token() -> AuthToken:
    """Draw a fresh token from a cryptographically secure source."""
    number = secrets.randbelow(10**TOKEN_DIGITS)
    return AuthToken(f"{TOKEN_PREFIX}{number:0{TOKEN_DIGITS}d}")


def generate_token(
    existing: Container[str],
    draw: Callable[[], AuthToken] = random_token,
    max_attempts: int = MAX_TOKEN_ATTEMPTS,
) -> AuthToken:
    """Return a token that is not in ``existing``.

    Does not insert the token anywhere; the caller must do that under the
    same lock as this check.

    Raises:
        TokenSpaceExhaustedError: If ``max_attempts`` draws in a row collide
    """
    for _ in range(max_attempts):
        candidate = draw()
        if candidate not in existing:
            return candidate
    raise TokenSpaceExhaustedError(f"No unused session token after {max_attempts} attempts")
