import threading
from collections.abc import Callable

import structlog

from recordstore.core.modules.session.models import AuthToken
from recordstore.core.modules.session.tokens import generate_token, random_token

logger = structlog.get_logger(__name__)


class SessionRegistry:
    """In-memory set of currently valid session tokens.

    Tokens carry no user identity and never expire; they live until revoked
    or until the process exits. All operations hold one lock, so the
    uniqueness check and the insert in issue() cannot interleave with
    another issue().
    """

    def __init__(self, draw: Callable[[], AuthToken] = random_token) -> None:
        self._tokens: set[AuthToken] = set()
        self._lock = threading.Lock()
        self._draw = draw

    def issue(self) -> AuthToken:
        """Generate a unique token, register it, and return it."""
        with self._lock:
            token = generate_token(self._tokens, self._draw)
            self._tokens.add(token)
            active = len(self._tokens)
        logger.debug("session_issued", active_sessions=active)
        return token

    def revoke(self, token: AuthToken | None) -> None:
        """Remove the token if present."""
        if not token:
            return
        with self._lock:
            self._tokens.discard(token)
            active = len(self._tokens)
        logger.debug("session_revoked", active_sessions=active)

    def is_valid(self, token: AuthToken | None) -> bool:
        if not token:
            return False
        with self._lock:
            return token in self._tokens

    def __len__(self) -> int:
        with self._lock:
            return len(self._tokens)
