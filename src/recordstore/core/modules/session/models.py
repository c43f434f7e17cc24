"""Session token types."""

from typing import NewType

# Full value of the `authorization` header, e.g. "Bearer 0000...1234"
AuthToken = NewType("AuthToken", str)
