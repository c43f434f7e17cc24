from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyHeader

from recordstore.app import App
from recordstore.core.modules.session.models import AuthToken

# The whole header value is the token, "Bearer " prefix included
authorization_scheme = APIKeyHeader(name="authorization", auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_optional_auth_token(
    authorization: Annotated[str | None, Depends(authorization_scheme)] = None,
) -> AuthToken | None:
    """Raw token from the authorization header, without validation."""
    return AuthToken(authorization) if authorization else None


async def get_auth_token(
    app: Annotated[App, Depends(get_app)],
    auth_token: Annotated[AuthToken | None, Depends(get_optional_auth_token)] = None,
) -> AuthToken:
    """Gate for protected routes: raises AuthenticationError before the route runs."""
    return app.ensure_authenticated(auth_token)


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
AuthTokenDep = Annotated[AuthToken, Depends(get_auth_token)]
OptionalAuthTokenDep = Annotated[AuthToken | None, Depends(get_optional_auth_token)]
