from fastapi import APIRouter, Response
from pydantic import BaseModel, Field

from recordstore.web.deps import AppDep, OptionalAuthTokenDep
from recordstore.web.openapi import SERVER_ERROR_RESPONSES, ClientErrorResponse

router = APIRouter(tags=["auth"], responses=SERVER_ERROR_RESPONSES)

AUTHORIZATION_HEADER = "authorization"


class SignupRequest(BaseModel):
    """New account details."""

    name: str | None = Field(None, description="Display name")
    email: str = Field(..., min_length=1, description="Email used to log in")
    password: str = Field(..., min_length=1, description="Password, stored as a bcrypt hash")


class LoginRequest(BaseModel):
    """Authentication request."""

    email: str = Field(..., description="Email for authentication")
    password: str = Field(..., description="Password for authentication")


@router.post(
    "/signup",
    summary="Create account",
    description="Create a user account. The new session token is returned in the authorization header.",
    operation_id="signup",
    status_code=201,
    response_class=Response,
    responses={
        201: {"description": "Account created, token in authorization header"},
        400: {"model": ClientErrorResponse, "description": "Invalid request or email already registered"},
    },
)
async def signup(signup_data: SignupRequest, app: AppDep) -> Response:
    token = await app.signup(signup_data.name, signup_data.email, signup_data.password)
    return Response(status_code=201, headers={AUTHORIZATION_HEADER: token})


@router.post(
    "/login",
    summary="Authenticate user",
    description="Authenticate with email and password. The session token is returned in the authorization header.",
    operation_id="login",
    status_code=204,
    response_class=Response,
    responses={
        204: {"description": "Authenticated, token in authorization header"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(login_data: LoginRequest, app: AppDep) -> Response:
    token = await app.login(login_data.email, login_data.password)
    return Response(status_code=204, headers={AUTHORIZATION_HEADER: token})


@router.post(
    "/logout",
    summary="End session",
    description="Invalidate the session token sent in the authorization header, if any.",
    operation_id="logout",
    status_code=204,
    responses={204: {"description": "Logged out"}},
)
async def logout(app: AppDep, auth_token: OptionalAuthTokenDep) -> None:
    app.logout(auth_token)
