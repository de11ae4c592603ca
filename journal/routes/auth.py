"""
Authentication Routes.

Registration, password login and the current-session lookup used by the
admin frontend.
"""

from fastapi import APIRouter, Request
from fastapi.responses import ORJSONResponse
from starlette.status import HTTP_201_CREATED

from journal.dependencies import AuthServiceDep, OptionalAuthDep
from journal.managers import limiter
from journal.managers.rate_limiter import AUTH_RATE_LIMIT
from journal.schemas import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    SessionResponse,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["🔐 Auth"])


@router.post(
    "/register",
    response_class=ORJSONResponse,
    response_model=UserResponse,
    status_code=HTTP_201_CREATED,
    summary="Register",
    description=(
        "Create an account while registration is open. The first account "
        "becomes an admin, later ones are authors."
    ),
    responses={
        403: {
            "description": "Registration closed",
            "content": {
                "application/json": {"example": {"detail": "Registration is currently disabled"}},
            },
        },
        409: {
            "description": "Email taken",
            "content": {
                "application/json": {
                    "example": {"detail": "Email 'ada@example.com' is already registered"},
                },
            },
        },
    },
    operation_id="auth_register",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def register(
    request: Request,
    data: RegisterRequest,
    service: AuthServiceDep,
) -> UserResponse:
    """
    Register a new account.

    Parameters
    ----------
    request : Request
        Current request context.
    data : RegisterRequest
        Name, email and password.
    service : AuthService
        Authentication service.

    Returns
    -------
    UserResponse
        The created user.

    Raises
    ------
    RegistrationClosedError
        If registration is disabled in site settings.
    DuplicateEntryError
        If the email is already registered.
    """
    user = await service.register(data)
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_class=ORJSONResponse,
    response_model=LoginResponse,
    summary="Log in",
    description="Exchange email and password for a bearer token.",
    responses={
        401: {
            "description": "Bad credentials",
            "content": {
                "application/json": {"example": {"detail": "Invalid email or password"}},
            },
        },
    },
    operation_id="auth_login",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def login(
    request: Request,
    data: LoginRequest,
    service: AuthServiceDep,
) -> LoginResponse:
    user, token = await service.login(data)
    return LoginResponse(
        access_token=token.access_token,
        token_type=token.token_type,
        user=UserResponse.model_validate(user),
    )


@router.get(
    "/session",
    response_class=ORJSONResponse,
    response_model=SessionResponse | None,
    summary="Current session",
    description="The signed-in user and session, or `null` for anonymous requests.",
    operation_id="auth_session",
)
@limiter.limit("120/minute")
async def get_session_info(request: Request, auth: OptionalAuthDep) -> SessionResponse | None:
    if auth is None:
        return None
    return SessionResponse(user=UserResponse.model_validate(auth.user), session=auth.session)
