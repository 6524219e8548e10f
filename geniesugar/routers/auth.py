"""Authentication router.

Registration, cookie-based login, logout and the current user.
"""

from datetime import UTC, datetime

from fastapi import (
    APIRouter,
    BackgroundTasks,
    Depends,
    HTTPException,
    Request,
    Response,
    status,
)
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from geniesugar.config import settings
from geniesugar.core.auth import CurrentUser, extract_session_token
from geniesugar.core.security import create_access_token, hash_password, verify_password
from geniesugar.core.token_blacklist import revoke_session_token
from geniesugar.database import get_db
from geniesugar.logging_config import get_logger
from geniesugar.middleware.rate_limit import limiter
from geniesugar.models.user import User
from geniesugar.schemas.auth import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    UserRegistrationRequest,
    UserRegistrationResponse,
    UserResponse,
)
from geniesugar.services.account_emails import send_welcome_email
from geniesugar.services.audit_service import USER_REGISTERED, log_event

logger = get_logger(__name__)

router = APIRouter(prefix="/api/auth", tags=["authentication"])

_REGISTRATION_FAILED = "Registration failed. Please try again or contact support."


@router.post(
    "/register",
    response_model=UserRegistrationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        409: {"model": ErrorResponse, "description": "Email already exists"},
    },
)
async def register_user(
    body: UserRegistrationRequest,
    request: Request,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
) -> UserRegistrationResponse:
    """Register a new account and queue the welcome email."""
    email = body.email.lower()

    existing_user = await db.execute(select(User).where(User.email == email))
    if existing_user.scalar_one_or_none():
        logger.warning("Registration attempt with existing email")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=_REGISTRATION_FAILED,
        )

    user = User(
        email=email,
        hashed_password=hash_password(body.password),
        full_name=body.full_name,
        role=body.role,
        is_active=True,
    )

    try:
        db.add(user)
        await db.flush()
        await log_event(
            db,
            event_type=USER_REGISTERED,
            user_id=user.id,
            detail={"role": user.role.value},
            ip_address=request.client.host if request.client else None,
        )
        await db.commit()
        await db.refresh(user)
    except IntegrityError:
        await db.rollback()
        logger.warning("Registration failed - integrity error")
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=_REGISTRATION_FAILED,
        )

    logger.info(
        "User registered successfully",
        user_id=str(user.id),
        role=user.role.value,
    )

    background_tasks.add_task(send_welcome_email, user.email, user.full_name, user.role)

    return UserRegistrationResponse(id=user.id, email=user.email, role=user.role)


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={
        401: {"model": ErrorResponse, "description": "Invalid credentials"},
    },
)
@limiter.limit("10/minute")
async def login(
    body: LoginRequest,
    response: Response,
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> LoginResponse:
    """Authenticate and set the session cookie."""
    client_ip = request.client.host if request.client else "unknown"

    result = await db.execute(select(User).where(User.email == body.email.lower()))
    user = result.scalar_one_or_none()

    if not user or not verify_password(body.password, user.hashed_password):
        logger.warning(
            "Failed login attempt",
            client_ip=client_ip,
            reason="invalid_credentials",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    if not user.is_active:
        logger.warning(
            "Failed login attempt",
            client_ip=client_ip,
            reason="account_disabled",
        )
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
        )

    token = create_access_token(
        user_id=user.id,
        email=user.email,
        role=user.role.value,
    )
    response.set_cookie(
        key=settings.jwt_cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
        max_age=settings.session_expire_hours * 3600,
        path="/",
    )

    user.last_login_at = datetime.now(UTC)
    await db.commit()

    logger.info(
        "User logged in successfully",
        user_id=str(user.id),
        client_ip=client_ip,
    )

    return LoginResponse(user=UserResponse.model_validate(user))


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    request: Request,
    response: Response,
    user: CurrentUser,
) -> LogoutResponse:
    """End the session: revoke its token server-side and clear the cookie."""
    token = extract_session_token(request)
    if token:
        await revoke_session_token(token)

    response.delete_cookie(
        key=settings.jwt_cookie_name,
        path="/",
        httponly=True,
        secure=settings.cookie_secure,
        samesite="lax",
    )
    logger.info("User logged out", user_id=str(user.id))
    return LogoutResponse()


@router.get("/me", response_model=UserResponse)
async def get_me(user: CurrentUser) -> UserResponse:
    """Return the authenticated user."""
    return UserResponse.model_validate(user)
