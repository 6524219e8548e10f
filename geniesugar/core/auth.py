"""Authentication and role-checking dependencies.

The session token is read from the httpOnly cookie set at login, or
from an ``Authorization: Bearer`` header for non-browser clients.
"""

from typing import Annotated

from fastapi import Cookie, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from geniesugar.config import settings
from geniesugar.core.security import TokenData, decode_access_token
from geniesugar.core.token_blacklist import is_token_revoked
from geniesugar.database import get_db
from geniesugar.logging_config import get_logger
from geniesugar.models.user import User, UserRole

logger = get_logger(__name__)


def extract_session_token(request: Request) -> str | None:
    """Session token from the cookie, else from an Authorization: Bearer header."""
    token = request.cookies.get(settings.jwt_cookie_name)
    if token:
        return token
    auth_header = request.headers.get("Authorization")
    if auth_header and auth_header.startswith("Bearer "):
        return auth_header[7:]
    return None


async def get_current_user(
    request: Request,
    session_token: Annotated[str | None, Cookie(alias=settings.jwt_cookie_name)] = None,
    db: AsyncSession = Depends(get_db),
) -> User:
    """Resolve the authenticated user for this request.

    Raises:
        HTTPException 401: If no valid credentials are found or the
            account is disabled
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if not session_token:
        session_token = extract_session_token(request)

    if not session_token:
        raise credentials_exception

    payload = decode_access_token(session_token)
    if payload is None:
        raise credentials_exception

    try:
        token_data = TokenData(payload)
    except (KeyError, ValueError):
        raise credentials_exception

    # Logged out sessions stay revoked until the token would have expired
    if token_data.jti and await is_token_revoked(token_data.jti):
        raise credentials_exception

    result = await db.execute(select(User).where(User.id == token_data.user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise credentials_exception
    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is disabled",
        )
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


class RoleChecker:
    """Dependency that rejects users whose role is not in ``allowed_roles``.

    Usage:
        @router.post("/glucose", dependencies=[Depends(require_patient)])
        async def create_reading(user: CurrentUser): ...
    """

    def __init__(self, allowed_roles: list[UserRole]):
        self.allowed_roles = allowed_roles

    async def __call__(
        self,
        request: Request,
        current_user: CurrentUser,
    ) -> bool:
        if current_user.role not in self.allowed_roles:
            client_ip = request.client.host if request.client else "unknown"
            logger.warning(
                "Unauthorized access attempt",
                user_id=str(current_user.id),
                user_role=current_user.role.value,
                required_roles=[r.value for r in self.allowed_roles],
                path=request.url.path,
                method=request.method,
                client_ip=client_ip,
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="You don't have permission to access this resource",
            )
        return True


def require_roles(*roles: UserRole) -> RoleChecker:
    """Create a RoleChecker for the given roles."""
    return RoleChecker(list(roles))


require_patient = require_roles(UserRole.PATIENT)
