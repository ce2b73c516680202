from typing import Annotated, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from apps.api.auth.service import ADMIN_ID, AuthServiceDependency
from core.exceptions import UnauthorizedException

# auto_error is off so a missing header is reported as 401 in our error format
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_admin(
    auth_service: AuthServiceDependency,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if not credentials or not credentials.credentials:
        raise UnauthorizedException("Access token required", error_code="TOKEN_REQUIRED")
    auth_service.verify_token(credentials.credentials)
    return ADMIN_ID


AdminDependency = Annotated[str, Depends(get_current_admin)]
