from fastapi import APIRouter

from apps.api.auth.dependency import AdminDependency
from apps.api.auth.schema import LoginRequest, TokenResponse, VerifyResponse
from apps.api.auth.service import ADMIN_ID, AuthServiceDependency

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/login", summary="Exchange the admin credentials for a bearer token")
async def login_endpoint(
    credentials: LoginRequest, auth_service: AuthServiceDependency
) -> TokenResponse:
    token = auth_service.login(credentials.username, credentials.password)
    return TokenResponse(token=token, admin_id=ADMIN_ID)


@router.post("/verify", summary="Check that the bearer token is still valid")
async def verify_endpoint(admin: AdminDependency) -> VerifyResponse:
    return VerifyResponse(valid=True, admin_id=admin)
