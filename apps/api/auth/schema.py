from pydantic import Field

from core.response.models import CustomBaseModel


class LoginRequest(CustomBaseModel):
    username: str | None = Field(None)
    password: str | None = Field(None)


class TokenResponse(CustomBaseModel):
    success: bool = Field(True)
    token: str = Field(...)
    message: str = Field("Login successful")
    admin_id: str = Field(...)


class TokenPayload(CustomBaseModel):
    sub: str | None = Field(None)
    exp: int | None = Field(None)


class VerifyResponse(CustomBaseModel):
    valid: bool = Field(True)
    admin_id: str = Field(...)
