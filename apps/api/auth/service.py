import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Annotated, Optional

from jose import jwt
from jose.exceptions import JWTError

from apps.api.auth.schema import TokenPayload
from apps.settings import AppConfig, SettingsDep
from core.architecture.service import AbstractService
from core.exceptions import InvalidRequestException, UnauthorizedException

logger = logging.getLogger(__name__)

ADMIN_SUBJECT = "admin"
ADMIN_ID = "admin-user"


class AuthService(AbstractService):
    """Issues and verifies the bearer token guarding admin routes."""

    DEPENDENCIES = {"settings": SettingsDep}

    def __init__(self, settings: AppConfig, **kwargs):
        super().__init__(settings=settings, **kwargs)
        self.settings = settings

    def _credentials_match(self, username: str, password: str) -> bool:
        username_ok = secrets.compare_digest(
            username.encode("utf-8"), self.settings.ADMIN_USERNAME.encode("utf-8")
        )
        password_ok = secrets.compare_digest(
            password.encode("utf-8"), self.settings.ADMIN_PASSWORD.encode("utf-8")
        )
        return username_ok and password_ok

    def create_token(self, subject: str = ADMIN_SUBJECT, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(days=self.settings.TOKEN_EXPIRE_DAYS)
        )
        payload = {"sub": subject, "exp": int(expire.timestamp())}
        return jwt.encode(
            payload, self.settings.SECRET_KEY, algorithm=self.settings.TOKEN_ALGORITHM
        )

    def login(self, username: Optional[str], password: Optional[str]) -> str:
        """
        Check the admin credential pair and issue a token.

        Raises:
            InvalidRequestException: If either field is missing.
            UnauthorizedException: If the pair does not match.
        """
        if not username or not password:
            raise InvalidRequestException(
                "Username and password are required", error_code="MISSING_CREDENTIALS"
            )
        if not self._credentials_match(username, password):
            logger.warning(f"Failed admin login for username {username!r}")
            raise UnauthorizedException("Invalid credentials", error_code="INVALID_CREDENTIALS")

        logger.info("Admin logged in")
        return self.create_token()

    def verify_token(self, token: str) -> TokenPayload:
        """
        Decode a bearer token. Expiry is enforced by the decoder.

        Raises:
            UnauthorizedException: If the token is malformed, forged, expired
                or not issued to the admin.
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.SECRET_KEY,
                algorithms=[self.settings.TOKEN_ALGORITHM],
            )
        except JWTError:
            raise UnauthorizedException("Invalid or expired token", error_code="INVALID_TOKEN")

        token_data = TokenPayload(**payload)
        if token_data.sub != ADMIN_SUBJECT:
            raise UnauthorizedException("Invalid or expired token", error_code="INVALID_TOKEN")
        return token_data


AuthServiceDependency = Annotated[AuthService, AuthService.get_dependency()]
