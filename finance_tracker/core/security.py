# finance_tracker/core/security.py
import enum
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional, Union

import jwt
from passlib.context import CryptContext

from .config import Settings
from .errors import ServerConfigurationError

logger = logging.getLogger(__name__)

# Cost factor is fixed; changing it only affects newly created hashes
BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)

def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def dummy_verify() -> None:
    """Burn the same bcrypt work as a real check, for lookups that found no user."""
    pwd_context.dummy_verify()

def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


@dataclass(frozen=True)
class TokenIdentity:
    user_id: int
    email: Optional[str] = None


class TokenError(str, enum.Enum):
    INVALID = "INVALID_TOKEN"
    INVALID_PAYLOAD = "INVALID_TOKEN_PAYLOAD"


class TokenService:
    """
    Issues and verifies the signed, time-limited bearer tokens.

    The signing key is handed in once at construction. A service without a key
    can still be built (so the app boots and reports the problem), but it will
    refuse to issue tokens and treats every presented token as invalid.
    """

    def __init__(
        self,
        secret_key: Optional[str],
        algorithm: str = "HS256",
        lifetime: timedelta = timedelta(days=7),
    ):
        self.secret_key = secret_key if secret_key and secret_key.strip() else None
        self.algorithm = algorithm
        self.lifetime = lifetime

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.SECRET_KEY,
            algorithm=settings.ALGORITHM,
            lifetime=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        )

    @property
    def is_configured(self) -> bool:
        return self.secret_key is not None

    def issue(self, user_id: int, email: str) -> str:
        if not self.is_configured:
            raise ServerConfigurationError("Token signing key is not configured")

        now = datetime.now(timezone.utc)
        payload = {
            "sub": str(user_id),
            "userId": user_id,
            "email": email,
            "iat": now,
            "exp": now + self.lifetime,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Union[TokenIdentity, TokenError]:
        """Decode ``token``; never raises, returns a ``TokenError`` on failure."""
        if not self.is_configured:
            logger.error("Token verification attempted without a signing key")
            return TokenError.INVALID

        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            return TokenError.INVALID
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected invalid token: {str(e)}")
            return TokenError.INVALID

        user_id = payload.get("userId")
        # bool is an int subclass; a token claiming userId=true is not an identity
        if isinstance(user_id, bool) or not isinstance(user_id, int) or user_id <= 0:
            return TokenError.INVALID_PAYLOAD

        email = payload.get("email")
        return TokenIdentity(user_id=user_id, email=email if isinstance(email, str) else None)
