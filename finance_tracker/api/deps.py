# finance_tracker/api/deps.py
import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from finance_tracker.core.config import settings
from finance_tracker.core.errors import AuthenticationError, BadRequestError
from finance_tracker.core.security import TokenError, TokenIdentity, TokenService

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
MAX_PAGE_SIZE = 100

# Only used so the OpenAPI docs show the bearer scheme; the header is parsed below
optional_security = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    """The TokenService built at startup, or one built from settings if startup never ran."""
    token_service = getattr(request.app.state, "token_service", None)
    if token_service is None:
        token_service = TokenService.from_settings(settings)
        request.app.state.token_service = token_service
    return token_service


class AuthGate:
    """
    Resolve the caller's identity from ``Authorization: Bearer <token>``.

    The check is pure: the token is verified but the user table is not consulted.
    With ``detailed_errors`` the three failure kinds keep their own codes
    (MISSING_TOKEN, INVALID_TOKEN, INVALID_TOKEN_PAYLOAD); otherwise every failure
    is reported as AUTHENTICATION_REQUIRED.
    """

    def __init__(self, detailed_errors: bool = False):
        self.detailed_errors = detailed_errors

    def _fail(self, code: str, message: str) -> AuthenticationError:
        if self.detailed_errors:
            return AuthenticationError(code, message)
        return AuthenticationError("AUTHENTICATION_REQUIRED", "Authentication required")

    async def __call__(
        self,
        request: Request,
        token_service: TokenService = Depends(get_token_service),
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(optional_security),
    ) -> TokenIdentity:
        auth_header = request.headers.get("Authorization", "")

        if not auth_header.startswith(BEARER_PREFIX):
            logger.debug(f"Missing bearer token on {request.url.path}")
            raise self._fail("MISSING_TOKEN", "Authorization token required")

        token = auth_header[len(BEARER_PREFIX):].strip()
        if not token:
            raise self._fail("MISSING_TOKEN", "Authorization token required")

        verified = token_service.verify(token)
        if verified is TokenError.INVALID:
            raise self._fail("INVALID_TOKEN", "Invalid or expired token")
        if verified is TokenError.INVALID_PAYLOAD:
            raise self._fail("INVALID_TOKEN_PAYLOAD", "Invalid token payload")

        return verified


# Resource endpoints: one generic code for every auth failure
get_current_identity = AuthGate()

# Profile endpoint: clients distinguish missing / invalid / bad-payload tokens
get_current_identity_detailed = AuthGate(detailed_errors=True)


def parse_resource_id(raw_id: str) -> int:
    """Path ids must be positive integers; anything else is INVALID_ID."""
    raw_id = raw_id.strip()
    if not (raw_id.isascii() and raw_id.isdigit()) or int(raw_id) <= 0:
        raise BadRequestError("INVALID_ID", "Valid ID is required")
    return int(raw_id)


def clamp_limit(limit: int, maximum: int = MAX_PAGE_SIZE) -> int:
    return max(0, min(limit, maximum))
