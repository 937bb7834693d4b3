"""
Token Codec

Signs and verifies the access/refresh JWT pair bound to one session row.
"""

import logging
from datetime import UTC, datetime, timedelta
from typing import Optional
from uuid import UUID, uuid4

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import BaseModel, ConfigDict, ValidationError

from src.app.errors import INVALID_TOKEN, TOKEN_EXPIRED, ConfigurationError
from src.domain.entities import TokenType
from src.libs.result import Result, Return

logger = logging.getLogger(__name__)

ACCESS_TOKEN_TTL = timedelta(minutes=15)
REFRESH_TOKEN_TTL = timedelta(days=7)


class IssuedTokenPair(BaseModel):
    """Plaintext tokens from one issuance plus the values stored with them"""

    model_config = ConfigDict(frozen=True)

    access_token: str
    refresh_token: str
    session_nonce: str
    access_token_expiration: datetime
    refresh_token_expiration: datetime


class TokenClaims(BaseModel):
    """Verified claims of a token"""

    model_config = ConfigDict(frozen=True)

    user_id: UUID
    session_nonce: str
    device_id: str
    token_type: TokenType


class TokenCodec:
    """
    Issues and verifies HS256 JWTs.

    Business Rules:
    - One fresh session nonce per issuance, shared by both tokens (jti claim)
    - Access token lives 15 minutes, refresh token 7 days by default
    - A valid signature alone does not authorize; the nonce must also match a
      live session row
    """

    def __init__(
        self,
        secret: Optional[str],
        algorithm: str = "HS256",
        access_token_ttl: timedelta = ACCESS_TOKEN_TTL,
        refresh_token_ttl: timedelta = REFRESH_TOKEN_TTL,
    ):
        if not secret:
            raise ConfigurationError("JWT_SECRET is not set")
        if access_token_ttl <= timedelta(0):
            raise ConfigurationError("Access token lifetime must be positive")
        if refresh_token_ttl <= access_token_ttl:
            raise ConfigurationError(
                "Refresh token lifetime must be longer than access token lifetime"
            )
        self._secret = secret
        self._algorithm = algorithm
        self.access_token_ttl = access_token_ttl
        self.refresh_token_ttl = refresh_token_ttl

    def issue(self, user_id: UUID, device_id: str) -> IssuedTokenPair:
        """
        Mint an access/refresh pair under a new session nonce.

        Args:
            user_id: Identity the tokens are issued to
            device_id: Device the session belongs to

        Returns:
            IssuedTokenPair with naive UTC expirations
        """
        now = datetime.now(UTC)
        session_nonce = str(uuid4())
        access_exp = now + self.access_token_ttl
        refresh_exp = now + self.refresh_token_ttl

        access_token = self._encode(
            user_id, session_nonce, device_id, TokenType.access, now, access_exp
        )
        refresh_token = self._encode(
            user_id, session_nonce, device_id, TokenType.refresh, now, refresh_exp
        )

        return IssuedTokenPair(
            access_token=access_token,
            refresh_token=refresh_token,
            session_nonce=session_nonce,
            access_token_expiration=access_exp.replace(tzinfo=None),
            refresh_token_expiration=refresh_exp.replace(tzinfo=None),
        )

    def verify(
        self, token: str, expected_type: Optional[TokenType] = None
    ) -> Result[TokenClaims]:
        """
        Verify signature and expiry of a token.

        Args:
            token: Encoded JWT
            expected_type: Reject tokens of any other type when given

        Returns:
            Result with TokenClaims, or Error(TOKEN_EXPIRED | INVALID_TOKEN)
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            return Return.err(TOKEN_EXPIRED)
        except JWTError as exc:
            logger.warning("Token rejected: %s", exc)
            return Return.err(INVALID_TOKEN)

        try:
            claims = TokenClaims(
                user_id=payload.get("sub"),
                session_nonce=payload.get("jti"),
                device_id=payload.get("device_id"),
                token_type=payload.get("type"),
            )
        except ValidationError:
            logger.warning("Token rejected: malformed claims")
            return Return.err(INVALID_TOKEN)

        if expected_type is not None and claims.token_type != expected_type:
            logger.warning(
                "Token rejected: expected %s token, got %s",
                expected_type.value,
                claims.token_type.value,
            )
            return Return.err(INVALID_TOKEN)

        return Return.ok(claims)

    def _encode(
        self,
        user_id: UUID,
        session_nonce: str,
        device_id: str,
        token_type: TokenType,
        issued_at: datetime,
        expires_at: datetime,
    ) -> str:
        payload = {
            "sub": str(user_id),
            "jti": session_nonce,
            "device_id": device_id,
            "type": token_type.value,
            "iat": issued_at,
            "exp": expires_at,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)
