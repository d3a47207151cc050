"""Bearer token identity provider."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from .config import AuthConfig
from .domain.exceptions import MatchdayError


class AuthenticationError(MatchdayError):
    status_code = 401

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message)


class TokenIdentityProvider:
    """Issue and resolve signed access tokens whose subject is the player id."""

    def __init__(self, config: AuthConfig) -> None:
        self._config = config

    def issue_token(self, player_id: str, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (
            expires_delta or timedelta(minutes=self._config.access_token_minutes)
        )
        payload: Dict[str, Any] = {"sub": player_id, "exp": expire, "type": "access"}
        return jwt.encode(payload, self._config.secret_key, algorithm=self._config.algorithm)

    def resolve(self, token: str) -> str:
        """Return the player id carried by ``token``."""
        try:
            payload = jwt.decode(token, self._config.secret_key, algorithms=[self._config.algorithm])
        except JWTError as exc:
            raise AuthenticationError("Invalid token") from exc

        if payload.get("type") != "access":
            raise AuthenticationError("Invalid token type")
        player_id = payload.get("sub")
        if not isinstance(player_id, str) or not player_id:
            raise AuthenticationError("Invalid token payload")
        return player_id
