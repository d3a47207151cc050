from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..app import StoreApp
from ..auth import AuthenticationError

security = HTTPBearer(auto_error=False)


def get_store(request: Request) -> StoreApp:
    return request.app.state.store


async def get_current_player_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: StoreApp = Depends(get_store),
) -> str:
    """Resolve the bearer credential to a player id."""
    if credentials is None:
        raise AuthenticationError("No token provided")
    return store.identity.resolve(credentials.credentials)
