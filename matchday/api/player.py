"""
Player endpoints

- POST /player/register - create the authenticated player with starting balances
- GET /player/profile - balances, owned skills/styles/items and stats
- PATCH /player/stats/{stat_name} - set one attribute (range guarded)
- GET /player/transactions - newest transactions first
"""

from fastapi import APIRouter, Depends, Query, status

from ..app import StoreApp
from .dependencies import get_current_player_id, get_store
from .schemas import (
    RegisterRequest,
    StatUpdateRequest,
    StatUpdateResponse,
    TransactionListResponse,
    TransactionResponse,
)

router = APIRouter(prefix="/player", tags=["Player"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    player_id: str = Depends(get_current_player_id),
    store: StoreApp = Depends(get_store),
):
    profile = await store.player_service.register(player_id, request.username)
    return profile.to_dict()


@router.get("/profile")
async def get_profile(
    player_id: str = Depends(get_current_player_id),
    store: StoreApp = Depends(get_store),
):
    profile = await store.player_service.fetch(player_id)
    return profile.to_dict()


@router.patch("/stats/{stat_name}", response_model=StatUpdateResponse)
async def update_stat(
    stat_name: str,
    request: StatUpdateRequest,
    player_id: str = Depends(get_current_player_id),
    store: StoreApp = Depends(get_store),
):
    update = await store.stat_service.update_stat(player_id, stat_name, request.value)
    return StatUpdateResponse(
        stat=update.stat.value,
        value=update.value,
        stats={stat.value: value for stat, value in update.stats.items()},
    )


@router.get("/transactions", response_model=TransactionListResponse)
async def list_transactions(
    limit: int = Query(20, ge=1, le=100),
    player_id: str = Depends(get_current_player_id),
    store: StoreApp = Depends(get_store),
):
    records = await store.player_service.transactions(player_id, limit)
    return TransactionListResponse(
        transactions=[TransactionResponse(**record.to_dict()) for record in records]
    )
