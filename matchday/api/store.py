"""
Store endpoints

- GET /store/items - catalog listing grouped by kind
- POST /store/purchase - settle a purchase for the authenticated player
"""

from fastapi import APIRouter, Depends

from ..app import StoreApp
from ..domain.catalog import ItemKind
from ..loaders.json_loader import SECTIONS
from .dependencies import get_current_player_id, get_store
from .schemas import PurchaseRequest, PurchaseResponse

router = APIRouter(prefix="/store", tags=["Store"])


@router.get("/items")
async def list_items(
    player_id: str = Depends(get_current_player_id),
    store: StoreApp = Depends(get_store),
):
    catalog = store.catalog.catalog
    return {
        SECTIONS[kind]: [entry.to_dict() for entry in catalog.iter_kind(kind)]
        for kind in ItemKind
    }


@router.post("/purchase", response_model=PurchaseResponse)
async def purchase(
    request: PurchaseRequest,
    player_id: str = Depends(get_current_player_id),
    store: StoreApp = Depends(get_store),
):
    result = await store.settlement_service.settle_purchase(
        player_id, request.itemType, request.itemId
    )
    return PurchaseResponse(
        message=result.message,
        currency=result.currency.value,
        remainingBalance=result.remaining_balance,
        transactionId=result.transaction_id,
    )
