"""Request and response bodies for the HTTP layer."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class PurchaseRequest(BaseModel):
    itemType: str = Field(..., description="skill, style or item")
    itemId: str = Field(..., min_length=1)


class PurchaseResponse(BaseModel):
    message: str
    currency: str
    remainingBalance: int
    transactionId: str


class StatUpdateRequest(BaseModel):
    value: int


class StatUpdateResponse(BaseModel):
    stat: str
    value: int
    stats: Dict[str, int]


class RegisterRequest(BaseModel):
    username: Optional[str] = Field(None, max_length=255)


class TransactionResponse(BaseModel):
    id: str
    playerId: str
    type: str
    currency: str
    amount: int
    description: str
    createdAt: str


class TransactionListResponse(BaseModel):
    transactions: List[TransactionResponse]
