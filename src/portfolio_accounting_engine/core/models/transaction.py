# src/portfolio_accounting_engine/core/models/transaction.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, condecimal

from ..enums.transaction_type import AssetType, TransactionType


class Transaction(BaseModel):
    """
    Represents a single BUY or SELL trade.

    The trade date is kept as the raw `YYYY-MM-DD` string; the engine parses it
    and excludes the record when it is malformed instead of failing validation.
    """
    transaction_id: str = Field(..., alias="id", description="Opaque unique identifier of the trade")
    ticker: str = Field(..., description="Asset symbol as entered; the engine keys on its normalized form")
    transaction_type: TransactionType = Field(..., alias="type", description="BUY or SELL")
    quantity: condecimal(gt=0) = Field(..., description="Number of shares or units traded")
    price: condecimal(ge=0) = Field(..., description="Unit price at execution")
    transaction_date: str = Field(..., alias="date", description="Trade date (YYYY-MM-DD)")
    asset_type: AssetType = Field(default=AssetType.FUND, alias="assetType", description="Informational asset category")
    sequence: Optional[int] = Field(None, description="Insertion sequence number, used to order trades on the same day")

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
        extra='ignore'
    )

    @property
    def gross_amount(self) -> Decimal:
        return self.quantity * self.price
