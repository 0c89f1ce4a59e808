# src/portfolio_accounting_engine/core/models/dividend.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums.transaction_type import AssetType


class DividendEvent(BaseModel):
    """
    A declared income event (dividend, JCP, fund yield) for an asset.
    Supplied by the market-data collaborators and never modified by the engine.
    """
    event_id: Optional[str] = Field(None, alias="id", description="Identifier of the event, when the source provides one")
    ticker: str = Field(..., description="Asset symbol of the paying asset")
    income_type: str = Field(..., alias="type", description="Kind of income, e.g. DIVIDENDO, JCP, RENDIMENTO")
    date_com: str = Field(..., alias="dateCom", description="Record date (YYYY-MM-DD); holdings on this day are entitled")
    payment_date: str = Field(..., alias="paymentDate", description="Date the cash is disbursed (YYYY-MM-DD)")
    rate: Decimal = Field(..., description="Amount paid per share")
    asset_type: Optional[AssetType] = Field(None, alias="assetType", description="Asset category, when known")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True, frozen=True, extra='ignore')


class DividendReceipt(DividendEvent):
    """
    A dividend event resolved against the portfolio's holdings on the record date.
    """
    quantity_owned: Decimal = Field(..., alias="quantityOwned", description="Shares held on the record date")
    total_received: Decimal = Field(..., alias="totalReceived", description="quantity_owned multiplied by rate")
