# src/portfolio_accounting_engine/core/models/position.py
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..enums.transaction_type import AssetType


class AssetFundamentals(BaseModel):
    """
    Fundamentals published for an asset. Passed through to the report untouched.
    """
    # Common
    p_vp: Optional[Decimal] = None
    p_l: Optional[Decimal] = None
    dy_12m: Optional[Decimal] = None
    roe: Optional[Decimal] = None
    liquidity: Optional[str] = None
    market_cap: Optional[str] = None

    # Stocks
    net_margin: Optional[Decimal] = None
    gross_margin: Optional[Decimal] = None
    ebit_margin: Optional[Decimal] = None
    cagr_revenue: Optional[Decimal] = None
    cagr_profits: Optional[Decimal] = None
    payout: Optional[Decimal] = None
    lpa: Optional[Decimal] = None
    vpa: Optional[Decimal] = None
    ev_ebitda: Optional[Decimal] = None
    net_debt_ebitda: Optional[Decimal] = None
    net_debt_equity: Optional[Decimal] = None

    # Real-estate funds
    vacancy: Optional[Decimal] = None
    assets_value: Optional[str] = None
    manager_type: Optional[str] = None
    segment_secondary: Optional[str] = None
    mandate: Optional[str] = None
    properties_count: Optional[int] = None
    management_fee: Optional[str] = None
    last_dividend: Optional[Decimal] = None

    updated_at: Optional[str] = None
    description: Optional[str] = None
    sentiment: Optional[str] = None
    sentiment_reason: Optional[str] = None

    model_config = ConfigDict(frozen=True, extra='ignore')


class AssetMetadata(BaseModel):
    """Segment, category and fundamentals of an asset, used for report enrichment."""
    segment: Optional[str] = None
    asset_type: Optional[AssetType] = Field(None, alias="assetType")
    fundamentals: Optional[AssetFundamentals] = None

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='ignore')


class Quote(BaseModel):
    """Latest market quote of an asset."""
    symbol: str
    regular_market_price: Optional[Decimal] = Field(None, alias="regularMarketPrice")
    regular_market_change_percent: Optional[Decimal] = Field(None, alias="regularMarketChangePercent")
    logo_url: Optional[str] = Field(None, alias="logourl")
    short_name: Optional[str] = Field(None, alias="shortName")
    long_name: Optional[str] = Field(None, alias="longName")

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='ignore')


class PositionState(BaseModel):
    """
    Running state of one ticker while the transaction timeline is replayed.
    """
    ticker: str
    asset_type: AssetType = AssetType.FUND
    quantity: Decimal = Decimal(0)
    total_cost: Decimal = Decimal(0)
    average_price: Decimal = Decimal(0)


class AssetPosition(BaseModel):
    """
    Current holding of one ticker, enriched with quote and metadata for reporting.
    """
    ticker: str
    asset_type: AssetType = Field(..., alias="assetType")
    quantity: Decimal
    average_price: Decimal = Field(..., alias="averagePrice")
    total_cost: Decimal = Field(..., alias="totalCost")
    total_dividends_paid: Decimal = Field(Decimal(0), alias="totalDividendsPaid")
    current_price: Decimal = Field(..., alias="currentPrice")
    daily_change: Decimal = Field(Decimal(0), alias="dailyChange")
    logo_url: Optional[str] = Field(None, alias="logoUrl")
    segment: str
    fundamentals: Optional[AssetFundamentals] = None

    model_config = ConfigDict(populate_by_name=True)

    @property
    def market_value(self) -> Decimal:
        return self.quantity * self.current_price
