# src/portfolio_accounting_engine/core/models/response.py
from decimal import Decimal
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field

from .dividend import DividendReceipt
from .position import AssetPosition, PositionState
from .transaction import Transaction


class ErroredTransaction(BaseModel):
    """
    Represents a transaction that was excluded from processing, along with the reason.
    """
    transaction_id: str = Field(..., alias="transactionId", description="The ID of the excluded transaction.")
    error_reason: str = Field(..., alias="errorReason", description="Why the transaction was excluded.")

    model_config = ConfigDict(populate_by_name=True)


class PortfolioTotals(BaseModel):
    """
    Portfolio-level figures, rounded to cents.
    """
    invested: Decimal = Field(..., description="Sum of the cost basis of all open positions.")
    balance: Decimal = Field(..., description="Sum of quantity times current price of all open positions.")
    total_dividends_received: Decimal = Field(..., alias="totalDividendsReceived", description="Income already paid.")
    sales_gain: Decimal = Field(..., alias="salesGain", description="Realized gain or loss of every SELL in the history.")
    appreciation: Decimal = Field(..., description="balance minus invested.")

    model_config = ConfigDict(populate_by_name=True)


class PortfolioReport(BaseModel):
    """
    Represents the output of a portfolio assembly.
    """
    portfolio: List[AssetPosition] = Field(default_factory=list)
    dividend_receipts: List[DividendReceipt] = Field(default_factory=list, alias="dividendReceipts")
    totals: PortfolioTotals
    errored_transactions: List[ErroredTransaction] = Field(default_factory=list, alias="erroredTransactions")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "portfolio": [],
                "dividendReceipts": [],
                "totals": {
                    "invested": "0.00",
                    "balance": "0.00",
                    "totalDividendsReceived": "0.00",
                    "salesGain": "0.00",
                    "appreciation": "0.00"
                },
                "erroredTransactions": []
            }
        }
    )


class PositionEngineResult(BaseModel):
    """
    Output of replaying a transaction timeline through the position engine.
    """
    positions: Dict[str, PositionState] = Field(default_factory=dict, description="Open positions keyed by normalized ticker.")
    sales_gain: Decimal = Field(Decimal(0), description="Realized gain or loss accumulated over every accepted SELL.")
    processed: List[Transaction] = Field(default_factory=list, description="Accepted transactions in processing order, as applied.")
    errors: List[ErroredTransaction] = Field(default_factory=list, description="Transactions left out, with reasons.")


class ReceiptsResult(BaseModel):
    """
    Output of resolving dividend events against the holdings on their record dates.
    """
    receipts: List[DividendReceipt] = Field(default_factory=list)
    paid_by_ticker: Dict[str, Decimal] = Field(default_factory=dict, description="Income already paid, per normalized ticker.")
    total_paid: Decimal = Field(Decimal(0), description="Income already paid across all tickers.")
