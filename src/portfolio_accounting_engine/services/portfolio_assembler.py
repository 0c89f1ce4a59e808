# src/portfolio_accounting_engine/services/portfolio_assembler.py
import logging
from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional, Union

from .. import config
from ..constants import SEGMENT_ELLIPSIS, SEGMENT_PREFIX, ZERO
from ..core.models.dividend import DividendEvent
from ..core.models.position import AssetMetadata, AssetPosition, PositionState, Quote
from ..core.models.response import PortfolioReport, PortfolioTotals
from ..core.models.transaction import Transaction
from ..logic.arithmetic import add, mul, round2, sub, to_decimal
from ..logic.income_calculator import IncomeCalculator
from ..logic.position_engine import PositionEngine
from ..logic.tickers import normalize_ticker
from ..monitoring import ASSEMBLY_DURATION_SECONDS, TRANSACTIONS_REPLAYED

logger = logging.getLogger(__name__)

QuoteInput = Union[Quote, Mapping[str, Any], Decimal, int, float, str]
MetadataInput = Union[AssetMetadata, Mapping[str, Any]]


def clean_segment(segment: Optional[str]) -> str:
    """
    Normalizes the segment label published by the metadata source:
    drops the "Seg: " prefix, truncates long names and falls back to the default.
    """
    cleaned = (segment or "").replace(SEGMENT_PREFIX, "").strip()
    if not cleaned:
        return config.DEFAULT_SEGMENT
    if len(cleaned) > config.SEGMENT_MAX_LENGTH:
        cleaned = cleaned[:config.SEGMENT_MAX_LENGTH] + SEGMENT_ELLIPSIS
    return cleaned


def _coerce_quote(ticker: str, raw: QuoteInput) -> Quote:
    if isinstance(raw, Quote):
        return raw
    if isinstance(raw, Mapping):
        return Quote.model_validate({"symbol": ticker, **raw})
    return Quote(symbol=ticker, regular_market_price=to_decimal(raw))


def _coerce_metadata(raw: MetadataInput) -> AssetMetadata:
    if isinstance(raw, AssetMetadata):
        return raw
    return AssetMetadata.model_validate(raw)


class PortfolioAssembler:
    """
    Orchestrates a full portfolio recalculation: positions and realized gain,
    income receipts, quote and metadata enrichment, and portfolio totals.

    Every call recomputes everything from the inputs it is given; it performs
    no I/O and keeps no state between calls.
    """
    def __init__(
        self,
        position_engine: PositionEngine | None = None,
        income_calculator: IncomeCalculator | None = None
    ):
        self._position_engine = position_engine or PositionEngine()
        self._income_calculator = income_calculator or IncomeCalculator()

    def assemble(
        self,
        transactions: list[Transaction],
        events: list[DividendEvent],
        quotes: Mapping[str, QuoteInput] | None = None,
        metadata: Mapping[str, MetadataInput] | None = None,
        today: date | str | None = None
    ) -> PortfolioReport:
        with ASSEMBLY_DURATION_SECONDS.time():
            TRANSACTIONS_REPLAYED.observe(len(transactions))

            engine_result = self._position_engine.compute_positions(transactions)
            # Record-date holdings only see the transactions the position engine accepted.
            receipts_result = self._income_calculator.compute_receipts(events, engine_result.processed, today)

            quotes_by_ticker = {normalize_ticker(k): _coerce_quote(normalize_ticker(k), v) for k, v in (quotes or {}).items()}
            metadata_by_ticker = {normalize_ticker(k): _coerce_metadata(v) for k, v in (metadata or {}).items()}

            portfolio = [
                self._build_position(
                    state,
                    receipts_result.paid_by_ticker.get(ticker, ZERO),
                    quotes_by_ticker.get(ticker),
                    metadata_by_ticker.get(ticker)
                )
                for ticker, state in engine_result.positions.items()
            ]

            invested = ZERO
            balance = ZERO
            for position in portfolio:
                invested = add(invested, position.total_cost)
                balance = add(balance, mul(position.quantity, position.current_price))

            totals = PortfolioTotals(
                invested=round2(invested),
                balance=round2(balance),
                total_dividends_received=round2(receipts_result.total_paid),
                sales_gain=round2(engine_result.sales_gain),
                appreciation=round2(sub(round2(balance), round2(invested)))
            )

        logger.info(
            f"Assembled portfolio: {len(portfolio)} positions, {len(receipts_result.receipts)} receipts, "
            f"{len(engine_result.errors)} excluded transactions, invested={totals.invested}, balance={totals.balance}"
        )
        return PortfolioReport(
            portfolio=portfolio,
            dividend_receipts=receipts_result.receipts,
            totals=totals,
            errored_transactions=engine_result.errors
        )

    @staticmethod
    def _build_position(
        state: PositionState,
        dividends_paid: Decimal,
        quote: Optional[Quote],
        metadata: Optional[AssetMetadata]
    ) -> AssetPosition:
        market_price = quote.regular_market_price if quote else None
        current_price = market_price if market_price is not None and market_price > ZERO else state.average_price

        return AssetPosition(
            ticker=state.ticker,
            asset_type=(metadata.asset_type if metadata and metadata.asset_type else state.asset_type),
            quantity=state.quantity,
            average_price=state.average_price,
            total_cost=state.total_cost,
            total_dividends_paid=dividends_paid,
            current_price=current_price,
            daily_change=(quote.regular_market_change_percent if quote and quote.regular_market_change_percent is not None else ZERO),
            logo_url=quote.logo_url if quote else None,
            segment=clean_segment(metadata.segment if metadata else None),
            fundamentals=metadata.fundamentals if metadata else None
        )


def assemble(
    transactions: list[Transaction],
    events: list[DividendEvent],
    quotes: Mapping[str, QuoteInput] | None = None,
    metadata: Mapping[str, MetadataInput] | None = None,
    today: date | str | None = None
) -> PortfolioReport:
    return PortfolioAssembler().assemble(transactions, events, quotes, metadata, today)
