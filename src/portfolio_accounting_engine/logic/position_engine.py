# src/portfolio_accounting_engine/logic/position_engine.py
import logging
from decimal import Decimal
from typing import NamedTuple, Optional, Protocol

from .. import config
from ..constants import ZERO
from ..core.enums.oversell_policy import OversellPolicy
from ..core.enums.transaction_type import TransactionType
from ..core.models.position import PositionState
from ..core.models.response import PositionEngineResult
from ..core.models.transaction import Transaction
from ..exceptions import MissingConfigurationError
from .arithmetic import add, div, fixed, mul, sub
from .dates import parse_local_date
from .error_reporter import ErrorReporter
from .sorter import TransactionSorter
from .tickers import normalize_ticker

logger = logging.getLogger(__name__)


class AppliedTrade(NamedTuple):
    """What a strategy actually applied: the realized gain and the effective transaction."""
    realized_gain: Decimal
    transaction: Optional[Transaction]


class PositionStrategy(Protocol):
    def apply(self, state: PositionState, transaction: Transaction, error_reporter: ErrorReporter) -> Optional[AppliedTrade]: ...


class BuyStrategy:
    """A BUY adds to the cost basis and recomputes the weighted average price."""
    def apply(self, state: PositionState, transaction: Transaction, error_reporter: ErrorReporter) -> Optional[AppliedTrade]:
        quantity = fixed(transaction.quantity)
        state.total_cost = add(state.total_cost, mul(quantity, transaction.price))
        state.quantity = add(state.quantity, quantity)
        if state.quantity > ZERO:
            state.average_price = div(state.total_cost, state.quantity)
        return AppliedTrade(realized_gain=ZERO, transaction=transaction)


class SellStrategy:
    """
    A SELL realizes (price - average price) * quantity and shrinks the cost
    basis proportionally. The average price itself never changes on a sale.
    """
    def __init__(self, oversell_policy: OversellPolicy, epsilon: Decimal):
        self._oversell_policy = oversell_policy
        self._epsilon = epsilon

    def apply(self, state: PositionState, transaction: Transaction, error_reporter: ErrorReporter) -> Optional[AppliedTrade]:
        sell_quantity = fixed(transaction.quantity)
        effective = transaction

        if sell_quantity > state.quantity + self._epsilon:
            if self._oversell_policy == OversellPolicy.REJECT:
                error_reporter.add_error(
                    transaction.transaction_id,
                    f"Sell quantity ({sell_quantity}) exceeds available holdings ({state.quantity}) of {state.ticker}.",
                    category="oversell"
                )
                return None

            logger.warning(
                f"Clamping SELL {transaction.transaction_id} of {state.ticker} "
                f"from {sell_quantity} to the {state.quantity} held."
            )
            sell_quantity = state.quantity
            if sell_quantity <= ZERO:
                return AppliedTrade(realized_gain=ZERO, transaction=None)
            effective = transaction.model_copy(update={"quantity": sell_quantity})
        elif sell_quantity > state.quantity:
            # Within tolerance of the holding: a full sale of a rounded position.
            sell_quantity = state.quantity
            effective = transaction.model_copy(update={"quantity": sell_quantity})

        realized_gain = mul(sub(transaction.price, state.average_price), sell_quantity)
        state.quantity = sub(state.quantity, sell_quantity)
        state.total_cost = mul(state.quantity, state.average_price)

        if state.quantity <= self._epsilon:
            state.quantity = ZERO
            state.average_price = ZERO
            state.total_cost = ZERO

        return AppliedTrade(realized_gain=realized_gain, transaction=effective)


class PositionEngine:
    """
    Folds a transaction history into per-ticker quantity, cost basis, weighted
    average price and the realized gain of every sale.

    The full history is replayed from scratch on every call; no state is kept
    between calls.
    """
    def __init__(
        self,
        oversell_policy: OversellPolicy | str | None = None,
        epsilon: Decimal | None = None,
        sorter: TransactionSorter | None = None
    ):
        try:
            self.oversell_policy = OversellPolicy(oversell_policy or config.OVERSELL_POLICY)
        except ValueError:
            raise MissingConfigurationError(f"Invalid oversell policy '{oversell_policy or config.OVERSELL_POLICY}'. Use REJECT or CLAMP.")
        self.epsilon = config.POSITION_EPSILON if epsilon is None else epsilon
        self._sorter = sorter or TransactionSorter()
        self._strategies: dict[TransactionType, PositionStrategy] = {
            TransactionType.BUY: BuyStrategy(),
            TransactionType.SELL: SellStrategy(self.oversell_policy, self.epsilon),
        }

    def compute_positions(self, transactions: list[Transaction]) -> PositionEngineResult:
        error_reporter = ErrorReporter()

        valid_transactions: list[Transaction] = []
        for txn in transactions:
            if parse_local_date(txn.transaction_date) is None:
                error_reporter.add_error(txn.transaction_id, f"Invalid trade date '{txn.transaction_date}'.", category="invalid_date")
                continue
            if not normalize_ticker(txn.ticker):
                error_reporter.add_error(txn.transaction_id, "Missing ticker.", category="missing_ticker")
                continue
            valid_transactions.append(txn)

        timeline = self._sorter.sort_transactions(valid_transactions)

        states: dict[str, PositionState] = {}
        processed: list[Transaction] = []
        sales_gain = ZERO

        for txn in timeline:
            ticker = normalize_ticker(txn.ticker)
            state = states.get(ticker)
            if state is None:
                state = PositionState(ticker=ticker, asset_type=txn.asset_type)
                states[ticker] = state

            strategy = self._strategies[TransactionType(txn.transaction_type)]
            try:
                applied = strategy.apply(state, txn, error_reporter)
            except Exception as e:
                logger.error(f"Unexpected error for transaction {txn.transaction_id}: {e}", exc_info=True)
                error_reporter.add_error(txn.transaction_id, f"Unexpected error: {str(e)}", category="unexpected")
                continue

            if applied is None:
                continue
            sales_gain = add(sales_gain, applied.realized_gain)
            if applied.transaction is not None:
                processed.append(applied.transaction)

        open_positions = {ticker: state for ticker, state in states.items() if state.quantity > ZERO}
        logger.debug(
            f"Replayed {len(timeline)} transactions into {len(open_positions)} open positions "
            f"(excluded by category: {error_reporter.counts_by_category()}, policy={self.oversell_policy.value})."
        )
        return PositionEngineResult(
            positions=open_positions,
            sales_gain=sales_gain,
            processed=processed,
            errors=error_reporter.get_errors()
        )


def compute_positions(transactions: list[Transaction], oversell_policy: OversellPolicy | str | None = None) -> PositionEngineResult:
    return PositionEngine(oversell_policy=oversell_policy).compute_positions(transactions)
