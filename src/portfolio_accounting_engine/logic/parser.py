# src/portfolio_accounting_engine/logic/parser.py
import logging
from typing import Any

from pydantic import TypeAdapter, ValidationError

from ..core.enums.transaction_type import AssetType
from ..core.models.dividend import DividendEvent
from ..core.models.transaction import Transaction
from .error_reporter import ErrorReporter

logger = logging.getLogger(__name__)


class TransactionParser:
    """
    Parses raw transaction dictionaries into validated Transaction objects.
    Rows that fail validation are reported and left out of the result.
    """
    def __init__(self, error_reporter: ErrorReporter):
        self._single_transaction_adapter = TypeAdapter(Transaction)
        self._event_adapter = TypeAdapter(DividendEvent)
        self._error_reporter = error_reporter

    def parse_transactions(self, raw_transactions_data: list[dict[str, Any]]) -> list[Transaction]:
        parsed_transactions: list[Transaction] = []
        for raw_txn_data in raw_transactions_data:
            transaction_id = str(raw_txn_data.get("id") or raw_txn_data.get("transaction_id") or "UNKNOWN_ID_BEFORE_PARSE")
            try:
                parsed_transactions.append(self._single_transaction_adapter.validate_python(raw_txn_data))
            except ValidationError as e:
                error_messages = "; ".join([f"{err.get('loc', ['unknown'])[0]}: {err['msg']}" for err in e.errors()])
                self._error_reporter.add_error(transaction_id, f"Validation error: {error_messages}")
        return parsed_transactions

    def from_store_record(self, record: dict[str, Any]) -> Transaction:
        """
        Maps a row of the cloud transactions table (snake_case `asset_type`)
        into a Transaction. Rows without an asset type default to FUND.
        """
        return Transaction(
            transaction_id=str(record["id"]),
            ticker=record["ticker"],
            transaction_type=record["type"],
            quantity=record["quantity"],
            price=record["price"],
            transaction_date=record["date"],
            asset_type=record.get("asset_type") or AssetType.FUND,
            sequence=record.get("sequence"),
        )

    def parse_store_records(self, records: list[dict[str, Any]]) -> list[Transaction]:
        transactions: list[Transaction] = []
        for record in records:
            try:
                transactions.append(self.from_store_record(record))
            except (KeyError, ValidationError) as e:
                transaction_id = str(record.get("id", "UNKNOWN_ID_BEFORE_PARSE"))
                logger.warning(f"Skipping store record {transaction_id}: {e}")
                self._error_reporter.add_error(transaction_id, f"Invalid store record: {e}")
        return transactions

    def parse_dividend_events(self, raw_events: list[dict[str, Any]]) -> list[DividendEvent]:
        events: list[DividendEvent] = []
        for raw_event in raw_events:
            try:
                events.append(self._event_adapter.validate_python(raw_event))
            except ValidationError as e:
                logger.warning(f"Skipping dividend event for {raw_event.get('ticker', 'UNKNOWN')}: {e.error_count()} validation error(s)")
        return events
