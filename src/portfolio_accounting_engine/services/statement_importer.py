# src/portfolio_accounting_engine/services/statement_importer.py
from __future__ import annotations

import csv
import logging
import re
import uuid
from datetime import date, datetime
from decimal import ROUND_FLOOR, Decimal, InvalidOperation
from io import BytesIO, StringIO
from typing import Any, Literal, Optional

from openpyxl import load_workbook
from pydantic import BaseModel, Field

from ..constants import FUND_TICKER_ENDINGS, INCOME_MOVEMENT_KEYWORDS, ZERO
from ..core.enums.transaction_type import AssetType, TransactionType
from ..core.models.transaction import Transaction
from ..exceptions import UnsupportedStatementFormatError
from ..logic.dates import parse_local_date

logger = logging.getLogger(__name__)

# Header candidates of the B3 investor-area exports, in lookup order.
MOVEMENT_HEADERS = ("movimentação", "tipo de movimentação", "histórico")
DATE_HEADERS = ("data do negócio", "data", "data pregão", "dt. negociação")
QUANTITY_HEADERS = ("quantidade", "qtd", "qtde", "executada")
PRICE_HEADERS = ("preço", "preço unitário", "preco", "preço médio")
TICKER_HEADERS = ("código de negociação", "código", "ativo", "ticker", "produto", "papel")
TOTAL_HEADERS = ("valor", "valor da operação", "valor total", "crédito/débito")

_BR_DATE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})")
_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_TICKER_AT_START = re.compile(r"^([A-Z0-9]{4,6}[0-9]{1,2}B?)\s*[- ]")
_TICKER_ANYWHERE = re.compile(r"\b([A-Z]{4}[0-9]{1,2}B?)\b")
_NON_NUMERIC = re.compile(r"[^0-9,.]")


class SkippedRow(BaseModel):
    row_number: int = Field(..., description="1-based row number in the statement, counting the header row.")
    reason: str


class ImportResult(BaseModel):
    file_format: Literal["csv", "xlsx"]
    transactions: list[Transaction] = Field(default_factory=list)
    skipped_rows: list[SkippedRow] = Field(default_factory=list)
    total_rows: int = 0


def parse_br_number(value: Any) -> Decimal:
    """
    Parses numbers as written in Brazilian statements ("R$ 1.024,50",
    "(10,00)", "15,3-"). Unparseable values become zero.
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return Decimal(str(value))
    if not value:
        return ZERO

    text = str(value).strip().replace("R$", "").strip()
    is_negative = "(" in text or text.endswith("-") or text.startswith("-")
    text = _NON_NUMERIC.sub("", text)
    if not text:
        return ZERO

    if "." in text and "," in text:
        text = text.replace(".", "").replace(",", ".")
    elif "," in text:
        text = text.replace(",", ".")

    try:
        number = Decimal(text)
    except InvalidOperation:
        return ZERO
    return -abs(number) if is_negative else number


def parse_br_date(value: Any) -> str:
    """Converts DD/MM/YYYY, ISO strings and date cells into YYYY-MM-DD; '' when unusable."""
    if not value:
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()

    text = str(value).strip()
    match = _BR_DATE.match(text)
    if match:
        day, month, year = match.groups()
        candidate = f"{year}-{month.zfill(2)}-{day.zfill(2)}"
    elif _ISO_DATE.match(text):
        candidate = text[:10]
    else:
        return ""
    return candidate if parse_local_date(candidate) else ""


def infer_asset_type(ticker: str) -> AssetType:
    """Units, funds and BDRs (codes ending in 11, 11B, 33, 34) are grouped as FUND."""
    symbol = ticker.strip().upper()
    if symbol.endswith(FUND_TICKER_ENDINGS):
        return AssetType.FUND
    return AssetType.STOCK


def extract_ticker(raw: str) -> str:
    """
    Extracts the ticker from the long product descriptions B3 uses,
    e.g. "HGLG11 - CSHG LOGISTICA" or "FII HGLG11".
    """
    if not raw:
        return ""
    clean = raw.strip().upper()
    match = _TICKER_AT_START.match(clean)
    if match:
        return match.group(1)
    match = _TICKER_ANYWHERE.search(clean)
    if match:
        return match.group(1)
    return clean.split(" ")[0]


def _parse_csv(content: bytes) -> list[dict[str, Any]]:
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError:
        text = content.decode("latin-1")
    header_line = text.splitlines()[0] if text else ""
    delimiter = ";" if header_line.count(";") > header_line.count(",") else ","
    reader = csv.DictReader(StringIO(text), delimiter=delimiter)
    return [dict(row) for row in reader]


def _parse_xlsx(content: bytes) -> list[dict[str, Any]]:
    workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
    worksheet = workbook.active
    rows = list(worksheet.iter_rows(values_only=True))
    if not rows:
        return []

    headers = [str(cell).strip() if cell is not None else "" for cell in rows[0]]
    records: list[dict[str, Any]] = []
    for row_values in rows[1:]:
        if row_values is None:
            continue
        row_dict = {
            headers[index]: row_values[index] if index < len(row_values) else None
            for index in range(len(headers))
            if headers[index]
        }
        if any(value is not None and str(value).strip() != "" for value in row_dict.values()):
            records.append(row_dict)
    return records


def _detect_format(filename: str) -> Literal["csv", "xlsx"]:
    lowered = filename.lower()
    if lowered.endswith(".csv"):
        return "csv"
    if lowered.endswith(".xlsx"):
        return "xlsx"
    raise UnsupportedStatementFormatError(f"Unsupported statement format for '{filename}'. Use .csv or .xlsx.")


def _first_key(keys: dict[str, str], candidates: tuple[str, ...]) -> Optional[str]:
    for candidate in candidates:
        if candidate in keys:
            return keys[candidate]
    return None


class StatementImporter:
    """
    Turns a B3 trade statement into BUY/SELL transactions.

    Income lines (dividends, JCP, yields) are not trades and are skipped;
    so is every row missing a date, a ticker, a positive quantity or a
    positive price.
    """
    def import_file(self, filename: str, content: bytes) -> ImportResult:
        file_format = _detect_format(filename)
        rows = _parse_csv(content) if file_format == "csv" else _parse_xlsx(content)
        result = self.import_rows(rows)
        result.file_format = file_format
        logger.info(
            f"Imported {len(result.transactions)} transactions from {filename} "
            f"({len(result.skipped_rows)} of {result.total_rows} rows skipped)."
        )
        return result

    def import_rows(self, rows: list[dict[str, Any]]) -> ImportResult:
        transactions: list[Transaction] = []
        skipped: list[SkippedRow] = []

        for index, row in enumerate(rows, start=2):
            transaction, reason = self._parse_row(row, sequence=len(transactions))
            if transaction is None:
                skipped.append(SkippedRow(row_number=index, reason=reason))
                continue
            transactions.append(transaction)

        return ImportResult(file_format="csv", transactions=transactions, skipped_rows=skipped, total_rows=len(rows))

    def _parse_row(self, row: dict[str, Any], sequence: int) -> tuple[Optional[Transaction], str]:
        keys = {str(k).lower().strip(): k for k in row.keys() if k is not None}

        movement_key = _first_key(keys, MOVEMENT_HEADERS)
        movement = str(row.get(movement_key) or "").strip().lower() if movement_key else ""
        if any(keyword in movement for keyword in INCOME_MOVEMENT_KEYWORDS):
            return None, "Income movement, not a trade."

        date_key = _first_key(keys, DATE_HEADERS)
        trade_date = parse_br_date(row.get(date_key)) if date_key else ""
        if not trade_date:
            return None, "Missing or invalid trade date."

        quantity_key = _first_key(keys, QUANTITY_HEADERS)
        price_key = _first_key(keys, PRICE_HEADERS)
        ticker_key = _first_key(keys, TICKER_HEADERS)
        total_key = _first_key(keys, TOTAL_HEADERS)

        quantity = parse_br_number(row.get(quantity_key)) if quantity_key else ZERO
        price = parse_br_number(row.get(price_key)) if price_key else ZERO
        ticker = extract_ticker(str(row.get(ticker_key) or "")) if ticker_key else ""
        total_value = parse_br_number(row.get(total_key)) if total_key else ZERO

        # Older simplified statements carry only the financial total.
        if quantity == ZERO and total_value != ZERO and price != ZERO:
            quantity = abs(total_value / price)

        if not ticker or quantity <= ZERO or price <= ZERO:
            return None, "Missing ticker, quantity or price."

        whole_quantity = quantity.to_integral_value(rounding=ROUND_FLOOR)
        if whole_quantity <= ZERO:
            return None, "Quantity below one share."

        transaction = Transaction(
            transaction_id=str(uuid.uuid4()),
            ticker=ticker,
            transaction_type=self._resolve_type(movement, row.get(total_key) if total_key else None, total_value),
            quantity=whole_quantity,
            price=abs(price),
            transaction_date=trade_date,
            asset_type=infer_asset_type(ticker),
            sequence=sequence
        )
        return transaction, ""

    @staticmethod
    def _resolve_type(movement: str, raw_total: Any, total_value: Decimal) -> TransactionType:
        if "venda" in movement or movement == "v" or "sell" in movement:
            return TransactionType.SELL
        if "compra" in movement or movement == "c" or "buy" in movement:
            return TransactionType.BUY

        # No explicit direction: debit (D / negative) is a purchase, credit (C / positive) a sale.
        if raw_total is not None:
            marker = str(raw_total).upper()
            if "D" in marker:
                return TransactionType.BUY
            if "C" in marker:
                return TransactionType.SELL
            if total_value < ZERO:
                return TransactionType.BUY
            if total_value > ZERO:
                return TransactionType.SELL
        return TransactionType.BUY
