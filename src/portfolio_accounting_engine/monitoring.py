# src/portfolio_accounting_engine/monitoring.py
from prometheus_client import Counter, Histogram

TRANSACTIONS_REPLAYED = Histogram(
    "portfolio_transactions_replayed",
    "Number of transactions replayed during a single portfolio assembly.",
    buckets=(1, 5, 10, 25, 50, 100, 250, 500, 1000, 5000)
)

ASSEMBLY_DURATION_SECONDS = Histogram(
    "portfolio_assembly_duration_seconds",
    "Wall-clock time spent assembling positions, receipts and totals.",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5)
)

REJECTED_TRANSACTIONS_TOTAL = Counter(
    "portfolio_rejected_transactions_total",
    "Transactions excluded from the position engine, labelled by reason.",
    ["reason"]
)
