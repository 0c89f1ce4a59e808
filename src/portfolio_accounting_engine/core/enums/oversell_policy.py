# src/portfolio_accounting_engine/core/enums/oversell_policy.py
from enum import Enum


class OversellPolicy(str, Enum):
    """
    Defines how the position engine treats a SELL larger than the quantity held.

    REJECT: the SELL is reported as an errored transaction and ignored.
    CLAMP: the SELL is applied for the held quantity only.
    """
    REJECT = "REJECT"
    CLAMP = "CLAMP"
