# src/portfolio_accounting_engine/exceptions.py

class AccountingEngineError(Exception):
    """Base exception for all errors raised around the portfolio accounting engine."""
    def __init__(self, message="An unspecified error occurred in the portfolio accounting engine."):
        self.message = message
        super().__init__(self.message)


class InvalidInputDataError(AccountingEngineError):
    """Raised when boundary input (a statement file, a store record) cannot be used at all."""
    def __init__(self, message="Invalid input data provided to the portfolio accounting engine."):
        self.message = message
        super().__init__(self.message)


class UnsupportedStatementFormatError(InvalidInputDataError):
    """Raised when a brokerage statement is neither .csv nor .xlsx."""
    def __init__(self, message="Unsupported statement format. Use .csv or .xlsx."):
        self.message = message
        super().__init__(self.message)


class MissingConfigurationError(AccountingEngineError):
    """Raised when a required configuration value is missing or invalid."""
    def __init__(self, message="Missing required configuration for the portfolio accounting engine."):
        self.message = message
        super().__init__(self.message)
