"""贷款计算引擎异常"""


class LoanEngineError(Exception):
    """Base exception for all loan engine errors."""


class InvalidTermsError(LoanEngineError):
    """Raised when loan terms are malformed or out of range."""


class InvalidPaymentError(LoanEngineError):
    """Raised when a payment amount cannot be allocated."""


class InvalidDateRangeError(LoanEngineError):
    """Raised when date inputs are malformed or inconsistent."""


class InvalidOverdueInputError(LoanEngineError):
    """Raised when overdue assessment inputs are malformed."""


class YieldCalculationError(LoanEngineError):
    """Raised when the lender yield cannot be solved."""
