"""
Errors raised while talking to PayPal.
The HTTP layer maps each of them to a response status.
"""

from typing import Dict, Optional


class PayPalError(Exception):
    """Base exception for PayPal integration errors."""
    pass


class ConfigError(PayPalError):
    """Raised when the PayPal credential or base URL is not configured."""
    pass


class FetchError(PayPalError):
    """
    Raised when PayPal cannot be reached or answers with a non-2xx status.
    `status_code` is None when no HTTP answer was received.
    """

    def __init__(self, status_code: Optional[int], body: str = "", endpoint: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        self.endpoint = endpoint
        if status_code is None:
            message = f"PayPal API unreachable on {endpoint or 'unknown endpoint'}: {body}"
        else:
            message = f"PayPal API Error: {status_code} on {endpoint or 'unknown endpoint'}"
        super().__init__(message)

    @property
    def is_network_error(self) -> bool:
        return self.status_code is None


class InvalidTransactionError(PayPalError):
    """Raised when a reporting entry cannot be parsed."""

    def __init__(self, transaction_id: Optional[str], reason: str):
        self.transaction_id = transaction_id
        self.reason = reason
        super().__init__(f"Invalid PayPal transaction {transaction_id or '<missing id>'}: {reason}")


class NotFoundError(PayPalError):
    """Raised when no lookup strategy could resolve a transaction id."""

    def __init__(self, transaction_id: str, attempts: Dict[str, int]):
        self.transaction_id = transaction_id
        self.attempts = attempts
        statuses = ", ".join(f"{name.capitalize()}: {status}" for name, status in attempts.items())
        super().__init__(f"Failed to fetch details for {transaction_id}. {statuses}")
