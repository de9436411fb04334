class BookingError(Exception):
    """Base class for booking wizard errors."""
    pass


class InvalidCommandError(BookingError):
    """Raised when a wizard command receives an argument of the wrong type."""
    pass


class ReferenceDataError(BookingError):
    """Raised when the salon catalog cannot be loaded or fails validation."""
    pass


class WizardNotFoundError(BookingError):
    """Raised when a wizard session id is unknown or expired."""
    pass


class SubmissionError(RuntimeError):
    """Raised when the CRM submission fails (non-2xx status, timeouts, network errors)."""

    def __init__(self, message: str = "Could not reach the CRM webhook (network/URL). Check BITRIX_WEBHOOK_URL or keep demo mode.") -> None:
        super().__init__(message)
        self.message = message
