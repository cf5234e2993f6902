"""The exceptions used in the budxray module."""


class BudXRayException(Exception):
    """Base exception class for budxray."""

    def __init__(self, message: str) -> None:
        """Initialize the base exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return the bare message so span statuses carry it unchanged."""
        return self.message


class HandlerExecutionException(BudXRayException):
    """Raised by a route handler that cannot produce a response.

    The request boundary converts it, like any other error, into a 500
    envelope and records it on the request span.
    """
