"""Last-resort handling for exceptions no route anticipated."""
from typing import Dict
import logging

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An internal error occurred while processing your request. Please try again later."


class ErrorHandler:
    """
    Build the 500 body for an unexpected failure.

    The exception and the request it happened on go to the log only; clients
    get a fixed message, never internal details.
    """

    def __init__(self, message: str = INTERNAL_ERROR_MESSAGE) -> None:
        self.message = message

    def handle_exception(self, exc: Exception, method: str, path: str) -> Dict[str, str]:
        logger.error("Unhandled %s during %s %s: %s", type(exc).__name__, method, path, exc, exc_info=exc)
        return {"error": self.message}
