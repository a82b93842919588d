# ===== apps/pairs/exceptions.py =====
from rest_framework import status


class PairServiceError(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Pair service error"

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def as_payload(self):
        payload = {"error": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidArgument(PairServiceError):
    """Malformed id or request body"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class PairNotFound(PairServiceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Pair not found"


class ServiceUnavailable(PairServiceError):
    """Store failure; the message stays generic, the cause goes to the log"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Service temporarily unavailable"
