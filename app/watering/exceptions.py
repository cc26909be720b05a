class WateringError(Exception):
    """Base error for the watering service. Rendered as ``{"error": message}``."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WateringError):
    """Missing or malformed request input."""

    status_code = 400


class NotFoundError(WateringError):
    """Referenced crop definition or record does not exist."""

    status_code = 404


class ExternalServiceError(WateringError):
    """Firestore or FCM call failed."""

    status_code = 500
