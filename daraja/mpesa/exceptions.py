# daraja/mpesa/exceptions.py


class DarajaError(Exception):
    """Base class for errors raised by the Daraja client."""

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class GatewayError(DarajaError):
    """The gateway answered, but not with a usable success response."""

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload or {}

    def __str__(self):
        if self.status_code:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message
