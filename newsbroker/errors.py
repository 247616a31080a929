"""
Error taxonomy for the News Broker

Every failure that can reach the HTTP boundary is a BrokerError subclass
carrying the status code and the message returned to the caller.
"""
from typing import Optional


class BrokerError(Exception):
    """Base error converted to a JSON {message} response."""
    status_code = 500
    public_message: Optional[str] = None

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {'message': self.public_message or self.message}


class ConfigurationError(BrokerError):
    """A required secret or credential is not configured."""
    status_code = 500
    # Never leak which setting is missing
    public_message = 'Server misconfigured'


class UnauthorizedError(BrokerError):
    status_code = 401

    def __init__(self, message: str = 'Invalid API key'):
        super().__init__(message)


class NotFoundError(BrokerError):
    status_code = 404


class ValidationError(BrokerError):
    status_code = 422


class UpstreamError(BrokerError):
    """The search provider answered with a non-success response."""
    status_code = 500

    def __init__(self, upstream_status: Optional[int], body: str):
        self.upstream_status = upstream_status
        self.body = body
        message = f"Upstream error {upstream_status}: {body[:500]}" if upstream_status else f"Upstream error: {body[:500]}"
        super().__init__(message)


class TransportError(BrokerError):
    """The search provider could not be reached."""
    status_code = 500
