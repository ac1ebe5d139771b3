"""
Exception hierarchy for Fennec.

All custom exceptions inherit from FennecError base class.
"""


class FennecError(Exception):
    """Base exception for all Fennec errors."""
    pass


# Request Construction Errors
class RequestConstructionError(FennecError):
    """Base exception for errors raised while building a request descriptor."""
    pass


class MissingPathParameterError(RequestConstructionError):
    """Raised when a required path parameter is not supplied."""

    def __init__(self, endpoint: str, parameter: str):
        self.endpoint = endpoint
        self.parameter = parameter
        super().__init__(
            f"{endpoint}: required path parameter '{parameter}' is missing"
        )


class InvalidPathSegmentError(RequestConstructionError):
    """Raised when an identifier cannot be placed into a URL path as given."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"invalid path segment {value!r}: {reason}")


class InvalidParameterError(RequestConstructionError):
    """Raised when a query parameter is unknown or has a value of the wrong type."""
    pass


class UnknownEndpointError(RequestConstructionError):
    """Raised when an endpoint name is not present in the catalog."""
    pass


# Cancellation Context Errors
class ContextError(FennecError):
    """Base exception for cancellation context errors."""
    pass


class ContextCancelledError(ContextError):
    """Raised when the caller cancels a request context before the exchange completes."""
    pass


class DeadlineExceededError(ContextCancelledError):
    """Raised when a request context's deadline passes before the exchange completes."""
    pass


# Transport Errors
class TransportError(FennecError):
    """Base exception for network-level failures reported by a transport."""
    pass


class ConnectionError(TransportError):
    """Raised when a transport cannot reach the remote server."""
    pass


class TransportTimeoutError(TransportError):
    """Raised when a transport gives up waiting for the remote server."""
    pass


# Response Errors
class ResponseError(FennecError):
    """Base exception for response envelope misuse."""
    pass


class BodyConsumedError(ResponseError):
    """Raised when a response body is read after it was already drained or closed."""
    pass


# Configuration Errors
class ConfigurationError(FennecError):
    """Base exception for configuration errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass


class SDKConfigurationError(ConfigurationError):
    """Raised when a client is constructed with an unusable combination of options."""
    pass
