class GapiClientError(Exception):
    """Base exception for API client errors."""
    pass

class DiscoveryError(GapiClientError):
    """Raised when an API description is invalid or cannot be loaded."""
    pass

class MissingParameterError(GapiClientError, ValueError):
    """Raised when one or more required parameters are missing."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Missing required parameters: {', '.join(self.missing)}")

class InvalidParameterError(GapiClientError, ValueError):
    """Raised when a parameter value has the wrong type."""
    pass

class UnknownOperationError(GapiClientError, AttributeError):
    """Raised when a resource or method does not exist on a service."""
    pass

class TransportError(GapiClientError):
    """Raised when the HTTP call fails, returns a non-2xx status or cannot be decoded."""

    def __init__(self, message, status_code=None, content=None):
        super().__init__(message)
        self.status_code = status_code
        self.content = content
