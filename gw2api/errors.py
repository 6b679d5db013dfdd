"""
Errors raised while generating a randomizer configuration.
"""
from typing import Optional


class GeneratorError(Exception):
    """Base class for fatal generator failures."""


class TransportError(GeneratorError):
    """Raised when a request fails at the network or HTTP level."""
    
    def __init__(self, url: str, reason: Optional[str] = None):
        self.url = url
        self.reason = reason
        super().__init__(f"Request to {url} failed: {reason}")


class SchemaError(GeneratorError):
    """Raised when a response body does not have the expected shape."""
    
    def __init__(self, url: str, reason: Optional[str] = None):
        self.url = url
        self.reason = reason
        super().__init__(f"Unexpected response from {url}: {reason}")


class CatalogError(GeneratorError):
    """Raised when fetched reference data cannot be joined."""


class InputError(GeneratorError):
    """Raised when the input document is missing or invalid."""
