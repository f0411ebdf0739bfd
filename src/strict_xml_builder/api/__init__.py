"""Public entry points and integration adapters."""

from .adapters import (
    AdapterMetadata,
    ConversionResult,
    ElementTreeAdapter,
    IntegrationAdapter,
    LxmlAdapter,
    get_adapter,
    list_available_adapters,
    register_adapter,
)
from .builder import document, element, to_string

__all__ = [
    "AdapterMetadata",
    "ConversionResult",
    "ElementTreeAdapter",
    "IntegrationAdapter",
    "LxmlAdapter",
    "document",
    "element",
    "get_adapter",
    "list_available_adapters",
    "register_adapter",
    "to_string",
]
