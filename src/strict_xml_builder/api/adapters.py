"""Integration adapters for exchanging trees with other XML libraries.

This module converts built trees to and from the element APIs of lxml and
the standard library's ElementTree. Conversions never raise: failures and
lossy mappings are reported through :class:`ConversionResult`.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Optional, Tuple, Type

from strict_xml_builder.shared import (
    DiagnosticEntry,
    DiagnosticSeverity,
    XmlBuilderError,
    get_logger,
)
from strict_xml_builder.tree import NodeType, XmlDocument, XmlElement, XmlNode

# Entities every XML processor knows; these resolve to plain characters
PREDEFINED_ENTITIES: Dict[str, str] = {
    "amp": "&",
    "apos": "'",
    "gt": ">",
    "lt": "<",
    "quot": '"',
}


class ConversionDirection(Enum):
    """Direction of data conversion."""

    TO_TARGET = auto()      # Convert from a built tree to the target library
    FROM_TARGET = auto()    # Convert from the target library to a built tree


@dataclass
class AdapterMetadata:
    """Metadata about an integration adapter."""

    name: str
    target_library: str
    description: str


@dataclass
class ConversionResult:
    """Result of a conversion operation."""

    success: bool
    converted_data: Any
    original_data: Any
    conversion_time_ms: float
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    diagnostics: List[DiagnosticEntry] = field(default_factory=list)


class IntegrationAdapter(ABC):
    """Abstract base class for all integration adapters.

    Defines bidirectional conversion between :class:`XmlElement` trees and
    a target representation, with consistent error reporting and logging.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the integration adapter.

        Args:
            correlation_id: Optional correlation ID for request tracking
        """
        self.correlation_id = correlation_id
        self._logger = get_logger(__name__, correlation_id, self.__class__.__name__)

    @property
    @abstractmethod
    def metadata(self) -> AdapterMetadata:
        """Get adapter metadata."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the target library is importable."""

    @abstractmethod
    def to_target(self, tree: XmlNode) -> ConversionResult:
        """Convert an element or document to the target format."""

    @abstractmethod
    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert a target-format element to an :class:`XmlElement` tree."""

    def _create_error_result(
        self,
        error_message: str,
        original_data: Any,
        conversion_time_ms: float = 0.0
    ) -> ConversionResult:
        """Create a ConversionResult for error conditions."""
        return ConversionResult(
            success=False,
            converted_data=None,
            original_data=original_data,
            conversion_time_ms=conversion_time_ms,
            errors=[error_message],
            diagnostics=[
                DiagnosticEntry(
                    severity=DiagnosticSeverity.ERROR,
                    message=error_message,
                    component=self.__class__.__name__,
                    correlation_id=self.correlation_id
                )
            ]
        )

    def _warning_diagnostics(self, warnings: List[str]) -> List[DiagnosticEntry]:
        return [
            DiagnosticEntry(
                severity=DiagnosticSeverity.WARNING,
                message=warning,
                component=self.__class__.__name__,
                correlation_id=self.correlation_id,
            )
            for warning in warnings
        ]


class EtreeAdapter(IntegrationAdapter):
    """Shared conversion logic for libraries exposing the ElementTree API.

    Content nodes are mapped onto the ``text``/``tail`` model: character
    data, CDATA sections and character references become text, while
    elements, comments and processing instructions become child nodes.
    """

    supports_entities = False

    @abstractmethod
    def _etree(self) -> Any:
        """Import and return the target etree module."""

    def _make_entity(self, etree: Any, name: str) -> Any:
        return None

    def _is_entity(self, etree: Any, node: Any) -> bool:
        return False

    def _pi_parts(self, node: Any) -> Tuple[str, Optional[str]]:
        """Split a processing instruction into target and content."""
        target, _, content = (node.text or "").partition(" ")
        return target, content or None

    def is_available(self) -> bool:
        try:
            self._etree()
            return True
        except ImportError:
            return False

    def to_target(self, tree: XmlNode) -> ConversionResult:
        """Convert an :class:`XmlElement` (or a document's root) to the target.

        Args:
            tree: Element to convert, or a document whose root is converted

        Returns:
            ConversionResult whose ``converted_data`` is the target element
        """
        start_time = time.time()

        try:
            etree = self._etree()

            if isinstance(tree, XmlDocument):
                tree = tree.root()
            if not isinstance(tree, XmlElement):
                return self._create_error_result(
                    "Only elements and documents can be converted",
                    tree,
                    (time.time() - start_time) * 1000
                )

            warnings: List[str] = []
            target_root = self._convert_to_target(tree, etree, warnings)

            processing_time = (time.time() - start_time) * 1000
            if warnings:
                self._logger.warning(
                    "Converted tree with lossy mappings",
                    extra={"root": tree.name, "warnings": warnings},
                )
            self._logger.debug(
                "Converted tree to target library",
                extra={
                    "root": tree.name,
                    "warning_count": len(warnings),
                    "processing_time_ms": processing_time,
                }
            )

            return ConversionResult(
                success=True,
                converted_data=target_root,
                original_data=tree,
                conversion_time_ms=processing_time,
                warnings=warnings,
                metadata={
                    "direction": ConversionDirection.TO_TARGET,
                    "element_count": sum(1 for _ in target_root.iter()),
                },
                diagnostics=self._warning_diagnostics(warnings),
            )

        except (ImportError, XmlBuilderError, ValueError, TypeError) as e:
            processing_time = (time.time() - start_time) * 1000
            self._logger.error(
                "Conversion to target library failed",
                extra={"processing_time_ms": processing_time},
            )
            return self._create_error_result(
                f"Failed to convert to {self.metadata.name}: {e}",
                tree,
                processing_time
            )

    def from_target(self, target_data: Any) -> ConversionResult:
        """Convert a target element into an :class:`XmlElement` tree.

        Args:
            target_data: Element of the target library

        Returns:
            ConversionResult whose ``converted_data`` is the new XmlElement
        """
        start_time = time.time()

        try:
            etree = self._etree()

            if not hasattr(target_data, "tag") or not isinstance(target_data.tag, str):
                return self._create_error_result(
                    f"Target data is not a valid {self.metadata.name} element",
                    target_data,
                    (time.time() - start_time) * 1000
                )

            element = self._convert_from_target(target_data, etree)

            processing_time = (time.time() - start_time) * 1000
            return ConversionResult(
                success=True,
                converted_data=element,
                original_data=target_data,
                conversion_time_ms=processing_time,
                metadata={
                    "direction": ConversionDirection.FROM_TARGET,
                    "original_tag": target_data.tag,
                },
            )

        except (ImportError, XmlBuilderError, ValueError, TypeError) as e:
            processing_time = (time.time() - start_time) * 1000
            self._logger.error(
                "Conversion from target library failed",
                extra={"processing_time_ms": processing_time},
            )
            return self._create_error_result(
                f"Failed to convert from {self.metadata.name}: {e}",
                target_data,
                processing_time
            )

    def _convert_to_target(
        self, element: XmlElement, etree: Any, warnings: List[str]
    ) -> Any:
        target = etree.Element(element.name)

        for attribute in element.attributes():
            target.set(
                attribute.name, self._attribute_value(attribute, warnings)
            )

        last: Any = None

        def add_text(text: str) -> None:
            if last is None:
                target.text = (target.text or "") + text
            else:
                last.tail = (last.tail or "") + text

        for child in element.children():
            node_type = child.node_type
            if node_type is NodeType.ATTRIBUTE:
                continue
            if node_type is NodeType.ELEMENT:
                last = self._convert_to_target(child, etree, warnings)
                target.append(last)
            elif node_type is NodeType.COMMENT:
                last = etree.Comment(child.content)
                target.append(last)
            elif node_type is NodeType.PROC_INST:
                last = etree.ProcessingInstruction(child.target, child.content)
                target.append(last)
            elif node_type is NodeType.ENTITY_REF:
                if child.entity in PREDEFINED_ENTITIES:
                    add_text(PREDEFINED_ENTITIES[child.entity])
                elif self.supports_entities:
                    last = self._make_entity(etree, child.entity)
                    target.append(last)
                else:
                    warnings.append(
                        f"Entity reference &{child.entity}; converted to literal text"
                    )
                    add_text(child.to_string())
            elif node_type is NodeType.CHAR_REF:
                add_text(child.char)
            elif node_type is NodeType.CDATA:
                add_text(child.data)
            else:
                add_text(child.text)

        return target

    def _attribute_value(self, attribute: Any, warnings: List[str]) -> str:
        parts = []
        for child in attribute.children():
            if child.node_type is NodeType.TEXT:
                parts.append(child.text)
            elif child.node_type is NodeType.CHAR_REF:
                parts.append(child.char)
            elif child.entity in PREDEFINED_ENTITIES:
                parts.append(PREDEFINED_ENTITIES[child.entity])
            else:
                warnings.append(
                    f"Entity reference &{child.entity}; in attribute"
                    f" {attribute.name!r} converted to literal text"
                )
                parts.append(child.to_string())
        return "".join(parts)

    def _convert_from_target(self, node: Any, etree: Any) -> XmlElement:
        element = XmlElement(node.tag)

        for name, value in node.attrib.items():
            element.attribute(name, value)

        if node.text:
            element.text(node.text)

        for child in node:
            if child.tag is etree.Comment:
                element.comment(child.text or "")
            elif child.tag is etree.ProcessingInstruction:
                target, content = self._pi_parts(child)
                element.proc_inst(target, content)
            elif self._is_entity(etree, child):
                element.entity_ref(child.text[1:-1])
            else:
                element.insert_child(self._convert_from_target(child, etree))

            if child.tail:
                element.text(child.tail)

        return element


class LxmlAdapter(EtreeAdapter):
    """Adapter for bidirectional conversion with lxml.etree."""

    supports_entities = True

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="lxml",
            target_library="lxml",
            description="Bidirectional conversion between XmlElement and lxml.etree",
        )

    def _etree(self) -> Any:
        import lxml.etree
        return lxml.etree

    def _make_entity(self, etree: Any, name: str) -> Any:
        return etree.Entity(name)

    def _is_entity(self, etree: Any, node: Any) -> bool:
        return node.tag is etree.Entity

    def _pi_parts(self, node: Any) -> Tuple[str, Optional[str]]:
        return node.target, node.text


class ElementTreeAdapter(EtreeAdapter):
    """Adapter for bidirectional conversion with xml.etree.ElementTree."""

    @property
    def metadata(self) -> AdapterMetadata:
        return AdapterMetadata(
            name="elementtree",
            target_library="xml.etree.ElementTree",
            description="Bidirectional conversion between XmlElement and ElementTree",
        )

    def _etree(self) -> Any:
        import xml.etree.ElementTree
        return xml.etree.ElementTree


class AdapterRegistry:
    """Registry for managing integration adapters by name."""

    def __init__(self) -> None:
        self._adapters: Dict[str, Type[IntegrationAdapter]] = {}

    def register(self, adapter_class: Type[IntegrationAdapter]) -> None:
        """Register an adapter class under its metadata name."""
        self._adapters[adapter_class().metadata.name] = adapter_class

    def get_adapter(
        self,
        adapter_name: str,
        correlation_id: Optional[str] = None
    ) -> Optional[IntegrationAdapter]:
        """Get an adapter instance by name.

        Returns:
            Adapter instance if registered and available, None otherwise
        """
        adapter_class = self._adapters.get(adapter_name)
        if adapter_class is None:
            return None
        instance = adapter_class(correlation_id)
        return instance if instance.is_available() else None

    def list_available_adapters(self) -> List[AdapterMetadata]:
        """List metadata of all registered adapters whose library is importable."""
        available = []
        for adapter_class in self._adapters.values():
            instance = adapter_class()
            if instance.is_available():
                available.append(instance.metadata)
        return available


# Global adapter registry instance
_adapter_registry = AdapterRegistry()
_adapter_registry.register(LxmlAdapter)
_adapter_registry.register(ElementTreeAdapter)


def register_adapter(adapter_class: Type[IntegrationAdapter]) -> None:
    """Register an integration adapter globally."""
    _adapter_registry.register(adapter_class)


def get_adapter(
    adapter_name: str,
    correlation_id: Optional[str] = None
) -> Optional[IntegrationAdapter]:
    """Get a registered adapter instance.

    Args:
        adapter_name: Name of the adapter (``"lxml"`` or ``"elementtree"``)
        correlation_id: Optional correlation ID

    Returns:
        Adapter instance if available, None otherwise
    """
    return _adapter_registry.get_adapter(adapter_name, correlation_id)


def list_available_adapters() -> List[AdapterMetadata]:
    """List all available integration adapters."""
    return _adapter_registry.list_available_adapters()
