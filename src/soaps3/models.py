"""
Data models for the soaps3 SDK
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from . import _xml


@dataclass
class Param:
    """
    A named request parameter.

    ``value`` is either a scalar (serialized as element text) or a sequence
    of nested parameters, which serializes to child elements in order.
    """
    name: str
    value: Union[str, Sequence["ParamLike"], None] = None
    attributes: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def coerce(cls, item: "ParamLike") -> "Param":
        """Accept a Param or a ``(name, value)`` / ``(name, value, attributes)`` tuple."""
        if isinstance(item, Param):
            return item
        if isinstance(item, tuple) and len(item) in (2, 3):
            return cls(*item)
        raise TypeError(f"Cannot use {item!r} as a request parameter.")

    @property
    def is_nested(self) -> bool:
        return isinstance(self.value, (list, tuple))


ParamLike = Union[Param, Tuple[str, Any], Tuple[str, Any, Dict[str, str]]]


@dataclass
class Fault:
    """Represents a SOAP Fault returned by the service."""
    code: Optional[str] = None
    message: Optional[str] = None
    detail: Any = None
    raw: Any = None

    @classmethod
    def from_element(cls, element: ET.Element) -> "Fault":
        simple = _xml.simplify(element)
        if not isinstance(simple, dict):
            return cls(message=simple or None, raw=simple)
        return cls(
            code=simple.get("faultcode"),
            message=simple.get("faultstring"),
            detail=simple.get("detail"),
            raw=simple,
        )

    def to_dict(self) -> Dict[str, Any]:
        """The whole Fault element as simplified data, faultactor and detail included."""
        if isinstance(self.raw, dict):
            return dict(self.raw)
        result: Dict[str, Any] = {"faultcode": self.code, "faultstring": self.message}
        if self.detail is not None:
            result["detail"] = self.detail
        return result


@dataclass
class SoapResponse:
    """Represents the unwrapped result of one SOAP operation call."""
    operation: str
    content: str
    document: ET.Element
    status_code: int = 200
    headers: Dict[str, str] = field(default_factory=dict)
    fault: Optional[Fault] = None

    @property
    def ok(self) -> bool:
        return self.fault is None

    def find(self, path: str) -> Optional[ET.Element]:
        """First element at ``path`` below the envelope root, or None."""
        return _xml.find(self.document, path)

    def find_all(self, path: str) -> List[ET.Element]:
        """All elements at ``path`` below the envelope root, in document order."""
        return _xml.find_all(self.document, path)
