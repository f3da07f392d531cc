"""
SOAP 1.1 envelope construction for the soaps3 SDK
"""

import xml.etree.ElementTree as ET
from typing import Iterable

from .models import Param, ParamLike

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'

TARGET_NAMESPACE = "http://s3.amazonaws.com/doc/2006-03-01/"

# Declared on the Envelope in this order regardless of use
ENVELOPE_ATTRIBUTES = (
    ("xmlns:wsdlsoap", "http://schemas.xmlsoap.org/wsdl/soap/"),
    ("soap:encodingStyle", "http://schemas.xmlsoap.org/soap/encoding/"),
    ("xmlns:soap", "http://schemas.xmlsoap.org/soap/envelope/"),
    ("xmlns:wsdl", "http://schemas.xmlsoap.org/wsdl/"),
    ("xmlns:soapenc", "http://schemas.xmlsoap.org/soap/encoding/"),
    ("xmlns:xsi", "http://www.w3.org/2001/XMLSchema-instance"),
    ("xmlns:tns", TARGET_NAMESPACE),
    ("xmlns:xsd", "http://www.w3.org/2001/XMLSchema"),
)


def _append_params(parent: ET.Element, params: Iterable[ParamLike]) -> None:
    for item in params:
        param = Param.coerce(item)
        element = ET.SubElement(parent, param.name, dict(param.attributes))
        if param.is_nested:
            _append_params(element, param.value)
        elif isinstance(param.value, bool):
            element.text = "true" if param.value else "false"
        elif param.value is not None:
            element.text = str(param.value)


def build_envelope(operation: str, params: Iterable[ParamLike]) -> str:
    """
    Wrap an operation call in the fixed SOAP envelope.

    Prefixed names are written literally so every namespace is declared
    on the Envelope exactly once, in a stable order. The result is
    indented so that identical calls produce identical bytes.
    """
    envelope = ET.Element("soap:Envelope", dict(ENVELOPE_ATTRIBUTES))
    body = ET.SubElement(envelope, "soap:Body")
    call = ET.SubElement(body, f"tns:{operation}", {"xsi:nil": "true"})
    _append_params(call, params)

    ET.indent(envelope, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(envelope, encoding="unicode") + "\n"
