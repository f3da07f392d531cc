"""
Namespace-agnostic helpers over xml.etree for reading SOAP responses
"""

import xml.etree.ElementTree as ET
from typing import Any, List, Optional


def local_name(tag: str) -> str:
    """Strip the ``{namespace}`` (or ``prefix:``) part from a tag."""
    return tag.split("}")[-1].split(":")[-1]


def find_all(root: ET.Element, path: str) -> List[ET.Element]:
    """
    Resolve a slash-separated path of local names below ``root``.

    ``Body/Fault`` on an Envelope returns every ``Fault`` child of every
    ``Body`` child, ignoring namespaces.
    """
    nodes = [root]
    for step in path.strip("/").split("/"):
        nodes = [
            child
            for node in nodes
            for child in node
            if local_name(child.tag) == step
        ]
        if not nodes:
            break
    return nodes


def find(root: ET.Element, path: str) -> Optional[ET.Element]:
    nodes = find_all(root, path)
    return nodes[0] if nodes else None


def simplify(element: ET.Element) -> Any:
    """
    Collapse an element into plain Python data.

    Leaves become their stripped text; elements with children become a
    dict keyed by child local name, with repeated names gathered in a list.
    """
    children = list(element)
    if not children:
        return (element.text or "").strip()

    result = {}
    for child in children:
        name = local_name(child.tag)
        value = simplify(child)
        if name in result:
            if not isinstance(result[name], list):
                result[name] = [result[name]]
            result[name].append(value)
        else:
            result[name] = value
    return result


def tidy(content: str) -> str:
    """Re-indent an XML document for display; returns input unchanged if unparsable."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError:
        return content
    ET.indent(root, space="  ")
    return ET.tostring(root, encoding="unicode")
