"""Glue between lxml element trees and the record models.

The models only ever talk to the tree through these helpers, so every
missing attribute or child surfaces as the same ``StructuralError``.
"""

from __future__ import annotations

from typing import Callable, Optional, TypeVar, Union

from lxml import etree

from .errors import StructuralError

T = TypeVar("T")

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'


def _parser() -> etree.XMLParser:
    # one parser per call: lxml parsers must not be shared across threads
    return etree.XMLParser(
        remove_comments=True,
        remove_pis=True,
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
    )


def parse_root(source: Union[str, bytes], expected_tag: Optional[str] = None) -> etree._Element:
    """Parse a complete document and return its root element."""
    if isinstance(source, str):
        # lxml refuses str input that carries an encoding declaration
        source = source.encode("utf-8")
    try:
        root = etree.fromstring(source, parser=_parser())
    except etree.XMLSyntaxError as exc:
        raise StructuralError(f"malformed document: {exc}") from exc
    if expected_tag is not None and root.tag != expected_tag:
        raise StructuralError(f"expected <{expected_tag}> root element, found <{root.tag}>")
    return root


def attr(el: etree._Element, name: str, *, strip: bool = True) -> str:
    value = el.get(name)
    if value is None:
        raise StructuralError(f"<{el.tag}> is missing required attribute '{name}'")
    return value.strip() if strip else value


def text(el: etree._Element) -> str:
    return (el.text or "").strip()


def child(el: etree._Element, tag: str) -> etree._Element:
    found = el.find(tag)
    if found is None:
        raise StructuralError(f"<{el.tag}> is missing required element <{tag}>")
    return found


def child_text(el: etree._Element, tag: str) -> str:
    return text(child(el, tag))


def children(el: etree._Element, tag: str) -> list[etree._Element]:
    return el.findall(tag)


def decode_attr(el: etree._Element, name: str, decode: Callable[[str], T]) -> T:
    return decode(attr(el, name))


def decode_text(el: etree._Element, decode: Callable[[str], T]) -> T:
    return decode(text(el))


def decode_child(el: etree._Element, tag: str, decode: Callable[[str], T]) -> T:
    return decode(child_text(el, tag))


def text_element(tag: str, value: str, **attrib: str) -> etree._Element:
    el = etree.Element(tag, attrib)
    el.text = value
    return el


def sub_text(parent: etree._Element, tag: str, value: str) -> etree._Element:
    el = etree.SubElement(parent, tag)
    el.text = value
    return el


def tostring(el: etree._Element, *, pretty: bool = True, declaration: bool = False) -> str:
    # lxml refuses xml_declaration together with unicode output
    body = etree.tostring(el, encoding="unicode", pretty_print=pretty)
    return XML_DECLARATION + body if declaration else body
