"""Reading and writing OME-XML text."""

from __future__ import annotations

import io
import types
import typing
import xml.etree.ElementTree as ET
from enum import Enum
from typing import Any

from pydantic import BaseModel

from omecompanion._model import OME

__all__ = ["OME_NS", "parse_ome_xml", "pretty_xml", "to_ome_xml"]

OME_NS = "http://www.openmicroscopy.org/Schemas/OME/2016-06"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
SCHEMA_LOCATION = f"{OME_NS} {OME_NS}/ome.xsd"
XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>\n'
XML_NS = "http://www.w3.org/XML/1998/namespace"


def _local_name(tag: str) -> str:
    """Strip a '{namespace}' prefix from an element or attribute name."""
    return tag.rsplit("}", 1)[-1]


def _child_model(annotation: Any) -> tuple[type[BaseModel] | None, bool]:
    """Return the model class held by a field annotation, and whether it's a list.

    `Channel`, `LightPath | None` and `list[TiffData]` all map to child
    elements.  Anything else is an attribute (or text).
    """
    origin = typing.get_origin(annotation)
    if origin is list:
        (item,) = typing.get_args(annotation)
        cls, _ = _child_model(item)
        return cls, True
    if origin in (typing.Union, types.UnionType):
        for arg in typing.get_args(annotation):
            cls, many = _child_model(arg)
            if cls is not None:
                return cls, many
        return None, False
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation, False
    return None, False


def _element_to_dict(elem: ET.Element, cls: type[BaseModel]) -> dict[str, Any]:
    data: dict[str, Any] = {
        key: value for key, value in elem.attrib.items() if not key.startswith("{")
    }
    children = [child for child in elem if isinstance(child.tag, str)]
    for field in cls.model_fields.values():
        child_cls, many = _child_model(field.annotation)
        if child_cls is None or field.alias is None:
            continue
        matches = [c for c in children if _local_name(c.tag) == field.alias]
        if many:
            data[field.alias] = [_element_to_dict(c, child_cls) for c in matches]
        elif matches:
            data[field.alias] = _element_to_dict(matches[0], child_cls)

    text_field = getattr(cls, "xml_text_field", None)
    if text_field and elem.text and elem.text.strip():
        alias = cls.model_fields[text_field].alias or text_field
        data[alias] = elem.text.strip()
    return data


def parse_ome_xml(text: str | bytes) -> OME:
    """Parse OME-XML text into an `OME` model.

    Element names are matched by local name, so documents with or without
    the OME namespace are accepted.  Unknown elements and attributes are
    ignored.

    Parameters
    ----------
    text : str | bytes
        The OME-XML document.

    Returns
    -------
    OME
        The parsed document.  A missing list of elements (e.g. no `TiffData`)
        yields an empty list.

    Raises
    ------
    xml.etree.ElementTree.ParseError
        If `text` is not well-formed XML.
    ValueError
        If the root element is not `OME`.
    pydantic.ValidationError
        If a required attribute is missing or has the wrong type.
    """
    root = ET.fromstring(text)
    if _local_name(root.tag) != "OME":
        raise ValueError(
            f"Expected an OME root element, found {_local_name(root.tag)!r}."
        )
    return OME.model_validate(_element_to_dict(root, OME))


def _format_attribute(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def _model_to_element(model: BaseModel, tag: str) -> ET.Element:
    elem = ET.Element(tag)
    text_field = getattr(model, "xml_text_field", None)
    children: list[ET.Element] = []
    for name, field in type(model).model_fields.items():
        value = getattr(model, name)
        alias = field.alias or name
        if value is None:
            continue
        if name == text_field:
            elem.text = str(value)
            continue
        child_cls, many = _child_model(field.annotation)
        if child_cls is None:
            elem.set(alias, _format_attribute(value))
        elif many:
            children.extend(_model_to_element(item, alias) for item in value)
        else:
            children.append(_model_to_element(value, alias))
    elem.extend(children)
    return elem


def _tostring(root: ET.Element, pretty: bool) -> str:
    if pretty:
        ET.indent(root, space="  ")
    return XML_DECLARATION + ET.tostring(root, encoding="unicode")


def to_ome_xml(ome: OME, *, pretty: bool = True) -> str:
    """Serialize an `OME` model to OME-XML text.

    Attributes are written in field declaration order and optional fields
    that are `None` are omitted, so absent calibration stays absent.

    Parameters
    ----------
    ome : OME
        The document to serialize.
    pretty : bool
        Indent nested elements (default True).
    """
    root = _model_to_element(ome, "OME")
    # namespace declarations go first, ahead of the model attributes
    attrib = {
        "xmlns": OME_NS,
        "xmlns:xsi": XSI_NS,
        "xsi:schemaLocation": SCHEMA_LOCATION,
        **root.attrib,
    }
    root.attrib.clear()
    root.attrib.update(attrib)
    return _tostring(root, pretty)


def _collect_prefixes(source: bytes) -> dict[str, str]:
    """Map each namespace URI to the first prefix the document binds it to."""
    prefixes = {XML_NS: "xml"}
    for _, (prefix, uri) in ET.iterparse(io.BytesIO(source), events=("start-ns",)):
        if uri and uri not in prefixes and prefix not in prefixes.values():
            prefixes[uri] = prefix
    return prefixes


class _Prefixer:
    """Rewrites '{uri}name' element and attribute names as 'prefix:name'.

    ElementTree only keeps custom prefixes through `ET.register_namespace`,
    which is process wide, so names are rewritten on the tree instead.
    """

    def __init__(self, prefixes: dict[str, str]) -> None:
        self.prefixes = dict(prefixes)
        # unprefixed attributes are never in a namespace
        self.attribute_prefixes = {u: p for u, p in prefixes.items() if p}
        self.default_uri = next((u for u, p in prefixes.items() if not p), None)

    def _new_prefix(self) -> str:
        used = {*self.prefixes.values(), *self.attribute_prefixes.values()}
        n = 0
        while f"ns{n}" in used:
            n += 1
        return f"ns{n}"

    def name(self, name: str, attribute: bool = False) -> str:
        if not name.startswith("{"):
            return name
        uri, local = name[1:].split("}", 1)
        table = self.attribute_prefixes if attribute else self.prefixes
        if uri not in table:
            table[uri] = self._new_prefix()
        prefix = table[uri]
        return f"{prefix}:{local}" if prefix else local

    def apply(self, elem: ET.Element, in_default: bool) -> None:
        """Rename `elem` and its descendants.

        `in_default` tells whether the parent lies in the document's default
        namespace; elements moving in or out of it re-declare `xmlns`.
        """
        in_ns = elem.tag.startswith("{")
        elem.tag = self.name(elem.tag)
        attrib = {self.name(k, attribute=True): v for k, v in elem.attrib.items()}
        if self.default_uri is not None:
            if in_default and not in_ns:
                attrib = {"xmlns": "", **attrib}
                in_default = False
            elif not in_default and in_ns and ":" not in elem.tag:
                attrib = {"xmlns": self.default_uri, **attrib}
                in_default = True
        elem.attrib.clear()
        elem.attrib.update(attrib)
        for child in elem:
            if isinstance(child.tag, str):
                self.apply(child, in_default)

    def declarations(self) -> dict[str, str]:
        """`xmlns:prefix` attributes for every prefixed namespace in use."""
        decls: dict[str, str] = {}
        for table in (self.prefixes, self.attribute_prefixes):
            for uri, prefix in table.items():
                if prefix and prefix != "xml":
                    decls[f"xmlns:{prefix}"] = uri
        return decls


def pretty_xml(text: str | bytes) -> str:
    """Re-indent arbitrary XML text, keeping its namespace prefixes."""
    source = text.encode() if isinstance(text, str) else text
    root = ET.fromstring(source)
    prefixer = _Prefixer(_collect_prefixes(source))
    prefixer.apply(root, in_default=False)
    # namespace declarations go first, ahead of the element's own attributes
    default = {k: v for k, v in root.attrib.items() if k == "xmlns"}
    own = {k: v for k, v in root.attrib.items() if k != "xmlns"}
    root.attrib.clear()
    root.attrib.update({**default, **prefixer.declarations(), **own})
    return _tostring(root, pretty=True)
