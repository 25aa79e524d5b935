"""
Field bindings and the tree walker behind the CAP codec.

Record classes are plain dataclasses. Each field declared with
``xml_field`` carries a ``Binding`` in its metadata naming the element (or
attribute) it maps to, whether it repeats, and the codec for its text:

- ``str``, ``int`` and ``float`` are handled here
- any class with a ``decode(text)`` classmethod and an ``encode()`` method
  (the CAP code lists, CAPDateTime, DelimitedList) converts itself
- a nested dataclass is walked recursively

The same bindings drive XML in both directions and the JSON mirror.
"""

import logging
import math
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field, fields, is_dataclass
from functools import lru_cache
from typing import Any, Dict, List, Optional, Tuple

from .constants import DECIMAL_PATTERN, INTEGER_PATTERN, XML_WHITESPACE
from .errors import EncodeError, FieldDecodeError

logger = logging.getLogger(__name__)

BINDING = 'cap_binding'

_NUMBERS = (int, float)


@dataclass(frozen=True)
class Binding:
    """How one dataclass field maps onto the document."""
    name: str
    codec: Any = str
    repeated: bool = False
    attribute: bool = False
    path: Tuple[str, ...] = ()      # wrapper elements between parent and element
    namespace: Optional[str] = None  # declared on the element when encoding
    json_name: Optional[str] = None

    @property
    def key(self) -> str:
        """JSON object key."""
        return self.json_name or self.name

    @property
    def entry(self) -> str:
        """Tag of the direct child that leads to this field."""
        return self.path[0] if self.path else self.name

    @property
    def nested(self) -> bool:
        # CAPDateTime is a dataclass too, but converts itself from text
        return is_dataclass(self.codec) and not hasattr(self.codec, 'decode')


def xml_field(name: str, *, codec: Any = str, repeated: bool = False,
              attribute: bool = False, path: Tuple[str, ...] = (),
              namespace: Optional[str] = None, json_name: Optional[str] = None):
    """Declare a dataclass field bound to a CAP element or attribute."""
    binding = Binding(name, codec, repeated, attribute, tuple(path), namespace, json_name)
    if repeated:
        return field(default_factory=list, metadata={BINDING: binding})
    return field(default=None, metadata={BINDING: binding})


@lru_cache(maxsize=None)
def bindings(cls) -> Tuple[Tuple[str, Binding], ...]:
    """(attribute name, binding) pairs of a record class in declaration order."""
    return tuple(
        (f.name, f.metadata[BINDING])
        for f in fields(cls)
        if BINDING in f.metadata
    )


def local_name(tag: str) -> str:
    """Strip the '{namespace}' prefix ElementTree puts on tags."""
    return tag.rsplit('}', 1)[-1] if tag.startswith('{') else tag


# -- scalar values ----------------------------------------------------------

def _decode_text(binding: Binding, text: str) -> Any:
    codec = binding.codec
    if codec is str:
        return text
    if codec in _NUMBERS:
        trimmed = text.strip(XML_WHITESPACE)
        pattern = INTEGER_PATTERN if codec is int else DECIMAL_PATTERN
        if not pattern.fullmatch(trimmed):
            raise FieldDecodeError(binding.name, text)
        value = codec(trimmed)
        if codec is float and not math.isfinite(value):
            raise FieldDecodeError(binding.name, text)
        return value
    return codec.decode(text)


def _encode_text(binding: Binding, value: Any) -> str:
    codec = binding.codec
    if codec is str:
        if not isinstance(value, str):
            raise EncodeError(f"{binding.name} expects str, got {type(value).__name__}")
        return value
    if codec in _NUMBERS:
        return _format_number(binding, value)
    if not isinstance(value, codec):
        raise EncodeError(
            f"{binding.name} expects {codec.__name__}, got {type(value).__name__}"
        )
    return value.encode()


def _check_number(binding: Binding, value: Any) -> Any:
    allowed = (int,) if binding.codec is int else _NUMBERS
    if isinstance(value, bool) or not isinstance(value, allowed):
        raise EncodeError(
            f"{binding.name} expects {binding.codec.__name__}, got {type(value).__name__}"
        )
    if isinstance(value, float) and not math.isfinite(value):
        raise EncodeError(f"{binding.name} must be finite, got {value!r}")
    return value


def _format_number(binding: Binding, value: Any) -> str:
    value = _check_number(binding, value)
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


# -- XML --------------------------------------------------------------------

def _own_text(elem: ET.Element) -> str:
    # character data directly inside the element, child elements skipped
    return (elem.text or '') + ''.join(child.tail or '' for child in elem)


def _descend(elem: ET.Element, path: Tuple[str, ...]) -> List[ET.Element]:
    nodes = [elem]
    for name in path:
        nodes = [c for n in nodes for c in n if local_name(c.tag) == name]
    return nodes


def _decode_node(binding: Binding, node: ET.Element) -> Any:
    if binding.nested:
        return from_element(binding.codec, node)
    return _decode_text(binding, _own_text(node))


def from_element(cls, elem: ET.Element):
    """Build a record of type ``cls`` from an element."""
    values: Dict[str, Any] = {}
    by_entry: Dict[str, Tuple[str, Binding]] = {}

    for attr, binding in bindings(cls):
        if binding.attribute:
            raw = elem.get(binding.name)
            if raw is not None:
                values[attr] = _decode_text(binding, raw)
        else:
            by_entry[binding.entry] = (attr, binding)

    for child in elem:
        if not isinstance(child.tag, str):
            continue
        tag = local_name(child.tag)
        if tag not in by_entry:
            logger.debug("Skipping unknown element <%s> in <%s>", tag, local_name(elem.tag))
            continue

        attr, binding = by_entry[tag]
        targets = _descend(child, binding.path[1:] + (binding.name,)) if binding.path else [child]
        for node in targets:
            value = _decode_node(binding, node)
            if binding.repeated:
                values.setdefault(attr, []).append(value)
            else:
                values[attr] = value

    return cls(**values)


def _wrapper(elem: ET.Element, path: Tuple[str, ...]) -> ET.Element:
    parent = elem
    for name in path:
        existing = parent.find(name)
        parent = existing if existing is not None else ET.SubElement(parent, name)
    return parent


def _items(binding: Binding, value: Any) -> List[Any]:
    if not binding.repeated:
        return [value]
    if not isinstance(value, (list, tuple)):
        raise EncodeError(f"{binding.name} expects a list, got {type(value).__name__}")
    return list(value)


def to_element(record, tag: str, namespace: Optional[str] = None) -> ET.Element:
    """Render a record as an element named ``tag``."""
    elem = ET.Element(tag)
    if namespace:
        elem.set('xmlns', namespace)

    for attr, binding in bindings(type(record)):
        value = getattr(record, attr)
        if value is None:
            continue
        if binding.attribute:
            elem.set(binding.name, _encode_text(binding, value))
            continue

        items = _items(binding, value)
        if not items:
            continue
        parent = _wrapper(elem, binding.path)
        for item in items:
            if binding.nested:
                if not isinstance(item, binding.codec):
                    raise EncodeError(
                        f"{binding.name} expects {binding.codec.__name__}, "
                        f"got {type(item).__name__}"
                    )
                parent.append(to_element(item, binding.name, binding.namespace))
            else:
                ET.SubElement(parent, binding.name).text = _encode_text(binding, item)

    return elem


# -- JSON -------------------------------------------------------------------

def _dump(binding: Binding, value: Any) -> Any:
    if binding.nested:
        if not isinstance(value, binding.codec):
            raise EncodeError(
                f"{binding.key} expects {binding.codec.__name__}, got {type(value).__name__}"
            )
        return to_dict(value)
    if binding.codec in _NUMBERS:
        return _check_number(binding, value)
    return _encode_text(binding, value)


def to_dict(record) -> Dict[str, Any]:
    """JSON-ready dict of a record; None and empty lists are left out."""
    data = {}
    for attr, binding in bindings(type(record)):
        value = getattr(record, attr)
        if value is None:
            continue
        if binding.repeated:
            items = _items(binding, value)
            if items:
                data[binding.key] = [_dump(binding, item) for item in items]
        else:
            data[binding.key] = _dump(binding, value)
    return data


def _load(binding: Binding, raw: Any) -> Any:
    codec = binding.codec
    if binding.nested:
        return from_dict(codec, raw)
    if codec in _NUMBERS:
        allowed = (int,) if codec is int else _NUMBERS
        if isinstance(raw, bool) or not isinstance(raw, allowed) or (
                isinstance(raw, float) and not math.isfinite(raw)):
            raise FieldDecodeError(binding.key, raw)
        return codec(raw)
    if not isinstance(raw, str):
        raise FieldDecodeError(binding.key, raw)
    return _decode_text(binding, raw)


def from_dict(cls, data: Dict[str, Any]):
    """Build a record of type ``cls`` from its JSON-shaped dict."""
    if not isinstance(data, dict):
        raise FieldDecodeError(cls.__name__, data)

    values: Dict[str, Any] = {}
    known = set()
    for attr, binding in bindings(cls):
        known.add(binding.key)
        raw = data.get(binding.key)
        if raw is None:
            continue
        if binding.repeated:
            if not isinstance(raw, list):
                raise FieldDecodeError(binding.key, raw)
            values[attr] = [_load(binding, item) for item in raw]
        else:
            values[attr] = _load(binding, raw)

    for key in data.keys() - known:
        logger.debug("Skipping unknown key %r in %s", key, cls.__name__)

    return cls(**values)
