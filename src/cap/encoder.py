"""
CAP v1.2 XML and JSON encoder

Renders a CAPAlert back to the wire. Elements are written in schema order
and empty fields are left out.
"""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Optional

from .constants import ALERT_TAG, CAP_NS
from .errors import EncodeError
from .models import CAPAlert
from .schema import to_element

logger = logging.getLogger(__name__)


def encode_cap(alert: CAPAlert, pretty: bool = False) -> bytes:
    """
    Convert a CAPAlert to CAP XML.

    Args:
        alert: CAPAlert object
        pretty: Indent the output

    Returns:
        UTF-8 encoded XML document

    Raises:
        EncodeError: If a field holds a value of the wrong type
    """
    if not isinstance(alert, CAPAlert):
        raise EncodeError(f"Expected CAPAlert, got {type(alert).__name__}")

    root = to_element(alert, ALERT_TAG, CAP_NS)
    if pretty:
        ET.indent(root)

    logger.debug("Encoded CAP alert %s", alert.identifier)
    return ET.tostring(root, encoding='utf-8', xml_declaration=True)


def encode_cap_json(alert: CAPAlert, indent: Optional[int] = None) -> str:
    """
    Convert a CAPAlert to JSON.

    The object mirrors the XML tree: keys are CAP element names, codes,
    timestamps and lists are their wire strings.
    """
    if not isinstance(alert, CAPAlert):
        raise EncodeError(f"Expected CAPAlert, got {type(alert).__name__}")
    return json.dumps(alert.to_dict(), indent=indent, ensure_ascii=False)
