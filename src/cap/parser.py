"""
CAP v1.2 XML Parser

Parses Common Alerting Protocol XML per OASIS CAP v1.2 specification,
including the XML signature carried by CAP-CP / NAADS alerts.
Reference: http://docs.oasis-open.org/emergency/cap/v1.2/CAP-v1.2.html
"""

import json
import logging
import xml.etree.ElementTree as ET
from typing import Union

from .constants import ALERT_TAG, CAP_NS
from .errors import MalformedDocument
from .models import CAPAlert
from .schema import from_element

logger = logging.getLogger(__name__)


def parse_cap(data: Union[bytes, str]) -> CAPAlert:
    """
    Parse CAP XML into a CAPAlert object.

    Elements the schema does not know are skipped. Missing REQUIRED
    elements are not an error; their fields are left as None.

    Args:
        data: CAP XML document, as bytes or text

    Returns:
        CAPAlert object

    Raises:
        MalformedDocument: If the XML is not well-formed or is not a CAP 1.2 alert
        InvalidEnumValue: If a code element holds a token outside its vocabulary
        InvalidDateTime: If a timestamp is not in CAP dateTime format
        FieldDecodeError: If a numeric element is not a number
    """
    try:
        root = ET.fromstring(data)
    except ET.ParseError as e:
        raise MalformedDocument(f"Invalid XML: {e}") from e

    expected = f'{{{CAP_NS}}}{ALERT_TAG}'
    if root.tag != expected:
        raise MalformedDocument(f"Root element must be {expected}, got {root.tag}")

    alert = from_element(CAPAlert, root)
    logger.debug("Parsed CAP alert %s with %d info block(s)", alert.identifier, len(alert.info))
    return alert


def parse_cap_json(data: Union[bytes, str]) -> CAPAlert:
    """
    Parse the JSON form of a CAP alert (see encode_cap_json).

    Raises:
        MalformedDocument: If the input is not valid JSON
    """
    try:
        obj = json.loads(data)
    except ValueError as e:
        raise MalformedDocument(f"Invalid JSON: {e}") from e
    if not isinstance(obj, dict):
        raise MalformedDocument(f"Alert must be a JSON object, got {type(obj).__name__}")

    alert = CAPAlert.from_dict(obj)
    logger.debug("Parsed CAP alert %s from JSON", alert.identifier)
    return alert
