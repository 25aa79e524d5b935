"""
CAP (Common Alerting Protocol) codec

Implements OASIS CAP v1.2 standard for alert interchange, including the
Canadian Profile (CAP-CP) signature block. Decodes CAP XML into typed
records and encodes them back to XML or JSON.
"""

from .codes import (
    CAPCode, CAPStatus, CAPMsgType, CAPScope,
    CAPCategory, CAPUrgency, CAPSeverity, CAPCertainty, CAPResponseType
)
from .encoder import encode_cap, encode_cap_json
from .errors import (
    CAPError, CAPDecodeError, MalformedDocument, InvalidEnumValue,
    InvalidDateTime, FieldDecodeError, EncodeError
)
from .lists import DelimitedList
from .models import (
    CAPAlert, CAPInfo, CAPArea, CAPResource, CAPKeyValue,
    CAPSignature, CAPSignedInfo, CAPReference, CAPAlgorithm,
    CAPSignatureProperty, CAPXCValue
)
from .parser import parse_cap, parse_cap_json
from .timestamps import CAPDateTime

__all__ = [
    'CAPCode', 'CAPStatus', 'CAPMsgType', 'CAPScope',
    'CAPCategory', 'CAPUrgency', 'CAPSeverity', 'CAPCertainty', 'CAPResponseType',
    'CAPDateTime', 'DelimitedList',
    'CAPAlert', 'CAPInfo', 'CAPArea', 'CAPResource', 'CAPKeyValue',
    'CAPSignature', 'CAPSignedInfo', 'CAPReference', 'CAPAlgorithm',
    'CAPSignatureProperty', 'CAPXCValue',
    'parse_cap', 'parse_cap_json', 'encode_cap', 'encode_cap_json',
    'CAPError', 'CAPDecodeError', 'MalformedDocument', 'InvalidEnumValue',
    'InvalidDateTime', 'FieldDecodeError', 'EncodeError',
]
