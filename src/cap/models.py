"""
CAP v1.2 record types.

Parses into and renders from these dataclasses. Field order follows the
element order of the OASIS CAP v1.2 schema; REQUIRED elements are documented
but not enforced, so test and draft messages missing them still decode.
Reference: http://docs.oasis-open.org/emergency/cap/v1.2/CAP-v1.2.html
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .codes import (
    CAPStatus, CAPMsgType, CAPScope,
    CAPCategory, CAPUrgency, CAPSeverity, CAPCertainty, CAPResponseType
)
from .constants import DEFAULT_LANGUAGE, XMLDSIG_NS
from .lists import DelimitedList
from .schema import xml_field, to_dict, from_dict
from .timestamps import CAPDateTime


@dataclass
class CAPKeyValue:
    """valueName/value pair used by parameter, eventCode and geocode."""
    value_name: Optional[str] = xml_field('valueName')
    value: Optional[str] = xml_field('value')


@dataclass
class CAPResource:
    """Digital asset (image, audio file...) supplementing an info block."""
    resource_desc: Optional[str] = xml_field('resourceDesc')  # REQUIRED
    mime_type: Optional[str] = xml_field('mimeType')          # REQUIRED
    size: Optional[int] = xml_field('size', codec=int)
    uri: Optional[str] = xml_field('uri')
    deref_uri: Optional[str] = xml_field('derefUri')          # base64 content
    digest: Optional[str] = xml_field('digest')               # SHA-1 of the resource


@dataclass
class CAPArea:
    """Geographic area affected by alert."""
    area_desc: Optional[str] = xml_field('areaDesc')  # REQUIRED
    polygon: Optional[DelimitedList] = xml_field('polygon', codec=DelimitedList)
    circles: List[str] = xml_field('circle', repeated=True)
    geocodes: List[CAPKeyValue] = xml_field('geocode', codec=CAPKeyValue, repeated=True)
    altitude: Optional[float] = xml_field('altitude', codec=float)
    ceiling: Optional[float] = xml_field('ceiling', codec=float)  # only with altitude

    def geocode_values(self, value_name: str) -> List[str]:
        """Values of every geocode with the given valueName, in order."""
        return [g.value for g in self.geocodes if g.value_name == value_name]


@dataclass
class CAPInfo:
    """Alert information block (language-specific)."""
    language: Optional[str] = xml_field('language')
    categories: List[CAPCategory] = xml_field('category', codec=CAPCategory, repeated=True)
    event: Optional[str] = xml_field('event')
    response_types: List[CAPResponseType] = xml_field(
        'responseType', codec=CAPResponseType, repeated=True)
    urgency: Optional[CAPUrgency] = xml_field('urgency', codec=CAPUrgency)
    severity: Optional[CAPSeverity] = xml_field('severity', codec=CAPSeverity)
    certainty: Optional[CAPCertainty] = xml_field('certainty', codec=CAPCertainty)
    audience: Optional[str] = xml_field('audience')
    event_codes: List[CAPKeyValue] = xml_field('eventCode', codec=CAPKeyValue, repeated=True)
    effective: Optional[CAPDateTime] = xml_field('effective', codec=CAPDateTime)
    onset: Optional[CAPDateTime] = xml_field('onset', codec=CAPDateTime)
    expires: Optional[CAPDateTime] = xml_field('expires', codec=CAPDateTime)
    sender_name: Optional[str] = xml_field('senderName')
    headline: Optional[str] = xml_field('headline')
    description: Optional[str] = xml_field('description')
    instruction: Optional[str] = xml_field('instruction')
    web: Optional[str] = xml_field('web')
    contact: Optional[str] = xml_field('contact')
    parameters: List[CAPKeyValue] = xml_field('parameter', codec=CAPKeyValue, repeated=True)
    resources: List[CAPResource] = xml_field('resource', codec=CAPResource, repeated=True)
    areas: List[CAPArea] = xml_field('area', codec=CAPArea, repeated=True)

    @property
    def language_or_default(self) -> str:
        """Language of the block; CAP implies en-US when none is given."""
        return self.language or DEFAULT_LANGUAGE


# -- XML digital signature (CAP-CP, NAADS) -----------------------------------
# Captured as sent. Nothing here is canonicalized or verified.

@dataclass
class CAPAlgorithm:
    algorithm: Optional[str] = xml_field('Algorithm', attribute=True, json_name='algorithm')


@dataclass
class CAPXCValue:
    xc: Optional[str] = xml_field('xc', attribute=True)


@dataclass
class CAPReference:
    """Signed resource and the transforms applied before digesting it."""
    uri: Optional[str] = xml_field('URI', attribute=True, json_name='uri')
    transform: Optional[CAPAlgorithm] = xml_field(
        'Transform', codec=CAPAlgorithm, path=('Transforms',), json_name='transform')
    digest_method: Optional[CAPAlgorithm] = xml_field(
        'DigestMethod', codec=CAPAlgorithm, json_name='digestMethod')
    digest_value: Optional[str] = xml_field('DigestValue', json_name='digestValue')


@dataclass
class CAPSignedInfo:
    canonicalization_method: Optional[CAPAlgorithm] = xml_field(
        'CanonicalizationMethod', codec=CAPAlgorithm, json_name='canonicalizationMethod')
    signature_method: Optional[CAPAlgorithm] = xml_field(
        'SignatureMethod', codec=CAPAlgorithm, json_name='signatureMethod')
    reference: Optional[CAPReference] = xml_field(
        'Reference', codec=CAPReference, json_name='reference')


@dataclass
class CAPSignatureProperty:
    id: Optional[str] = xml_field('Id', attribute=True, json_name='id')
    target: Optional[str] = xml_field('Target', attribute=True, json_name='target')
    value: Optional[CAPXCValue] = xml_field('value', codec=CAPXCValue)


@dataclass
class CAPSignature:
    """Enveloped XML-DSig signature as carried by CAP-CP alerts."""
    id: Optional[str] = xml_field('Id', attribute=True, json_name='id')
    signed_info: Optional[CAPSignedInfo] = xml_field(
        'SignedInfo', codec=CAPSignedInfo, json_name='signedInfo')
    signature_value: Optional[str] = xml_field('SignatureValue', json_name='signatureValue')
    x509_certificate: Optional[str] = xml_field(
        'X509Certificate', path=('KeyInfo', 'X509Data'), json_name='x509Certificate')
    signature_properties: List[CAPSignatureProperty] = xml_field(
        'SignatureProperty', codec=CAPSignatureProperty, repeated=True,
        path=('Object', 'SignatureProperties'), json_name='signatureProperty')


@dataclass
class CAPAlert:
    """
    Represents a parsed CAP alert message.

    A CAP alert contains:
    - Header elements (identifier, sender, status, etc.)
    - Zero or more info blocks (language-specific content)
    - Each info block may have multiple resources and area definitions
    - CAP-CP alerts may also carry XML digital signatures
    """
    identifier: Optional[str] = xml_field('identifier')          # REQUIRED
    sender: Optional[str] = xml_field('sender')                  # REQUIRED
    sent: Optional[CAPDateTime] = xml_field('sent', codec=CAPDateTime)  # REQUIRED
    status: Optional[CAPStatus] = xml_field('status', codec=CAPStatus)  # REQUIRED
    msg_type: Optional[CAPMsgType] = xml_field('msgType', codec=CAPMsgType)  # REQUIRED
    source: Optional[str] = xml_field('source')
    scope: Optional[CAPScope] = xml_field('scope', codec=CAPScope)  # REQUIRED
    restriction: Optional[str] = xml_field('restriction')        # when scope is Restricted
    addresses: Optional[str] = xml_field('addresses')            # when scope is Private
    codes: List[str] = xml_field('code', repeated=True)
    note: Optional[str] = xml_field('note')
    references: Optional[DelimitedList] = xml_field('references', codec=DelimitedList)
    incidents: Optional[str] = xml_field('incidents')
    info: List[CAPInfo] = xml_field('info', codec=CAPInfo, repeated=True)
    signatures: List[CAPSignature] = xml_field(
        'Signature', codec=CAPSignature, repeated=True,
        namespace=XMLDSIG_NS, json_name='signature')

    @property
    def is_actual(self) -> bool:
        return self.status == CAPStatus.ACTUAL

    @property
    def primary_info(self) -> Optional[CAPInfo]:
        """Get primary (first) info block."""
        return self.info[0] if self.info else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the JSON shape of the alert."""
        return to_dict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CAPAlert':
        """Create from the JSON shape of an alert."""
        return from_dict(cls, data)
