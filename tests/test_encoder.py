"""
Tests for CAP XML and JSON encoding
"""

import json
import pytest
import sys
import os
import xml.etree.ElementTree as ET

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from cap import (
    parse_cap, parse_cap_json, encode_cap, encode_cap_json,
    CAPAlert, CAPInfo, CAPArea, CAPKeyValue, CAPDateTime, DelimitedList,
    CAPStatus, CAPMsgType, CAPScope, CAPCategory,
    EncodeError, MalformedDocument, InvalidEnumValue, InvalidDateTime, FieldDecodeError
)

FIXTURES = os.path.join(os.path.dirname(__file__), 'fixtures')
CAP = '{urn:oasis:names:tc:emergency:cap:1.2}'
DSIG = '{http://www.w3.org/2000/09/xmldsig#}'

ALL_FIXTURES = [
    'oasis_homeland_alert.xml',
    'oasis_thunderstorm_warning.xml',
    'oasis_earthquake_report.xml',
    'oasis_amber_alert.xml',
    'naads_wind_warning.xml',
]


def load_alert(name: str) -> CAPAlert:
    with open(os.path.join(FIXTURES, name), 'rb') as f:
        return parse_cap(f.read())


def minimal_alert() -> CAPAlert:
    return CAPAlert(
        identifier='id-1',
        sender='sender@example.org',
        sent=CAPDateTime.decode('2020-01-01T00:00:00+00:00'),
        status=CAPStatus.TEST,
        msg_type=CAPMsgType.ALERT,
        scope=CAPScope.PUBLIC,
    )


class TestXMLEncode:
    """Tests for encode_cap."""

    def test_minimal_alert(self):
        """Test the exact output for a header-only alert."""
        assert encode_cap(minimal_alert()) == (
            b"<?xml version='1.0' encoding='utf-8'?>\n"
            b'<alert xmlns="urn:oasis:names:tc:emergency:cap:1.2">'
            b'<identifier>id-1</identifier>'
            b'<sender>sender@example.org</sender>'
            b'<sent>2020-01-01T00:00:00-00:00</sent>'
            b'<status>Test</status>'
            b'<msgType>Alert</msgType>'
            b'<scope>Public</scope>'
            b'</alert>'
        )

    def test_timestamp_offset_kept(self):
        """Test timestamps are written as text with their own offset."""
        alert = CAPAlert(
            identifier='x',
            sent=CAPDateTime.decode('2003-06-17T14:57:00-07:00'),
            info=[CAPInfo(onset=CAPDateTime.decode('2003-06-17T15:00:00+05:30'))],
        )
        output = encode_cap(alert)
        assert b'<sent>2003-06-17T14:57:00-07:00</sent>' in output
        assert b'<onset>2003-06-17T15:00:00+05:30</onset>' in output
        assert parse_cap(output) == alert

    def test_element_order(self):
        """Test header elements follow schema order regardless of what is set."""
        alert = load_alert('oasis_amber_alert.xml')
        root = ET.fromstring(encode_cap(alert))
        tags = [child.tag.replace(CAP, '') for child in root]
        assert tags == [
            'identifier', 'sender', 'sent', 'status', 'msgType',
            'source', 'scope', 'info', 'info'
        ]

    def test_empty_fields_omitted(self):
        """Test None fields and empty lists are not written."""
        output = encode_cap(load_alert('oasis_homeland_alert.xml'))
        assert b'<source>' not in output
        assert b'<responseType>' not in output
        assert b'<language>' not in output

    def test_area_fields(self):
        """Test polygon, geocode and numbers inside an area."""
        alert = minimal_alert()
        alert.info.append(CAPInfo(
            categories=[CAPCategory.MET],
            areas=[CAPArea(
                area_desc='Somewhere',
                polygon=DelimitedList(['1,2', '3,4', '1,2']),
                geocodes=[CAPKeyValue('SAME', '006109')],
                altitude=100.0,
                ceiling=250.5,
            )],
        ))
        output = encode_cap(alert)
        assert b'<polygon>1,2 3,4 1,2</polygon>' in output
        assert b'<geocode><valueName>SAME</valueName><value>006109</value></geocode>' in output
        assert b'<altitude>100</altitude><ceiling>250.5</ceiling>' in output

    def test_signature_namespace(self):
        """Test the signature is written in the XML-DSig namespace."""
        root = ET.fromstring(encode_cap(load_alert('naads_wind_warning.xml')))
        sig = root.find(f'{DSIG}Signature')
        assert sig is not None
        assert sig.get('Id') == 'naads-sig-1'
        cert = sig.find(f'{DSIG}KeyInfo/{DSIG}X509Data/{DSIG}X509Certificate')
        assert cert.text == 'MIIDdzCCAl+gAwIBAgIEbogus0AwDQYJKoZIhvcNAQELBQAw'

    def test_signature_wrappers_shared(self):
        """Test repeated properties share one Object/SignatureProperties."""
        root = ET.fromstring(encode_cap(load_alert('naads_wind_warning.xml')))
        sig = root.find(f'{DSIG}Signature')
        wrappers = sig.findall(f'{DSIG}Object/{DSIG}SignatureProperties')
        assert len(wrappers) == 1
        assert len(wrappers[0].findall(f'{DSIG}SignatureProperty')) == 2

    def test_pretty(self):
        """Test indented output still decodes to the same alert."""
        alert = load_alert('naads_wind_warning.xml')
        output = encode_cap(alert, pretty=True)
        assert b'\n  <identifier>' in output
        assert parse_cap(output) == alert

    @pytest.mark.parametrize('name', ALL_FIXTURES)
    def test_fixture_roundtrip(self, name):
        """Test decode(encode(alert)) == alert for each fixture."""
        alert = load_alert(name)
        assert parse_cap(encode_cap(alert)) == alert


class TestXMLEncodeErrors:
    """Tests for records that cannot be written."""

    def test_raw_string_for_code(self):
        """Test a plain string where a code is expected."""
        alert = minimal_alert()
        alert.status = 'Actual'
        with pytest.raises(EncodeError):
            encode_cap(alert)

    def test_raw_string_in_code_list(self):
        """Test a plain string inside a repeated code field."""
        alert = minimal_alert()
        alert.info.append(CAPInfo(categories=['Met']))
        with pytest.raises(EncodeError):
            encode_cap(alert)

    def test_wrong_nested_record(self):
        """Test a record of the wrong type in a nested list."""
        alert = minimal_alert()
        alert.info.append(CAPArea(area_desc='x'))
        with pytest.raises(EncodeError):
            encode_cap(alert)

    def test_non_numeric_altitude(self):
        """Test a string where a number is expected."""
        alert = minimal_alert()
        alert.info.append(CAPInfo(areas=[CAPArea(altitude='high')]))
        with pytest.raises(EncodeError):
            encode_cap(alert)

    def test_infinite_altitude(self):
        """Test a non-finite number is refused rather than written as inf."""
        alert = minimal_alert()
        alert.info.append(CAPInfo(areas=[CAPArea(altitude=float('inf'))]))
        with pytest.raises(EncodeError):
            encode_cap(alert)
        with pytest.raises(EncodeError):
            encode_cap_json(alert)

    def test_not_an_alert(self):
        """Test encoding something other than a CAPAlert."""
        with pytest.raises(EncodeError):
            encode_cap({'identifier': 'x'})


class TestJSON:
    """Tests for the JSON mirror."""

    def test_shape(self):
        """Test keys are CAP element names and values are wire strings."""
        data = json.loads(encode_cap_json(load_alert('oasis_homeland_alert.xml')))
        assert data['identifier'] == '43b080713727'
        assert data['sent'] == '2003-04-02T14:39:01-05:00'
        assert data['status'] == 'Actual'
        assert data['msgType'] == 'Alert'
        assert 'source' not in data

        info = data['info'][0]
        assert info['category'] == ['Security']
        assert info['urgency'] == 'Immediate'
        assert info['parameter'] == [{'valueName': 'HSAS', 'value': 'ORANGE'}]
        assert info['resource'][0]['mimeType'] == 'image/gif'

    def test_lists_render_as_strings(self):
        """Test polygon and references are joined strings."""
        data = json.loads(encode_cap_json(load_alert('naads_wind_warning.xml')))
        assert data['references'].count(' ') == 2
        assert data['info'][0]['area'][0]['polygon'].startswith('47.1947,-61.7255 ')

    def test_signature_keys(self):
        """Test the signature sub-tree keys."""
        data = load_alert('naads_wind_warning.xml').to_dict()
        sig = data['signature'][0]
        assert sig['id'] == 'naads-sig-1'
        assert sig['signedInfo']['reference']['transform']['algorithm'] == (
            'http://www.w3.org/2000/09/xmldsig#enveloped-signature'
        )
        assert sig['signatureProperty'][1]['value'] == {'xc': 'NAADS'}

    def test_non_ascii_kept(self):
        """Test JSON output is not ASCII-escaped."""
        output = encode_cap_json(load_alert('oasis_amber_alert.xml'))
        assert 'Abducción de Niño' in output

    def test_timestamp_is_string(self):
        """Test a timestamp is its wire string in the dict."""
        alert = CAPAlert(sent=CAPDateTime.decode('2003-06-17T14:57:00-07:00'))
        assert alert.to_dict() == {'sent': '2003-06-17T14:57:00-07:00'}
        assert parse_cap_json(encode_cap_json(alert)).sent == alert.sent

    def test_numbers_stay_numbers(self):
        """Test numeric fields are JSON numbers."""
        alert = minimal_alert()
        alert.info.append(CAPInfo(areas=[CAPArea(altitude=12.5)]))
        data = alert.to_dict()
        assert data['info'][0]['area'][0]['altitude'] == 12.5

    @pytest.mark.parametrize('name', ALL_FIXTURES)
    def test_fixture_roundtrip(self, name):
        """Test JSON decode(encode(alert)) == alert for each fixture."""
        alert = load_alert(name)
        assert parse_cap_json(encode_cap_json(alert, indent=2)) == alert

    def test_from_dict(self):
        """Test building an alert from a dict."""
        alert = CAPAlert.from_dict({
            'identifier': 'x',
            'scope': 'Private',
            'addresses': 'ops',
            'info': [{'resource': [{'size': 10}]}],
        })
        assert alert.scope is CAPScope.PRIVATE
        assert alert.info[0].resources[0].size == 10


class TestJSONErrors:
    """Tests for JSON that must not decode."""

    def test_not_json(self):
        """Test invalid JSON."""
        with pytest.raises(MalformedDocument):
            parse_cap_json('{identifier')

    def test_not_an_object(self):
        """Test a JSON array."""
        with pytest.raises(MalformedDocument):
            parse_cap_json('[]')

    def test_bogus_status(self):
        """Test an unknown status."""
        with pytest.raises(InvalidEnumValue) as exc:
            parse_cap_json('{"status": "Bogus"}')
        assert exc.value.type_name == 'Status'

    def test_bad_datetime(self):
        """Test a timestamp in another format."""
        with pytest.raises(InvalidDateTime):
            parse_cap_json('{"sent": "2003-04-02T14:39:01Z"}')

    def test_string_altitude(self):
        """Test a string where a number is expected."""
        with pytest.raises(FieldDecodeError):
            parse_cap_json('{"info": [{"area": [{"altitude": "high"}]}]}')

    def test_non_finite_altitude(self):
        """Test Infinity and NaN are not accepted as numbers."""
        with pytest.raises(FieldDecodeError):
            parse_cap_json('{"info": [{"area": [{"altitude": Infinity}]}]}')
        with pytest.raises(FieldDecodeError):
            parse_cap_json('{"info": [{"area": [{"ceiling": NaN}]}]}')

    def test_repeated_field_not_a_list(self):
        """Test a single object where a list is expected."""
        with pytest.raises(FieldDecodeError):
            parse_cap_json('{"info": {"event": "x"}}')
