"""
CAP v1.2 protocol constants
http://docs.oasis-open.org/emergency/cap/v1.2/CAP-v1.2.html
"""

import re

# Namespaces
CAP_NS = 'urn:oasis:names:tc:emergency:cap:1.2'
XMLDSIG_NS = 'http://www.w3.org/2000/09/xmldsig#'  # CAP-CP / NAADS signatures

# Root element
ALERT_TAG = 'alert'

# dateTime per CAP 1.2 section 3.3.2: YYYY-MM-DDThh:mm:ss+hh:mm, no fractions, no Z
TIMESTAMP_PATTERN = re.compile(
    r'([0-9]{4})-([0-9]{2})-([0-9]{2})'   # date
    r'T([0-9]{2}):([0-9]{2}):([0-9]{2})'   # time
    r'([+-])([0-9]{2}):([0-9]{2})'        # offset
)  # use with fullmatch
UTC_OFFSET = '-00:00'  # UTC is written with a minus sign on the wire

# Group listings (references, polygon) are space delimited
LIST_DELIMITER = ' '

# Assumed when an info block has no <language>
DEFAULT_LANGUAGE = 'en-US'

# Numeric element text (size, altitude, ceiling), ASCII digits only
INTEGER_PATTERN = re.compile(r'[+-]?[0-9]+')
DECIMAL_PATTERN = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')
XML_WHITESPACE = ' \t\r\n'
