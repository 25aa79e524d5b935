"""
CAP codec errors.

Every error aborts the whole decode or encode call. All of them are
ValueErrors so callers can catch bad input the usual way.
"""


class CAPError(ValueError):
    """Base class for all CAP codec errors."""


class CAPDecodeError(CAPError):
    """A document could not be decoded."""


class MalformedDocument(CAPDecodeError):
    """Input is not well-formed markup, or its root is not a CAP 1.2 alert."""


class InvalidEnumValue(CAPDecodeError):
    """Token is not part of a closed CAP vocabulary."""

    def __init__(self, type_name: str, value: str):
        self.type_name = type_name
        self.value = value
        super().__init__(f"illegal value {value!r} for {type_name} code")


class InvalidDateTime(CAPDecodeError):
    """Timestamp does not match YYYY-MM-DDThh:mm:ss+hh:mm."""

    def __init__(self, value: str, reason: str = 'does not match CAP dateTime format'):
        self.value = value
        super().__init__(f"invalid dateTime {value!r}: {reason}")


class FieldDecodeError(CAPDecodeError):
    """Element text could not be converted to the field's declared type."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"cannot decode {field}: {value!r}")


class EncodeError(CAPError):
    """A record holds a value that cannot be written to the wire."""
