"""
CAP v1.2 code lists.

Each vocabulary is closed: a member's value is its exact wire token and its
``code`` is the position it is declared in. Lookups never fold case or trim.
"""

from enum import Enum
from functools import lru_cache
from typing import Tuple

from .errors import InvalidEnumValue


class CAPCode(Enum):
    """Base for the CAP enumerated code types."""

    def __new__(cls, token: str):
        obj = object.__new__(cls)
        obj._value_ = token
        obj.code = len(cls.__members__)
        return obj

    @classmethod
    def vocabulary(cls) -> str:
        """Name of the code list as used by CAP, e.g. 'Status'."""
        name = cls.__name__
        return name[3:] if name.startswith('CAP') else name

    @classmethod
    def decode(cls, text: str) -> 'CAPCode':
        try:
            return cls(text)
        except ValueError:
            raise InvalidEnumValue(cls.vocabulary(), text) from None

    @classmethod
    def from_code(cls, code: int) -> 'CAPCode':
        members = _members(cls)
        if isinstance(code, bool) or not isinstance(code, int):
            raise ValueError(f"{code!r} is not a valid {cls.vocabulary()} code")
        if not 0 <= code < len(members):
            raise ValueError(f"{code} is not a valid {cls.vocabulary()} code")
        return members[code]

    def encode(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


@lru_cache(maxsize=None)
def _members(cls) -> Tuple[CAPCode, ...]:
    return tuple(cls)


class CAPStatus(CAPCode):
    ACTUAL = 'Actual'      # actionable by all targeted recipients
    EXERCISE = 'Exercise'  # only designated exercise participants
    SYSTEM = 'System'      # alert network internal functions
    TEST = 'Test'          # technical testing only
    DRAFT = 'Draft'        # preliminary template, not actionable


class CAPMsgType(CAPCode):
    ALERT = 'Alert'
    UPDATE = 'Update'
    CANCEL = 'Cancel'
    ACK = 'Ack'
    ERROR = 'Error'


class CAPScope(CAPCode):
    PUBLIC = 'Public'
    RESTRICTED = 'Restricted'
    PRIVATE = 'Private'


class CAPCategory(CAPCode):
    GEO = 'Geo'
    MET = 'Met'
    SAFETY = 'Safety'
    SECURITY = 'Security'
    RESCUE = 'Rescue'
    FIRE = 'Fire'
    HEALTH = 'Health'
    ENV = 'Env'
    TRANSPORT = 'Transport'
    INFRA = 'Infra'
    CBRNE = 'CBRNE'
    OTHER = 'Other'


class CAPUrgency(CAPCode):
    IMMEDIATE = 'Immediate'
    EXPECTED = 'Expected'
    FUTURE = 'Future'
    PAST = 'Past'
    UNKNOWN = 'Unknown'


class CAPSeverity(CAPCode):
    EXTREME = 'Extreme'
    SEVERE = 'Severe'
    MODERATE = 'Moderate'
    MINOR = 'Minor'
    UNKNOWN = 'Unknown'


class CAPCertainty(CAPCode):
    OBSERVED = 'Observed'
    LIKELY = 'Likely'
    POSSIBLE = 'Possible'
    UNLIKELY = 'Unlikely'
    UNKNOWN = 'Unknown'


class CAPResponseType(CAPCode):
    SHELTER = 'Shelter'
    EVACUATE = 'Evacuate'
    PREPARE = 'Prepare'
    EXECUTE = 'Execute'
    AVOID = 'Avoid'
    MONITOR = 'Monitor'
    ASSESS = 'Assess'      # not for public warning applications
    ALL_CLEAR = 'AllClear'
    NONE = 'None'
