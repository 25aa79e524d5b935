"""
CAP dateTime values.

CAP restricts xs:dateTime to a single shape, ``2003-06-17T14:57:00-07:00``:
seconds precision and an explicit numeric offset. The offset a timestamp was
sent with is kept, so a value re-encodes to the text it was decoded from.
UTC always encodes as ``-00:00``, which is how NAADS and most CAP-CP
producers write it.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from .constants import TIMESTAMP_PATTERN, UTC_OFFSET
from .errors import InvalidDateTime


@dataclass(frozen=True)
class CAPDateTime:
    """A timezone-aware instant in CAP wire format."""
    value: datetime

    def __post_init__(self):
        if not isinstance(self.value, datetime):
            raise ValueError(f"CAPDateTime needs a datetime, got {type(self.value).__name__}")
        if self.value.utcoffset() is None:
            raise ValueError(f"CAPDateTime needs a timezone-aware datetime: {self.value}")

    @classmethod
    def decode(cls, text: str) -> 'CAPDateTime':
        if not isinstance(text, str):
            raise InvalidDateTime(repr(text), 'not a string')
        match = TIMESTAMP_PATTERN.fullmatch(text)
        if not match:
            raise InvalidDateTime(text)

        year, month, day, hour, minute, second = (int(g) for g in match.group(1, 2, 3, 4, 5, 6))
        sign, off_hours, off_minutes = match.group(7), int(match.group(8)), int(match.group(9))
        if off_hours > 23 or off_minutes > 59:
            raise InvalidDateTime(text, 'offset out of range')

        offset = timedelta(hours=off_hours, minutes=off_minutes)
        if sign == '-':
            offset = -offset

        try:
            value = datetime(year, month, day, hour, minute, second, tzinfo=timezone(offset))
        except ValueError as e:
            raise InvalidDateTime(text, str(e)) from e
        return cls(value)

    def encode(self) -> str:
        v = self.value
        stamp = (f'{v.year:04d}-{v.month:02d}-{v.day:02d}'
                 f'T{v.hour:02d}:{v.minute:02d}:{v.second:02d}')
        return stamp + _format_offset(v.utcoffset())

    @property
    def offset(self) -> timedelta:
        return self.value.utcoffset()

    def __eq__(self, other):
        if not isinstance(other, CAPDateTime):
            return NotImplemented
        # same instant is not enough, the offset is part of the value
        return self.value == other.value and self.offset == other.offset

    def __hash__(self):
        return hash((self.value, self.offset))

    def __str__(self) -> str:
        return self.encode()


def _format_offset(offset: timedelta) -> str:
    if not offset:
        return UTC_OFFSET
    sign = '-' if offset < timedelta(0) else '+'
    minutes = abs(int(offset.total_seconds())) // 60
    return f'{sign}{minutes // 60:02d}:{minutes % 60:02d}'
