"""
Space delimited group listings (references, polygon).
"""

from typing import Iterator, List, Sequence

from .constants import LIST_DELIMITER


class DelimitedList:
    """
    One text node holding an ordered list of tokens.

    Tokens are split on single spaces exactly, so an empty node decodes to
    a single empty token. Tokens containing spaces cannot be represented.
    """

    def __init__(self, values: Sequence[str] = ()):
        self.values: List[str] = list(values)

    @classmethod
    def decode(cls, text: str) -> 'DelimitedList':
        return cls(text.split(LIST_DELIMITER))

    def encode(self) -> str:
        return LIST_DELIMITER.join(self.values)

    def __str__(self) -> str:
        return self.encode()

    def __repr__(self) -> str:
        return f'DelimitedList({self.values!r})'

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)

    def __getitem__(self, index):
        return self.values[index]

    def __eq__(self, other):
        if not isinstance(other, DelimitedList):
            return NotImplemented
        return self.values == other.values

    __hash__ = None
