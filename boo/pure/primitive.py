"""Primitive values of the Boo language.

Integers are the only primitive for now. Python's int is already arbitrary precision, so Integer is a thin immutable
wrapper that pins down how Boo integers are parsed, combined, compared, and rendered. The only arithmetic the language
needs is addition, subtraction and multiplication; there is no division.
"""

import re
from dataclasses import dataclass

DIGITS = re.compile(r"[0-9]+")
CHUNK_DIGITS = 1000  # stays under the interpreter's int <-> str conversion limit


@dataclass(frozen=True)
class Integer:
    """An exact, arbitrary-precision integer."""
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"expected int, got '{type(self.value).__name__}'")

    @classmethod
    def parse(cls, digits, negative=False):
        """Parses a decimal digit string. Separators ('_') must already have been stripped by the lexer."""
        if not DIGITS.fullmatch(digits):
            raise ValueError(f"'{digits}' is not a decimal digit string")

        value = 0
        for start in range(0, len(digits), CHUNK_DIGITS):
            chunk = digits[start:start + CHUNK_DIGITS]
            value = value * 10 ** len(chunk) + int(chunk)
        return cls(-value if negative else value)

    def __add__(self, other):
        return Integer(self.value + other.value)

    def __sub__(self, other):
        return Integer(self.value - other.value)

    def __mul__(self, other):
        return Integer(self.value * other.value)

    def __neg__(self):
        return Integer(-self.value)

    def render(self):
        """Decimal text of self.value, without precision loss however large it grows."""
        sign = "-" if self.value < 0 else ""
        remaining = abs(self.value)

        chunks = []
        while True:
            remaining, chunk = divmod(remaining, 10 ** CHUNK_DIGITS)
            chunks.append(chunk)
            if not remaining:
                break

        head, *tail = reversed(chunks)
        return sign + str(head) + "".join(str(chunk).zfill(CHUNK_DIGITS) for chunk in tail)

    def __str__(self):
        return self.render()
