from dataclasses import dataclass
from enum import Enum

from tinyisa.common.isaconf import BYTE_BITS, WORD_BITS


class Width(Enum):
    BYTE = BYTE_BITS
    WORD = WORD_BITS

    def bits(self) -> int:
        return self.value

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Value:
    ''' Immediate operand: width tag and unsigned magnitude '''

    width: Width
    value: int

    def __post_init__(self):
        limit = 1 << self.width.bits()

        if not 0 <= self.value < limit:
            raise ValueError(f'Immediate {self.value} does not fit into a {self.width}')

    @staticmethod
    def byte(value: int) -> 'Value':
        return Value(Width.BYTE, value)

    @staticmethod
    def word(value: int) -> 'Value':
        return Value(Width.WORD, value)

    def value_byte(self, idx: int) -> int:
        # Only the two bytes of a word store are meaningful
        if idx not in (0, 1):
            raise IndexError(f'Byte index {idx} out of range')

        return (self.value >> (idx * BYTE_BITS)) & 0xFF

    def __str__(self) -> str:
        return f'0x{self.value:X}'
