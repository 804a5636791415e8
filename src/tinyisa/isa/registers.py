''' CPU-visible registers and their nibble encoding '''

import re
from dataclasses import dataclass

import pyparsing as pp

from tinyisa.common.isaconf import FIXED_REGISTERS, GP_REGISTERS, SLOT_BITS, SLOT_MASK, MAX_SLOT
from tinyisa.common.errors import InvalidRegisterNumber, InvalidRegisterName
from tinyisa.isa.value import Width


FIXED_NAMES = ['rinfo', 'rip', 'rint', 'flags', 'rsb', 'rsh']


@dataclass(frozen=True)
class Register:
    slot: int               # Physical register, 0..15
    width: Width = Width.WORD

    def __post_init__(self):
        if not 0 <= self.slot <= MAX_SLOT:
            raise ValueError(f'Register slot {self.slot} out of range')

        if self.slot < FIXED_REGISTERS and self.width != Width.WORD:
            raise ValueError(f'Control register {FIXED_NAMES[self.slot]} is word-only')

    @staticmethod
    def gp(width: Width, number: int) -> 'Register':
        if not 0 <= number < GP_REGISTERS:
            raise InvalidRegisterNumber(number)

        return Register(FIXED_REGISTERS + number, width)

    @staticmethod
    def from_src(width: Width, byte: int) -> 'Register':
        slot = byte & SLOT_MASK

        if slot < FIXED_REGISTERS:
            return Register(slot)

        return Register(slot, width)

    @staticmethod
    def from_dest(width: Width, byte: int) -> 'Register':
        return Register.from_src(width, byte >> SLOT_BITS)

    @staticmethod
    def parse(name: str) -> 'Register':
        try:
            return register_name.parse_string(name.strip(), parse_all=True)[0]
        except pp.ParseBaseException:
            raise InvalidRegisterName(name) from None

    def is_general(self) -> bool:
        return self.slot >= FIXED_REGISTERS

    def is_writable(self) -> bool:
        return self.is_general()

    @property
    def number(self) -> int:
        if not self.is_general():
            raise ValueError(f'{self} is not a general purpose register')

        return self.slot - FIXED_REGISTERS

    def compile_src(self) -> int:
        return self.slot

    def compile_dest(self) -> int:
        return self.compile_src() << SLOT_BITS

    def compile_with(self, dest: 'Register') -> int:
        return self.compile_src() | dest.compile_dest()

    def __str__(self) -> str:
        return format_register(self)


def format_register(reg: Register) -> str:
    if not reg.is_general():
        return FIXED_NAMES[reg.slot]

    prefix = 'rb' if reg.width == Width.BYTE else 'r'
    return f'{prefix}{reg.number}'


def r(number: int) -> Register:
    return Register.gp(Width.WORD, number)


def rb(number: int) -> Register:
    return Register.gp(Width.BYTE, number)


RINFO = Register(0)     # CPU information
RIP = Register(1)       # Instruction pointer
RINT = Register(2)      # Interrupt handler pointer
FLAGS = Register(3)
RSB = Register(4)       # Stack base
RSH = Register(5)       # Stack head

FIXED = [RINFO, RIP, RINT, FLAGS, RSB, RSH]
GENERAL = [Register.gp(w, n) for n in range(GP_REGISTERS) for w in Width]
ALL = FIXED + GENERAL


# Grammar

def g_fixed(name: str, reg: Register):
    return pp.CaselessKeyword(name).setParseAction(lambda _: reg)


def g_general(prefix: str, width: Width):
    word = pp.Regex(f'{prefix}[0-9]+', flags=re.IGNORECASE)
    return word.setParseAction(lambda t: Register.gp(width, int(t[0][len(prefix):])))


fixed_register = pp.MatchFirst([g_fixed(name, reg) for name, reg in zip(FIXED_NAMES, FIXED)])

# Operands may run straight into a comment
word_end_chars = pp.alphanums + '_'

# 'rb' must be tried before 'r'
general_register = (g_general('rb', Width.BYTE) | g_general('r', Width.WORD)) + pp.WordEnd(word_end_chars)

register_name = fixed_register | general_register
