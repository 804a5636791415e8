''' Instruction variants, their legality rules and frame encoding '''

from dataclasses import dataclass
from typing import Any, Callable, Sequence, TypeVar

import tinyisa.common.ops as ops
from tinyisa.common.errors import OperandWidthMismatch
from tinyisa.common.isaconf import SLOT_MASK, DATA_FRAME, SHORT_FRAME, LONG_FRAME
from tinyisa.isa.registers import Register
from tinyisa.isa.value import Value, Width


class Instruction:
    OPCODE: int
    POLYMORPHIC = False     # Word form takes OPCODE + 1

    @classmethod
    def mnemonic(cls) -> str:
        return cls.__name__.lower()

    def width(self) -> Width:
        return Width.WORD

    def opcode(self) -> int:
        if self.POLYMORPHIC and self.width() == Width.WORD:
            return self.OPCODE + 1

        return self.OPCODE

    def is_valid(self) -> bool:
        raise NotImplementedError()

    def operands(self) -> Sequence[Any]:
        raise NotImplementedError()

    def compile(self) -> bytes:
        raise NotImplementedError()

    def __len__(self) -> int:
        raise NotImplementedError()

    def __str__(self) -> str:
        return ' '.join([self.mnemonic(), *[str(op) for op in self.operands()]])


TInstruction = TypeVar('TInstruction', bound=Instruction)


# - Shapes - #

@dataclass(frozen=True)
class NoOperand(Instruction):
    def is_valid(self):
        return True

    def operands(self):
        return ()

    def compile(self):
        return bytes([self.opcode(), 0x00])

    def __len__(self):
        return SHORT_FRAME


@dataclass(frozen=True)
class Byte(Instruction):
    ''' Literal byte pseudo-op, the payload is emitted as is '''

    payload: int

    def __post_init__(self):
        if not 0 <= self.payload <= 0xFF:
            raise ValueError(f'Literal byte {self.payload} out of range')

    @classmethod
    def mnemonic(cls):
        return '.byte'

    def opcode(self):
        return self.payload

    def is_valid(self):
        return True

    def operands(self):
        return (f'0x{self.payload:02X}',)

    def compile(self):
        return bytes([self.payload])

    def __len__(self):
        return DATA_FRAME


@dataclass(frozen=True)
class RegPair(Instruction):
    src: Register
    dest: Register

    POLYMORPHIC = True

    def width(self):
        return self.src.width

    def is_valid(self):
        return self.src.width == self.dest.width and self.dest.is_writable()

    def operands(self):
        return (self.src, self.dest)

    def compile(self):
        return bytes([self.opcode(), self.src.compile_with(self.dest)])

    def __len__(self):
        return SHORT_FRAME


@dataclass(frozen=True)
class SingleReg(Instruction):
    reg: Register

    # Control flow, stack and interrupt targets are full addresses
    def is_valid(self):
        return self.reg.width == Width.WORD

    def operands(self):
        return (self.reg,)

    def compile(self):
        return bytes([self.opcode(), self.reg.compile_src()])

    def __len__(self):
        return SHORT_FRAME


@dataclass(frozen=True)
class ConstToReg(Instruction):
    value: Value
    dest: Register

    POLYMORPHIC = True

    def width(self):
        return self.value.width

    def is_valid(self):
        return self.value.width == self.dest.width and self.dest.is_writable()

    def operands(self):
        return (self.value, self.dest)

    def compile(self):
        return bytes([
            self.opcode(),
            self.dest.compile_dest(),
            self.value.value_byte(0),
            self.value.value_byte(1)
        ])

    def __len__(self):
        return LONG_FRAME


@dataclass(frozen=True)
class Shift(ConstToReg):
    ''' Shift count shares the operand byte with the destination '''

    def is_valid(self):
        if not super().is_valid():
            return False

        return 1 <= self.value.value <= self.dest.width.bits()

    def compile(self):
        # A word shift by 16 leaves a zero nibble, zero counts are never valid
        count = self.value.value & SLOT_MASK
        return bytes([self.opcode(), self.dest.compile_dest() | count])

    def __len__(self):
        return SHORT_FRAME


# - Misc - #

class Nop(NoOperand):
    OPCODE = ops.NOP


# - Data movement - #

class MovC2R(ConstToReg):
    OPCODE = ops.MOVC2R


class MovR2R(RegPair):
    OPCODE = ops.MOVR2R


class MovM2R(RegPair):
    ''' Load a byte from the word address in src '''

    OPCODE = ops.MOVM2R
    POLYMORPHIC = False

    def is_valid(self):
        return self.src.width == Width.WORD \
            and self.dest.width == Width.BYTE \
            and self.dest.is_writable()


class MovR2M(RegPair):
    ''' Store a byte to the word address in dest '''

    OPCODE = ops.MOVR2M
    POLYMORPHIC = False

    def is_valid(self):
        return self.src.width == Width.BYTE and self.dest.width == Width.WORD


class Push(SingleReg):
    OPCODE = ops.PUSH


class Pop(SingleReg):
    OPCODE = ops.POP

    def is_valid(self):
        return super().is_valid() and self.reg.is_writable()


# - Arithmetic - #

class AddC2R(ConstToReg):
    OPCODE = ops.ADDC2R


class AddR2R(RegPair):
    OPCODE = ops.ADDR2R


class SubC2R(ConstToReg):
    OPCODE = ops.SUBC2R


class SubR2R(RegPair):
    OPCODE = ops.SUBR2R


# - Logic - #

class Not(SingleReg):
    OPCODE = ops.NOT
    POLYMORPHIC = True

    def width(self):
        return self.reg.width

    def is_valid(self):
        return self.reg.is_writable()


class AndC2R(ConstToReg):
    OPCODE = ops.ANDC2R


class AndR2R(RegPair):
    OPCODE = ops.ANDR2R


class OrC2R(ConstToReg):
    OPCODE = ops.ORC2R


class OrR2R(RegPair):
    OPCODE = ops.ORR2R


class Shl(Shift):
    OPCODE = ops.SHL


class Shr(Shift):
    OPCODE = ops.SHR


class Shre(Shift):
    ''' Arithmetic right shift '''

    OPCODE = ops.SHRE


# - Compare - #

class CmpC2R(ConstToReg):
    OPCODE = ops.CMPC2R


class CmpR2R(RegPair):
    OPCODE = ops.CMPR2R


# - Jumps - #

class AJmp(SingleReg):
    OPCODE = ops.AJMP


class Jmp(SingleReg):
    OPCODE = ops.JMP


class Jeq(SingleReg):
    OPCODE = ops.JEQ


class Jneq(SingleReg):
    OPCODE = ops.JNEQ


class Jlt(SingleReg):
    OPCODE = ops.JLT


class Jgt(SingleReg):
    OPCODE = ops.JGT


class Jleq(SingleReg):
    OPCODE = ops.JLEQ


class Jgeq(SingleReg):
    OPCODE = ops.JGEQ


class Jo(SingleReg):
    OPCODE = ops.JO


class Jno(SingleReg):
    OPCODE = ops.JNO


# - Calls - #

@dataclass(frozen=True)
class CallC(Instruction):
    value: Value

    OPCODE = ops.CALLC

    def is_valid(self):
        return self.value.width == Width.WORD

    def operands(self):
        return (self.value,)

    # Same layout as constant-to-register, no destination
    def compile(self):
        return bytes([
            self.opcode(),
            0x00,
            self.value.value_byte(0),
            self.value.value_byte(1)
        ])

    def __len__(self):
        return LONG_FRAME


class CallR(SingleReg):
    OPCODE = ops.CALLR


class Ret(NoOperand):
    OPCODE = ops.RET


# - Interrupts - #

class Int(SingleReg):
    OPCODE = ops.INT


class Sti(SingleReg):
    OPCODE = ops.STI


class Cli(NoOperand):
    OPCODE = ops.CLI


# - Constructors - #

def checked(inst: TInstruction) -> TInstruction:
    if not inst.is_valid():
        raise OperandWidthMismatch(inst)

    return inst


def nop():
    return checked(Nop())


def byte(payload: int):
    return checked(Byte(payload))


def movc2r(value: Value, dest: Register):
    return checked(MovC2R(value, dest))


def movr2r(src: Register, dest: Register):
    return checked(MovR2R(src, dest))


def movm2r(src: Register, dest: Register):
    return checked(MovM2R(src, dest))


def movr2m(src: Register, dest: Register):
    return checked(MovR2M(src, dest))


def push(reg: Register):
    return checked(Push(reg))


def pop(reg: Register):
    return checked(Pop(reg))


def addc2r(value: Value, dest: Register):
    return checked(AddC2R(value, dest))


def addr2r(src: Register, dest: Register):
    return checked(AddR2R(src, dest))


def subc2r(value: Value, dest: Register):
    return checked(SubC2R(value, dest))


def subr2r(src: Register, dest: Register):
    return checked(SubR2R(src, dest))


def not_(reg: Register):
    return checked(Not(reg))


def andc2r(value: Value, dest: Register):
    return checked(AndC2R(value, dest))


def andr2r(src: Register, dest: Register):
    return checked(AndR2R(src, dest))


def orc2r(value: Value, dest: Register):
    return checked(OrC2R(value, dest))


def orr2r(src: Register, dest: Register):
    return checked(OrR2R(src, dest))


def shl(count: Value, dest: Register):
    return checked(Shl(count, dest))


def shr(count: Value, dest: Register):
    return checked(Shr(count, dest))


def shre(count: Value, dest: Register):
    return checked(Shre(count, dest))


def cmpc2r(value: Value, dest: Register):
    return checked(CmpC2R(value, dest))


def cmpr2r(src: Register, dest: Register):
    return checked(CmpR2R(src, dest))


def ajmp(reg: Register):
    return checked(AJmp(reg))


def jmp(reg: Register):
    return checked(Jmp(reg))


def jeq(reg: Register):
    return checked(Jeq(reg))


def jneq(reg: Register):
    return checked(Jneq(reg))


def jlt(reg: Register):
    return checked(Jlt(reg))


def jgt(reg: Register):
    return checked(Jgt(reg))


def jleq(reg: Register):
    return checked(Jleq(reg))


def jgeq(reg: Register):
    return checked(Jgeq(reg))


def jo(reg: Register):
    return checked(Jo(reg))


def jno(reg: Register):
    return checked(Jno(reg))


def callc(value: Value):
    return checked(CallC(value))


def callr(reg: Register):
    return checked(CallR(reg))


def ret():
    return checked(Ret())


def int_(reg: Register):
    return checked(Int(reg))


def sti(reg: Register):
    return checked(Sti(reg))


def cli():
    return checked(Cli())


CONSTRUCTORS: dict[type[Instruction], Callable[..., Instruction]] = {
    Nop: nop,
    Byte: byte,

    MovC2R: movc2r,
    MovR2R: movr2r,
    MovM2R: movm2r,
    MovR2M: movr2m,
    Push: push,
    Pop: pop,

    AddC2R: addc2r,
    AddR2R: addr2r,
    SubC2R: subc2r,
    SubR2R: subr2r,

    Not: not_,
    AndC2R: andc2r,
    AndR2R: andr2r,
    OrC2R: orc2r,
    OrR2R: orr2r,
    Shl: shl,
    Shr: shr,
    Shre: shre,

    CmpC2R: cmpc2r,
    CmpR2R: cmpr2r,

    AJmp: ajmp,
    Jmp: jmp,
    Jeq: jeq,
    Jneq: jneq,
    Jlt: jlt,
    Jgt: jgt,
    Jleq: jleq,
    Jgeq: jgeq,
    Jo: jo,
    Jno: jno,

    CallC: callc,
    CallR: callr,
    Ret: ret,

    Int: int_,
    Sti: sti,
    Cli: cli
}
