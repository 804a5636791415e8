# type: ignore
''' Instruction text grammar, one instruction per line '''

import logging as lg

import pyparsing as pp

import tinyisa.isa.instructions as ins
from tinyisa.common.errors import IsaError, InvalidInstructionText
from tinyisa.isa.registers import register_name, word_end_chars
from tinyisa.isa.value import Value, Width


comment = pp.dbl_slash_comment

hex_const = pp.Regex('0[xX][0-9a-fA-F]+').setParseAction(lambda r: int(r[0], 16))
dec_const = pp.Regex('[0-9]+').setParseAction(lambda r: int(r[0]))
const = (hex_const | dec_const) + pp.WordEnd(word_end_chars)

reg = register_name


def g_mnemonic(cls):
    return pp.Suppress(pp.CaselessKeyword(cls.mnemonic()))


def g_cmd(cls, ctor):
    mnemonic = g_mnemonic(cls)

    # Constant width follows the destination
    if issubclass(cls, ins.ConstToReg):
        rule = mnemonic + const + reg
        return rule.setParseAction(lambda r: ctor(Value(r[1].width, r[0]), r[1]))

    if issubclass(cls, ins.RegPair):
        rule = mnemonic + reg + reg
        return rule.setParseAction(lambda r: ctor(r[0], r[1]))

    if issubclass(cls, ins.SingleReg):
        rule = mnemonic + reg
        return rule.setParseAction(lambda r: ctor(r[0]))

    if issubclass(cls, ins.NoOperand):
        return mnemonic.copy().setParseAction(lambda _: ctor())

    if cls is ins.CallC:
        rule = mnemonic + const
        return rule.setParseAction(lambda r: ctor(Value(Width.WORD, r[0])))

    if cls is ins.Byte:
        rule = mnemonic + const
        return rule.setParseAction(lambda r: ctor(r[0]))

    raise NotImplementedError(f'No text form for {cls.__name__}')


asm_cmd = pp.MatchFirst([g_cmd(cls, ctor) for cls, ctor in ins.CONSTRUCTORS.items()])

line = pp.Optional(asm_cmd) + pp.Optional(pp.Suppress(comment)) + pp.StringEnd()


def parse_line(text: str, lineno: int | None = None) -> ins.Instruction | None:
    try:
        result = line.parse_string(text)
    except pp.ParseBaseException:
        raise InvalidInstructionText(text, lineno) from None
    except ValueError as e:
        # Immediate does not fit the destination
        raise InvalidInstructionText(text, lineno) from e

    if not result:
        return None

    return result[0]


def parse_instruction(text: str) -> ins.Instruction:
    inst = parse_line(text)

    if inst is None:
        raise InvalidInstructionText(text)

    return inst


def parse_program(text: str) -> list[ins.Instruction]:
    program = []

    for lineno, source in enumerate(text.splitlines(), start=1):
        try:
            inst = parse_line(source, lineno)
        except IsaError as e:
            if e.line is None:
                e.line = lineno

            raise

        if inst is not None:
            lg.debug(f'{lineno}: {inst}')
            program.append(inst)

    return program


def format_instruction(inst: ins.Instruction) -> str:
    return str(inst)
