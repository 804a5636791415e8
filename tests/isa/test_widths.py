import pytest

import tinyisa.isa.instructions as ins
import tinyisa.isa.registers as regs
from tinyisa.isa.registers import r, rb
from tinyisa.isa.value import Value
from tinyisa.common.errors import OperandWidthMismatch


C2R = [
    (ins.movc2r, ins.MovC2R),
    (ins.addc2r, ins.AddC2R),
    (ins.subc2r, ins.SubC2R),
    (ins.andc2r, ins.AndC2R),
    (ins.orc2r, ins.OrC2R),
    (ins.cmpc2r, ins.CmpC2R),
]

R2R = [
    (ins.movr2r, ins.MovR2R),
    (ins.addr2r, ins.AddR2R),
    (ins.subr2r, ins.SubR2R),
    (ins.andr2r, ins.AndR2R),
    (ins.orr2r, ins.OrR2R),
    (ins.cmpr2r, ins.CmpR2R),
]

WORD_ONLY = [
    (ins.push, ins.Push),
    (ins.pop, ins.Pop),
    (ins.ajmp, ins.AJmp),
    (ins.jmp, ins.Jmp),
    (ins.jeq, ins.Jeq),
    (ins.jneq, ins.Jneq),
    (ins.jlt, ins.Jlt),
    (ins.jgt, ins.Jgt),
    (ins.jleq, ins.Jleq),
    (ins.jgeq, ins.Jgeq),
    (ins.jo, ins.Jo),
    (ins.jno, ins.Jno),
    (ins.callr, ins.CallR),
    (ins.int_, ins.Int),
    (ins.sti, ins.Sti),
]

SHIFTS = [
    (ins.shl, ins.Shl),
    (ins.shr, ins.Shr),
    (ins.shre, ins.Shre),
]


def ctor_id(case):
    return case[0].__name__


@pytest.mark.parametrize('case', C2R, ids=ctor_id)
def test_width_c2r(case):
    ctor, variant = case
    assert ctor(Value.byte(0), rb(1)) == variant(Value.byte(0), rb(1))
    assert ctor(Value.word(0), r(1)) == variant(Value.word(0), r(1))

    with pytest.raises(OperandWidthMismatch) as info:
        ctor(Value.byte(0), r(1))

    assert info.value.instruction == variant(Value.byte(0), r(1))

    with pytest.raises(OperandWidthMismatch) as info:
        ctor(Value.word(0), rb(1))

    assert info.value.instruction == variant(Value.word(0), rb(1))


@pytest.mark.parametrize('case', R2R, ids=ctor_id)
def test_width_r2r(case):
    ctor, variant = case
    assert ctor(rb(0), rb(1)) == variant(rb(0), rb(1))
    assert ctor(r(0), r(1)) == variant(r(0), r(1))

    with pytest.raises(OperandWidthMismatch) as info:
        ctor(rb(0), r(1))

    assert info.value.instruction == variant(rb(0), r(1))

    with pytest.raises(OperandWidthMismatch) as info:
        ctor(r(0), rb(1))

    assert info.value.instruction == variant(r(0), rb(1))


@pytest.mark.parametrize('case', C2R + SHIFTS, ids=ctor_id)
def test_control_register_not_writable_c2r(case):
    ctor, variant = case

    with pytest.raises(OperandWidthMismatch) as info:
        ctor(Value.word(1), regs.RIP)

    assert info.value.instruction == variant(Value.word(1), regs.RIP)


@pytest.mark.parametrize('case', R2R, ids=ctor_id)
def test_control_register_not_writable_r2r(case):
    ctor, _ = case

    with pytest.raises(OperandWidthMismatch):
        ctor(r(0), regs.FLAGS)

    # Control registers are fine as a source
    assert ctor(regs.FLAGS, r(0)).src == regs.FLAGS


def test_add_mismatch_carries_instruction():
    with pytest.raises(OperandWidthMismatch) as info:
        ins.addr2r(rb(1), r(0))

    assert info.value == OperandWidthMismatch(ins.AddR2R(rb(1), r(0)))


def test_width_movm2r():
    assert ins.movm2r(r(0), rb(1)) == ins.MovM2R(r(0), rb(1))

    for src, dest in [(r(0), r(1)), (rb(0), rb(1)), (rb(0), r(1))]:
        with pytest.raises(OperandWidthMismatch) as info:
            ins.movm2r(src, dest)

        assert info.value.instruction == ins.MovM2R(src, dest)


def test_width_movr2m():
    assert ins.movr2m(rb(0), r(1)) == ins.MovR2M(rb(0), r(1))

    # Stores may go through a control register address
    assert ins.movr2m(rb(0), regs.RSH) == ins.MovR2M(rb(0), regs.RSH)

    for src, dest in [(r(0), r(1)), (rb(0), rb(1)), (r(0), rb(1))]:
        with pytest.raises(OperandWidthMismatch) as info:
            ins.movr2m(src, dest)

        assert info.value.instruction == ins.MovR2M(src, dest)


@pytest.mark.parametrize('case', WORD_ONLY, ids=ctor_id)
def test_width_r(case):
    ctor, variant = case
    assert ctor(r(0)) == variant(r(0))

    with pytest.raises(OperandWidthMismatch) as info:
        ctor(rb(0))

    assert info.value.instruction == variant(rb(0))


def test_push_control_register():
    assert ins.push(regs.RIP) == ins.Push(regs.RIP)
    assert ins.jmp(regs.RSB) == ins.Jmp(regs.RSB)


def test_pop_requires_writable():
    with pytest.raises(OperandWidthMismatch):
        ins.pop(regs.RIP)


def test_not():
    assert ins.not_(rb(0)) == ins.Not(rb(0))
    assert ins.not_(r(0)) == ins.Not(r(0))

    with pytest.raises(OperandWidthMismatch):
        ins.not_(regs.FLAGS)


def test_width_callc():
    assert ins.callc(Value.word(0)) == ins.CallC(Value.word(0))

    with pytest.raises(OperandWidthMismatch) as info:
        ins.callc(Value.byte(0))

    assert info.value.instruction == ins.CallC(Value.byte(0))


def test_no_operands():
    assert ins.nop() == ins.Nop()
    assert ins.ret() == ins.Ret()
    assert ins.cli() == ins.Cli()
    assert ins.nop() != ins.ret()


@pytest.mark.parametrize('payload', [0x00, 0x22, 0xFF])
def test_byte_always_valid(payload):
    assert ins.byte(payload) == ins.Byte(payload)


def test_byte_range():
    with pytest.raises(ValueError):
        ins.byte(0x100)


@pytest.mark.parametrize('case', SHIFTS, ids=ctor_id)
def test_shift_bounds(case):
    ctor, variant = case
    assert ctor(Value.byte(8), rb(0)) == variant(Value.byte(8), rb(0))
    assert ctor(Value.word(16), r(0)) == variant(Value.word(16), r(0))
    assert ctor(Value.byte(1), rb(0)) == variant(Value.byte(1), rb(0))

    for count, dest in [(Value.byte(9), rb(0)), (Value.word(17), r(0)), (Value.byte(0), rb(0))]:
        with pytest.raises(OperandWidthMismatch) as info:
            ctor(count, dest)

        assert info.value.instruction == variant(count, dest)


@pytest.mark.parametrize('case', SHIFTS, ids=ctor_id)
def test_shift_width(case):
    ctor, _ = case

    with pytest.raises(OperandWidthMismatch):
        ctor(Value.byte(4), r(0))

    with pytest.raises(OperandWidthMismatch):
        ctor(Value.word(4), rb(0))


def test_validity_is_recomputed():
    inst = ins.AddR2R(rb(0), r(1))
    assert not inst.is_valid()
    assert not inst.is_valid()
    assert ins.AddR2R(r(0), r(1)).is_valid()


def test_instructions_are_immutable():
    inst = ins.movr2r(r(0), r(1))

    with pytest.raises(AttributeError):
        inst.src = r(2)
