import logging as lg
from typing import Iterable, Sequence

from tinyisa.isa.instructions import Instruction


def compile_items(instructions: Iterable[Instruction]) -> bytes:
    bytestr = bytearray()

    for inst in instructions:
        frame = inst.compile()
        lg.debug(f'{len(bytestr):04X}: {frame.hex(" ")}  {inst}')
        bytestr += frame

    return bytes(bytestr)


def frame_offsets(instructions: Sequence[Instruction]) -> list[int]:
    offsets = []
    offset = 0

    for inst in instructions:
        offsets.append(offset)
        offset += len(inst)

    return offsets


def listing(instructions: Sequence[Instruction]) -> list[str]:
    return [
        f'{offset:04X}  {inst.compile().hex(" "):<12} {inst}'
        for offset, inst in zip(frame_offsets(instructions), instructions)
    ]
