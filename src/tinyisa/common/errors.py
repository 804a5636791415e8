from typing import Any

from tinyisa.common.isaconf import GP_REGISTERS


class IsaError(Exception):
    line: int | None = None     # Source line, when raised from program text


class OperandWidthMismatch(IsaError):
    ''' Operands are well-formed but illegal for the operation '''

    def __init__(self, instruction: Any):
        super().__init__(f'Operand width mismatch in {instruction!r}')
        self.instruction = instruction

    def __eq__(self, other):
        if not isinstance(other, OperandWidthMismatch):
            return NotImplemented

        return self.instruction == other.instruction

    def __hash__(self):
        return hash(self.instruction)


class InvalidRegisterNumber(IsaError):
    def __init__(self, number: int):
        super().__init__(f'Invalid register number {number} (expected 0..{GP_REGISTERS - 1})')
        self.number = number


class InvalidRegisterName(IsaError):
    def __init__(self, name: str):
        super().__init__(f'Invalid register {name!r}')
        self.name = name


class InvalidInstructionText(IsaError):
    def __init__(self, text: str, line: int | None = None):
        where = '' if line is None else f' at line {line}'
        super().__init__(f'Invalid instruction{where}: {text!r}')
        self.text = text
        self.line = line
