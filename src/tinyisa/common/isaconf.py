
BYTE_BITS = 8
WORD_BITS = 16

FIXED_REGISTERS = 6                             # rinfo, rip, rint, flags, rsb, rsh
GP_REGISTERS = 10                               # r0 .. r9
SLOT_BITS = 4
SLOT_MASK = (1 << SLOT_BITS) - 1
MAX_SLOT = FIXED_REGISTERS + GP_REGISTERS - 1   # must fit into a nibble

DATA_FRAME = 1          # literal byte
SHORT_FRAME = 2         # opcode + operand byte
LONG_FRAME = 4          # opcode + operand byte + immediate
