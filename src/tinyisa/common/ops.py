# Width-polymorphic operations take two codes: byte form at BASE, word form at BASE + 1

# Misc
NOP = 0x00          # no operation

# Data movement
MOVC2R = 0x02       # C -> R
MOVR2R = 0x04       # R1 -> R2

# Arithmetic
ADDC2R = 0x06       # R + C -> R
ADDR2R = 0x08       # R2 + R1 -> R2
SUBC2R = 0x0A       # R - C -> R
SUBR2R = 0x0C       # R2 - R1 -> R2

# Logic
NOT = 0x0E          # ~R -> R
ANDC2R = 0x10       # R & C -> R
ANDR2R = 0x12       # R2 & R1 -> R2
ORC2R = 0x14        # R | C -> R
ORR2R = 0x16        # R2 | R1 -> R2
SHL = 0x18          # R << C -> R
SHR = 0x1A          # R >> C -> R (logical)
SHRE = 0x1C         # R >> C -> R (sign extended)

# Compare
CMPC2R = 0x1E       # R - C -> flags
CMPR2R = 0x20       # R2 - R1 -> flags

# Memory, byte bus with word addresses
MOVM2R = 0x22       # M[R1] -> Rb2
MOVR2M = 0x23       # Rb1 -> M[R2]

# Stack
PUSH = 0x24         # R -> [RSH++]
POP = 0x25          # [--RSH] -> R

# Jumps
AJMP = 0x26         # R -> RIP
JMP = 0x27          # RIP + R -> RIP
JEQ = 0x28          # if eq jmp R
JNEQ = 0x29         # if ne jmp R
JLT = 0x2A          # if lt jmp R
JGT = 0x2B          # if gt jmp R
JLEQ = 0x2C         # if le jmp R
JGEQ = 0x2D         # if ge jmp R
JO = 0x2E           # if overflow jmp R
JNO = 0x2F          # if no overflow jmp R

# Calls
CALLC = 0x30        # push RIP; C -> RIP
CALLR = 0x31        # push RIP; R -> RIP
RET = 0x32          # pop RIP

# Interrupts
INT = 0x33          # INT R
STI = 0x34          # R -> RINT; open interrupts
CLI = 0x35          # close interrupts

LAST_OPCODE = CLI
