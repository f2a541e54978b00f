"""
Turns raw 16-bit Chip 8 instruction words into OpCode values.

Every instruction word is laid out the same way, with the top nibble selecting
the instruction family and the remaining bits holding the operands:

   Bits:  15-12    11-8      7-4      3-0
          family     x        y        n
                  |------- nnn --------|
                           |--- kk ----|

Families 0, 8, E and F need a second selector to tell their instructions
apart (the low byte for 0, E and F, the low nibble for 8). Words that match
no known instruction decode to None rather than raising, since real ROMs are
free to mix data in with their code.
"""
from collections import namedtuple

from chip8.masks import (
    ADDRESS_MASK, BYTE_MASK, FAMILY_MASK, NIBBLE_MASK, X_MASK, Y_MASK
)

# A decoded instruction. The mnemonic is one of the constants below and the
# operands are a tuple of ints whose meaning depends on the mnemonic.
OpCode = namedtuple('OpCode', ['mnemonic', 'operands'])

CLS = 'CLS'                  # 00E0 - CLS
RET = 'RET'                  # 00EE - RET
SYS = 'SYS'                  # 0nnn - SYS  nnn
JP = 'JP'                    # 1nnn - JP   nnn
CALL = 'CALL'                # 2nnn - CALL nnn
SE_BYTE = 'SE_BYTE'          # 3xkk - SE   Vx, kk
SNE_BYTE = 'SNE_BYTE'        # 4xkk - SNE  Vx, kk
SE_REG = 'SE_REG'            # 5xy0 - SE   Vx, Vy
LD_BYTE = 'LD_BYTE'          # 6xkk - LD   Vx, kk
ADD_BYTE = 'ADD_BYTE'        # 7xkk - ADD  Vx, kk
LD_REG = 'LD_REG'            # 8xy0 - LD   Vx, Vy
OR = 'OR'                    # 8xy1 - OR   Vx, Vy
AND = 'AND'                  # 8xy2 - AND  Vx, Vy
XOR = 'XOR'                  # 8xy3 - XOR  Vx, Vy
ADD_REG = 'ADD_REG'          # 8xy4 - ADD  Vx, Vy
SUB = 'SUB'                  # 8xy5 - SUB  Vx, Vy
SHR = 'SHR'                  # 8xy6 - SHR  Vx
SUBN = 'SUBN'                # 8xy7 - SUBN Vx, Vy
SHL = 'SHL'                  # 8xyE - SHL  Vx
SNE_REG = 'SNE_REG'          # 9xy0 - SNE  Vx, Vy
LD_INDEX = 'LD_INDEX'        # Annn - LD   I, nnn
JP_V0 = 'JP_V0'              # Bnnn - JP   V0, nnn
RND = 'RND'                  # Cxkk - RND  Vx, kk
DRW = 'DRW'                  # Dxyn - DRW  Vx, Vy, n
SKP = 'SKP'                  # Ex9E - SKP  Vx
SKNP = 'SKNP'                # ExA1 - SKNP Vx
LD_DELAY = 'LD_DELAY'        # Fx07 - LD   Vx, DT
LD_KEY = 'LD_KEY'            # Fx0A - LD   Vx, K
SET_DELAY = 'SET_DELAY'      # Fx15 - LD   DT, Vx
SET_SOUND = 'SET_SOUND'      # Fx18 - LD   ST, Vx
ADD_INDEX = 'ADD_INDEX'      # Fx1E - ADD  I, Vx
LD_FONT = 'LD_FONT'          # Fx29 - LD   F, Vx
BCD = 'BCD'                  # Fx33 - LD   B, Vx
STORE = 'STORE'              # Fx55 - LD   [I], Vx
LOAD = 'LOAD'                # Fx65 - LD   Vx, [I]

CLEAR_SCREEN_WORD = 0x00E0
RETURN_WORD = 0x00EE


def _x(word):
    return ((word & X_MASK) >> 8,)


def _x_byte(word):
    return (word & X_MASK) >> 8, word & BYTE_MASK


def _x_y(word):
    return (word & X_MASK) >> 8, (word & Y_MASK) >> 4


def _x_y_nibble(word):
    return (word & X_MASK) >> 8, (word & Y_MASK) >> 4, word & NIBBLE_MASK


def _address(word):
    return (word & ADDRESS_MASK,)


# Families that are fully identified by the most significant nibble
FAMILY_LOOKUP = {
    0x1: (JP, _address),
    0x2: (CALL, _address),
    0x3: (SE_BYTE, _x_byte),
    0x4: (SNE_BYTE, _x_byte),
    0x5: (SE_REG, _x_y),
    0x6: (LD_BYTE, _x_byte),
    0x7: (ADD_BYTE, _x_byte),
    0x9: (SNE_REG, _x_y),
    0xA: (LD_INDEX, _address),
    0xB: (JP_V0, _address),
    0xC: (RND, _x_byte),
    0xD: (DRW, _x_y_nibble),
}

# 8xyn - selected by the least significant nibble
LOGICAL_LOOKUP = {
    0x0: LD_REG,
    0x1: OR,
    0x2: AND,
    0x3: XOR,
    0x4: ADD_REG,
    0x5: SUB,
    0x6: SHR,
    0x7: SUBN,
    0xE: SHL,
}

# Exkk - selected by the least significant byte
KEYBOARD_LOOKUP = {
    0x9E: SKP,
    0xA1: SKNP,
}

# Fxkk - selected by the least significant byte
MISC_LOOKUP = {
    0x07: LD_DELAY,
    0x0A: LD_KEY,
    0x15: SET_DELAY,
    0x18: SET_SOUND,
    0x1E: ADD_INDEX,
    0x29: LD_FONT,
    0x33: BCD,
    0x55: STORE,
    0x65: LOAD,
}

# Assembly text for each mnemonic, formatted with the operand tuple
DISASSEMBLY_FORMATS = {
    CLS: 'CLS',
    RET: 'RET',
    SYS: 'SYS  {0:03X}',
    JP: 'JP   {0:03X}',
    CALL: 'CALL {0:03X}',
    SE_BYTE: 'SE   V{0:X}, {1:02X}',
    SNE_BYTE: 'SNE  V{0:X}, {1:02X}',
    SE_REG: 'SE   V{0:X}, V{1:X}',
    LD_BYTE: 'LD   V{0:X}, {1:02X}',
    ADD_BYTE: 'ADD  V{0:X}, {1:02X}',
    LD_REG: 'LD   V{0:X}, V{1:X}',
    OR: 'OR   V{0:X}, V{1:X}',
    AND: 'AND  V{0:X}, V{1:X}',
    XOR: 'XOR  V{0:X}, V{1:X}',
    ADD_REG: 'ADD  V{0:X}, V{1:X}',
    SUB: 'SUB  V{0:X}, V{1:X}',
    SHR: 'SHR  V{0:X}',
    SUBN: 'SUBN V{0:X}, V{1:X}',
    SHL: 'SHL  V{0:X}',
    SNE_REG: 'SNE  V{0:X}, V{1:X}',
    LD_INDEX: 'LD   I, {0:03X}',
    JP_V0: 'JP   V0, {0:03X}',
    RND: 'RND  V{0:X}, {1:02X}',
    DRW: 'DRW  V{0:X}, V{1:X}, {2:X}',
    SKP: 'SKP  V{0:X}',
    SKNP: 'SKNP V{0:X}',
    LD_DELAY: 'LD   V{0:X}, DT',
    LD_KEY: 'LD   V{0:X}, K',
    SET_DELAY: 'LD   DT, V{0:X}',
    SET_SOUND: 'LD   ST, V{0:X}',
    ADD_INDEX: 'ADD  I, V{0:X}',
    LD_FONT: 'LD   F, V{0:X}',
    BCD: 'LD   B, V{0:X}',
    STORE: 'LD   [I], V{0:X}',
    LOAD: 'LD   V{0:X}, [I]',
}


def decode(word):
    """
    Decode a single instruction word.

    :param word: the 16-bit instruction word
    :return: the decoded OpCode, or None if the word is not a known
        instruction
    """
    word &= 0xFFFF
    family = (word & FAMILY_MASK) >> 12

    if family == 0x0:
        if word == CLEAR_SCREEN_WORD:
            return OpCode(CLS, ())
        if word == RETURN_WORD:
            return OpCode(RET, ())
        return OpCode(SYS, _address(word))

    if family == 0x8:
        mnemonic, operands = LOGICAL_LOOKUP.get(word & NIBBLE_MASK), _x_y
    elif family == 0xE:
        mnemonic, operands = KEYBOARD_LOOKUP.get(word & BYTE_MASK), _x
    elif family == 0xF:
        mnemonic, operands = MISC_LOOKUP.get(word & BYTE_MASK), _x
    else:
        mnemonic, operands = FAMILY_LOOKUP[family]

    if mnemonic is None:
        return None
    return OpCode(mnemonic, operands(word))


def disassemble(word):
    """
    Returns the assembly text for an instruction word. Unknown words are
    shown as raw data.

    :param word: the 16-bit instruction word
    :return: the assembly text
    """
    opcode = decode(word)
    if opcode is None:
        return 'DATA {:04X}'.format(word & 0xFFFF)
    return DISASSEMBLY_FORMATS[opcode.mnemonic].format(*opcode.operands)
