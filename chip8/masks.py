# Bit masks used to pull the operand fields out of a 16-bit instruction word.
#
#    Bits:  15-12    11-8      7-4      3-0
#           family     x        y      nibble
#                   |------ address ---------|
#                            |----- byte ----|

FAMILY_MASK = 0xF000
X_MASK = 0x0F00
Y_MASK = 0x00F0
BYTE_MASK = 0x00FF
ADDRESS_MASK = 0x0FFF
NIBBLE_MASK = 0x000F

# Masks applied to values held in the CPU
REGISTER_MASK = 0xFF
INDEX_MASK = 0xFFFF
MEMORY_MASK = 0x0FFF

# Bit 7 of a register, shifted into VF by SHL
HIGH_BIT = 0x80
