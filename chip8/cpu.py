import logging
import math
from random import Random

from chip8.decoder import (
    ADD_BYTE, ADD_INDEX, ADD_REG, AND, BCD, CALL, CLS, DRW, JP, JP_V0, LD_BYTE,
    LD_DELAY, LD_FONT, LD_INDEX, LD_KEY, LD_REG, LOAD, OR, RET, RND, SE_BYTE,
    SE_REG, SET_DELAY, SET_SOUND, SHL, SHR, SKNP, SKP, SNE_BYTE, SNE_REG,
    STORE, SUB, SUBN, SYS, XOR, decode, disassemble
)
from chip8.exception import InvalidKeyException, ProgramTooLargeException
from chip8.masks import HIGH_BIT, INDEX_MASK, MEMORY_MASK, REGISTER_MASK

logger = logging.getLogger(__name__)

# The total amount of memory to allocate for the emulator
MAX_MEMORY = 4096

# Where the program counter should originally point
PROGRAM_COUNTER_START = 0x200

# The total number of registers in the Chip 8 CPU
NUM_REGISTERS = 0x10

# The register used for carry, borrow and collision flags
FLAG_REGISTER = 0xF

# The number of return addresses the call stack can hold
STACK_SIZE = 16

# The number of keys on the hex keypad
NUM_KEYS = 0x10

# The dimensions of the display in pixels
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

# Sprites are always one byte (8 pixels) wide
SPRITE_WIDTH = 8

# The number of instruction cycles executed per second of emulated time
CYCLE_RATE = 600

# Where the built-in font lives, and how many bytes each glyph takes
FONT_ADDRESS = 0x000
FONT_GLYPH_SIZE = 5

# The built-in hexadecimal font. Each glyph is 4 pixels wide and 5 pixels
# tall, stored in the high nibble of each byte.
FONT_SPRITES = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xF0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
]

# C L A S S E S ###############################################################


class CPU(object):
    """
    A class to emulate a Chip 8 CPU. There are several good resources out on
    the web that describe the internals of the Chip 8 CPU. For example:

        http://devernay.free.fr/hacks/chip8/C8TECH10.HTM
        http://michael.toren.net/mirrors/chip8/chip8def.htm

    To summarize these sources, the Chip 8 has:

        * 16 x 8-bit general purpose registers (V0 - VF**)
        * 1 x 16-bit index register (I)
        * 1 x 8-bit stack pointer (SP) into a 16 entry call stack
        * 1 x 16-bit program counter (PC)
        * 1 x 8-bit delay timer (DT)
        * 1 x 8-bit sound timer (ST)

    ** VF is a special register - it is used to store the carry, borrow and
    collision flags

    The CPU owns its 64 x 32 display buffer and the state of the 16 key
    keypad. Drawing to a real window, reading a real keyboard and making a
    real sound are left to the caller: the display is read through
    cpu_display (or cpu_get_pixel) whenever cpu_draw_flag is set, keys are
    fed in with cpu_press_key and cpu_release_key, and the sound object
    passed in has its make_sound method called whenever the sound timer
    runs out.
    """
    def __init__(self, sound=None, rng=None, cycle_rate=CYCLE_RATE, timer_divider=1):
        """
        Initialize the Chip8 CPU.

        :param sound: an object with a make_sound() method, called whenever
            the sound timer runs out. None disables sound.
        :param rng: the random number generator used by RND (defaults to a
            new random.Random instance)
        :param cycle_rate: the number of instructions executed per second of
            emulated time
        :param timer_divider: the number of instruction cycles per timer
            tick. 1 ticks the timers on every cycle; cycle_rate / 60 ticks
            them at 60 Hz.
        """
        if timer_divider < 1:
            raise ValueError("timer_divider must be at least 1")

        # There are two timer registers, one for sound and one that is general
        # purpose known as the delay timer. The timers are loaded with a value
        # and then decremented until they reach 0.
        self.cpu_timers = {
            'delay': 0,
            'sound': 0,
        }

        # Defines the general purpose, index, stack pointer and program
        # counter registers.
        self.cpu_registers = {
            'v': [],
            'index': 0,
            'sp': 0,
            'pc': 0,
        }

        # Decoded instructions are dispatched on their mnemonic
        self.cpu_operation_lookup = {
            CLS: self.cpu_clear_screen,                  # 00E0 - CLS
            RET: self.cpu_return_from_subroutine,        # 00EE - RET
            SYS: self.cpu_system_call,                   # 0nnn - SYS  nnn
            JP: self.cpu_jump_to_address,                # 1nnn - JP   nnn
            CALL: self.cpu_jump_to_subroutine,           # 2nnn - CALL nnn
            SE_BYTE: self.cpu_skip_if_reg_equal_val,     # 3xkk - SE   Vx, kk
            SNE_BYTE: self.cpu_skip_if_reg_not_equal_val,  # 4xkk - SNE  Vx, kk
            SE_REG: self.cpu_skip_if_reg_equal_reg,      # 5xy0 - SE   Vx, Vy
            LD_BYTE: self.cpu_move_value_to_reg,         # 6xkk - LD   Vx, kk
            ADD_BYTE: self.cpu_add_value_to_reg,         # 7xkk - ADD  Vx, kk
            LD_REG: self.cpu_move_reg_into_reg,          # 8xy0 - LD   Vx, Vy
            OR: self.cpu_logical_or,                     # 8xy1 - OR   Vx, Vy
            AND: self.cpu_logical_and,                   # 8xy2 - AND  Vx, Vy
            XOR: self.cpu_exclusive_or,                  # 8xy3 - XOR  Vx, Vy
            ADD_REG: self.cpu_add_reg_to_reg,            # 8xy4 - ADD  Vx, Vy
            SUB: self.cpu_subtract_reg_from_reg,         # 8xy5 - SUB  Vx, Vy
            SHR: self.cpu_right_shift_reg,               # 8xy6 - SHR  Vx
            SUBN: self.cpu_subtract_reg_from_reg1,       # 8xy7 - SUBN Vx, Vy
            SHL: self.cpu_left_shift_reg,                # 8xyE - SHL  Vx
            SNE_REG: self.cpu_skip_if_reg_not_equal_reg,  # 9xy0 - SNE  Vx, Vy
            LD_INDEX: self.cpu_load_index_reg_with_value,  # Annn - LD   I, nnn
            JP_V0: self.cpu_jump_to_v0_plus_value,       # Bnnn - JP   V0, nnn
            RND: self.cpu_generate_random_number,        # Cxkk - RND  Vx, kk
            DRW: self.cpu_draw_sprite,                   # Dxyn - DRW  Vx, Vy, n
            SKP: self.cpu_skip_if_key_pressed,           # Ex9E - SKP  Vx
            SKNP: self.cpu_skip_if_key_not_pressed,      # ExA1 - SKNP Vx
            LD_DELAY: self.cpu_move_delay_timer_into_reg,  # Fx07 - LD   Vx, DT
            LD_KEY: self.cpu_wait_for_keypress,          # Fx0A - LD   Vx, K
            SET_DELAY: self.cpu_move_reg_into_delay_timer,  # Fx15 - LD   DT, Vx
            SET_SOUND: self.cpu_move_reg_into_sound_timer,  # Fx18 - LD   ST, Vx
            ADD_INDEX: self.cpu_add_reg_into_index,      # Fx1E - ADD  I, Vx
            LD_FONT: self.cpu_load_index_with_reg_sprite,  # Fx29 - LD   F, Vx
            BCD: self.cpu_store_bcd_in_memory,           # Fx33 - LD   B, Vx
            STORE: self.cpu_store_regs_in_memory,        # Fx55 - LD   [I], Vx
            LOAD: self.cpu_read_regs_from_memory,        # Fx65 - LD   Vx, [I]
        }
        self.cpu_operand = 0
        self.cpu_sound = sound
        self.cpu_random = rng if rng is not None else Random()
        self.cpu_cycle_rate = cycle_rate
        self.cpu_timer_divider = timer_divider
        self.cpu_memory = bytearray(MAX_MEMORY)
        self.cpu_reset()

    def __str__(self):
        val = 'PC: {:4X}  OP: {:04X}  {}\n'.format(
            self.cpu_registers['pc'], self.cpu_operand, disassemble(self.cpu_operand))
        for index in range(NUM_REGISTERS):
            val += 'V{:X}: {:2X}\n'.format(index, self.cpu_registers['v'][index])
        val += 'I: {:4X}\n'.format(self.cpu_registers['index'])
        val += 'SP: {:X}\n'.format(self.cpu_registers['sp'])
        return val

    @property
    def cpu_is_blocked(self):
        """
        True while the CPU is waiting for a key press (see Fx0A).
        """
        return self.cpu_blocked_register is not None

    def cpu_reset(self):
        """
        Reset the CPU by blanking out memory, registers, the stack, the
        display, the timers and the keypad, and resetting the stack pointer
        and program counter to their starting values. The font is copied back
        into memory, but any loaded program is lost.
        """
        self.cpu_memory[:] = bytes(MAX_MEMORY)
        self.cpu_memory[FONT_ADDRESS:FONT_ADDRESS + len(FONT_SPRITES)] = bytes(FONT_SPRITES)
        self.cpu_registers['v'] = [0] * NUM_REGISTERS
        self.cpu_registers['pc'] = PROGRAM_COUNTER_START
        self.cpu_registers['sp'] = 0
        self.cpu_registers['index'] = 0
        self.cpu_stack = [0] * STACK_SIZE
        self.cpu_stack_depth = 0
        self.cpu_timers['delay'] = 0
        self.cpu_timers['sound'] = 0
        self.cpu_timer_counter = 0
        self.cpu_display = [[False] * SCREEN_HEIGHT for _ in range(SCREEN_WIDTH)]
        self.cpu_draw_flag = False
        self.cpu_keys = [False] * NUM_KEYS
        self.cpu_blocked_register = None
        self.cpu_operand = 0

    def cpu_load_program(self, program, offset=PROGRAM_COUNTER_START):
        """
        Copy a program image into memory. The image is loaded verbatim, there
        is no header or checksum to check.

        :param program: the bytes of the program
        :param offset: the location in memory at which to load the program
        :raises ProgramTooLargeException: if the program would run past the
            end of memory. Memory is left untouched in that case.
        """
        if offset < 0 or offset + len(program) > MAX_MEMORY:
            raise ProgramTooLargeException(len(program), offset, MAX_MEMORY)
        self.cpu_memory[offset:offset + len(program)] = bytes(program)
        logger.debug("Loaded %d bytes at %03X", len(program), offset)

    def cpu_cycles_for(self, seconds):
        """
        Returns the number of instruction cycles that fit in the specified
        number of seconds, rounded to the nearest whole cycle.
        """
        if seconds <= 0:
            return 0
        return int(math.floor(seconds * self.cpu_cycle_rate + 0.5))

    def cpu_run(self, seconds):
        """
        Run the CPU for the specified amount of emulated time. The caller
        decides how often to call this, and is expected to pass in the time
        elapsed since the last call.

        :param seconds: the elapsed time in seconds
        :return: the number of cycles that were run
        """
        cycles = self.cpu_cycles_for(seconds)
        for _ in range(cycles):
            self.cpu_step()
        return cycles

    def cpu_step(self):
        """
        Run a single cycle: fetch the instruction at the program counter,
        tick the timers, and, unless the CPU is waiting on a key press,
        execute the instruction.
        """
        self.cpu_operand = self.cpu_fetch()
        self.cpu_tick_timers()
        if self.cpu_blocked_register is not None:
            return
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("%03X  %04X  %s", self.cpu_registers['pc'],
                         self.cpu_operand, disassemble(self.cpu_operand))
        self.cpu_execute(decode(self.cpu_operand))

    def cpu_fetch(self):
        """
        Returns the 16-bit instruction word stored at the program counter.
        """
        pc = self.cpu_registers['pc']
        return (self.cpu_memory[pc & MEMORY_MASK] << 8) | self.cpu_memory[(pc + 1) & MEMORY_MASK]

    def cpu_execute_instruction(self, cpu_operator_param):
        """
        Decode and execute the specified instruction word without fetching
        it from memory or ticking the timers.

        :param cpu_operator_param: the instruction word to execute
        """
        self.cpu_operand = cpu_operator_param
        self.cpu_execute(decode(cpu_operator_param))

    def cpu_execute(self, opcode):
        """
        Execute a decoded instruction. Unrecognized instructions (None) are
        skipped over. The program counter is kept within memory afterwards.

        :param opcode: the OpCode to execute, or None
        """
        if opcode is None:
            logger.debug("Skipping unrecognized instruction %04X at %03X",
                         self.cpu_operand, self.cpu_registers['pc'])
            self.cpu_registers['pc'] += 2
        else:
            self.cpu_operation_lookup[opcode.mnemonic](*opcode.operands)
        self.cpu_registers['pc'] &= MEMORY_MASK

    def cpu_tick_timers(self):
        """
        Count one instruction cycle towards the next timer tick, and tick the
        timers once timer_divider cycles have gone by.
        """
        self.cpu_timer_counter += 1
        if self.cpu_timer_counter >= self.cpu_timer_divider:
            self.cpu_timer_counter = 0
            self.cpu_decrement_timers()

    def cpu_decrement_timers(self):
        """
        Decrement both the sound and delay timer. A sound is made when the
        sound timer goes from 1 to 0.
        """
        if self.cpu_timers['sound'] != 0:
            if self.cpu_timers['sound'] == 1 and self.cpu_sound is not None:
                self.cpu_sound.make_sound()
            self.cpu_timers['sound'] -= 1

        if self.cpu_timers['delay'] != 0:
            self.cpu_timers['delay'] -= 1

    def cpu_press_key(self, key):
        """
        Mark a key as pressed. If the CPU is waiting on a key press, the key
        is stored in the waiting register and execution resumes on the next
        cycle.

        :param key: the key number (0x0 - 0xF)
        """
        self._cpu_check_key(key)
        self.cpu_keys[key] = True
        if self.cpu_blocked_register is not None:
            self.cpu_registers['v'][self.cpu_blocked_register] = key
            self.cpu_blocked_register = None

    def cpu_release_key(self, key):
        """
        Mark a key as released.

        :param key: the key number (0x0 - 0xF)
        """
        self._cpu_check_key(key)
        self.cpu_keys[key] = False

    @staticmethod
    def _cpu_check_key(key):
        if not isinstance(key, int) or not 0 <= key < NUM_KEYS:
            raise InvalidKeyException(key)

    def cpu_get_pixel(self, x_axis_position, y_axis_position):
        """
        Returns whether the pixel at the specified location is on.
        """
        return self.cpu_display[x_axis_position][y_axis_position]

    def cpu_clear_screen(self):
        """
        00E0 - CLS

        Turn off every pixel on the display.
        """
        self.cpu_display = [[False] * SCREEN_HEIGHT for _ in range(SCREEN_WIDTH)]
        self.cpu_draw_flag = True
        self.cpu_registers['pc'] += 2

    def cpu_return_from_subroutine(self):
        """
        00EE - RET

        Return from subroutine. Pop the address of the CALL off the stack and
        continue with the instruction following it. Returning with an empty
        stack wraps the stack pointer around to the top slot.
        """
        if self.cpu_stack_depth == 0:
            logger.warning("Return with empty call stack at %03X", self.cpu_registers['pc'])
        else:
            self.cpu_stack_depth -= 1
        self.cpu_registers['sp'] = (self.cpu_registers['sp'] - 1) % STACK_SIZE
        self.cpu_registers['pc'] = self.cpu_stack[self.cpu_registers['sp']] + 2

    def cpu_system_call(self, cpu_address):
        """
        0nnn - SYS nnn

        Jump to machine code routine. Ignored.
        """
        self.cpu_registers['pc'] += 2

    def cpu_jump_to_address(self, cpu_address):
        """
        1nnn - JP nnn

        Jump to address. The address to jump to is taken from the operand as
        follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address
        """
        self.cpu_registers['pc'] = cpu_address

    def cpu_jump_to_subroutine(self, cpu_address):
        """
        2nnn - CALL nnn

        Jump to subroutine. Save the current program counter on the stack. The
        subroutine to jump to is taken from the operand as follows:

           Bits:  15-12    11-8      7-4      3-0
                  unused  address  address  address

        Calls nested more than 16 deep wrap the stack pointer around and
        overwrite the oldest return address.
        """
        if self.cpu_stack_depth >= STACK_SIZE:
            logger.warning("Call stack overflow at %03X, overwriting slot %d",
                           self.cpu_registers['pc'], self.cpu_registers['sp'])
        else:
            self.cpu_stack_depth += 1
        self.cpu_stack[self.cpu_registers['sp']] = self.cpu_registers['pc']
        self.cpu_registers['sp'] = (self.cpu_registers['sp'] + 1) % STACK_SIZE
        self.cpu_registers['pc'] = cpu_address

    def cpu_skip_if_reg_equal_val(self, cpu_source, cpu_value):
        """
        3xkk - SE Vx, kk

        Skip if register contents equal to constant value. The register and
        constant are taken from the operand:

           Bits:  15-12     11-8      7-4       3-0
                  unused   source  constant  constant

        The program counter is updated to skip the next instruction by
        advancing it by 2 more bytes.
        """
        if self.cpu_registers['v'][cpu_source] == cpu_value:
            self.cpu_registers['pc'] += 2
        self.cpu_registers['pc'] += 2

    def cpu_skip_if_reg_not_equal_val(self, cpu_source, cpu_value):
        """
        4xkk - SNE Vx, kk

        Skip if register contents not equal to constant value.

           Bits:  15-12     11-8      7-4       3-0
                  unused   source  constant  constant
        """
        if self.cpu_registers['v'][cpu_source] != cpu_value:
            self.cpu_registers['pc'] += 2
        self.cpu_registers['pc'] += 2

    def cpu_skip_if_reg_equal_reg(self, cpu_source, cpu_target):
        """
        5xy0 - SE Vx, Vy

        Skip if source register is equal to target register.

           Bits:  15-12     11-8      7-4       3-0
                  unused   source    target      0
        """
        if self.cpu_registers['v'][cpu_source] == self.cpu_registers['v'][cpu_target]:
            self.cpu_registers['pc'] += 2
        self.cpu_registers['pc'] += 2

    def cpu_move_value_to_reg(self, cpu_target, cpu_value):
        """
        6xkk - LD Vx, kk

        Move the constant value into the specified register.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    value     value
        """
        self.cpu_registers['v'][cpu_target] = cpu_value
        self.cpu_registers['pc'] += 2

    def cpu_add_value_to_reg(self, cpu_target, cpu_value):
        """
        7xkk - ADD Vx, kk

        Add the constant value to the specified register. The result wraps
        around at 256 and the carry flag is not touched.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    value     value
        """
        temp = self.cpu_registers['v'][cpu_target] + cpu_value
        self.cpu_registers['v'][cpu_target] = temp & REGISTER_MASK
        self.cpu_registers['pc'] += 2

    def cpu_move_reg_into_reg(self, cpu_target, cpu_source):
        """
        8xy0 - LD Vx, Vy

        Move the value of the source register into the target register.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      0
        """
        self.cpu_registers['v'][cpu_target] = self.cpu_registers['v'][cpu_source]
        self.cpu_registers['pc'] += 2

    def cpu_logical_or(self, cpu_target, cpu_source):
        """
        8xy1 - OR Vx, Vy
        """
        self.cpu_registers['v'][cpu_target] |= self.cpu_registers['v'][cpu_source]
        self.cpu_registers['pc'] += 2

    def cpu_logical_and(self, cpu_target, cpu_source):
        """
        8xy2 - AND Vx, Vy
        """
        self.cpu_registers['v'][cpu_target] &= self.cpu_registers['v'][cpu_source]
        self.cpu_registers['pc'] += 2

    def cpu_exclusive_or(self, cpu_target, cpu_source):
        """
        8xy3 - XOR Vx, Vy
        """
        self.cpu_registers['v'][cpu_target] ^= self.cpu_registers['v'][cpu_source]
        self.cpu_registers['pc'] += 2

    def cpu_add_reg_to_reg(self, cpu_target, cpu_source):
        """
        8xy4 - ADD Vx, Vy

        Add the value in the source register to the value in the target
        register, and store the low 8 bits of the result in the target
        register. The register calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      4

        If a carry is generated, VF is set to 1, otherwise to 0.
        """
        temp = self.cpu_registers['v'][cpu_target] + self.cpu_registers['v'][cpu_source]
        self.cpu_registers['v'][cpu_target] = temp & REGISTER_MASK
        self.cpu_registers['v'][FLAG_REGISTER] = 1 if temp > REGISTER_MASK else 0
        self.cpu_registers['pc'] += 2

    def cpu_subtract_reg_from_reg(self, cpu_target, cpu_source):
        """
        8xy5 - SUB Vx, Vy

        Subtract the value in the source register from the value in the
        target register, and store the result in the target register. The
        register calculations are as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      5

        If a borrow is NOT generated, VF is set to 1, otherwise to 0.
        """
        cpu_source_reg = self.cpu_registers['v'][cpu_source]
        cpu_target_reg = self.cpu_registers['v'][cpu_target]
        self.cpu_registers['v'][cpu_target] = (cpu_target_reg - cpu_source_reg) & REGISTER_MASK
        self.cpu_registers['v'][FLAG_REGISTER] = 1 if cpu_target_reg > cpu_source_reg else 0
        self.cpu_registers['pc'] += 2

    def cpu_right_shift_reg(self, cpu_source, cpu_unused):
        """
        8xy6 - SHR Vx

        Shift the bits in the specified register 1 bit to the right. Bit
        0 will be shifted into register VF. The y register is ignored.

           Bits:  15-12     11-8      7-4       3-0
                  unused   source   ignored      6
        """
        cpu_value = self.cpu_registers['v'][cpu_source]
        self.cpu_registers['v'][cpu_source] = cpu_value >> 1
        self.cpu_registers['v'][FLAG_REGISTER] = cpu_value & 0x1
        self.cpu_registers['pc'] += 2

    def cpu_subtract_reg_from_reg1(self, cpu_target, cpu_source):
        """
        8xy7 - SUBN Vx, Vy

        Subtract the value in the target register from the value in the
        source register, and store the result in the target register. The
        result wraps around the same way SUB does.

           Bits:  15-12     11-8      7-4       3-0
                  unused   target    source      7

        If a borrow is NOT generated, VF is set to 1, otherwise to 0.
        """
        cpu_source_reg = self.cpu_registers['v'][cpu_source]
        cpu_target_reg = self.cpu_registers['v'][cpu_target]
        self.cpu_registers['v'][cpu_target] = (cpu_source_reg - cpu_target_reg) & REGISTER_MASK
        self.cpu_registers['v'][FLAG_REGISTER] = 1 if cpu_source_reg > cpu_target_reg else 0
        self.cpu_registers['pc'] += 2

    def cpu_left_shift_reg(self, cpu_source, cpu_unused):
        """
        8xyE - SHL Vx

        Shift the bits in the specified register 1 bit to the left. Bit
        7 will be shifted into register VF. The y register is ignored.

           Bits:  15-12     11-8      7-4       3-0
                  unused   source   ignored      E
        """
        cpu_value = self.cpu_registers['v'][cpu_source]
        self.cpu_registers['v'][cpu_source] = (cpu_value << 1) & REGISTER_MASK
        self.cpu_registers['v'][FLAG_REGISTER] = (cpu_value & HIGH_BIT) >> 7
        self.cpu_registers['pc'] += 2

    def cpu_skip_if_reg_not_equal_reg(self, cpu_source, cpu_target):
        """
        9xy0 - SNE Vx, Vy

        Skip if source register is not equal to target register.

           Bits:  15-12     11-8      7-4       3-0
                  unused   source    target      0
        """
        if self.cpu_registers['v'][cpu_source] != self.cpu_registers['v'][cpu_target]:
            self.cpu_registers['pc'] += 2
        self.cpu_registers['pc'] += 2

    def cpu_load_index_reg_with_value(self, cpu_address):
        """
        Annn - LD I, nnn

        Load index register with constant value.

           Bits:  15-12     11-8      7-4       3-0
                  unused   constant  constant  constant
        """
        self.cpu_registers['index'] = cpu_address
        self.cpu_registers['pc'] += 2

    def cpu_jump_to_v0_plus_value(self, cpu_address):
        """
        Bnnn - JP V0, nnn

        Jump to the address in the operand plus the value of register V0.

           Bits:  15-12     11-8      7-4       3-0
                  unused   address  address  address
        """
        self.cpu_registers['pc'] = cpu_address + self.cpu_registers['v'][0]

    def cpu_generate_random_number(self, cpu_target, cpu_value):
        """
        Cxkk - RND Vx, kk

        A random number between 0 and 255 is generated. The contents of it are
        then ANDed with the constant value passed in the operand. The result is
        stored in the target register.

           Bits:  15-12     11-8      7-4       3-0
                  unused    target    value    value
        """
        self.cpu_registers['v'][cpu_target] = cpu_value & self.cpu_random.randint(0, 255)
        self.cpu_registers['pc'] += 2

    def cpu_draw_sprite(self, cpu_x_source, cpu_y_source, cpu_num_bytes):
        """
        Dxyn - DRW Vx, Vy, n

        Draws the sprite pointed to in the index register at the specified
        x and y coordinates. Drawing is done via an XOR routine, meaning that
        if the target pixel is already turned on, and a pixel is set to be
        turned on at that same location via the draw, then the pixel is turned
        off. Pixels that would land off the right or bottom edge of the screen
        are dropped rather than wrapped. Each sprite is 8 bits (1 byte) wide.
        The num_bytes parameter sets how tall the sprite is. Consecutive bytes
        in the memory pointed to by the index register make up the bytes of
        the sprite. Each bit in the sprite byte determines whether a pixel is
        toggled (1) or left alone (0). For example, assume that the index
        register pointed to the following 7 bytes:

                       bit 0 1 2 3 4 5 6 7

           byte 0          0 1 1 1 1 1 0 0
           byte 1          0 1 0 0 0 0 0 0
           byte 2          0 1 0 0 0 0 0 0
           byte 3          0 1 1 1 1 1 0 0
           byte 4          0 1 0 0 0 0 0 0
           byte 5          0 1 0 0 0 0 0 0
           byte 6          0 1 1 1 1 1 0 0

        This would draw a character on the screen that looks like an 'E'. The
        x_source and y_source tell which registers contain the x and y
        coordinates for the sprite. If writing a pixel to a location causes
        that pixel to be turned off, then VF will be set to 1.

           Bits:  15-12     11-8      7-4       3-0
                  unused    x_source  y_source  num_bytes
        """
        cpu_x_pos = self.cpu_registers['v'][cpu_x_source]
        cpu_y_pos = self.cpu_registers['v'][cpu_y_source]
        cpu_index = self.cpu_registers['index']
        self.cpu_registers['v'][FLAG_REGISTER] = 0

        for cpu_y_index in range(cpu_num_bytes):
            cpu_y_coord = cpu_y_pos + cpu_y_index
            if cpu_y_coord >= SCREEN_HEIGHT:
                break

            cpu_color_byte = self.cpu_memory[(cpu_index + cpu_y_index) & MEMORY_MASK]

            for cpu_x_index in range(SPRITE_WIDTH):
                cpu_x_coord = cpu_x_pos + cpu_x_index
                if cpu_x_coord >= SCREEN_WIDTH:
                    break

                if cpu_color_byte & (HIGH_BIT >> cpu_x_index):
                    cpu_column = self.cpu_display[cpu_x_coord]
                    if cpu_column[cpu_y_coord]:
                        self.cpu_registers['v'][FLAG_REGISTER] = 1
                    cpu_column[cpu_y_coord] = not cpu_column[cpu_y_coord]

        self.cpu_draw_flag = True
        self.cpu_registers['pc'] += 2

    def _cpu_key_is_pressed(self, cpu_source):
        cpu_key_to_check = self.cpu_registers['v'][cpu_source]
        return cpu_key_to_check < NUM_KEYS and self.cpu_keys[cpu_key_to_check]

    def cpu_skip_if_key_pressed(self, cpu_source):
        """
        Ex9E - SKP Vx

        Skip the next instruction if the key whose number is held in the
        source register is pressed.

           Bits:  15-12    11-8      7-4      3-0
                  unused   source     9        E
        """
        if self._cpu_key_is_pressed(cpu_source):
            self.cpu_registers['pc'] += 2
        self.cpu_registers['pc'] += 2

    def cpu_skip_if_key_not_pressed(self, cpu_source):
        """
        ExA1 - SKNP Vx

        Skip the next instruction if the key whose number is held in the
        source register is NOT pressed.

           Bits:  15-12    11-8      7-4      3-0
                  unused   source     A        1
        """
        if not self._cpu_key_is_pressed(cpu_source):
            self.cpu_registers['pc'] += 2
        self.cpu_registers['pc'] += 2

    def cpu_move_delay_timer_into_reg(self, cpu_target):
        """
        Fx07 - LD Vx, DT

        Move the value of the delay timer into the target register.
        """
        self.cpu_registers['v'][cpu_target] = self.cpu_timers['delay']
        self.cpu_registers['pc'] += 2

    def cpu_wait_for_keypress(self, cpu_target):
        """
        Fx0A - LD Vx, K

        Stop execution until a key is pressed. The value of the key pressed
        is moved into the specified register by cpu_press_key. The register
        calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    target     0         A

        The program counter moves past this instruction straight away, the
        CPU only stops executing from the next cycle on.
        """
        self.cpu_blocked_register = cpu_target
        self.cpu_registers['pc'] += 2

    def cpu_move_reg_into_delay_timer(self, cpu_source):
        """
        Fx15 - LD DT, Vx

        Move the value stored in the specified source register into the delay
        timer.
        """
        self.cpu_timers['delay'] = self.cpu_registers['v'][cpu_source]
        self.cpu_registers['pc'] += 2

    def cpu_move_reg_into_sound_timer(self, cpu_source):
        """
        Fx18 - LD ST, Vx

        Move the value stored in the specified source register into the sound
        timer.
        """
        self.cpu_timers['sound'] = self.cpu_registers['v'][cpu_source]
        self.cpu_registers['pc'] += 2

    def cpu_add_reg_into_index(self, cpu_source):
        """
        Fx1E - ADD I, Vx

        Add the value of the register into the index register value. VF is
        not affected.
        """
        self.cpu_registers['index'] = \
            (self.cpu_registers['index'] + self.cpu_registers['v'][cpu_source]) & INDEX_MASK
        self.cpu_registers['pc'] += 2

    def cpu_load_index_with_reg_sprite(self, cpu_source):
        """
        Fx29 - LD F, Vx

        Load the index with the font sprite for the digit in the source
        register. All sprites are 5 bytes long, so the location of the
        specified sprite is its index multiplied by 5.
        """
        self.cpu_registers['index'] = \
            FONT_ADDRESS + self.cpu_registers['v'][cpu_source] * FONT_GLYPH_SIZE
        self.cpu_registers['pc'] += 2

    def cpu_store_bcd_in_memory(self, cpu_source):
        """
        Fx33 - LD B, Vx

        Take the value stored in source and place the digits in the following
        locations:

            hundreds   -> self.memory[index]
            tens       -> self.memory[index + 1]
            ones       -> self.memory[index + 2]

        For example, if the value is 123, then the following values will be
        placed at the specified locations:

             1 -> self.memory[index]
             2 -> self.memory[index + 1]
             3 -> self.memory[index + 2]
        """
        cpu_value = self.cpu_registers['v'][cpu_source]
        cpu_index = self.cpu_registers['index']
        self.cpu_memory[cpu_index & MEMORY_MASK] = cpu_value // 100
        self.cpu_memory[(cpu_index + 1) & MEMORY_MASK] = (cpu_value // 10) % 10
        self.cpu_memory[(cpu_index + 2) & MEMORY_MASK] = cpu_value % 10
        self.cpu_registers['pc'] += 2

    def cpu_store_regs_in_memory(self, cpu_source):
        """
        Fx55 - LD [I], Vx

        Store the V registers in the memory pointed to by the index
        register. The register calculation is as follows:

           Bits:  15-12     11-8      7-4       3-0
                  unused    source     5         5

        Registers V0 through the source register are stored. For example,
        to store all of the V registers, the source register would be 'F'.
        The index register is left unchanged.
        """
        cpu_index = self.cpu_registers['index']
        for cpu_counter in range(cpu_source + 1):
            self.cpu_memory[(cpu_index + cpu_counter) & MEMORY_MASK] = \
                self.cpu_registers['v'][cpu_counter]
        self.cpu_registers['pc'] += 2

    def cpu_read_regs_from_memory(self, cpu_source):
        """
        Fx65 - LD Vx, [I]

        Read the V registers from the memory pointed to by the index
        register. Registers V0 through the source register are loaded, and
        the index register is left unchanged.
        """
        cpu_index = self.cpu_registers['index']
        for cpu_counter in range(cpu_source + 1):
            self.cpu_registers['v'][cpu_counter] = \
                self.cpu_memory[(cpu_index + cpu_counter) & MEMORY_MASK]
        self.cpu_registers['pc'] += 2
