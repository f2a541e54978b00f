from chip8.cpu import CPU
from chip8.decoder import OpCode, decode, disassemble
from chip8.exception import Chip8Exception, InvalidKeyException, ProgramTooLargeException
