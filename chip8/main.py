import argparse
import logging
import sys

import pygame

from chip8.buzzer import Buzzer
from chip8.cpu import CPU, CYCLE_RATE
from chip8.exception import ProgramTooLargeException
from chip8.screen import DEFAULT_SCALE, Screen

logger = logging.getLogger(__name__)

# The number of frames per second the window is polled and redrawn at
FRAME_RATE = 60

# Sets which keys on the keyboard map to the Chip 8 keys. The 4 x 4 block
# on the left of a QWERTY keyboard stands in for the hex keypad:
#
#     1 2 3 4        1 2 3 C
#     Q W E R   ->   4 5 6 D
#     A S D F        7 8 9 E
#     Z X C V        A 0 B F
KEY_MAPPINGS = {
    pygame.K_1: 0x1,
    pygame.K_2: 0x2,
    pygame.K_3: 0x3,
    pygame.K_4: 0xC,
    pygame.K_q: 0x4,
    pygame.K_w: 0x5,
    pygame.K_e: 0x6,
    pygame.K_r: 0xD,
    pygame.K_a: 0x7,
    pygame.K_s: 0x8,
    pygame.K_d: 0x9,
    pygame.K_f: 0xE,
    pygame.K_z: 0xA,
    pygame.K_x: 0x0,
    pygame.K_c: 0xB,
    pygame.K_v: 0xF,
}


def read_rom(filename):
    """
    Returns the contents of the ROM file.

    :param filename: the name of the file to load
    """
    with open(filename, 'rb') as rom_file:
        return rom_file.read()


def handle_event(cpu, event):
    """
    Pass a pygame event on to the CPU.

    :return: False if the emulator should stop
    """
    if event.type == pygame.QUIT:
        return False
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return False
        if event.key in KEY_MAPPINGS:
            cpu.cpu_press_key(KEY_MAPPINGS[event.key])
    elif event.type == pygame.KEYUP and event.key in KEY_MAPPINGS:
        cpu.cpu_release_key(KEY_MAPPINGS[event.key])
    return True


def screen_cpu_connector(args):
    """
    Runs the main emulator loop with the specified arguments.

    :param args: the parsed command-line arguments
    :return: the process exit status
    """
    try:
        program = read_rom(args.rom)
    except IOError as error:
        logger.error("Unable to read ROM %s: %s", args.rom, error)
        return 1

    buzzer = Buzzer()
    project_cpu = CPU(buzzer, cycle_rate=args.cycle_rate, timer_divider=args.timer_divider)
    try:
        project_cpu.cpu_load_program(program)
    except ProgramTooLargeException as error:
        logger.error("Unable to load ROM %s: %s", args.rom, error)
        return 1
    logger.info("Loaded %s (%d bytes)", args.rom, len(program))

    pygame.init()
    buzzer.init_mixer()
    project_screen = Screen(ratio=args.scale)
    project_screen.init_display()
    clock = pygame.time.Clock()
    running = True

    while running:
        elapsed = clock.tick(FRAME_RATE) / 1000.0

        # Key events are handled before the CPU runs so that a key press
        # releases a waiting CPU on this frame
        for event in pygame.event.get():
            if not handle_event(project_cpu, event):
                running = False

        project_cpu.cpu_run(elapsed)

        if project_cpu.cpu_draw_flag:
            project_screen.render(project_cpu)

    logger.debug("Final state:\n%s", project_cpu)
    pygame.quit()
    return 0


def parse_arguments(argv=None):
    parser = argparse.ArgumentParser(
        description="Starts a simple Chip 8 emulator")
    parser.add_argument(
        "rom", help="the ROM file to load on startup")
    parser.add_argument(
        "-s", "--scale", help="the scale factor to apply to the display "
                              "(default is {})".format(DEFAULT_SCALE),
        type=int, default=DEFAULT_SCALE, dest="scale")
    parser.add_argument(
        "-r", "--cycle-rate", help="the number of instructions to execute "
                                   "per second (default is {})".format(CYCLE_RATE),
        type=int, default=CYCLE_RATE, dest="cycle_rate")
    parser.add_argument(
        "--timer-divider", help="the number of instructions per timer tick; "
                                "1 ticks the timers every instruction, "
                                "cycle rate / 60 ticks them at 60 Hz (default is 1)",
        type=int, default=1, dest="timer_divider")
    parser.add_argument(
        "--debug", help="enable verbose debug logging, including an "
                        "instruction trace", action="store_true")
    args = parser.parse_args(argv)
    if args.scale < 1:
        parser.error("scale must be at least 1")
    if args.cycle_rate < 1:
        parser.error("cycle rate must be at least 1")
    if args.timer_divider < 1:
        parser.error("timer divider must be at least 1")
    return args


def main(argv=None):
    args = parse_arguments(argv)
    logging.basicConfig(level=logging.DEBUG if args.debug else logging.INFO)
    return screen_cpu_connector(args)


if __name__ == "__main__":
    sys.exit(main())
