import logging

import pygame
import pytest

from chip8.cpu import CYCLE_RATE
from chip8.main import KEY_MAPPINGS, handle_event, parse_arguments, read_rom, screen_cpu_connector
from chip8.screen import DEFAULT_SCALE


def test_parse_arguments_defaults():
    args = parse_arguments(["game.ch8"])
    assert args.rom == "game.ch8"
    assert args.scale == DEFAULT_SCALE
    assert args.cycle_rate == CYCLE_RATE
    assert args.timer_divider == 1
    assert not args.debug


def test_parse_arguments_options():
    args = parse_arguments(["game.ch8", "-s", "4", "-r", "1200", "--timer-divider", "20", "--debug"])
    assert args.scale == 4
    assert args.cycle_rate == 1200
    assert args.timer_divider == 20
    assert args.debug


@pytest.mark.parametrize("option", ["-s", "-r", "--timer-divider"])
def test_parse_arguments_rejects_non_positive(option):
    with pytest.raises(SystemExit):
        parse_arguments(["game.ch8", option, "0"])


def test_key_mappings_cover_keypad():
    assert sorted(KEY_MAPPINGS.values()) == list(range(16))


def test_key_events_reach_cpu(cpu):
    assert handle_event(cpu, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_q))
    assert cpu.cpu_keys[0x4]
    assert handle_event(cpu, pygame.event.Event(pygame.KEYUP, key=pygame.K_q))
    assert not cpu.cpu_keys[0x4]


def test_unmapped_key_is_ignored(cpu):
    assert handle_event(cpu, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_p))
    assert not any(cpu.cpu_keys)


def test_key_event_releases_waiting_cpu(cpu):
    cpu.cpu_execute_instruction(0xF30A)
    handle_event(cpu, pygame.event.Event(pygame.KEYDOWN, key=pygame.K_v))
    assert not cpu.cpu_is_blocked
    assert cpu.cpu_registers['v'][3] == 0xF


@pytest.mark.parametrize("event", [
    pygame.event.Event(pygame.QUIT),
    pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE),
])
def test_quit_events_stop_emulator(cpu, event):
    assert not handle_event(cpu, event)


def test_read_rom(tmp_path):
    rom = tmp_path / "test.ch8"
    rom.write_bytes(b'\x00\xE0\x12\x00')
    assert read_rom(str(rom)) == b'\x00\xE0\x12\x00'


def test_missing_rom_is_reported(tmp_path, caplog):
    args = parse_arguments([str(tmp_path / "missing.ch8")])
    with caplog.at_level(logging.ERROR, logger='chip8.main'):
        assert screen_cpu_connector(args) == 1
    assert "Unable to read ROM" in caplog.text


def test_oversized_rom_is_reported(tmp_path, caplog):
    rom = tmp_path / "huge.ch8"
    rom.write_bytes(b'\x00' * 4000)
    args = parse_arguments([str(rom)])
    with caplog.at_level(logging.ERROR, logger='chip8.main'):
        assert screen_cpu_connector(args) == 1
    assert "Unable to load ROM" in caplog.text
