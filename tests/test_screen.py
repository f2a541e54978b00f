import pygame
import pytest

from chip8.screen import PIXEL_COLORS, Screen


@pytest.fixture
def screen():
    project_screen = Screen(ratio=2)
    project_screen.init_display()
    yield project_screen
    pygame.display.quit()


def color_at(screen, x, y):
    return tuple(screen.screen_surface.get_at((x, y)))[:3]


def test_window_is_scaled(screen):
    assert screen.screen_surface.get_size() == (128, 64)


def test_render_paints_display_and_consumes_draw_flag(screen, cpu):
    cpu.cpu_execute_instruction(0xD015)
    screen.render(cpu)
    assert not cpu.cpu_draw_flag
    on = tuple(PIXEL_COLORS[1])[:3]
    off = tuple(PIXEL_COLORS[0])[:3]
    # The top row of the "0" glyph covers Chip 8 pixels 0-3
    assert color_at(screen, 0, 0) == on
    assert color_at(screen, 7, 1) == on
    assert color_at(screen, 8, 0) == off
    # Second row: only pixels 0 and 3 are lit
    assert color_at(screen, 2, 2) == off


def test_render_after_clear(screen, cpu):
    cpu.cpu_execute_instruction(0xD015)
    screen.render(cpu)
    cpu.cpu_execute_instruction(0x00E0)
    screen.render(cpu)
    assert color_at(screen, 0, 0) == tuple(PIXEL_COLORS[0])[:3]
