from pygame import display, Color, draw

from chip8.cpu import SCREEN_HEIGHT, SCREEN_WIDTH

SCREEN_NAME = 'CHIP8 Emulator'

# The default number of window pixels used for each Chip 8 pixel
DEFAULT_SCALE = 10

# The colors of the pixels to draw. The Chip 8 supports two colors: 0 (off)
# and 1 (on). The format of the colors is in RGBA format.
PIXEL_COLORS = {
    0: Color(0, 0, 0, 255),
    1: Color(250, 250, 250, 255)
}


class Screen(object):
    """
    A class to show the Chip 8 display in a pygame window. The original Chip 8
    screen was 64 x 32 with 2 colors. In this emulator, this translates to
    color 0 (off) and color 1 (on). The pixels themselves are kept by the CPU;
    the screen only paints them.
    """
    def __init__(self, ratio=DEFAULT_SCALE, screen_height=SCREEN_HEIGHT, screen_width=SCREEN_WIDTH):
        """
        Initializes the main screen. The scaling ratio is used to modify
        the size of the main screen, since the original resolution of the
        Chip 8 was 64 x 32, which is quite small.

        :param ratio: the scaling factor to apply to the screen
        :param screen_height: the height of the screen in Chip 8 pixels
        :param screen_width: the width of the screen in Chip 8 pixels
        """
        self.screen_height = screen_height
        self.screen_width = screen_width
        self.scaling_ratio = ratio
        self.screen_surface = None

    def init_display(self):
        """
        Initialize a window large enough to hold the scaled screen.
        """
        display.init()
        self.screen_surface = display.set_mode(
            ((self.screen_width * self.scaling_ratio),
             (self.screen_height * self.scaling_ratio)))
        display.set_caption(SCREEN_NAME)
        self.screen_surface.fill(PIXEL_COLORS[0])
        display.flip()

    def draw_screen_pixel(self, x_axis_position, y_axis_position, pixel_color):
        """
        Turn a pixel on or off at the specified location on the screen. Note
        that the pixel will not automatically be drawn on the screen, you
        must call update_screen() to flip the drawing buffer to the display.
        The coordinate system starts with (0, 0) being in the top left of the
        screen.

        :param x_axis_position: the x coordinate to place the pixel
        :param y_axis_position: the y coordinate to place the pixel
        :param pixel_color: the color of the pixel to draw
        """
        x_axis_base_position = x_axis_position * self.scaling_ratio
        y_axis_base_position = y_axis_position * self.scaling_ratio
        draw.rect(self.screen_surface,
                  PIXEL_COLORS[pixel_color],
                  (x_axis_base_position, y_axis_base_position, self.scaling_ratio, self.scaling_ratio))

    def clear_screen(self):
        """
        Turns off all the pixels on the screen (writes color 0 to all pixels).
        """
        self.screen_surface.fill(PIXEL_COLORS[0])

    def render(self, cpu):
        """
        Paint the CPU's display buffer and flip it to the window. The CPU's
        draw flag is consumed.

        :param cpu: the CPU whose display should be shown
        """
        self.clear_screen()
        for x_axis_position in range(self.screen_width):
            for y_axis_position in range(self.screen_height):
                if cpu.cpu_get_pixel(x_axis_position, y_axis_position):
                    self.draw_screen_pixel(x_axis_position, y_axis_position, 1)
        self.update_screen()
        cpu.cpu_draw_flag = False

    @staticmethod
    def update_screen():
        """
        Updates the display by swapping the back buffer and screen buffer.
        """
        display.flip()
