import logging
from array import array

import pygame
from pygame import mixer

logger = logging.getLogger(__name__)

# Mixer settings: 16-bit signed mono samples
SAMPLE_RATE = 22050
SAMPLE_SIZE = -16
CHANNELS = 1

# The beep is a short square wave
TONE_FREQUENCY = 440
TONE_DURATION = 0.1
TONE_VOLUME = 4096


class Buzzer(object):
    """
    Makes the Chip 8 beep through pygame's mixer. Pass an instance to the CPU
    as its sound object.
    """
    def __init__(self, frequency=TONE_FREQUENCY, duration=TONE_DURATION):
        self.buzzer_frequency = frequency
        self.buzzer_duration = duration
        self.buzzer_sound = None

    def init_mixer(self):
        """
        Open the audio device and build the tone. If no audio device is
        available the buzzer stays silent.

        :return: True if sound is available
        """
        try:
            mixer.init(SAMPLE_RATE, SAMPLE_SIZE, CHANNELS)
        except pygame.error as error:
            logger.warning("Audio unavailable, sound disabled: %s", error)
            return False
        self.buzzer_sound = mixer.Sound(buffer=self.build_tone())
        return True

    def build_tone(self):
        """
        Returns the raw samples of one beep, laid out for the mixer's actual
        sample rate and channel count.
        """
        sample_rate, _, channels = mixer.get_init()
        half_period = max(1, sample_rate // (self.buzzer_frequency * 2))
        samples = array('h')
        for sample in range(int(sample_rate * self.buzzer_duration)):
            value = TONE_VOLUME if (sample // half_period) % 2 == 0 else -TONE_VOLUME
            samples.extend([value] * channels)
        return samples.tobytes()

    def make_sound(self):
        """
        Play one beep. Does nothing when sound is unavailable.
        """
        if self.buzzer_sound is None:
            logger.debug("Beep!")
            return
        self.buzzer_sound.play()
