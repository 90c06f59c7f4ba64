"""pygame implementations of the display, keypad and audio collaborators."""

import numpy as np
import pygame

from octocore.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from octocore.peripherals import FrameBuffer, KeypadState
from octocore.rendering import create_color_scheme, fade_intensity, intensity_to_rgb

# Classic layout: the left block of a QWERTY keyboard mirrors the
# 4x4 COSMAC VIP keypad.
KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}

SAMPLE_RATE = 44100
TONE_FREQUENCY = 441
TONE_VOLUME = 0.25


class PygameScreen(FrameBuffer):
    """Window that shows the frame buffer with a phosphor fade."""

    def __init__(self, scale: int = 10, color_scheme: str = "white", fade_factor: float = 0.6,
                 caption: str = "CHIP-8"):
        super().__init__()
        self.scale = scale
        self.fade_factor = fade_factor
        self.on_color, self.off_color = create_color_scheme(color_scheme)
        self.intensity = np.zeros((SCREEN_WIDTH, SCREEN_HEIGHT), dtype=np.float32)
        self.surface = pygame.display.set_mode((SCREEN_WIDTH * scale, SCREEN_HEIGHT * scale))
        pygame.display.set_caption(caption)
        self.dirty = True

    @property
    def fading(self) -> bool:
        return bool(np.any((self.intensity > 0) & ~self.pixels))

    def refresh(self) -> None:
        """Redraw if the machine changed the screen or a fade is in progress."""
        if not (self.consume_dirty() or self.fading):
            return
        self.intensity = fade_intensity(self.intensity, self.pixels, self.fade_factor)
        frame = intensity_to_rgb(self.intensity, self.scale, self.on_color, self.off_color)
        # surfarray expects (width, height, 3)
        pygame.surfarray.blit_array(self.surface, np.transpose(frame, (1, 0, 2)))
        pygame.display.flip()


class PygameKeypad(KeypadState):
    """Keypad fed from pygame keyboard events."""

    def handle_event(self, event) -> None:
        if event.type == pygame.KEYDOWN and event.key in KEY_MAP:
            self.press(KEY_MAP[event.key])
        elif event.type == pygame.KEYUP and event.key in KEY_MAP:
            self.release(KEY_MAP[event.key])


class PygameAudio:
    """Square-wave beeper that loops while the sound timer runs."""

    def __init__(self, frequency: int = TONE_FREQUENCY, volume: float = TONE_VOLUME):
        pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=1)
        self.sound = pygame.sndarray.make_sound(self._square_wave(frequency, volume))
        self.active = False

    @staticmethod
    def _square_wave(frequency: int, volume: float) -> np.ndarray:
        period = SAMPLE_RATE // frequency
        samples = np.arange(period * frequency)
        amplitude = int(32767 * volume)
        wave = np.where((samples % period) < period // 2, amplitude, -amplitude).astype(np.int16)
        channels = pygame.mixer.get_init()[2]
        if channels > 1:
            wave = np.repeat(wave[:, None], channels, axis=1)
        return wave

    def set_tone_active(self, active: bool) -> None:
        if active and not self.active:
            self.sound.play(loops=-1)
        elif not active and self.active:
            self.sound.stop()
        self.active = active

    def close(self) -> None:
        self.sound.stop()
        pygame.mixer.quit()
