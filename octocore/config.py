"""Emulator run configuration."""

from flax.struct import dataclass, field

from octocore.rendering import COLOR_SCHEMES
from octocore.logging import LOG_LEVELS


@dataclass
class EmulatorConfig:
    """Settings for one emulator run.

    Attributes:
        instructions_per_frame: Instructions executed between timer ticks
        fps: Frames (and timer ticks) per second
        scale: Window pixels per CHIP-8 pixel
        color_scheme: Name of a scheme in ``octocore.rendering.COLOR_SCHEMES``
        fade_factor: Fraction of the remaining distance an unlit pixel fades
            toward the background on each refresh (1.0 disables fading)
        seed: Seed of the PRNG used by the random instruction
        log_level: Console logger threshold
        trace: Log every executed instruction at DEBUG level
    """
    instructions_per_frame: int = field(pytree_node=False, default=10)
    fps: int = field(pytree_node=False, default=60)
    scale: int = field(pytree_node=False, default=10)
    color_scheme: str = field(pytree_node=False, default="white")
    fade_factor: float = field(pytree_node=False, default=0.6)
    seed: int = field(pytree_node=False, default=0)
    log_level: str = field(pytree_node=False, default="INFO")
    trace: bool = field(pytree_node=False, default=False)

    def validate(self) -> "EmulatorConfig":
        """Raise ``ValueError`` for settings the emulator cannot run with."""
        if self.instructions_per_frame < 1:
            raise ValueError(
                f"instructions_per_frame must be positive, got {self.instructions_per_frame}"
            )
        if self.fps < 1:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if self.scale < 1:
            raise ValueError(f"scale must be positive, got {self.scale}")
        if self.color_scheme not in COLOR_SCHEMES:
            raise ValueError(
                f"Unknown color scheme '{self.color_scheme}'. "
                f"Available: {list(COLOR_SCHEMES.keys())}"
            )
        if not 0.0 < self.fade_factor <= 1.0:
            raise ValueError(f"fade_factor must be in (0, 1], got {self.fade_factor}")
        if self.log_level.upper() not in LOG_LEVELS:
            raise ValueError(
                f"Unknown log level '{self.log_level}'. Available: {list(LOG_LEVELS)}"
            )
        return self

    def to_dict(self) -> dict:
        return {
            "instructions_per_frame": self.instructions_per_frame,
            "fps": self.fps,
            "scale": self.scale,
            "color_scheme": self.color_scheme,
            "fade_factor": self.fade_factor,
            "seed": self.seed,
            "log_level": self.log_level,
            "trace": self.trace,
        }
