"""CHIP-8 rendering utilities for visualization."""

from typing import Tuple

import numpy as np

Color = Tuple[int, int, int]

COLOR_SCHEMES = {
    "white": ((255, 255, 255), (0, 0, 0)),  # White on black
    "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
    "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
    "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
    "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
}


def create_color_scheme(scheme: str = "white") -> Tuple[Color, Color]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name, one of ``COLOR_SCHEMES``

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    if scheme not in COLOR_SCHEMES:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(COLOR_SCHEMES.keys())}"
        )
    return COLOR_SCHEMES[scheme]


def chip8_display_to_rgb(
    display: np.ndarray,
    scale: int = 8,
    on_color: Color = (255, 255, 255),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Convert CHIP-8 boolean display to RGB array with optional upscaling.

    Args:
        display: Boolean array of shape (64, 32) representing CHIP-8 display
        scale: Upscaling factor for better visibility
        on_color: RGB color for "on" pixels
        off_color: RGB color for "off" pixels

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    return intensity_to_rgb(np.asarray(display, dtype=np.float32), scale, on_color, off_color)


def fade_intensity(
    intensity: np.ndarray,
    display: np.ndarray,
    fade_factor: float,
) -> np.ndarray:
    """Advance the phosphor simulation by one refresh.

    Lit pixels jump straight to full intensity; unlit ones move
    ``fade_factor`` of the way toward zero, which hides the flicker of
    sprites that are erased and redrawn every frame.

    Args:
        intensity: Float array of shape (64, 32) with values in [0, 1]
        display: Boolean array of shape (64, 32)
        fade_factor: Interpolation factor in (0, 1]

    Returns:
        New intensity array
    """
    lit = np.asarray(display, dtype=np.bool_)
    faded = intensity * (1.0 - fade_factor)
    # Snap tiny residues to zero so fading converges
    faded[faded < 1.0 / 255] = 0.0
    return np.where(lit, 1.0, faded).astype(np.float32)


def intensity_to_rgb(
    intensity: np.ndarray,
    scale: int = 8,
    on_color: Color = (255, 255, 255),
    off_color: Color = (0, 0, 0),
) -> np.ndarray:
    """Blend between off and on colors per pixel and upscale.

    Args:
        intensity: Float array of shape (64, 32) with values in [0, 1]
        scale: Upscaling factor
        on_color: RGB color at intensity 1
        off_color: RGB color at intensity 0

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    # (64 width, 32 height) -> image layout (32 height, 64 width)
    pixel_values = np.asarray(intensity, dtype=np.float32).T
    on = np.asarray(on_color, dtype=np.float32)
    off = np.asarray(off_color, dtype=np.float32)

    rgb_frame = (off + pixel_values[..., None] * (on - off)).round().astype(np.uint8)

    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame
