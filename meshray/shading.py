"""Lighting and material settings, and the viewport arithmetic of the renderer."""

from __future__ import annotations

import math
from dataclasses import dataclass

# Divisor that maps the integer slider positions onto the stored values.
_SLIDER_SCALE = 100.0


@dataclass
class ShadingSettings:
    """Parameters the user can change from the control panel.

    Light intensity and the index of refraction come from sliders whose
    positions are a hundred times the stored value; the Phong exponent is
    taken from its slider as is.
    """

    blinn_phong: bool = True
    transparent: bool = True
    eta: float = 1.5
    light_intensity: float = 1.0
    shininess: float = 50.0
    light_distance: float = 5.0
    ground_distance: float = 0.78

    def update_light_intensity(self, value: int) -> None:
        """Set the light intensity from a slider position (0..200)."""
        self.light_intensity = value / _SLIDER_SCALE

    def update_shininess(self, value: int) -> None:
        """Set the Phong exponent from a slider position (0..200)."""
        self.shininess = float(value)

    def update_eta(self, value: int) -> None:
        """Set the index of refraction from a slider position (0..500)."""
        self.eta = value / _SLIDER_SCALE

    def select_blinn_phong(self) -> None:
        """Use the Blinn-Phong specular model."""
        self.blinn_phong = True

    def select_cook_torrance(self) -> None:
        """Use the Cook-Torrance specular model."""
        self.blinn_phong = False

    def set_transparent(self, transparent: bool) -> None:
        """Choose between a transparent and an opaque surface."""
        self.transparent = bool(transparent)


def next_power2(x: int) -> int:
    """The smallest power of two not below ``x``; 1 for 0."""
    if x < 0:
        raise ValueError("next_power2 needs a non-negative integer")
    if x == 0:
        return 1
    return 1 << (x - 1).bit_length()


def perspective_for_size(width: int, height: int,
                         radius: float) -> tuple[float, float, float, float]:
    """Projection parameters for a viewport of the given size.

    Returns ``(fov_degrees, aspect, near, far)``.  A wide viewport gets a
    60-degree vertical field of view; a tall one widens the vertical angle
    so the horizontal angle stays at 60 degrees.  The clip planes are placed
    relative to the radius of the scene's bounding sphere.
    """
    if width <= 0 or height <= 0:
        raise ValueError("viewport dimensions must be positive")
    aspect = width / height
    if width > height:
        fov = 60.0
    else:
        fov = (240.0 / math.pi) * math.atan(height / width)
    return fov, aspect, 0.1 * radius, 20.0 * radius


def dispatch_size(width: int, height: int, group_x: int = 8,
                  group_y: int = 8) -> tuple[int, int]:
    """Number of compute work groups covering a ``width`` x ``height`` image.

    Each dimension is rounded up to a power of two before being divided by
    the work-group size.
    """
    if group_x <= 0 or group_y <= 0:
        raise ValueError("work-group sizes must be positive")
    return next_power2(width) // group_x, next_power2(height) // group_y