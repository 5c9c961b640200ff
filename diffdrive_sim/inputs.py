"""Operator input normalization.

Turns raw device state into the two input pairs the drive modes consume:
- Joystick: pointer displacement -> (magnitude in [0, 1], angle in [0, 2*pi))
- DualAxisController: held arrow keys -> (horizontal, vertical) in [-1, 1]^2

Both classes forward each new pair to an optional callback, mirroring how
the live viewer wires input straight into the simulation.
"""

import math
from typing import Callable, Dict, Optional, Tuple

from .config import AXIS_RATE, JOYSTICK_RADIUS
from .exceptions import InvalidConfiguration

InputCallback = Callable[[float, float], None]

HORIZONTAL = "horizontal"
VERTICAL = "vertical"

ARROW_KEYS: Dict[str, Tuple[str, int]] = {
    "up": (VERTICAL, 1),
    "down": (VERTICAL, -1),
    "left": (HORIZONTAL, 1),
    "right": (HORIZONTAL, -1),
}
"""Arrow key -> (axis, direction). Left is positive steering (counter-clockwise)."""


def normalize_joystick(dx: float, dy: float, radius: float = JOYSTICK_RADIUS) -> Tuple[float, float]:
    """Convert a pointer displacement into joystick magnitude and angle.

    Args:
        dx: Horizontal displacement from the stick center (world units).
        dy: Vertical displacement from the stick center (world units, up positive).
        radius: Displacement that maps to full magnitude.

    Returns:
        (magnitude, angle): magnitude clamped to [0, 1], angle measured
        counter-clockwise from the right horizontal in [0, 2*pi). A zero
        displacement gives (0.0, 0.0).
    """
    distance = math.hypot(dx, dy)
    if distance == 0:
        return 0.0, 0.0

    magnitude = min(distance / radius, 1.0)
    angle = math.atan2(dy, dx) % (2 * math.pi)
    return magnitude, angle


class Joystick:
    """Virtual single-stick joystick driven by pointer drags.

    Attributes:
        radius: Pointer displacement for full magnitude (world units).
        magnitude: Latest normalized magnitude.
        angle: Latest normalized angle (radians).
    """

    def __init__(self, radius: float = JOYSTICK_RADIUS, callback: Optional[InputCallback] = None):
        if not radius > 0:
            raise InvalidConfiguration(f"Joystick radius must be positive, got {radius}")
        self.radius = radius
        self.callback = callback
        self.magnitude = 0.0
        self.angle = 0.0

    def set(self, magnitude: float, angle: float) -> Tuple[float, float]:
        """Store an already-normalized reading and forward it."""
        self.magnitude = magnitude
        self.angle = angle
        if self.callback is not None:
            self.callback(magnitude, angle)
        return magnitude, angle

    def move(self, dx: float, dy: float) -> Tuple[float, float]:
        """Normalize a pointer displacement and forward it."""
        return self.set(*normalize_joystick(dx, dy, self.radius))

    def reset(self) -> Tuple[float, float]:
        """Release the stick."""
        return self.set(0.0, 0.0)

    def reading(self) -> Tuple[float, float]:
        return self.magnitude, self.angle

    def coordinates(self) -> Tuple[float, float]:
        """Stick tip offset from the center, in world units."""
        r = self.magnitude * self.radius
        return r * math.cos(self.angle), r * math.sin(self.angle)


class DualAxisController:
    """Two-axis pad whose axes ramp while keys are held.

    Each tick, every held axis moves by `rate` in its held direction; both
    axes are clamped to [-1, 1]. Releasing a key freezes that axis at its
    current value, as on a trimmed RC transmitter; `reset` zeroes both.

    Attributes:
        rate: Axis change per tick.
        horizontal: Current horizontal value (steering, left positive).
        vertical: Current vertical value (throttle, up positive).
    """

    def __init__(self, rate: float = AXIS_RATE, callback: Optional[InputCallback] = None):
        if not rate > 0:
            raise InvalidConfiguration(f"Axis rate must be positive, got {rate}")
        self.rate = rate
        self.callback = callback
        self.horizontal = 0.0
        self.vertical = 0.0
        self._held: Dict[str, int] = {HORIZONTAL: 0, VERTICAL: 0}

    def hold(self, axis: str, direction: int) -> None:
        """Start ramping an axis in a direction (+1 or -1)."""
        if axis not in self._held:
            raise ValueError(f"Unknown axis: {axis}")
        self._held[axis] = 1 if direction > 0 else -1

    def release(self, axis: str) -> None:
        """Stop ramping an axis."""
        if axis not in self._held:
            raise ValueError(f"Unknown axis: {axis}")
        self._held[axis] = 0

    def press_key(self, key: str) -> bool:
        """Handle an arrow key press. Returns False for unmapped keys."""
        if key not in ARROW_KEYS:
            return False
        self.hold(*ARROW_KEYS[key])
        return True

    def release_key(self, key: str) -> bool:
        """Handle an arrow key release. Returns False for unmapped keys."""
        if key not in ARROW_KEYS:
            return False
        self.release(ARROW_KEYS[key][0])
        return True

    def tick(self) -> Tuple[float, float]:
        """Advance held axes by one step and forward (horizontal, vertical)."""
        self.horizontal = max(-1.0, min(1.0, self.horizontal + self._held[HORIZONTAL] * self.rate))
        self.vertical = max(-1.0, min(1.0, self.vertical + self._held[VERTICAL] * self.rate))
        if self.callback is not None:
            self.callback(self.horizontal, self.vertical)
        return self.horizontal, self.vertical

    def reset(self) -> None:
        self.horizontal = 0.0
        self.vertical = 0.0
        self._held = {HORIZONTAL: 0, VERTICAL: 0}
