"""Configuration parameters for the differential-drive simulator.

This module centralizes all configuration parameters including:
- Physical robot parameters
- Drive mode deadbands and gains
- Operator input normalization
- Simulation timing
- Display settings (camera, trail, colors)

All parameters are documented with their purpose, units and the reasoning
behind the chosen value.
"""

import math

# ============================================================================
# Physical Robot Parameters
# ============================================================================

WHEELBASE = 2.25
"""Distance between left and right wheels (meters).
Also used as the side length of the drawn robot body."""

MAX_SPEED = 2.0
"""Maximum wheel velocity magnitude (m/s).

Every wheel command is clamped to [-MAX_SPEED, MAX_SPEED] before integration,
and every drive mode is built so that its output never needs clamping."""

START_X = 5.0
"""Initial x position of the robot (meters). Center of the default view."""

START_Y = 5.0
"""Initial y position of the robot (meters). Center of the default view."""

START_HEADING = math.pi / 2
"""Initial heading (radians, counter-clockwise from +x).
pi/2 points the robot "up" the screen so that pushing the stick up drives it
forward in every drive mode."""


# ============================================================================
# Drive Mode Parameters
# ============================================================================

ARCADE_MAGNITUDE_DEADBAND = 5e-2
"""Stick magnitude below which arcade drive outputs zero (range: [0, 1])."""

ARCADE_ANGLE_DEADBAND = 7e-2
"""Offset from vertical (radians) treated as "straight ahead" in arcade drive.

About 4 degrees. Small enough that diagonal pushes still turn, large enough
that a hand-held mouse joystick can hold a straight line."""

CURVATURE_MAGNITUDE_DEADBAND = 5e-2
"""Throttle axis deadband for curvature drive (range: [0, 1])."""

CURVATURE_ANGLE_DEADBAND = 5e-2
"""Steering axis deadband for curvature drive (range: [0, 1]).

The dual-axis pad moves in AXIS_RATE increments, so a steering key held for
a single tick (0.05) already sits on the band edge and leaves it."""

STANDARD_MAGNITUDE_DEADBAND = 5e-2
"""Stick magnitude below which standard drive outputs zero (range: [0, 1])."""

STANDARD_ANGLE_DEADBAND = 7e-2
"""Heading error (radians) inside which standard drive stops turning and
drives straight forwards or backwards."""

STANDARD_TURN_GAIN = 0.75
"""Proportional turn gain K for standard drive (dimensionless, range: [0, 1]).

Turn power = lerp(0, K * max, 2 * |error| / pi) + C, so a 90 degree error
turns at K * max + C before clamping.

Tuning rationale:
- At the 50ms tick and MAX_SPEED = 2.0 a full-power spin rotates
  ~5 degrees per tick, which overshoots the 4 degree deadband
- Scaling with the error lets the robot settle into the deadband
"""

STANDARD_TURN_OFFSET = 0.25
"""Baseline turn power C for standard drive (m/s).

Keeps small heading errors from producing a turn too slow to ever reach the
deadband. Must stay well below MAX_SPEED."""


# ============================================================================
# Operator Input Parameters
# ============================================================================

JOYSTICK_RADIUS = 1.0
"""Pointer displacement (world units) that maps to full joystick magnitude."""

AXIS_RATE = 0.05
"""Change per tick of a held dual-axis key (range: (0, 1]).
At the 50ms tick a held key takes one second to reach full deflection."""


# ============================================================================
# Simulation Timing
# ============================================================================

TICK_INTERVAL = 0.05
"""Nominal update interval (seconds). 20 Hz control rate."""

DEFAULT_TICKS = 100
"""Number of ticks run by the headless command-line simulation (5 seconds)."""


# ============================================================================
# Display Parameters
# ============================================================================

VIEW_SIZE = 10.0
"""Width and height of the visible world window (meters)."""

CAMERA_MAX_OFFSET = 2.0
"""Distance the robot may drift from the view center before the camera
follows it (meters, applied per axis)."""

TRAIL_INTERVAL = 0.5
"""Minimum simulated time between recorded trail points (seconds)."""

TRAIL_MAX_POINTS = 1000
"""Maximum number of trail points kept; the oldest are dropped first."""

LIVE_VIEW_INTERVAL_MS = 50
"""Animation timer interval for the live viewer (milliseconds).
Matches TICK_INTERVAL so one frame advances the simulation by one tick."""


# ============================================================================
# Visualization Colors
# ============================================================================

COLOR_BACKGROUND = "#333333"
"""Field background color."""

COLOR_GRID = "#000000"
"""One-meter grid line color."""

COLOR_TRAIL = "#44cc8855"
"""Trail color (semi-transparent green)."""

COLOR_BODY = "#999999"
"""Robot frame fill color."""

COLOR_BODY_EDGE = "#cccccc"
"""Robot frame outline color."""

COLOR_WHEEL = "#555555"
"""Wheel fill color."""

COLOR_FRONT = "#ff0000"
"""Front axle marker color."""

COLOR_BACK = "#0000ff"
"""Rear axle marker color."""

COLOR_STICK = "#0088ff"
"""Joystick tip color in the live viewer."""

COLOR_TEXT = "#fffdee"
"""Light text color for labels on the dark background."""

# Terminal color codes (ANSI escape sequences)
TERM_GREEN = "\033[38;2;68;204;136m"
"""Terminal color code matching the trail color (RGB: 68, 204, 136)."""

TERM_BLUE = "\033[38;2;0;136;255m"
"""Terminal color code matching the joystick color (RGB: 0, 136, 255)."""

TERM_RESET = "\033[0m"
"""Terminal color reset code."""
