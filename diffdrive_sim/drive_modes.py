"""Drive modes: operator input to wheel velocity control laws.

Every drive mode implements the same call,

    controller.set(input_a, input_b, pose) -> WheelState

and differs only in how it reads its two inputs:

- ARCADE: (magnitude, joystick angle). One stick sets both angular velocity
  (from the angle off robot-forward) and turn radius (from the magnitude).
- CURVATURE: (throttle, steering), both in [-1, 1]. "Cheesy" drive: throttle
  sets tangential speed, steering sets angular velocity.
- STANDARD_FIELD_CENTRIC: (magnitude, absolute angle). Turn in place until
  the robot faces the stick direction (or its reverse), then drive straight.
- STANDARD_ROBOT_CENTRIC: same law with the stick read relative to the robot,
  stick-up meaning robot-forward.

Controllers hold no state apart from their immutable configuration, so one
instance can serve any number of ticks. Inputs outside their documented
ranges are clamped into them, which keeps every wheel command within
max_output_speed.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from . import config
from .exceptions import InvalidConfiguration
from .model import DifferentialDrive
from .robot import WheelState

TWO_PI = 2 * math.pi
HALF_PI = math.pi / 2

STOPPED = WheelState(0.0, 0.0)


def lerp(a: float, b: float, u: float) -> float:
    """Linear interpolation between a and b by u in [0, 1]."""
    return a + (b - a) * u


def wrap_angle(angle: float) -> float:
    """Wrap an angle to (-pi, pi]."""
    wrapped = math.atan2(math.sin(angle), math.cos(angle))
    return math.pi if wrapped == -math.pi else wrapped


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, float(value)))


class DriveMode(Enum):
    """Available drive modes."""

    ARCADE = "arcade"
    CURVATURE = "curvature"
    STANDARD_FIELD_CENTRIC = "standard"
    STANDARD_ROBOT_CENTRIC = "robot"


class CurvatureScaling(Enum):
    """How curvature drive attenuates output under partial input.

    RADIUS shrinks the saturating turn radius by |throttle|, so low throttle
    gives tight turns and full throttle the widest turn that still keeps the
    outer wheel at max speed. AVERAGE is the earlier scheme: steering is used
    directly as omega with R = throttle / steering, and the result is scaled
    by (|throttle| + |steering|) / 2 and clamped.
    """

    RADIUS = "radius"
    AVERAGE = "average"


@dataclass(frozen=True)
class DriveModeConfig:
    """Immutable parameters of a drive mode.

    Attributes:
        max_output_speed: Wheel velocity limit of the controller output (m/s).
        magnitude_deadband: Magnitude (or throttle) below which input is zero.
        angle_deadband: Angle (or steering) band treated as zero.
        turn_gain: Proportional turn gain K (standard modes only).
        turn_offset: Baseline turn power C in m/s (standard modes only).
        curvature_scaling: Partial-input attenuation (curvature mode only).
    """

    max_output_speed: float = config.MAX_SPEED
    magnitude_deadband: float = config.STANDARD_MAGNITUDE_DEADBAND
    angle_deadband: float = config.STANDARD_ANGLE_DEADBAND
    turn_gain: float = config.STANDARD_TURN_GAIN
    turn_offset: float = config.STANDARD_TURN_OFFSET
    curvature_scaling: CurvatureScaling = CurvatureScaling.RADIUS

    def __post_init__(self) -> None:
        if not self.max_output_speed > 0:
            raise InvalidConfiguration(
                f"max_output_speed must be positive, got {self.max_output_speed}"
            )
        for name in ("magnitude_deadband", "angle_deadband", "turn_gain", "turn_offset"):
            value = getattr(self, name)
            if not value >= 0:
                raise InvalidConfiguration(f"{name} must be non-negative, got {value}")

    @classmethod
    def for_mode(
        cls, mode: "DriveMode", max_output_speed: float = config.MAX_SPEED
    ) -> "DriveModeConfig":
        """Default configuration for a drive mode, using the values in config.py."""
        if mode is DriveMode.ARCADE:
            return cls(
                max_output_speed=max_output_speed,
                magnitude_deadband=config.ARCADE_MAGNITUDE_DEADBAND,
                angle_deadband=config.ARCADE_ANGLE_DEADBAND,
            )
        if mode is DriveMode.CURVATURE:
            return cls(
                max_output_speed=max_output_speed,
                magnitude_deadband=config.CURVATURE_MAGNITUDE_DEADBAND,
                angle_deadband=config.CURVATURE_ANGLE_DEADBAND,
            )
        return cls(max_output_speed=max_output_speed)


class DriveController(ABC):
    """Base class for drive modes.

    Attributes:
        drive: Kinematic model of the driven robot.
        config: Immutable drive mode parameters.
    """

    mode: DriveMode

    def __init__(self, drive: DifferentialDrive, config: Optional[DriveModeConfig] = None):
        self.drive = drive
        self.config = config if config is not None else DriveModeConfig.for_mode(self.mode)

    @property
    def max(self) -> float:
        return self.config.max_output_speed

    @abstractmethod
    def set(self, input_a: float, input_b: float, pose: Sequence[float]) -> WheelState:
        """Convert operator input into wheel velocities.

        Args:
            input_a: Magnitude or throttle, depending on the mode.
            input_b: Angle or steering, depending on the mode.
            pose: Current (x, y, heading) of the robot.

        Returns:
            Commanded (left, right) wheel velocities.
        """

    def __repr__(self) -> str:
        return f"{type(self).__name__}(length={self.drive.length}, config={self.config})"


class ArcadeDrive(DriveController):
    """Single-stick drive setting angular velocity and turn radius together.

    The stick angle is measured counter-clockwise from the right horizontal
    of the field and is first turned into the robot frame, so that pushing
    the stick towards where the robot points drives it straight ahead.

    In the top half of the robot-frame circle, the offset from vertical sets
    angular velocity: zero straight ahead, rising linearly to a full in-place
    spin with the stick fully sideways (right of vertical spins clockwise,
    left of vertical counter-clockwise). The magnitude sets turn radius,
    rising linearly from zero to the radius at which the outer wheel just
    reaches max speed. The bottom half mirrors the top half with both wheel
    velocities negated.
    """

    mode = DriveMode.ARCADE

    def set(self, input_a: float, input_b: float, pose: Sequence[float]) -> WheelState:
        magnitude = _clamp(input_a, 0.0, 1.0)
        if magnitude < self.config.magnitude_deadband:
            return STOPPED

        heading = pose[2] % TWO_PI
        relative = (input_b - heading + HALF_PI) % TWO_PI

        if relative < math.pi:
            return self._set_top(magnitude, relative)

        left, right = self._set_top(magnitude, TWO_PI - relative)
        return WheelState(-left, -right)

    def _set_top(self, magnitude: float, angle: float) -> WheelState:
        # angle is measured from the robot's right, in [0, pi]
        if angle <= HALF_PI:
            return self._set_quadrant(magnitude, HALF_PI - angle, direction=-1)
        return self._set_quadrant(magnitude, angle - HALF_PI, direction=1)

    def _set_quadrant(self, magnitude: float, offset: float, direction: int) -> WheelState:
        # offset from vertical in [0, pi/2]; direction -1 turns right, +1 left
        if offset <= 0 or offset < self.config.angle_deadband:
            power = lerp(0, self.max, magnitude)
            return WheelState(power, power)

        omega_max = direction * self.drive.max_angular_velocity(self.max)
        omega = lerp(0, omega_max, offset / HALF_PI)

        radius_max = direction * self.drive.saturating_radius(omega, self.max)
        radius = lerp(0, radius_max, magnitude)

        return WheelState(*self.drive.velocities(omega, radius))


class CurvatureDrive(DriveController):
    """Dual-axis "cheesy" drive with independent throttle and steering.

    Inputs are not a magnitude and angle: input_a is the throttle (signed
    tangential speed fraction) and input_b the steering (signed angular
    velocity fraction, positive counter-clockwise), both in [-1, 1].
    Steering maps linearly onto [-omega_max, omega_max], where omega_max
    spins the robot in place with both wheels at max speed.
    """

    mode = DriveMode.CURVATURE

    def set(self, input_a: float, input_b: float, pose: Sequence[float]) -> WheelState:
        throttle = _clamp(input_a, -1.0, 1.0)
        steering = _clamp(input_b, -1.0, 1.0)

        if abs(throttle) < self.config.magnitude_deadband:
            throttle = 0.0
        if abs(steering) < self.config.angle_deadband:
            steering = 0.0

        if steering == 0:
            return self._set_straight(throttle)

        if self.config.curvature_scaling is CurvatureScaling.AVERAGE:
            return self._set_average(throttle, steering)

        omega_max = self.drive.max_angular_velocity(self.max)
        omega = lerp(-omega_max, omega_max, steering / 2 + 1 / 2)
        if omega == 0:
            return self._set_straight(throttle)

        # Radius sign makes omega * R, the tangential speed, follow the throttle
        radius = self.drive.saturating_radius(omega, self.max) * abs(throttle)
        if throttle != 0:
            radius = math.copysign(radius, throttle * omega)

        return WheelState(*self.drive.velocities(omega, radius))

    def _set_straight(self, throttle: float) -> WheelState:
        power = lerp(-self.max, self.max, throttle / 2 + 1 / 2)
        return WheelState(power, power)

    def _set_average(self, throttle: float, steering: float) -> WheelState:
        left, right = self.drive.velocities(steering, throttle / steering)
        k = (abs(throttle) + abs(steering)) / 2
        return WheelState(
            _clamp(left * k, -self.max, self.max),
            _clamp(right * k, -self.max, self.max),
        )


class StandardFieldCentricDrive(DriveController):
    """Point-and-go drive: face the stick direction, then drive straight.

    The stick angle is a target heading in the field frame. Whichever of the
    target and its reverse needs less rotation is chosen, so the robot backs
    up rather than turning around. Inside the angle deadband it drives
    straight (forwards or backwards) at a speed set by the magnitude;
    outside it spins in place with power proportional to the heading error
    plus a baseline, towards the shorter turn direction.
    """

    mode = DriveMode.STANDARD_FIELD_CENTRIC

    def reference_heading(self, pose: Sequence[float]) -> float:
        """Heading the stick angle is compared against."""
        return pose[2]

    def set(self, input_a: float, input_b: float, pose: Sequence[float]) -> WheelState:
        magnitude = _clamp(input_a, 0.0, 1.0)
        if magnitude < self.config.magnitude_deadband:
            return STOPPED

        heading = self.reference_heading(pose) % TWO_PI
        forward_error = wrap_angle(input_b - heading)
        backward_error = wrap_angle(input_b + math.pi - heading)

        if self._aligned(forward_error):
            power = lerp(0, self.max, magnitude)
            return WheelState(power, power)

        if self._aligned(backward_error):
            power = lerp(0, -self.max, magnitude)
            return WheelState(power, power)

        if abs(forward_error) <= abs(backward_error):
            error = forward_error
        else:
            error = backward_error

        power = lerp(0, self.config.turn_gain * self.max, 2 * abs(error) / math.pi)
        power = min(self.max, power + self.config.turn_offset)

        if error > 0:
            # left turn
            return WheelState(-power, power)
        return WheelState(power, -power)

    def _aligned(self, error: float) -> bool:
        return error == 0 or abs(error) < self.config.angle_deadband


class StandardRobotCentricDrive(StandardFieldCentricDrive):
    """Standard drive with the stick read in the robot frame.

    Stick-up (pi/2) always means robot-forward, so the pose is ignored and
    the turn power follows the stick's offset from vertical.
    """

    mode = DriveMode.STANDARD_ROBOT_CENTRIC

    def reference_heading(self, pose: Sequence[float]) -> float:
        return HALF_PI


CONTROLLERS = {
    DriveMode.ARCADE: ArcadeDrive,
    DriveMode.CURVATURE: CurvatureDrive,
    DriveMode.STANDARD_FIELD_CENTRIC: StandardFieldCentricDrive,
    DriveMode.STANDARD_ROBOT_CENTRIC: StandardRobotCentricDrive,
}


def parse_drive_mode(mode: Union[DriveMode, str]) -> DriveMode:
    """Resolve a DriveMode from an enum member, value ("arcade") or name.

    Raises:
        InvalidConfiguration: If the mode is unknown.
    """
    if isinstance(mode, DriveMode):
        return mode
    key = str(mode).strip().lower()
    for member in DriveMode:
        if key in (member.value, member.name.lower()):
            return member
    choices = ", ".join(member.value for member in DriveMode)
    raise InvalidConfiguration(f"Unknown drive mode: {mode!r} (expected one of: {choices})")


def create_controller(
    mode: Union[DriveMode, str],
    drive: DifferentialDrive,
    config: Optional[DriveModeConfig] = None,
) -> DriveController:
    """Create the controller for a drive mode.

    Args:
        mode: Drive mode, as a DriveMode or its string value.
        drive: Kinematic model of the driven robot.
        config: Drive mode parameters. Default: DriveModeConfig.for_mode(mode).

    Returns:
        Controller implementing the mode.
    """
    mode = parse_drive_mode(mode)
    return CONTROLLERS[mode](drive, config)
