"""Robot pose integration for a differential-drive vehicle.

The robot moves along exact circular arcs: for constant wheel velocities the
pose is rotated about the instantaneous center of curvature (ICC), so the
result does not depend on how a time interval is split into steps. Straight
motion (equal wheel velocities) has no ICC and is integrated separately.

Pose and wheel state are immutable values. A Robot owns the current values
and replaces them in `step`, which is the only place they change.
"""

import logging
import math
from typing import Callable, NamedTuple, Optional, Sequence, Tuple

from .exceptions import InvalidConfiguration
from .model import DifferentialDrive
from .vector_math import add, multiply


class Pose(NamedTuple):
    """Robot position (m) and heading (rad, counter-clockwise from +x).

    The heading is not wrapped; take it modulo 2*pi where a bounded angle
    is needed.
    """

    x: float
    y: float
    heading: float


class WheelState(NamedTuple):
    """Left and right wheel velocities (m/s)."""

    left: float
    right: float


DriveState = Tuple[float, float, float, float]
"""(x, y, heading, t) snapshot passed to wheel velocity callbacks."""

WheelDriver = Callable[[DriveState], float]


def integrate(pose: Pose, wheels: WheelState, drive: DifferentialDrive, dt: float) -> Pose:
    """Advance a pose by dt under constant wheel velocities.

    With omega = 0 the robot translates along its heading at the mean wheel
    speed. Otherwise it rotates by d = omega * dt about the instantaneous
    center of curvature

        ICC = (x - R sin(theta), y + R cos(theta))

    and the rotated ICC-relative offset (x - ICC_x, y - ICC_y) is turned into
    a displacement that is added to the pose:

        [x']   [cos d - 1   -sin d    0] [ R sin(theta)]   [x    ]
        [y'] = [sin d     cos d - 1   0] [-R cos(theta)] + [y    ]
        [t']   [  0           0       1] [ d           ]   [theta]

    The ICC itself is never formed, so wheel speeds that differ only by
    rounding (huge R, tiny omega) still give an accurate step.
    cos d - 1 is evaluated as -2 sin^2(d / 2).

    Args:
        pose: Pose at the start of the step.
        wheels: Wheel velocities held over the step.
        drive: Kinematic model supplying the wheelbase.
        dt: Step duration (seconds).

    Returns:
        Pose at the end of the step.
    """
    omega, radius = drive.states(wheels.left, wheels.right)
    x, y, theta = pose

    if omega == 0:
        speed = (wheels.left + wheels.right) / 2
        return Pose(
            x + speed * math.cos(theta) * dt,
            y + speed * math.sin(theta) * dt,
            theta,
        )

    d_theta = omega * dt
    versine = -2 * math.sin(d_theta / 2) ** 2
    transform = [
        [versine, -math.sin(d_theta), 0.0],
        [math.sin(d_theta), versine, 0.0],
        [0.0, 0.0, 1.0],
    ]
    relative = (radius * math.sin(theta), -radius * math.cos(theta), d_theta)

    new_x, new_y, new_theta = add(multiply(transform, relative), (x, y, theta))
    return Pose(float(new_x), float(new_y), float(new_theta))


def _check_step(dt: float) -> None:
    if not dt > 0:
        raise InvalidConfiguration(f"Step size must be positive, got {dt}")


class Robot:
    """Differential-drive robot that owns its pose and wheel state.

    Attributes:
        drive: Kinematic model for the robot's wheelbase.
        max_speed: Wheel velocity limit (m/s); commands are clamped to it.
    """

    def __init__(
        self,
        length: float,
        max_speed: float,
        x: float = 0.0,
        y: float = 0.0,
        heading: float = math.pi / 2,
        left: float = 0.0,
        right: float = 0.0,
    ):
        """Create a robot with an initial state.

        Args:
            length: Distance between the wheels (meters).
            max_speed: Wheel velocity limit (m/s).
            x: Initial x position (meters).
            y: Initial y position (meters).
            heading: Initial heading (radians). Default: pi/2 (facing +y).
            left: Initial left wheel velocity (m/s).
            right: Initial right wheel velocity (m/s).

        Raises:
            InvalidConfiguration: If length or max_speed is not positive.
        """
        if not max_speed > 0:
            raise InvalidConfiguration(f"Maximum speed must be positive, got {max_speed}")
        self.drive = DifferentialDrive(length)
        self.max_speed = float(max_speed)
        self._pose = Pose(float(x), float(y), float(heading))
        self._wheels = WheelState(self.clamp(left), self.clamp(right))

    @property
    def pose(self) -> Pose:
        """Current pose."""
        return self._pose

    @property
    def wheels(self) -> WheelState:
        """Wheel velocities applied during the most recent step."""
        return self._wheels

    @property
    def length(self) -> float:
        return self.drive.length

    def clamp(self, velocity: float) -> float:
        """Limit a wheel velocity to [-max_speed, max_speed]."""
        return max(-self.max_speed, min(self.max_speed, float(velocity)))

    def step(self, v_left: float, v_right: float, dt: float) -> Pose:
        """Apply wheel velocity commands for one timestep.

        Args:
            v_left: Commanded left wheel velocity (m/s).
            v_right: Commanded right wheel velocity (m/s).
            dt: Timestep (seconds).

        Returns:
            The new pose.
        """
        wheels = WheelState(self.clamp(v_left), self.clamp(v_right))
        if wheels != (v_left, v_right):
            logging.debug(
                f"Clamped wheel command ({v_left:.3f}, {v_right:.3f}) -> "
                f"({wheels.left:.3f}, {wheels.right:.3f})"
            )

        self._wheels = wheels
        self._pose = integrate(self._pose, wheels, self.drive, dt)
        return self._pose

    def snapshot(self, t: float) -> DriveState:
        """Current (x, y, heading, t) tuple for wheel velocity callbacks."""
        return (self._pose.x, self._pose.y, self._pose.heading, t)

    def drive_for(
        self,
        left: WheelDriver,
        right: WheelDriver,
        end: float,
        start: float = 0.0,
        dt: float = 0.01,
    ) -> DriveState:
        """Integrate over a time window with state-dependent wheel velocities.

        Each step queries `left(state)` and `right(state)` with the current
        (x, y, heading, t) snapshot, then steps the robot by dt. The number
        of steps is floor((end - start) / dt).

        Args:
            left: Callback returning the left wheel velocity (m/s).
            right: Callback returning the right wheel velocity (m/s).
            end: End time (seconds).
            start: Start time (seconds). Default: 0.0.
            dt: Step size (seconds). Default: 0.01.

        Returns:
            Final (x, y, heading, t).

        Raises:
            InvalidConfiguration: If dt is not positive.
        """
        _check_step(dt)
        t = start
        timesteps = int(math.floor((end - start) / dt + 1e-9))

        for _ in range(timesteps):
            state = self.snapshot(t)
            self.step(left(state), right(state), dt)
            t += dt

        return self.snapshot(t)

    def drive_to(
        self,
        left: WheelDriver,
        right: WheelDriver,
        target: Sequence[float],
        tolerance: Optional[float] = None,
        end: float = 60.0,
        dt: float = 0.01,
    ) -> DriveState:
        """Drive until the robot is within `tolerance` of a target position.

        Stops once the target is reached or the elapsed time passes `end`.

        Args:
            left: Callback returning the left wheel velocity (m/s).
            right: Callback returning the right wheel velocity (m/s).
            target: (x, y) target position (meters).
            tolerance: Arrival distance (meters). Default: the wheelbase.
            end: Time limit (seconds). Default: 60.
            dt: Step size (seconds). Default: 0.01.

        Returns:
            Final (x, y, heading, t); t is 0 if the robot started in range.

        Raises:
            InvalidConfiguration: If dt is not positive.
        """
        _check_step(dt)
        if tolerance is None:
            tolerance = self.length
        target_x, target_y = target[0], target[1]

        def reached() -> bool:
            return math.hypot(target_x - self._pose.x, target_y - self._pose.y) <= tolerance

        t = 0.0
        if reached():
            return self.snapshot(t)

        while t <= end:
            state = self.snapshot(t)
            self.step(left(state), right(state), dt)
            t += dt
            if reached():
                logging.debug(f"Reached target ({target_x:.2f}, {target_y:.2f}) at t={t:.2f}s")
                break

        return self.snapshot(t)
