"""
Differential drive kinematic model.

This module converts between the two equivalent descriptions of a
differential-drive motion:
- wheel velocities (v_left, v_right), and
- motion parameters (omega, R): angular velocity and signed turn radius.

Positive omega is counter-clockwise. Positive R puts the center of curvature
to the left of the robot center. Straight-line motion has no center of
curvature and is handled as its own branch in both directions.
"""

import math
from typing import Tuple

from .exceptions import InvalidConfiguration


class DifferentialDrive:
    """Stateless wheel-velocity/motion-parameter conversions for a wheelbase.

    Attributes:
        length: Distance between the left and right wheels (meters).
    """

    def __init__(self, length: float):
        """Initialize the drive model.

        Args:
            length: Distance between the left and right wheels (meters).

        Raises:
            InvalidConfiguration: If length is not positive.
        """
        if not length > 0:
            raise InvalidConfiguration(f"Wheelbase length must be positive, got {length}")
        self.length = float(length)

    def velocities(self, omega: float, radius: float) -> Tuple[float, float]:
        """Compute wheel velocities from angular velocity and turn radius.

        For a differential drive robot rotating about a center of curvature
        at signed distance R from the robot center:
            v_left = omega * (R - L/2)
            v_right = omega * (R + L/2)

        When omega is zero there is no center of curvature, and `radius` is
        read as the common linear speed of both wheels instead.

        Args:
            omega: Angular velocity (rad/s), positive counter-clockwise.
            radius: Turn radius (m), or linear speed (m/s) when omega == 0.

        Returns:
            tuple[float, float]: (v_left, v_right) in m/s.

        Example:
            >>> DifferentialDrive(2.0).velocities(1.0, 2.0)
            (1.0, 3.0)
        """
        if omega == 0:
            return radius, radius

        v_left = omega * (radius - self.length / 2)
        v_right = omega * (radius + self.length / 2)
        return v_left, v_right

    def states(self, v_left: float, v_right: float) -> Tuple[float, float]:
        """Compute angular velocity and turn radius from wheel velocities.

        Inverse of `velocities`:
            omega = (v_right - v_left) / L
            R = (L/2) * (v_left + v_right) / (v_right - v_left)

        Equal wheel velocities mean straight-line motion, reported as
        (0.0, inf).

        Args:
            v_left: Left wheel velocity (m/s).
            v_right: Right wheel velocity (m/s).

        Returns:
            tuple[float, float]: (omega, R).
        """
        if v_left == v_right:
            return 0.0, math.inf

        omega = (v_right - v_left) / self.length
        radius = (self.length / 2) * (v_left + v_right) / (v_right - v_left)
        return omega, radius

    def max_angular_velocity(self, max_speed: float) -> float:
        """Angular velocity of an in-place spin with both wheels at +/- max_speed."""
        return 2 * max_speed / self.length

    def saturating_radius(self, omega: float, max_speed: float) -> float:
        """Turn radius at which the outer wheel runs at exactly max_speed.

        Solves |omega| * (R + L/2) = max_speed for R, giving
        (2 * max_speed - |omega| * L) / (2 * |omega|). The result is
        non-negative whenever |omega| <= max_angular_velocity(max_speed).

        Args:
            omega: Angular velocity (rad/s), must be non-zero.
            max_speed: Wheel speed limit (m/s).

        Returns:
            Unsigned turn radius (m).
        """
        magnitude = abs(omega)
        return (2 * max_speed - magnitude * self.length) / (2 * magnitude)
