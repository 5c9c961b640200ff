"""Tests for the drive mode control laws."""

import math

import numpy as np
import pytest

from diffdrive_sim.drive_modes import (
    ArcadeDrive,
    CurvatureDrive,
    CurvatureScaling,
    DriveController,
    DriveMode,
    DriveModeConfig,
    StandardFieldCentricDrive,
    StandardRobotCentricDrive,
    create_controller,
    lerp,
    parse_drive_mode,
    wrap_angle,
)
from diffdrive_sim.exceptions import InvalidConfiguration

UP = (0.0, 0.0, math.pi / 2)
MAX = 2.0


def turn_power(error, gain=0.75, offset=0.25):
    return min(MAX, lerp(0, gain * MAX, 2 * abs(error) / math.pi) + offset)


def within_limits(wheels, limit=MAX):
    return abs(wheels.left) <= limit + 1e-9 and abs(wheels.right) <= limit + 1e-9


class TestHelpers:
    def test_lerp(self):
        assert lerp(-2.0, 2.0, 0.5) == 0.0
        assert lerp(0.0, 4.0, 0.25) == 1.0

    @pytest.mark.parametrize(
        "angle, expected",
        [(0.0, 0.0), (3 * math.pi, math.pi), (-math.pi, math.pi), (-0.5 - 4 * math.pi, -0.5)],
    )
    def test_wrap_angle(self, angle, expected):
        assert wrap_angle(angle) == pytest.approx(expected)


class TestArcade:
    @pytest.fixture
    def arcade(self, drive):
        return ArcadeDrive(drive)

    @pytest.mark.parametrize("angle", [0.0, 1.0, math.pi, 5.0])
    def test_deadband_stops(self, arcade, angle):
        assert arcade.set(0.01, angle, UP) == (0.0, 0.0)

    def test_stick_along_heading_drives_straight(self, arcade):
        assert arcade.set(0.6, math.pi / 2, UP) == pytest.approx((1.2, 1.2))

    def test_field_oriented(self, arcade):
        # Robot faces +x, stick points +x: straight ahead
        assert arcade.set(1.0, 0.0, (0.0, 0.0, 0.0)) == pytest.approx((2.0, 2.0))

    def test_bottom_half_reverses(self, arcade):
        assert arcade.set(1.0, 3 * math.pi / 2, UP) == pytest.approx((-2.0, -2.0))

    def test_full_right_spins_clockwise(self, arcade):
        assert arcade.set(1.0, 0.0, UP) == pytest.approx((2.0, -2.0), abs=1e-9)

    def test_nearly_full_left_spins_counter_clockwise(self, arcade):
        left, right = arcade.set(1.0, math.pi - 0.01, UP)
        assert right == pytest.approx(2.0)
        assert left < -1.9

    def test_diagonal_pivots_on_inner_wheel(self, arcade):
        # Half of omega_max with a saturating radius of L/2
        assert arcade.set(1.0, math.pi / 4, UP) == pytest.approx((2.0, 0.0), abs=1e-9)

    def test_magnitude_shrinks_radius(self, arcade, drive):
        wheels = arcade.set(0.5, math.pi / 4, UP)
        omega, radius = drive.states(*wheels)
        assert omega == pytest.approx(-drive.max_angular_velocity(MAX) / 2)
        assert radius == pytest.approx(-0.5 * 1.125)

    def test_angle_deadband_drives_straight(self, arcade):
        left, right = arcade.set(1.0, math.pi / 2 + 0.05, UP)
        assert left == pytest.approx(right)

    @pytest.mark.parametrize("magnitude", [0.1, 0.5, 1.0, 3.0])
    def test_output_within_limits(self, arcade, magnitude):
        for angle in np.linspace(0, 2 * math.pi, 73):
            for heading in (0.0, 1.0, math.pi / 2, 4.0):
                assert within_limits(arcade.set(magnitude, angle, (0.0, 0.0, heading)))


class TestCurvature:
    @pytest.fixture
    def curvature(self, drive):
        return CurvatureDrive(drive)

    def test_no_input_stops(self, curvature):
        assert curvature.set(0.0, 0.0, UP) == (0.0, 0.0)

    def test_deadband_stops(self, curvature):
        assert curvature.set(0.01, 0.02, UP) == (0.0, 0.0)

    @pytest.mark.parametrize("throttle, speed", [(1.0, 2.0), (-1.0, -2.0), (0.5, 1.0)])
    def test_throttle_only_drives_straight(self, curvature, throttle, speed):
        assert curvature.set(throttle, 0.0, UP) == pytest.approx((speed, speed))

    def test_full_steering_spins_in_place(self, curvature):
        assert curvature.set(1.0, 1.0, UP) == pytest.approx((-2.0, 2.0))
        assert curvature.set(1.0, -1.0, UP) == pytest.approx((2.0, -2.0))

    def test_steering_without_throttle_spins(self, curvature):
        assert curvature.set(0.0, 0.5, UP) == pytest.approx((-1.0, 1.0))

    def test_forward_left_turn(self, curvature):
        assert curvature.set(1.0, 0.5, UP) == pytest.approx((0.0, 2.0), abs=1e-9)

    def test_forward_right_turn(self, curvature):
        assert curvature.set(1.0, -0.5, UP) == pytest.approx((2.0, 0.0), abs=1e-9)

    def test_reversing_keeps_steering_direction(self, curvature, drive):
        wheels = curvature.set(-1.0, 0.5, UP)
        assert wheels == pytest.approx((-2.0, 0.0), abs=1e-9)
        omega, _ = drive.states(*wheels)
        assert omega > 0

    def test_out_of_range_input_is_clamped(self, curvature):
        assert curvature.set(5.0, 0.0, UP) == pytest.approx((2.0, 2.0))

    def test_average_scaling(self, drive):
        controller = CurvatureDrive(drive, DriveModeConfig(curvature_scaling=CurvatureScaling.AVERAGE))
        assert controller.set(1.0, 0.5, UP) == pytest.approx((0.328125, 1.171875))

    @pytest.mark.parametrize("scaling", list(CurvatureScaling))
    def test_output_within_limits(self, drive, scaling):
        controller = CurvatureDrive(drive, DriveModeConfig(curvature_scaling=scaling))
        for throttle in np.linspace(-1, 1, 21):
            for steering in np.linspace(-1, 1, 21):
                assert within_limits(controller.set(throttle, steering, UP))


class TestStandardFieldCentric:
    @pytest.fixture
    def standard(self, drive):
        return StandardFieldCentricDrive(drive)

    def test_deadband_stops(self, standard):
        assert standard.set(0.01, 0.0, UP) == (0.0, 0.0)

    def test_aligned_drives_forward(self, standard):
        assert standard.set(0.5, math.pi / 2, UP) == pytest.approx((1.0, 1.0))

    def test_unwrapped_heading(self, standard):
        pose = (0.0, 0.0, math.pi / 2 + 4 * math.pi)
        assert standard.set(0.5, math.pi / 2, pose) == pytest.approx((1.0, 1.0))

    def test_opposite_drives_backward(self, standard):
        assert standard.set(0.5, 3 * math.pi / 2, UP) == pytest.approx((-1.0, -1.0))

    def test_large_left_error_turns_left(self, standard):
        error = math.pi / 2 - 0.2
        power = turn_power(error)
        assert standard.set(1.0, math.pi - 0.2, UP) == pytest.approx((-power, power))

    def test_small_left_error_turns_left(self, standard):
        power = turn_power(0.3)
        assert standard.set(1.0, math.pi / 2 + 0.3, UP) == pytest.approx((-power, power))

    def test_orthogonal_target_breaks_tie_forwards(self, standard):
        # Forward error -pi/2 and backward error +pi/2: forward wins, turning right
        power = turn_power(math.pi / 2)
        assert power == pytest.approx(1.75)
        assert standard.set(1.0, 0.0, UP) == pytest.approx((power, -power))

    @pytest.mark.parametrize(
        "heading, target",
        [
            (math.pi / 2, 0.0),
            (math.pi / 2, math.pi),
            (0.0, math.pi / 2),
            (0.0, 3 * math.pi / 2),
            (2.0, 2.0 + math.pi / 2),
            (2.0, 2.0 - math.pi / 2),
        ],
    )
    def test_orthogonal_target_rotates_in_place(self, standard, heading, target):
        left, right = standard.set(0.5, target, (0.0, 0.0, heading))
        assert left == pytest.approx(-right)
        assert abs(left) == pytest.approx(turn_power(math.pi / 2))

    def test_prefers_backing_up(self, standard):
        # Target is 0.3 rad short of straight down: backing up needs a 0.3 rad right turn
        power = turn_power(0.3)
        assert standard.set(1.0, 3 * math.pi / 2 - 0.3, UP) == pytest.approx((power, -power))

    def test_turn_power_is_limited(self, drive):
        controller = StandardFieldCentricDrive(drive, DriveModeConfig(turn_gain=1.0, turn_offset=1.0))
        assert controller.set(1.0, math.pi - 0.2, UP) == pytest.approx((-2.0, 2.0))

    def test_turn_power_ignores_magnitude(self, standard):
        assert standard.set(0.2, math.pi - 0.2, UP) == standard.set(1.0, math.pi - 0.2, UP)


class TestStandardRobotCentric:
    @pytest.fixture
    def robot_centric(self, drive):
        return StandardRobotCentricDrive(drive)

    @pytest.mark.parametrize("heading", [0.0, 1.0, math.pi, 10.0])
    def test_stick_up_is_forward_for_any_pose(self, robot_centric, heading):
        assert robot_centric.set(0.5, math.pi / 2, (0.0, 0.0, heading)) == pytest.approx((1.0, 1.0))

    def test_stick_down_is_backward(self, robot_centric):
        assert robot_centric.set(1.0, 3 * math.pi / 2, (0.0, 0.0, 2.0)) == pytest.approx((-2.0, -2.0))

    def test_stick_fully_right_turns_right(self, robot_centric):
        assert robot_centric.set(1.0, 0.0, (0.0, 0.0, 5.0)) == pytest.approx((1.75, -1.75))

    def test_stick_right_turns_right(self, robot_centric):
        power = turn_power(math.pi / 2 - 0.2)
        assert robot_centric.set(1.0, 0.2, (0.0, 0.0, 3.0)) == pytest.approx((power, -power))


class TestConfiguration:
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"max_output_speed": 0.0},
            {"magnitude_deadband": -0.1},
            {"angle_deadband": -1.0},
            {"turn_gain": -0.5},
        ],
    )
    def test_invalid_config(self, kwargs):
        with pytest.raises(InvalidConfiguration):
            DriveModeConfig(**kwargs)

    def test_config_is_immutable(self):
        config = DriveModeConfig()
        with pytest.raises(AttributeError):
            config.turn_gain = 1.0

    def test_mode_defaults(self):
        arcade = DriveModeConfig.for_mode(DriveMode.ARCADE)
        assert arcade.magnitude_deadband == 5e-2
        assert arcade.angle_deadband == 7e-2
        assert DriveModeConfig.for_mode(DriveMode.CURVATURE).angle_deadband == 5e-2

    @pytest.mark.parametrize(
        "name, mode",
        [
            ("arcade", DriveMode.ARCADE),
            (" Curvature ", DriveMode.CURVATURE),
            ("standard", DriveMode.STANDARD_FIELD_CENTRIC),
            ("standard_robot_centric", DriveMode.STANDARD_ROBOT_CENTRIC),
            (DriveMode.ARCADE, DriveMode.ARCADE),
        ],
    )
    def test_parse_drive_mode(self, name, mode):
        assert parse_drive_mode(name) is mode

    def test_unknown_mode(self):
        with pytest.raises(InvalidConfiguration, match="tank"):
            parse_drive_mode("tank")

    @pytest.mark.parametrize(
        "mode, cls",
        [
            ("arcade", ArcadeDrive),
            ("curvature", CurvatureDrive),
            ("standard", StandardFieldCentricDrive),
            ("robot", StandardRobotCentricDrive),
        ],
    )
    def test_create_controller(self, drive, mode, cls):
        controller = create_controller(mode, drive)
        assert type(controller) is cls
        assert controller.max == 2.0
        assert cls.__name__ in repr(controller)

    def test_create_controller_with_config(self, drive):
        config = DriveModeConfig(max_output_speed=1.0)
        controller = create_controller(DriveMode.CURVATURE, drive, config)
        assert controller.config is config
        assert controller.set(1.0, 0.0, UP) == pytest.approx((1.0, 1.0))


class TestDriveControllerBase:
    def test_controller_without_set_cannot_be_created(self, drive):
        class Incomplete(DriveController):
            mode = DriveMode.ARCADE

        with pytest.raises(TypeError):
            Incomplete(drive)
