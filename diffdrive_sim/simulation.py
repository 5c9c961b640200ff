"""
Fixed-tick simulation loop for operator-driven differential drive.

Each tick runs the control pipeline once, strictly in order:

    operator input -> drive mode controller -> wheel velocities -> Robot.step

and then updates display bookkeeping (path trail and follow camera). The
display state is owned by the Simulation and handed explicitly to renderers;
nothing here touches a drawing surface.
"""

import logging
import math
from collections import deque
from typing import Deque, List, Optional, Tuple, Union

from .config import (
    CAMERA_MAX_OFFSET,
    MAX_SPEED,
    START_HEADING,
    START_X,
    START_Y,
    TERM_GREEN,
    TERM_RESET,
    TICK_INTERVAL,
    TRAIL_INTERVAL,
    TRAIL_MAX_POINTS,
    WHEELBASE,
)
from .drive_modes import DriveController, DriveMode, DriveModeConfig, create_controller
from .exceptions import InvalidConfiguration
from .robot import Pose, Robot, WheelState


class CustomFormatter(logging.Formatter):
    """Custom logging formatter that removes timestamps from INFO messages.

    This formatter provides clean console output by showing INFO messages without
    timestamps while preserving full context for WARNING, ERROR, and DEBUG messages.
    """

    def format(self, record: logging.LogRecord) -> str:
        if record.levelno == logging.INFO:
            return record.getMessage()
        return f"{self.formatTime(record, self.datefmt)} - {record.levelname} - {record.getMessage()}"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level.

    Args:
        verbose: If True, show all levels (DEBUG and up) with timestamps. If
                 False, show INFO without timestamps and WARNING/ERROR with
                 timestamps.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(CustomFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
        logger = logging.getLogger()
        logger.setLevel(logging.INFO)
        logger.addHandler(handler)


class Trail:
    """Recent robot positions, sampled at a fixed simulated-time interval.

    Attributes:
        interval: Minimum time between recorded points (seconds).
        points: Recorded (x, y) positions, oldest first.
    """

    def __init__(
        self,
        start: Tuple[float, float],
        interval: float = TRAIL_INTERVAL,
        max_points: int = TRAIL_MAX_POINTS,
    ):
        self.interval = interval
        self.points: Deque[Tuple[float, float]] = deque([start], maxlen=max_points)
        self._last_time = 0.0

    def record(self, pose: Pose, t: float) -> bool:
        """Append the pose position if `interval` has passed since the last point."""
        if t - self._last_time < self.interval - 1e-9:
            return False
        self.points.append((pose.x, pose.y))
        self._last_time = t
        return True

    def xy(self) -> Tuple[List[float], List[float]]:
        """Trail as separate x and y lists, ready for plotting."""
        return [p[0] for p in self.points], [p[1] for p in self.points]

    def __len__(self) -> int:
        return len(self.points)


class Camera:
    """View center that follows the robot once it strays too far.

    The robot may sit up to `max_offset` from the center on each axis; beyond
    that the center is dragged along by exactly the excess.
    """

    def __init__(self, center: Tuple[float, float], max_offset: float = CAMERA_MAX_OFFSET):
        self.center_x, self.center_y = center
        self.max_offset = max_offset

    @property
    def center(self) -> Tuple[float, float]:
        return self.center_x, self.center_y

    def follow(self, pose: Pose) -> Tuple[float, float]:
        """Move the center towards the pose as needed and return it."""
        offset_x = pose.x - self.center_x
        offset_y = pose.y - self.center_y

        if abs(offset_x) > self.max_offset:
            self.center_x += math.copysign(abs(offset_x) - self.max_offset, offset_x)
        if abs(offset_y) > self.max_offset:
            self.center_y += math.copysign(abs(offset_y) - self.max_offset, offset_y)

        return self.center

    def bounds(self, view_size: float) -> Tuple[float, float, float, float]:
        """(x_min, x_max, y_min, y_max) of a square view around the center."""
        half = view_size / 2
        return (
            self.center_x - half,
            self.center_x + half,
            self.center_y - half,
            self.center_y + half,
        )


class Simulation:
    """Tick-driven control pipeline for one robot.

    Attributes:
        robot: The simulated robot (sole owner of pose and wheel state).
        controller: Drive mode turning operator input into wheel velocities.
        dt: Nominal tick interval (seconds).
        time: Simulated time elapsed (seconds).
        ticks: Number of ticks run.
        trail: Recorded path for display.
        camera: Follow camera for display.
    """

    def __init__(
        self,
        robot: Robot,
        controller: DriveController,
        dt: float = TICK_INTERVAL,
        trail: Optional[Trail] = None,
        camera: Optional[Camera] = None,
    ):
        """Initialize the simulation.

        Args:
            robot: Robot to drive.
            controller: Drive mode controller for the robot.
            dt: Nominal tick interval (seconds).
            trail: Path trail. Default: a new Trail starting at the robot.
            camera: Follow camera. Default: centered on the robot.

        Raises:
            InvalidConfiguration: If dt is not positive.
        """
        if not dt > 0:
            raise InvalidConfiguration(f"Tick interval must be positive, got {dt}")

        self.robot = robot
        self.controller = controller
        self.dt = dt
        self.time = 0.0
        self.ticks = 0

        start = (robot.pose.x, robot.pose.y)
        self.trail = trail if trail is not None else Trail(start)
        self.camera = camera if camera is not None else Camera(start)

        self._input: Tuple[float, float] = (0.0, 0.0)

    @classmethod
    def create(
        cls,
        mode: Union[DriveMode, str] = DriveMode.STANDARD_FIELD_CENTRIC,
        length: float = WHEELBASE,
        max_speed: float = MAX_SPEED,
        x: float = START_X,
        y: float = START_Y,
        heading: float = START_HEADING,
        dt: float = TICK_INTERVAL,
        config: Optional[DriveModeConfig] = None,
    ) -> "Simulation":
        """Build a robot, a controller for `mode` and the simulation around them."""
        robot = Robot(length, max_speed, x, y, heading)
        controller = create_controller(mode, robot.drive, config)
        return cls(robot, controller, dt)

    @property
    def mode(self) -> DriveMode:
        return self.controller.mode

    @property
    def operator_input(self) -> Tuple[float, float]:
        """Latest (input_a, input_b) pair in controller order."""
        return self._input

    def set_input(self, input_a: float, input_b: float) -> None:
        """Set the operator input in controller order.

        For joystick modes this is (magnitude, angle); for curvature drive it
        is (throttle, steering).
        """
        self._input = (input_a, input_b)

    def set_axes(self, horizontal: float, vertical: float) -> None:
        """Set dual-axis input: vertical is throttle, horizontal is steering."""
        self.set_input(vertical, horizontal)

    def command(self) -> WheelState:
        """Wheel velocities the controller asks for at the current pose."""
        return self.controller.set(self._input[0], self._input[1], self.robot.pose)

    def tick(self, dt: Optional[float] = None) -> Pose:
        """Run one control cycle.

        Args:
            dt: Elapsed time to integrate over. Default: the nominal interval.
                Pass the measured wall-clock interval for real-time driving.

        Returns:
            The robot pose after the tick.
        """
        if dt is None:
            dt = self.dt

        wheels = self.command()
        pose = self.robot.step(wheels.left, wheels.right, dt)

        self.time += dt
        self.ticks += 1
        self.trail.record(pose, self.time)
        self.camera.follow(pose)

        logging.debug(
            f"t={self.time:.2f}s input=({self._input[0]:.2f}, {self._input[1]:.2f}) "
            f"wheels=({self.robot.wheels.left:.3f}, {self.robot.wheels.right:.3f}) "
            f"pose=({pose.x:.3f}, {pose.y:.3f}, {pose.heading:.3f})"
        )
        return pose

    def run(self, ticks: int) -> Pose:
        """Run a fixed number of ticks with the current input held constant."""
        logging.info(
            f"{TERM_GREEN}Running {ticks} ticks of {self.mode.value} drive "
            f"(dt={self.dt:.3f}s){TERM_RESET}"
        )
        pose = self.robot.pose
        for _ in range(ticks):
            pose = self.tick()

        logging.info(
            f"{TERM_GREEN}✓ Finished at t={self.time:.2f}s: "
            f"x={pose.x:.3f} y={pose.y:.3f} heading={math.degrees(pose.heading) % 360:.1f}°{TERM_RESET}"
        )
        return pose
