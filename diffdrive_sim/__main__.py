"""
Main entry point when running the diffdrive_sim module with python -m.

Without --live, runs a fixed number of ticks with a constant operator input,
logs the final pose and optionally saves a trajectory plot. With --live,
opens the interactive viewer instead.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import DEFAULT_TICKS, MAX_SPEED, START_HEADING, TICK_INTERVAL, WHEELBASE
from .drive_modes import DriveMode
from .exceptions import DiffDriveError
from .simulation import Simulation, setup_logging


def default_input(mode: DriveMode) -> List[float]:
    """Full-forward input for a drive mode, in controller order."""
    if mode is DriveMode.CURVATURE:
        return [1.0, 0.0]
    # Joystick modes: full magnitude, stick pointing up the field
    return [1.0, START_HEADING]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m diffdrive_sim",
        description="Simulate a differential-drive robot under operator control",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=[mode.value for mode in DriveMode],
        default=DriveMode.STANDARD_FIELD_CENTRIC.value,
        help="Drive mode (default: standard)",
    )
    parser.add_argument(
        "--input",
        nargs=2,
        type=float,
        metavar=("A", "B"),
        help="Constant input in controller order: magnitude and angle (rad) for "
        "joystick modes, throttle and steering for curvature (default: full forward)",
    )
    parser.add_argument(
        "--ticks", type=int, default=DEFAULT_TICKS, help=f"Ticks to run (default: {DEFAULT_TICKS})"
    )
    parser.add_argument(
        "--dt", type=float, default=TICK_INTERVAL, help=f"Tick interval in seconds (default: {TICK_INTERVAL})"
    )
    parser.add_argument(
        "--wheelbase", type=float, default=WHEELBASE, help=f"Wheelbase in meters (default: {WHEELBASE})"
    )
    parser.add_argument(
        "--max-speed", type=float, default=MAX_SPEED, help=f"Wheel speed limit in m/s (default: {MAX_SPEED})"
    )
    parser.add_argument("--plot", type=Path, help="Save a trajectory plot to this path")
    parser.add_argument("--live", action="store_true", help="Open the interactive viewer")
    parser.add_argument(
        "--realtime", action="store_true", help="Live view: integrate over measured frame time"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable verbose logging with timestamps"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Run the simulator from the command line.

    Args:
        argv: Command-line arguments (default: sys.argv[1:]).

    Returns:
        Exit code (0 for success).
    """
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        simulation = Simulation.create(
            args.mode, length=args.wheelbase, max_speed=args.max_speed, dt=args.dt
        )
        if args.live:
            # Imported here so headless runs never need a GUI backend
            from .live_view import start_live_view

            start_live_view(simulation, realtime=args.realtime)
            return 0

        simulation.set_input(*(args.input or default_input(simulation.mode)))
        pose = simulation.run(args.ticks)

        if args.plot:
            from .plots import plot_trajectory

            plot_trajectory(
                simulation.trail,
                pose,
                simulation.robot.length,
                title=f"{simulation.mode.value.title()} drive, {simulation.time:.2f}s",
                save_path=args.plot,
            )
    except DiffDriveError as e:
        logging.error(f"Simulation error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logging.info("\nExiting...")
        sys.exit(0)
