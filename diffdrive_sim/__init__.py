"""Differential Drive Simulator - Operator Control Laws for Two-Wheel Robots

Simulates a two-wheel differential-drive robot and turns joystick or
dual-axis pad input into wheel velocities that move it along exact circular
arcs.

## Architecture Overview

Each simulation tick runs a three-stage pipeline:

### Stage 1: Input Normalization (inputs.py)
Converts raw device state into normalized operator input.
- Joystick: pointer displacement -> (magnitude, angle)
- Dual-axis pad: held arrow keys -> (horizontal, vertical)

### Stage 2: Drive Modes (drive_modes.py)
Maps normalized input and the current pose to wheel velocities.
- Arcade: one stick sets angular velocity and turn radius
- Curvature ("cheesy"): throttle and steering set separately
- Standard (field- or robot-centric): turn to the stick, then drive straight
- Output never exceeds the configured maximum wheel speed

### Stage 3: Kinematics (model.py, robot.py)
Integrates wheel velocities into the robot pose.
- Wheel velocities <-> (angular velocity, turn radius) conversion
- Exact rotation about the instantaneous center of curvature
- Wheel commands clamped to [-max_speed, max_speed]

## Modules

### Core
- `config.py` - Centralized configuration parameters with documentation
- `vector_math.py` - Vector addition and matrix-vector multiplication
- `model.py` - Differential drive kinematic model
- `robot.py` - Pose integration and the Robot state owner
- `drive_modes.py` - Drive mode controllers
- `inputs.py` - Joystick and dual-axis input normalization
- `exceptions.py` - Error types

### Simulation & Display
- `simulation.py` - Tick loop, path trail, follow camera, logging setup
- `plots.py` - Robot drawing and trajectory figures
- `live_view.py` - Interactive viewer (mouse joystick / arrow keys)

## Quick Start

```python
from diffdrive_sim import Simulation

sim = Simulation.create("curvature")
sim.set_axes(horizontal=0.0, vertical=1.0)
pose = sim.run(20)
```

Or use the command-line interface:
```bash
python -m diffdrive_sim --mode curvature --input 1 0 --ticks 20
python -m diffdrive_sim --mode standard --live
```

## Configuration

All default parameters are centralized in `config.py`:
- Physical: wheelbase, maximum wheel speed, start pose
- Drive modes: deadbands, standard-drive turn gain and offset
- Timing: 50ms tick (20 Hz)
- Display: view size, camera follow margin, trail sampling
"""

__version__ = "0.1.0"

# Export key classes for convenience
from .drive_modes import (
    ArcadeDrive,
    CurvatureDrive,
    CurvatureScaling,
    DriveController,
    DriveMode,
    DriveModeConfig,
    StandardFieldCentricDrive,
    StandardRobotCentricDrive,
    create_controller,
)
from .exceptions import DiffDriveError, DimensionMismatch, InvalidConfiguration
from .inputs import DualAxisController, Joystick, normalize_joystick
from .model import DifferentialDrive
from .robot import Pose, Robot, WheelState, integrate
from .simulation import Camera, Simulation, Trail

__all__ = [
    "DifferentialDrive",
    "Robot",
    "Pose",
    "WheelState",
    "integrate",
    "DriveMode",
    "DriveModeConfig",
    "CurvatureScaling",
    "DriveController",
    "ArcadeDrive",
    "CurvatureDrive",
    "StandardFieldCentricDrive",
    "StandardRobotCentricDrive",
    "create_controller",
    "Joystick",
    "DualAxisController",
    "normalize_joystick",
    "Simulation",
    "Trail",
    "Camera",
    "DiffDriveError",
    "DimensionMismatch",
    "InvalidConfiguration",
]
