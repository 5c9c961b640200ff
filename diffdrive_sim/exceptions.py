"""Exception types raised by the drive simulator.

Kinematic corner cases (straight-line motion, zero angular velocity) are
ordinary branches and never raise. Only programming errors and bad
construction-time parameters end up here.
"""


class DiffDriveError(Exception):
    """Base class for all simulator errors."""


class DimensionMismatch(DiffDriveError, ValueError):
    """Vector or matrix operands have incompatible shapes."""


class InvalidConfiguration(DiffDriveError, ValueError):
    """A component was constructed with out-of-range parameters."""
