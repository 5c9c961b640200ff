"""Shared fixtures for the drive simulator tests."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from diffdrive_sim.model import DifferentialDrive

WHEELBASE = 2.25


@pytest.fixture
def drive():
    """Drive model with the default 2.25m wheelbase."""
    return DifferentialDrive(WHEELBASE)


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
