"""Tests for plotting utilities (Agg backend, see conftest)."""

import math

import matplotlib.pyplot as plt
import numpy as np
import pytest
from matplotlib.figure import Figure

from diffdrive_sim.plots import draw_robot, draw_scene, plot_trajectory, robot_outline
from diffdrive_sim.robot import Pose
from diffdrive_sim.simulation import Camera, Trail


class TestRobotOutline:
    def test_parts(self):
        outline = robot_outline(Pose(0.0, 0.0, math.pi / 2), 2.0)
        assert set(outline) == {"left_wheel", "right_wheel", "frame", "front", "back"}
        for vertices in outline.values():
            assert vertices.shape == (4, 2)

    def test_facing_up_is_unrotated(self):
        outline = robot_outline(Pose(1.0, 2.0, math.pi / 2), 2.0)
        assert outline["frame"] == pytest.approx(np.array([[0, 1], [2, 1], [2, 3], [0, 3]]))
        assert outline["front"].mean(axis=0) == pytest.approx(np.array([1.0, 2.875]))

    def test_front_marker_follows_heading(self):
        outline = robot_outline(Pose(1.0, 2.0, 0.0), 2.0)
        assert outline["front"].mean(axis=0) == pytest.approx(np.array([1.875, 2.0]))
        assert outline["back"].mean(axis=0) == pytest.approx(np.array([0.125, 2.0]))
        # Left wheel sits on the +y side when facing +x
        assert outline["left_wheel"][:, 1].min() > 2.0


class TestDrawing:
    def test_draw_robot_adds_patches(self):
        fig, ax = plt.subplots()
        patches = draw_robot(ax, Pose(0.0, 0.0, 1.0), 2.25)
        assert len(patches) == 5
        assert all(patch in ax.patches for patch in patches)

    def test_draw_scene_uses_camera_bounds(self):
        fig, ax = plt.subplots()
        trail = Trail((5.0, 5.0))
        camera = Camera((6.0, 4.0))
        draw_scene(ax, Pose(5.0, 5.0, math.pi / 2), 2.25, trail, camera, view_size=10.0, origin=(5.0, 5.0))
        assert ax.get_xlim() == pytest.approx((1.0, 11.0))
        assert ax.get_ylim() == pytest.approx((-1.0, 9.0))

    def test_draw_scene_clears_previous_frame(self):
        fig, ax = plt.subplots()
        trail = Trail((0.0, 0.0))
        camera = Camera((0.0, 0.0))
        draw_scene(ax, Pose(0.0, 0.0, 0.0), 2.0, trail, camera)
        count = len(ax.patches)
        draw_scene(ax, Pose(1.0, 0.0, 0.0), 2.0, trail, camera)
        assert len(ax.patches) == count


class TestPlotTrajectory:
    def test_returns_figure(self):
        trail = Trail((0.0, 0.0), interval=0.0)
        trail.record(Pose(0.0, 1.0, math.pi / 2), 0.5)
        fig = plot_trajectory(trail, Pose(0.0, 2.0, math.pi / 2), 2.25, title="Run")
        assert isinstance(fig, Figure)
        assert fig.axes[0].get_title() == "Run"

    def test_saves_file(self, tmp_path):
        path = tmp_path / "trajectory.png"
        plot_trajectory(Trail((0.0, 0.0)), Pose(1.0, 1.0, 0.0), 2.25, save_path=path)
        assert path.exists()
        assert path.stat().st_size > 0
