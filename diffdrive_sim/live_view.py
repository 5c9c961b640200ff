"""
Interactive matplotlib viewer for driving the simulated robot.

Joystick modes (arcade, standard) are driven by dragging the mouse inside the
joystick panel; curvature drive is driven with the arrow keys (up/down ramp
the throttle, left/right ramp the steering). Each animation frame runs one
simulation tick and redraws the field around the follow camera.
"""

import logging
import time
from typing import Any, Optional

import matplotlib.pyplot as plt
from matplotlib.animation import FuncAnimation
from matplotlib.patches import Circle, Rectangle

from .config import (
    COLOR_BACKGROUND,
    COLOR_STICK,
    COLOR_TEXT,
    LIVE_VIEW_INTERVAL_MS,
    TERM_BLUE,
    TERM_RESET,
    VIEW_SIZE,
)
from .drive_modes import DriveMode
from .inputs import DualAxisController, Joystick
from .plots import draw_scene, style_axis
from .simulation import Simulation


class LiveViewer:
    """Real-time view and operator input for one Simulation.

    Attributes:
        simulation: Simulation advanced once per frame.
        joystick: Mouse joystick (used by joystick modes).
        pad: Arrow-key dual-axis pad (used by curvature drive).
        fig: Matplotlib figure holding the field and the input panel.
    """

    def __init__(
        self,
        simulation: Simulation,
        view_size: float = VIEW_SIZE,
        interval: int = LIVE_VIEW_INTERVAL_MS,
        realtime: bool = False,
    ) -> None:
        """Initialize the viewer.

        Args:
            simulation: Simulation to drive and display.
            view_size: Width and height of the field window (meters).
            interval: Frame interval (milliseconds).
            realtime: If True, integrate each tick over the measured time
                since the previous frame instead of the nominal interval.
        """
        self.simulation = simulation
        self.view_size = view_size
        self.interval = interval
        self.realtime = realtime
        self.dragging = False
        self._last_frame: Optional[float] = None
        self._origin = simulation.camera.center

        self.joystick = Joystick(callback=simulation.set_input)
        self.pad = DualAxisController(callback=simulation.set_axes)

        self.fig = plt.figure(figsize=(12, 8), facecolor=COLOR_BACKGROUND)
        self.fig.suptitle(
            f"{simulation.mode.value.title()} drive",
            fontsize=14,
            fontweight="bold",
            color=COLOR_TEXT,
        )
        self.ax_field = plt.subplot2grid((3, 4), (0, 0), rowspan=3, colspan=3, fig=self.fig)
        self.ax_input = plt.subplot2grid((3, 4), (1, 3), fig=self.fig)
        self.status = self.fig.text(0.77, 0.2, "", color=COLOR_TEXT, family="monospace")

        self.fig.canvas.mpl_connect("button_press_event", self.on_press)
        self.fig.canvas.mpl_connect("button_release_event", self.on_release)
        self.fig.canvas.mpl_connect("motion_notify_event", self.on_motion)
        self.fig.canvas.mpl_connect("key_press_event", self.on_key_press)
        self.fig.canvas.mpl_connect("key_release_event", self.on_key_release)

        self._draw()

    @property
    def uses_pad(self) -> bool:
        return self.simulation.mode is DriveMode.CURVATURE

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def on_press(self, event: Any) -> None:
        if self.uses_pad or event.inaxes is not self.ax_input:
            return
        self.dragging = True
        self.on_motion(event)

    def on_motion(self, event: Any) -> None:
        if not self.dragging or event.inaxes is not self.ax_input:
            return
        if event.xdata is None or event.ydata is None:
            return
        self.joystick.move(event.xdata, event.ydata)

    def on_release(self, event: Any) -> None:
        if not self.dragging:
            return
        self.dragging = False
        self.joystick.reset()

    def on_key_press(self, event: Any) -> None:
        if self.uses_pad and self.pad.press_key(event.key):
            logging.debug(f"Key down: {event.key}")

    def on_key_release(self, event: Any) -> None:
        if self.uses_pad and self.pad.release_key(event.key):
            logging.debug(f"Key up: {event.key}")

    # ------------------------------------------------------------------
    # Frame update
    # ------------------------------------------------------------------

    def _frame_dt(self) -> Optional[float]:
        if not self.realtime:
            return None
        now = time.perf_counter()
        dt = None if self._last_frame is None else now - self._last_frame
        self._last_frame = now
        return dt

    def _update(self, frame: int) -> tuple:
        """Advance the simulation one tick and redraw.

        Args:
            frame: Animation frame number (unused).

        Returns:
            Empty tuple (blitting is not used).
        """
        if self.uses_pad:
            self.pad.tick()
        self.simulation.tick(self._frame_dt())
        self._draw()
        return ()

    def _draw(self) -> None:
        sim = self.simulation
        draw_scene(
            self.ax_field,
            sim.robot.pose,
            sim.robot.length,
            sim.trail,
            sim.camera,
            view_size=self.view_size,
            origin=self._origin,
        )
        self._draw_input()

        pose = sim.robot.pose
        wheels = sim.robot.wheels
        self.status.set_text(
            f"t     {sim.time:7.2f} s\n"
            f"x     {pose.x:7.2f} m\n"
            f"y     {pose.y:7.2f} m\n"
            f"v_l   {wheels.left:7.2f} m/s\n"
            f"v_r   {wheels.right:7.2f} m/s"
        )

    def _draw_input(self) -> None:
        ax = self.ax_input
        ax.clear()
        style_axis(ax)
        ax.set_xticks([])
        ax.set_yticks([])

        if self.uses_pad:
            ax.set_xlim(-1.2, 1.2)
            ax.set_ylim(-1.2, 1.2)
            ax.set_title("arrow keys", color=COLOR_TEXT, fontsize=9)
            # steering bar drawn left-positive to match the key direction
            ax.add_patch(Rectangle((0, -1.05), -self.pad.horizontal, 0.1, color="#ffaa00"))
            ax.add_patch(Rectangle((-0.05, 0), 0.1, self.pad.vertical, color="#00ccaa"))
            return

        radius = self.joystick.radius
        ax.set_xlim(-1.2 * radius, 1.2 * radius)
        ax.set_ylim(-1.2 * radius, 1.2 * radius)
        ax.set_title("drag to drive", color=COLOR_TEXT, fontsize=9)
        ax.add_patch(Circle((0, 0), radius, color="#111111"))
        tip_x, tip_y = self.joystick.coordinates()
        ax.add_patch(Circle((tip_x, tip_y), radius / 8, color=COLOR_STICK))

    def start(self) -> None:
        """Start the animation. Blocks until the window is closed."""
        logging.info(f"{TERM_BLUE}✓ Starting live view ({self.simulation.mode.value} drive){TERM_RESET}")
        anim = FuncAnimation(
            self.fig,
            self._update,
            interval=self.interval,
            blit=False,
            cache_frame_data=False,
        )
        plt.show()
        logging.info(f"{TERM_BLUE}Live view closed after {self.simulation.ticks} ticks{TERM_RESET}")


def start_live_view(simulation: Simulation, realtime: bool = False) -> None:
    """Open a live viewer for a simulation and block until it is closed."""
    LiveViewer(simulation, realtime=realtime).start()
