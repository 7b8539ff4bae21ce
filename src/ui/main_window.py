"""
Main window - particle view, status readout and keyboard template / colour selection.
"""
from typing import Callable, Optional
import time

from PyQt5.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel
from PyQt5.QtCore import Qt, QTimer

from particles import MorphEngine, Template, parse_template
from tracking.config import Config
from tracking.control_signal import ControlSignal
from tracking.gesture_classifier import GestureClassifier

from .particle_view import ParticleView

# (hex, label)
PALETTE = [
    ("#00eaff", "Cyan"),
    ("#ff007b", "Pink"),
    ("#b600ff", "Purple"),
    ("#00ff40", "Green"),
    ("#ffae00", "Gold"),
]

TEMPLATE_KEYS = {
    Qt.Key_1: Template.HEART,
    Qt.Key_2: Template.FLOWER,
    Qt.Key_3: Template.SATURN,
    Qt.Key_4: Template.BUDDHA,
    Qt.Key_5: Template.FIREWORKS,
}

MAX_DELTA = 0.1  # Clamp frame time after stalls


class ParticleWindow(QMainWindow):
    """
    Runs the animation cadence.

    Every tick reads one control signal snapshot, advances the morph engine
    and hands the live buffer to the view.
    """

    def __init__(
        self,
        config: Config,
        signal_source: Optional[Callable[[], ControlSignal]] = None,
        engine: Optional[MorphEngine] = None,
        parent=None
    ):
        super().__init__(parent)
        self._config = config
        self._signal_source = signal_source or ControlSignal.inactive
        self._classifier = GestureClassifier(config.classifier)
        self._engine = engine or MorphEngine(
            config.morph, config.particles.count, config.particles.template
        )
        self._color_index = 0
        self._color = config.particles.color
        self._last_tick: Optional[float] = None

        self._setup_window()
        self._setup_ui()
        self.set_color(config.particles.color)

        self._timer = QTimer(self)
        self._timer.timeout.connect(self._tick)
        self._timer.start(max(1, 1000 // config.ui.fps))

    def _setup_window(self):
        self.setWindowTitle("Aether Particles")
        self.resize(self._config.ui.width, self._config.ui.height)
        self.setStyleSheet(
            "QMainWindow { background: black; }"
            "QLabel { color: rgba(255, 255, 255, 160); font-size: 11px; }"
            "QLabel#Title { color: #00eaff; font-size: 22px; font-weight: 900; }"
            "QLabel#Hint { color: rgba(255, 255, 255, 60); font-size: 13px; }"
        )

    def _setup_ui(self):
        ui = self._config.ui
        self.view = ParticleView(ui.point_size, ui.camera_distance, ui.fov)

        central = QWidget()
        central.setObjectName("CentralWidget")
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.view)

        # Overlay labels drawn on top of the view
        overlay = QVBoxLayout(self.view)
        overlay.setContentsMargins(20, 16, 20, 16)

        header = QHBoxLayout()
        title = QLabel("AETHER PARTICLES")
        title.setObjectName("Title")
        header.addWidget(title, alignment=Qt.AlignLeft | Qt.AlignTop)
        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignRight | Qt.AlignTop)
        header.addWidget(self.status_label, alignment=Qt.AlignRight | Qt.AlignTop)
        overlay.addLayout(header)

        self.hint_label = QLabel("SHOW YOUR HAND TO THE CAMERA")
        self.hint_label.setObjectName("Hint")
        self.hint_label.setAlignment(Qt.AlignCenter)
        overlay.addWidget(self.hint_label, stretch=1)

        self.footer_label = QLabel()
        overlay.addWidget(self.footer_label, alignment=Qt.AlignLeft | Qt.AlignBottom)
        self._update_footer()

    def set_template(self, template):
        """Select a shape template; the particle buffer is left alone."""
        parsed = parse_template(template)
        if parsed is None:
            print(f"[ui] Unknown template '{template}', using random cube")
        self._engine.set_template(parsed or template)
        self._update_footer()

    def set_color(self, color: str):
        self._color = color
        self.view.set_color(color)
        self._update_footer()

    def cycle_color(self):
        self._color_index = (self._color_index + 1) % len(PALETTE)
        self.set_color(PALETTE[self._color_index][0])

    def set_detection_idle(self):
        """Detection gave up; keep animating toward the idle cloud."""
        self.hint_label.setText("HAND TRACKING UNAVAILABLE")

    def _update_footer(self):
        template = self._engine.template
        name = template.name if isinstance(template, Template) else str(template)
        self.footer_label.setText(
            f"Template: {name}   Colour: {self._color}   "
            "[1-5] shape  [C] colour  [Q] quit"
        )

    def _tick(self):
        now = time.perf_counter()
        delta = 0.0 if self._last_tick is None else min(now - self._last_tick, MAX_DELTA)
        self._last_tick = now

        signal = self._signal_source()
        self._engine.tick(delta, signal)
        self.view.set_frame(self._engine.points, self._engine.rotation, signal.gesture)
        self._update_status(signal)

    def _update_status(self, signal: ControlSignal):
        if signal.active:
            gesture = signal.gesture.name
            if self._classifier.is_rest_pose(signal):
                gesture = "CLOSED"
            self.status_label.setText(
                f"TENSION {signal.tension:.2f}\nEXPANSION {signal.expansion:.2f}\n{gesture}"
            )
            self.hint_label.setVisible(False)
        else:
            self.status_label.setText("NO HAND")
            self.hint_label.setVisible(True)

    def keyPressEvent(self, event):
        key = event.key()
        if key in TEMPLATE_KEYS:
            self.set_template(TEMPLATE_KEYS[key])
        elif key == Qt.Key_C:
            self.cycle_color()
        elif key in (Qt.Key_Q, Qt.Key_Escape):
            self.close()
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        self._timer.stop()
        super().closeEvent(event)

    @property
    def engine(self) -> MorphEngine:
        return self._engine
