"""
Detection cadence driven by a QTimer on the GUI event loop.

Detection and animation share one thread, so the control signal is never
read while it is being written.
"""
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal, QTimer

from .config import Config
from .control_signal import ControlSignal
from .errors import DetectorFailure
from .hand_tracker import Camera, MediaPipeHandDetector
from .pipeline import GesturePipeline


class DetectionWorker(QObject):
    """
    Polls the camera at a fixed interval and runs one detection cycle per
    frame. Emits signals for UI updates.
    """
    # Signals
    signal_updated = pyqtSignal(object)  # Emits ControlSignal
    detection_disabled = pyqtSignal()
    error = pyqtSignal(str)

    def __init__(self, config: Config, pipeline: Optional[GesturePipeline] = None,
                 camera: Optional[Camera] = None, parent=None):
        super().__init__(parent)
        self._config = config
        self._camera = camera or Camera(config.camera)
        self._pipeline = pipeline or GesturePipeline(
            MediaPipeHandDetector(config.mediapipe), config
        )
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._poll)
        self._is_running = False

    def start(self) -> bool:
        """
        Open the camera and detector, then start polling.

        Returns:
            True if started successfully, False otherwise.
        """
        if self._is_running:
            return True

        if not self._camera.open():
            self.error.emit("Could not open camera")
            self.stop()
            return False

        try:
            self._pipeline.start()
        except DetectorFailure as e:
            self.error.emit(str(e))
            self.stop()
            return False

        self._is_running = True
        self._timer.start(self._config.detection.poll_interval_ms)
        print(f"[tracking] Detection started at {1000 // self._config.detection.poll_interval_ms} Hz")
        return True

    def stop(self) -> None:
        """Halt polling and release camera and detector. Safe to call twice."""
        self._is_running = False
        self._timer.stop()
        try:
            self._pipeline.stop()
        finally:
            self._camera.release()

    def snapshot(self) -> ControlSignal:
        return self._pipeline.snapshot()

    def _poll(self) -> None:
        frame = self._camera.read()
        if frame is None:
            # A dead camera counts toward the same threshold as the detector
            signal = self._pipeline.record_failure(DetectorFailure("Camera returned no frame"))
        else:
            signal = self._pipeline.detect_once(frame)
        self.signal_updated.emit(signal)

        if self._pipeline.disabled:
            self._timer.stop()
            self._is_running = False
            self._camera.release()
            self.error.emit("Hand detection disabled after repeated failures")
            self.detection_disabled.emit()

    @property
    def pipeline(self) -> GesturePipeline:
        return self._pipeline

    @property
    def is_running(self) -> bool:
        return self._is_running
