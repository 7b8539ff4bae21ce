"""
Detection cycle: detector -> metrics -> filter -> classifier -> control signal.
"""
from dataclasses import replace
from typing import List, Optional
import time

from .config import Config
from .control_signal import ControlSignal
from .detector import HandDetector
from .errors import DegenerateInput, DetectorFailure
from .gesture_classifier import GestureClassifier
from .landmarks import HandLandmarks
from .metrics import RawMetrics, extract_metrics
from .one_euro_filter import OneEuroFilter
from .signal_filter import SignalFilter


class GesturePipeline:
    """
    Owns the sensing state for one detector.

    The current ControlSignal is replaced as a whole once per detection
    cycle; snapshot() hands out that single immutable object. After
    max_consecutive_failures detector or extraction failures in a row,
    detection is disabled for good and the signal stays inactive.
    """

    def __init__(self, detector: Optional[HandDetector], config: Config):
        self._detector = detector
        self._detection_config = config.detection
        self._filter = SignalFilter(config.filter)
        self._classifier = GestureClassifier(config.classifier)
        self._center_filter = OneEuroFilter(
            min_cutoff=config.filter.center_min_cutoff,
            beta=config.filter.center_beta,
        )

        self._signal = ControlSignal.inactive()
        self._failures = 0
        self._disabled = False
        self._is_running = False
        self._last_landmarks: Optional[HandLandmarks] = None

    def start(self) -> None:
        """
        Acquire the detector.

        Raises:
            DetectorFailure: the detector could not start. Everything
                acquired so far is released before raising.
        """
        if self._is_running:
            return
        if self._detector is None or self._disabled:
            raise DetectorFailure("Detection is disabled")

        try:
            self._detector.start()
        except DetectorFailure:
            self.stop()
            raise
        except Exception as e:
            self.stop()
            raise DetectorFailure(f"Detector failed to start: {e}") from e

        self._is_running = True

    def stop(self) -> None:
        """Release the detector and fall back to the rest state. Idempotent."""
        self._is_running = False
        self._release_detector()
        self._reset_signal()

    def detect_once(self, frame, now: Optional[float] = None) -> ControlSignal:
        """
        Run one detection cycle on a frame.

        Detector errors leave the previous signal in place until the
        failure threshold is reached.
        """
        if self._disabled or self._detector is None:
            return self._signal

        try:
            hands = self._detector.estimate_hands(frame)
        except Exception as e:
            self._record_failure(e)
            return self._signal

        return self.process(hands, now)

    def process(self, hands: Optional[List[HandLandmarks]], now: Optional[float] = None) -> ControlSignal:
        """Feed one detector result (empty / None = no hand) through the filter."""
        if self._disabled:
            return self._signal

        self._last_landmarks = hands[0] if hands else None
        if not hands:
            self._failures = 0
            return self._reset_signal()

        try:
            metrics = extract_metrics(hands[0], use_z=self._detection_config.use_z)
        except DegenerateInput as e:
            self._reset_signal()
            self._record_failure(e)
            return self._signal

        self._failures = 0
        filtered = self._filter.update(metrics)
        gesture = self._classifier.classify(filtered, metrics)
        offset = self._hand_offset(metrics, now)
        return self._publish(replace(filtered, gesture=gesture, hand_offset=offset))

    def record_failure(self, error: Exception) -> ControlSignal:
        """
        Count a failure raised outside the detector, e.g. a camera that
        stopped delivering frames. Returns the current signal.
        """
        if not self._disabled:
            self._record_failure(error)
        return self._signal

    def snapshot(self) -> ControlSignal:
        """Current signal; all fields come from the same detection cycle."""
        return self._signal

    def _hand_offset(self, metrics: RawMetrics, now: Optional[float]):
        if metrics.hand_center is None:
            return None
        if now is None:
            now = time.perf_counter()
        cx, cy = self._center_filter(now, metrics.hand_center)
        return (cx - 0.5, cy - 0.5)

    def _record_failure(self, error: Exception) -> None:
        self._failures += 1
        limit = self._detection_config.max_consecutive_failures
        print(f"[tracking] Detection failure {self._failures}/{limit}: {error}")

        if self._failures >= limit:
            print("[tracking] Too many consecutive failures, disabling detection")
            self._disabled = True
            self._is_running = False
            self._release_detector()
            self._reset_signal()

    def _release_detector(self) -> None:
        detector = self._detector
        self._detector = None
        if detector is not None:
            try:
                detector.close()
            except Exception as e:
                print(f"[tracking] Error closing detector: {e}")

    def _reset_signal(self) -> ControlSignal:
        self._center_filter.reset()
        return self._publish(self._filter.reset())

    def _publish(self, signal: ControlSignal) -> ControlSignal:
        self._signal = signal
        return signal

    @property
    def disabled(self) -> bool:
        return self._disabled

    @property
    def failures(self) -> int:
        return self._failures

    @property
    def is_running(self) -> bool:
        return self._is_running

    @property
    def last_landmarks(self) -> Optional[HandLandmarks]:
        """First hand of the latest detector result, for drawing."""
        return self._last_landmarks

    @property
    def classifier(self) -> GestureClassifier:
        return self._classifier
