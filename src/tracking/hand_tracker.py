"""
MediaPipe hand landmark detector and camera wrapper using the Tasks API.
"""
from pathlib import Path
from typing import Optional, List
import time
import cv2
import numpy as np
import mediapipe as mp

from .config import CameraConfig, MediaPipeConfig
from .detector import HandDetector
from .errors import DetectorFailure
from .landmarks import HandLandmarks, HAND_CONNECTIONS

# MediaPipe Tasks API imports
BaseOptions = mp.tasks.BaseOptions
HandLandmarker = mp.tasks.vision.HandLandmarker
HandLandmarkerOptions = mp.tasks.vision.HandLandmarkerOptions
VisionRunningMode = mp.tasks.vision.RunningMode


class Camera:
    """cv2 capture device configured from CameraConfig."""

    def __init__(self, config: CameraConfig):
        self._config = config
        self._cap: Optional[cv2.VideoCapture] = None

    def open(self) -> bool:
        """
        Open the capture device.

        Returns:
            True if the device is ready, False otherwise.
        """
        if self._cap is not None:
            return True

        cap = cv2.VideoCapture(self._config.device_id)
        if not cap.isOpened():
            cap.release()
            return False

        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self._config.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self._config.height)
        cap.set(cv2.CAP_PROP_FPS, self._config.fps)
        self._cap = cap
        return True

    def read(self) -> Optional[np.ndarray]:
        """Read one BGR frame, mirrored if configured. None if unavailable."""
        if self._cap is None:
            return None
        ret, frame = self._cap.read()
        if not ret:
            return None
        if self._config.mirror:
            frame = cv2.flip(frame, 1)
        return frame

    def release(self) -> None:
        if self._cap is not None:
            self._cap.release()
            self._cap = None

    @property
    def is_open(self) -> bool:
        return self._cap is not None


class MediaPipeHandDetector(HandDetector):
    """
    MediaPipe Tasks HandLandmarker in VIDEO mode.

    Landmarks are returned normalized to 0-1 image coordinates (z relative
    to the wrist), mirrored the same way as the frames handed in.
    """

    DEFAULT_MODEL_PATH = Path(__file__).parent.parent.parent / "models" / "hand_landmarker.task"
    MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"

    def __init__(self, config: MediaPipeConfig, model_path: Optional[Path] = None):
        self._config = config
        self._model_path = Path(model_path) if model_path else self.DEFAULT_MODEL_PATH
        self._landmarker: Optional[HandLandmarker] = None
        self._start_perf: float = 0.0
        self._last_timestamp_ms: int = -1

    def start(self) -> None:
        if self._landmarker is not None:
            return

        if not self._model_path.exists():
            raise DetectorFailure(
                f"Model file not found: {self._model_path} (download from {self.MODEL_URL})"
            )

        base_opts = BaseOptions(model_asset_path=str(self._model_path))
        if self._config.use_gpu:
            try:
                base_opts = BaseOptions(
                    model_asset_path=str(self._model_path),
                    delegate=BaseOptions.Delegate.GPU,
                )
                print("[tracking] GPU delegate requested for MediaPipe")
            except AttributeError:
                print("[tracking] GPU delegate not available, using CPU")

        options = HandLandmarkerOptions(
            base_options=base_opts,
            running_mode=VisionRunningMode.VIDEO,
            num_hands=self._config.max_num_hands,
            min_hand_detection_confidence=self._config.min_detection_confidence,
            min_tracking_confidence=self._config.min_tracking_confidence,
        )

        try:
            self._landmarker = HandLandmarker.create_from_options(options)
        except Exception as e:
            raise DetectorFailure(f"Could not create hand landmarker: {e}") from e

        self._start_perf = time.perf_counter()
        self._last_timestamp_ms = -1
        print(f"[tracking] Hand landmarker loaded from {self._model_path.name}")

    def estimate_hands(self, frame) -> List[HandLandmarks]:
        if self._landmarker is None:
            raise DetectorFailure("Detector not started")

        rgb_frame = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        rgb_frame.flags.writeable = False
        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=rgb_frame)

        # VIDEO mode needs strictly increasing timestamps
        timestamp_ms = int((time.perf_counter() - self._start_perf) * 1000)
        if timestamp_ms <= self._last_timestamp_ms:
            timestamp_ms = self._last_timestamp_ms + 1
        self._last_timestamp_ms = timestamp_ms

        try:
            result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        except Exception as e:
            raise DetectorFailure(f"detect_for_video failed: {e}") from e

        hands = []
        for idx, hand_landmarks in enumerate(result.hand_landmarks or []):
            handedness = "Unknown"
            confidence = 1.0
            if result.handedness and idx < len(result.handedness):
                category = result.handedness[idx][0]
                handedness = category.category_name
                confidence = category.score
            hands.append(HandLandmarks(
                landmarks=[(lm.x, lm.y, lm.z) for lm in hand_landmarks],
                handedness=handedness,
                confidence=confidence,
            ))
        return hands

    def close(self) -> None:
        if self._landmarker is not None:
            self._landmarker.close()
            self._landmarker = None


def draw_landmarks(frame: np.ndarray, landmarks: Optional[HandLandmarks]) -> np.ndarray:
    """Return a copy of the frame with normalized landmarks drawn on it."""
    frame = frame.copy()
    if landmarks is None:
        return frame

    h, w = frame.shape[:2]
    for x, y, *_ in landmarks.landmarks:
        cv2.circle(frame, (int(x * w), int(y * h)), 5, (0, 255, 0), -1)

    for start_idx, end_idx in HAND_CONNECTIONS:
        start = landmarks.landmarks[start_idx]
        end = landmarks.landmarks[end_idx]
        start_pos = (int(start[0] * w), int(start[1] * h))
        end_pos = (int(end[0] * w), int(end[1] * h))
        cv2.line(frame, start_pos, end_pos, (0, 255, 0), 2)

    return frame
