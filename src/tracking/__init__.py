"""
Aether Particles Tracking Module

Hand landmark metrics, signal filtering and gesture classification.
Camera / MediaPipe / Qt pieces live in hand_tracker and worker and are
imported explicitly.
"""
from .config import Config, load_config
from .control_signal import ControlSignal, Gesture
from .detector import HandDetector
from .errors import TrackingError, DegenerateInput, DetectorFailure
from .gesture_classifier import GestureClassifier
from .landmarks import HandLandmarks
from .metrics import RawMetrics, extract_metrics
from .pipeline import GesturePipeline
from .signal_filter import SignalFilter

__all__ = [
    'Config',
    'load_config',
    'ControlSignal',
    'Gesture',
    'HandDetector',
    'TrackingError',
    'DegenerateInput',
    'DetectorFailure',
    'GestureClassifier',
    'HandLandmarks',
    'RawMetrics',
    'extract_metrics',
    'GesturePipeline',
    'SignalFilter',
]
