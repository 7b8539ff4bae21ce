"""
Config loader for Aether Particles.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    mirror: bool = True


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    use_gpu: bool = True


@dataclass
class DetectionConfig:
    poll_interval_ms: int = 50          # 20 detection cycles per second
    max_consecutive_failures: int = 5
    use_z: bool = False                 # Include z in landmark distances


@dataclass
class FilterConfig:
    # Linear bands mapping normalized geometry to [0, 1]
    tension_offset: float = 2.5
    tension_range: float = 1.0
    expansion_offset: float = 0.4
    expansion_range: float = 0.6

    smoothing: float = 0.25             # EMA factor (0.1 = very smooth, 0.5 = responsive)
    dead_zone: float = 0.02
    floor: float = 0.05

    # One-euro filter for the hand centre offset
    center_min_cutoff: float = 1.0
    center_beta: float = 0.5


@dataclass
class ClassifierConfig:
    extended_threshold: float = 1.8     # tip-to-wrist / hand length
    closed_threshold: float = 1.5
    ok_pinch_threshold: float = 0.35    # thumb-to-index / hand length
    ok_extended_scale: float = 0.8      # OK only needs the other fingers mostly extended
    fist_threshold: float = 0.5
    open_threshold: float = 0.3
    rest_threshold: float = 0.15


@dataclass
class MorphConfig:
    active_lerp: float = 0.12
    idle_lerp: float = 0.025

    zoom_min: float = 0.15
    zoom_range: float = 9.85
    fist_zoom_min: float = 0.6
    fist_zoom_range: float = 0.4
    point_focus: float = 0.5

    explosion_radius: float = 14.0
    explosion_amplitude: float = 6.0
    explosion_speed: float = 3.0

    hand_offset_scale: float = 30.0

    rotation_base: float = 0.1
    rotation_gain: float = 0.5
    rotation_decay: float = 0.95

    circle_radius: float = 15.0
    scatter_radius: float = 60.0


@dataclass
class ParticleConfig:
    count: int = 5000
    template: str = "SATURN"
    color: str = "#00eaff"


@dataclass
class UIConfig:
    width: int = 1280
    height: int = 720
    fps: int = 60
    point_size: float = 1.6
    camera_distance: float = 40.0
    fov: float = 60.0


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    detection: DetectionConfig = field(default_factory=DetectionConfig)
    filter: FilterConfig = field(default_factory=FilterConfig)
    classifier: ClassifierConfig = field(default_factory=ClassifierConfig)
    morph: MorphConfig = field(default_factory=MorphConfig)
    particles: ParticleConfig = field(default_factory=ParticleConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        detection=_dict_to_dataclass(DetectionConfig, data.get('detection')),
        filter=_dict_to_dataclass(FilterConfig, data.get('filter')),
        classifier=_dict_to_dataclass(ClassifierConfig, data.get('classifier')),
        morph=_dict_to_dataclass(MorphConfig, data.get('morph')),
        particles=_dict_to_dataclass(ParticleConfig, data.get('particles')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
