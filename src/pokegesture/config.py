"""
Config loader for pokegesture.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
import yaml

from .joints import Handedness


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 1280
    height: int = 720
    fps: int = 30
    mirror: bool = True            # Flip horizontally so the preview reads like a mirror


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_presence_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    model_path: Optional[str] = None   # None = models/hand_landmarker.task in project root


@dataclass
class DetectorConfig:
    hands: List[str] = field(default_factory=lambda: ["right"])
    end_on_disable: bool = False   # Fire gesture_ended when disabled mid-gesture

    def handedness_list(self) -> List[Handedness]:
        """Parsed `hands`, duplicates dropped, order kept."""
        if isinstance(self.hands, str):
            names = [self.hands]
        else:
            names = list(self.hands or [])
        if not names:
            raise ValueError("detector.hands must name at least one hand")

        result: List[Handedness] = []
        for name in names:
            handedness = Handedness.from_name(name)
            if handedness not in result:
                result.append(handedness)
        return result


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_file: Optional[str] = None
    format: Optional[str] = None


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    detector: DetectorConfig = field(default_factory=DetectorConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping for {cls.__name__}, got {type(data).__name__}")
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def config_from_dict(data: Optional[dict]) -> Config:
    """Build a Config from an already-parsed mapping."""
    data = data or {}
    config = Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        detector=_dict_to_dataclass(DetectorConfig, data.get('detector')),
        logging=_dict_to_dataclass(LoggingConfig, data.get('logging')),
    )
    # Fail early on bad hand names
    config.detector.handedness_list()
    return config


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
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    return config_from_dict(data)
