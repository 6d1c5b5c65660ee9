"""
Configuration loading.
Reads the YAML config, merges it over built-in defaults and warns about
fields with the wrong type.
"""

import logging
import os

import yaml

logger = logging.getLogger(__name__)

_BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
DEFAULT_CONFIG_PATH = os.path.join(_BASE_DIR, "config", "config.yaml")

DEFAULTS = {
    "camera": {
        "device_id": 0,
        "width": 960,
        "height": 720,
        "fps": 30,
        "flip_horizontal": True,
        "threaded": True,
        "warmup_frames": 5,
    },
    "mediapipe": {
        "model_path": "",
        "max_num_hands": 4,
        "min_detection_confidence": 0.6,
        "min_tracking_confidence": 0.55,
        "min_presence_confidence": 0.5,
        "running_mode": "VIDEO",
    },
    "game": {
        "policy": "duel",
        "win_points": 10,
        "task_pool_size": 120,
        "duel_delay_s": 0.9,
        "coop_delay_s": 1.2,
        "minute_tolerance": 2,
        "player_split_x": 0.5,
        "target_source": "",
    },
    "visualization": {
        "show_landmarks": True,
        "show_split_line": True,
        "font_scale": 0.7,
        "font_thickness": 2,
    },
    "performance": {
        "target_fps": 25.0,
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "max_size_mb": 10,
        "backup_count": 3,
    },
}

# Schema: sections and their expected types
_CONFIG_SCHEMA = {
    "camera": {
        "device_id": int,
        "width": int,
        "height": int,
        "fps": int,
        "flip_horizontal": bool,
        "threaded": bool,
        "warmup_frames": int,
    },
    "mediapipe": {
        "model_path": str,
        "max_num_hands": int,
        "min_detection_confidence": float,
        "min_tracking_confidence": float,
        "min_presence_confidence": float,
        "running_mode": str,
    },
    "game": {
        "policy": str,
        "win_points": int,
        "task_pool_size": int,
        "duel_delay_s": float,
        "coop_delay_s": float,
        "minute_tolerance": int,
        "player_split_x": float,
        "target_source": str,
    },
    "visualization": {
        "show_landmarks": bool,
        "show_split_line": bool,
        "font_scale": float,
        "font_thickness": int,
        "colors": dict,
    },
    "performance": {
        "target_fps": float,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def validate_config(data: dict) -> list:
    """Return a list of human-readable problems; empty when valid."""
    problems = []
    for section_name, fields in _CONFIG_SCHEMA.items():
        section = data.get(section_name)
        if section is None:
            continue
        if not isinstance(section, dict):
            problems.append(f"Section '{section_name}' should be a dict, got {type(section).__name__}")
            continue
        for field_name, expected_type in fields.items():
            if field_name not in section:
                continue
            value = section[field_name]
            # Allow int where float is expected
            if expected_type is float and isinstance(value, (int, float)) and not isinstance(value, bool):
                continue
            if expected_type is int and isinstance(value, bool):
                problems.append(f"{section_name}.{field_name}: expected int, got bool ({value!r})")
                continue
            if not isinstance(value, expected_type):
                problems.append(
                    f"{section_name}.{field_name}: expected {expected_type.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )
    return problems


def load_config(config_path=None) -> dict:
    """
    Load configuration from a YAML file merged over DEFAULTS.

    A missing file is not an error: the defaults are returned.
    """
    config_path = config_path or DEFAULT_CONFIG_PATH
    try:
        with open(config_path, "r") as f:
            user_data = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", config_path)
        user_data = {}

    if not isinstance(user_data, dict):
        logger.warning("Config root should be a mapping, got %s; using defaults",
                       type(user_data).__name__)
        user_data = {}

    data = _deep_merge(DEFAULTS, user_data)

    problems = validate_config(data)
    for problem in problems:
        logger.warning("Config validation: %s", problem)
    if not problems:
        logger.debug("Config validation passed")

    return data
