"""
Configuration management for shapesnap.

Loads YAML configuration over defaults and validates search settings before
any pixel work begins.
"""

import os
from dataclasses import dataclass, field

import yaml

from shapesnap.errors import InvalidConfiguration
from shapesnap.models import Color
from shapesnap.shapes.registry import validate_shape_kinds


DEFAULT_SHAPES = ["Rect", "Triangle", "Ellipse", "Cubic", "Quadratic"]


@dataclass
class SearchConfig:
    """Configuration for the shape search."""
    amount_of_shapes: int = 100
    amount_of_attempts: int = 10
    max_mutations: int = 1000  # hard cap on mutation rounds per attempt
    patience: int = 100  # rounds without improvement before an attempt stops
    alpha: int = 128
    background_color: list = None  # [r, g, b, a]; None means mean color
    shapes: list = field(default_factory=lambda: list(DEFAULT_SHAPES))
    stroke_width: int = 1
    seed: int = None


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class OutputConfig:
    """Configuration for files written next to the SVG."""
    write_png: bool = True
    write_json: bool = True
    max_edge: int = None  # downscale input before searching


@dataclass
class SnapConfig:
    """Complete shapesnap configuration."""
    search: SearchConfig = field(default_factory=SearchConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)


def load_config(config_path=None):
    """
    Load configuration from YAML file.
    
    Falls back to defaults for any missing values.
    """
    config = SnapConfig()
    
    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}
        
        config = _merge_config(config, yaml_data)
    
    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section in ("search", "tracing", "output"):
        if section in yaml_data:
            target = getattr(config, section)
            for key, value in (yaml_data[section] or {}).items():
                if hasattr(target, key):
                    setattr(target, key, value)
    
    return config


def validate_config(config):
    """
    Check search settings, raising InvalidConfiguration on the first problem.
    
    Unregistered shape kinds raise UnknownShapeKind.
    """
    search = config.search if isinstance(config, SnapConfig) else config
    
    for name in ("amount_of_shapes", "amount_of_attempts", "max_mutations", "patience", "stroke_width"):
        value = getattr(search, name)
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise InvalidConfiguration(f"{name} must be a positive integer, got {value!r}")
    
    if isinstance(search.alpha, bool) or not isinstance(search.alpha, int) or not 0 <= search.alpha <= 255:
        raise InvalidConfiguration(f"alpha must be an integer in [0, 255], got {search.alpha!r}")
    
    seed = search.seed
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        raise InvalidConfiguration(f"seed must be a non-negative integer or null, got {seed!r}")
    
    if not search.shapes:
        raise InvalidConfiguration("shapes allow-list must not be empty")
    
    validate_shape_kinds(search.shapes)
    
    if search.background_color is not None:
        resolve_background(search)
    
    return config


def resolve_background(search):
    """Return the configured background override as a Color, or None."""
    value = search.background_color
    if value is None or isinstance(value, Color):
        return value
    try:
        return Color.from_sequence(value)
    except (TypeError, ValueError) as e:
        raise InvalidConfiguration(f"background_color is not a valid RGBA color: {value!r}") from e


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    config = SnapConfig()
    
    yaml_data = {
        "search": {
            "amount_of_shapes": config.search.amount_of_shapes,
            "amount_of_attempts": config.search.amount_of_attempts,
            "max_mutations": config.search.max_mutations,
            "patience": config.search.patience,
            "alpha": config.search.alpha,
            "background_color": config.search.background_color,
            "shapes": config.search.shapes,
            "stroke_width": config.search.stroke_width,
            "seed": config.search.seed,
        },
        "tracing": {
            "enabled": config.tracing.enabled,
            "level": config.tracing.level,
        },
        "output": {
            "write_png": config.output.write_png,
            "write_json": config.output.write_json,
            "max_edge": config.output.max_edge,
        },
    }
    
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
