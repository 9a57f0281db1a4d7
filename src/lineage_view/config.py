"""
Layout Configuration and Defaults.

This module centralizes the physics and interaction parameters of the
lineage view. The defaults give 250x50 node boxes,
200 unit links, depth columns 300 units apart with roots at three quarters
of the viewport width.

Configuration can be overridden from YAML:

    layout:
      depth_spacing: 250
      link_distance: 180
    interaction:
      scale_extent: [0.25, 8]
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .core.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(".lineage/config.yaml")

# --- Node Box ---
NODE_WIDTH = 250.0
NODE_HEIGHT = 50.0
NODE_CORNER_RADIUS = 10.0

# --- Forces ---
LINK_DISTANCE = 200.0
LINK_STRENGTH = 0.1
COLLIDE_RADIUS = 100.0
COLLIDE_STRENGTH = 0.1
ALIGN_STRENGTH = 0.1
DEPTH_SPACING = 300.0
DEPTH_ANCHOR = 0.75  # Roots sit at this fraction of the viewport width
DEPTH_STRENGTH = 1.0
CENTER_STRENGTH = 1.0

# --- Cooling ---
ALPHA_START = 1.0
ALPHA_MIN = 0.001
VELOCITY_DECAY = 0.4
COOLING_TICKS = 300  # Ticks for alpha to fall from 1 to ALPHA_MIN
MAX_TICKS = 1000

# --- Interaction ---
SCALE_EXTENT = (0.5, 5.0)
FIT_PADDING = 0.9  # Fitted graph fills 90% of the viewport
FIT_DURATION_MS = 750.0
DRAG_ALPHA_TARGET = 0.1
FRAME_MS = 1000.0 / 60


class BoxConfig(BaseModel):
    """Size of the rectangle drawn for every node, centered on its position."""
    width: float = Field(default=NODE_WIDTH, gt=0)
    height: float = Field(default=NODE_HEIGHT, gt=0)
    corner_radius: float = Field(default=NODE_CORNER_RADIUS, ge=0)

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def half_height(self) -> float:
        return self.height / 2


class LayoutConfig(BaseModel):
    """
    Parameters of the force simulation.

    Strengths are per-tick velocity fractions, so values above 1 overshoot.
    `alpha_decay` defaults to the rate that cools alpha from 1 to `alpha_min`
    in `COOLING_TICKS` ticks.
    """
    link_distance: float = LINK_DISTANCE
    link_strength: float = Field(default=LINK_STRENGTH, ge=0)
    collide_radius: float = Field(default=COLLIDE_RADIUS, ge=0)
    collide_strength: float = Field(default=COLLIDE_STRENGTH, ge=0, le=1)
    align_strength: float = Field(default=ALIGN_STRENGTH, ge=0)
    depth_spacing: float = DEPTH_SPACING
    depth_anchor: float = DEPTH_ANCHOR
    depth_strength: float = Field(default=DEPTH_STRENGTH, ge=0)
    center_strength: float = Field(default=CENTER_STRENGTH, ge=0)

    alpha: float = Field(default=ALPHA_START, ge=0, le=1)
    alpha_min: float = Field(default=ALPHA_MIN, gt=0, lt=1)
    alpha_decay: Optional[float] = Field(default=None, ge=0, le=1)
    velocity_decay: float = Field(default=VELOCITY_DECAY, ge=0, le=1)
    max_ticks: int = Field(default=MAX_TICKS, gt=0)
    seed: int = 0

    model_config = ConfigDict(frozen=True)

    @property
    def resolved_alpha_decay(self) -> float:
        if self.alpha_decay is not None:
            return self.alpha_decay
        return 1 - self.alpha_min ** (1 / COOLING_TICKS)


class RoutingConfig(BaseModel):
    """
    Edge curve parameters.

    An edge whose end port lies more than `backward_threshold` to the left of
    its start port is drawn as an outward loop instead of an S-curve.
    """
    backward_threshold: float = 0.0
    backward_offset_x: float = Field(default=NODE_WIDTH / 2, ge=0)
    backward_offset_y: float = Field(default=NODE_HEIGHT * 2, ge=0)

    model_config = ConfigDict(frozen=True)


class InteractionConfig(BaseModel):
    """Zoom, drag and fit-to-view parameters."""
    scale_extent: Tuple[float, float] = SCALE_EXTENT
    fit_padding: float = Field(default=FIT_PADDING, gt=0, le=1)
    fit_duration_ms: float = Field(default=FIT_DURATION_MS, ge=0)
    drag_alpha_target: float = Field(default=DRAG_ALPHA_TARGET, ge=0, le=1)
    wheel_delta_factor: float = 0.002
    dblclick_factor: float = 2.0

    model_config = ConfigDict(frozen=True)

    @field_validator("scale_extent")
    @classmethod
    def _check_extent(cls, value: Tuple[float, float]) -> Tuple[float, float]:
        low, high = value
        if low <= 0 or high < low:
            raise ValueError(f"scale_extent must satisfy 0 < min <= max, got {value}")
        return value


class ViewConfig(BaseModel):
    """Complete configuration of one mounted lineage view."""
    box: BoxConfig = Field(default_factory=BoxConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    routing: RoutingConfig = Field(default_factory=RoutingConfig)
    interaction: InteractionConfig = Field(default_factory=InteractionConfig)
    fullscreen: bool = False

    model_config = ConfigDict(extra="forbid")


def load_config(path: Optional[Path] = None) -> ViewConfig:
    """
    Load a ViewConfig from YAML.

    A missing file yields the defaults. Keys absent from the file keep
    their default values.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    if not config_path.exists():
        if path is not None:
            raise ConfigError(f"Config file not found: {config_path}")
        return ViewConfig()

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config root must be a mapping in {config_path}")

    try:
        config = ViewConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e

    logger.debug(f"Loaded view configuration from {config_path}")
    return config
