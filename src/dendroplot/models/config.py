"""
Pydantic configuration models for dendroplot.

These models define the constants used by the layout passes and the
styling used when drawing a dendrogram with Plotly. Configuration can be
loaded from YAML files or built directly in code.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from dendroplot.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class LayoutConfig(BaseModel):
    """
    Constants for the topological layout passes.

    Layout ignores branch lengths entirely: a node's position along the
    depth axis is derived from the number of leaves beneath it.
    """

    tip_offset: float = Field(
        default=30.0,
        ge=0,
        description=(
            "Extra distance added to tip x positions so labels and markers "
            "sit clear of the innermost internal nodes"
        ),
    )
    angular_gap: float = Field(
        default=1.0,
        gt=0,
        description=(
            "Gap, in leaf-row units, inserted where the radial layout closes "
            "the circle so the first and last tips do not coincide"
        ),
    )
    arc_samples: int = Field(
        default=25,
        ge=1,
        description="Number of evenly spaced angles used to draw each radial arc",
    )

    model_config = {"frozen": True}


class StyleConfig(BaseModel):
    """Marker and line styling for the rendered dendrogram."""

    width: int = Field(default=770, ge=100, description="Figure width in pixels")
    height: int = Field(default=770, ge=100, description="Figure height in pixels")
    internal_node_size: float = Field(default=5.0, gt=0)
    tip_size: float = Field(default=6.3, gt=0)
    internal_node_color: str = Field(default="#a4a4a4")
    default_tip_color: str = Field(
        default="#1f77b4",
        description="Tip color used when no leaf color is supplied",
    )
    line_color: str = Field(default="#000000")
    line_width: float = Field(default=0.5, gt=0)
    line_shape: str = Field(
        default="spline",
        description="Plotly line shape for edge polylines",
    )

    model_config = {"frozen": True}


class DendrogramConfig(BaseModel):
    """Top-level configuration combining layout and style."""

    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    style: StyleConfig = Field(default_factory=StyleConfig)

    model_config = {"frozen": True}

    @classmethod
    def from_yaml(cls, path: Path) -> DendrogramConfig:
        """
        Load configuration from a YAML file.

        The file may contain ``layout:`` and ``style:`` sections. Unknown
        keys are ignored (forward compatibility).

        Args:
            path: Path to YAML configuration file.

        Returns:
            DendrogramConfig populated from YAML values merged with defaults.

        Raises:
            FileNotFoundError: If YAML file does not exist.
            ConfigurationError: If the YAML top level is not a mapping.
            pydantic.ValidationError: If a value is out of range.
        """
        import yaml

        raw = yaml.safe_load(path.read_text())
        if raw is None:
            raw = {}
        if not isinstance(raw, dict):
            raise ConfigurationError(
                f"YAML config must be a mapping, got {type(raw).__name__}",
                suggestion="Use top-level 'layout:' and 'style:' sections.",
            )

        layout_raw = _known_keys(raw.get("layout") or {}, LayoutConfig)
        style_raw = _known_keys(raw.get("style") or {}, StyleConfig)
        logger.debug(f"Loaded config from {path}")
        return cls(
            layout=LayoutConfig(**layout_raw),
            style=StyleConfig(**style_raw),
        )

    def to_yaml(self, path: Path) -> None:
        """Write configuration to a YAML file."""
        path.write_text(self.to_yaml_str())

    def to_yaml_str(self) -> str:
        """Serialize configuration to a YAML string."""
        import yaml

        return yaml.dump(self.model_dump(), default_flow_style=False, sort_keys=False)


def _known_keys(section: dict[str, Any], model: type[BaseModel]) -> dict[str, Any]:
    """Drop keys the model does not define, logging what was skipped."""
    unknown = set(section) - set(model.model_fields)
    if unknown:
        logger.warning(f"Ignoring unknown {model.__name__} keys: {', '.join(sorted(unknown))}")
    return {key: value for key, value in section.items() if key in model.model_fields}
