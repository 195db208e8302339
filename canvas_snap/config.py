"""
Snapping configuration.

Uses pydantic-settings for environment-backed defaults (``CANVAS_SNAP_*``
variables or a ``.env`` file). :class:`SnapConfig` holds the tunables for one
editor session and is what the session driver reads every frame.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SnapSettings(BaseSettings):
    """Process-wide snapping defaults."""

    model_config = SettingsConfigDict(
        env_prefix="CANVAS_SNAP_",
        env_file=".env",
        extra="ignore",
    )

    enabled: bool = True
    snap_threshold: float = Field(default=8.0, ge=0, description="Snap tolerance in screen pixels")
    locality_margin: float = Field(default=600.0, ge=0, description="Max spacing reach in canvas units")
    gap_epsilon: float = Field(default=0.5, ge=0, description="Equal-gap tolerance in canvas units")
    min_family_overlap: float = Field(default=0.01, ge=0, le=1)
    show_all_guides: bool = False
    show_spacing: bool = False
    wait_for_resize_move: bool = True


@lru_cache()
def get_settings() -> SnapSettings:
    """Get cached settings instance."""
    return SnapSettings()


@dataclass
class SnapConfig:
    """Snapping tunables for one editor session."""

    enabled: bool = True
    snap_threshold: float = 8.0  # Screen pixels
    show_child_elements: bool = False
    limit_to_node_ids: frozenset[str] | None = None
    locality_margin: float = 600.0
    gap_epsilon: float = 0.5
    min_family_overlap: float = 0.01
    show_all_guides: bool = False
    show_spacing: bool = False
    wait_for_resize_move: bool = True

    @classmethod
    def from_settings(cls, settings: SnapSettings | None = None) -> "SnapConfig":
        """Create a session config from process-wide settings."""
        settings = settings or get_settings()
        return cls(
            enabled=settings.enabled,
            snap_threshold=settings.snap_threshold,
            locality_margin=settings.locality_margin,
            gap_epsilon=settings.gap_epsilon,
            min_family_overlap=settings.min_family_overlap,
            show_all_guides=settings.show_all_guides,
            show_spacing=settings.show_spacing,
            wait_for_resize_move=settings.wait_for_resize_move,
        )

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled

    def set_snap_threshold(self, pixels: float) -> None:
        """Set the snap tolerance in screen pixels."""
        if pixels < 0:
            raise ValueError(f"Snap threshold must be >= 0, got {pixels}")
        self.snap_threshold = pixels

    def set_scope_limit(self, node_ids: Iterable[str] | None) -> None:
        """Limit snapping to the given nodes, or lift the limit with None."""
        self.limit_to_node_ids = frozenset(node_ids) if node_ids is not None else None

    def set_show_child_elements(self, show: bool) -> None:
        self.show_child_elements = show

    def set_locality_margin(self, margin: float) -> None:
        if margin < 0:
            raise ValueError(f"Locality margin must be >= 0, got {margin}")
        self.locality_margin = margin

    def set_gap_epsilon(self, epsilon: float) -> None:
        if epsilon < 0:
            raise ValueError(f"Gap epsilon must be >= 0, got {epsilon}")
        self.gap_epsilon = epsilon

    def canvas_threshold(self, scale: float) -> float | None:
        """Snap tolerance in canvas units at the given zoom.

        Returns:
            ``snap_threshold / scale``, or None if the scale is not positive.
        """
        if not scale > 0:
            return None
        return self.snap_threshold / scale
