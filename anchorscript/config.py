"""Configuration helpers for anchor registries."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import FrozenSet

X_AXIS_ANCHORS = frozenset({"left", "right", "centerX", "startX", "endX"})
Y_AXIS_ANCHORS = frozenset({"top", "bottom", "centerY", "startY", "endY"})


@dataclass
class RegistryConfig:
    """Anchor names treated as horizontal or vertical by axis checks."""

    x_axis_anchors: FrozenSet[str] = field(default_factory=lambda: X_AXIS_ANCHORS)
    y_axis_anchors: FrozenSet[str] = field(default_factory=lambda: Y_AXIS_ANCHORS)

    def axis_of(self, anchor: str):
        if anchor in self.x_axis_anchors:
            return "x"
        if anchor in self.y_axis_anchors:
            return "y"
        return None


_REGISTRY_CONFIG = RegistryConfig()


def get_registry_config() -> RegistryConfig:
    return copy.deepcopy(_REGISTRY_CONFIG)


def set_registry_config(config: RegistryConfig) -> None:
    global _REGISTRY_CONFIG
    _REGISTRY_CONFIG = copy.deepcopy(config)
