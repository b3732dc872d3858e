"""Tolerance policy shared by every tool and derivation routine."""

from __future__ import annotations

import copy
from dataclasses import dataclass

# Algorithm-level epsilons. Degenerate inputs below these resolve to an empty
# result instead of NaN/inf.
PARALLEL_EPS = 1e-10
TANGENT_EPS = 1e-10
COINCIDENT_CENTER_EPS = 1e-10
DEGENERATE_EPS = 1e-8


@dataclass
class ToleranceConfig:
    """Interaction tolerances.

    Radii ending in ``_px`` are on-screen pixels and are divided by the current
    zoom before use, so their perceived size is constant.  ``coincidence_eps``
    is expressed in drawing units and decides whether two positions denote the
    same point.
    """

    pick_radius_px: float = 12.0
    coincidence_eps: float = 1e-6
    drag_threshold_px: float = 0.5
    history_limit: int = 50

    def scaled(self, radius_px: float, zoom: float) -> float:
        if zoom <= 0:
            raise ValueError(f"zoom must be positive, got {zoom!r}")
        return radius_px / zoom


_TOLERANCE_CONFIG = ToleranceConfig()


def get_tolerance_config() -> ToleranceConfig:
    return copy.deepcopy(_TOLERANCE_CONFIG)


def set_tolerance_config(config: ToleranceConfig) -> None:
    global _TOLERANCE_CONFIG
    _TOLERANCE_CONFIG = copy.deepcopy(config)
