from __future__ import annotations

import math
from typing import Dict, Iterable, Tuple

import numpy as np


def rotation_matrix(degrees: float) -> np.ndarray:
    theta = math.radians(degrees)
    c, s = math.cos(theta), math.sin(theta)
    return np.array([[c, -s], [s, c]], dtype=float)


def rotate_about(
    corners: Iterable[Tuple[float, float]], degrees: float, pivot: Tuple[float, float]
) -> np.ndarray:
    """Rotate ``corners`` about ``pivot``; returns an ``(n, 2)`` array.

    x' = px + dx*cos(t) - dy*sin(t), y' = py + dx*sin(t) + dy*cos(t)
    """
    pts = np.asarray(list(corners), dtype=float).reshape(-1, 2)
    origin = np.asarray(pivot, dtype=float)
    return origin + (pts - origin) @ rotation_matrix(degrees).T


def bounding_box(points: np.ndarray) -> Dict[str, float]:
    pts = np.asarray(points, dtype=float).reshape(-1, 2)
    if pts.size == 0:
        raise ValueError("bounding box of an empty point set")
    lo = pts.min(axis=0)
    hi = pts.max(axis=0)
    return {
        "left": float(lo[0]),
        "right": float(hi[0]),
        "top": float(lo[1]),
        "bottom": float(hi[1]),
    }


def rect_corners(left: float, top: float, width: float, height: float):
    right = left + width
    bottom = top + height
    return [(left, top), (right, top), (right, bottom), (left, bottom)]
