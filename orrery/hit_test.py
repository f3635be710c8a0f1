#!/usr/bin/env python3
"""
Pointer hit-testing against the last rendered frame.
"""
from typing import Mapping, Optional, Tuple

from .data_models import RenderedDisk
from .vector_utils import vec_len, vec_sub


def contains(disk: RenderedDisk, point: Tuple[float, float]) -> bool:
    # disk.radius is the drawn diameter, so the hit radius is half of it.
    return vec_len(vec_sub(point, (disk.x, disk.y))) <= disk.radius / 2


def hit_test(point: Tuple[float, float], frame_state: Mapping[int, RenderedDisk],
             count: int) -> Optional[int]:
    """
    Return the first body index (in catalog order) whose rendered disk contains point.

    Indices missing from frame_state (nothing rendered yet) never match.
    """
    for i in range(count):
        disk = frame_state.get(i)
        if disk is not None and contains(disk, point):
            return i
    return None
