"""EXIF orientation to geometric transform mapping."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


@dataclass(frozen=True, slots=True)
class Rotate:
    """Counter-clockwise rotation by a multiple of 90 degrees."""

    degrees: int


@dataclass(frozen=True, slots=True)
class Flip:
    """Mirror operation.

    ``horizontal`` mirrors across the horizontal axis (top-bottom) and
    ``vertical`` mirrors across the vertical axis (left-right).
    """

    horizontal: bool
    vertical: bool


Operation = Union[Rotate, Flip]


class Transform(Enum):
    """Ordered operations that bring an image upright."""

    IDENTITY = ()
    FLIP_HORIZONTAL = (Flip(True, False),)
    FLIP_VERTICAL = (Flip(False, True),)
    ROTATE_90 = (Rotate(90),)
    ROTATE_180 = (Rotate(180),)
    ROTATE_270 = (Rotate(270),)
    ROTATE_90_THEN_FLIP_HORIZONTAL = (Rotate(90), Flip(True, False))
    ROTATE_270_THEN_FLIP_HORIZONTAL = (Rotate(270), Flip(True, False))

    @property
    def operations(self) -> tuple[Operation, ...]:
        return self.value


ORIENTATION_TRANSFORMS: dict[int, Transform] = {
    1: Transform.IDENTITY,
    2: Transform.FLIP_VERTICAL,
    3: Transform.ROTATE_180,
    4: Transform.FLIP_HORIZONTAL,
    5: Transform.ROTATE_90_THEN_FLIP_HORIZONTAL,
    6: Transform.ROTATE_270,
    7: Transform.ROTATE_270_THEN_FLIP_HORIZONTAL,
    8: Transform.ROTATE_90,
}


def transform_for(orientation: int | None) -> Transform:
    """Return the transform for an orientation tag; unknown tags are upright."""

    if orientation is None:
        return Transform.IDENTITY
    return ORIENTATION_TRANSFORMS.get(orientation, Transform.IDENTITY)
