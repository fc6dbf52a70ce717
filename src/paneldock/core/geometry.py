"""Window geometry"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Rect:
    """Rectangle of a floating surface (screen units)."""

    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_min_size(cls, x: float, y: float, width: float, height: float) -> "Rect":
        return cls(float(x), float(y), float(width), float(height))

    @classmethod
    def from_tuple(cls, values: tuple[float, float, float, float]) -> "Rect":
        return cls.from_min_size(*values)

    def is_finite(self) -> bool:
        """All coordinates finite and size non-negative"""
        values = (self.x, self.y, self.width, self.height)
        if not all(math.isfinite(v) for v in values):
            return False
        return self.width >= 0 and self.height >= 0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    def __str__(self) -> str:
        return f"({self.x:g},{self.y:g} {self.width:g}x{self.height:g})"
