"""
Shape interface for shapesnap.

A shape owns integer control points kept within [0, x_bound] x [0, y_bound]
and knows how to mutate, clone, rasterize and serialize itself. Variants
implement the abstract methods; callers only use this interface.
"""

import copy
from abc import ABC, abstractmethod

import numpy as np


MUTATION_RANGE = 15  # max offset, in pixels, of a single mutation
SPREAD = 15  # max offset of secondary points from the anchor at creation


def clamp_int(value, lo, hi):
    """Round value and clamp it to [lo, hi]."""
    return int(min(hi, max(lo, round(value))))


class Shape(ABC):
    """Abstract base for all shape variants."""
    
    kind = None
    stroked = False
    
    def __init__(self, x_bound, y_bound, rng=None, stroke_width=1):
        self.x_bound = x_bound
        self.y_bound = y_bound
        self.rng = rng if rng is not None else np.random.default_rng()
        self.stroke_width = stroke_width
        self.points = self.random_points()
    
    @abstractmethod
    def random_points(self):
        """Draw the initial control points, each an [x, y] list."""
    
    @abstractmethod
    def rasterize(self):
        """Return the scanline spans covered by this shape."""
    
    @abstractmethod
    def serialize(self):
        """Return a ShapeGeometry describing this shape."""
    
    @property
    def props(self):
        """Control points as a flat [x1, y1, x2, y2, ...] list."""
        return [c for point in self.points for c in point]
    
    @props.setter
    def props(self, values):
        values = [int(v) for v in values]
        if len(values) != 2 * len(self.points):
            raise ValueError(f"{self.kind} expects {2 * len(self.points)} coordinates, got {len(values)}")
        self.points = [values[i:i + 2] for i in range(0, len(values), 2)]
    
    @property
    def width(self):
        return self.x_bound + 1
    
    @property
    def height(self):
        return self.y_bound + 1
    
    def random_x(self):
        return int(self.rng.integers(0, self.x_bound + 1))
    
    def random_y(self):
        return int(self.rng.integers(0, self.y_bound + 1))
    
    def near(self, x, y, spread=SPREAD):
        """A random point within +-spread of (x, y), clamped to bounds."""
        dx, dy = self.rng.integers(-spread, spread + 1, size=2)
        return [clamp_int(x + dx, 0, self.x_bound), clamp_int(y + dy, 0, self.y_bound)]
    
    def point_limits(self, index):
        """Inclusive (x_lo, x_hi, y_lo, y_hi) for the control point at index."""
        return 0, self.x_bound, 0, self.y_bound
    
    def movable(self, index):
        """Whether the limits leave the point at index anywhere else to go."""
        x_lo, x_hi, y_lo, y_hi = self.point_limits(index)
        return x_lo < x_hi or y_lo < y_hi
    
    def mutate(self):
        """
        Move one randomly chosen control point by a small bounded offset.
        
        Offsets follow a triangular distribution on [-MUTATION_RANGE,
        MUTATION_RANGE] peaked at zero and are redrawn until the clamped
        point differs from the old one. Exactly one point changes, unless
        no point can move at all (a 1x1 canvas).
        """
        candidates = [i for i in range(len(self.points)) if self.movable(i)]
        if not candidates:
            return self
        
        index = candidates[int(self.rng.integers(len(candidates)))]
        x_lo, x_hi, y_lo, y_hi = self.point_limits(index)
        old = list(self.points[index])
        x, y = old
        
        while True:
            dx, dy = self.rng.triangular(-1.0, 0.0, 1.0, size=2) * MUTATION_RANGE
            point = [clamp_int(x + dx, x_lo, x_hi), clamp_int(y + dy, y_lo, y_hi)]
            if point != old:
                break
        
        self.points[index] = point
        return self
    
    def clone(self):
        """Independent copy; control points are never shared."""
        shape = copy.copy(self)
        shape.points = [list(point) for point in self.points]
        return shape
    
    def __repr__(self):
        return f"{type(self).__name__}({self.props})"
