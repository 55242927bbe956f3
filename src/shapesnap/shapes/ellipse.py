"""
Axis-aligned ellipse.

Control points are the center and a radii pair (rx, ry). The radii are kept
at least 1 wherever the canvas is wider than one pixel.
"""

from shapesnap.models import ShapeGeometry
from shapesnap.raster.scanlines import ellipse_spans
from shapesnap.shapes.base import SPREAD, Shape


class Ellipse(Shape):
    kind = "Ellipse"
    
    def random_points(self):
        rx = min(self.x_bound, int(self.rng.integers(1, SPREAD + 1)))
        ry = min(self.y_bound, int(self.rng.integers(1, SPREAD + 1)))
        return [[self.random_x(), self.random_y()], [rx, ry]]
    
    def point_limits(self, index):
        if index == 1:
            return min(1, self.x_bound), self.x_bound, min(1, self.y_bound), self.y_bound
        return super().point_limits(index)
    
    def rasterize(self):
        (cx, cy), (rx, ry) = self.points
        return ellipse_spans(cx, cy, rx, ry, self.width, self.height)
    
    def serialize(self):
        (cx, cy), (rx, ry) = self.points
        return ShapeGeometry(
            kind=self.kind,
            name="ellipse",
            attrs={"cx": cx, "cy": cy, "rx": rx, "ry": ry},
        )
