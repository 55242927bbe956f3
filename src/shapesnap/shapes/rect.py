"""Axis-aligned rectangle given by two opposite corners."""

from shapesnap.models import ShapeGeometry
from shapesnap.raster.scanlines import rect_spans
from shapesnap.shapes.base import Shape


class Rect(Shape):
    kind = "Rect"
    
    def random_points(self):
        return [[self.random_x(), self.random_y()], [self.random_x(), self.random_y()]]
    
    def rasterize(self):
        (x1, y1), (x2, y2) = self.points
        return rect_spans(x1, y1, x2, y2, self.width, self.height)
    
    def serialize(self):
        (x1, y1), (x2, y2) = self.points
        # corners are inclusive pixel indices
        return ShapeGeometry(
            kind=self.kind,
            name="rect",
            attrs={
                "x": min(x1, x2),
                "y": min(y1, y2),
                "width": abs(x2 - x1) + 1,
                "height": abs(y2 - y1) + 1,
            },
        )
