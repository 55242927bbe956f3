"""Filled triangle with one random vertex and two nearby vertices."""

from shapesnap.models import ShapeGeometry
from shapesnap.raster.scanlines import polygon_spans
from shapesnap.shapes.base import Shape


class Triangle(Shape):
    kind = "Triangle"
    
    def random_points(self):
        x, y = self.random_x(), self.random_y()
        return [[x, y], self.near(x, y), self.near(x, y)]
    
    def rasterize(self):
        return polygon_spans([tuple(p) for p in self.points], self.width, self.height)
    
    def serialize(self):
        points = " ".join(f"{x},{y}" for x, y in self.points)
        return ShapeGeometry(kind=self.kind, name="polygon", attrs={"points": points})
