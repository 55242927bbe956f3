"""
Stroked Bezier curves.

Both variants start from one random anchor and place the remaining control
points close to it, which favors short coherent strokes over lines spanning
the whole canvas.
"""

from shapesnap.models import ShapeGeometry
from shapesnap.raster.bezier import flatten_cubic, flatten_quadratic, stroke_spans
from shapesnap.shapes.base import Shape


class Cubic(Shape):
    kind = "Cubic"
    stroked = True
    
    def random_points(self):
        x, y = self.random_x(), self.random_y()
        return [[x, y], self.near(x, y), self.near(x, y), self.near(x, y)]
    
    def rasterize(self):
        """Stroke spans of the flattened curve; a row may hold several disjoint spans."""
        polyline = flatten_cubic(*self.points)
        return stroke_spans(polyline, self.stroke_width, self.width, self.height)
    
    def serialize(self):
        (x1, y1), (x2, y2), (x3, y3), (x4, y4) = self.points
        return ShapeGeometry(
            kind=self.kind,
            name="path",
            attrs={"d": f"M{x1},{y1} C{x2},{y2} {x3},{y3} {x4},{y4}"},
            stroked=True,
        )


class Quadratic(Shape):
    kind = "Quadratic"
    stroked = True
    
    def random_points(self):
        x, y = self.random_x(), self.random_y()
        return [[x, y], self.near(x, y), self.near(x, y)]
    
    def rasterize(self):
        """Like Cubic.rasterize, rows where the curve folds back get more than one span."""
        polyline = flatten_quadratic(*self.points)
        return stroke_spans(polyline, self.stroke_width, self.width, self.height)
    
    def serialize(self):
        (x1, y1), (x2, y2), (x3, y3) = self.points
        return ShapeGeometry(
            kind=self.kind,
            name="path",
            attrs={"d": f"M{x1},{y1} Q{x2},{y2} {x3},{y3}"},
            stroked=True,
        )
