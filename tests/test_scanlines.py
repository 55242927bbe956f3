"""Tests for scanline rasterization."""

import math

import numpy as np
import pytest

from shapesnap.raster.bezier import flatten_cubic, flatten_quadratic, stroke_spans
from shapesnap.raster.scanlines import (
    count_pixels, ellipse_spans, merge_spans, polygon_spans, rect_spans,
)
from shapesnap.shapes.registry import SHAPE_KINDS


def _pixels(spans):
    return {(x, y) for y, x_start, x_end in spans for x in range(x_start, x_end + 1)}


def _assert_well_formed(spans, width, height):
    """Spans are in bounds, sorted and never cover a pixel twice."""
    assert spans == sorted(spans)
    for y, x_start, x_end in spans:
        assert 0 <= y < height
        assert 0 <= x_start <= x_end < width
    assert count_pixels(spans) == len(_pixels(spans))


def _inside_triangle(x, y, vertices):
    signs = []
    for (x0, y0), (x1, y1) in zip(vertices, vertices[1:] + vertices[:1]):
        signs.append((x1 - x0) * (y - y0) - (y1 - y0) * (x - x0))
    return all(s >= 0 for s in signs) or all(s <= 0 for s in signs)


class TestRectSpans:
    """Tests for rectangle rasterization."""
    
    def test_one_span_per_row(self):
        spans = rect_spans(2, 1, 5, 3, 10, 10)
        
        assert spans == [(1, 2, 5), (2, 2, 5), (3, 2, 5)]
    
    def test_corner_order_irrelevant(self):
        assert rect_spans(5, 3, 2, 1, 10, 10) == rect_spans(2, 1, 5, 3, 10, 10)
    
    def test_clipped_to_bounds(self):
        spans = rect_spans(-4, -2, 12, 1, 10, 5)
        
        assert spans == [(0, 0, 9), (1, 0, 9)]
    
    def test_off_canvas_is_empty(self):
        assert rect_spans(20, 20, 30, 30, 10, 10) == []
        assert rect_spans(2, -8, 4, -1, 10, 10) == []
    
    def test_single_pixel(self):
        assert rect_spans(3, 3, 3, 3, 10, 10) == [(3, 3, 3)]


class TestPolygonSpans:
    """Tests for convex polygon scan conversion."""
    
    @pytest.mark.parametrize("vertices", [
        [(2, 2), (17, 5), (6, 14)],
        [(0, 0), (19, 0), (0, 15)],
        [(10, 1), (3, 9), (15, 12)],
        [(5, 5), (5, 12), (14, 8)],
    ])
    def test_matches_point_in_triangle(self, vertices):
        """Covered pixels are exactly the lattice points inside the triangle."""
        width, height = 20, 16
        spans = polygon_spans(vertices, width, height)
        
        _assert_well_formed(spans, width, height)
        expected = {
            (x, y) for y in range(height) for x in range(width)
            if _inside_triangle(x, y, vertices)
        }
        assert _pixels(spans) == expected
    
    def test_vertices_are_covered(self):
        vertices = [(3, 4), (11, 6), (7, 13)]
        pixels = _pixels(polygon_spans(vertices, 20, 20))
        
        for vertex in vertices:
            assert vertex in pixels
    
    def test_clipping_keeps_inside_part(self):
        spans = polygon_spans([(-10, -10), (30, -10), (-10, 30)], 8, 8)
        
        _assert_well_formed(spans, 8, 8)
        assert spans[0] == (0, 0, 7)
    
    def test_degenerate_polygon_does_not_raise(self):
        spans = polygon_spans([(1, 1), (5, 5), (9, 9)], 10, 10)
        
        _assert_well_formed(spans, 10, 10)
    
    def test_too_few_vertices(self):
        assert polygon_spans([(1, 1), (4, 4)], 10, 10) == []


class TestEllipseSpans:
    """Tests for ellipse rasterization."""
    
    def test_pixels_inside_ellipse(self):
        cx, cy, rx, ry = 10, 8, 6, 4
        spans = ellipse_spans(cx, cy, rx, ry, 25, 20)
        
        _assert_well_formed(spans, 25, 20)
        for x, y in _pixels(spans):
            assert ((x - cx) / rx) ** 2 + ((y - cy) / ry) ** 2 <= 1 + 1e-9
        assert [y for y, _, _ in spans] == list(range(cy - ry, cy + ry + 1))
    
    def test_widest_row_is_center(self):
        spans = ellipse_spans(10, 8, 6, 4, 25, 20)
        
        assert (8, 4, 16) in spans
    
    def test_zero_height_ellipse(self):
        assert ellipse_spans(5, 5, 2, 0, 10, 10) == [(5, 3, 7)]


class TestMergeSpans:
    """Tests for span merging."""
    
    def test_overlapping_and_touching_merge(self):
        spans = [(1, 5, 8), (1, 0, 2), (1, 3, 4), (0, 2, 3), (1, 7, 9)]
        
        assert merge_spans(spans) == [(0, 2, 3), (1, 0, 9)]
    
    def test_gap_is_kept(self):
        assert merge_spans([(2, 6, 7), (2, 0, 3)]) == [(2, 0, 3), (2, 6, 7)]


class TestBezier:
    """Tests for curve flattening and stroking."""
    
    def test_flatten_cubic_endpoints(self):
        polyline = flatten_cubic((0, 0), (10, 20), (30, 20), (40, 0))
        
        assert polyline[0] == pytest.approx((0, 0))
        assert polyline[-1] == pytest.approx((40, 0))
        assert len(polyline) > 40
    
    def test_flatten_quadratic_midpoint(self):
        polyline = flatten_quadratic((0, 0), (10, 10), (20, 0), segments=2)
        
        assert polyline[1] == pytest.approx((10, 5))
    
    def test_flatten_is_dense(self):
        polyline = flatten_cubic((0, 0), (5, 30), (25, -10), (30, 20))
        
        for a, b in zip(polyline, polyline[1:]):
            assert math.dist(a, b) <= 1.0 + 1e-9
    
    @pytest.mark.parametrize("stroke_width", [1, 3])
    def test_stroke_stays_near_curve(self, stroke_width):
        polyline = flatten_cubic((2, 3), (20, 25), (5, 28), (28, 6))
        spans = stroke_spans(polyline, stroke_width, 32, 32)
        
        _assert_well_formed(spans, 32, 32)
        points = np.array(polyline)
        limit = stroke_width / 2 * math.sqrt(2) + 1e-6
        for x, y in _pixels(spans):
            a, b = points[:-1], points[1:]
            ab = b - a
            t = np.clip(((np.array([x, y]) - a) * ab).sum(axis=1) / np.maximum((ab * ab).sum(axis=1), 1e-12), 0, 1)
            nearest = a + t[:, None] * ab
            assert np.min(np.hypot(*(nearest - [x, y]).T)) <= limit
    
    def test_stroke_covers_sample_points(self):
        polyline = flatten_cubic((2, 3), (20, 25), (5, 28), (28, 6))
        pixels = _pixels(stroke_spans(polyline, 1, 32, 32))
        
        for x, y in polyline:
            assert (round(x), round(y)) in pixels or (math.floor(x), math.floor(y)) in pixels
    
    def test_collapsed_curve_covers_its_point(self):
        polyline = flatten_cubic((4, 4), (4, 4), (4, 4), (4, 4))
        
        assert stroke_spans(polyline, 1, 10, 10) == [(4, 4, 4)]
    
    def test_off_canvas_curve_is_empty(self):
        polyline = flatten_cubic((50, 50), (60, 55), (70, 52), (80, 60))
        
        assert stroke_spans(polyline, 1, 10, 10) == []


class TestRandomShapeCoverage:
    """Every registered variant rasterizes inside the canvas."""
    
    @pytest.mark.parametrize("kind", sorted(SHAPE_KINDS))
    def test_spans_in_bounds(self, kind, rng):
        width, height = 23, 17
        for _ in range(30):
            shape = SHAPE_KINDS[kind](width - 1, height - 1, rng=rng)
            for _ in range(5):
                shape.mutate()
            _assert_well_formed(shape.rasterize(), width, height)
