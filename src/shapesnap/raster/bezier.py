"""
Bezier flattening and stroke rasterization for shapesnap.

Curves are sampled into a dense polyline, then the polyline is thickened to
the stroke width and scan-converted segment by segment.
"""

import math

import numpy as np

from shapesnap.raster.scanlines import merge_spans, polygon_spans

MIN_SEGMENTS = 8


def _segment_count(points):
    """
    Enough segments that consecutive samples are at most a pixel apart.
    
    A degree-n curve moves at most n times its longest control leg per unit
    of t.
    """
    degree = len(points) - 1
    longest = max(math.dist(a, b) for a, b in zip(points, points[1:]))
    return max(MIN_SEGMENTS, math.ceil(degree * longest))


def flatten_cubic(p0, p1, p2, p3, segments=None):
    """
    Sample a cubic Bezier into a polyline.
    
    Returns a list of (x, y) float tuples including both endpoints.
    """
    points = np.array([p0, p1, p2, p3], dtype=np.float64)
    n = segments or _segment_count(points.tolist())
    t = np.linspace(0.0, 1.0, n + 1)[:, None]
    mt = 1.0 - t
    
    curve = (
        mt ** 3 * points[0]
        + 3 * mt ** 2 * t * points[1]
        + 3 * mt * t ** 2 * points[2]
        + t ** 3 * points[3]
    )
    
    return [tuple(p) for p in curve.tolist()]


def flatten_quadratic(p0, p1, p2, segments=None):
    """Sample a quadratic Bezier into a polyline."""
    points = np.array([p0, p1, p2], dtype=np.float64)
    n = segments or _segment_count(points.tolist())
    t = np.linspace(0.0, 1.0, n + 1)[:, None]
    mt = 1.0 - t
    
    curve = mt ** 2 * points[0] + 2 * mt * t * points[1] + t ** 2 * points[2]
    
    return [tuple(p) for p in curve.tolist()]


def stroke_spans(polyline, stroke_width, width, height):
    """
    Rasterize a polyline thickened to stroke_width.
    
    Each segment becomes a quad offset by half the width on both sides and
    every vertex gets a square cap, so joints and single-point curves still
    cover pixels.
    """
    half = stroke_width / 2.0
    spans = []
    
    for (ax, ay), (bx, by) in zip(polyline, polyline[1:]):
        length = math.hypot(bx - ax, by - ay)
        if length == 0:
            continue
        nx = -(by - ay) / length * half
        ny = (bx - ax) / length * half
        quad = [(ax + nx, ay + ny), (bx + nx, by + ny), (bx - nx, by - ny), (ax - nx, ay - ny)]
        spans.extend(polygon_spans(quad, width, height))
    
    for px, py in polyline:
        cap = [(px - half, py - half), (px + half, py - half), (px + half, py + half), (px - half, py + half)]
        spans.extend(polygon_spans(cap, width, height))
    
    return merge_spans(spans)
