"""
Scanline rasterization for shapesnap.

Every rasterizer returns a list of (row, x_start, x_end) spans, inclusive on
both ends, clipped to [0, width) x [0, height) and sorted by row. Work is
bounded by the shape's bounding box, never by the image area.
"""

import math

# tolerance for edge crossings that land on an integer coordinate
EPS = 1e-9


def rect_spans(x1, y1, x2, y2, width, height):
    """Spans for an axis-aligned rectangle given two opposite corners."""
    x_start, x_end = max(0, min(x1, x2)), min(width - 1, max(x1, x2))
    y_start, y_end = max(0, min(y1, y2)), min(height - 1, max(y1, y2))
    
    if x_start > x_end:
        return []
    
    return [(y, int(x_start), int(x_end)) for y in range(int(y_start), int(y_end) + 1)]


def polygon_spans(vertices, width, height):
    """
    Scan-convert a closed convex polygon.
    
    Each row gets the pixel interval between the extreme crossings of the
    horizontal line with the polygon's edges. Edges are closed: a pixel
    whose integer coordinates lie on the boundary is inside.
    """
    if len(vertices) < 3:
        return []
    
    ys = [v[1] for v in vertices]
    y_start = max(0, math.ceil(min(ys) - EPS))
    y_end = min(height - 1, math.floor(max(ys) + EPS))
    
    edges = list(zip(vertices, vertices[1:] + vertices[:1]))
    spans = []
    
    for y in range(y_start, y_end + 1):
        lo, hi = math.inf, -math.inf
        
        for (x0, y0), (x1, y1) in edges:
            if y0 == y1:
                if abs(y - y0) <= EPS:
                    lo = min(lo, x0, x1)
                    hi = max(hi, x0, x1)
                continue
            if min(y0, y1) - EPS <= y <= max(y0, y1) + EPS:
                t = min(1.0, max(0.0, (y - y0) / (y1 - y0)))
                x = x0 + t * (x1 - x0)
                lo = min(lo, x)
                hi = max(hi, x)
        
        if lo > hi:
            continue
        
        x_start = max(0, math.ceil(lo - EPS))
        x_end = min(width - 1, math.floor(hi + EPS))
        if x_start <= x_end:
            spans.append((y, x_start, x_end))
    
    return spans


def ellipse_spans(cx, cy, rx, ry, width, height):
    """Spans for an axis-aligned ellipse centered on (cx, cy)."""
    rx, ry = abs(rx), abs(ry)
    y_start = max(0, math.ceil(cy - ry - EPS))
    y_end = min(height - 1, math.floor(cy + ry + EPS))
    spans = []
    
    for y in range(y_start, y_end + 1):
        if ry == 0:
            half = rx
        else:
            dy = (y - cy) / ry
            half = rx * math.sqrt(max(0.0, 1.0 - dy * dy))
        
        x_start = max(0, math.ceil(cx - half - EPS))
        x_end = min(width - 1, math.floor(cx + half + EPS))
        if x_start <= x_end:
            spans.append((y, x_start, x_end))
    
    return spans


def merge_spans(spans):
    """
    Merge overlapping or touching spans on the same row.
    
    Returns spans sorted by (row, x_start) with no pixel listed twice.
    """
    merged = []
    
    for y, x_start, x_end in sorted(spans):
        if merged and merged[-1][0] == y and x_start <= merged[-1][2] + 1:
            if x_end > merged[-1][2]:
                merged[-1] = (y, merged[-1][1], x_end)
        else:
            merged.append((y, x_start, x_end))
    
    return merged


def count_pixels(spans):
    """Number of pixels covered by a span list."""
    return sum(x_end - x_start + 1 for _, x_start, x_end in spans)
