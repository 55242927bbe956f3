"""
Color selection and error scoring for shapesnap.

Scores are normalized root-mean-square differences over all four channels,
in [0, 1]. The partial variant updates a known score using only the pixels
a shape touches, so its cost follows the shape's footprint.
"""

import math

import numpy as np

from shapesnap.core.image import copy_spans, draw
from shapesnap.errors import EmptyScanlineSet
from shapesnap.models import Color
from shapesnap.raster.scanlines import count_pixels


def _clamp_channel(value):
    return int(min(255, max(0, value)))


def background_color(image):
    """Mean R, G, B over the whole image, rounded half up; alpha is 255."""
    rgb = image[:, :, :3].reshape(-1, 3).astype(np.int64)
    means = rgb.sum(axis=0) / rgb.shape[0]
    r, g, b = (math.floor(m + 0.5) for m in means)
    return Color(r=r, g=g, b=b, a=255)


def scanline_color(target, current, scanlines, alpha):
    """
    Color that, blended at alpha over current, best matches target.
    
    Closed-form least squares for the blend used by draw(): per channel
    accumulate (t - u) * w + u * 256 with w = 65536 / (alpha + 1), average
    over the covered pixels, round and shift right by 8. At alpha 255 the
    weight is exactly alpha + 1.
    
    The blend scales c by (alpha + 1) / 256, so the unclamped optimum is
    u + (t - u) * 256 / (alpha + 1). Weighting by (alpha + 1) with a u * 257
    term only reaches it at alpha 255; below that it undershoots the target
    (about half way at alpha 128).
    """
    if not scanlines:
        raise EmptyScanlineSet("scanline_color needs at least one covered pixel")
    
    weight = 65536 / (alpha + 1)
    total = np.zeros(3, dtype=np.float64)
    pixels = count_pixels(scanlines)
    
    for y, x_start, x_end in scanlines:
        t = target[y, x_start:x_end + 1, :3].astype(np.int64)
        u = current[y, x_start:x_end + 1, :3].astype(np.int64)
        total += ((t - u) * weight + u * 256).sum(axis=0)
    
    r, g, b = (_clamp_channel((int(v / pixels) + 128) >> 8) for v in total)
    return Color(r=r, g=g, b=b, a=alpha)


def _squared_error(one, two):
    diff = one.astype(np.int64) - two.astype(np.int64)
    return int((diff * diff).sum())


def difference_full(one, two):
    """Root-mean-square error between two buffers, scaled to [0, 1]."""
    height, width = one.shape[:2]
    total = _squared_error(one, two)
    return math.sqrt(total / (width * height * 4)) / 255


def difference_partial(target, before, after, score, scanlines):
    """
    Score of after, given the score of before and the pixels that changed.
    
    The squared-error total is recovered from score, the scanline pixels of
    before are swapped for those of after, and the total is normalized again
    the same way difference_full does.
    """
    height, width = target.shape[:2]
    rgba_count = width * height * 4
    total = (score * 255) ** 2 * rgba_count
    
    for y, x_start, x_end in scanlines:
        t = target[y, x_start:x_end + 1]
        total -= _squared_error(t, before[y, x_start:x_end + 1])
        total += _squared_error(t, after[y, x_start:x_end + 1])
    
    return math.sqrt(max(0.0, total) / rgba_count) / 255


def energy(shape, alpha, target, current, buffer, score):
    """
    Score the canvas would have with shape added; lower is better.
    
    Draws into buffer, whose scanline pixels are first reset from current.
    Returns (score, color, scanlines). A shape covering no pixels leaves the
    score unchanged and has no color.
    """
    scanlines = shape.rasterize()
    if not scanlines:
        return score, None, scanlines
    
    color = scanline_color(target, current, scanlines, alpha)
    copy_spans(buffer, current, scanlines)
    draw(buffer, color, scanlines)
    return difference_partial(target, current, buffer, score, scanlines), color, scanlines
