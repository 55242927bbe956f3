"""
Pixel buffer helpers for shapesnap.

Buffers are uint8 numpy arrays of shape (height, width, 4). Sample (x, y, c)
lives at buf[y, x, c].
"""

import numpy as np


def as_rgba(image):
    """
    Convert a decoded image to a contiguous uint8 RGBA buffer.
    
    Accepts grayscale (H, W), RGB (H, W, 3) or RGBA (H, W, 4) arrays with
    samples in [0, 255]. Missing alpha is filled with 255.
    """
    image = np.asarray(image)
    
    if image.ndim == 2:
        image = np.repeat(image[:, :, None], 3, axis=2)
    
    if image.ndim != 3 or image.shape[2] not in (3, 4):
        raise ValueError(f"Expected an (H, W), (H, W, 3) or (H, W, 4) image, got shape {image.shape}")
    
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError("Image must have at least one pixel")
    
    if image.dtype != np.uint8:
        if image.min() < 0 or image.max() > 255:
            raise ValueError("Image samples must lie in [0, 255]")
        image = image.astype(np.uint8)
    
    if image.shape[2] == 3:
        alpha = np.full(image.shape[:2] + (1,), 255, dtype=np.uint8)
        image = np.concatenate([image, alpha], axis=2)
    
    return np.ascontiguousarray(image)


def create_canvas(width, height, color):
    """Solid canvas filled with color."""
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = color.as_tuple()
    return canvas


def draw(buffer, color, scanlines):
    """
    Alpha-blend color over buffer in place across the scanline pixels.
    
    Per channel: (c * (alpha + 1) + u * (255 - alpha)) >> 8. The alpha
    channel of every touched pixel becomes 255.
    """
    weighted = np.array([color.r, color.g, color.b], dtype=np.int32) * (color.a + 1)
    inverse = 255 - color.a
    
    for y, x_start, x_end in scanlines:
        row = buffer[y, x_start:x_end + 1]
        row[:, :3] = (weighted + row[:, :3].astype(np.int32) * inverse) >> 8
        row[:, 3] = 255
    
    return buffer


def copy_spans(dst, src, scanlines):
    """Copy the scanline pixels of src into dst."""
    for y, x_start, x_end in scanlines:
        dst[y, x_start:x_end + 1] = src[y, x_start:x_end + 1]
    return dst
