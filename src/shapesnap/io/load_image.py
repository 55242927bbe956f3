"""
Image loading for shapesnap.

Decodes an image file into the RGBA buffer the search works on.
"""

import os

import cv2

from shapesnap.core.image import as_rgba
from shapesnap.tracer import get_tracer, trace

SUPPORTED_EXTENSIONS = [".png", ".jpg", ".jpeg", ".tiff", ".tif", ".bmp", ".webp"]


@trace(label="load_image")
def load_image(path, max_edge=None):
    """
    Load an image from disk as an RGBA uint8 array (H, W, 4).
    
    When max_edge is set, the image is downscaled so its longer side is at
    most max_edge pixels, preserving aspect ratio.
    
    Raises FileNotFoundError if path does not exist.
    Raises ValueError if the file cannot be decoded.
    """
    tracer = get_tracer()
    
    if not os.path.exists(path):
        raise FileNotFoundError(f"Image not found: {path}")
    
    ext = os.path.splitext(path)[1].lower()
    if ext not in SUPPORTED_EXTENSIONS:
        raise ValueError(f"Unsupported image format: {path}")
    
    img = cv2.imread(path, cv2.IMREAD_UNCHANGED)
    
    if img is None:
        raise ValueError(f"Failed to load image: {path}")
    
    # OpenCV decodes to BGR / BGRA
    if img.ndim == 3 and img.shape[2] == 4:
        img = cv2.cvtColor(img, cv2.COLOR_BGRA2RGBA)
    elif img.ndim == 3:
        img = cv2.cvtColor(img, cv2.COLOR_BGR2RGB)
    
    if img.dtype != "uint8":
        img = cv2.convertScaleAbs(img, alpha=255.0 / max(1, int(img.max())))
    
    if max_edge and max(img.shape[:2]) > max_edge:
        scale = max_edge / max(img.shape[:2])
        new_size = (max(1, int(img.shape[1] * scale)), max(1, int(img.shape[0] * scale)))
        img = cv2.resize(img, new_size, interpolation=cv2.INTER_AREA)
    
    rgba = as_rgba(img)
    tracer.event(f"Loaded image: {rgba.shape[1]}x{rgba.shape[0]}")
    
    return rgba
