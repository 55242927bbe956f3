"""
Output writing for shapesnap.

Writes the rendered canvas, the SVG document and the JSON run summary.
"""

import json
import os

import cv2

from shapesnap.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_image(img, path):
    """
    Save an RGB or RGBA image to disk.
    
    Converts to OpenCV's BGR / BGRA channel order before writing.
    """
    if img.ndim == 3 and img.shape[2] == 4:
        img_bgr = cv2.cvtColor(img, cv2.COLOR_RGBA2BGRA)
    elif img.ndim == 3 and img.shape[2] == 3:
        img_bgr = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
    else:
        img_bgr = img
    
    ensure_dir(os.path.dirname(path))
    if not cv2.imwrite(path, img_bgr):
        raise OSError(f"Failed to write image: {path}")
    get_tracer().event(f"Saved image: {path}")


def save_json(data, path, indent=2):
    """Save a dictionary or Pydantic model to JSON."""
    ensure_dir(os.path.dirname(path))
    
    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")
    
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)
    
    get_tracer().event(f"Saved JSON: {path}")


def save_svg(svg_content, path):
    """Save an svgwrite drawing or SVG string to file."""
    ensure_dir(os.path.dirname(path))
    
    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)
    
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    
    get_tracer().event(f"Saved SVG: {path}")
