"""
SVG emission for shapesnap.

Builds an svgwrite document from committed shape records: a background
rectangle followed by one element per shape in commit order.
"""

import svgwrite

from shapesnap.tracer import get_tracer


def _element(dwg, geometry):
    """Create the bare svgwrite element for a serialized shape."""
    attrs = geometry.attrs
    
    if geometry.name == "rect":
        return dwg.rect(insert=(attrs["x"], attrs["y"]), size=(attrs["width"], attrs["height"]))
    if geometry.name == "polygon":
        points = [tuple(int(c) for c in pair.split(",")) for pair in attrs["points"].split()]
        return dwg.polygon(points=points)
    if geometry.name == "ellipse":
        return dwg.ellipse(center=(attrs["cx"], attrs["cy"]), r=(attrs["rx"], attrs["ry"]))
    if geometry.name == "path":
        return dwg.path(d=attrs["d"])
    
    raise ValueError(f"Cannot emit SVG element {geometry.name!r} for {geometry.kind}")


def emit_svg(records, width, height, background, stroke_width=1):
    """
    Create an SVG document for the committed shapes.
    
    Args:
        records: list of ShapeRecord objects, in drawing order
        width: canvas width in pixels
        height: canvas height in pixels
        background: Color of the initial canvas
        stroke_width: line width used by curve shapes
    
    Returns:
        svgwrite.Drawing object
    """
    dwg = svgwrite.Drawing(size=(f"{width}px", f"{height}px"))
    dwg.viewbox(0, 0, width, height)
    dwg.add(dwg.rect(insert=(0, 0), size=(width, height), fill=background.rgb))
    
    group = dwg.g(id="shapes")
    
    for record in records:
        element = _element(dwg, record.geometry)
        element["id"] = record.shape_id
        color = record.color
        
        if record.geometry.stroked:
            element["fill"] = "none"
            element["stroke"] = color.rgb
            element["stroke-opacity"] = color.opacity
            element["stroke-width"] = stroke_width
            element["stroke-linecap"] = "square"
        else:
            element["fill"] = color.rgb
            element["fill-opacity"] = color.opacity
        
        group.add(element)
    
    dwg.add(group)
    
    get_tracer().event(f"SVG emitted with {len(records)} shapes")
    
    return dwg
