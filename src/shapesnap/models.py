"""
Pydantic data models for shapesnap.

Colors, serialized shape geometry and committed shape records flow through
these validated models. Pixel buffers stay plain numpy arrays.
"""

import hashlib
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Color(BaseModel):
    """An RGBA color, each channel an integer in [0, 255]."""
    r: int = Field(..., ge=0, le=255)
    g: int = Field(..., ge=0, le=255)
    b: int = Field(..., ge=0, le=255)
    a: int = Field(default=255, ge=0, le=255)
    
    model_config = ConfigDict(extra="forbid", frozen=True)
    
    @classmethod
    def from_sequence(cls, values):
        """Build a color from an (r, g, b) or (r, g, b, a) sequence."""
        values = [int(v) for v in values]
        if len(values) not in (3, 4):
            raise ValueError(f"Expected 3 or 4 color channels, got {len(values)}")
        return cls(r=values[0], g=values[1], b=values[2], a=values[3] if len(values) == 4 else 255)
    
    def as_tuple(self):
        return (self.r, self.g, self.b, self.a)
    
    @property
    def rgb(self):
        """CSS rgb() notation without alpha."""
        return f"rgb({self.r},{self.g},{self.b})"
    
    @property
    def opacity(self):
        """Alpha as a fraction for SVG opacity attributes."""
        return round(self.a / 255, 4)


class ShapeGeometry(BaseModel):
    """Serializable geometric description of a shape, without color."""
    kind: str
    name: str  # svg element name
    attrs: Dict[str, Any] = Field(default_factory=dict)
    stroked: bool = False
    
    model_config = ConfigDict(extra="forbid")


class ShapeRecord(BaseModel):
    """A committed shape: its geometry, color and the score after commit."""
    shape_id: str
    geometry: ShapeGeometry
    color: Color
    score: float = Field(..., ge=0.0)
    
    model_config = ConfigDict(extra="forbid")


class SnapResult(BaseModel):
    """Summary of a finished run, written next to the SVG output."""
    width: int
    height: int
    background: Color
    initial_score: float
    final_score: float
    shapes: List[ShapeRecord] = Field(default_factory=list)
    seed: Optional[int] = None
    
    model_config = ConfigDict(extra="forbid")


def generate_shape_id(geometry, index):
    """
    Generate a deterministic shape ID from its geometry and commit index.
    """
    data = f"{index}:{geometry.kind}:{sorted(geometry.attrs.items())}"
    h = hashlib.sha256(data.encode()).hexdigest()[:12]
    return f"shape_{h}"
