"""
Shape kind registry and random factory.

The set of kinds is fixed here; new variants implement the Shape interface
and are added to SHAPE_KINDS.
"""

from shapesnap.errors import UnknownShapeKind
from shapesnap.shapes.curves import Cubic, Quadratic
from shapesnap.shapes.ellipse import Ellipse
from shapesnap.shapes.rect import Rect
from shapesnap.shapes.triangle import Triangle

SHAPE_KINDS = {
    cls.kind: cls
    for cls in (Rect, Triangle, Ellipse, Cubic, Quadratic)
}


def validate_shape_kinds(kinds):
    """Raise UnknownShapeKind for the first tag that is not registered."""
    for kind in kinds:
        if kind not in SHAPE_KINDS:
            raise UnknownShapeKind(kind, SHAPE_KINDS)


def shape_class(kind):
    """Look up the class registered for a kind tag."""
    try:
        return SHAPE_KINDS[kind]
    except KeyError:
        raise UnknownShapeKind(kind, SHAPE_KINDS) from None


def random_shape_of(kinds, x_bound, y_bound, rng, stroke_width=1):
    """
    Create a random shape of a kind picked uniformly from kinds.
    
    The whole allow-list is checked first, so an unknown tag fails even when
    it would not have been picked.
    """
    kinds = list(kinds)
    validate_shape_kinds(kinds)
    kind = kinds[int(rng.integers(len(kinds)))]
    return shape_class(kind)(x_bound, y_bound, rng=rng, stroke_width=stroke_width)
