"""
Hill-climbing shape search for shapesnap.

Each step runs several independent attempts. An attempt starts from a random
shape and keeps a mutated clone only when it lowers the energy. The best
attempt of the step is committed to the canvas and recorded.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import numpy as np

from shapesnap.config import SearchConfig, SnapConfig, resolve_background, validate_config
from shapesnap.core.compute import background_color, difference_full, energy
from shapesnap.core.image import as_rgba, create_canvas, draw
from shapesnap.export.svg_emit import emit_svg
from shapesnap.models import Color, ShapeRecord, SnapResult, generate_shape_id
from shapesnap.shapes.base import Shape
from shapesnap.shapes.registry import random_shape_of
from shapesnap.tracer import get_tracer, trace

# recorded for a committed shape that covers no pixels
INVISIBLE = Color(r=0, g=0, b=0, a=0)


@dataclass
class Attempt:
    """A candidate shape with the color and score it would commit with."""
    shape: Shape
    color: Optional[Color]
    score: float
    scanlines: List[tuple] = field(default_factory=list)
    mutations: int = 0


class HillClimber:
    """
    Local search for one attempt.
    
    Reads target and current, writes only its own scratch buffer.
    """
    
    def __init__(self, target, current, score, search, rng):
        self.target = target
        self.current = current
        self.score = score
        self.search = search
        self.rng = rng
        self.buffer = current.copy()
        height, width = target.shape[:2]
        self.x_bound = width - 1
        self.y_bound = height - 1
    
    def energy(self, shape):
        return energy(shape, self.search.alpha, self.target, self.current, self.buffer, self.score)
    
    def random_attempt(self):
        shape = random_shape_of(
            self.search.shapes, self.x_bound, self.y_bound, self.rng,
            stroke_width=self.search.stroke_width,
        )
        score, color, scanlines = self.energy(shape)
        return Attempt(shape, color, score, scanlines)
    
    def climb(self, attempt=None):
        """
        Improve attempt (a fresh random one by default) by mutation.
        
        Stops after max_mutations rounds, or after patience consecutive
        rounds without a strictly lower score.
        """
        best = attempt or self.random_attempt()
        age = 0
        
        for round_index in range(1, self.search.max_mutations + 1):
            candidate = best.shape.clone().mutate()
            score, color, scanlines = self.energy(candidate)
            
            if score < best.score:
                best = Attempt(candidate, color, score, scanlines, round_index)
                age = 0
            else:
                age += 1
                if age >= self.search.patience:
                    break
        
        return best


def best_attempt(attempts):
    """Lowest-scoring attempt; ties keep the earliest."""
    return min(attempts, key=lambda attempt: attempt.score)


class Shapesnap:
    """
    Approximates a target image with a sequence of translucent shapes.
    
    Attributes:
        target: read-only RGBA buffer being approximated
        current: canvas with every committed shape drawn on it
        difference: score of current against target
        shapes: committed ShapeRecord list, in drawing order
        attempt_scores: scores of every attempt of the last step
    """
    
    def __init__(self, target, config=None):
        if config is None:
            config = SnapConfig()
        elif isinstance(config, SearchConfig):
            config = SnapConfig(search=config)
        validate_config(config)
        
        self.config = config
        self.search = config.search
        
        self.target = as_rgba(target).copy()
        self.target.flags.writeable = False
        height, width = self.target.shape[:2]
        self.width = width
        self.height = height
        
        self.background = resolve_background(self.search) or background_color(self.target)
        self.current = create_canvas(width, height, self.background)
        self.difference = difference_full(self.target, self.current)
        self.initial_difference = self.difference
        self.shapes = []
        self.attempt_scores = []
        self._seed_sequence = np.random.SeedSequence(self.search.seed)
        
        get_tracer().event(
            f"Canvas {width}x{height} initialized",
            background=self.background.rgb, difference=self.difference,
        )
    
    @property
    def image(self):
        """The accepted canvas."""
        return self.current
    
    @property
    def svg(self):
        """SVG document of the background and every committed shape."""
        return self.to_svg().tostring()
    
    def to_svg(self):
        return emit_svg(
            self.shapes, self.width, self.height, self.background,
            stroke_width=self.search.stroke_width,
        )
    
    def result(self):
        return SnapResult(
            width=self.width,
            height=self.height,
            background=self.background,
            initial_score=self.initial_difference,
            final_score=self.difference,
            shapes=list(self.shapes),
            seed=self.search.seed,
        )
    
    def search_step(self):
        """Run every attempt of one step against the current canvas."""
        tracer = get_tracer()
        attempts = []
        
        for index, seed in enumerate(self._seed_sequence.spawn(self.search.amount_of_attempts)):
            climber = HillClimber(
                self.target, self.current, self.difference, self.search,
                np.random.default_rng(seed),
            )
            with tracer.span(f"attempt_{index}", module="optimizer", level="DEBUG"):
                attempt = climber.climb()
                tracer.event(
                    "Attempt finished", level="DEBUG",
                    kind=attempt.shape.kind, score=attempt.score, mutations=attempt.mutations,
                )
            attempts.append(attempt)
        
        self.attempt_scores = [attempt.score for attempt in attempts]
        return attempts
    
    def commit(self, attempt):
        """Draw attempt onto the canvas and record it."""
        if attempt.scanlines:
            draw(self.current, attempt.color, attempt.scanlines)
            color = attempt.color
        else:
            color = INVISIBLE
        
        self.difference = attempt.score
        geometry = attempt.shape.serialize()
        record = ShapeRecord(
            shape_id=generate_shape_id(geometry, len(self.shapes)),
            geometry=geometry,
            color=color,
            score=attempt.score,
        )
        self.shapes.append(record)
        
        get_tracer().event(
            f"Committed {geometry.kind} #{len(self.shapes)}",
            color=color.rgb, difference=self.difference,
        )
        return record
    
    @trace(label="step")
    def step(self):
        """Search, select and commit one shape. Returns self."""
        self.commit(best_attempt(self.search_step()))
        return self
    
    @trace(label="run")
    def run(self, callback=None):
        """
        Commit shapes until amount_of_shapes have been placed.
        
        callback(index, record, difference) runs after each commit; returning
        False stops early, leaving a shorter but valid result.
        """
        while len(self.shapes) < self.search.amount_of_shapes:
            self.step()
            if callback is not None and callback(len(self.shapes) - 1, self.shapes[-1], self.difference) is False:
                break
        
        return self.shapes
