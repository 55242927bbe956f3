"""Tests for the hill-climbing search."""

import numpy as np
import pytest

from shapesnap.config import SearchConfig, SnapConfig
from shapesnap.core.compute import difference_full
from shapesnap.errors import InvalidConfiguration, UnknownShapeKind
from shapesnap.models import Color
from shapesnap.optimizer import Attempt, HillClimber, Shapesnap, best_attempt
from shapesnap.shapes.rect import Rect


class TestEndToEnd:
    """Scenario tests on tiny images."""
    
    def test_red_square_from_black(self, red_image):
        search = SearchConfig(
            amount_of_shapes=1, amount_of_attempts=5, alpha=255,
            background_color=[0, 0, 0, 255], seed=0,
        )
        snap = Shapesnap(red_image, search)
        start = snap.difference
        snap.run()
        
        assert start == pytest.approx(0.5)
        assert len(snap.shapes) == 1
        color = snap.shapes[0].color
        assert abs(color.r - 255) <= 2 and color.g <= 2 and color.b <= 2 and color.a == 255
        assert snap.difference < start
    
    def test_red_square_from_mean_background(self, red_image):
        search = SearchConfig(amount_of_shapes=1, amount_of_attempts=5, alpha=255, seed=0)
        snap = Shapesnap(red_image, search)
        start = snap.difference
        snap.run()
        
        assert snap.background == Color(r=255, g=0, b=0, a=255)
        assert snap.shapes[0].color.as_tuple() == (255, 0, 0, 255)
        assert snap.difference <= start
    
    def test_step_improves_gradient(self, gradient_image, small_search):
        snap = Shapesnap(gradient_image, small_search)
        start = snap.difference
        snap.step()
        
        assert snap.difference < start
    
    def test_score_tracks_canvas(self, gradient_image, small_search):
        snap = Shapesnap(gradient_image, small_search)
        snap.run()
        
        assert snap.difference == pytest.approx(difference_full(snap.target, snap.image), abs=1e-9)
    
    def test_step_returns_self(self, red_image, small_search):
        snap = Shapesnap(red_image, small_search)
        
        assert snap.step().step() is snap
        assert len(snap.shapes) == 2


class TestSelection:
    """Cross-attempt selection."""
    
    def test_committed_score_is_lowest_attempt(self, gradient_image, small_search):
        snap = Shapesnap(gradient_image, small_search)
        
        for _ in range(3):
            snap.step()
            assert len(snap.attempt_scores) == small_search.amount_of_attempts
            assert snap.difference == min(snap.attempt_scores)
            assert snap.shapes[-1].score == snap.difference
    
    def test_best_attempt_prefers_earliest_tie(self, rng):
        attempts = [
            Attempt(Rect(5, 5, rng=rng), None, 0.3),
            Attempt(Rect(5, 5, rng=rng), None, 0.1),
            Attempt(Rect(5, 5, rng=rng), None, 0.1),
        ]
        
        assert best_attempt(attempts) is attempts[1]


class TestHillClimber:
    """Local search within one attempt."""
    
    def _climber(self, image, **overrides):
        from shapesnap.core.image import as_rgba, create_canvas
        
        target = as_rgba(image)
        current = create_canvas(target.shape[1], target.shape[0], Color(r=0, g=0, b=0))
        search = SearchConfig(**overrides)
        score = difference_full(target, current)
        return HillClimber(target, current, score, search, np.random.default_rng(5)), current
    
    def test_never_worse_than_start(self, gradient_image):
        climber, _ = self._climber(gradient_image, max_mutations=50, patience=50)
        start = climber.random_attempt()
        
        best = climber.climb(start)
        
        assert best.score <= start.score
    
    def test_respects_mutation_cap(self, gradient_image):
        climber, _ = self._climber(gradient_image, max_mutations=5, patience=100)
        
        assert climber.climb().mutations <= 5
    
    def test_does_not_touch_current(self, gradient_image):
        climber, current = self._climber(gradient_image, max_mutations=30, patience=10)
        before = current.copy()
        
        climber.climb()
        
        assert (current == before).all()


class TestRun:
    """Commit loop behavior."""
    
    def test_places_requested_shapes(self, gradient_image, small_search):
        snap = Shapesnap(gradient_image, small_search)
        records = snap.run()
        
        assert len(records) == small_search.amount_of_shapes
        assert len({r.shape_id for r in records}) == len(records)
    
    def test_callback_can_stop_early(self, gradient_image, small_search):
        seen = []
        
        def callback(index, record, difference):
            seen.append((index, record.geometry.kind, difference))
            return False
        
        snap = Shapesnap(gradient_image, small_search)
        snap.run(callback=callback)
        
        assert len(snap.shapes) == 1
        assert seen[0][0] == 0
    
    def test_seed_is_reproducible(self, gradient_image, small_search):
        first = Shapesnap(gradient_image, small_search)
        second = Shapesnap(gradient_image, small_search)
        
        assert [r.model_dump() for r in first.run()] == [r.model_dump() for r in second.run()]
    
    def test_target_is_read_only(self, gradient_image, small_search):
        snap = Shapesnap(gradient_image, small_search)
        
        with pytest.raises(ValueError):
            snap.target[0, 0, 0] = 1
    
    def test_caller_image_not_modified(self, gradient_image, small_search):
        original = gradient_image.copy()
        Shapesnap(gradient_image, small_search).run()
        
        assert (gradient_image == original).all()
    
    def test_svg_and_result(self, gradient_image, small_search):
        snap = Shapesnap(gradient_image, small_search)
        snap.run()
        
        assert snap.svg.startswith("<svg")
        result = snap.result()
        assert result.width == 30 and result.height == 20
        assert result.final_score == snap.difference
        assert len(result.shapes) == small_search.amount_of_shapes


class TestConfiguration:
    """Configuration errors surface before any search."""
    
    @pytest.mark.parametrize("overrides", [
        {"amount_of_shapes": 0},
        {"amount_of_attempts": -1},
        {"max_mutations": 0},
        {"patience": 0},
        {"alpha": 256},
        {"shapes": []},
        {"background_color": [1, 2]},
        {"seed": -5},
        {"seed": 1.5},
    ])
    def test_invalid_configuration(self, red_image, overrides):
        with pytest.raises(InvalidConfiguration):
            Shapesnap(red_image, SearchConfig(**overrides))
    
    def test_unknown_shape_kind(self, red_image):
        with pytest.raises(UnknownShapeKind):
            Shapesnap(red_image, SearchConfig(shapes=["Rect", "Rhombus"]))
    
    def test_accepts_full_config(self, red_image):
        config = SnapConfig(search=SearchConfig(amount_of_shapes=1, amount_of_attempts=1, seed=1))
        
        assert Shapesnap(red_image, config).search is config.search
