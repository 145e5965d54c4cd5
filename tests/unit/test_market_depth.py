import random

import pytest

from src.cm_market.domain.models import Instrument
from src.cm_market.engine.depth import clamp, compute_depth, compute_spread


def _make_instrument(**kwargs) -> Instrument:
    defaults = dict(
        id="emma-watson-ipo", symbol="EMW", creator_name="Emma Watson",
        current_price=24.82, initial_price=20.0,
        total_supply=1_000_000, available_supply=350_000,
        engagement_score=78, ai_score=85,
        revenue_usd=750_000, average_daily_volume=70_000,
    )
    defaults.update(kwargs)
    return Instrument(**defaults)


class TestClamp:
    def test_inside(self) -> None:
        assert clamp(0.5, 1.5, 1.0) == 1.0

    def test_below_and_above(self) -> None:
        assert clamp(0.5, 1.5, 0.1) == 0.5
        assert clamp(0.5, 1.5, 9.0) == 1.5


class TestComputeDepth:
    @pytest.mark.parametrize("seed", range(20))
    def test_levels_inside_bands_and_sorted(self, seed: int) -> None:
        inst = _make_instrument()
        depth = compute_depth(inst, random.Random(seed))
        p = inst.current_price

        assert len(depth.support_levels) == 3
        assert len(depth.resistance_levels) == 3
        assert depth.support_levels == sorted(depth.support_levels)
        assert depth.resistance_levels == sorted(depth.resistance_levels)
        assert all(0.7 * p <= s <= 0.9 * p for s in depth.support_levels)
        assert all(1.1 * p <= r <= 1.4 * p for r in depth.resistance_levels)

    def test_support_below_resistance(self) -> None:
        depth = compute_depth(_make_instrument(), random.Random(1))
        assert max(depth.support_levels) < min(depth.resistance_levels)

    def test_order_concentration_from_engagement(self) -> None:
        depth = compute_depth(_make_instrument(engagement_score=80), random.Random(1))
        assert depth.order_concentration == pytest.approx(0.7)

    def test_wall_strength_ranges(self) -> None:
        inst = _make_instrument(engagement_score=60, ai_score=90)
        depth = compute_depth(inst, random.Random(2))
        assert 0.8 <= depth.buy_wall_strength <= 1.1
        assert 0.3 <= depth.sell_wall_strength <= 0.6

    def test_seeded_source_is_deterministic(self) -> None:
        inst = _make_instrument()
        assert compute_depth(inst, random.Random(9)) == compute_depth(inst, random.Random(9))

    def test_does_not_mutate_instrument(self) -> None:
        inst = _make_instrument()
        compute_depth(inst, random.Random(3))
        assert inst.current_price == 24.82


class TestComputeSpread:
    @pytest.mark.parametrize("seed", range(10))
    def test_bid_below_price_below_ask(self, seed: int) -> None:
        inst = _make_instrument()
        spread = compute_spread(inst, random.Random(seed))
        assert spread.bid < inst.current_price < spread.ask

    def test_centered_on_price(self) -> None:
        inst = _make_instrument()
        spread = compute_spread(inst, random.Random(4))
        assert (spread.bid + spread.ask) / 2 == pytest.approx(inst.current_price)

    def test_higher_revenue_narrows_spread(self) -> None:
        low = compute_spread(_make_instrument(revenue_usd=120_000), random.Random(5))
        high = compute_spread(_make_instrument(revenue_usd=180_000), random.Random(5))
        assert high.width < low.width

    def test_revenue_adjustment_clamped_at_half(self) -> None:
        a = compute_spread(_make_instrument(revenue_usd=1_000_000), random.Random(5))
        b = compute_spread(_make_instrument(revenue_usd=5_000_000), random.Random(5))
        assert a.width == pytest.approx(b.width)

    def test_unknown_revenue_same_as_small_revenue(self) -> None:
        a = compute_spread(_make_instrument(revenue_usd=None), random.Random(5))
        b = compute_spread(_make_instrument(revenue_usd=50_000), random.Random(5))
        assert a.width == pytest.approx(b.width)

    def test_low_engagement_widens_spread(self) -> None:
        thin = compute_spread(_make_instrument(engagement_score=20), random.Random(6))
        thick = compute_spread(_make_instrument(engagement_score=90), random.Random(6))
        assert thin.width > thick.width

    def test_width_within_formula_bounds(self) -> None:
        # engagement 50 -> factor 1.0; no revenue -> 1.0; jitter 0.9-1.1
        inst = _make_instrument(engagement_score=50, revenue_usd=None, current_price=100.0)
        spread = compute_spread(inst, random.Random(8))
        assert 0.9 <= spread.width <= 1.1
