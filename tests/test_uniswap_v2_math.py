"""Tests for constant-product trade sizing."""

from decimal import Decimal

import pytest

from amm_broker.core.exceptions import InvalidInputError
from amm_broker.protocols.uniswap_v2 import (
    NO_FEE,
    UNISWAP_V2_FEE,
    ConstantProductPool,
    Fee,
    TradeToMoveMarket,
    compute_trade_to_move_market,
    get_amount_in,
    get_amount_out,
    spot_price,
)
from amm_broker.utils.math import babylonian_sqrt

WEI = 10**18
SCALE = 10_000_000

# 1000 A per B, scaled up so the test trades below barely move the invariant
RESERVE_A = 1000 * WEI * SCALE
RESERVE_B = 1 * WEI * SCALE


def seeded_pool() -> ConstantProductPool:
    return ConstantProductPool(RESERVE_A, RESERVE_B)


class TestComputeTradeToMoveMarket:
    """Tests for the closed-form trade size."""

    def test_price_already_at_target(self):
        """No trade when reserves already sit at the target price."""
        trade = compute_trade_to_move_market(1000, 1, 1000 * WEI, WEI)
        assert trade == TradeToMoveMarket(False, 0)

    def test_price_below_target_sells_a(self):
        """Spot below target: sell A into the pool."""
        trade = compute_trade_to_move_market(1000, 1, 900 * WEI, WEI)
        assert trade.a_to_b is True
        assert trade.amount_in > 0

    def test_price_above_target_sells_b(self):
        """Spot above target: sell B into the pool."""
        trade = compute_trade_to_move_market(1000, 1, 1100 * WEI, WEI)
        assert trade.a_to_b is False
        assert trade.amount_in > 0

    def test_closed_form_without_fee(self):
        """Default fee multiplier gives sqrt(k * P) - R_in."""
        reserve_a, reserve_b = 900 * WEI, WEI
        trade = compute_trade_to_move_market(1000, 1, reserve_a, reserve_b)
        assert trade.amount_in == babylonian_sqrt(reserve_a * reserve_b * 1000) - reserve_a

    def test_no_fee_trade_lands_on_target(self):
        """Executed on a fee-less curve, the trade lands on the target price."""
        pool = ConstantProductPool(900 * WEI, WEI, fee=NO_FEE)
        trade = pool.trade_to_move_market(1000, 1)
        pool.swap(trade.amount_in, trade.a_to_b)

        assert abs(pool.spot_price - 1000) < Decimal("0.000001")

    def test_fee_adjusted_trade_is_smaller(self):
        """Accounting for the 0.3% fee sizes a smaller (profit-maximizing) trade."""
        plain = compute_trade_to_move_market(1000, 1, 900 * WEI, WEI)
        with_fee = compute_trade_to_move_market(1000, 1, 900 * WEI, WEI, UNISWAP_V2_FEE)

        assert with_fee.a_to_b is plain.a_to_b
        assert 0 < with_fee.amount_in < plain.amount_in

    def test_fee_adjusted_small_gap_is_not_worth_trading(self):
        """A gap smaller than the fee yields no trade with the fee multiplier."""
        trade = compute_trade_to_move_market(1001, 1000, 1000 * WEI, 1000 * WEI, UNISWAP_V2_FEE)
        assert trade == TradeToMoveMarket(False, 0)

    @pytest.mark.parametrize(
        "args",
        [
            (0, 1, WEI, WEI),
            (1, 0, WEI, WEI),
            (1, 1, 0, WEI),
            (1, 1, WEI, -1),
        ],
    )
    def test_non_positive_inputs_rejected(self, args):
        """Zero or negative prices and reserves raise InvalidInputError."""
        with pytest.raises(InvalidInputError):
            compute_trade_to_move_market(*args)

    def test_invalid_fee_rejected(self):
        """A zero fee denominator is rejected."""
        with pytest.raises(InvalidInputError):
            compute_trade_to_move_market(1000, 1, WEI, WEI, Fee(997, 0))

    @pytest.mark.parametrize("fee", [NO_FEE, UNISWAP_V2_FEE])
    def test_idempotent(self, fee):
        """Unchanged reserves and target give the same trade every time."""
        args = (1000, 1, 900 * WEI + 12_345, WEI + 17, fee)
        first = compute_trade_to_move_market(*args)

        assert compute_trade_to_move_market(*args) == first
        assert first.amount_in > 0


class TestSwapToPriceScenario:
    """Push the pool off 1000, then trade it back with the computed size."""

    def test_restores_price_after_b_sold(self):
        """Selling 100000 B drops the price to ~980.3252; the trade restores 1000."""
        pool = seeded_pool()
        pool.swap(100_000 * WEI, a_to_b=False)
        assert pool.spot_price.quantize(Decimal("0.0001")) == Decimal("980.3252")

        trade = pool.trade_to_move_market(1000, 1)
        assert trade.a_to_b is True

        pool.swap(trade.amount_in, trade.a_to_b)
        assert round(pool.spot_price) == 1000
        assert abs(pool.spot_price - 1000) / 1000 < Decimal("0.001")

    def test_restores_price_after_a_sold(self):
        """Selling 1e9 A lifts the price to ~1209.6700; the trade restores 1000."""
        pool = seeded_pool()
        pool.swap(1_000_000_000 * WEI, a_to_b=True)
        assert pool.spot_price.quantize(Decimal("0.0001")) == Decimal("1209.6700")

        trade = pool.trade_to_move_market(1000, 1)
        assert trade.a_to_b is False

        pool.swap(trade.amount_in, trade.a_to_b)
        assert round(pool.spot_price) == 1000
        assert abs(pool.spot_price - 1000) / 1000 < Decimal("0.001")

    def test_invariant_non_decreasing(self):
        """x * y never shrinks across a fee-charging swap."""
        pool = seeded_pool()
        k_before = pool.reserve_a * pool.reserve_b
        pool.swap(12_345 * WEI, a_to_b=False)
        assert pool.reserve_a * pool.reserve_b >= k_before
        assert pool.reserve_a > 0 and pool.reserve_b > 0


class TestV2Library:
    """Tests for getAmountOut / getAmountIn and the spot price."""

    def test_get_amount_out_basic(self):
        """1 in against 100/250000 reserves returns ~2467.58 after the fee."""
        amount_out = get_amount_out(1 * WEI, 100 * WEI, 250_000 * 10**6)
        expected = 2467 * 10**6
        assert abs(amount_out - expected) < expected * 0.01

    def test_get_amount_out_zero_input(self):
        """Zero input returns zero output."""
        assert get_amount_out(0, 100, 100) == 0

    def test_get_amount_in_covers_output(self):
        """get_amount_in rounds up, so feeding it back yields at least the output."""
        reserve_in, reserve_out = 100 * WEI, 250_000 * 10**6
        desired = 2467 * 10**6
        required = get_amount_in(desired, reserve_in, reserve_out)

        assert get_amount_out(required, reserve_in, reserve_out) >= desired

    def test_get_amount_in_exceeds_reserve(self):
        """Asking for the whole reserve is rejected."""
        with pytest.raises(InvalidInputError):
            get_amount_in(100, 50, 100)

    def test_spot_price_truncates_to_18_decimals(self):
        """Price of B in A is truncated, not rounded."""
        assert spot_price(2, 3) == Decimal("0.666666666666666666")
        assert spot_price(1000 * WEI, WEI) == Decimal(1000)

    def test_spot_price_keeps_all_digits_of_large_prices(self):
        """Prices past 28 significant digits are still exact to 18 decimals."""
        price = spot_price(2**100, 3)
        scaled = 2**100 * WEI // 3
        assert price == Decimal(f"{scaled // WEI}.{scaled % WEI:018d}")
        assert str(price).endswith(".333333333333333333")
