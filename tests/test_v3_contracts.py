"""Tests for the V3 contract wrappers, liquidity provisioning and stack deployment."""

from unittest.mock import MagicMock, call, patch

import pytest

from amm_broker.core.exceptions import InvalidInputError, PoolError
from amm_broker.protocols.uniswap_v3 import (
    Factory,
    LiquidityManager,
    SwapRouter,
    TickLens,
    compute_pool_address,
    encode_path,
    encode_price_sqrt,
)
from amm_broker.protocols.uniswap_v3.deployment import deploy_uniswap_v3

from tests.helpers import DEPLOYER, FACTORY, FEE, POOL, ROUTER, TOKEN_A, TOKEN_B, TRADER, WEI

NFPM_ADDRESS = "0xC36442b4a4522E871399CD717aBDD847Ab11FE88"
LENS_ADDRESS = "0xbfd8137f7d1516D3ea5cA83523914859ec47F573"


class TestLiquidityManager:
    """createAndInitializePoolIfNecessary + approve + mint."""

    @pytest.fixture
    def nfpm(self):
        with patch("amm_broker.protocols.uniswap_v3.operations.liquidity.NFPM") as nfpm_cls, patch(
            "amm_broker.protocols.uniswap_v3.operations.liquidity.ERC20"
        ) as erc20_cls:
            nfpm = nfpm_cls.return_value
            nfpm.address = NFPM_ADDRESS
            nfpm.mint.return_value = {
                "receipt": MagicMock(),
                "token_id": 1,
                "liquidity": 12345,
                "amount0": 1000 * WEI,
                "amount1": 99 * WEI,
            }
            nfpm.erc20_cls = erc20_cls
            yield nfpm

    def test_sorts_tokens_and_starts_at_amount_ratio(self, manager, nfpm):
        """Tokens given as (B, A) are sorted; the pool starts at amount0 / amount1."""
        lm = LiquidityManager(NFPM_ADDRESS, FACTORY, manager=manager)
        result = lm.add_liquidity(TOKEN_B, TOKEN_A, FEE, 100 * WEI, 1000 * WEI, 20820, 27060, deadline=1)

        assert result["tokens_swapped"] is True
        assert (result["token0"], result["token1"]) == (TOKEN_A, TOKEN_B)
        nfpm.create_and_initialize_pool_if_necessary.assert_called_once_with(
            TOKEN_A, TOKEN_B, FEE, encode_price_sqrt(10, 1), sender=DEPLOYER
        )

        params = nfpm.mint.call_args[0][0]
        assert params["amount0_desired"] == 1000 * WEI
        assert params["amount1_desired"] == 100 * WEI
        assert params["recipient"] == DEPLOYER
        assert params["deadline"] == 1

        assert nfpm.erc20_cls.return_value.approve.call_args_list == [
            call(NFPM_ADDRESS, 1000 * WEI, sender=DEPLOYER),
            call(NFPM_ADDRESS, 100 * WEI, sender=DEPLOYER),
        ]
        assert result["pool"] == compute_pool_address(FACTORY, TOKEN_A, TOKEN_B, FEE)
        assert result["token_id"] == 1

    def test_explicit_price_and_recipient(self, manager, nfpm):
        lm = LiquidityManager(NFPM_ADDRESS, FACTORY, manager=manager)
        lm.add_liquidity(TOKEN_A, TOKEN_B, FEE, WEI, WEI, -60, 60, recipient=TRADER, sqrt_price_x96=2**96)

        assert nfpm.create_and_initialize_pool_if_necessary.call_args[0][3] == 2**96
        assert nfpm.mint.call_args[0][0]["recipient"] == TRADER

    @pytest.mark.parametrize("lower,upper", [(60, 60), (120, 60), (61, 120)])
    def test_bad_range(self, manager, nfpm, lower, upper):
        """Empty, inverted or unspaced ranges fail before any transaction."""
        lm = LiquidityManager(NFPM_ADDRESS, FACTORY, manager=manager)
        with pytest.raises(InvalidInputError):
            lm.add_liquidity(TOKEN_A, TOKEN_B, FEE, WEI, WEI, lower, upper)
        nfpm.create_and_initialize_pool_if_necessary.assert_not_called()


class TestReadWrappers:
    """Factory and TickLens reads."""

    def test_factory_missing_pool(self, manager):
        manager.get_contract.return_value.functions.getPool.return_value.call.return_value = (
            "0x0000000000000000000000000000000000000000"
        )
        with pytest.raises(PoolError):
            Factory(manager, FACTORY).get_pool(TOKEN_A, TOKEN_B, FEE)

    def test_factory_returns_pool(self, manager):
        manager.get_contract.return_value.functions.getPool.return_value.call.return_value = POOL
        pool = Factory(manager, FACTORY).get_pool(TOKEN_A, TOKEN_B, FEE)
        assert pool.address == POOL

    def test_tick_lens(self, manager):
        """Ticks come back as dicts, the word is derived from tick and spacing."""
        functions = manager.get_contract.return_value.functions
        functions.getPopulatedTicksInWord.return_value.call.return_value = [(27060, -5, 5), (20820, 5, 5)]

        ticks = TickLens(manager, LENS_ADDRESS).get_populated_ticks_around(POOL, 23027, 60)

        functions.getPopulatedTicksInWord.assert_called_once_with(POOL, 1)
        assert ticks[0] == {"tick": 27060, "liquidity_net": -5, "liquidity_gross": 5}
        assert [t["tick"] for t in ticks] == [27060, 20820]


class TestSwapRouter:
    def test_exact_input_sends_packed_path(self, manager):
        """One token in along an encoded path; params reach exactInput in order."""
        router = SwapRouter(manager, ROUTER)
        router.tx_builder = MagicMock()
        path = encode_path([TOKEN_A, TOKEN_B], [FEE])

        router.exact_input(path, TRADER.lower(), 15798990420, WEI, sender=TRADER)

        exact_input = router.contract.functions.exactInput
        exact_input.assert_called_once_with((path, TRADER, 15798990420, WEI, 0))
        assert path == "0x" + TOKEN_A[2:].lower() + "000bb8" + TOKEN_B[2:].lower()
        router.tx_builder.build_and_send.assert_called_once_with(
            exact_input.return_value, sender=TRADER, operation_type="swap"
        )


class TestDeployUniswapV3:
    def test_descriptor_linked_against_library(self, manager):
        """NFTDescriptor is deployed first and linked into the position descriptor."""
        with patch("amm_broker.protocols.uniswap_v3.deployment.deploy_contract") as deploy_contract:
            deploy_contract.side_effect = lambda manager, name, *args, **kwargs: MagicMock(address=f"addr:{name}")
            deployed = deploy_uniswap_v3(manager, DEPLOYER)

        names = [c.args[1] for c in deploy_contract.call_args_list]
        assert names == [
            "WETH9",
            "UniswapV3Factory",
            "SwapRouter",
            "NFTDescriptor",
            "NonfungibleTokenPositionDescriptor",
            "NonfungiblePositionManager",
            "TickLens",
        ]
        descriptor_call = deploy_contract.call_args_list[4]
        assert descriptor_call.kwargs["libraries"] == {"NFTDescriptor": "addr:NFTDescriptor"}
        assert deploy_contract.call_args_list[5].args[2:] == (
            "addr:UniswapV3Factory",
            "addr:WETH9",
            "addr:NonfungibleTokenPositionDescriptor",
        )
        assert deployed.position_manager.address == "addr:NonfungiblePositionManager"
        assert all(c.kwargs["sender"] == DEPLOYER for c in deploy_contract.call_args_list)
