"""Liquidity provisioning for Uniswap V3 pools"""

import time

import structlog

from ....contracts.erc20 import ERC20
from ....core.connection import Web3Manager
from ....core.exceptions import InvalidInputError
from ..config import compute_pool_address, get_tick_spacing
from ..contracts.nfpm import NFPM
from ..math import encode_price_sqrt

logger = structlog.get_logger()


class LiquidityManager:
    """Open Uniswap V3 positions through the NonfungiblePositionManager"""

    def __init__(self, nfpm_address, factory_address, manager=None, init_code_hash=None):
        """
        Args:
            nfpm_address: NonfungiblePositionManager address
            factory_address: UniswapV3Factory the NFPM was deployed against
            manager: Web3Manager instance (created with signer if None)
            init_code_hash: Pool creation code hash, for non-canonical pool builds
        """
        self.manager = manager or Web3Manager(require_signer=True)
        self.nfpm = NFPM(self.manager, nfpm_address)
        self.factory_address = self.manager.checksum(factory_address)
        self.init_code_hash = init_code_hash

    def _ensure_token_order(self, token0_addr, token1_addr, amount0, amount1):
        """Ensure token0 < token1 (Uniswap requirement)"""
        if int(token0_addr, 16) > int(token1_addr, 16):
            return token1_addr, token0_addr, amount1, amount0, True
        return token0_addr, token1_addr, amount0, amount1, False

    def pool_address(self, token_a, token_b, fee):
        if self.init_code_hash:
            return compute_pool_address(self.factory_address, token_a, token_b, fee, self.init_code_hash)
        return compute_pool_address(self.factory_address, token_a, token_b, fee)

    def add_liquidity(
        self,
        token_a,
        token_b,
        fee,
        amount_a,
        amount_b,
        tick_lower,
        tick_upper,
        recipient=None,
        deadline=None,
        sqrt_price_x96=None,
        sender=None,
    ):
        """
        Create (if needed) and initialize a pool, then mint a position.

        Args:
            token_a: Token address
            token_b: Token address
            fee: Fee tier (500, 3000, 10000)
            amount_a: Desired amount of token_a (wei)
            amount_b: Desired amount of token_b (wei)
            tick_lower: Lower tick bound (multiple of the fee's tick spacing)
            tick_upper: Upper tick bound
            recipient: Owner of the position NFT (default: sender)
            deadline: Unix timestamp (default: now + 30 minutes)
            sqrt_price_x96: Starting price for a new pool (default:
                encode_price_sqrt(amount0, amount1), i.e. token0 amount per
                token1 amount)
            sender: Account paying the tokens (default: manager.address)

        Returns:
            Dict with pool address, token_id, liquidity and amounts used
        """
        sender = self.manager.checksum(sender or self.manager.address)
        token0, token1, amount0, amount1, swapped = self._ensure_token_order(
            self.manager.checksum(token_a), self.manager.checksum(token_b), amount_a, amount_b
        )

        spacing = get_tick_spacing(fee)
        if tick_lower >= tick_upper:
            raise InvalidInputError(f"Invalid tick range: {tick_lower} >= {tick_upper}")
        if tick_lower % spacing or tick_upper % spacing:
            raise InvalidInputError(f"Ticks must be multiples of {spacing}")

        if sqrt_price_x96 is None:
            sqrt_price_x96 = encode_price_sqrt(amount0, amount1)

        self.nfpm.create_and_initialize_pool_if_necessary(token0, token1, fee, sqrt_price_x96, sender=sender)

        ERC20(self.manager, token0).approve(self.nfpm.address, amount0, sender=sender)
        ERC20(self.manager, token1).approve(self.nfpm.address, amount1, sender=sender)

        params = {
            "token0": token0,
            "token1": token1,
            "fee": fee,
            "tick_lower": tick_lower,
            "tick_upper": tick_upper,
            "amount0_desired": amount0,
            "amount1_desired": amount1,
            "amount0_min": 0,
            "amount1_min": 0,
            "recipient": recipient or sender,
            "deadline": deadline or int(time.time()) + 1800,
        }
        minted = self.nfpm.mint(params, sender=sender)

        pool = self.pool_address(token0, token1, fee)
        logger.info(
            "liquidity_added",
            pool=pool,
            token_id=minted["token_id"],
            tick_lower=tick_lower,
            tick_upper=tick_upper,
            liquidity=minted["liquidity"],
        )

        return {
            "pool": pool,
            "token_id": minted["token_id"],
            "liquidity": minted["liquidity"],
            "amount0": minted["amount0"],
            "amount1": minted["amount1"],
            "receipt": minted["receipt"],
            "token0": token0,
            "token1": token1,
            "tick_lower": tick_lower,
            "tick_upper": tick_upper,
            "tokens_swapped": swapped,
        }
