"""Uniswap V3 Pool contract wrapper"""

from ..math import decode_price_sqrt
from ..state import PoolState


class Pool:
    """Wrapper for Uniswap V3 Pool reads"""

    def __init__(self, manager, address):
        """
        Args:
            manager: Web3Manager instance
            address: Pool contract address
        """
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(self.address, "uniswap_v3_pool")

    def slot0(self):
        """
        Get slot0 data (current state).
        Returns: (sqrtPriceX96, tick, observationIndex, ...)
        """
        return self.contract.functions.slot0().call()

    @property
    def sqrt_price_x96(self):
        return self.slot0()[0]

    @property
    def current_tick(self):
        return self.slot0()[1]

    @property
    def fee(self):
        return self.contract.functions.fee().call()

    @property
    def tick_spacing(self):
        return self.contract.functions.tickSpacing().call()

    @property
    def token0(self):
        return self.manager.checksum(self.contract.functions.token0().call())

    @property
    def token1(self):
        return self.manager.checksum(self.contract.functions.token1().call())

    @property
    def liquidity(self):
        """Active (in-range) liquidity"""
        return self.contract.functions.liquidity().call()

    def tick_bitmap(self, word_pos):
        return self.contract.functions.tickBitmap(word_pos).call()

    def ticks(self, tick):
        """Tick data as a dict"""
        data = self.contract.functions.ticks(tick).call()
        return {
            "liquidity_gross": data[0],
            "liquidity_net": data[1],
            "initialized": data[7],
        }

    def liquidity_net(self, tick):
        return self.contract.functions.ticks(tick).call()[1]

    def get_current_price(self):
        """Price (token1 per token0) as a Decimal"""
        return decode_price_sqrt(self.sqrt_price_x96)

    def snapshot(self):
        """
        PoolState at the current block.

        Bitmap words and tick liquidity are fetched lazily as a simulated
        swap walks over them, so only the words it touches are read.
        """
        sqrt_price_x96, tick = self.slot0()[:2]
        return PoolState(
            sqrt_price_x96=sqrt_price_x96,
            tick=tick,
            liquidity=self.liquidity,
            fee=self.fee,
            tick_spacing=self.tick_spacing,
            bitmap_reader=self.tick_bitmap,
            liquidity_net_reader=self.liquidity_net,
        )
