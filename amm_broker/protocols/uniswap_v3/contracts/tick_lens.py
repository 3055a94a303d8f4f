"""Uniswap V3 TickLens contract wrapper"""

from ..math import get_tick_bitmap_index


class TickLens:
    """Reads populated ticks of a pool one bitmap word at a time"""

    def __init__(self, manager, address):
        self.manager = manager
        self.address = manager.checksum(address)
        self.contract = manager.get_contract(self.address, "uniswap_v3_tick_lens")

    def get_populated_ticks_in_word(self, pool, word_index):
        """
        Populated ticks in one bitmap word, as dicts.

        The lens returns them in descending tick order.
        """
        ticks = self.contract.functions.getPopulatedTicksInWord(
            self.manager.checksum(pool), word_index
        ).call()
        return [
            {"tick": tick, "liquidity_net": liquidity_net, "liquidity_gross": liquidity_gross}
            for tick, liquidity_net, liquidity_gross in ticks
        ]

    def get_populated_ticks_around(self, pool, tick, tick_spacing):
        """Populated ticks in the word holding tick"""
        return self.get_populated_ticks_in_word(pool, get_tick_bitmap_index(tick, tick_spacing))
