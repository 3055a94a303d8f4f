from .liquidity import LiquidityManager

__all__ = ["LiquidityManager"]
