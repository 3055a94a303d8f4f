"""TickBitmap: packed initialized-tick flags, 256 compressed ticks per word"""

from ....utils.math import MAX_UINT256


def compress(tick, tick_spacing):
    """Tick divided by spacing, rounded towards negative infinity"""
    return tick // tick_spacing


def position(compressed_tick):
    """(word_pos, bit_pos) of a compressed tick"""
    return compressed_tick >> 8, compressed_tick & 0xFF


def flip_tick(bitmap, tick, tick_spacing):
    """Toggle the initialized flag of tick in a {word_pos: word} mapping"""
    if tick % tick_spacing != 0:
        raise ValueError(f"Tick {tick} is not a multiple of spacing {tick_spacing}")
    word_pos, bit_pos = position(tick // tick_spacing)
    bitmap[word_pos] = bitmap.get(word_pos, 0) ^ (1 << bit_pos)


def _most_significant_bit(x):
    return x.bit_length() - 1


def _least_significant_bit(x):
    return (x & -x).bit_length() - 1


def next_initialized_tick_within_one_word(get_word, tick, tick_spacing, lte):
    """
    Next initialized tick in the same word as tick (or the adjacent one).

    Args:
        get_word: Callable returning the bitmap word for a word position
        tick: Starting tick
        tick_spacing: Pool tick spacing
        lte: Search to the left (less than or equal) when True

    Returns:
        (next_tick, initialized); when nothing is initialized within reach
        next_tick is the word boundary
    """
    compressed = compress(tick, tick_spacing)

    if lte:
        word_pos, bit_pos = position(compressed)
        # all the 1s at or to the right of the current bit_pos
        mask = (1 << bit_pos) - 1 + (1 << bit_pos)
        masked = get_word(word_pos) & mask

        initialized = masked != 0
        if initialized:
            next_tick = (compressed - (bit_pos - _most_significant_bit(masked))) * tick_spacing
        else:
            next_tick = (compressed - bit_pos) * tick_spacing
    else:
        # start from the word of the next tick, the current one is already active
        word_pos, bit_pos = position(compressed + 1)
        # all the 1s at or to the left of bit_pos
        mask = ~((1 << bit_pos) - 1) & MAX_UINT256
        masked = get_word(word_pos) & mask

        initialized = masked != 0
        if initialized:
            next_tick = (compressed + 1 + (_least_significant_bit(masked) - bit_pos)) * tick_spacing
        else:
            next_tick = (compressed + 1 + (0xFF - bit_pos)) * tick_spacing

    return next_tick, initialized
