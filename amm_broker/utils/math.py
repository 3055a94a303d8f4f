"""Integer math shared by the V2 and V3 calculators"""

MAX_UINT256 = 2 ** 256 - 1
MAX_UINT160 = 2 ** 160 - 1
MAX_UINT128 = 2 ** 128 - 1
MAX_INT256 = 2 ** 255 - 1


def mul_div(a, b, denominator):
    """floor(a * b / denominator) without intermediate truncation"""
    if denominator == 0:
        raise ZeroDivisionError("mul_div denominator is zero")
    return a * b // denominator


def mul_div_rounding_up(a, b, denominator):
    """ceil(a * b / denominator)"""
    result, remainder = divmod(a * b, denominator)
    if remainder:
        result += 1
    return result


def div_rounding_up(x, y):
    """ceil(x / y) for non-negative x and positive y"""
    quotient, remainder = divmod(x, y)
    return quotient + 1 if remainder else quotient


def babylonian_sqrt(y):
    """
    Floor of the square root of a non-negative integer.

    Newton/babylonian iteration as in Uniswap's Babylonian library; the
    sequence decreases monotonically and stops at floor(sqrt(y)).
    """
    if y < 0:
        raise ValueError("square root of a negative number")
    if y > 3:
        z = y
        x = y // 2 + 1
        while x < z:
            z = x
            x = (y // x + x) // 2
        return z
    if y != 0:
        return 1
    return 0
