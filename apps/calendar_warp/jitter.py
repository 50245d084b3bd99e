"""
Random warp amounts, in minutes.

The draw is snapped to a multiple of the minimum warp. A draw that is
already a multiple is kept; anything else goes to the next multiple up,
so when max_warp is not itself a multiple of min_warp the result can land
above max_warp (e.g. min 5, max 32, draw 31 -> 35). That overshoot is
kept as-is; callers must not assume offset <= max_warp.
"""
import math
import random


def compute_offset(min_warp, max_warp):
    """Return a random warp amount in minutes, a multiple of min_warp."""
    if min_warp <= 0:
        raise ValueError(f'min_warp must be positive, got {min_warp}')
    if max_warp < min_warp:
        raise ValueError(f'max_warp ({max_warp}) must be >= min_warp ({min_warp})')

    return ceil_to(random.randint(min_warp, max_warp), min_warp)


def ceil_to(n, step=5):
    """
    Round up to an integer, then to the nearest multiple of step,
    with halves rounding up.
    """
    n_ceil = math.ceil(n)
    if n_ceil % step == 0:
        return n_ceil
    return _round_half_up((n + step / 2) / step) * step


def _round_half_up(x):
    # round() rounds halves to even
    return int(math.floor(x + 0.5))
