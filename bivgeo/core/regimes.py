"""Position of y relative to the diagonal y = x.

The joint pmf of the Basu-Dhar distribution has one closed form per
regime, and the conditional law of Y given X = x used by the
inverse-transform sampler has the same three pieces. Both go through
``classify_regimes`` so the branch boundaries cannot drift apart.
"""

from enum import IntEnum

import numpy as np


class Regime(IntEnum):
    """Tagged variant over the diagonal of the (x, y) lattice."""
    BELOW = -1  # y < x
    AT = 0      # y == x
    ABOVE = 1   # y > x


def classify_regimes(x, y) -> np.ndarray:
    """Classify each (x, y) pair by the sign of y - x.

    Args:
        x: Integer array (or scalar) of x values
        y: Integer array (or scalar) of y values, broadcastable with x

    Returns:
        int8 array holding ``Regime`` values
    """
    return np.sign(np.subtract(y, x, dtype=np.int64)).astype(np.int8)


def select_by_regime(regimes: np.ndarray, below, at, above) -> np.ndarray:
    """Pick ``below``, ``at`` or ``above`` elementwise according to ``regimes``."""
    return np.select(
        [regimes == Regime.BELOW, regimes == Regime.AT],
        [below, at],
        default=above,
    )
