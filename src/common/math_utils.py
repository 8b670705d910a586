#rotasmart/src/common/math_utils.py

import math


def round_half_up(valor: float) -> int:
    """Arredonda .5 para cima (round() do Python arredonda para o par)."""
    return int(math.floor(valor + 0.5))
