from __future__ import annotations

import random
from typing import Optional

_HEX_DIGITS = "0123456789ABCDEF"


def get_random_color(rng: Optional[random.Random] = None) -> str:
    source = rng if rng is not None else random
    return "#" + "".join(source.choice(_HEX_DIGITS) for _ in range(6))


def random_hsl(rng: Optional[random.Random] = None, saturation: int = 70, lightness: int = 60) -> str:
    source = rng if rng is not None else random
    return f"hsl({source.random() * 360:.0f}, {saturation}%, {lightness}%)"
