from __future__ import annotations

import random
from typing import Optional

PALETTE = (
    "#4A90E2",
    "#50E3C2",
    "#F5A623",
    "#D0021B",
    "#7ED321",
    "#9013FE",
    "#BD10E0",
    "#F8E71C",
    "#8B572A",
    "#417505",
    "#4A4A4A",
    "#FF6F61",
)


def pick_color(rng: Optional[random.Random] = None) -> str:
    """Uniform pick from the fixed palette."""
    return (rng or random).choice(PALETTE)
