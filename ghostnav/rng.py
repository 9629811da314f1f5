import random
from typing import Optional, Union


class RNG(random.Random):
    """Seeded RNG to keep ghost wandering reproducible."""


def new_rng(seed: Optional[Union[int, str]] = None) -> RNG:
    rng = RNG()
    rng.seed(seed)
    return rng


def derive_rng(parent: random.Random, label: str) -> RNG:
    """Child RNG for one ghost, stable for a given parent seed and label."""
    base = parent.getrandbits(32)
    # str seeds hash deterministically (unlike hash()), so runs replay exactly
    return new_rng(f"{base}:{label}")
