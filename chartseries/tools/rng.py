"""Random scalar helpers shared by the synthetic generators."""

import numbers

import numpy as np


def get_rng(random_seed=None):
    """Return a random source with a `random()` method.

    Args:
        random_seed (int, None, or random source): int seeds a new numpy Generator,
            None gives an unseeded one, anything with a `random()` method
            (numpy Generator, numpy RandomState, random.Random) is used as-is
    """
    if random_seed is None or isinstance(random_seed, numbers.Integral):
        return np.random.default_rng(random_seed)
    if callable(getattr(random_seed, "random", None)):
        return random_seed
    raise ValueError(
        f"random_seed must be None, an int seed, or an object with a random() method, got {type(random_seed).__name__}"
    )


def random_unit(rng=None):
    """Uniform float in [0, 1)."""
    if rng is None:
        rng = np.random.default_rng()
    return float(rng.random())


def random_number(min_value=0, max_value=100, rng=None):
    """Uniform random number in [min_value, max_value).

    A reversed range (min_value > max_value) is not an error, the draw just
    runs from max_value up to min_value.

    Args:
        min_value (float): lower end of the range
        max_value (float): upper end of the range
        rng: random source, see get_rng
    """
    return min_value + random_unit(rng) * (max_value - min_value)


def bernoulli(probability, rng=None):
    """Single trial succeeding with the given probability.

    Always consumes exactly one draw. None is treated as 0, and NaN never succeeds.
    """
    draw = random_unit(rng)
    if probability is None:
        return False
    return draw < float(probability)
