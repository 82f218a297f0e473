# -*- coding: utf-8 -*-
"""
Synthetic {x, y} Series Generator with Spikes, Noise, Drift, Periodicity, Trend, and Jumps

Produces plausible-looking demo series for exercising chart rendering code.

Matching test file in tests/test_synthetic_data.py
"""

import logging
import math
from dataclasses import dataclass, field, fields
from typing import NamedTuple, Optional

import numpy as np
import pandas as pd

from chartseries.tools.rng import get_rng, random_number, random_unit, bernoulli

logger = logging.getLogger(__name__)

NAN_POLICIES = ('midpoint', 'propagate', 'raise')

# order in which effects are applied in each step
EFFECT_NAMES = ('spike', 'noise', 'drift', 'periodicity', 'trend', 'jump')


class Point(NamedTuple):
    """One {x, y} sample of a synthetic series."""

    x: float
    y: float


@dataclass(frozen=True)
class EffectParameters:
    """
    Independently toggleable perturbations applied to the running value.

    An effect is enabled when its field is set (not None), so an explicit
    ``drift_rate=0.0`` is an enabled drift of zero rather than "unset".

    Parameters
    ----------
    random_spikes : bool
        Allow abrupt spikes of random sign (default False)
    spike_chance : float or None
        Per-point probability of a spike when random_spikes is True
    spike_multiplier : float or None
        Maximum spike size
    noise_amplitude : float or None
        Width of the symmetric noise band, noise is within +/- amplitude / 2
    drift_rate : float or None
        Constant added every step
    periodicity_frequency : float or None
        Frequency of the sine term, applied to the previous value
    periodicity_amplitude : float or None
        Amplitude of the sine term
    trend_slope : float or None
        Constant added every step, independent of drift_rate
    cyclic_jump_rate : float or None
        Per-point probability of a large jump, None never jumps
    jump_amplitude : float or None
        Jumps are uniform in [-jump_amplitude, jump_amplitude]
    """

    random_spikes: bool = False
    spike_chance: Optional[float] = None
    spike_multiplier: Optional[float] = None
    noise_amplitude: Optional[float] = None
    drift_rate: Optional[float] = None
    periodicity_frequency: Optional[float] = None
    periodicity_amplitude: Optional[float] = None
    trend_slope: Optional[float] = None
    cyclic_jump_rate: Optional[float] = None
    jump_amplitude: Optional[float] = None

    # camelCase option names accepted by from_dict
    OPTION_ALIASES = {
        'randomSpikes': 'random_spikes',
        'spikeChance': 'spike_chance',
        'spikeMultiplier': 'spike_multiplier',
        'noiseAmplitude': 'noise_amplitude',
        'driftRate': 'drift_rate',
        'periodicityFrequency': 'periodicity_frequency',
        'periodicityAmplitude': 'periodicity_amplitude',
        'trendSlope': 'trend_slope',
        'cyclicJumpRate': 'cyclic_jump_rate',
        'jumpAmplitude': 'jump_amplitude',
    }

    @classmethod
    def from_dict(cls, options=None, strict=False):
        """Build from a dict using either snake_case or camelCase option names.

        None returns empty parameters and an EffectParameters is returned unchanged.
        Unknown keys are dropped, or raise ValueError if strict is True.
        """
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        valid_names = [f.name for f in fields(cls)]
        kwargs = {}
        invalid_keys = []
        for key, value in options.items():
            name = cls.OPTION_ALIASES.get(key, key)
            if name in valid_names:
                kwargs[name] = value
            else:
                invalid_keys.append(key)
        if invalid_keys:
            if strict:
                raise ValueError(
                    f"Invalid effect parameters: {invalid_keys}. Valid parameters are: {valid_names}"
                )
            logger.debug(f"Ignoring unknown effect parameters: {invalid_keys}")
        return cls(**kwargs)

    def to_dict(self, camel_case=False):
        """JSON-friendly dict of the fields that are set."""
        names = {v: k for k, v in self.OPTION_ALIASES.items()}
        result = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None or (f.name == 'random_spikes' and not value):
                continue
            result[names[f.name] if camel_case else f.name] = value
        return result

    def enabled_effects(self):
        """Names of the effects that can fire, in application order."""
        enabled = []
        if self.random_spikes and self.spike_chance is not None:
            enabled.append('spike')
        if self.noise_amplitude is not None:
            enabled.append('noise')
        if self.drift_rate is not None:
            enabled.append('drift')
        if (
            self.periodicity_frequency is not None
            and self.periodicity_amplitude is not None
        ):
            enabled.append('periodicity')
        if self.trend_slope is not None:
            enabled.append('trend')
        if self.cyclic_jump_rate is not None:
            enabled.append('jump')
        return enabled


@dataclass
class GenerationRequest:
    """Everything needed for one call to SeriesGenerator.generate."""

    count: int = 10
    min_x: float = 0
    max_x: float = 100
    min_y: float = 0
    max_y: float = 100
    params: EffectParameters = field(default_factory=EffectParameters)


def _operand(value):
    # a missing operand in an active term poisons the value like undefined arithmetic
    return float('nan') if value is None else value


class SeriesGenerator:
    """
    Generate a sequence of {x, y} points from an additive stochastic recurrence.

    Each point carries the previous clamped y forward and adds, in order, a
    random spike, noise, drift, a sine of the previous value, a linear trend,
    and a random jump, each only when enabled in the EffectParameters. The
    result is clamped into [min_y, max_y]. x is an independent uniform draw.

    Parameters
    ----------
    random_seed : int, None, or random source
        Seed or random source (anything with a ``random()`` method). None is unseeded.
    nan_policy : str
        What to do when a step produces NaN (only possible with degenerate parameters).
        'midpoint' (default) replaces it with the middle of the y range,
        'propagate' emits and carries it forward unchanged (legacy behavior),
        'raise' raises ValueError.
    """

    def __init__(self, random_seed=None, nan_policy='midpoint'):
        if nan_policy not in NAN_POLICIES:
            raise ValueError(
                f"Invalid nan_policy: {nan_policy}. Valid policies are: {list(NAN_POLICIES)}"
            )
        self.random_seed = random_seed
        self.nan_policy = nan_policy
        self.rng = get_rng(random_seed)

    def _step(self, prev_value, params):
        """One recurrence step, returns the raw value and each effect's contribution."""
        contributions = dict.fromkeys(EFFECT_NAMES, 0.0)
        value = prev_value

        if params.random_spikes and bernoulli(params.spike_chance, self.rng):
            magnitude = random_unit(self.rng) * _operand(params.spike_multiplier)
            sign = 1 if random_unit(self.rng) > 0.5 else -1
            contributions['spike'] = magnitude * sign
            value += contributions['spike']
            logger.debug(f"Spike of {contributions['spike']:.4f}, value now {value:.4f}")

        if params.noise_amplitude is not None:
            contributions['noise'] = (random_unit(self.rng) - 0.5) * params.noise_amplitude
            value += contributions['noise']

        if params.drift_rate is not None:
            contributions['drift'] = params.drift_rate
            value += params.drift_rate

        if (
            params.periodicity_frequency is not None
            and params.periodicity_amplitude is not None
        ):
            # sine of the previous value, not the partially updated one
            with np.errstate(invalid='ignore'):
                wave = float(np.sin(prev_value * params.periodicity_frequency))
            contributions['periodicity'] = wave * params.periodicity_amplitude
            value += contributions['periodicity']

        if params.trend_slope is not None:
            contributions['trend'] = params.trend_slope
            value += params.trend_slope

        if bernoulli(params.cyclic_jump_rate, self.rng):
            amplitude = _operand(params.jump_amplitude)
            contributions['jump'] = random_unit(self.rng) * amplitude * 2 - amplitude
            value += contributions['jump']
            logger.debug(f"Jump of {contributions['jump']:.4f}, value now {value:.4f}")

        return value, contributions

    def next_value(self, prev_value, params=None):
        """Raw (unclamped) value following prev_value.

        Parameters
        ----------
        prev_value : float
            The carried value from the previous step
        params : EffectParameters, dict, or None
            Effects to apply

        Returns
        -------
        float
        """
        value, _ = self._step(prev_value, EffectParameters.from_dict(params))
        return value

    def _handle_nan(self, step, midpoint):
        if self.nan_policy == 'raise':
            raise ValueError(
                f"Step {step} produced NaN, check periodicity and amplitude parameters."
            )
        if self.nan_policy == 'midpoint':
            logger.debug(f"Step {step} produced NaN, replaced by midpoint {midpoint}")
            return midpoint
        return float('nan')

    def generate(
        self,
        count=10,
        min_x=0,
        max_x=100,
        min_y=0,
        max_y=100,
        params=None,
        return_components=False,
    ):
        """
        Generate ``count`` points.

        Parameters
        ----------
        count : int
            Number of points, zero or negative gives an empty list
        min_x, max_x : float
            Range for the uniform x draws
        min_y, max_y : float
            Range y is clamped into, the series starts at its midpoint
        params : EffectParameters, dict, or None
            Effects to apply, dict keys may use snake_case or camelCase names,
            unknown keys are ignored
        return_components : bool
            If True also return a dict of per-effect contribution arrays.
            Steps replaced by the midpoint under nan_policy='midpoint' contribute 0.0

        Returns
        -------
        points : list of Point
        components : dict of {effect_name: np.ndarray}, only if return_components
        """
        params = EffectParameters.from_dict(params)
        count = max(int(count), 0)
        midpoint = (min_y + max_y) / 2
        components = {name: np.zeros(count) for name in EFFECT_NAMES}

        points = []
        prev_value = midpoint
        for step in range(count):
            x = random_number(min_x, max_x, self.rng)
            value, contributions = self._step(prev_value, params)
            if math.isnan(value):
                value = self._handle_nan(step, midpoint)
                if not math.isnan(value):
                    # substituted step, no effect contributed to it
                    contributions = dict.fromkeys(EFFECT_NAMES, 0.0)
            # NaN fails both comparisons and passes through
            y = min_y if value < min_y else max_y if value > max_y else value
            points.append(Point(float(x), float(y)))
            for name, amount in contributions.items():
                components[name][step] = amount
            prev_value = y

        if return_components:
            return points, components
        return points

    def generate_from_request(self, request, return_components=False):
        """Run generate for a GenerationRequest."""
        return self.generate(
            count=request.count,
            min_x=request.min_x,
            max_x=request.max_x,
            min_y=request.min_y,
            max_y=request.max_y,
            params=request.params,
            return_components=return_components,
        )


def points_to_frame(points):
    """DataFrame with float columns x and y, one row per point."""
    return pd.DataFrame(
        [(p.x, p.y) for p in points], columns=['x', 'y'], dtype=float
    )


# Convenience function for quick generation
def generate_random_data_points(
    count=10,
    min_x=0,
    max_x=100,
    min_y=0,
    max_y=100,
    options=None,
    random_seed=None,
    nan_policy='midpoint',
):
    """
    Quick function to generate a synthetic {x, y} series.

    Parameters
    ----------
    count : int
        Number of points to generate
    min_x, max_x : float
        Range of x values
    min_y, max_y : float
        Range of y values
    options : EffectParameters or dict
        Effects to apply, see EffectParameters
    random_seed : int, None, or random source
        Seed for reproducibility
    nan_policy : str
        See SeriesGenerator

    Returns
    -------
    list of Point
    """
    generator = SeriesGenerator(random_seed=random_seed, nan_policy=nan_policy)
    return generator.generate(
        count=count,
        min_x=min_x,
        max_x=max_x,
        min_y=min_y,
        max_y=max_y,
        params=options,
    )
