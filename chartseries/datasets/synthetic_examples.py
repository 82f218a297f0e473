"""
Example effect presets and a walkthrough for the SeriesGenerator

Run this file directly to see all examples: python -m chartseries.datasets.synthetic_examples
"""

import logging
import os
import sys

import numpy as np

from chartseries.datasets.synthetic import (
    EffectParameters,
    SeriesGenerator,
    generate_random_data_points,
    points_to_frame,
)
from chartseries.tools.plotting import ChartKind, HAS_MATPLOTLIB, save_chart

logger = logging.getLogger(__name__)


EFFECT_PRESETS = {
    'flat': EffectParameters(),
    'noisy': EffectParameters(noise_amplitude=10.0),
    'spiky': EffectParameters(
        random_spikes=True, spike_chance=0.1, spike_multiplier=30.0, noise_amplitude=2.0
    ),
    'drifting': EffectParameters(drift_rate=0.5, noise_amplitude=2.0),
    'seasonal': EffectParameters(
        periodicity_frequency=0.3, periodicity_amplitude=8.0, noise_amplitude=1.0
    ),
    'trending': EffectParameters(trend_slope=-0.75, noise_amplitude=3.0),
    'jumpy': EffectParameters(cyclic_jump_rate=0.05, jump_amplitude=25.0),
    'volatile': EffectParameters(
        random_spikes=True,
        spike_chance=0.2,
        spike_multiplier=40.0,
        noise_amplitude=8.0,
        drift_rate=0.2,
        periodicity_frequency=0.5,
        periodicity_amplitude=5.0,
        trend_slope=0.1,
        cyclic_jump_rate=0.1,
        jump_amplitude=20.0,
    ),
}


def load_preset(name):
    """Return the EffectParameters of a named preset."""
    try:
        return EFFECT_PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown preset: {name}. Valid presets are: {list(EFFECT_PRESETS)}"
        ) from None


def basic_example():
    """Basic usage example."""
    print("=" * 70)
    print("Example 1: Basic Generation")
    print("=" * 70)

    points = generate_random_data_points(count=5, min_x=0, max_x=10, min_y=0, max_y=10)
    print("\nNo effects enabled, every y stays at the midpoint:")
    print(points_to_frame(points))
    return points


def preset_example(count=50, random_seed=42):
    """One series per preset, with a short description of each."""
    print("\n" + "=" * 70)
    print("Example 2: Effect Presets")
    print("=" * 70)

    generator = SeriesGenerator(random_seed=random_seed)
    series = {}
    for name, params in EFFECT_PRESETS.items():
        points = generator.generate(count=count, params=params)
        y = np.array([p.y for p in points])
        print(
            f"  {name:<10} effects={params.enabled_effects()} "
            f"mean={y.mean():.1f} std={y.std():.1f} min={y.min():.1f} max={y.max():.1f}"
        )
        series[name] = points
    return series


def component_example(random_seed=7):
    """Break a series into the contribution of each effect."""
    print("\n" + "=" * 70)
    print("Example 3: Effect Components")
    print("=" * 70)

    generator = SeriesGenerator(random_seed=random_seed)
    points, components = generator.generate(
        count=100, params=load_preset('volatile'), return_components=True
    )
    for name, values in components.items():
        print(f"  {name:<12} active steps={int(np.count_nonzero(values)):>3} total={values.sum():.2f}")
    return points, components


def legacy_options_example():
    """camelCase option names are accepted alongside snake_case."""
    print("\n" + "=" * 70)
    print("Example 4: camelCase Options and NaN Handling")
    print("=" * 70)

    options = {'driftRate': 1.5, 'periodicityFrequency': float('inf'), 'periodicityAmplitude': 2.0}
    for policy in ('midpoint', 'propagate'):
        points = generate_random_data_points(
            count=3, options=options, random_seed=0, nan_policy=policy
        )
        print(f"  nan_policy={policy!r}: {[round(p.y, 2) for p in points]}")


def plotting_example(series, output_dir='chartseries_examples'):
    """Render every chart kind for one of the preset series."""
    print("\n" + "=" * 70)
    print("Example 5: Rendering Charts")
    print("=" * 70)

    if not HAS_MATPLOTLIB:
        logger.warning("matplotlib not available, skipping chart rendering. Install with: pip install matplotlib")
        return []

    os.makedirs(output_dir, exist_ok=True)
    points = series['seasonal'][:12]
    paths = []
    for kind in ChartKind:
        path = os.path.join(output_dir, f"{kind.value}.png")
        paths.append(save_chart(points, path, chart_type=kind))
    print(f"  {len(paths)} charts written to {output_dir}")
    return paths


def main(output_dir='chartseries_examples'):
    logging.basicConfig(level=logging.INFO)
    basic_example()
    series = preset_example()
    component_example()
    legacy_options_example()
    plotting_example(series, output_dir=output_dir)


if __name__ == "__main__":
    main(*sys.argv[1:2])
