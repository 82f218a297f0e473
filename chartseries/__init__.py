"""
Synthetic Chart Series for Python

Demo {x, y} series with spikes, noise, drift, periodicity, trend and jumps,
plus rendering to chart images.
"""

from chartseries.datasets import (
    EffectParameters,
    GenerationRequest,
    Point,
    SeriesGenerator,
    generate_random_data_points,
    points_to_frame,
    EFFECT_PRESETS,
    load_preset,
)
from chartseries.tools.rng import random_number
from chartseries.tools.plotting import (
    ChartKind,
    build_chart_config,
    render_chart,
    save_chart,
)


__version__ = '0.1.0'

__all__ = [
    'EffectParameters',
    'GenerationRequest',
    'Point',
    'SeriesGenerator',
    'generate_random_data_points',
    'points_to_frame',
    'EFFECT_PRESETS',
    'load_preset',
    'random_number',
    'ChartKind',
    'build_chart_config',
    'render_chart',
    'save_chart',
]
