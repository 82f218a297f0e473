"""
Synthetic Series Generation
"""

from chartseries.datasets.synthetic import (
    EffectParameters,
    GenerationRequest,
    Point,
    SeriesGenerator,
    generate_random_data_points,
    points_to_frame,
)
from chartseries.datasets.synthetic_examples import EFFECT_PRESETS, load_preset

__all__ = [
    'EffectParameters',
    'GenerationRequest',
    'Point',
    'SeriesGenerator',
    'generate_random_data_points',
    'points_to_frame',
    'EFFECT_PRESETS',
    'load_preset',
]
