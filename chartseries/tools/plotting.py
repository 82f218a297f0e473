# -*- coding: utf-8 -*-
"""Chart configuration and raster rendering for synthetic point series."""

from __future__ import annotations

import io
import logging
import os
import re
from enum import Enum
from pathlib import Path
from collections.abc import Mapping
from typing import Any, Dict, Iterable, List

import numpy as np

try:  # pragma: no-cover - optional dependency
    from matplotlib.figure import Figure
    HAS_MATPLOTLIB = True
except ImportError:  # pragma: no-cover
    HAS_MATPLOTLIB = False

logger = logging.getLogger(__name__)

try:
    DEFAULT_DPI = max(1, int(os.environ.get("CHARTSERIES_DPI", 100)))
except (TypeError, ValueError):
    DEFAULT_DPI = 100

DATASET_LABEL = 'Random Data'
BACKGROUND_COLORS = [
    'rgba(75, 192, 192, 0.2)',
    'rgba(255, 99, 132, 0.2)',
    'rgba(54, 162, 235, 0.2)',
    'rgba(255, 206, 86, 0.2)',
]
BORDER_COLOR = 'rgba(75, 192, 192, 1)'


class ChartKind(Enum):
    """Supported chart kinds, values are the chart type tags."""

    LINE = 'line'
    BAR = 'bar'
    RADAR = 'radar'
    DOUGHNUT = 'doughnut'
    PIE = 'pie'
    POLAR_AREA = 'polarArea'
    BUBBLE = 'bubble'
    SCATTER = 'scatter'

    @classmethod
    def parse(cls, value):
        """Return the ChartKind for a member or its tag, ValueError otherwise."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValueError(
                f"Unsupported chart type: {value!r}. Available types: {', '.join(cls.tags())}"
            ) from None

    @classmethod
    def tags(cls) -> List[str]:
        return [kind.value for kind in cls]

    @property
    def uses_point_pairs(self) -> bool:
        """True if the chart plots full {x, y} pairs rather than the y values alone."""
        return _USES_POINT_PAIRS[self]

    @property
    def has_axis_titles(self) -> bool:
        return self in (ChartKind.LINE, ChartKind.BAR)


_USES_POINT_PAIRS = {
    ChartKind.LINE: False,
    ChartKind.BAR: False,
    ChartKind.RADAR: False,
    ChartKind.DOUGHNUT: False,
    ChartKind.PIE: False,
    ChartKind.POLAR_AREA: False,
    ChartKind.BUBBLE: True,
    ChartKind.SCATTER: True,
}


def _point_xy(point):
    if isinstance(point, Mapping):
        return point['x'], point['y']
    x, y = point
    return x, y


def build_chart_config(points: Iterable[Any], chart_type: str = 'line') -> Dict[str, Any]:
    """Chart configuration for a point series.

    Args:
        points: sequence of Point, (x, y) tuples, or {'x', 'y'} dicts
        chart_type: ChartKind or its tag, see ChartKind.tags()

    Returns:
        dict with 'type', 'data' (labels and a single dataset) and 'options'
    """
    kind = ChartKind.parse(chart_type)
    pairs = [_point_xy(point) for point in points]
    labels = [f"Point {i + 1}" for i in range(len(pairs))]
    if kind.uses_point_pairs:
        data = [{'x': x, 'y': y} for x, y in pairs]
    else:
        data = [y for _, y in pairs]

    if kind.has_axis_titles:
        scales = {
            'x': {'title': {'display': True, 'text': 'Data Points'}},
            'y': {'title': {'display': True, 'text': 'Value'}},
        }
    else:
        scales = {}

    return {
        'type': kind.value,
        'data': {
            'labels': labels,
            'datasets': [
                {
                    'label': DATASET_LABEL,
                    'data': data,
                    'backgroundColor': list(BACKGROUND_COLORS),
                    'borderColor': BORDER_COLOR,
                    'borderWidth': 1,
                }
            ],
        },
        'options': {'responsive': True, 'scales': scales},
    }


_RGBA_PATTERN = re.compile(
    r"rgba\(\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*,\s*([\d.]+)\s*\)"
)


def css_to_rgba(color: str):
    """Convert a css 'rgba(r, g, b, a)' string to a matplotlib rgba tuple."""
    match = _RGBA_PATTERN.fullmatch(color.strip())
    if match is None:
        raise ValueError(f"Expected a css rgba() color, got {color!r}")
    r, g, b, a = (float(v) for v in match.groups())
    return (r / 255, g / 255, b / 255, a)


def _cycle_colors(colors, n):
    return [colors[i % len(colors)] for i in range(n)]


def _style(dataset):
    background = [css_to_rgba(c) for c in dataset['backgroundColor']]
    border = css_to_rgba(dataset['borderColor'])
    return background, border, dataset['borderWidth']


def _set_category_ticks(ax, positions, labels, max_ticks=20):
    step = max(1, int(np.ceil(len(labels) / max_ticks)))
    ax.set_xticks(positions[::step])
    ax.set_xticklabels(labels[::step], rotation=45, ha='right', fontsize=8)


def _draw_cartesian(fig, kind, config):
    ax = fig.add_subplot(111)
    dataset = config['data']['datasets'][0]
    labels = config['data']['labels']
    background, border, border_width = _style(dataset)

    if kind.uses_point_pairs:
        xs = [d['x'] for d in dataset['data']]
        ys = [d['y'] for d in dataset['data']]
        size = 80 if kind == ChartKind.BUBBLE else 20
        ax.scatter(
            xs,
            ys,
            s=size,
            color=background[0],
            edgecolors=[border],
            linewidths=border_width,
            label=dataset['label'],
        )
    else:
        positions = np.arange(len(labels))
        values = np.asarray(dataset['data'], dtype=float)
        if kind == ChartKind.BAR:
            ax.bar(
                positions,
                values,
                color=_cycle_colors(background, len(values)),
                edgecolor=border,
                linewidth=border_width,
                label=dataset['label'],
            )
        else:
            ax.plot(
                positions,
                values,
                color=border,
                linewidth=border_width,
                marker='o',
                markersize=3,
                markerfacecolor=background[0],
                label=dataset['label'],
            )
        if len(labels):
            _set_category_ticks(ax, positions, labels)

    scales = config['options']['scales']
    if scales:
        ax.set_xlabel(scales['x']['title']['text'])
        ax.set_ylabel(scales['y']['title']['text'])
    ax.grid(axis="y", linestyle=":", alpha=0.3)
    ax.legend(loc='upper right')


def _draw_polar(fig, kind, config):
    ax = fig.add_subplot(111, projection='polar')
    dataset = config['data']['datasets'][0]
    labels = config['data']['labels']
    background, border, border_width = _style(dataset)
    values = np.asarray(dataset['data'], dtype=float)
    n = len(values)
    if n:
        angles = np.linspace(0, 2 * np.pi, n, endpoint=False)
        if kind == ChartKind.RADAR:
            closed_angles = np.append(angles, angles[:1])
            closed_values = np.append(values, values[:1])
            ax.plot(closed_angles, closed_values, color=border, linewidth=border_width)
            ax.fill(closed_angles, closed_values, color=background[0])
        else:
            ax.bar(
                angles,
                values,
                width=2 * np.pi / n,
                bottom=0.0,
                align='edge',
                color=_cycle_colors(background, n),
                edgecolor=border,
                linewidth=border_width,
            )
        ax.set_xticks(angles)
        ax.set_xticklabels(labels, fontsize=8)
    ax.set_title(dataset['label'])


def _draw_circular(fig, kind, config):
    ax = fig.add_subplot(111)
    dataset = config['data']['datasets'][0]
    background, border, border_width = _style(dataset)
    # wedges are sized by magnitude, invalid values take no space
    values = np.nan_to_num(
        np.abs(np.asarray(dataset['data'], dtype=float)), nan=0.0, posinf=0.0, neginf=0.0
    )
    if values.sum() > 0:
        wedgeprops = {'edgecolor': border, 'linewidth': border_width}
        if kind == ChartKind.DOUGHNUT:
            wedgeprops['width'] = 0.5
        ax.pie(
            values,
            labels=config['data']['labels'],
            colors=_cycle_colors(background, len(values)),
            wedgeprops=wedgeprops,
            textprops={'fontsize': 8},
        )
    ax.set_aspect('equal')
    ax.set_title(dataset['label'])


_DRAWERS = {
    ChartKind.LINE: _draw_cartesian,
    ChartKind.BAR: _draw_cartesian,
    ChartKind.BUBBLE: _draw_cartesian,
    ChartKind.SCATTER: _draw_cartesian,
    ChartKind.RADAR: _draw_polar,
    ChartKind.POLAR_AREA: _draw_polar,
    ChartKind.PIE: _draw_circular,
    ChartKind.DOUGHNUT: _draw_circular,
}


def render_chart(
    points: Iterable[Any],
    chart_type: str = 'line',
    width: int = 800,
    height: int = 600,
    image_format: str = 'png',
    dpi: int | None = None,
) -> bytes:
    """Render a point series to an encoded image.

    Args:
        points: sequence of Point, (x, y) tuples, or {'x', 'y'} dicts
        chart_type: ChartKind or its tag
        width: image width in pixels
        height: image height in pixels
        image_format: any format matplotlib can write, 'png' by default
        dpi: dots per inch, CHARTSERIES_DPI env var or 100 if None

    Returns:
        bytes of the encoded image
    """
    kind = ChartKind.parse(chart_type)
    dpi = DEFAULT_DPI if dpi is None else dpi
    if dpi <= 0:
        raise ValueError(f"dpi must be positive, got {dpi}")
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "matplotlib is required for rendering charts. "
            "Install it with: pip install matplotlib"
        )
    config = build_chart_config(points, kind)

    fig = Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    _DRAWERS[kind](fig, kind, config)
    buffer = io.BytesIO()
    fig.savefig(buffer, format=image_format, dpi=dpi)
    return buffer.getvalue()


def save_chart(
    points: Iterable[Any],
    path,
    chart_type: str = 'line',
    width: int = 800,
    height: int = 600,
    image_format: str | None = None,
    dpi: int | None = None,
):
    """Render a chart and write it to path. Format defaults to the file extension, else png."""
    path = Path(path)
    if image_format is None:
        image_format = path.suffix.lstrip('.').lower() or 'png'
    image = render_chart(
        points,
        chart_type=chart_type,
        width=width,
        height=height,
        image_format=image_format,
        dpi=dpi,
    )
    path.write_bytes(image)
    logger.info(f"{ChartKind.parse(chart_type).value} chart saved to: {path}")
    return path


__all__ = [
    'ChartKind',
    'build_chart_config',
    'render_chart',
    'save_chart',
    'css_to_rgba',
    'DATASET_LABEL',
    'BACKGROUND_COLORS',
    'BORDER_COLOR',
    'DEFAULT_DPI',
    'HAS_MATPLOTLIB',
]
