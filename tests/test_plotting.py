# -*- coding: utf-8 -*-
"""
Tests for chart configuration and rendering.
"""
import os
import struct
import tempfile
import unittest

from chartseries.datasets import Point, generate_random_data_points
from chartseries.tools.plotting import (
    BACKGROUND_COLORS,
    BORDER_COLOR,
    ChartKind,
    HAS_MATPLOTLIB,
    build_chart_config,
    css_to_rgba,
    render_chart,
    save_chart,
)

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'


def png_size(image):
    """Width and height from the IHDR chunk of a PNG."""
    return struct.unpack('>II', image[16:24])


class TestChartKind(unittest.TestCase):

    def test_parse(self):
        self.assertEqual(ChartKind.parse('polarArea'), ChartKind.POLAR_AREA)
        self.assertEqual(ChartKind.parse(ChartKind.PIE), ChartKind.PIE)
        self.assertEqual(
            ChartKind.tags(),
            ['line', 'bar', 'radar', 'doughnut', 'pie', 'polarArea', 'bubble', 'scatter'],
        )

    def test_parse_unsupported(self):
        with self.assertRaises(ValueError) as context:
            ChartKind.parse('area')
        message = str(context.exception)
        self.assertIn('area', message)
        for tag in ChartKind.tags():
            self.assertIn(tag, message)

    def test_point_pairs(self):
        pair_kinds = {kind for kind in ChartKind if kind.uses_point_pairs}
        self.assertEqual(pair_kinds, {ChartKind.BUBBLE, ChartKind.SCATTER})


class TestBuildChartConfig(unittest.TestCase):

    points = [Point(1.0, 10.0), Point(2.0, 20.0), Point(3.0, 30.0)]

    def test_projected_kinds(self):
        config = build_chart_config(self.points, 'line')
        self.assertEqual(config['type'], 'line')
        self.assertEqual(config['data']['labels'], ['Point 1', 'Point 2', 'Point 3'])
        dataset = config['data']['datasets'][0]
        self.assertEqual(dataset['label'], 'Random Data')
        self.assertEqual(dataset['data'], [10.0, 20.0, 30.0])
        self.assertEqual(dataset['backgroundColor'], BACKGROUND_COLORS)
        self.assertEqual(dataset['borderColor'], BORDER_COLOR)
        self.assertEqual(dataset['borderWidth'], 1)
        self.assertTrue(config['options']['responsive'])
        self.assertEqual(config['options']['scales']['x']['title']['text'], 'Data Points')
        self.assertEqual(config['options']['scales']['y']['title']['text'], 'Value')

    def test_pair_kinds(self):
        config = build_chart_config(self.points, 'scatter')
        self.assertEqual(
            config['data']['datasets'][0]['data'],
            [{'x': 1.0, 'y': 10.0}, {'x': 2.0, 'y': 20.0}, {'x': 3.0, 'y': 30.0}],
        )
        self.assertEqual(config['options']['scales'], {})

    def test_scales_only_for_line_and_bar(self):
        for kind in ChartKind:
            scales = build_chart_config(self.points, kind)['options']['scales']
            self.assertEqual(bool(scales), kind in (ChartKind.LINE, ChartKind.BAR), kind)

    def test_point_formats(self):
        config = build_chart_config([(0, 1), {'x': 2, 'y': 3}], 'bubble')
        self.assertEqual(config['data']['datasets'][0]['data'], [{'x': 0, 'y': 1}, {'x': 2, 'y': 3}])

    def test_empty(self):
        config = build_chart_config([], 'pie')
        self.assertEqual(config['data']['labels'], [])
        self.assertEqual(config['data']['datasets'][0]['data'], [])

    def test_unsupported(self):
        with self.assertRaises(ValueError):
            build_chart_config(self.points, 'histogram')

    def test_render_rejects_non_positive_dpi(self):
        for dpi in (0, -10):
            with self.assertRaises(ValueError):
                render_chart(self.points, chart_type='line', dpi=dpi)

    def test_css_to_rgba(self):
        self.assertEqual(css_to_rgba('rgba(255, 0, 51, 0.2)'), (1.0, 0.0, 0.2, 0.2))
        with self.assertRaises(ValueError):
            css_to_rgba('#FF00FF')


class TestRenderChart(unittest.TestCase):

    def setUp(self):
        if not HAS_MATPLOTLIB:
            self.skipTest("matplotlib not available")
        self.points = generate_random_data_points(
            count=15, options={'noise_amplitude': 10.0}, random_seed=3
        )

    def test_render_all_kinds(self):
        for kind in ChartKind:
            image = render_chart(self.points, chart_type=kind.value, width=400, height=300)
            self.assertTrue(image.startswith(PNG_SIGNATURE), f"{kind} should render png")
            self.assertEqual(png_size(image), (400, 300), f"{kind} size mismatch")

    def test_render_default_size(self):
        image = render_chart(self.points)
        self.assertEqual(png_size(image), (800, 600))

    def test_render_empty(self):
        for chart_type in ('line', 'pie', 'radar', 'scatter'):
            image = render_chart([], chart_type=chart_type, width=200, height=200)
            self.assertTrue(image.startswith(PNG_SIGNATURE), chart_type)

    def test_render_unsupported(self):
        with self.assertRaises(ValueError):
            render_chart(self.points, chart_type='area')

    def test_save_chart(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'chart.png')
            saved = save_chart(self.points, path, chart_type='bar', width=320, height=240)
            self.assertTrue(os.path.exists(saved))
            with open(saved, 'rb') as f:
                self.assertEqual(png_size(f.read()), (320, 240))


if __name__ == '__main__':
    unittest.main()
