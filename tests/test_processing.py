import numpy as np
import pytest

from image_convolution.filters import (
    ALL,
    DIAGONAL_NEGATIVE,
    DIAGONAL_POSITIVE,
    HORIZONTAL,
    NONE,
    VERTICAL,
    concrete_filters,
)
from image_convolution.processing import apply_convolution, normalize, raster_sum_count
from image_convolution.raster import RasterImage


def reference_convolution(samples, weights):
    """1ピクセルずつ計算する参照実装"""
    width, height = samples.shape
    out = np.zeros((width, height), dtype=np.float32)
    for x in range(width):
        for y in range(height):
            s = np.float32(0)
            c = 0
            for dy in range(3):
                if y + dy >= height:
                    continue
                for dx in range(3):
                    if x + dx >= width:
                        continue
                    s += np.float32(samples[x + dx, y + dy]) * np.float32(weights[dx, dy])
                    c += 1
            out[x, y] = s / np.float32(c)
    return out


class TestApplyConvolution:
    def test_none_and_all_return_input_unchanged(self):
        raster = RasterImage.from_rows([[0.1, 0.2], [0.3, 0.4]])
        assert apply_convolution(raster, NONE) is raster
        assert apply_convolution(raster, ALL) is raster

    def test_output_has_input_dimensions(self):
        raster = RasterImage(np.random.default_rng(0).random((7, 4)))
        for f in concrete_filters():
            out = apply_convolution(raster, f)
            assert (out.width, out.height) == (7, 4)

    def test_single_pixel_uses_kernel_origin(self):
        raster = RasterImage.from_rows([[0.8]])
        assert apply_convolution(raster, HORIZONTAL).samples[0, 0] == 0.0
        assert apply_convolution(raster, DIAGONAL_NEGATIVE).samples[0, 0] == pytest.approx(0.8)
        assert apply_convolution(raster, VERTICAL).samples[0, 0] == 0.0
        assert apply_convolution(raster, DIAGONAL_POSITIVE).samples[0, 0] == 0.0

    def test_uniform_gray_with_horizontal(self):
        raster = RasterImage(np.full((4, 4), 0.5))
        out = apply_convolution(raster, HORIZONTAL).samples
        # 9項のうち水平の行の3項が0.5
        assert out[0, 0] == pytest.approx(1.5 / 9)
        assert out[1, 1] == pytest.approx(1.5 / 9)
        # x = 3では dx = 0 の列の3項だけが画像に収まり、そのうち1項が0.5
        assert out[3, 0] == pytest.approx(0.5 / 3)
        # x, y = 2では 2x2 の4項が収まり、そのうち y + 1 の2項が0.5
        assert out[2, 2] == pytest.approx(1.0 / 4)
        # y = 3では dy = 0 の行だけが収まり、重みはすべて0
        assert out[0, 3] == 0.0
        assert out[3, 3] == 0.0

    def test_window_extends_forward_only(self):
        rows = np.zeros((5, 5))
        rows[0, 0] = 1.0
        raster = RasterImage.from_rows(rows)
        out = apply_convolution(raster, DIAGONAL_NEGATIVE).samples
        # (0, 0)の画素はウィンドウの原点でしか参照されない
        assert out[0, 0] == pytest.approx(1 / 9)
        assert np.count_nonzero(out) == 1

    def test_matches_pixel_by_pixel_reference(self):
        samples = np.random.default_rng(1).random((6, 5)).astype(np.float32)
        raster = RasterImage(samples)
        for f in concrete_filters():
            expected = reference_convolution(samples, f.weights)
            np.testing.assert_array_equal(apply_convolution(raster, f).samples, expected)

    def test_does_not_normalize(self):
        raster = RasterImage(np.full((3, 3), 0.9))
        out = apply_convolution(raster, VERTICAL)
        assert out.max() < 0.9

    def test_input_is_not_modified(self):
        raster = RasterImage(np.random.default_rng(2).random((4, 3)))
        before = raster.samples.copy()
        apply_convolution(raster, DIAGONAL_POSITIVE)
        np.testing.assert_array_equal(raster.samples, before)

    def test_empty_raster(self):
        out = apply_convolution(RasterImage.zeros(0, 0), HORIZONTAL)
        assert (out.width, out.height) == (0, 0)


class TestRasterSumCount:
    def test_counts_shrink_towards_right_and_bottom(self):
        sums, counts = raster_sum_count(
            np.ones((4, 3), dtype=np.float32), np.ones((3, 3), dtype=np.float32)
        )
        np.testing.assert_array_equal(
            counts,
            [[9, 6, 3], [9, 6, 3], [6, 4, 2], [3, 2, 1]],
        )
        np.testing.assert_array_equal(sums, counts)


class TestNormalize:
    def test_maps_min_to_zero_and_max_to_one(self):
        raster = RasterImage.from_rows([[-2.0, 0.0], [1.0, 6.0]])
        out = normalize(raster)
        assert out.min() == 0.0
        assert out.max() == 1.0
        assert out.samples[0, 1] == pytest.approx(3 / 8)

    def test_random_raster_bounds_are_exact(self):
        raster = RasterImage(np.random.default_rng(3).normal(size=(9, 7)))
        out = normalize(raster)
        assert out.min() == 0.0
        assert out.max() == 1.0

    @pytest.mark.parametrize("value", [0.0, 0.5, 1.0, -3.0])
    def test_uniform_raster_becomes_zero(self, value):
        out = normalize(RasterImage(np.full((3, 2), value)))
        assert not np.isnan(out.samples).any()
        np.testing.assert_array_equal(out.samples, np.zeros((3, 2)))

    def test_single_pixel_becomes_zero(self):
        assert normalize(RasterImage.from_rows([[0.7]])).samples[0, 0] == 0.0

    def test_empty_raster(self):
        out = normalize(RasterImage.zeros(0, 3))
        assert (out.width, out.height) == (0, 3)

    def test_returns_new_raster(self):
        raster = RasterImage.from_rows([[0.0, 1.0]])
        out = normalize(raster)
        assert out is not raster
        assert out == raster
