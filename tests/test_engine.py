"""Tests for the pixel grid and the image transforms."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from pixel_studio.color_utils import (
    GREYSCALE,
    SEPIA,
    ColorMatrix,
    apply_color_matrix,
    greyscale,
    round_half_away,
    sepia,
)
from pixel_studio.dithering import dither, quantize
from pixel_studio.errors import InvalidArgument
from pixel_studio.filters import BLUR, SHARPEN, Kernel, apply_filter, blur, sharpen
from pixel_studio.grid import PixelGrid
from pixel_studio.mosaic import Seed, mosaic, nearest_seed_index, sample_seeds

# -- Fixtures ----------------------------------------------------------

W, H = 10, 6  # non-square to catch swapped axes
N = W * H


@pytest.fixture
def pixels() -> np.ndarray:
    rng = np.random.default_rng(456)
    return rng.integers(0, 256, size=(H, W, 3), dtype=np.uint8)


@pytest.fixture
def grid(pixels: np.ndarray) -> PixelGrid:
    return PixelGrid(pixels)


def uniform(height: int, width: int, value: int) -> PixelGrid:
    return PixelGrid.filled(height, width, (value, value, value))


TRANSFORMS = [blur, sharpen, greyscale, sepia, dither]


# -- PixelGrid ---------------------------------------------------------

class TestPixelGrid:
    def test_dimensions(self, grid: PixelGrid) -> None:
        assert grid.height == H
        assert grid.width == W
        assert grid.shape == (H, W)
        assert grid.pixel_count == N

    def test_pixel_lookup(self, grid: PixelGrid, pixels: np.ndarray) -> None:
        assert grid.pixel(2, 7) == tuple(int(v) for v in pixels[2, 7])

    def test_pixel_out_of_bounds(self, grid: PixelGrid) -> None:
        with pytest.raises(IndexError):
            grid.pixel(H, 0)
        with pytest.raises(IndexError):
            grid.pixel(0, -1)

    def test_from_nested_lists(self) -> None:
        g = PixelGrid([[[1, 2, 3], [4, 5, 6]]])
        assert g.shape == (1, 2)
        assert g.pixel(0, 1) == (4, 5, 6)

    def test_to_array_is_independent_copy(self, grid: PixelGrid) -> None:
        before = grid.pixel(0, 0)
        arr = grid.to_array()
        arr[0, 0] = (0, 0, 0) if before != (0, 0, 0) else (9, 9, 9)
        assert grid.pixel(0, 0) == before

    def test_source_array_not_shared(self, pixels: np.ndarray) -> None:
        g = PixelGrid(pixels)
        before = g.pixel(0, 0)
        pixels[0, 0] = (0, 0, 0) if before != (0, 0, 0) else (9, 9, 9)
        assert g.pixel(0, 0) == before

    def test_to_list_is_independent_copy(self, grid: PixelGrid) -> None:
        before = grid.pixel(0, 0)
        rows = grid.to_list()
        rows[0][0] = [0, 0, 0] if before != (0, 0, 0) else [9, 9, 9]
        assert grid.pixel(0, 0) == before
        assert PixelGrid(grid.to_list()) == grid

    def test_rejects_ragged(self) -> None:
        with pytest.raises(InvalidArgument):
            PixelGrid([[[1, 2, 3]], [[1, 2, 3], [4, 5, 6]]])

    def test_rejects_wrong_channel_count(self) -> None:
        with pytest.raises(InvalidArgument):
            PixelGrid([[[1, 2]]])

    def test_rejects_empty(self) -> None:
        with pytest.raises(InvalidArgument):
            PixelGrid([])

    @pytest.mark.parametrize("value", [-1, 256])
    def test_rejects_out_of_range(self, value: int) -> None:
        with pytest.raises(InvalidArgument):
            PixelGrid([[[0, value, 0]]])

    def test_rejects_fractional_channels(self) -> None:
        with pytest.raises(InvalidArgument):
            PixelGrid([[[0.5, 0, 0]]])

    def test_value_equality(self, pixels: np.ndarray) -> None:
        a, b = PixelGrid(pixels), PixelGrid(pixels.copy())
        assert a == b
        assert hash(a) == hash(b)
        assert a != uniform(H, W, 0)

    def test_image_roundtrip(self, grid: PixelGrid) -> None:
        img = grid.to_image()
        assert img.size == (W, H)
        assert img.mode == "RGB"
        assert PixelGrid.from_image(img) == grid


# -- Shared transform properties ---------------------------------------

class TestTransformProperties:
    @pytest.mark.parametrize("transform", TRANSFORMS)
    def test_dimensions_preserved(self, transform, grid: PixelGrid) -> None:
        assert transform(grid).shape == grid.shape

    @pytest.mark.parametrize("transform", TRANSFORMS)
    def test_input_untouched(self, transform, grid: PixelGrid) -> None:
        before = grid.to_array()
        transform(grid)
        np.testing.assert_array_equal(grid.to_array(), before)

    @pytest.mark.parametrize("transform", TRANSFORMS)
    def test_channels_in_range(self, transform, grid: PixelGrid) -> None:
        out = transform(grid).to_array().astype(int)
        assert out.min() >= 0
        assert out.max() <= 255


# -- Convolution -------------------------------------------------------

class TestKernel:
    def test_even_side_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            Kernel([[0.25, 0.25], [0.25, 0.25]])

    def test_non_square_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            Kernel([[1, 0, 0], [0, 1, 0]])

    def test_ragged_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            Kernel([[1, 0, 0], [0, 1], [0, 0, 1]])

    def test_empty_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            Kernel([])

    def test_presets(self) -> None:
        assert BLUR.size == 3
        assert SHARPEN.size == 5
        assert BLUR.weights.sum() == pytest.approx(1.0)
        assert SHARPEN.weights[2, 2] == 1.0
        assert SHARPEN.weights[0, 0] == -0.125

    def test_weights_are_a_copy(self) -> None:
        w = BLUR.weights
        w[1, 1] = 100.0
        assert BLUR.weights[1, 1] == 0.25


class TestFilters:
    def test_blur_single_pixel_uses_centre_tap(self) -> None:
        out = blur(PixelGrid([[[7, 2, 255]]]))
        # 1.75 -> 2, 0.5 -> 1 (half away from zero), 63.75 -> 64
        assert out.pixel(0, 0) == (2, 1, 64)

    def test_blur_omits_out_of_grid_taps(self) -> None:
        out = blur(uniform(3, 3, 160))
        assert out.pixel(1, 1) == (160, 160, 160)
        assert out.pixel(0, 0) == (90, 90, 90)  # 9/16 of the weight in range
        assert out.pixel(0, 1) == (120, 120, 120)  # 12/16

    def test_sharpen_uniform(self) -> None:
        out = sharpen(uniform(5, 5, 8))
        assert out.pixel(2, 2) == (8, 8, 8)  # weights sum to 1
        assert out.pixel(0, 0) == (9, 9, 9)  # in-range weights sum to 1.125

    def test_identity_kernel(self, grid: PixelGrid) -> None:
        assert apply_filter(grid, Kernel([[1.0]])) == grid

    def test_negative_results_clamped(self, grid: PixelGrid) -> None:
        out = apply_filter(grid, Kernel([[-1.0]]))
        assert out == uniform(H, W, 0)

    def test_large_results_clamped(self) -> None:
        out = apply_filter(uniform(2, 2, 200), Kernel([[2.0]]))
        assert out == uniform(2, 2, 255)

    def test_channels_independent(self) -> None:
        g = PixelGrid([[[255, 0, 0], [0, 255, 0], [0, 0, 255]]])
        out = blur(g)
        assert out.pixel(0, 0) == (64, 32, 0)


# -- Colour matrices ---------------------------------------------------

class TestColorMatrix:
    def test_2x2_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            ColorMatrix([[1, 0], [0, 1]])

    def test_3x4_rejected(self) -> None:
        with pytest.raises(InvalidArgument):
            ColorMatrix([[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0]])

    def test_greyscale_red(self) -> None:
        out = greyscale(PixelGrid([[[255, 0, 0]]]))
        assert out.pixel(0, 0) == (54, 54, 54)

    def test_greyscale_channels_equal(self, grid: PixelGrid) -> None:
        out = greyscale(grid).to_array()
        np.testing.assert_array_equal(out[..., 0], out[..., 1])
        np.testing.assert_array_equal(out[..., 1], out[..., 2])

    def test_sepia_white(self) -> None:
        out = sepia(uniform(1, 1, 255))
        assert out.pixel(0, 0) == (255, 255, 239)

    def test_identity(self, grid: PixelGrid) -> None:
        assert apply_color_matrix(grid, ColorMatrix(np.eye(3))) == grid

    def test_channel_swap(self) -> None:
        swap = ColorMatrix([[0, 0, 1], [0, 1, 0], [1, 0, 0]])
        out = apply_color_matrix(PixelGrid([[[10, 20, 30]]]), swap)
        assert out.pixel(0, 0) == (30, 20, 10)

    def test_presets_are_immutable(self) -> None:
        w = SEPIA.weights
        w[:] = 0
        assert SEPIA.weights[0, 0] == 0.393
        assert GREYSCALE.weights[2].tolist() == [0.2126, 0.7152, 0.0722]

    def test_round_half_away(self) -> None:
        values = np.array([0.5, 1.5, 2.5, -0.5, -1.5, 2.4])
        np.testing.assert_array_equal(
            round_half_away(values), [1, 2, 3, -1, -2, 2],
        )


# -- Dithering ---------------------------------------------------------

class TestDithering:
    def test_only_black_and_white(self, grid: PixelGrid) -> None:
        values = set(np.unique(dither(grid).to_array()).tolist())
        assert values <= {0, 255}

    def test_quantize_ties_go_to_black(self) -> None:
        np.testing.assert_array_equal(
            quantize(np.array([127, 128, -40, 300])), [0, 255, 0, 255],
        )

    def test_error_carries_right(self) -> None:
        # 100 -> 0 leaves error 100; 7/16 of it lifts the neighbour to 144.
        out = dither(uniform(1, 2, 100))
        assert out.pixel(0, 0) == (0, 0, 0)
        assert out.pixel(0, 1) == (255, 255, 255)

    def test_mid_grey_2x2(self) -> None:
        out = dither(uniform(2, 2, 128)).to_array()[..., 0]
        np.testing.assert_array_equal(out, [[255, 0], [0, 255]])

    def test_extremes_unchanged(self) -> None:
        assert dither(uniform(3, 4, 0)) == uniform(3, 4, 0)
        assert dither(uniform(3, 4, 255)) == uniform(3, 4, 255)

    def test_channels_identical(self, grid: PixelGrid) -> None:
        out = dither(grid).to_array()
        np.testing.assert_array_equal(out[..., 0], out[..., 2])

    def test_deterministic(self, grid: PixelGrid) -> None:
        assert dither(grid) == dither(grid)


# -- Mosaic ------------------------------------------------------------

class TestMosaic:
    def test_negative_seed_count(self, grid: PixelGrid) -> None:
        with pytest.raises(InvalidArgument):
            mosaic(grid, -1)

    def test_every_pixel_a_seed(self, grid: PixelGrid) -> None:
        assert mosaic(grid, N, rng=1) == grid

    def test_seed_count_clamped(self, grid: PixelGrid) -> None:
        assert mosaic(grid, N * 10, rng=1) == grid

    def test_zero_seeds_returns_input(self, grid: PixelGrid) -> None:
        assert mosaic(grid, 0) == grid

    def test_single_seed_floods_grid(self, grid: PixelGrid) -> None:
        out = mosaic(grid, 1, rng=3)
        colors = np.unique(out.to_array().reshape(-1, 3), axis=0)
        assert len(colors) == 1

    def test_colors_come_from_input(self, grid: PixelGrid) -> None:
        out = mosaic(grid, 7, rng=5)
        source = {tuple(c) for c in grid.to_array().reshape(-1, 3)}
        result = {tuple(c) for c in out.to_array().reshape(-1, 3)}
        assert result <= source
        assert len(result) <= 7

    def test_seeds_keep_their_colour(self, grid: PixelGrid) -> None:
        seeds = sample_seeds(grid, 12, rng=9)
        out = mosaic(grid, 12, rng=9)
        for s in seeds:
            assert out.pixel(s.row, s.col) == s.color == grid.pixel(s.row, s.col)

    def test_reproducible(self, grid: PixelGrid) -> None:
        assert mosaic(grid, 10, rng=42) == mosaic(grid, 10, rng=42)

    def test_accepts_generator(self, grid: PixelGrid) -> None:
        out = mosaic(grid, 10, rng=np.random.default_rng(0))
        assert out.shape == grid.shape

    def test_sampled_positions_distinct(self, grid: PixelGrid) -> None:
        seeds = sample_seeds(grid, N, rng=2)
        assert len(seeds) == N
        assert len({(s.row, s.col) for s in seeds}) == N

    def test_tie_goes_to_earliest_seed(self) -> None:
        left = Seed(0, 0, (255, 0, 0))
        right = Seed(0, 2, (0, 0, 255))
        assert nearest_seed_index(1, 3, [left, right]).tolist() == [0, 0, 1]
        assert nearest_seed_index(1, 3, [right, left]).tolist() == [1, 0, 0]

    def test_chunking_matches_single_pass(self) -> None:
        seeds = [Seed(1, 1, (0, 0, 0)), Seed(4, 8, (0, 0, 0)), Seed(0, 9, (0, 0, 0))]
        np.testing.assert_array_equal(
            nearest_seed_index(H, W, seeds, chunk_size=7),
            nearest_seed_index(H, W, seeds, chunk_size=1024),
        )

    def test_logs_below_info(
        self, grid: PixelGrid, caplog: pytest.LogCaptureFixture,
    ) -> None:
        caplog.set_level(logging.INFO, logger="pixel_studio")
        mosaic(grid, 5, rng=1)
        assert caplog.records == []
