# test/test_color_processing.py
import threading
import warnings
import numpy as np
import pytest
from core.color_processing import (
    luminance, validate_channels, process_channel, process_color_channels,
    process_color_rgb, process_grayscale, interleave_rgba, spectrum_pair,
    _reconstruct,
)
from core.errors import DimensionMismatchError, PipelineCancelledError


def _checkerboard(h=24, w=40):
    img = np.zeros((h, w, 3), dtype=np.uint8)
    img[::2, ::2] = 255
    img[1::2, 1::2] = 255
    return img


def test_luminance_weights():
    lum = luminance([255, 0, 0], [0, 255, 0], [0, 0, 255])
    assert np.allclose(lum, [0.299 * 255, 0.587 * 255, 0.114 * 255])


def test_validate_channels_rejects_bad_lengths():
    with pytest.raises(DimensionMismatchError):
        validate_channels([np.zeros(12), np.zeros(11)], width=4, height=3)
    with pytest.raises(DimensionMismatchError):
        validate_channels([np.zeros(0)], width=0, height=3)


def test_constant_channel_survives_dc_only_filter():
    out = process_channel(np.full(16, 128.0), 4, 4, cutoff=0)
    assert out.shape == (16,)
    assert np.allclose(out, 128.0, atol=1e-9)


def test_process_channel_intermediates():
    rng = np.random.default_rng(0)
    img = rng.random(10 * 6) * 255
    out, inter = process_channel(img, 10, 6, cutoff=2, return_intermediates=True)
    assert set(inter) == {"F", "G", "spatial"}
    assert inter["F"].shape == (8, 16)
    # unfiltered spectrum is kept intact when reported
    assert np.count_nonzero(inter["G"]) < np.count_nonzero(inter["F"])
    assert out.min() >= 0 and out.max() <= 255


def test_full_cutoff_reconstructs_input():
    img = _checkerboard()
    result = process_color_rgb(img, cutoff=1000)
    assert result.filtered_image.shape == (24, 40, 4)
    assert np.array_equal(result.filtered_image[..., :3], img)
    assert np.all(result.filtered_image[..., 3] == 255)


def test_output_is_cropped_but_spectra_are_padded():
    img = _checkerboard(h=24, w=40)
    result = process_color_rgb(img, cutoff=5)
    assert (result.width, result.height) == (40, 24)
    assert all(ch.shape == (40 * 24,) for ch in result.filtered_channels)
    assert (result.original_spectrum.width, result.original_spectrum.height) == (64, 32)
    assert (result.filtered_spectrum.width, result.filtered_spectrum.height) == (64, 32)


def test_low_pass_smooths_checkerboard():
    img = _checkerboard(h=32, w=32)
    result = process_color_rgb(img, cutoff=4)
    out = result.filtered_image[..., 0].astype(float)
    # the alternating pattern lives at the highest frequency and is removed
    assert out.std() < img[..., 0].std() / 4


def test_filtered_spectrum_is_darker_outside_cutoff():
    rng = np.random.default_rng(1)
    img = (rng.random((32, 32, 3)) * 255).astype(np.uint8)
    result = process_color_rgb(img, cutoff=3)
    before = result.original_spectrum.pixels[..., 0]
    after = result.filtered_spectrum.pixels[..., 0]
    # corner of the shifted spectrum is the highest frequency
    assert before[0, 0] > 0
    assert after[0, 0] == 0
    assert after[16, 16] == 255


def test_color_pipeline_channel_independence():
    img = np.zeros((16, 16, 3), dtype=np.uint8)
    img[..., 0] = 200
    result = process_color_rgb(img, cutoff=5)
    assert np.all(result.filtered_image[..., 0] == 200)
    assert result.filtered_image[..., 1].max() == 0
    assert result.filtered_image[..., 2].max() == 0


def test_black_image_gives_zero_spectra():
    img = np.zeros((8, 8, 3), dtype=np.uint8)
    result = process_color_rgb(img, cutoff=2)
    assert not np.any(result.original_spectrum.pixels)
    assert not np.any(result.filtered_spectrum.pixels)
    assert not np.any(result.filtered_image[..., :3])


def test_parallel_matches_sequential():
    rng = np.random.default_rng(2)
    img = (rng.random((20, 30, 3)) * 255).astype(np.uint8)
    seq = process_color_rgb(img, cutoff=6)
    par = process_color_rgb(img, cutoff=6, parallel=True)
    assert np.array_equal(seq.filtered_image, par.filtered_image)
    assert np.array_equal(seq.original_spectrum.pixels, par.original_spectrum.pixels)
    assert np.array_equal(seq.filtered_spectrum.pixels, par.filtered_spectrum.pixels)


@pytest.mark.parametrize("parallel", [False, True])
def test_cancelled_request_raises(parallel):
    event = threading.Event()
    event.set()
    with pytest.raises(PipelineCancelledError):
        process_color_rgb(_checkerboard(), cutoff=5, parallel=parallel, cancel_event=event)


def test_negative_cutoff_rejected():
    with pytest.raises(ValueError):
        process_color_rgb(_checkerboard(), cutoff=-1)


def test_channel_count_and_shape_validation():
    with pytest.raises(DimensionMismatchError):
        process_color_channels([np.zeros(16)] * 2, 4, 4, cutoff=1)
    with pytest.raises(DimensionMismatchError):
        process_color_channels([np.zeros(16), np.zeros(16), np.zeros(15)], 4, 4, cutoff=1)
    with pytest.raises(ValueError):
        process_color_rgb(np.zeros((4, 4)), cutoff=1)


def test_intermediates_per_channel():
    result = process_color_rgb(_checkerboard(8, 8), cutoff=2, return_intermediates=True)
    assert set(result.intermediates) == {"R", "G", "B"}
    assert result.intermediates["R"]["spatial"].shape == (8, 8)


def test_grayscale_pipeline():
    img = np.full((12, 20), 90, dtype=np.uint8)
    result = process_grayscale(img, cutoff=0)
    assert result.filtered_image.shape == (12, 20, 4)
    # DC-only output is the mean over the zero-padded 16x32 grid
    expected = round(90 * 12 * 20 / (16 * 32))
    assert np.all(result.filtered_image[..., 0] == expected)
    assert np.array_equal(result.filtered_image[..., 0], result.filtered_image[..., 1])
    assert (result.original_spectrum.width, result.original_spectrum.height) == (32, 16)


def test_spectrum_pair_dimensions():
    before, after = spectrum_pair(np.full(9, 50.0), 3, 3, cutoff=0)
    assert (before.width, before.height) == (4, 4)
    assert after.pixels[2, 2, 0] == 255
    assert after.pixels[0, 0, 0] == 0


def test_interleave_rgba_rounds_and_repeats_gray():
    out = interleave_rgba([np.array([0.4, 127.6, 254.5, 255.0])], width=2, height=2)
    assert out.shape == (2, 2, 4)
    assert out[..., 0].ravel().tolist() == [0, 128, 254, 255]
    assert np.all(out[..., 3] == 255)


def test_imaginary_residual_warning_is_optional():
    rng = np.random.default_rng(3)
    img = rng.random(16) * 255
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        process_channel(img, 4, 4, cutoff=1, suppress_warning=False)


def test_imaginary_residual_warning_fires():
    # constant imaginary offset: no real image transforms to this
    spatial = np.full((4, 4), 10.0 + 1.0j)
    with pytest.warns(RuntimeWarning, match="imaginary component"):
        out = _reconstruct(spatial, 4, 4, imag_tol=1e-6, suppress_warning=False)
    assert np.allclose(out, 10.0)


def test_imaginary_residual_warning_respects_suppression():
    spatial = np.full((4, 4), 10.0 + 1.0j)
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        out = _reconstruct(spatial, 4, 4, imag_tol=1e-6, suppress_warning=True)
    assert out.shape == (16,)
