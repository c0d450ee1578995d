import numpy as np
from core.fft_engine import fft2d, fft_shift
from core.spectrum_view import magnitude_spectrum, visualize_spectrum


def test_magnitude_spectrum_basic():
    rng = np.random.default_rng(0)
    F = fft2d(rng.random(32 * 32), 32, 32)
    mag = magnitude_spectrum(F)
    assert mag.shape == (32, 32)
    assert np.all(mag >= 0)


def test_visualization_range_and_alpha():
    rng = np.random.default_rng(1)
    F = fft2d(rng.random(30 * 20) * 255, 30, 20)
    img = visualize_spectrum(fft_shift(F))
    assert img.pixels.dtype == np.uint8
    assert (img.width, img.height) == (32, 32)
    assert img.pixels.shape == (32, 32, 4)
    assert np.all(img.pixels[..., 3] == 255)
    assert np.array_equal(img.pixels[..., 0], img.pixels[..., 1])
    assert np.array_equal(img.pixels[..., 0], img.pixels[..., 2])
    # brightest cell is DC, at the center after the shift
    assert img.pixels[16, 16, 0] == 255
    assert len(img.tobytes()) == 32 * 32 * 4


def test_visualization_formula():
    F = np.zeros((2, 2), dtype=complex)
    F[0, 0] = np.e - 1  # log1p -> 1
    F[0, 1] = np.sqrt(np.e) - 1  # log1p -> 0.5
    img = visualize_spectrum(F)
    assert img.pixels[0, 0, 0] == 255
    assert img.pixels[0, 1, 0] == 127
    assert img.pixels[1, 1, 0] == 0


def test_all_zero_channel_gives_zero_buffer():
    F = fft2d(np.zeros(10 * 10), 10, 10)
    img = visualize_spectrum(fft_shift(F))
    assert (img.width, img.height) == (16, 16)
    assert not np.any(img.pixels)


def test_brightest_cell_is_always_255():
    rng = np.random.default_rng(11)
    for _ in range(2000):
        peak = rng.uniform(0.0, 1e6)
        if peak == 0.0:
            continue
        F = np.zeros((4, 4), dtype=complex)
        F[rng.integers(4), rng.integers(4)] = peak
        img = visualize_spectrum(F)
        assert img.pixels[..., 0].max() == 255, peak
