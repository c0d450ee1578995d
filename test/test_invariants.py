import numpy as np
from core.fft_engine import fft2d, fft_shift, ifft2d, crop
from core.filters import apply_lowpass_filter


def _hermitian_pair(F):
    M, N = F.shape
    i_idx = (-np.arange(M)) % M
    j_idx = (-np.arange(N)) % N
    return np.conj(F[i_idx[:, None], j_idx[None, :]])


def test_fft_hermitian_symmetry():
    rng = np.random.default_rng(0)
    F = fft2d(rng.random(30 * 20), 30, 20)
    assert np.allclose(F, _hermitian_pair(F), atol=1e-8)


def test_lowpass_preserves_hermitian_symmetry():
    # the wrapped mask is symmetric under k -> -k, so the result stays real
    rng = np.random.default_rng(1)
    w, h = 24, 16
    F = fft2d(rng.random(w * h) * 255, w, h)
    for cutoff in (0, 1, 5.5, 11, 40):
        G = apply_lowpass_filter(F, cutoff)
        assert np.allclose(G, _hermitian_pair(G), atol=1e-8)
        back = crop(ifft2d(G), w, h)
        assert np.max(np.abs(back.imag)) < 1e-9


def test_lowpass_energy_is_monotonic_in_cutoff():
    rng = np.random.default_rng(2)
    F = fft2d(rng.random(32 * 32), 32, 32)
    energies = [np.sum(np.abs(apply_lowpass_filter(F, c)) ** 2) for c in (0, 2, 4, 8, 16, 32)]
    assert all(a <= b for a, b in zip(energies, energies[1:]))


def test_shift_moves_dc_to_center():
    F = fft2d(np.full(64, 3.0), 8, 8)
    Fs = fft_shift(F)
    assert np.isclose(Fs[4, 4], 192.0)
