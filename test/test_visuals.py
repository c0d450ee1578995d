import os
import matplotlib
matplotlib.use("Agg")
import numpy as np
from PIL import Image
from core.fft_engine import fft2d
from core.spectrum_view import SpectrumImage
from visuals.plots import save_spectrum_image, plot_magnitude_spectrum, plot_mask, compare_and_save


def test_plot_mask(tmp_path):
    p = os.path.join(str(tmp_path), "mask.png")
    assert plot_mask((32, 16), 4, out_path=p) == p
    img = np.asarray(Image.open(p))
    assert img.shape == (32, 16)
    assert img[16, 8] == 255
    assert img[0, 0] == 0

    arr = plot_mask((8, 8), 0)
    assert arr.sum() == 255


def test_plot_spectrum_and_compare(tmp_path):
    outdir = str(tmp_path / "spec")
    rng = np.random.default_rng(0)
    F = fft2d(rng.random(20 * 20) * 255, 20, 20)

    image = plot_magnitude_spectrum(F)
    assert isinstance(image, SpectrumImage)
    assert image.pixels[16, 16, 0] == 255

    p_spec = os.path.join(outdir, "spec.png")
    assert plot_magnitude_spectrum(F, out_path=p_spec) == p_spec
    assert Image.open(p_spec).size == (32, 32)

    p_raw = save_spectrum_image(image, os.path.join(outdir, "raw.png"))
    assert Image.open(p_raw).mode == "RGBA"

    orig = np.zeros((20, 20, 3), dtype=np.uint8)
    filtered = np.ones((20, 20, 3), dtype=np.uint8) * 10
    pm = os.path.join(outdir, "cmp.png")
    assert compare_and_save(orig, filtered, image, image, out_path=pm, cutoff=5) == pm
    assert os.path.exists(pm)
