"""
A small demo script that runs the core pipeline on a sample image (if present,
otherwise on a generated night-sky image) and writes a few visualization
outputs into results/demo_plots/.
Run from project root:
python -m scripts.demo_plots
"""

import os
from core.color_processing import process_color_rgb
from core.config import DEFAULT_CUTOFF_FREQUENCY
from core.fft_engine import padded_shape
from io_utils.image_handler import read_image, save_image
from io_utils.sample_image import generate_night_sky
from visuals.plots import save_spectrum_image, plot_mask, compare_and_save

OUTDIR = "results/demo_plots"


def demo_from_array(rgb, cutoff: float = DEFAULT_CUTOFF_FREQUENCY):
    os.makedirs(OUTDIR, exist_ok=True)
    result = process_color_rgb(rgb, cutoff)
    ph, pw = padded_shape(result.width, result.height)

    save_spectrum_image(result.original_spectrum, os.path.join(OUTDIR, "original_spectrum.png"))
    save_spectrum_image(result.filtered_spectrum, os.path.join(OUTDIR, "filtered_spectrum.png"))
    plot_mask((ph, pw), cutoff, out_path=os.path.join(OUTDIR, "filter_mask.png"))
    compare_and_save(
        rgb, result.filtered_image[..., :3],
        original_spectrum=result.original_spectrum,
        filtered_spectrum=result.filtered_spectrum,
        out_path=os.path.join(OUTDIR, "comparison.png"),
        cutoff=cutoff,
    )
    save_image(os.path.join(OUTDIR, "input.png"), rgb)
    save_image(os.path.join(OUTDIR, "filtered_output.png"), result.filtered_image)
    print("Demo outputs written to:", OUTDIR)


if __name__ == "__main__":
    # try typical sample names; fall back to a generated image
    candidates = ["data/sample1.png", "data/sample2_color.jpg", "data/night_sky.png"]
    found = next((c for c in candidates if os.path.exists(c)), None)
    if found is None:
        print("No sample image found in data/, using a generated night sky.")
        rgb = generate_night_sky(seed=0)
    else:
        rgb, _meta = read_image(found)
    demo_from_array(rgb, cutoff=DEFAULT_CUTOFF_FREQUENCY)
