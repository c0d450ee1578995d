"""
Batch-run the low-pass pipeline across multiple images.

Saves per-image outputs and a CSV log with diagnostics:
- input_path, width, height, padded size, filtered image path, spectrum paths,
  mask path, max residual imaginary part, cutoff

Usage (from project root):
python -m scripts.batch_demo [image ...]

Without arguments the IMAGES list below is used; missing files are skipped.
"""

import os
import sys
import csv
from datetime import datetime
import numpy as np

from io_utils.image_handler import read_image, save_image
from io_utils.file_utils import make_result_filename, save_parameters_txt, zip_results
from core.color_processing import process_color_rgb
from core.config import DEFAULT_CUTOFF_FREQUENCY, MAX_IMAGE_SIDE
from core.errors import FourierFilterError
from core.fft_engine import padded_shape
from visuals.plots import save_spectrum_image, plot_mask, compare_and_save

# CONFIG: images to process when none are given on the command line
IMAGES = [
    "data/night_sky.png",
    "data/Checkerboard_2.jpg",
]

CUTOFFS = [DEFAULT_CUTOFF_FREQUENCY]
PROJECT = "fft_lowpass"
MAKE_ZIP = True

timestamp = datetime.now().strftime("%Y%m%dT%H%M%S")
OUTDIR = os.path.join("results", f"batch_demo_{timestamp}")

csv_fields = [
    "input_path", "width", "height", "padded_width", "padded_height",
    "filtered_path", "original_spectrum_path", "filtered_spectrum_path",
    "mask_path", "max_imag_residual", "cutoff",
]


def process_one_image(img_path, cutoff=DEFAULT_CUTOFF_FREQUENCY):
    rgb, meta = read_image(img_path, max_side=MAX_IMAGE_SIDE)
    base = os.path.splitext(os.path.basename(img_path))[0]
    run_dir = os.path.join(OUTDIR, base)
    os.makedirs(run_dir, exist_ok=True)

    result = process_color_rgb(rgb, cutoff, return_intermediates=True)
    ph, pw = padded_shape(result.width, result.height)

    # worst residual imaginary part over the cropped region of every channel
    max_imag = 0.0
    for inter in result.intermediates.values():
        region = inter["spatial"][: result.height, : result.width]
        max_imag = max(max_imag, float(np.max(np.abs(region.imag))))

    filtered_path = make_result_filename(PROJECT, img_path, cutoff, "filtered", outdir=run_dir)
    save_image(filtered_path, result.filtered_image)
    orig_spec_path = save_spectrum_image(result.original_spectrum, os.path.join(run_dir, "original_spectrum.png"))
    filt_spec_path = save_spectrum_image(result.filtered_spectrum, os.path.join(run_dir, "filtered_spectrum.png"))
    mask_path = plot_mask((ph, pw), cutoff, out_path=os.path.join(run_dir, "filter_mask.png"))
    compare_and_save(
        rgb, result.filtered_image[..., :3],
        original_spectrum=result.original_spectrum,
        filtered_spectrum=result.filtered_spectrum,
        out_path=os.path.join(run_dir, "comparison.png"),
        cutoff=cutoff,
    )

    return {
        "input_path": img_path,
        "width": result.width,
        "height": result.height,
        "padded_width": pw,
        "padded_height": ph,
        "filtered_path": filtered_path,
        "original_spectrum_path": orig_spec_path,
        "filtered_spectrum_path": filt_spec_path,
        "mask_path": mask_path,
        "max_imag_residual": max_imag,
        "cutoff": cutoff,
    }


def main(argv=None):
    images = list(argv if argv is not None else sys.argv[1:]) or IMAGES
    os.makedirs(OUTDIR, exist_ok=True)
    save_parameters_txt(OUTDIR, {"cutoffs": CUTOFFS, "max_image_side": MAX_IMAGE_SIDE, "images": images})

    csv_path = os.path.join(OUTDIR, "results.csv")
    with open(csv_path, "w", newline="", encoding="utf-8") as csvf:
        writer = csv.DictWriter(csvf, fieldnames=csv_fields)
        writer.writeheader()

        for img in images:
            if not os.path.exists(img):
                print("Skipping missing:", img)
                continue
            for cutoff in CUTOFFS:
                print(f"Processing: {img} (cutoff={cutoff})")
                try:
                    rec = process_one_image(img, cutoff=cutoff)
                except (OSError, FourierFilterError, ValueError) as e:
                    print(" -> failed:", e)
                    continue
                writer.writerow(rec)
                csvf.flush()
                print(" -> done. max_imag_residual:", rec["max_imag_residual"])

    if MAKE_ZIP:
        zip_path = zip_results(OUTDIR, os.path.join(OUTDIR, "results.zip"))
        print("Zipped results:", zip_path)
    print("Batch done. Results in:", OUTDIR, "CSV:", csv_path)


if __name__ == "__main__":
    main()
