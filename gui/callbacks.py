import os
from threading import Event, Thread
import numpy as np
from tkinter import filedialog, messagebox
from core.color_processing import process_color_channels
from core.config import FilterParameters
from core.errors import FourierFilterError, PipelineCancelledError
from io_utils.image_handler import read_image, split_channels, save_image
from io_utils.sample_image import generate_night_sky


# ----------------------
# Logging helper
# ----------------------
def _safe_log(app, *args, **kwargs):
    """Try to write to app.log if present, otherwise print to stdout."""
    msg = " ".join(str(a) for a in args) if args else kwargs.get("msg", "")
    if hasattr(app, "log") and callable(getattr(app, "log")):
        app.log(msg)
    else:
        print(msg)


def _set_input(app, rgb: np.ndarray, label: str):
    app.image_np = rgb
    app.output_np = None
    app.preview("original", rgb)
    app.clear_previews("filtered", "original_spectrum", "filtered_spectrum")
    _safe_log(app, f"Loaded: {label} ({rgb.shape[1]}x{rgb.shape[0]})")
    run_filter_callback(app)


# ----------------------
# Callbacks
# ----------------------
def open_image_callback(app):
    """Handle file selection, then filter the new image with the current cutoff."""
    path = filedialog.askopenfilename(
        title="Select Image",
        filetypes=[("Image Files", "*.png *.jpg *.jpeg *.tif *.bmp *.gif *.webp *.avif"), ("All Files", "*.*")]
    )
    if not path:
        return

    try:
        rgb, meta = read_image(path)
    except OSError as e:
        _safe_log(app, f"Could not open {path}: {e}")
        messagebox.showerror("Open Error", f"Could not read image:\n{e}")
        return

    if meta["original_size"] != meta["size"]:
        _safe_log(app, f"Resized {meta['original_size']} -> {meta['size']}")
    app.image_path.set(path)
    _set_input(app, rgb, os.path.basename(path))


def generate_sample_callback(app):
    """Replace the current image with a generated night-sky sample."""
    rgb = generate_night_sky()
    app.image_path.set("")
    _set_input(app, rgb, "generated night sky")


def run_filter_callback(app):
    """
    Low-pass the current image on a worker thread. A newer run cancels the one
    still in flight; only the latest result reaches the previews.
    """
    if getattr(app, "image_np", None) is None:
        messagebox.showwarning("No Image", "Please open an image or generate a sample first.")
        return

    try:
        params = FilterParameters(app.cutoff_val.get())
    except ValueError as e:
        messagebox.showerror("Invalid Cutoff", str(e))
        return

    previous = getattr(app, "_cancel_event", None)
    if previous is not None:
        previous.set()
    cancel_event = Event()
    app._cancel_event = cancel_event

    channels, width, height = split_channels(app.image_np)
    _safe_log(app, f"Running low-pass (cutoff={params.cutoff_frequency:g}) ...")

    def work():
        try:
            result = process_color_channels(
                channels, width, height, params.cutoff_frequency,
                parallel=True, cancel_event=cancel_event,
            )
        except PipelineCancelledError:
            return
        except (FourierFilterError, ValueError) as e:
            app.after(0, lambda err=e: _on_error(app, err))
            return
        app.after(0, lambda: _on_result(app, result, cancel_event))

    Thread(target=work, daemon=True).start()


def _on_error(app, error):
    _safe_log(app, f"Processing error: {error}")
    messagebox.showerror("Processing Error", f"Low-pass filtering failed:\n{error}")


def _on_result(app, result, cancel_event):
    if cancel_event.is_set():
        return
    app.output_np = result.filtered_image
    app.preview("filtered", result.filtered_image)
    app.preview("original_spectrum", result.original_spectrum.pixels)
    app.preview("filtered_spectrum", result.filtered_spectrum.pixels)
    _safe_log(
        app,
        f"Low-pass complete. Spectrum size {result.original_spectrum.width}x{result.original_spectrum.height}.",
    )


def save_output_callback(app):
    """Save the last filtered image to a file."""
    if getattr(app, "output_np", None) is None:
        messagebox.showwarning("No Output", "There is no filtered image to save. Run the filter first.")
        return

    save_path = filedialog.asksaveasfilename(
        title="Save Filtered Image",
        initialfile="filtered_output.png",
        defaultextension=".png",
        filetypes=[("PNG Image", "*.png"), ("TIFF Image", "*.tif;*.tiff")]
    )
    if not save_path:
        _safe_log(app, "Save cancelled.")
        return

    try:
        save_image(save_path, app.output_np)
    except (OSError, ValueError) as e:
        _safe_log(app, f"Save failed: {e}")
        messagebox.showerror("Save Error", f"Saving failed:\n{e}")
        return

    _safe_log(app, f"Saved filtered image → {save_path}")
