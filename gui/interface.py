import ttkbootstrap as ttk
import tkinter as tk
from ttkbootstrap.constants import *
from tkinter import StringVar, DoubleVar
from tkinter.scrolledtext import ScrolledText
from core.config import DEFAULT_CUTOFF_FREQUENCY, MAX_CUTOFF_FREQUENCY
from .callbacks import open_image_callback, generate_sample_callback, run_filter_callback, save_output_callback
from .utils import np_to_tkimage, fit_scale

PREVIEW_BOX = 320

PANES = (
    ("original", "Original"),
    ("filtered", "Filtered"),
    ("original_spectrum", "Original Spectrum"),
    ("filtered_spectrum", "Filtered Spectrum"),
)


class LowPassApp(ttk.Window):
    def __init__(self, title="Fourier Low-Pass Filter", themename="cyborg"):
        super().__init__(themename=themename)
        self.title(title)
        self.geometry("1100x760")

        # Data
        self.image_np = None
        self.output_np = None
        self.image_path = StringVar()
        self._cancel_event = None
        self._slider_job = None

        # Variables
        self.cutoff_val = DoubleVar(value=DEFAULT_CUTOFF_FREQUENCY)

        self._canvases = {}
        self._tkimages = {}

        # Build UI
        self._build_layout()

    def log(self, msg: str):
        """Append to the log box, or print when it does not exist yet."""
        if getattr(self, "log_box", None) is None:
            print(str(msg))
            return
        self.log_box.insert("end", str(msg) + "\n")
        self.log_box.see("end")

    # --- Layout ---
    def _build_layout(self):
        # Left control panel
        control = ttk.Frame(self)
        control.pack(side=LEFT, fill=Y, padx=10, pady=10)

        ttk.Button(control, text="Open Image", bootstyle=PRIMARY, command=lambda: open_image_callback(self)).pack(fill=X, pady=3)
        ttk.Button(control, text="Generate Sample", bootstyle=SECONDARY, command=lambda: generate_sample_callback(self)).pack(fill=X, pady=3)

        ttk.Label(control, text="Cutoff Frequency:").pack(anchor=W, pady=(10, 0))
        self._cutoff_label = ttk.Label(control, text=str(DEFAULT_CUTOFF_FREQUENCY))
        self._cutoff_label.pack(anchor=E)
        ttk.Scale(
            control, from_=0, to=MAX_CUTOFF_FREQUENCY,
            variable=self.cutoff_val, command=self._on_cutoff_moved,
        ).pack(fill=X, pady=2)

        ttk.Button(control, text="Run Filter", bootstyle=SUCCESS, command=lambda: run_filter_callback(self)).pack(fill=X, pady=3)
        ttk.Button(control, text="Save Output", bootstyle=INFO, command=lambda: save_output_callback(self)).pack(fill=X, pady=3)

        ttk.Separator(control).pack(fill=X, pady=5)
        ttk.Label(control, text="Logs:").pack(anchor=W)
        self.log_box = ScrolledText(control, height=15, width=36, wrap="word")
        self.log_box.configure(font=("Helvetica", 10))
        self.log_box.pack(fill=BOTH, expand=True, pady=5)

        # Right display area: 2x2 grid of previews
        display = ttk.Frame(self)
        display.pack(side=LEFT, fill=BOTH, expand=True, padx=(8, 12), pady=8)
        for idx, (key, title) in enumerate(PANES):
            cell = ttk.Labelframe(display, text=title)
            cell.grid(row=idx // 2, column=idx % 2, padx=4, pady=4, sticky=NSEW)
            canvas = tk.Canvas(cell, width=PREVIEW_BOX, height=PREVIEW_BOX, background="black", highlightthickness=0)
            canvas.pack(fill=BOTH, expand=True)
            self._canvases[key] = canvas
        display.columnconfigure((0, 1), weight=1)
        display.rowconfigure((0, 1), weight=1)

    def _on_cutoff_moved(self, _value):
        cutoff = int(round(self.cutoff_val.get()))
        self.cutoff_val.set(cutoff)
        self._cutoff_label.configure(text=str(cutoff))
        # debounce: re-run shortly after the slider stops moving
        if self._slider_job is not None:
            self.after_cancel(self._slider_job)
        if self.image_np is not None:
            self._slider_job = self.after(250, self._run_from_slider)

    def _run_from_slider(self):
        self._slider_job = None
        run_filter_callback(self)

    # --- Previews ---
    def preview(self, key, arr):
        canvas = self._canvases[key]
        tkimg = np_to_tkimage(arr, scale=fit_scale(arr, PREVIEW_BOX))
        self._tkimages[key] = tkimg  # keep reference
        canvas.delete("all")
        canvas.create_image(0, 0, anchor="nw", image=tkimg)

    def clear_previews(self, *keys):
        for key in keys:
            self._canvases[key].delete("all")
            self._tkimages.pop(key, None)


def launch_app():
    app = LowPassApp()
    app.mainloop()
