"""
Dialog Controller for Exe Icon Extractor
Handles the native file picker used when no path is given
"""

import logging
from pathlib import Path
from typing import Optional


def ask_for_executable(initial_dir: Optional[str] = None) -> Optional[Path]:
    """Show an open-file dialog restricted to executables; None if cancelled."""
    import tkinter as tk
    from tkinter import filedialog

    root = tk.Tk()
    root.withdraw()  # Hide the main window

    try:
        selected = filedialog.askopenfilename(
            parent=root,
            title="Select an executable",
            initialdir=initial_dir,
            filetypes=[("Executable files", "*.exe")]
        )
    finally:
        root.destroy()

    if not selected:
        logging.debug("File selection cancelled")
        return None

    logging.debug(f"Selected {selected}")
    return Path(selected)
