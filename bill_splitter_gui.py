"""
Bill Splitter GUI
- Enter a bill, a tip percentage and each person's share; see what everyone owes.
- Save splits during the session and load them back; export an Excel report.

Run:
  python bill_splitter_gui.py

Dependencies:
  pip install openpyxl
(Tkinter ships with most Python distributions; on some Linux you may need: sudo apt-get install python3-tk)
"""
from __future__ import annotations

try:
    import tkinter as tk
except ModuleNotFoundError:
    tk = None

from config import configure_logging, get_default_split, load_settings
from main_app import BillSplitterApp


def main():
    """Main entry point for the application"""
    if tk is None:
        raise RuntimeError(
            'tkinter is not available. Install it (e.g., on Ubuntu: sudo apt-get install python3-tk) '
            'and re-run to use the GUI.'
        )

    settings = load_settings()
    configure_logging(settings)

    root = tk.Tk()
    app = BillSplitterApp(root, get_default_split(settings))
    root.mainloop()


if __name__ == "__main__":
    main()
