"""
Widgets for Bill Splitter GUI
"""
from __future__ import annotations
from typing import Callable

try:
    import tkinter as tk
    from tkinter import ttk
except ModuleNotFoundError:
    tk = None
    ttk = None

from models import Participant
from utils import format_percent


class ParticipantRow(ttk.Frame):
    """Name entry, percentage slider and amount-to-pay label for one participant"""

    def __init__(
        self,
        master,
        index: int,
        participant: Participant,
        on_name: Callable[[int, str], None],
        on_percentage: Callable[[int, float], None],
        on_commit: Callable[[], None],
        on_remove: Callable[[int], None],
        removable: bool,
    ):
        super().__init__(master, padding=(0, 4))
        self.index = index
        self._on_name = on_name
        self._on_percentage = on_percentage
        self._on_commit = on_commit
        self._loading = True

        self.columnconfigure(1, weight=1)

        ttk.Label(self, text=f"Person {index + 1} Name").grid(row=0, column=0, sticky="w")
        self.v_name = tk.StringVar(value=participant.name)
        ttk.Entry(self, textvariable=self.v_name, width=24).grid(row=0, column=1, sticky="ew", padx=4)
        self.name_error = ttk.Label(self, text="", foreground="red")
        self.name_error.grid(row=1, column=1, sticky="w", padx=4)

        self.pct_label = ttk.Label(self, text="")
        self.pct_label.grid(row=2, column=0, sticky="w")
        self.v_pct = tk.IntVar(value=int(round(participant.percentage)))
        self.scale = tk.Scale(
            self, from_=0, to=100, resolution=1, orient="horizontal",
            showvalue=False, variable=self.v_pct, command=self._pct_moved,
        )
        self.scale.grid(row=2, column=1, sticky="ew", padx=4)
        # slider released or left: time to renormalize
        self.scale.bind("<ButtonRelease-1>", lambda *_: self._on_commit())
        self.scale.bind("<FocusOut>", lambda *_: self._on_commit())

        self.amount_label = ttk.Label(self, text="")
        self.amount_label.grid(row=3, column=0, columnspan=2, sticky="w")

        if removable:
            ttk.Button(self, text="Remove", command=lambda: on_remove(self.index)).grid(
                row=0, column=2, rowspan=2, padx=4)

        self.v_name.trace_add("write", lambda *_: self._name_changed())
        self._update_pct_label(participant.percentage)
        self._loading = False

    def _name_changed(self):
        if not self._loading:
            self._on_name(self.index, self.v_name.get())

    def _pct_moved(self, value):
        if self._loading:
            return
        self._on_percentage(self.index, float(value))

    def _update_pct_label(self, pct: float):
        self.pct_label.config(text=f"Percentage: {format_percent(pct)}")

    def show(self, participant: Participant, amount: float, name_error: str = ""):
        """Sync widgets with participant values without firing callbacks"""
        self._loading = True
        try:
            if self.v_name.get() != participant.name:
                self.v_name.set(participant.name)
            if self.v_pct.get() != int(round(participant.percentage)):
                self.v_pct.set(int(round(participant.percentage)))
            self._update_pct_label(participant.percentage)
            self.amount_label.config(text=f"Amount to pay: ${amount:.2f}")
            self.name_error.config(text=name_error)
        finally:
            self._loading = False
