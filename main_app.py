"""
Main application window for Bill Splitter GUI
"""
from __future__ import annotations
import logging
from typing import List, Optional

try:
    import tkinter as tk
    from tkinter import ttk, messagebox, filedialog
except ModuleNotFoundError:
    tk = None
    ttk = None
    messagebox = None
    filedialog = None

from models import SnapshotNotFoundError, SplitConfiguration, MIN_PARTICIPANTS
from session import SplitSession
from excel_export import export_excel
from gui_dialogs import ParticipantRow
from utils import format_percent

logger = logging.getLogger(__name__)


class BillSplitterApp(ttk.Frame):
    """Main application window"""

    def __init__(self, master: tk.Tk, defaults: Optional[SplitConfiguration] = None):
        super().__init__(master, padding=8)
        self.master = master
        self.master.title("Bill Splitting App")
        self.master.geometry("520x720")
        self.grid(row=0, column=0, sticky="nsew")
        self.master.rowconfigure(0, weight=1)
        self.master.columnconfigure(0, weight=1)

        self.session = SplitSession(defaults)
        self.rows: List[ParticipantRow] = []
        self._syncing = False

        self._build_menu()
        self._build_ui()
        self.rebuild_participants()

    # ---------- Menu ----------
    def _build_menu(self):
        """Build application menu bar"""
        menubar = tk.Menu(self.master)
        filem = tk.Menu(menubar, tearoff=0)
        filem.add_command(label="New Split", command=self.new_split)
        filem.add_separator()
        filem.add_command(label="Export Excel…", command=self.export_excel_dialog)
        filem.add_separator()
        filem.add_command(label="Exit", command=self.master.destroy)
        menubar.add_cascade(label="File", menu=filem)
        self.master.config(menu=menubar)

    # ---------- UI ----------
    def _build_ui(self):
        """Build bill fields, participant list and saved splits panel"""
        self.columnconfigure(0, weight=1)

        bill = ttk.LabelFrame(self, text="Bill", padding=8)
        bill.grid(row=0, column=0, sticky="ew")
        bill.columnconfigure(1, weight=1)

        ttk.Label(bill, text="Bill Amount").grid(row=0, column=0, sticky="w")
        self.v_bill = tk.StringVar(value=f"{self.session.config.bill_amount:g}")
        ent = ttk.Entry(bill, textvariable=self.v_bill, width=14)
        ent.grid(row=0, column=1, sticky="w", padx=4)
        self.v_bill.trace_add("write", lambda *_: self._bill_changed())
        self.bill_error = ttk.Label(bill, text="", foreground="red")
        self.bill_error.grid(row=1, column=1, sticky="w", padx=4)

        self.tip_label = ttk.Label(bill, text="")
        self.tip_label.grid(row=2, column=0, sticky="w")
        self.v_tip = tk.IntVar(value=int(round(self.session.config.tip_percentage)))
        tk.Scale(
            bill, from_=0, to=100, resolution=1, orient="horizontal",
            showvalue=False, variable=self.v_tip, command=self._tip_changed,
        ).grid(row=2, column=1, sticky="ew", padx=4)

        self.total_var = tk.StringVar(value="")
        ttk.Label(bill, textvariable=self.total_var).grid(row=3, column=0, columnspan=2, sticky="w", pady=(6, 0))

        people = ttk.LabelFrame(self, text="People", padding=8)
        people.grid(row=1, column=0, sticky="nsew", pady=(8, 0))
        people.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)
        self.people_frame = ttk.Frame(people)
        self.people_frame.grid(row=0, column=0, sticky="nsew")
        self.people_frame.columnconfigure(0, weight=1)

        self.pct_total_var = tk.StringVar(value="")
        ttk.Label(people, textvariable=self.pct_total_var).grid(row=1, column=0, sticky="w", pady=(4, 0))
        self.people_error = ttk.Label(people, text="", foreground="red")
        self.people_error.grid(row=2, column=0, sticky="w")

        btns = ttk.Frame(self)
        btns.grid(row=2, column=0, sticky="ew", pady=8)
        ttk.Button(btns, text="Add Person", command=self.add_person).pack(side="left", padx=3)
        ttk.Button(btns, text="Save Split", command=self.save_split).pack(side="left", padx=3)

        saved = ttk.LabelFrame(self, text="Saved Splits", padding=8)
        saved.grid(row=3, column=0, sticky="ew")
        self.saved_frame = ttk.Frame(saved)
        self.saved_frame.grid(row=0, column=0, sticky="w")

    # ---------- Events ----------
    def _bill_changed(self):
        if self._syncing:
            return
        self.session.set_bill_amount(self.v_bill.get())
        self.refresh_amounts()

    def _tip_changed(self, value):
        if self._syncing:
            return
        self.session.set_tip_percentage(value)
        self.refresh_amounts()

    def _name_changed(self, index: int, name: str):
        self.session.set_name(index, name)
        self.refresh_amounts()

    def _percentage_changed(self, index: int, value: float):
        self.session.set_percentage(index, value)
        self.refresh_amounts()

    def _commit_percentages(self):
        self.session.commit_percentages()
        self.refresh_amounts()

    # ---------- Participants ----------
    def add_person(self):
        """Append a participant"""
        self.session.add_participant()
        self.rebuild_participants()

    def remove_person(self, index: int):
        """Remove participant at index (ignored at the minimum)"""
        self.session.remove_participant(index)
        self.rebuild_participants()

    def rebuild_participants(self):
        """Recreate participant rows after the list changed"""
        for row in self.rows:
            row.destroy()
        self.rows = []
        for i, p in enumerate(self.session.config.participants):
            row = ParticipantRow(
                self.people_frame, i, p,
                on_name=self._name_changed,
                on_percentage=self._percentage_changed,
                on_commit=self._commit_percentages,
                on_remove=self.remove_person,
                removable=i >= MIN_PARTICIPANTS,
            )
            row.grid(row=i, column=0, sticky="ew")
            self.rows.append(row)
        self.refresh_all()

    # ---------- Saved splits ----------
    def save_split(self):
        """Validate and save the active split"""
        result = self.session.save()
        if not result.is_valid:
            self.refresh_amounts(result.errors)
            messagebox.showerror("Cannot save", "\n".join(sorted(set(result.errors.values()))))
            return
        self.refresh_saved()

    def load_split(self, index: int):
        """Replace the active split with saved split index"""
        try:
            self.session.load(index)
        except SnapshotNotFoundError as ex:
            messagebox.showerror("Load failed", str(ex))
            return
        self.rebuild_participants()

    def new_split(self):
        """Start over from defaults"""
        if messagebox.askyesno("New Split", "Start a new split (unsaved changes will be lost)?"):
            self.session.reset()
            self.rebuild_participants()

    # ---------- File ops ----------
    def export_excel_dialog(self):
        """Export current and saved splits to Excel file"""
        fp = filedialog.asksaveasfilename(
            title="Export Excel",
            defaultextension=".xlsx",
            filetypes=[("Excel Workbook", "*.xlsx")]
        )
        if not fp:
            return
        try:
            export_excel(self.session.config, fp, self.session.history)
            messagebox.showinfo("Export", f"Exported: {fp}")
        except Exception as ex:
            logger.exception("Excel export failed")
            messagebox.showerror("Export failed", str(ex))

    # ---------- Refresh ----------
    def refresh_all(self):
        """Refresh all UI elements from the session"""
        cfg = self.session.config
        self._syncing = True
        try:
            if self.v_bill.get() != f"{cfg.bill_amount:g}" and not self.session.field_errors.get("bill_amount"):
                self.v_bill.set(f"{cfg.bill_amount:g}")
            self.v_tip.set(int(round(cfg.tip_percentage)))
        finally:
            self._syncing = False
        self.refresh_amounts()
        self.refresh_saved()

    def refresh_amounts(self, errors: Optional[dict] = None):
        """Recompute derived amounts and messages"""
        cfg = self.session.config
        errors = dict(self.session.validate().errors, **(errors or {}))
        errors.update(self.session.field_errors)

        self.tip_label.config(text=f"Tip Percentage: {format_percent(cfg.tip_percentage)}")
        self.total_var.set(f"Total with tip: ${self.session.total():.2f}")
        self.bill_error.config(text=errors.get("bill_amount", ""))

        for row, p, amt in zip(self.rows, cfg.participants, self.session.amounts()):
            msg = errors.get(f"participants.{row.index}.name") or errors.get(f"participants.{row.index}.percentage", "")
            row.show(p, amt, msg)

        total = self.session.percentage_total()
        self.pct_total_var.set(f"Total percentage: {format_percent(total)}")
        self.people_error.config(text=errors.get("participants", ""))

    def refresh_saved(self):
        """Redraw one Load button per saved split"""
        for child in self.saved_frame.winfo_children():
            child.destroy()
        if not self.session.history:
            ttk.Label(self.saved_frame, text="No saved splits yet.").grid(row=0, column=0, sticky="w")
            return
        for i, _ in enumerate(self.session.history):
            ttk.Button(
                self.saved_frame, text=f"Load Split {i + 1}",
                command=lambda i=i: self.load_split(i),
            ).grid(row=i, column=0, sticky="w", pady=2)
