import logging
import os
import sys
import tkinter as tk
from concurrent.futures import Future
from pathlib import Path
from tkinter import ttk, messagebox, simpledialog

# Make the repository root importable when run as a script
_THIS_DIR = os.path.abspath(os.path.dirname(__file__))
_ROOT_DIR = os.path.abspath(os.path.join(_THIS_DIR, ".."))
if _ROOT_DIR not in sys.path:
    sys.path.insert(0, _ROOT_DIR)

from GUI.components.styles import (  # noqa: E402
    DARK_BG,
    SUMMARY_BG,
    init_dark_theme,
    get_text_config,
)
from screening.ai.summary import SummaryService  # noqa: E402
from screening.engine import TimecodeEngine  # noqa: E402
from screening.export.exporter import EMPTY_COPY_MESSAGE, MarkerExporter  # noqa: E402
from screening.logging_config import (  # noqa: E402
    attach_log_panel,
    create_session_log_file,
    detach_log_panel,
    setup_logging,
)
from screening.timecode.codec import compose, encode  # noqa: E402
from screening.timecode.scheduler import TkScheduler  # noqa: E402
from screening.utils import (  # noqa: E402
    BackgroundTasks,
    ConfigManager,
    FPS_CHOICES,
    ScreeningError,
    SessionSettings,
)

LOG = logging.getLogger("screening.gui")


# =====================================================================
# COMMENT EDITOR (Toplevel)
# =====================================================================

class CommentEditor(tk.Toplevel):
    """Modal comment box shown after a capture or on double-click."""

    def __init__(self, parent, title: str, initial: str, on_save):
        super().__init__(parent)
        self.title(title)
        self.geometry("460x220")
        self.configure(bg=DARK_BG)
        self.transient(parent)
        self.grab_set()

        self._on_save = on_save

        frm = ttk.Frame(self, padding=10, style="Card.TFrame")
        frm.pack(fill="both", expand=True)

        ttk.Label(frm, text=title, style="Title.TLabel").pack(anchor="w", pady=(0, 6))

        self.text = tk.Text(frm, height=5, **get_text_config())
        self.text.pack(fill="both", expand=True)
        self.text.insert("1.0", initial)
        self.text.focus_set()

        btns = ttk.Frame(frm, style="Card.TFrame")
        btns.pack(fill="x", pady=(8, 0))
        ttk.Button(btns, text="Cancel", command=self.destroy).pack(side="right")
        ttk.Button(btns, text="Save", style="Primary.TButton", command=self._save).pack(
            side="right", padx=(0, 6)
        )

        self.bind("<Control-Return>", lambda _e: self._save())
        self.bind("<Escape>", lambda _e: self.destroy())

    def _save(self):
        self._on_save(self.text.get("1.0", "end").strip())
        self.destroy()


# =====================================================================
# MAIN GUI
# =====================================================================

class ScreeningGUI(tk.Tk):
    def __init__(self, settings: SessionSettings | None = None):
        super().__init__()
        self.title("Screening Markers")
        self.geometry("980x760")
        self.minsize(860, 640)
        self.configure(bg=DARK_BG)

        self.config_manager = ConfigManager()
        self.settings = self.config_manager.apply_to(settings or SessionSettings.from_env())

        self.engine = TimecodeEngine.from_settings(
            self.settings,
            TkScheduler(self, self.settings.tick_interval_ms),
        )
        # snapshots and file names are taken here, workers only write
        self.exporter = MarkerExporter(
            self.engine,
            notify=self._notify_threadsafe,
            share=self._share_file,
            export_dir=self.settings.export_dir,
        )
        self.summary_service = SummaryService(notify=self._notify_threadsafe)
        self.tasks = BackgroundTasks()
        self._summary_future: Future | None = None

        self.fps_var = tk.IntVar(value=self.engine.fps)
        self.sort_var = tk.StringVar(value=self.engine.sort_mode.value)
        self.start_field_vars = [tk.StringVar() for _ in range(4)]
        self.tc_var = tk.StringVar(value=self.engine.current_timecode())
        self.fps_badge_var = tk.StringVar()

        init_dark_theme()
        self._build_layout()

        self.engine.clock.add_listener(lambda _f: self._refresh_timecode())
        self._refresh_all()

        self._gui_log_handler = attach_log_panel(lambda msg: self.after(0, self.log, msg))
        self.protocol("WM_DELETE_WINDOW", self._on_close)
        self.bind("<F5>", lambda _e: self.toggle_play())
        self.bind("<F2>", lambda _e: self.capture_marker())

        self.log("Ready.")

    # ------------------------------------------------------------------
    def _build_layout(self):
        pad = 10

        top = ttk.Frame(self, padding=(pad, pad, pad, 0))
        top.pack(fill="x")
        ttk.Label(top, text="Screening Markers", style="Badge.TLabel").pack(side="left")
        ttk.Label(top, textvariable=self.fps_badge_var, style="Badge.TLabel").pack(side="right")

        body = ttk.Frame(self, padding=pad)
        body.pack(fill="both", expand=True)
        body.columnconfigure(0, weight=1)
        body.columnconfigure(1, weight=1)
        body.rowconfigure(1, weight=1)

        # ---- Timecode card ----
        tc_card = ttk.Frame(body, padding=pad, style="Card.TFrame")
        tc_card.grid(row=0, column=0, sticky="nsew", padx=(0, pad / 2), pady=(0, pad))

        ttk.Label(tc_card, textvariable=self.tc_var, style="Timecode.TLabel").pack(fill="x")
        self.start_label = ttk.Label(tc_card, style="Muted.TLabel", anchor="center")
        self.start_label.pack(fill="x", pady=(0, 8))

        row1 = ttk.Frame(tc_card, style="Card.TFrame")
        row1.pack(fill="x", pady=2)
        ttk.Button(row1, text="Play", style="Primary.TButton", command=self.play).pack(
            side="left", expand=True, fill="x", padx=2
        )
        ttk.Button(row1, text="Stop", command=self.stop).pack(side="left", expand=True, fill="x", padx=2)
        ttk.Button(row1, text="Reset", style="Danger.TButton", command=self.reset).pack(
            side="left", expand=True, fill="x", padx=2
        )

        row2 = ttk.Frame(tc_card, style="Card.TFrame")
        row2.pack(fill="x", pady=2)
        for label, delta in (("-1s", -1), ("+1s", 1), ("-5s", -5), ("+5s", 5)):
            ttk.Button(row2, text=label, command=lambda d=delta: self.adjust(d)).pack(
                side="left", expand=True, fill="x", padx=2
            )

        ttk.Button(
            tc_card, text="Capture marker", style="Primary.TButton", command=self.capture_marker
        ).pack(fill="x", padx=2, pady=(8, 0))

        # ---- Session settings card ----
        cfg_card = ttk.Frame(body, padding=pad, style="Card.TFrame")
        cfg_card.grid(row=0, column=1, sticky="nsew", padx=(pad / 2, 0), pady=(0, pad))

        ttk.Label(cfg_card, text="FPS", style="Title.TLabel").grid(row=0, column=0, sticky="w")
        fps_row = ttk.Frame(cfg_card, style="Card.TFrame")
        fps_row.grid(row=1, column=0, columnspan=3, sticky="w", pady=(2, 8))
        self.fps_radios = []
        for value in FPS_CHOICES:
            rb = ttk.Radiobutton(
                fps_row,
                text=f"{value}",
                value=value,
                variable=self.fps_var,
                command=self.change_fps,
            )
            rb.pack(side="left", padx=(0, 10))
            self.fps_radios.append(rb)

        ttk.Label(cfg_card, text="Start timecode", style="Title.TLabel").grid(row=2, column=0, sticky="w")
        picker = ttk.Frame(cfg_card, style="Card.TFrame")
        picker.grid(row=3, column=0, sticky="w", pady=(2, 8))
        self.start_spins = []
        for i, (var, top) in enumerate(zip(self.start_field_vars, (99, 59, 59, self.engine.fps - 1))):
            if i:
                ttk.Label(picker, text=":").pack(side="left")
            spin = ttk.Spinbox(picker, from_=0, to=top, width=3, wrap=True, format="%02.0f", textvariable=var)
            spin.pack(side="left")
            self.start_spins.append(spin)
        self._load_start_fields()
        ttk.Button(cfg_card, text="Set", command=self.apply_start_timecode).grid(
            row=3, column=1, sticky="w", padx=6, pady=(2, 8)
        )

        ttk.Label(cfg_card, text="Sort by", style="Title.TLabel").grid(row=4, column=0, sticky="w")
        sort_row = ttk.Frame(cfg_card, style="Card.TFrame")
        sort_row.grid(row=5, column=0, columnspan=3, sticky="w", pady=(2, 0))
        for value, text in (("created", "Created"), ("timecode", "Timecode")):
            ttk.Radiobutton(
                sort_row, text=text, value=value, variable=self.sort_var, command=self.change_sort
            ).pack(side="left", padx=(0, 10))

        # ---- Markers card ----
        list_card = ttk.Frame(body, padding=pad, style="Card.TFrame")
        list_card.grid(row=1, column=0, sticky="nsew", padx=(0, pad / 2))
        list_card.rowconfigure(1, weight=1)
        list_card.columnconfigure(0, weight=1)

        ttk.Label(list_card, text="Markers", style="Title.TLabel").grid(row=0, column=0, sticky="w")
        self.tree = ttk.Treeview(
            list_card,
            columns=("num", "tc", "comment"),
            show="headings",
            style="Markers.Treeview",
            selectmode="browse",
        )
        self.tree.heading("num", text="#")
        self.tree.heading("tc", text="Timecode")
        self.tree.heading("comment", text="Comment")
        self.tree.column("num", width=48, stretch=False)
        self.tree.column("tc", width=120, stretch=False)
        self.tree.column("comment", width=240)
        self.tree.grid(row=1, column=0, sticky="nsew", pady=(4, 4))
        scroll = ttk.Scrollbar(list_card, orient="vertical", command=self.tree.yview)
        scroll.grid(row=1, column=1, sticky="ns", pady=(4, 4))
        self.tree.configure(yscrollcommand=scroll.set)
        self.tree.bind("<Double-1>", self._on_tree_double_click)

        actions = ttk.Frame(list_card, style="Card.TFrame")
        actions.grid(row=2, column=0, columnspan=2, sticky="we")
        ttk.Button(actions, text="Export TXT", command=self.export_text).pack(side="left", padx=(0, 4))
        ttk.Button(actions, text="Export document", command=self.export_document).pack(side="left", padx=4)
        ttk.Button(actions, text="Copy", command=self.copy_markers).pack(side="left", padx=4)

        # ---- Summary + log card ----
        side = ttk.Frame(body, padding=pad, style="Card.TFrame")
        side.grid(row=1, column=1, sticky="nsew", padx=(pad / 2, 0))
        side.rowconfigure(1, weight=2)
        side.rowconfigure(3, weight=1)
        side.columnconfigure(0, weight=1)

        head = ttk.Frame(side, style="Card.TFrame")
        head.grid(row=0, column=0, sticky="we")
        ttk.Label(head, text="Summary", style="Title.TLabel").pack(side="left")
        self.summary_btn = ttk.Button(
            head, text="Generate summary", style="Primary.TButton", command=self.generate_summary
        )
        self.summary_btn.pack(side="right")

        text_cfg = get_text_config()
        text_cfg["bg"] = SUMMARY_BG
        self.summary_text = tk.Text(side, height=8, **text_cfg)
        self.summary_text.grid(row=1, column=0, sticky="nsew", pady=(4, 8))

        ttk.Label(side, text="Log", style="Title.TLabel").grid(row=2, column=0, sticky="w")
        self.log_text = tk.Text(side, height=6, **get_text_config())
        self.log_text.grid(row=3, column=0, sticky="nsew", pady=(4, 0))

        self.status_label = ttk.Label(self, style="Badge.TLabel", padding=(pad, 0, pad, pad))
        self.status_label.pack(fill="x")

    # =================================================================
    # Utility methods
    # =================================================================
    def log(self, msg: str):
        self.log_text.insert("end", msg + "\n")
        self.log_text.see("end")
        self.status_label.config(text=msg)

    def _notify(self, title: str, message: str):
        messagebox.showinfo(title, message, parent=self)

    def _notify_threadsafe(self, title: str, message: str):
        self.after(0, self._notify, title, message)

    def _request_name(self, default_name: str) -> str | None:
        return simpledialog.askstring(
            "File name",
            "Enter the file name (without extension)",
            initialvalue=default_name,
            parent=self,
        )

    def _share_file(self, path: Path, mime_type: str):
        LOG.info("Saved %s (%s)", path, mime_type)

    def _refresh_timecode(self):
        self.tc_var.set(self.engine.current_timecode())

    def _refresh_markers(self):
        self.tree.delete(*self.tree.get_children())
        for i, m in enumerate(self.engine.markers(), start=1):
            self.tree.insert(
                "",
                "end",
                iid=str(m.id),
                values=(f"{i:02d}", self._marker_tc(m.frame_index), m.comment),
            )

    def _marker_tc(self, frame_index: int) -> str:
        return encode(frame_index, self.engine.fps)

    def _refresh_all(self):
        self._refresh_timecode()
        self._refresh_markers()
        self.fps_badge_var.set(f"{self.engine.fps} fps")
        self.start_label.config(text=f"Start: {self.engine.start_timecode}")
        state = "disabled" if self.engine.is_playing and not self.engine.allow_fps_change_while_playing else "normal"
        for rb in self.fps_radios:
            rb.configure(state=state)

    # =================================================================
    # Transport
    # =================================================================
    def play(self):
        self.engine.play()
        self._refresh_all()

    def stop(self):
        self.engine.stop()
        self._refresh_all()

    def toggle_play(self):
        if self.engine.is_playing:
            self.stop()
        else:
            self.play()

    def reset(self):
        self.engine.reset_session()
        self.summary_text.delete("1.0", "end")
        self._refresh_all()

    def adjust(self, delta_seconds: int):
        self.engine.adjust_by_seconds(delta_seconds)
        self._refresh_timecode()

    def change_fps(self):
        try:
            self.engine.change_fps(int(self.fps_var.get()))
        except ScreeningError as e:
            self.fps_var.set(self.engine.fps)
            messagebox.showwarning("FPS", str(e), parent=self)
            return
        self._load_start_fields()
        self._refresh_all()
        self._save_config()

    def _load_start_fields(self):
        for var, part in zip(self.start_field_vars, self.engine.start_timecode.split(":")):
            var.set(part)
        self.start_spins[3].configure(to=self.engine.fps - 1)

    def apply_start_timecode(self):
        try:
            tc = compose(*(var.get().strip() for var in self.start_field_vars))
            self.engine.set_start_timecode(tc)
        except (ScreeningError, ValueError) as e:
            messagebox.showerror("Start timecode", str(e), parent=self)
            self._load_start_fields()
            return
        self._load_start_fields()
        self._refresh_all()
        self._save_config()

    def change_sort(self):
        self.engine.set_sort_mode(self.sort_var.get())
        self._refresh_markers()
        self._save_config()

    # =================================================================
    # Markers
    # =================================================================
    def capture_marker(self):
        marker = self.engine.capture_marker()
        self._refresh_markers()
        CommentEditor(
            self,
            f"Marker @ {self._marker_tc(marker.frame_index)}",
            "",
            lambda text: self._save_comment(marker.id, text),
        )

    def _on_tree_double_click(self, _event):
        sel = self.tree.selection()
        if not sel:
            return
        marker = self.engine.ledger.get(int(sel[0]))
        if marker is None:
            return
        CommentEditor(
            self,
            f"Marker @ {self._marker_tc(marker.frame_index)}",
            marker.comment,
            lambda text: self._save_comment(marker.id, text),
        )

    def _save_comment(self, marker_id: int, text: str):
        self.engine.edit_comment(marker_id, text)
        self._refresh_markers()

    # =================================================================
    # Export
    # =================================================================
    def export_text(self):
        snap = self.exporter.snapshot()
        if snap is None:
            return
        file_name = self._request_name(snap.text_name)
        self._submit_export("export_text", self.exporter.write_text, snap, file_name or "")

    def export_document(self):
        snap = self.exporter.snapshot()
        if snap is None:
            return
        file_name = self._request_name(snap.document_name)
        self._submit_export("export_document", self.exporter.write_document, snap, file_name or "")

    def copy_markers(self):
        snap = self.exporter.snapshot(EMPTY_COPY_MESSAGE)
        if snap is None:
            return
        self._submit_export("copy_markers", self.exporter.copy_snapshot, snap)

    def _submit_export(self, name: str, action, *args):
        # the snapshot was taken on this thread; the worker only writes it out
        future = self.tasks.submit(name, action, *args)
        future.add_done_callback(lambda f: self.after(0, self._on_export_done, f))

    def _on_export_done(self, future: Future):
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            messagebox.showerror("Export", str(exc), parent=self)

    # =================================================================
    # Summary
    # =================================================================
    def generate_summary(self):
        if self._summary_future is not None and not self._summary_future.done():
            return

        ordered = self.engine.markers()
        if not self.summary_service.precheck(ordered):
            return

        self.summary_text.delete("1.0", "end")
        self.summary_btn.configure(text="Generating...", state="disabled")

        self._summary_future = self.tasks.submit(
            "summary", self.summary_service.summarize, ordered, self.engine.fps
        )
        self._summary_future.add_done_callback(
            lambda f: self.after(0, self._on_summary_done, f)
        )

    def _on_summary_done(self, future: Future):
        self.summary_btn.configure(text="Generate summary", state="normal")
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            LOG.error("Summary task failed: %s", exc, exc_info=exc)
            self.summary_text.insert("1.0", str(exc))
            return
        text = future.result()
        if text:
            self.summary_text.insert("1.0", text)

    # =================================================================
    # Config persistence
    # =================================================================
    def _save_config(self):
        ok = self.config_manager.write_gui_config({
            "fps": self.engine.fps,
            "sort_mode": self.engine.sort_mode.value,
            "start_timecode": self.engine.start_timecode,
            "export_dir": str(self.exporter.export_dir),
        })
        if not ok:
            self.log("WARNING: cannot save preferences.")

    def _on_close(self):
        try:
            self.engine.stop()
            self._save_config()
            self.tasks.shutdown(wait=False)
            detach_log_panel(self._gui_log_handler)
        finally:
            self.destroy()


# =====================================================================
# Entrypoint
# =====================================================================

def main():
    settings = SessionSettings.from_env()
    setup_logging(settings.log_level, log_file=create_session_log_file())
    app = ScreeningGUI(settings)
    app.mainloop()


if __name__ == "__main__":
    main()
