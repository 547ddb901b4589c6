"""
Scrollable task table for Tkinter
---------------------------------
One row (a Frame) per task inside a scrollable Canvas, with:
- a Checkbutton for completion
- title and description
- status / completed-at / created-at labels
- a priority selector coloured by priority
- a delete button

The widget is view-only state. Changes go through the callbacks given in the
constructor; call `set_tasks()` again with the new page after each change.
"""
from __future__ import annotations

import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, List, Optional

from core.models import Priority, Task
from gui.theme import Palette

PRIORITY_COLORS = {
    Priority.HIGH: "#ff4d4d",
    Priority.MEDIUM: "#ffd700",
    Priority.LOW: "#00fa9a",
}


def format_timestamp(value) -> str:
    if value is None:
        return "-"
    return value.astimezone().strftime("%Y-%m-%d %H:%M")


class TaskRow(tk.Frame):
    """A single task row."""
    def __init__(
        self,
        master,
        task: Task,
        palette: Palette,
        on_toggle: Optional[Callable[[Task], None]] = None,
        on_priority: Optional[Callable[[str, str], None]] = None,
        on_delete: Optional[Callable[[str], None]] = None,
        wrap: int = 420,
    ):
        bg, fg = palette.row_colors(task.completed)
        super().__init__(master, bg=bg, padx=6, pady=4)
        self.task = task
        self._on_toggle = on_toggle
        self._on_priority = on_priority
        self._on_delete = on_delete
        self.var = tk.BooleanVar(value=task.completed)
        self.priority_var = tk.StringVar(value=task.priority)

        self.columnconfigure(1, weight=1)

        self.chk = tk.Checkbutton(self, variable=self.var, command=self._toggle, bg=bg,
                                  activebackground=bg, selectcolor=palette.surface)
        self.chk.grid(row=0, column=0, rowspan=2, padx=(2, 6), sticky="w")

        self.lbl = tk.Label(self, text=task.title, wraplength=wrap, anchor="w", justify="left",
                            bg=bg, fg=fg, font=("TkDefaultFont", 10, "bold"))
        self.lbl.grid(row=0, column=1, sticky="we")
        self.desc = tk.Label(self, text=task.description or "-", wraplength=wrap, anchor="w",
                             justify="left", bg=bg, fg=fg)
        self.desc.grid(row=1, column=1, sticky="we")

        status = "✓ Completed" if task.completed else "Pending"
        info = f"{status}  ·  done {format_timestamp(task.completed_at)}  ·  created {format_timestamp(task.created_at)}"
        tk.Label(self, text=info, anchor="e", bg=bg, fg=fg).grid(row=0, column=2, rowspan=2, padx=8)

        color = PRIORITY_COLORS.get(task.priority, palette.surface)
        self.priority_menu = tk.OptionMenu(self, self.priority_var, *Priority.ALL, command=self._priority)
        self.priority_menu.configure(bg=color, fg=_ideal_text_color(color), activebackground=color,
                                     highlightthickness=0, width=7)
        self.priority_menu.grid(row=0, column=3, rowspan=2, padx=4)

        self.del_btn = ttk.Button(self, text="✕", width=3, command=self._delete)
        self.del_btn.grid(row=0, column=4, rowspan=2, padx=(4, 2))

    # --- Internals ---
    def _toggle(self):
        # put the box back; the real state arrives with the server response
        self.var.set(self.task.completed)
        if self._on_toggle:
            self._on_toggle(self.task)

    def _priority(self, value: str):
        if value != self.task.priority and self._on_priority:
            self._on_priority(self.task.id, value)

    def _delete(self):
        if self._on_delete:
            self._on_delete(self.task.id)


class ScrollableTaskList(ttk.Frame):
    """Canvas + interior Frame pattern with mousewheel support."""
    def __init__(
        self,
        master,
        palette: Palette,
        on_toggle: Optional[Callable[[Task], None]] = None,
        on_priority: Optional[Callable[[str, str], None]] = None,
        on_delete: Optional[Callable[[str], None]] = None,
        row_wrap: int = 420,
        **kwargs,
    ):
        super().__init__(master, **kwargs)
        self.palette = palette
        self._on_toggle = on_toggle
        self._on_priority = on_priority
        self._on_delete = on_delete
        self._row_wrap = row_wrap
        self._rows: Dict[str, tk.Widget] = {}

        self.canvas = tk.Canvas(self, highlightthickness=0, bg=palette.background)
        self.vbar = ttk.Scrollbar(self, orient="vertical", command=self.canvas.yview)
        self.canvas.configure(yscrollcommand=self.vbar.set)

        self.canvas.grid(row=0, column=0, sticky="nsew")
        self.vbar.grid(row=0, column=1, sticky="ns")
        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        self.interior = tk.Frame(self.canvas, bg=palette.background)
        self._win_id = self.canvas.create_window(0, 0, window=self.interior, anchor="nw")

        self.interior.bind("<Configure>", self._on_interior_configure)
        self.canvas.bind("<Configure>", self._on_canvas_configure)
        self._bind_mousewheel(self.canvas)

    # --- Public API ---
    def set_tasks(self, tasks: List[Task]):
        """Replace all rows with ``tasks`` (already filtered and paginated)."""
        for row in list(self._rows.values()):
            row.destroy()
        self._rows.clear()

        if not tasks:
            empty = tk.Label(self.interior, text="No tasks", bg=self.palette.background,
                             fg=self.palette.foreground, pady=12)
            empty.grid(row=0, column=0, sticky="we")
            self._rows[""] = empty

        for i, task in enumerate(tasks):
            row = TaskRow(
                self.interior,
                task=task,
                palette=self.palette,
                on_toggle=self._on_toggle,
                on_priority=self._on_priority,
                on_delete=self._on_delete,
                wrap=self._row_wrap,
            )
            self._rows[task.id] = row
            row.grid(row=i, column=0, sticky="we", padx=8, pady=2)
        self.interior.columnconfigure(0, weight=1)
        self._update_scrollregion()
        self.canvas.yview_moveto(0)

    def apply_palette(self, palette: Palette):
        self.palette = palette
        self.canvas.configure(bg=palette.background)
        self.interior.configure(bg=palette.background)

    # --- Internals ---
    def _update_scrollregion(self):
        self.update_idletasks()
        self.canvas.configure(scrollregion=self.canvas.bbox("all"))

    def _on_interior_configure(self, _):
        self._update_scrollregion()

    def _on_canvas_configure(self, event):
        # keep interior width synced to canvas for wrapping
        self.canvas.itemconfigure(self._win_id, width=event.width)

    def _bind_mousewheel(self, widget):
        widget.bind_all("<MouseWheel>", self._on_mousewheel_windows_mac, add="+")
        widget.bind_all("<Button-4>", self._on_mousewheel_linux, add="+")
        widget.bind_all("<Button-5>", self._on_mousewheel_linux, add="+")

    def _on_mousewheel_windows_mac(self, event):
        # Windows reports +/-120 per notch
        delta = int(-1 * (event.delta / 120))
        self.canvas.yview_scroll(delta, "units")

    def _on_mousewheel_linux(self, event):
        if event.num == 4:
            self.canvas.yview_scroll(-1, "units")
        elif event.num == 5:
            self.canvas.yview_scroll(1, "units")


def _ideal_text_color(bg_hex: str) -> str:
    """Return black or white depending on background brightness."""
    bg_hex = bg_hex.strip().lstrip('#')
    if len(bg_hex) == 3:
        bg_hex = ''.join(c*2 for c in bg_hex)
    try:
        r = int(bg_hex[0:2], 16)
        g = int(bg_hex[2:4], 16)
        b = int(bg_hex[4:6], 16)
    except ValueError:
        return "black"
    luminance = 0.299*r + 0.587*g + 0.114*b
    return "black" if luminance > 186 else "white"
