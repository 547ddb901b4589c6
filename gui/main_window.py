import logging
import tkinter as tk
from tkinter import ttk, messagebox as mb

from controller.app_controller import AppController
from core.config import ENTRIES_PER_PAGE_OPTIONS, TOPMOST, WINDOW_GEOMETRY
from core.exceptions import AuthExpired, TaskApiError
from core.models import ANY_PRIORITY, Pagination, Priority, StatusFilter, TaskFilter
from core.view_model import parse_filter_date
from gui.task_list import ScrollableTaskList
from gui.theme import palette_for
from services.notifier import Notifier
from services.theme_store import LIGHT, ThemeStore

log = logging.getLogger(__name__)


class MainWindow(tk.Tk):
    def __init__(self, controller: AppController, theme_store: ThemeStore):
        super().__init__()
        self.controller = controller
        self.theme_store = theme_store
        self.theme = theme_store.load()
        self.palette = palette_for(self.theme)
        self.filters = TaskFilter()
        self.pagination = Pagination()

        self.title("Your Tasks")
        self.geometry(WINDOW_GEOMETRY)
        self.configure(padx=8, pady=8)
        if TOPMOST:
            self.attributes("-topmost", True)
        self.style = ttk.Style(self)

        self.notifier = Notifier(self, self._on_notification)
        self.controller.notify = self.notifier.show
        self.controller.session.on_logout(self._on_session_end)

        self._build_header()
        self._build_form()
        self._build_filters()
        self.task_list = ScrollableTaskList(
            self,
            palette=self.palette,
            on_toggle=self._on_toggle,
            on_priority=self._on_priority,
            on_delete=self._on_delete,
        )
        self.task_list.pack(fill="both", expand=True)
        self._build_pagination()

        self.bind("<F5>", lambda e: self._load())
        self._apply_theme()
        self._render()
        self.after_idle(self._load)

    # ---------- layout ----------
    def _build_header(self):
        top = ttk.Frame(self)
        top.pack(fill="x", pady=(0, 6))
        ttk.Label(top, text="Your Tasks", font=("TkDefaultFont", 16, "bold")).pack(side="left")
        ttk.Button(top, text="Logout", command=self._on_logout).pack(side="right")
        self.theme_btn = ttk.Button(top, command=self._on_toggle_theme)
        self.theme_btn.pack(side="right", padx=(0, 6))
        self.notice_var = tk.StringVar(value="")
        self.notice = ttk.Label(top, textvariable=self.notice_var, style="Notice.TLabel")
        self.notice.pack(side="left", padx=12)

    def _build_form(self):
        form = ttk.Frame(self)
        form.pack(fill="x", pady=(0, 6))
        self.title_entry = ttk.Entry(form)
        self.title_entry.pack(side="left", fill="x", expand=True)
        self.title_entry.bind("<Return>", self._on_add)
        self.desc_entry = ttk.Entry(form)
        self.desc_entry.pack(side="left", fill="x", expand=True, padx=6)
        self.desc_entry.bind("<Return>", self._on_add)
        self.priority_var = tk.StringVar(value=Priority.DEFAULT)
        ttk.Combobox(form, textvariable=self.priority_var, values=Priority.ALL,
                     state="readonly", width=8).pack(side="left")
        ttk.Button(form, text="Add", command=self._on_add).pack(side="left", padx=(6, 0))

    def _build_filters(self):
        bar = ttk.Frame(self)
        bar.pack(fill="x", pady=(0, 6))

        ttk.Label(bar, text="Priority:").pack(side="left")
        self.f_priority = tk.StringVar(value=ANY_PRIORITY)
        cb = ttk.Combobox(bar, textvariable=self.f_priority, values=(ANY_PRIORITY,) + Priority.ALL,
                          state="readonly", width=8)
        cb.pack(side="left", padx=(2, 10))
        cb.bind("<<ComboboxSelected>>", self._on_filter_change)

        ttk.Label(bar, text="Status:").pack(side="left")
        self.f_status = tk.StringVar(value=StatusFilter.ALL)
        cb = ttk.Combobox(bar, textvariable=self.f_status, values=StatusFilter.CHOICES,
                          state="readonly", width=10)
        cb.pack(side="left", padx=(2, 10))
        cb.bind("<<ComboboxSelected>>", self._on_filter_change)

        self.f_from = tk.StringVar()
        self.f_to = tk.StringVar()
        for label, var in (("From:", self.f_from), ("To:", self.f_to)):
            ttk.Label(bar, text=label).pack(side="left")
            e = ttk.Entry(bar, textvariable=var, width=11)
            e.pack(side="left", padx=(2, 10))
            # Enter only; the error dialog steals focus
            e.bind("<Return>", self._on_filter_change)

        ttk.Button(bar, text="Clear Completed", command=self._on_clear_completed).pack(side="right")

    def _build_pagination(self):
        bottom = ttk.Frame(self)
        bottom.pack(fill="x", pady=(6, 0))
        ttk.Label(bottom, text="Show").pack(side="left")
        self.per_page_var = tk.StringVar(value=str(self.pagination.entries_per_page))
        cb = ttk.Combobox(bottom, textvariable=self.per_page_var, state="readonly", width=4,
                          values=[str(n) for n in ENTRIES_PER_PAGE_OPTIONS])
        cb.pack(side="left", padx=4)
        cb.bind("<<ComboboxSelected>>", self._on_per_page)
        ttk.Label(bottom, text="entries").pack(side="left")

        self.next_btn = ttk.Button(bottom, text="Next", command=self._on_next)
        self.next_btn.pack(side="right")
        self.page_var = tk.StringVar()
        ttk.Label(bottom, textvariable=self.page_var).pack(side="right", padx=8)
        self.prev_btn = ttk.Button(bottom, text="Previous", command=self._on_previous)
        self.prev_btn.pack(side="right")

    # ---------- data ----------
    def _load(self):
        try:
            self.controller.load()
        except AuthExpired:
            # session already terminated, window is closing
            return
        except TaskApiError as e:
            log.error("Load failed: %s", e)
            mb.showerror("Tasks", e.message or "Failed to load tasks")
        self._render()

    def _render(self):
        page = self.controller.view(self.filters, self.pagination)
        self.pagination = Pagination(page.current_page, page.entries_per_page)
        self.task_list.set_tasks(page.rows)
        self.page_var.set(page.label)
        self.prev_btn.state(["!disabled"] if page.has_previous else ["disabled"])
        self.next_btn.state(["!disabled"] if page.has_next else ["disabled"])
        self._page = page

    def _run(self, title: str, action, *args):
        try:
            action(*args)
        except TaskApiError as e:
            log.error("%s failed: %s", title, e)
            mb.showerror(title, e.message or "Action failed")
        self._render()

    # ---------- actions ----------
    def _on_add(self, event=None):
        title = self.title_entry.get().strip()
        if not title:
            mb.showerror("Add task", "Title is required")
            return
        try:
            self.controller.create(title, self.desc_entry.get(), self.priority_var.get())
        except TaskApiError as e:
            log.error("Add failed: %s", e)
            mb.showerror("Add task", e.message or "Action failed")
            return
        self.title_entry.delete(0, "end")
        self.desc_entry.delete(0, "end")
        self.priority_var.set(Priority.DEFAULT)
        self._render()

    def _on_delete(self, task_id: str):
        self._run("Delete task", self.controller.remove, task_id)

    def _on_toggle(self, task):
        self._run("Update task", self.controller.toggle_done, task)

    def _on_priority(self, task_id: str, priority: str):
        self._run("Update priority", self.controller.set_priority, task_id, priority)

    def _on_clear_completed(self):
        try:
            self.controller.clear_completed()
        except AuthExpired:
            return
        except TaskApiError as e:
            log.error("Clear completed failed: %s", e)
            mb.showerror("Clear completed", e.message or "Failed to clear completed tasks")
        self._render()

    # ---------- filters / pagination ----------
    def _on_filter_change(self, event=None):
        try:
            from_date = parse_filter_date(self.f_from.get())
            to_date = parse_filter_date(self.f_to.get())
        except ValueError:
            mb.showerror("Filter", "Dates must look like YYYY-MM-DD")
            return
        filters = TaskFilter(self.f_priority.get(), self.f_status.get(), from_date, to_date)
        if filters != self.filters:
            self.filters = filters
            self._render()

    def _on_per_page(self, event=None):
        self.pagination = self.pagination.with_entries_per_page(int(self.per_page_var.get()))
        self._render()

    def _on_next(self):
        self.pagination = self.pagination.next_page(self._page.total_pages)
        self._render()

    def _on_previous(self):
        self.pagination = self.pagination.previous_page()
        self._render()

    # ---------- theme / notifications / session ----------
    def _on_toggle_theme(self):
        self.theme = self.theme_store.switch(self.theme)
        self.palette = palette_for(self.theme)
        self._apply_theme()
        self._render()

    def _apply_theme(self):
        p = self.palette
        self.configure(bg=p.background)
        self.style.configure("TFrame", background=p.background)
        self.style.configure("TLabel", background=p.background, foreground=p.foreground)
        self.style.configure("Notice.TLabel", background=p.done_bg, foreground=p.done_fg)
        self.theme_btn.configure(text="Light" if self.theme == LIGHT else "Dark")
        self.task_list.apply_palette(p)
        if not self.notifier.visible:
            self.notice.pack_forget()

    def _on_notification(self, visible: bool, message: str):
        if visible:
            self.notice_var.set(message)
            self.notice.pack(side="left", padx=12)
        else:
            self.notice.pack_forget()

    def _on_logout(self):
        self.controller.session.logout()

    def _on_session_end(self):
        self.notifier.cancel()
        self.destroy()
