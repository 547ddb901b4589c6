import logging
from tkinter import messagebox as mb

from core.config import API_URL, THEME_FILE
from core.logging_setup import setup_logging
from core.session import AuthSession
from storage.task_api import TaskApiClient
from controller.app_controller import AppController
from gui.main_window import MainWindow
from services.theme_store import ThemeStore

log = logging.getLogger("app")


def main():
    setup_logging()
    session = AuthSession.from_config()
    if not session.is_authenticated:
        # no credential: back to the login page, before any request and without tkinter
        log.error("No API token configured; log in and set TASKDASH_API_TOKEN")
        return 1

    client = TaskApiClient(API_URL, session)
    controller = AppController(client, session, confirm=lambda prompt: mb.askyesno("Confirm", prompt))
    ui = MainWindow(controller, ThemeStore(THEME_FILE))
    ui.mainloop()
    if not session.is_authenticated:
        log.info("Logged out")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
