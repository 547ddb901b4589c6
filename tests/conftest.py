# tests/conftest.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from controller.app_controller import AppController
from core.session import AuthSession

from .fakes import FakeTaskApi


@pytest.fixture()
def session() -> AuthSession:
    return AuthSession("test-token")


@pytest.fixture()
def logouts(session: AuthSession) -> list:
    seen: list = []
    session.on_logout(lambda: seen.append(True))
    return seen


@pytest.fixture()
def api() -> FakeTaskApi:
    return FakeTaskApi()


@pytest.fixture()
def ui() -> SimpleNamespace:
    """Answers for confirm() prompts plus everything shown to the user."""
    return SimpleNamespace(answer=True, prompts=[], notes=[])


@pytest.fixture()
def controller(api: FakeTaskApi, session: AuthSession, ui: SimpleNamespace) -> AppController:
    def confirm(prompt: str) -> bool:
        ui.prompts.append(prompt)
        return ui.answer

    return AppController(api, session, confirm=confirm, notify=ui.notes.append)
