"""Pytest configuration - consistent CWD and an offscreen Qt application.

Config loading resolves its default path relative to the current working
directory, so tests always run from the project root. Qt tests share one
QApplication using the offscreen platform so no display is needed.
"""
from __future__ import annotations

import os
from pathlib import Path
import pytest

ROOT = Path(__file__).resolve().parents[1]

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def pytest_sessionstart(session):
    os.chdir(ROOT)


@pytest.fixture
def project_root():
    """Return path to project root."""
    return ROOT


@pytest.fixture(scope="session")
def qapp():
    """Shared QApplication for widget, timer and painter tests."""
    from PyQt5.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication(["flowlines-tests"])
    yield app


@pytest.fixture
def config():
    """Default config with a fixed seed."""
    from flowlines.config import FlowConfig
    return FlowConfig(seed=12345)
