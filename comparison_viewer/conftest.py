"""
Shared pytest fixtures for the comparison viewer.
"""

import pytest
from PyQt5.QtCore import QCoreApplication


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    """One QCoreApplication for the whole test run."""
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app
