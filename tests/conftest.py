import pytest
from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session")
def qt_core_app():
    """A Qt core application so the store's signals can be exercised without a display."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app
