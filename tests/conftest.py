import pytest

from roasboard.application.dashboard_service import DashboardSession
from roasboard.ingestion import load_template_dataset


@pytest.fixture()
def template_dataset():
    return load_template_dataset()


@pytest.fixture()
def session():
    return DashboardSession(auto_load_template=True)


@pytest.fixture()
def no_auto_template(monkeypatch):
    monkeypatch.setenv("ROASBOARD_AUTO_LOAD_TEMPLATE", "0")
