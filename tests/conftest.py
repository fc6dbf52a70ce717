"""Pytest configuration"""

import pytest

from paneldock.core.ids import PanelId
from paneldock.runtime.bootstrap import bootstrap
from paneldock.telemetry import metrics


@pytest.fixture
def components():
    """Default layout with every panel registered"""
    return bootstrap()


@pytest.fixture
def manager(components):
    return components.manager


@pytest.fixture
def sink(manager):
    return manager.handle()


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics around every test"""
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture(params=list(PanelId), ids=lambda panel: panel.value)
def any_panel(request):
    """Each PanelId in turn"""
    return request.param
