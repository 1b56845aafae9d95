"""
Pytest configuration and shared fixtures
"""
import pytest
import sys
import os
import types
from unittest.mock import MagicMock

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from usage_analytics.dispatcher import PingDispatcher
from usage_analytics.settings import UsageTrackerSettings
from tests.fixtures.collector_server import collector_server, garbage_server  # noqa: F401


@pytest.fixture
def make_settings():
    """Factory for settings with test values"""
    def _make_settings(manager=lambda: True, **overrides):
        values = {
            "analytics_id": "UA-123",
            "client_id": "client-123",
            "page_host": "virtual.test",
            "platform_name": "platform",
            "platform_version": "platform-version",
            "plugin_name": "plugin",
            "plugin_version": "plugin-version",
            "user_agent": "agent",
        }
        values.update(overrides)
        return UsageTrackerSettings(manager, **values)
    return _make_settings


@pytest.fixture
def settings(make_settings):
    """Settings with tracking enabled"""
    return make_settings()


@pytest.fixture
def mock_dispatcher():
    """Dispatcher mock recording payloads without touching the network"""
    return MagicMock(spec=PingDispatcher)


@pytest.fixture
def config_module():
    """Factory for an in-memory analytics_config module"""
    def _config_module(**attrs):
        module = types.ModuleType("analytics_config")
        defaults = {
            "ANALYTICS_ID": "UA-999",
            "PAGE_HOST": "virtual.test",
            "PLATFORM_NAME": "idea",
            "PLATFORM_VERSION": "2018.2",
            "PLUGIN_NAME": "gcloud-intellij",
            "PLUGIN_VERSION": "18.4.2",
            "USER_AGENT": "test-agent/1.0",
            "TELEMETRY_ENABLED": True,
        }
        defaults.update(attrs)
        for name, value in defaults.items():
            setattr(module, name, value)
        return module
    return _config_module


@pytest.fixture(autouse=True)
def no_proxy_for_localhost(monkeypatch):
    """Keep local collector traffic away from any configured HTTP proxy"""
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
