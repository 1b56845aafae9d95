"""
Unit tests for tracker settings
"""
import os
import subprocess
import sys

import pytest

from usage_analytics.settings import CallableManager, UsageTrackerSettings


class TestUsageTrackerSettings:
    """Test settings construction and immutability"""

    def test_none_manager_raises(self):
        with pytest.raises(ValueError):
            UsageTrackerSettings(None)

    def test_non_callable_manager_raises(self):
        with pytest.raises(ValueError):
            UsageTrackerSettings("yes")

    def test_callable_manager(self):
        settings = UsageTrackerSettings(lambda: True)
        assert settings is not None
        assert settings.is_tracking_enabled() is True
        assert isinstance(settings.manager, CallableManager)

    def test_manager_object(self):
        class Manager:
            def is_tracking_enabled(self):
                return False

        manager = Manager()
        settings = UsageTrackerSettings(manager)
        assert settings.manager is manager
        assert settings.is_tracking_enabled() is False

    def test_defaults_to_empty_strings(self):
        settings = UsageTrackerSettings(lambda: True)
        assert settings.analytics_id == ""
        assert settings.user_agent == ""

    def test_predicate_evaluated_on_every_call(self):
        state = {"enabled": True}
        settings = UsageTrackerSettings(lambda: state["enabled"])

        assert settings.is_tracking_enabled() is True
        state["enabled"] = False
        assert settings.is_tracking_enabled() is False

    def test_read_only(self, settings):
        with pytest.raises(AttributeError):
            settings.analytics_id = "other"
        with pytest.raises(AttributeError):
            del settings.client_id
        assert settings.analytics_id == "UA-123"

    def test_repr(self, settings):
        assert "UA-123" in repr(settings)


class TestPackageImports:
    """Core package works without the optional Qt extra"""

    def test_import_does_not_load_qt(self):
        root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
        code = (
            "import sys, usage_analytics, usage_analytics.__main__; "
            "print(any(name.startswith('PyQt6') for name in sys.modules))"
        )
        result = subprocess.run(
            [sys.executable, "-c", code], cwd=root, capture_output=True, text=True, check=True
        )
        assert result.stdout.strip() == "False"
