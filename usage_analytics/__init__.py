"""
Usage Analytics

Fire-and-forget usage pings for IDE plugins and desktop tools.
Anonymous client id, opt-out honoured on every event, failures never reach the host.
"""

from .settings import CallableManager, UsageTrackerSettings
from .tracker import UsageTracker, TrackingEventBuilder
from .config import create_tracker, load_settings

__all__ = [
    'CallableManager',
    'UsageTrackerSettings',
    'UsageTracker',
    'TrackingEventBuilder',
    'create_tracker',
    'load_settings',
]
