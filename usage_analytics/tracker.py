"""
Usage Tracker

Front-end the host application talks to. Every event first asks the settings
whether tracking is enabled, then goes either to the Google Analytics tracker
or to a no-op tracker, so the host can flip tracking on or off at runtime.
"""

import logging
from typing import Dict, Optional

from .dispatcher import PingDispatcher
from .encoder import EventEncoder
from .settings import UsageTrackerSettings, require_settings

logger = logging.getLogger(__name__)


class GoogleUsageTracker:
    """Encodes events and sends them as virtual pageview pings"""

    def __init__(self, settings: UsageTrackerSettings, dispatcher: Optional[PingDispatcher] = None):
        self.settings = settings
        self.encoder = EventEncoder(settings)
        self.dispatcher = dispatcher or PingDispatcher(settings.user_agent)

    def send_event(self, category: str, action: str, metadata: Optional[Dict[str, str]] = None) -> None:
        """Send a (virtual) "pageview" ping to the analytics property"""
        payload = self.encoder.build_payload(category, action, metadata)
        logger.debug("Sending usage ping %s/%s", category, action)
        self.dispatcher.send(payload)


class NoOpUsageTracker:
    """Used while tracking is disabled; never encodes or sends anything"""

    def send_event(self, category: str, action: str, metadata: Optional[Dict[str, str]] = None) -> None:
        pass


class TrackingEventBuilder:
    """Collects metadata for one event, then sends it with ping()"""

    def __init__(self, tracker, category: str, action: str):
        self._tracker = tracker
        self.category = category
        self.action = action
        self.metadata: Dict[str, str] = {}

    def add_metadata(self, key: str, value: str) -> "TrackingEventBuilder":
        self.metadata[key] = value
        return self

    def ping(self) -> None:
        self._tracker.send_event(self.category, self.action, self.metadata or None)


class UsageTracker:
    """
    Usage tracker entry point

    Example:
        tracker = UsageTracker(settings)
        tracker.track_event("deploy").add_metadata("kind", "flex").ping()
    """

    def __init__(self, settings: UsageTrackerSettings, dispatcher: Optional[PingDispatcher] = None):
        """
        Initialize tracker

        Args:
            settings: Tracker settings (required)
            dispatcher: Optional dispatcher; defaults to one posting to the collector

        Raises:
            ValueError: If settings is None
        """
        self.settings = require_settings(settings)
        self._active = GoogleUsageTracker(self.settings, dispatcher)
        self._disabled = NoOpUsageTracker()

    @classmethod
    def create(cls, settings: UsageTrackerSettings) -> "UsageTracker":
        return cls(settings)

    def current(self):
        """Tracker variant to use for the next event"""
        if self.settings.is_tracking_enabled():
            return self._active
        return self._disabled

    def send_event(self, category: str, action: str, metadata: Optional[Dict[str, str]] = None) -> None:
        """
        Send one usage event

        Args:
            category: Event category
            action: Event action
            metadata: Optional per-event key/value pairs
        """
        self.current().send_event(category, action, metadata)

    def track_event(self, action: str) -> TrackingEventBuilder:
        """Start an event in the plugin's own category"""
        return TrackingEventBuilder(self, self.settings.plugin_name, action)
