"""
Tracking Preferences

QSettings-backed opt-in flag and anonymous client id for PyQt6 host
applications. Privacy-first: the client id is a random UUID, nothing else
about the user is stored.
"""

import logging
import uuid
from typing import Any, Dict

from PyQt6.QtCore import QSettings

logger = logging.getLogger(__name__)

ENABLED_KEY = "telemetry_enabled"
CLIENT_ID_KEY = "telemetry_client_id"


class QSettingsManager:
    """Tracking manager reading the user's choice from QSettings on every call"""

    def __init__(self, settings: QSettings):
        """
        Initialize manager

        Args:
            settings: QSettings object for storing preferences
        """
        self.settings = settings

    def is_tracking_enabled(self) -> bool:
        return self.settings.value(ENABLED_KEY, True, type=bool)

    def set_enabled(self, enabled: bool):
        """Enable or disable tracking"""
        self.settings.setValue(ENABLED_KEY, enabled)
        logger.info("Usage tracking %s", "enabled" if enabled else "disabled")

    def client_id(self) -> str:
        """Get existing anonymous client id or create a new one"""
        client_id = self.settings.value(CLIENT_ID_KEY, None)
        if not client_id:
            client_id = str(uuid.uuid4())
            self.settings.setValue(CLIENT_ID_KEY, client_id)
        return client_id

    def get_user_info(self) -> Dict[str, Any]:
        """Get tracking info for display in settings (for transparency)"""
        return {
            "client_id": self.client_id(),
            "enabled": self.is_tracking_enabled(),
        }
