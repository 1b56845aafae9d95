"""
Configuration Loading

Reads tracker settings from the host's analytics_config.py module
(see analytics_config.example.py) and sets up the optional debug log.
"""

import importlib
import logging
import os
import uuid
from pathlib import Path
from types import ModuleType
from typing import Optional

from .settings import CallableManager, UsageTrackerSettings
from .tracker import UsageTracker

logger = logging.getLogger(__name__)

CONFIG_MODULE = "analytics_config"
DEFAULT_DEBUG_LOG = Path.home() / "usage_analytics_debug.log"
PACKAGE_LOGGER = "usage_analytics"


def load_config_module(name: str = CONFIG_MODULE) -> Optional[ModuleType]:
    """Import the analytics config module, or return None if it doesn't exist"""
    try:
        return importlib.import_module(name)
    except ImportError as e:
        logger.debug("%s.py not found - usage tracking unavailable: %s", name, e)
        return None


def load_settings(config: Optional[ModuleType] = None, manager=None) -> Optional[UsageTrackerSettings]:
    """
    Build tracker settings from analytics_config

    Args:
        config: Config module; imports analytics_config when omitted
        manager: Tracking manager; defaults to reading TELEMETRY_ENABLED live
            from the config module

    Returns:
        UsageTrackerSettings, or None if no config module is available
    """
    if config is None:
        config = load_config_module()
        if config is None:
            return None

    if manager is None:
        manager = CallableManager(lambda: bool(getattr(config, "TELEMETRY_ENABLED", True)))

    client_id = getattr(config, "CLIENT_ID", None)
    if not client_id and hasattr(manager, "client_id"):
        client_id = manager.client_id()
    if not client_id:
        client_id = str(uuid.uuid4())

    return UsageTrackerSettings(
        manager,
        analytics_id=getattr(config, "ANALYTICS_ID", ""),
        client_id=client_id,
        page_host=getattr(config, "PAGE_HOST", ""),
        platform_name=getattr(config, "PLATFORM_NAME", ""),
        platform_version=getattr(config, "PLATFORM_VERSION", ""),
        plugin_name=getattr(config, "PLUGIN_NAME", ""),
        plugin_version=getattr(config, "PLUGIN_VERSION", ""),
        user_agent=getattr(config, "USER_AGENT", ""),
    )


def create_tracker(config: Optional[ModuleType] = None, manager=None) -> Optional[UsageTracker]:
    """Load settings and wrap them in a UsageTracker (None if unconfigured)"""
    settings = load_settings(config, manager)
    if settings is None:
        return None
    return UsageTracker(settings)


def configure_debug_logging(config: Optional[ModuleType] = None) -> Optional[logging.Handler]:
    """
    Write package debug logs to a file when TELEMETRY_DEBUG is set

    Args:
        config: Config module; imports analytics_config when omitted

    Returns:
        The file handler in use, or None if debug logging is off
    """
    if config is None:
        config = load_config_module()
    if config is None or not getattr(config, "TELEMETRY_DEBUG", False):
        return None

    log_file = Path(getattr(config, "TELEMETRY_DEBUG_LOG", None) or DEFAULT_DEBUG_LOG).expanduser()
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in package_logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(log_file):
            return handler

    handler = logging.FileHandler(log_file)
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter("[%(asctime)s] [%(name)s] %(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)
    logger.debug("Debug log enabled: %s", log_file)
    return handler
