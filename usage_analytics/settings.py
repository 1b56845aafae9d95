"""
Usage Tracker Settings

Immutable configuration handed to the tracker by the host application.
"""

from typing import Callable, Optional, Protocol, Union


class UsageTrackerManager(Protocol):
    """Host-side switch deciding whether usage pings may be sent"""

    def is_tracking_enabled(self) -> bool:
        ...


class CallableManager:
    """Adapts a plain zero-argument callable to the manager interface"""

    def __init__(self, predicate: Callable[[], bool]):
        self._predicate = predicate

    def is_tracking_enabled(self) -> bool:
        return bool(self._predicate())


class UsageTrackerSettings:
    """
    Read-only tracker settings

    All fields except the manager are opaque strings and default to "".
    The manager is consulted on every call to is_tracking_enabled(), so the
    host can switch tracking on or off while the tracker is alive.
    """

    __slots__ = (
        "manager",
        "analytics_id",
        "client_id",
        "page_host",
        "platform_name",
        "platform_version",
        "plugin_name",
        "plugin_version",
        "user_agent",
    )

    def __init__(
        self,
        manager: Union[UsageTrackerManager, Callable[[], bool], None],
        analytics_id: str = "",
        client_id: str = "",
        page_host: str = "",
        platform_name: str = "",
        platform_version: str = "",
        plugin_name: str = "",
        plugin_version: str = "",
        user_agent: str = "",
    ):
        """
        Initialize settings

        Args:
            manager: Object with is_tracking_enabled(), or a bare callable
            analytics_id: Analytics property id (e.g. UA-12345-1)
            client_id: Anonymous unique client id
            page_host: Virtual page host reported with every ping
            platform_name: Host platform name (e.g. "idea")
            platform_version: Host platform version
            plugin_name: Plugin name, used as the event category
            plugin_version: Plugin version
            user_agent: User-Agent header sent with every ping

        Raises:
            ValueError: If manager is None
        """
        if manager is None:
            raise ValueError("UsageTrackerSettings requires a tracking manager")
        if not hasattr(manager, "is_tracking_enabled"):
            if not callable(manager):
                raise ValueError(
                    f"Tracking manager must be callable or define is_tracking_enabled(): {manager!r}"
                )
            manager = CallableManager(manager)

        values = {
            "manager": manager,
            "analytics_id": analytics_id,
            "client_id": client_id,
            "page_host": page_host,
            "platform_name": platform_name,
            "platform_version": platform_version,
            "plugin_name": plugin_name,
            "plugin_version": plugin_version,
            "user_agent": user_agent,
        }
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name, value):
        raise AttributeError(f"UsageTrackerSettings is read-only (cannot set {name!r})")

    def __delattr__(self, name):
        raise AttributeError(f"UsageTrackerSettings is read-only (cannot delete {name!r})")

    def is_tracking_enabled(self) -> bool:
        """Ask the manager whether tracking is currently enabled"""
        return bool(self.manager.is_tracking_enabled())

    def __repr__(self) -> str:
        return (
            f"UsageTrackerSettings(analytics_id={self.analytics_id!r}, "
            f"plugin_name={self.plugin_name!r}, plugin_version={self.plugin_version!r})"
        )


def require_settings(settings: Optional[UsageTrackerSettings]) -> UsageTrackerSettings:
    """Fail fast when a tracker is constructed without settings"""
    if settings is None:
        raise ValueError("Usage tracker settings must not be None")
    return settings
