"""
Event Encoder

Builds the Measurement Protocol form fields for one usage ping.
Metadata travels in the page-title field as key=value pairs joined by commas,
with commas, equals signs and backslashes escaped so the string can be split
back into the original pairs.
"""

import platform
from typing import Dict, List, Mapping, Optional, Tuple

from .settings import UsageTrackerSettings

Payload = List[Tuple[str, str]]

# Measurement Protocol keys
PROTOCOL_VERSION_KEY = "v"
HIT_TYPE_KEY = "t"
IS_NON_INTERACTIVE_KEY = "ni"
UNIQUE_CLIENT_ID_KEY = "cid"
PAGE_HOST_KEY = "dh"
PROPERTY_ID_KEY = "tid"
EVENT_TYPE_KEY = "cd19"
EVENT_NAME_KEY = "cd20"
IS_INTERNAL_USER_KEY = "cd16"
IS_USER_SIGNED_IN_KEY = "cd17"
PAGE_URL_KEY = "dp"
IS_VIRTUAL_KEY = "cd21"
PAGE_TITLE_KEY = "dt"

PAGE_VIEW_VALUE = "pageview"
STRING_FALSE_VALUE = "0"
STRING_TRUE_VALUE = "1"
NULL_VALUE = "null"

# Plugin metadata keys, in the order they appear in the page title.
# "jdkVersion" is what the collector dashboards group runtime versions on.
PLATFORM_NAME_KEY = "applicationName"
PLATFORM_VERSION_KEY = "applicationVersion"
RUNTIME_VERSION_KEY = "jdkVersion"
OPERATING_SYSTEM_KEY = "operatingSystem"
PLUGIN_VERSION_KEY = "pluginVersion"

# Apparently the hit type should always be 'pageview'.
BASE_PAYLOAD: Tuple[Tuple[str, str], ...] = (
    (PROTOCOL_VERSION_KEY, "1"),
    (HIT_TYPE_KEY, PAGE_VIEW_VALUE),
    (IS_NON_INTERACTIVE_KEY, STRING_FALSE_VALUE),
)

_ESCAPES = {
    ",": "\\,",
    "=": "\\=",
    "\\": "\\\\",
}

# Snapshot of the process environment, taken once at import
RUNTIME_VERSION = platform.python_version()
OPERATING_SYSTEM = platform.system() + platform.release().lower()


def escape(value: Optional[str]) -> str:
    """Escape ',', '=' and '\\' in a metadata key or value"""
    if value is None:
        return NULL_VALUE
    return "".join(_ESCAPES.get(char, char) for char in str(value))


def join_metadata(pairs) -> str:
    """Join already-escaped (key, value) pairs as key=value,key=value"""
    return ",".join(f"{key}={value}" for key, value in pairs)


def split_metadata(text: str) -> List[Tuple[str, str]]:
    """
    Reverse join_metadata() + escape()

    Splits on unescaped ',' then unescaped '=' and unescapes each part.

    Args:
        text: A page-title metadata string

    Returns:
        List of (key, value) pairs in their original order
    """
    if not text:
        return []

    pairs = []
    key_chars: List[str] = []
    value_chars: List[str] = []
    current = key_chars
    seen_separator = False
    chars = iter(text)
    for char in chars:
        if char == "\\":
            current.append(next(chars, ""))
        elif char == ",":
            pairs.append(("".join(key_chars), "".join(value_chars)))
            key_chars, value_chars = [], []
            current = key_chars
            seen_separator = False
        elif char == "=" and not seen_separator:
            current = value_chars
            seen_separator = True
        else:
            current.append(char)
    pairs.append(("".join(key_chars), "".join(value_chars)))
    return pairs


def build_static_metadata_string(settings: UsageTrackerSettings) -> str:
    """Escape and join the five platform metadata fields in their fixed order"""
    static_metadata = (
        (PLATFORM_NAME_KEY, escape(settings.platform_name)),
        (PLATFORM_VERSION_KEY, escape(settings.platform_version)),
        (RUNTIME_VERSION_KEY, escape(RUNTIME_VERSION)),
        (OPERATING_SYSTEM_KEY, escape(OPERATING_SYSTEM)),
        (PLUGIN_VERSION_KEY, escape(settings.plugin_version)),
    )
    return join_metadata(static_metadata)


def virtual_page_url(category: str, action: str) -> str:
    """Synthetic page path the collector groups events on (not escaped)"""
    return f"/virtual/{category}/{action}"


def build_payload(
    settings: UsageTrackerSettings,
    static_metadata: str,
    category: str,
    action: str,
    metadata: Optional[Mapping[str, str]] = None,
) -> Payload:
    """
    Build the ordered form fields for one pageview ping

    See https://developers.google.com/analytics/devguides/collection/protocol/v1/reference
    for the meaning of each key.

    Args:
        settings: Tracker settings supplying identity fields
        static_metadata: Pre-joined platform metadata string
        category: Event category
        action: Event action
        metadata: Optional per-event metadata; None or empty adds nothing

    Returns:
        List of (key, value) tuples in protocol order
    """
    payload: Payload = list(BASE_PAYLOAD)
    payload.append((UNIQUE_CLIENT_ID_KEY, settings.client_id))
    payload.append((PAGE_HOST_KEY, settings.page_host))
    payload.append((PROPERTY_ID_KEY, settings.analytics_id))
    payload.append((EVENT_TYPE_KEY, category))
    payload.append((EVENT_NAME_KEY, action))
    payload.append((IS_INTERNAL_USER_KEY, STRING_FALSE_VALUE))
    payload.append((IS_USER_SIGNED_IN_KEY, STRING_FALSE_VALUE))

    payload.append((PAGE_URL_KEY, virtual_page_url(category, action)))
    payload.append((IS_VIRTUAL_KEY, STRING_TRUE_VALUE))

    full_metadata = static_metadata
    if metadata:
        escaped = [(escape(key), escape(value)) for key, value in metadata.items()]
        full_metadata = static_metadata + "," + join_metadata(escaped)
    payload.append((PAGE_TITLE_KEY, full_metadata))
    return payload


class EventEncoder:
    """Caches the static metadata string for one tracker instance"""

    def __init__(self, settings: UsageTrackerSettings):
        self.settings = settings
        self.static_metadata = build_static_metadata_string(settings)

    def build_payload(
        self, category: str, action: str, metadata: Optional[Dict[str, str]] = None
    ) -> Payload:
        return build_payload(self.settings, self.static_metadata, category, action, metadata)
