"""
Analytics Configuration Example

Copy this file to 'analytics_config.py' and fill in your property details.
"""

# Analytics property
ANALYTICS_ID = 'UA-00000000-1'
PAGE_HOST = 'virtual.intellij'

# Host platform and plugin
PLATFORM_NAME = 'idea'
PLATFORM_VERSION = '2018.2.0.0'
PLUGIN_NAME = 'gcloud-intellij'
PLUGIN_VERSION = '18.4.2'
USER_AGENT = 'gcloud-intellij-cloud-tools-plugin/18.4.2 (IntelliJ IDEA)'

# Anonymous client id (a random UUID is generated when left empty)
CLIENT_ID = None

# Tracking settings
TELEMETRY_ENABLED = True
TELEMETRY_DEBUG = False
TELEMETRY_DEBUG_LOG = None  # defaults to ~/usage_analytics_debug.log
