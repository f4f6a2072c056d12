"""Extension layer — hook dispatch via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: Plugin failures are warnings, never errors.
"""

from draftsync.plugins.event_bus import EventBus
from draftsync.plugins.manager import PluginManager

__all__ = ["EventBus", "PluginManager"]
