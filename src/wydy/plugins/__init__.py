"""Extension layer — extra resolvers and execution listeners via pluggy.

Discovery: entry points in the ``wydy.plugins`` group.
INVARIANT: Plugin failures are warnings, never errors.
"""

from wydy.plugins.manager import PluginManager, hookimpl

__all__ = ["PluginManager", "hookimpl"]
