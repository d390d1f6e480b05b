"""Plugin discovery, loading, and failure-isolated hook dispatch.

Discovery uses pluggy's native setuptools entry-point loading for the
``wydy.plugins`` group. Each hook implementation is called on its own so
one broken plugin cannot hide the others.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

import pluggy

from wydy.plugins.hookspecs import WydyHookSpec

if TYPE_CHECKING:
    from wydy.domain.candidate import Candidate
    from wydy.domain.parser import ParseResult
    from wydy.domain.types import Location

PROJECT_NAME = "wydy"
ENTRY_POINT_GROUP = "wydy.plugins"

hookimpl = pluggy.HookimplMarker(PROJECT_NAME)

logger = logging.getLogger(__name__)


class PluginManager:
    """Manages plugin discovery, loading, and hook dispatch."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(WydyHookSpec)

    def discover_and_load(self) -> list[str]:
        """Load entry-point plugins and return the names of all registered plugins."""
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        self._instantiate_classes()
        return self.list_plugin_names()

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        resolved_name = name or plugin.__class__.__name__
        self._pm.register(plugin, name=resolved_name)
        logger.debug("Registered plugin: %s", resolved_name)

    def list_plugin_names(self) -> list[str]:
        return [name for name, _plugin in self._pm.list_name_plugin()]

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def collect_candidates(
        self, parsed: ParseResult, variables: Mapping[str, str]
    ) -> list[Candidate]:
        """Gather extra candidates from every ``resolve_candidates`` implementation.

        Results are concatenated in registration order. A plugin that raises
        or returns something other than a list is skipped with a warning.
        """
        from wydy.domain.candidate import Candidate

        collected: list[Candidate] = []
        for impl in self._pm.hook.resolve_candidates.get_hookimpls():
            try:
                extra = impl.function(parsed=parsed, variables=variables)
            except Exception:
                logger.warning(
                    "Plugin %s failed in resolve_candidates", impl.plugin_name, exc_info=True
                )
                continue
            if extra is None:
                continue
            if not isinstance(extra, list):
                logger.warning(
                    "Plugin %s returned a non-list from resolve_candidates", impl.plugin_name
                )
                continue
            collected.extend(c for c in extra if isinstance(c, Candidate))
        return collected

    def notify_executed(
        self, command: str, description: str, location: Location, code: int
    ) -> list[str]:
        """Dispatch ``post_execute``. Returns warnings for failing plugins."""
        warnings: list[str] = []
        for impl in self._pm.hook.post_execute.get_hookimpls():
            try:
                impl.function(
                    command=command, description=description, location=location, code=code
                )
            except Exception:
                logger.warning("Plugin %s failed in post_execute", impl.plugin_name, exc_info=True)
                warnings.append(f"post_execute failed for plugin {impl.plugin_name}")
        return warnings

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _instantiate_classes(self) -> None:
        """Replace plugin classes registered from entry points with instances.

        Hook calls against a class leave ``self`` unbound.
        """
        for name, plugin in list(self._pm.list_name_plugin()):
            if not inspect.isclass(plugin):
                continue
            self._pm.unregister(plugin)
            try:
                instance = plugin()
            except Exception:
                logger.warning("Failed to instantiate entry-point plugin %s", name, exc_info=True)
                continue
            self._pm.register(instance, name=name)
            logger.debug("Instantiated entry-point plugin: %s", name)
