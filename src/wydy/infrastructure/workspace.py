"""Workspace — the single dependency injected into every service.

Owns the script store, the plugin manager, and the resolution pipeline,
all derived from :class:`~wydy.config.settings.WydySettings`. Variables are
re-read from disk for every resolution so edits made while the daemon is
running take effect on the next request.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

from wydy.infrastructure.scripts import ScriptStore
from wydy.infrastructure.variables import VarStore

if TYPE_CHECKING:
    from wydy.config.settings import WydySettings
    from wydy.domain.candidate import Candidate
    from wydy.plugins.manager import PluginManager
    from wydy.services.resolution import ResolutionPipeline

logger = logging.getLogger(__name__)


class Workspace:
    """Lazily wired collaborators for one process.

    Parameters:
        settings: Frozen settings for this invocation.
        search_path: Override for ``$PATH`` (tests, sandboxes).
        load_plugins: Discover entry-point plugins on first use.
    """

    def __init__(
        self,
        settings: WydySettings,
        *,
        search_path: Sequence[Path] | None = None,
        load_plugins: bool = True,
    ) -> None:
        self._settings = settings
        self._search_path = search_path
        self._load_plugins = load_plugins
        self._scripts: ScriptStore | None = None
        self._plugins: PluginManager | None = None
        self._pipeline: ResolutionPipeline | None = None

    @property
    def settings(self) -> WydySettings:
        return self._settings

    @property
    def scripts(self) -> ScriptStore:
        if self._scripts is None:
            self._scripts = ScriptStore(
                self._settings.scripts_dir,
                default_suffix=self._settings.paths.script_suffix,
            )
        return self._scripts

    @property
    def plugins(self) -> PluginManager:
        if self._plugins is None:
            from wydy.plugins.manager import PluginManager

            self._plugins = PluginManager()
            if self._load_plugins:
                names = self._plugins.discover_and_load()
                logger.debug("Plugins loaded: %s", names)
        return self._plugins

    @property
    def pipeline(self) -> ResolutionPipeline:
        if self._pipeline is None:
            from wydy.services.resolution import ResolutionPipeline

            self._pipeline = ResolutionPipeline(
                self.scripts,
                search_path=self._search_path,
                plugins=self.plugins,
                vars_file=self._settings.vars_file,
            )
        return self._pipeline

    def variables(self) -> VarStore:
        """A fresh view of the variables file."""
        return VarStore(self._settings.vars_file)

    def resolve(self, text: str) -> list[Candidate]:
        """Resolve *text* against a variables snapshot taken now."""
        return self.pipeline.resolve(text, self.variables().snapshot())
