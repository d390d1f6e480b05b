"""ScriptsService — list saved scripts."""

from __future__ import annotations

from wydy.services.base import BaseService
from wydy.services.result import ServiceResult


class ScriptsService(BaseService):
    def list_scripts(self) -> ServiceResult:
        store = self._workspace.scripts
        items = [{"name": p.name, "path": str(p)} for p in store.list_scripts()]
        return ServiceResult(
            ok=True,
            op="list_scripts",
            data={"directory": str(store.scripts_dir), "count": len(items), "items": items},
        )
