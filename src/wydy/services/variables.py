"""VariablesService — inspect and change the persistent variables."""

from __future__ import annotations

from wydy.services.base import BaseService
from wydy.services.result import ServiceResult

KNOWN_VARIABLES = ("browser", "editor", "search_engine")


class VariablesService(BaseService):
    def list_vars(self) -> ServiceResult:
        store = self._workspace.variables()
        items = [{"key": k, "value": v} for k, v in store.items()]
        return ServiceResult(
            ok=True,
            op="list_vars",
            data={"path": str(store.path), "count": len(items), "items": items},
        )

    def get_var(self, key: str) -> ServiceResult:
        value = self._workspace.variables().value_of(key)
        if value is None:
            return ServiceResult.failure("get_var", "NOT_FOUND", f"Variable {key!r} is not set")
        return ServiceResult(ok=True, op="get_var", data={"key": key, "value": value})

    def set_var(self, key: str, value: str) -> ServiceResult:
        store = self._workspace.variables()
        store.set(key, value)
        warnings = []
        if key not in KNOWN_VARIABLES:
            warnings.append(f"{key!r} is not used by the built-in resolvers")
        return ServiceResult(
            ok=True,
            op="set_var",
            data={"key": key, "value": value, "path": str(store.path)},
            warnings=warnings,
        )

    def unset_var(self, key: str) -> ServiceResult:
        if not self._workspace.variables().unset(key):
            return ServiceResult.failure("unset_var", "NOT_FOUND", f"Variable {key!r} is not set")
        return ServiceResult(ok=True, op="unset_var", data={"key": key})
