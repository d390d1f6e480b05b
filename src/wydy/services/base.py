"""BaseService — shared foundation for wydy services.

Every service receives a :class:`Workspace` at construction time and
returns :class:`~wydy.services.result.ServiceResult` from its public
methods.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wydy.infrastructure.workspace import Workspace


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ResolveService(BaseService):
            def resolve(self, text: str) -> ServiceResult:
                candidates = self._workspace.resolve(text)
                ...
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace
