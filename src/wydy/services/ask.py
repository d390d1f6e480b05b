"""AskService — run one exchange against the daemon.

Protocol failures are fatal for the exchange and come back as a failed
ServiceResult; the CLI turns that into exit status 1.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from wydy.infrastructure.executor import SpawnFailure, run_command
from wydy.protocol.errors import ProtocolError
from wydy.protocol.requester import ExchangeStatus, Requester
from wydy.services.base import BaseService
from wydy.services.result import ServiceResult

logger = logging.getLogger(__name__)


class AskService(BaseService):
    """Sends a phrase to the daemon and relays the outcome.

    *requester_options* are forwarded to :class:`Requester` (``prompt``,
    ``echo``, ``executor``).
    """

    def ask(
        self,
        text: str,
        *,
        locally: bool | None = None,
        connect: Callable[..., Requester] = Requester.connect,
        **requester_options: Any,
    ) -> ServiceResult:
        op = "ask"
        settings = self._workspace.settings
        if locally is None:
            locally = settings.client.locally

        executor = requester_options.pop("executor", run_command)
        scripts = self._workspace.scripts

        def run_locally(command: str, *, wait: bool = True) -> int:
            scripts.ensure_dir_for(command)
            return executor(command, wait=wait)

        try:
            with connect(
                settings.server.host,
                settings.server.port,
                executor=run_locally,
                **requester_options,
            ) as req:
                outcome = req.ask(text, locally=locally)
        except ProtocolError as exc:
            logger.debug("Exchange failed", exc_info=True)
            return ServiceResult.failure(op, exc.code, str(exc))
        except SpawnFailure as exc:
            return ServiceResult.failure(op, "SPAWN_FAILURE", str(exc), command=exc.command)

        data: dict[str, Any] = {"input": text, "status": outcome.status.value}
        warnings: list[str] = []
        if outcome.status is ExchangeStatus.EXECUTED:
            data["code"] = outcome.code
            data["ran_on"] = outcome.ran_on.name.lower() if outcome.ran_on else None
            data["description"] = outcome.description
        elif outcome.status is ExchangeStatus.OUTPUT:
            warnings.append(f"Nothing to do for {text!r}")
        elif outcome.status is ExchangeStatus.INVALID:
            warnings.append("The daemon sent an invalid response; nothing was run")
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
