"""ResolveService — show what a phrase resolves to without a daemon."""

from __future__ import annotations

from typing import Any

from wydy.domain.candidate import Candidate
from wydy.domain.parser import parse_command
from wydy.services.base import BaseService
from wydy.services.result import ServiceResult


def candidate_payload(candidate: Candidate) -> dict[str, Any]:
    return {
        "command": candidate.command,
        "description": candidate.description,
        "location": candidate.location.name.lower(),
    }


class ResolveService(BaseService):
    def resolve(self, text: str) -> ServiceResult:
        op = "resolve"
        parsed = parse_command(text)
        candidates = self._workspace.resolve(text)
        data = {
            "input": text,
            "keyword": parsed.keyword.value,
            "remainder": parsed.remainder,
            "count": len(candidates),
            "items": [candidate_payload(c) for c in candidates],
        }
        warnings = [] if candidates else [f"Nothing to do for {text!r}"]
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)
