# persona_core/storage/models.py
from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

from persona_core.constants import VALID_STATES
from persona_core.utils import parse_ts


@dataclass
class TrustRecord:
    """
    Device trust answer for one identity, as persisted in ``usersComputer``.

    ``updated`` is the ISO timestamp of the last transition.
    """
    state: str
    updated: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def updated_at(self) -> Optional[float]:
        return parse_ts(self.updated)

    @classmethod
    def from_dict(cls, data: Any, allowed=VALID_STATES) -> Optional["TrustRecord"]:
        """Return a record, or None if ``data`` is not a well-formed entry."""
        if not isinstance(data, dict):
            return None
        state = data.get("state")
        if state not in allowed:
            return None
        updated = data.get("updated")
        if parse_ts(updated) is None:
            return None
        return cls(state=state, updated=updated)


@dataclass
class StagedReturnTo:
    url: Any
    staged_at: str

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "stagedAt": self.staged_at}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StagedReturnTo":
        return cls(url=data.get("url"), staged_at=data.get("stagedAt"))
