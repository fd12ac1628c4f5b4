"""State: last known attributes of every managed entity, keyed by address."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, MutableMapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel

logger = logging.getLogger(__name__)

STATE_VERSION = 1


class State(MutableMapping[str, dict[str, Any]]):
    """Mapping of '<kind>.<label>' addresses to recorded model attributes."""

    def __init__(
        self,
        path: Path | None = None,
        entries: dict[str, dict[str, Any]] | None = None,
    ) -> None:
        self.path = path
        self._entries: dict[str, dict[str, Any]] = dict(entries or {})

    @classmethod
    def load(cls, path: str | Path) -> State:
        """Read a state file; a missing file yields empty state."""
        path = Path(path)
        if not path.is_file():
            logger.debug("No state file at %s", path)
            return cls(path)

        data = json.loads(path.read_text())
        version = data.get("version")
        if version != STATE_VERSION:
            raise ValueError(f"{path}: unsupported state version {version!r}")

        logger.debug("Loaded %d state entries from %s", len(data["resources"]), path)
        return cls(path, data["resources"])

    def save(self) -> None:
        if self.path is None:
            return
        data = {"version": STATE_VERSION, "resources": self._entries}
        self.path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n")
        logger.debug("Saved %d state entries to %s", len(self._entries), self.path)

    def record(self, address: str, model: BaseModel) -> None:
        self._entries[address] = model.model_dump(mode="json")

    def forget(self, address: str) -> None:
        self._entries.pop(address, None)

    def by_kind(self) -> dict[str, dict[str, dict[str, Any]]]:
        """Nest entries as {kind: {label: attrs}} for reference resolution."""
        nested: dict[str, dict[str, dict[str, Any]]] = {}
        for address, attrs in self._entries.items():
            kind, _, label = address.partition(".")
            nested.setdefault(kind, {})[label] = attrs
        return nested

    def __getitem__(self, address: str) -> dict[str, Any]:
        return self._entries[address]

    def __setitem__(self, address: str, attrs: dict[str, Any]) -> None:
        self._entries[address] = attrs

    def __delitem__(self, address: str) -> None:
        del self._entries[address]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"State(path={self.path}, entries={len(self._entries)})"
