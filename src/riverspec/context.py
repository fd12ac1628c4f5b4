"""Runtime execution context for the build pipeline."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from .state import State

if TYPE_CHECKING:
    from .provider import Provider


class Context[P]:
    """Runtime state passed through the build chain."""

    def __init__(
        self,
        target: P,
        *,
        provider: Provider | None = None,
        state: State | None = None,
        variables: dict[str, Any] | None = None,
        dry_run: bool = False,
    ) -> None:
        self.target = target
        self.provider = provider
        self.state = state if state is not None else State()
        self.variables = variables or {}
        self.dry_run = dry_run

    def references(self) -> dict[str, Any]:
        """Values visible to ${...} references in spec attributes."""
        refs: dict[str, Any] = dict(self.state.by_kind())
        refs["env"] = dict(os.environ)
        refs["var"] = self.variables
        refs["CWD"] = os.getcwd
        return refs
