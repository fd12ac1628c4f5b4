"""Workspace: a mutable, typed collection of parsed projects."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator, Mapping
from pathlib import Path
from typing import Any, overload

from .blueprints import Blueprint
from .config import ProviderConfig
from .projects import Project
from .resolve import Resolver
from .spec import _spec_registry
from .specop import Absent, Ensure, Present, SpecOp

logger = logging.getLogger(__name__)

# strategy blocks, in the order their ops run
_STRATEGIES: dict[str, type[SpecOp]] = {
    "present": Present,
    "ensure": Ensure,
    "absent": Absent,
}

# project keys that describe structure rather than project fields
_STRUCTURAL_KEYS = {"use", "include", *_STRATEGIES}


def _decode_ops(owner: str, block: dict[str, Any]) -> list[SpecOp]:
    """Turn the strategy blocks of a blueprint or project into SpecOps.

    python-hcl2 yields ``{"ensure": [{"service": {"name": "web"}}, ...]}``.
    Declaration order is kept within a strategy; across strategies all
    present ops come first, then ensure, then absent.
    """
    ops: list[SpecOp] = []
    for strategy, op_type in _STRATEGIES.items():
        for entry in block.get(strategy, []):
            for kind, attrs in entry.items():
                spec_type = _spec_registry.get(kind)
                if spec_type is None:
                    raise ValueError(f"{owner}: Unknown spec type: '{kind}'")
                try:
                    instance = spec_type(**attrs)
                except ValueError as exc:
                    raise ValueError(f"{owner}: {exc}") from exc
                logger.debug("%s: %s %s", owner, strategy, kind)
                ops.append(op_type(instance))
    return ops


class _BlueprintGraph:
    """Expand blueprint includes depth-first, memoizing each blueprint."""

    def __init__(self, pending: dict[str, dict[str, Any]]) -> None:
        self.pending = pending
        self.done: dict[str, Blueprint] = {}
        self._active: list[str] = []

    def resolve_all(self) -> dict[str, Blueprint]:
        for name in self.pending:
            self.resolve(name)
        return self.done

    def resolve(self, name: str) -> Blueprint:
        if name in self.done:
            return self.done[name]
        if name in self._active:
            chain = " -> ".join([*self._active, name])
            raise ValueError(f"Circular include detected: '{name}' ({chain})")
        if name not in self.pending:
            raise ValueError(f"Unknown blueprint: '{name}'")

        self._active.append(name)
        data = self.pending[name]
        ops = [op for included in data.get("include", []) for op in self.resolve(included).ops]
        ops += _decode_ops(f"blueprint '{name}'", data)
        self._active.pop()

        self.done[name] = Blueprint(name=name, ops=ops)
        return self.done[name]


def _build_project[P: Project](
    project_type: type[P],
    name: str,
    data: dict[str, Any],
    blueprints: dict[str, Blueprint],
) -> P:
    """Assemble a project from its used blueprints plus any inline ops."""
    used: list[Blueprint] = []
    for bp_name in data.get("use", []):
        if bp_name not in blueprints:
            raise ValueError(f"Project '{name}' references unknown blueprint: '{bp_name}'")
        used.append(blueprints[bp_name])

    inline = _decode_ops(f"project '{name}'", data)
    if inline:
        used.append(Blueprint(name=f"{name}:inline", ops=inline))

    fields = {k: v for k, v in data.items() if k not in _STRUCTURAL_KEYS}
    logger.debug("Building project '%s' as %s", name, project_type.__name__)
    return project_type(**{**fields, "name": name, "blueprints": used})


class Workspace[P: Project](Mapping[str, P]):
    """Accumulates parsed HCL files and resolves projects on access."""

    def __init__(
        self,
        project_type: type[P] = Project,  # type: ignore[assignment]
        context: dict[str, Any] | None = None,
    ) -> None:
        self._project_type = project_type
        self._context = context or {}
        self._pending_blueprints: dict[str, dict[str, Any]] = {}
        self._pending_projects: dict[str, dict[str, Any]] = {}
        self._provider_settings: dict[str, Any] = {}

    def load(self, file: str | Path) -> None:
        """Parse one HCL file and register its blocks."""
        from .hcl import load

        self.add(load(Path(file), context=self._context))

    def scan(self, path: str | Path, *, recurse: bool = True) -> None:
        """Load every .hcl file under path in sorted order; a missing path is ignored."""
        path = Path(path)
        if not path.is_dir():
            logger.debug("Nothing to scan at %s", path)
            return
        pattern = "**/*.hcl" if recurse else "*.hcl"
        for file in sorted(path.glob(pattern)):
            logger.debug("Loading %s", file)
            self.load(file)

    def add(self, data: dict[str, Any]) -> None:
        """Register the provider, blueprint and project blocks of one parsed file.

        Raises ValueError if a blueprint or project name is already loaded.
        """
        for settings in data.get("provider", []):
            self._provider_settings.update(settings)

        for block_type, registry in (
            ("blueprint", self._pending_blueprints),
            ("project", self._pending_projects),
        ):
            for block in data.get(block_type, []):
                for name, body in block.items():
                    if name in registry:
                        raise ValueError(f"Duplicate {block_type}: '{name}'")
                    logger.debug("Found %s '%s'", block_type, name)
                    registry[name] = body

    def provider_config(self, **overrides: Any) -> ProviderConfig:
        """Provider settings from HCL (with ${env.*} expanded), then overrides."""
        settings = Resolver({"env": dict(os.environ), "var": self._context}).resolve(
            self._provider_settings
        )
        settings.update({k: v for k, v in overrides.items() if v not in (None, "")})
        return ProviderConfig.resolve(**settings)

    def _resolve(self) -> dict[str, P]:
        """Build fresh project instances from everything loaded so far."""
        blueprints = _BlueprintGraph(self._pending_blueprints).resolve_all()
        return {
            name: _build_project(self._project_type, name, data, blueprints)
            for name, data in self._pending_projects.items()
        }

    def __getitem__(self, name: str) -> P:
        return self._resolve()[name]

    def __contains__(self, name: object) -> bool:
        return name in self._pending_projects

    def __iter__(self) -> Iterator[str]:
        return iter(self._pending_projects)

    def __len__(self) -> int:
        return len(self._pending_projects)

    @overload
    def get(self, name: str) -> P | None: ...
    @overload
    def get(self, name: str, default: P) -> P: ...
    @overload
    def get(self, name: str, default: None) -> P | None: ...
    def get(self, name: str, default: Any = None) -> P | None:
        return self._resolve().get(name, default)

    def filter(self, names: Iterable[str]) -> list[P]:
        """Return projects matching the given names, preserving input order."""
        resolved = self._resolve()
        return [p for n in names if (p := resolved.get(n)) is not None]

    def __repr__(self) -> str:
        type_name = self._project_type.__name__
        bp_count = len(self._pending_blueprints)
        proj_count = len(self._pending_projects)
        return f"Workspace(project_type={type_name}, blueprints={bp_count}, projects={proj_count})"
