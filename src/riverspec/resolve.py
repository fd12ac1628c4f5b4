"""Resolver: expand ${...} references in spec attributes at apply time."""

from __future__ import annotations

import logging
import re
from typing import Any

logger = logging.getLogger(__name__)

_REF_PATTERN = re.compile(r"\$\$\{|(\$\{([^{}]+)\})")
_FULL_REF = re.compile(r"\$\{([^{}]+)\}")


def has_refs(obj: Any) -> bool:
    """True if any string inside obj contains a ${...} reference."""
    if isinstance(obj, dict):
        return any(has_refs(v) for v in obj.values())
    if isinstance(obj, list):
        return any(has_refs(item) for item in obj)
    if isinstance(obj, str):
        return any(m.group(1) for m in _REF_PATTERN.finditer(obj))
    return False


class Resolver:
    """Resolve dotted references such as ``service.web.id`` or ``env.HOME``.

    The context is usually ``Context.references()``: recorded state nested by
    kind and label, plus ``env``, ``var`` and ``CWD``.
    """

    def __init__(self, context: dict[str, Any] | None = None) -> None:
        self._context = context or {}

    def _resolve_ref(self, ref: str) -> Any:
        current: Any = self._context

        for part in ref.split("."):
            try:
                current = current[part]
            except (KeyError, TypeError):
                try:
                    current = getattr(current, part)
                except AttributeError:
                    raise ValueError(f"undefined reference '{ref}'") from None

        if callable(current) and not isinstance(current, type):
            current = current()

        return current

    def _resolve_value(self, value: str) -> Any:
        """Resolve references in one string.

        A string that is exactly one ${ref} yields the referenced object with
        its type intact; embedded references are stringified. $${...} escapes
        a literal ${...}.
        """
        if "${" not in value:
            return value

        match = _FULL_REF.fullmatch(value)
        if match:
            return self._resolve_ref(match.group(1).strip())

        def _replace(m: re.Match) -> str:  # type: ignore[type-arg]
            if m.group(0) == "$${":
                return "${"
            return str(self._resolve_ref(m.group(2).strip()))

        return _REF_PATTERN.sub(_replace, value)

    def resolve(self, attrs: dict[str, Any]) -> dict[str, Any]:
        """Return a copy of attrs with every reference expanded."""
        return self._walk(attrs)

    def _walk(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._walk(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [self._walk(item) for item in obj]
        if isinstance(obj, str):
            return self._resolve_value(obj)
        return obj
