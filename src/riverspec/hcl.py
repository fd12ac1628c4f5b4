"""HCL loading: render Jinja2 templates and parse .hcl files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import hcl2
import jinja2

from .projects import Project
from .workspace import Workspace

logger = logging.getLogger(__name__)


def scan[P: Project](
    path: str | Path,
    *,
    project_type: type[P] = Project,  # type: ignore[assignment]
    recurse: bool = True,
    context: dict[str, Any] | None = None,
) -> Workspace[P]:
    """Scan a directory for .hcl files and return a ready Workspace."""
    ws = Workspace(project_type=project_type, context=context)
    ws.scan(path, recurse=recurse)
    return ws


def load(
    file: Path,
    *,
    context: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Load and parse a single HCL file, rendering Jinja2 templates with context.

    Raises ValueError for template errors and for HCL syntax errors, with the
    file name in the message.
    """
    text = file.read_text()
    ctx = context if context is not None else {}
    env = jinja2.Environment(
        undefined=jinja2.StrictUndefined,
        keep_trailing_newline=True,
        autoescape=False,
    )
    try:
        template = env.from_string(text)
        text = template.render(ctx)
    except jinja2.TemplateError as exc:
        raise ValueError(f"{file}: {exc}") from exc

    try:
        data = hcl2.loads(text)
    except Exception as exc:
        raise ValueError(f"{file}: invalid HCL: {exc}") from exc

    logger.debug("Parsed %s: %s", file, ", ".join(sorted(data)) or "empty")
    return data
