"""SpecOp strategies."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from .context import Context
from .spec import Specification

logger = logging.getLogger(__name__)


def _describe(spec: Specification) -> str:
    return str(getattr(spec, "address", type(spec).__name__))


class SpecOp[P](ABC):
    """Wraps a Specification with conditional execution logic."""

    def __init__(self, spec: Specification[P]) -> None:
        self.spec = spec

    @abstractmethod
    def __call__(self, ctx: Context[P]) -> None: ...

    def teardown(self, ctx: Context[P]) -> None:
        """Remove whatever this operation would have applied."""
        name = _describe(self.spec)
        if not self.spec.exists(ctx):
            logger.debug("Skipping teardown of %s; not present", name)
        elif ctx.dry_run:
            logger.info("[DRY RUN] Would remove %s", name)
        else:
            logger.info("Removing %s", name)
            self.spec.remove(ctx)


class Present[P](SpecOp[P]):
    """Create only if the entity doesn't exist."""

    def __call__(self, ctx: Context[P]) -> None:
        name = _describe(self.spec)
        if self.spec.exists(ctx):
            logger.debug("Skipping %s; already exists", name)
        elif ctx.dry_run:
            logger.info("[DRY RUN] Would apply %s", name)
        else:
            logger.info("Applying %s", name)
            self.spec.apply(ctx)


class Ensure[P](SpecOp[P]):
    """Create or update if the current state doesn't match."""

    def __call__(self, ctx: Context[P]) -> None:
        name = _describe(self.spec)
        if self.spec.equals(ctx):
            logger.debug("Skipping %s; up to date", name)
        elif ctx.dry_run:
            logger.info("[DRY RUN] Would apply %s", name)
        else:
            logger.info("Applying %s", name)
            self.spec.apply(ctx)


class Absent[P](SpecOp[P]):
    """Delete if the entity exists."""

    def __call__(self, ctx: Context[P]) -> None:
        name = _describe(self.spec)
        if self.spec.exists(ctx):
            if ctx.dry_run:
                logger.info("[DRY RUN] Would remove %s", name)
            else:
                logger.info("Removing %s", name)
                self.spec.remove(ctx)
        else:
            logger.debug("Skipping removal of %s; not present", name)

    def teardown(self, ctx: Context[P]) -> None:
        logger.debug("Nothing to tear down for absent %s", _describe(self.spec))
