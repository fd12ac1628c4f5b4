"""Project base model: the top-level build target."""

from __future__ import annotations

import logging

from pydantic import BaseModel, Field

from .blueprints import Blueprint
from .context import Context

logger = logging.getLogger(__name__)


class Project(BaseModel):
    """A named set of blueprints applied against one provider."""

    model_config = {"arbitrary_types_allowed": True}

    name: str
    description: str = ""
    blueprints: list[Blueprint] = Field(default_factory=list)

    def build(self, **kwargs) -> None:
        """Apply all blueprints. kwargs are passed to Context."""
        ctx = Context(target=self, **kwargs)
        logger.info("Building project '%s'", self.name)
        for blueprint in self.blueprints:
            blueprint.build(ctx)

    def destroy(self, **kwargs) -> None:
        """Remove everything the blueprints manage, last blueprint first."""
        ctx = Context(target=self, **kwargs)
        logger.info("Destroying project '%s'", self.name)
        for blueprint in reversed(self.blueprints):
            blueprint.destroy(ctx)
