"""LifecycleCoordinator: drive create/read/update/delete for any entity kind."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from .adapter import EntityAdapter
from .diagnostics import Diagnostics
from .errors import NotFoundError
from .serializer import MutationSerializer

logger = logging.getLogger(__name__)


@dataclass
class Response[M: BaseModel]:
    """Outcome of one lifecycle call.

    ``removed`` signals drift (the entity is gone remotely). ``tainted`` signals
    that a mutation succeeded remotely but its result could not be converted
    back into a model, so recorded state no longer matches reality.
    """

    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    state: M | None = None
    removed: bool = False
    tainted: bool = False


class LifecycleCoordinator:
    """Sequence remote operations through an EntityAdapter.

    Mutating calls always run through the serializer. Reads run through it only
    when ``serialize_reads`` is set, for remote clients that are not safe under
    concurrent read and write. Conversions always run outside the lock.

    Failures are recorded on the response; nothing is retried.
    """

    def __init__(
        self,
        serializer: MutationSerializer | None = None,
        *,
        serialize_reads: bool = False,
    ) -> None:
        self.serializer = serializer if serializer is not None else MutationSerializer.shared()
        self.serialize_reads = serialize_reads

    def create[M: BaseModel](
        self,
        adapter: EntityAdapter[M, Any, Any],
        model: M,
        resp: Response[M],
        *,
        via_update: bool | None = None,
    ) -> M | None:
        if resp.diagnostics.has_error():
            return None

        if via_update is None:
            via_update = adapter.create_via_update

        try:
            new_obj = adapter.resource_to_obj(model)
        except Exception as exc:
            resp.diagnostics.add_error(
                "Error creating object from resource data", f"Unexpected error: {exc}"
            )
            return None

        logger.info("Creating %s object: %s", adapter.kind, adapter.redact(model))

        op = adapter.update if via_update else adapter.create
        try:
            obj = self.serializer.run(lambda: op(new_obj))
        except Exception as exc:
            resp.diagnostics.add_error(
                "Error creating resource", f"Could not create resource, unexpected error: {exc}"
            )
            return None

        return self._convert_mutation(adapter, model, obj, resp, "creating")

    def read[M: BaseModel](
        self,
        adapter: EntityAdapter[M, Any, Any],
        model: M,
        resp: Response[M],
    ) -> M | None:
        if resp.diagnostics.has_error():
            return None

        identity = adapter.get_id(model)
        logger.debug("Reading %s object: id %s", adapter.kind, identity)

        try:
            if self.serialize_reads:
                obj = self.serializer.run(lambda: adapter.read(identity))
            else:
                obj = adapter.read(identity)
        except NotFoundError:
            logger.info("%s object not found: id %s", adapter.kind, identity)
            resp.removed = True
            resp.state = None
            return None
        except Exception as exc:
            resp.diagnostics.add_error(
                "Error reading resource", f"Unable to read resource, got error: {exc}"
            )
            return None

        try:
            current = adapter.obj_to_resource(obj)
        except Exception as exc:
            logger.error(
                "Failed to convert %s object to resource (%s); keeping prior state", adapter.kind, exc
            )
            resp.state = model
            return model

        current = adapter.overlay_secrets(model, current)
        resp.state = current
        return current

    def update[M: BaseModel](
        self,
        adapter: EntityAdapter[M, Any, Any],
        model: M,
        resp: Response[M],
    ) -> M | None:
        if resp.diagnostics.has_error():
            return None

        if not adapter.supports_update:
            resp.diagnostics.add_error(
                "Error updating resource", f"{adapter.kind} resources cannot be updated in place"
            )
            return None

        try:
            obj = adapter.resource_to_obj(model)
        except Exception as exc:
            resp.diagnostics.add_error(
                "Error creating object from resource data", f"Unexpected error: {exc}"
            )
            return None

        logger.info("Updating %s object: %s", adapter.kind, adapter.redact(model))

        try:
            updated = self.serializer.run(lambda: adapter.update(obj))
        except Exception as exc:
            resp.diagnostics.add_error(
                "Error updating resource", f"Could not update resource, unexpected error: {exc}"
            )
            return None

        return self._convert_mutation(adapter, model, updated, resp, "updating")

    def delete[M: BaseModel](
        self,
        adapter: EntityAdapter[M, Any, Any],
        model: M,
        resp: Response[M],
    ) -> None:
        if resp.diagnostics.has_error():
            return

        identity = adapter.get_id(model)
        logger.info("Deleting %s object: id %s", adapter.kind, identity)

        try:
            self.serializer.run(lambda: adapter.delete(identity))
        except Exception as exc:
            resp.diagnostics.add_error(
                "Error deleting resource", f"Unable to delete resource, got error: {exc}"
            )
            return

        resp.state = None

    def import_[M: BaseModel](
        self,
        adapter: EntityAdapter[M, Any, Any],
        raw_id: str,
        resp: Response[M],
    ) -> M | None:
        """Resolve an external identifier into a full model by reading it."""
        try:
            model = adapter.import_model(raw_id)
        except ValueError as exc:
            resp.diagnostics.add_error("Unexpected Import Identifier", str(exc))
            return None

        current = self.read(adapter, model, resp)
        if resp.removed:
            resp.diagnostics.add_error(
                "Error importing resource", f"{adapter.kind} {raw_id!r} does not exist"
            )
        elif current is model:
            # read kept the identity-only model; it is not a usable resource
            resp.state = None
            resp.diagnostics.add_error(
                "Error importing resource",
                f"{adapter.kind} {raw_id!r} could not be converted to a resource",
            )
            return None
        return current

    def _convert_mutation[M: BaseModel](
        self,
        adapter: EntityAdapter[M, Any, Any],
        model: M,
        obj: Any,
        resp: Response[M],
        phase: str,
    ) -> M | None:
        try:
            current = adapter.obj_to_resource(obj)
        except Exception as exc:
            # the remote entity changed but its new state is unknown
            logger.error("Unconverted %s object after %s: %r", adapter.kind, phase, obj)
            resp.tainted = True
            resp.diagnostics.add_error(
                f"Error {phase} resource", f"Failed to convert remote object to resource: {exc}"
            )
            return None

        current = adapter.overlay_secrets(model, current)
        resp.state = current
        return current
