"""riverspec - declarative management of CDN entities over a serialized lifecycle core."""

from .adapter import EntityAdapter as EntityAdapter
from .adapter import Secret as Secret
from .adapter import ServiceScopedAdapter as ServiceScopedAdapter
from .blueprints import Blueprint as Blueprint
from .context import Context as Context
from .diagnostics import Diagnostics as Diagnostics
from .errors import ConversionError as ConversionError
from .errors import IdentityFormatError as IdentityFormatError
from .errors import LifecycleError as LifecycleError
from .errors import NotFoundError as NotFoundError
from .errors import RemoteError as RemoteError
from .identity import ServiceScopedId as ServiceScopedId
from .identity import parse_composite_id as parse_composite_id
from .lifecycle import LifecycleCoordinator as LifecycleCoordinator
from .lifecycle import Response as Response
from .managed import ManagedSpec as ManagedSpec
from .projects import Project as Project
from .provider import Provider as Provider
from .serializer import MutationSerializer as MutationSerializer
from .serializer import NullSerializer as NullSerializer
from .spec import Specification as Specification
from .spec import spec as spec
from .specop import Absent as Absent
from .specop import Ensure as Ensure
from .specop import Present as Present
from .specop import SpecOp as SpecOp
from .state import State as State
from .workspace import Workspace as Workspace
