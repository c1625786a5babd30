"""Resource graph: managed resources and the edges between them.

Edges are stated, never inferred from construction order. A node depends on
every node named in its ``depends_on``, every node referenced by a ``Ref``
in its properties, and the node it is attached to. A node may only depend
on nodes declared before it, so declaration order is always a valid
topological order and the graph cannot contain a cycle.
"""

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

from .errors import DuplicateResourceError, UnknownResourceError
from .values import references

logger = structlog.get_logger()


class ResourceKind(str, Enum):
    """Managed resource kinds."""
    ROLE = "role"
    POLICY = "policy"
    FUNCTION = "function"
    API = "api"
    RESOURCE = "resource"
    METHOD = "method"
    INTEGRATION = "integration"
    PERMISSION = "permission"
    DEPLOYMENT = "deployment"
    STAGE = "stage"


@dataclass(frozen=True)
class ResourceNode:
    """One managed resource.

    ``attach_to`` names a node this one is rendered into (a method's
    integration) instead of becoming a resource of its own.
    """

    kind: ResourceKind
    name: str
    properties: dict[str, Any] = field(default_factory=dict)
    depends_on: tuple[str, ...] = ()
    attach_to: str | None = None

    @property
    def dependencies(self) -> list[str]:
        """All nodes this one depends on, in first-seen order."""
        names = list(self.depends_on)
        names.extend(references(self.properties))
        if self.attach_to:
            names.append(self.attach_to)
        return list(dict.fromkeys(names))


@dataclass(frozen=True)
class Output:
    """Value exported after a successful apply."""

    name: str
    value: Any
    description: str = ""


class ResourceGraph:
    """Ordered, acyclic collection of resource nodes and outputs."""

    def __init__(self) -> None:
        self._nodes: dict[str, ResourceNode] = {}
        self._outputs: dict[str, Output] = {}

    def add(self, node: ResourceNode) -> ResourceNode:
        """Declare ``node``; everything it depends on must already exist."""
        if node.name in self._nodes:
            raise DuplicateResourceError(node.name)
        for dependency in node.dependencies:
            if dependency not in self._nodes:
                raise UnknownResourceError(node.name, dependency)
        self._nodes[node.name] = node
        logger.debug("Resource declared", resource=node.name, kind=node.kind.value)
        return node

    def export(self, name: str, value: Any, description: str = "") -> Output:
        """Declare an output."""
        if name in self._outputs:
            raise DuplicateResourceError(name)
        for dependency in references(value):
            if dependency not in self._nodes:
                raise UnknownResourceError(name, dependency)
        output = Output(name=name, value=value, description=description)
        self._outputs[name] = output
        return output

    def __getitem__(self, name: str) -> ResourceNode:
        return self._nodes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._nodes

    def __iter__(self) -> Iterator[ResourceNode]:
        return iter(self._nodes.values())

    def __len__(self) -> int:
        return len(self._nodes)

    @property
    def outputs(self) -> list[Output]:
        return list(self._outputs.values())
