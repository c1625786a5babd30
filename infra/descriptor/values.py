"""Symbolic property values resolved by the provisioning engine."""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Ref:
    """Generated identifier of another node, or one of its attributes."""

    node: str
    attribute: str | None = None


class Pseudo(str, Enum):
    """Values looked up from the deploying credentials' context."""
    ACCOUNT_ID = "account_id"
    REGION = "region"
    PARTITION = "partition"
    URL_SUFFIX = "url_suffix"


@dataclass(frozen=True, init=False)
class Join:
    """String concatenation of literal and symbolic parts."""

    parts: tuple[Any, ...]

    def __init__(self, *parts: Any) -> None:
        object.__setattr__(self, "parts", tuple(parts))


@dataclass(frozen=True)
class Artifact:
    """Packaged function archive on local disk."""

    path: str


def references(value: Any) -> Iterator[str]:
    """Yield the names of all nodes referenced inside ``value``."""
    if isinstance(value, Ref):
        yield value.node
    elif isinstance(value, Join):
        for part in value.parts:
            yield from references(part)
    elif isinstance(value, dict):
        for item in value.values():
            yield from references(item)
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from references(item)
