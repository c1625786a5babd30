from .builder import DescriptorConfig, build_descriptor
from .errors import DescriptorError, DuplicateResourceError, UnknownResourceError
from .graph import Output, ResourceGraph, ResourceKind, ResourceNode
from .values import Artifact, Join, Pseudo, Ref

__all__ = [
    "DescriptorConfig",
    "build_descriptor",
    "DescriptorError",
    "DuplicateResourceError",
    "UnknownResourceError",
    "Output",
    "ResourceGraph",
    "ResourceKind",
    "ResourceNode",
    "Artifact",
    "Join",
    "Pseudo",
    "Ref",
]
