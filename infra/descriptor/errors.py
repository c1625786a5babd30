"""Descriptor exceptions."""


class DescriptorError(Exception):
    """Base class for resource graph errors."""


class DuplicateResourceError(DescriptorError):
    """A resource name was declared twice."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Resource '{name}' is already declared")
        self.name = name


class UnknownResourceError(DescriptorError):
    """A resource references a node that has not been declared before it."""

    def __init__(self, name: str, missing: str) -> None:
        super().__init__(
            f"Resource '{name}' references undeclared resource '{missing}'"
        )
        self.name = name
        self.missing = missing
