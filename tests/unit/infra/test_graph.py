"""Tests for the resource graph."""

import dataclasses

import pytest

from infra.descriptor import (
    Artifact,
    DuplicateResourceError,
    Join,
    Pseudo,
    Ref,
    ResourceGraph,
    ResourceKind,
    ResourceNode,
    UnknownResourceError,
)
from infra.descriptor.values import references


def role(name: str = "role") -> ResourceNode:
    return ResourceNode(kind=ResourceKind.ROLE, name=name, properties={"RoleName": name})


class TestReferences:
    def test_finds_nested_refs(self):
        value = {
            "Role": Ref("role", "Arn"),
            "Roles": [Ref("other")],
            "Uri": Join("arn:", Pseudo.REGION, Ref("function", "Arn")),
            "Code": Artifact("handler.zip"),
            "Plain": "text",
        }

        assert sorted(references(value)) == ["function", "other", "role"]

    def test_literals_have_no_refs(self):
        assert list(references({"a": [1, "b", {"c": None}]})) == []


class TestJoin:
    def test_parts_are_a_tuple(self):
        assert Join("a", Pseudo.REGION).parts == ("a", Pseudo.REGION)

    def test_equality(self):
        assert Join("a", Ref("x")) == Join("a", Ref("x"))
        assert Join("a") != Join("b")


class TestResourceNode:
    def test_dependencies_merge_explicit_refs_and_attachment(self):
        node = ResourceNode(
            kind=ResourceKind.INTEGRATION,
            name="integration",
            properties={"Uri": Ref("function", "Arn"), "Again": Ref("function")},
            depends_on=("policy",),
            attach_to="method",
        )

        assert node.dependencies == ["policy", "function", "method"]

    def test_node_is_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            role().name = "other"


class TestResourceGraph:
    def setup_method(self) -> None:
        self.graph = ResourceGraph()

    def test_add_keeps_declaration_order(self):
        self.graph.add(role("a"))
        self.graph.add(role("b"))

        assert [node.name for node in self.graph] == ["a", "b"]
        assert len(self.graph) == 2
        assert "a" in self.graph
        assert self.graph["b"].name == "b"

    def test_duplicate_name_raises_error(self):
        self.graph.add(role("a"))

        with pytest.raises(DuplicateResourceError, match="already declared"):
            self.graph.add(role("a"))

    def test_reference_to_undeclared_node_raises_error(self):
        node = ResourceNode(
            kind=ResourceKind.POLICY,
            name="policy",
            properties={"Roles": [Ref("role")]},
        )

        with pytest.raises(UnknownResourceError) as exc_info:
            self.graph.add(node)

        assert exc_info.value.name == "policy"
        assert exc_info.value.missing == "role"
        assert "policy" not in self.graph

    def test_explicit_dependency_on_undeclared_node_raises_error(self):
        node = ResourceNode(kind=ResourceKind.FUNCTION, name="fn", depends_on=("policy",))

        with pytest.raises(UnknownResourceError):
            self.graph.add(node)

    def test_attachment_to_undeclared_node_raises_error(self):
        node = ResourceNode(kind=ResourceKind.INTEGRATION, name="int", attach_to="method")

        with pytest.raises(UnknownResourceError):
            self.graph.add(node)

    def test_export(self):
        self.graph.add(role("a"))

        output = self.graph.export("RoleName", Ref("a"), "Role name")

        assert self.graph.outputs == [output]
        assert output.description == "Role name"

    def test_export_unknown_reference_raises_error(self):
        with pytest.raises(UnknownResourceError):
            self.graph.export("Missing", Ref("nope"))

    def test_duplicate_export_raises_error(self):
        self.graph.export("Literal", "value")

        with pytest.raises(DuplicateResourceError):
            self.graph.export("Literal", "other")
