"""Tests for values tree conversion and flattening."""

from __future__ import annotations

import datetime

from helm_values_lsp.flattener import flatten_values, to_scalar, to_value_node
from helm_values_lsp.models import ObjectNode, Scalar, TypeTag


class TestToValueNode:
    """Test conversion of loaded YAML into value nodes."""

    def test_scalars(self):
        assert to_scalar("nginx") == Scalar('"nginx"', TypeTag.STRING)
        assert to_scalar("") == Scalar('""', TypeTag.STRING)
        assert to_scalar(3) == Scalar("3", TypeTag.NUMBER)
        assert to_scalar(0.5) == Scalar("0.5", TypeTag.NUMBER)
        assert to_scalar(True) == Scalar("true", TypeTag.BOOLEAN)
        assert to_scalar(False) == Scalar("false", TypeTag.BOOLEAN)
        assert to_scalar(None) == Scalar("null", TypeTag.NULL)

    def test_list_is_a_flow_scalar(self):
        scalar = to_scalar(["a", 1])

        assert scalar.type_tag is TypeTag.LIST
        assert scalar.display_text == "[a, 1]"

    def test_other_yaml_scalars_render_as_text(self):
        scalar = to_scalar(datetime.date(2024, 1, 2))

        assert scalar.display_text == "2024-01-02"

    def test_nested_mapping(self):
        node = to_value_node({"a": {"b": 1}, True: "x", 2: None})

        assert isinstance(node, ObjectNode)
        assert set(node.children) == {"a", "true", "2"}
        assert isinstance(node.children["a"], ObjectNode)
        assert node.children["a"].children["b"] == Scalar("1", TypeTag.NUMBER)


class TestFlattenValues:
    """Test flatten_values."""

    def test_every_key_has_an_entry(self, jenkins_tree):
        paths = {entry.path for entry in flatten_values(jenkins_tree)}

        assert ("controller",) in paths
        assert ("controller", "image") in paths
        assert ("controller", "image", "repository") in paths
        assert ("controller", "admin", "createSecret") in paths
        assert ("nameOverride",) in paths
        assert len(paths) == 14

    def test_paths_are_unique(self, jenkins_tree):
        entries = flatten_values(jenkins_tree)

        assert len({entry.path for entry in entries}) == len(entries)

    def test_objects_before_scalars(self, jenkins_tree):
        entries = flatten_values(jenkins_tree)
        kinds = [entry.is_object for entry in entries]

        first_scalar = kinds.index(False)
        assert all(kinds[:first_scalar])
        assert not any(kinds[first_scalar:])

    def test_flattening_order_within_group(self):
        tree = to_value_node({"outer": {"inner": 1}, "b": 2, "a": 3})
        entries = flatten_values(tree)

        # Children are emitted before their parent object entry
        assert [entry.path for entry in entries] == [
            ("outer",),
            ("outer", "inner"),
            ("b",),
            ("a",),
        ]
        assert [entry.sort_key[0] for entry in entries] == ["a", "b", "b", "b"]

    def test_idempotent(self, jenkins_tree):
        assert flatten_values(jenkins_tree) == flatten_values(jenkins_tree)

    def test_scalar_entries_carry_value(self, jenkins_tree):
        entries = {entry.path: entry for entry in flatten_values(jenkins_tree)}

        tag = entries[("controller", "image", "tag")]
        assert tag.scalar_text == '"2.440"'
        assert tag.type_tag is TypeTag.STRING
        assert tag.documentation == '# controller.image.tag\nValue: `"2.440"`\nType: `string`'

        image = entries[("controller", "image")]
        assert image.is_object
        assert image.scalar_text is None
        assert image.documentation == "# controller.image\nObject."

    def test_empty_object(self):
        entries = flatten_values(to_value_node({"extra": {}}))

        assert len(entries) == 1
        assert entries[0].is_object

    def test_empty_tree(self):
        assert flatten_values(ObjectNode()) == []
