"""Tests for block scanning and location."""

from __future__ import annotations

from helm_values_lsp.scanner import locate_block, scan_blocks


class TestScanBlocks:
    """Test scan_blocks."""

    def test_trailing_annotation(self):
        lines = [
            "jenkins: # @jenkins/jenkins",
            "  controller:",
            "    numExecutors: 2",
        ]
        blocks = scan_blocks(lines)

        assert list(blocks) == ["jenkins"]
        assert blocks["jenkins"].chart_ref == "jenkins/jenkins"
        assert blocks["jenkins"].start_line == 1

    def test_annotation_on_preceding_line(self):
        lines = [
            "# @bitnami/nginx",
            "nginx:",
            "  replicaCount: 2",
        ]
        blocks = scan_blocks(lines)

        assert blocks["nginx"].chart_ref == "bitnami/nginx"
        assert blocks["nginx"].start_line == 2

    def test_unannotated_keys_open_blocks_without_chart(self):
        lines = [
            "global:",
            "  domain: example.com",
            "jenkins: # @jenkins/jenkins",
            "other: {}",
        ]
        blocks = scan_blocks(lines)

        assert blocks["global"].chart_ref is None
        assert blocks["jenkins"].chart_ref == "jenkins/jenkins"
        assert blocks["other"].chart_ref is None
        assert blocks["other"].start_line == 4

    def test_annotation_applies_only_to_next_key(self):
        lines = [
            "# @bitnami/nginx",
            "nginx:",
            "redis:",
        ]
        blocks = scan_blocks(lines)

        assert blocks["nginx"].chart_ref == "bitnami/nginx"
        assert blocks["redis"].chart_ref is None

    def test_annotation_on_indented_line_is_ignored(self):
        lines = [
            "jenkins: # @jenkins/jenkins",
            "  controller:",
            "    image: custom  # @bitnami/nginx",
            "global:",
            "  domain: x",
        ]
        blocks = scan_blocks(lines)

        assert blocks["jenkins"].chart_ref == "jenkins/jenkins"
        assert blocks["global"].chart_ref is None

    def test_annotation_followed_by_indented_line_is_dropped(self):
        lines = [
            "# @bitnami/nginx",
            "  stray: value",
            "nginx:",
        ]
        blocks = scan_blocks(lines)

        assert blocks["nginx"].chart_ref is None

    def test_annotation_carries_over_blank_and_comment_lines(self):
        lines = [
            "# @bitnami/nginx",
            "",
            "# web frontend",
            "nginx:",
        ]
        blocks = scan_blocks(lines)

        assert blocks["nginx"].chart_ref == "bitnami/nginx"

    def test_repeated_key_last_wins(self):
        lines = [
            "app: # @repo/first",
            "  a: 1",
            "app: # @repo/second",
            "  b: 2",
        ]
        blocks = scan_blocks(lines)

        assert len(blocks) == 1
        assert blocks["app"].chart_ref == "repo/second"
        assert blocks["app"].start_line == 3

    def test_malformed_annotation_has_no_chart(self):
        blocks = scan_blocks(["app: # @", "  a: 1"])

        assert blocks["app"].chart_ref is None

    def test_indented_and_comment_lines_are_not_blocks(self):
        lines = [
            "#commented: out",
            "app:",
            "  nested: value",
        ]
        blocks = scan_blocks(lines)

        assert list(blocks) == ["app"]

    def test_chart_reference_characters(self):
        blocks = scan_blocks(["app: #@oci.example-registry/team_a/chart.v2"])

        assert blocks["app"].chart_ref == "oci.example-registry/team_a/chart.v2"

    def test_empty_document(self):
        assert scan_blocks([]) == {}


class TestLocateBlock:
    """Test locate_block."""

    def test_cursor_inside_second_block(self):
        lines = [
            "jenkins: # @jenkins/jenkins",
            "  controller: {}",
            "nginx: # @bitnami/nginx",
            "  service:",
        ]
        blocks = scan_blocks(lines)

        assert locate_block(blocks, 2).top_key == "jenkins"
        assert locate_block(blocks, 3).top_key == "nginx"
        assert locate_block(blocks, 4).top_key == "nginx"

    def test_cursor_before_first_block(self):
        lines = ["# header", "", "app: # @repo/app"]
        blocks = scan_blocks(lines)

        assert locate_block(blocks, 2) is None

    def test_no_blocks(self):
        assert locate_block({}, 10) is None

    def test_overwritten_block_moves_start(self):
        lines = [
            "app: # @repo/first",
            "other:",
            "app: # @repo/second",
        ]
        blocks = scan_blocks(lines)

        # The first "app" region now belongs to no block of its own
        assert locate_block(blocks, 1) is None
        assert locate_block(blocks, 2).top_key == "other"
        assert locate_block(blocks, 3).chart_ref == "repo/second"
