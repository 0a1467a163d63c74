"""Tests for local path computation."""

from __future__ import annotations

import pytest

from clonator.core.errors import UnsupportedFeature
from clonator.core.placement import (
    DEFAULT_ROOT,
    build_local_path,
    count_alnum,
    group_segment,
    sanitize_leaf,
    select_root,
    url_leaf,
)
from clonator.core.schema import GroupingMode, PlacementConfig


class TestSelectRoot:
    def test_credential_and_owner(self):
        assert select_root(PlacementConfig(credential="TOK"), "alice") == "./alice/"

    def test_username(self):
        assert select_root(PlacementConfig(username="bob")) == "./bob/"

    def test_default(self):
        assert select_root(PlacementConfig()) == DEFAULT_ROOT == "./GitHub/"

    def test_base_directory_wins(self):
        cfg = PlacementConfig(base_directory="out//", credential="TOK", username="bob")
        assert select_root(cfg, "alice") == "out/"

    def test_credential_without_owner_falls_back_to_username(self):
        assert select_root(PlacementConfig(credential="TOK", username="bob"), None) == "./bob/"


class TestGroupSegment:
    def test_by_topic(self):
        assert group_segment(PlacementConfig(), "Tools") == "Tools/"

    def test_by_topic_without_tag(self):
        assert group_segment(PlacementConfig(), None) == ""

    def test_no_group(self):
        assert group_segment(PlacementConfig(grouping_mode=GroupingMode.none), "Tools") == ""

    def test_by_list_is_unsupported(self):
        with pytest.raises(UnsupportedFeature):
            group_segment(PlacementConfig(grouping_mode=GroupingMode.by_list), "Tools")

    def test_traversal_tag_is_not_a_segment(self):
        assert group_segment(PlacementConfig(), "../../etc") == ""
        assert group_segment(PlacementConfig(), "..") == ""


class TestSanitize:
    def test_default_allows_only_alnum(self):
        assert sanitize_leaf("a.b c!", PlacementConfig()) == "a_b_c_"

    def test_allow_dots(self):
        assert sanitize_leaf("a.b c!", PlacementConfig(allow_dots_in_leaf=True)) == "a.b_c_"

    def test_allow_spaces_and_dots(self):
        cfg = PlacementConfig(allow_spaces_in_leaf=True, allow_dots_in_leaf=True)
        assert sanitize_leaf("a.b c!", cfg) == "a.b c_"

    def test_truncation(self):
        assert sanitize_leaf("abcdef", PlacementConfig(max_leaf_length=3)) == "abc"

    def test_zero_length_means_unlimited(self):
        assert sanitize_leaf("x" * 100, PlacementConfig(max_leaf_length=0)) == "x" * 100

    def test_non_ascii_is_replaced(self):
        assert sanitize_leaf("ñandú", PlacementConfig()) == "_and_"

    def test_count_alnum(self):
        assert count_alnum("a_b_c_1") == 4


class TestBuildLocalPath:
    def test_repo_name_is_verbatim(self):
        cfg = PlacementConfig(username="bob", max_leaf_length=3)
        assert build_local_path(cfg, "bob", "Tools", "my.repo-name") == "./bob/Tools/my.repo-name"

    def test_gist_description_is_sanitized(self):
        cfg = PlacementConfig(username="bob")
        path = build_local_path(cfg, "bob", None, "Bash tricks & tips", fallback_url="https://gist.github.com/x")
        assert path == "./bob/Bash_tricks___tips"

    def test_empty_description_falls_back_to_url(self):
        path = build_local_path(PlacementConfig(), None, None, "", fallback_url="https://gist.github.com/u/abc123")
        assert path == "./GitHub/u_abc123"

    def test_fallback_is_truncated(self):
        cfg = PlacementConfig(max_leaf_length=4)
        path = build_local_path(cfg, None, None, "", fallback_url="https://gist.github.com/u/abc123")
        assert path == "./GitHub/u_ab"

    def test_emoji_only_description_falls_back(self):
        path = build_local_path(PlacementConfig(), None, None, "🚀 🚀", fallback_url="https://gist.github.com/f00d")
        assert path == "./GitHub/f00d"

    def test_five_alnum_characters_are_enough(self):
        path = build_local_path(PlacementConfig(), None, None, "ab-cde", fallback_url="https://gist.github.com/f00d")
        assert path == "./GitHub/ab_cde"

    def test_four_alnum_characters_are_not(self):
        path = build_local_path(PlacementConfig(), None, None, "ab-cd", fallback_url="https://gist.github.com/f00d")
        assert path == "./GitHub/f00d"

    def test_url_leaf_without_path_uses_host(self):
        assert url_leaf("https://example.com/", PlacementConfig()) == "example_com"

    def test_group_segment_included(self):
        cfg = PlacementConfig(credential="TOK")
        assert build_local_path(cfg, "alice", "Notes", "notes") == "./alice/Notes/notes"

    def test_pure_function(self):
        cfg = PlacementConfig(username="bob")
        assert build_local_path(cfg, "bob", "A", "x") == build_local_path(cfg, "bob", "A", "x")
