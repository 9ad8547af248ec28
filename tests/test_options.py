"""Tests for request option builders and the project creation payload."""

import dataclasses
import urllib.parse

import pytest

from gitlab_cli.core.client import ValidationError
from gitlab_cli.core.options import (
    GetProjectUsersOptions,
    ProjectParams,
    SingleProjectOptions,
    Visibility,
    encode_path_segment,
)


class TestPathSegmentEncoding:
    def test_slashes_are_encoded(self):
        assert encode_path_segment("group/subgroup/project") == "group%2Fsubgroup%2Fproject"

    def test_numeric_id_unchanged(self):
        assert encode_path_segment(42) == "42"
        assert encode_path_segment("42") == "42"

    def test_reserved_characters(self):
        encoded = encode_path_segment("a b?c#d%")
        assert "/" not in encoded
        assert "?" not in encoded
        assert "#" not in encoded
        assert urllib.parse.unquote(encoded) == "a b?c#d%"


class TestSingleProjectOptions:
    def test_no_options_no_query(self):
        options = SingleProjectOptions.builder("42").build()
        assert options.id == "42"
        assert options.to_query_string() is None

    def test_statistics_true(self):
        options = SingleProjectOptions.builder("42").statistics(True).build()
        query = options.to_query_string()
        assert query == "statistics=true"
        assert urllib.parse.parse_qs(query) == {"statistics": ["true"]}

    def test_statistics_false(self):
        options = SingleProjectOptions.builder("42").statistics(False).build()
        assert options.to_query_string() == "statistics=false"

    def test_last_setting_wins(self):
        options = SingleProjectOptions.builder(42).statistics(True).statistics(False).build()
        assert options.params == {"statistics": "false"}

    def test_built_value_is_frozen(self):
        options = SingleProjectOptions.builder("42").build()
        with pytest.raises(dataclasses.FrozenInstanceError):
            options.id = "43"

    def test_builder_changes_do_not_leak(self):
        builder = SingleProjectOptions.builder("42")
        first = builder.build()
        builder.statistics(True)
        assert first.to_query_string() is None
        assert builder.build().to_query_string() == "statistics=true"

    def test_empty_identifier_rejected(self):
        with pytest.raises(ValidationError):
            SingleProjectOptions.builder("")


class TestGetProjectUsersOptions:
    def test_no_search(self):
        assert GetProjectUsersOptions.builder("my/project").build().to_query_string() is None

    def test_search_is_form_encoded(self):
        options = GetProjectUsersOptions.builder("my/project").search_for_user("jane doe&co").build()
        query = options.to_query_string()
        assert query == "search=jane+doe%26co"
        assert urllib.parse.parse_qs(query) == {"search": ["jane doe&co"]}


class TestProjectParams:
    def test_name_only_payload(self):
        assert ProjectParams.builder("demo").build().to_dict() == {"name": "demo"}

    def test_new_matches_builder(self):
        assert ProjectParams.new("demo") == ProjectParams.builder("demo").build()

    def test_builder_keeps_every_field(self):
        params = (
            ProjectParams.builder("demo")
            .path("demo-path")
            .namespace_id(9)
            .default_branch("main")
            .description("A demo")
            .visibility(Visibility.INTERNAL)
            .tag_list(["a", "b"])
            .wiki_enabled(False)
            .approvals_before_merge(2)
            .build()
        )
        assert params.to_dict() == {
            "name": "demo",
            "path": "demo-path",
            "namespace_id": 9,
            "default_branch": "main",
            "description": "A demo",
            "visibility": "internal",
            "tag_list": ["a", "b"],
            "wiki_enabled": False,
            "approvals_before_merge": 2,
        }

    def test_false_values_are_sent(self):
        payload = ProjectParams.builder("demo").issues_enabled(False).build().to_dict()
        assert payload == {"name": "demo", "issues_enabled": False}

    def test_visibility_from_string(self):
        params = ProjectParams.builder("demo").visibility("public").build()
        assert params.visibility is Visibility.PUBLIC

    def test_invalid_visibility(self):
        with pytest.raises(ValidationError) as exc_info:
            ProjectParams.builder("demo").visibility("secret")
        assert exc_info.value.details["choices"] == ["private", "internal", "public"]

    def test_name_required(self):
        with pytest.raises(ValidationError):
            ProjectParams.builder("")
