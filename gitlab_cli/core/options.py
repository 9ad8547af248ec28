"""
Request options for the GitLab v4 API.

Each call shape has its own immutable options value and a fluent builder
that accumulates optional fields before freezing them:

    options = SingleProjectOptions.builder("group/project").statistics(True).build()
"""

import urllib.parse
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any

from gitlab_cli.core.client import ValidationError


def encode_path_segment(identifier: str | int) -> str:
    """Percent-encode an identifier so it stays a single URL path segment."""
    return urllib.parse.quote(str(identifier), safe="")


def encode_query(params: dict[str, str]) -> str | None:
    """Form-encode query parameters, or None when there are none."""
    if not params:
        return None
    return urllib.parse.urlencode(params)


def require_identifier(identifier: str | int) -> str:
    value = str(identifier)
    if not value:
        raise ValidationError("Project ID or path is required")
    return value


# =============================================================================
# Single Project
# =============================================================================


@dataclass(frozen=True)
class SingleProjectOptions:
    """Options for fetching one project."""

    id: str
    params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def builder(cls, id: str | int) -> "SingleProjectOptionsBuilder":
        return SingleProjectOptionsBuilder(id)

    def to_query_string(self) -> str | None:
        return encode_query(self.params)


class SingleProjectOptionsBuilder:
    def __init__(self, id: str | int):
        self._id = require_identifier(id)
        self._params: dict[str, str] = {}

    def statistics(self, statistics: bool) -> "SingleProjectOptionsBuilder":
        """Include storage statistics in the response."""
        self._params["statistics"] = str(bool(statistics)).lower()
        return self

    def build(self) -> SingleProjectOptions:
        return SingleProjectOptions(id=self._id, params=dict(self._params))


# =============================================================================
# Project Users
# =============================================================================


@dataclass(frozen=True)
class GetProjectUsersOptions:
    """Options for listing the users of a project."""

    id: str
    params: dict[str, str] = field(default_factory=dict)

    @classmethod
    def builder(cls, id: str | int) -> "GetProjectUsersOptionsBuilder":
        return GetProjectUsersOptionsBuilder(id)

    def to_query_string(self) -> str | None:
        return encode_query(self.params)


class GetProjectUsersOptionsBuilder:
    def __init__(self, id: str | int):
        self._id = require_identifier(id)
        self._params: dict[str, str] = {}

    def search_for_user(self, user: str) -> "GetProjectUsersOptionsBuilder":
        """Filter users by name or username."""
        self._params["search"] = str(user)
        return self

    def build(self) -> GetProjectUsersOptions:
        return GetProjectUsersOptions(id=self._id, params=dict(self._params))


# =============================================================================
# Project Creation
# =============================================================================


class Visibility(str, Enum):
    """Project visibility level."""

    PRIVATE = "private"
    INTERNAL = "internal"
    PUBLIC = "public"


@dataclass(frozen=True)
class ProjectParams:
    """
    Payload for creating a project.

    Only ``name`` is required. Optional fields left as None are omitted
    from the request body entirely rather than sent as null.
    """

    name: str
    path: str | None = None
    namespace_id: int | None = None
    default_branch: str | None = None
    description: str | None = None
    issues_enabled: bool | None = None
    merge_requests_enabled: bool | None = None
    jobs_enabled: bool | None = None
    wiki_enabled: bool | None = None
    snippets_enabled: bool | None = None
    container_registry_enabled: bool | None = None
    shared_runners_enabled: bool | None = None
    visibility: Visibility | None = None
    import_url: str | None = None
    public_jobs: bool | None = None
    only_allow_merge_if_pipeline_succeeds: bool | None = None
    only_allow_merge_if_all_discussions_are_resolved: bool | None = None
    lfs_enabled: bool | None = None
    request_access_enabled: bool | None = None
    tag_list: tuple[str, ...] | None = None
    printing_merge_requests_link_enabled: bool | None = None
    ci_config_path: str | None = None
    repository_storage: str | None = None
    approvals_before_merge: int | None = None

    @classmethod
    def new(cls, name: str) -> "ProjectParams":
        return cls.builder(name).build()

    @classmethod
    def builder(cls, name: str) -> "ProjectParamsBuilder":
        return ProjectParamsBuilder(name)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for API request, dropping unset fields."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, Visibility):
                value = value.value
            elif isinstance(value, tuple):
                value = list(value)
            result[f.name] = value
        return result


class ProjectParamsBuilder:
    def __init__(self, name: str):
        if not name:
            raise ValidationError("Project name is required")
        self._values: dict[str, Any] = {"name": name}

    def _set(self, key: str, value: Any) -> "ProjectParamsBuilder":
        self._values[key] = value
        return self

    def path(self, path: str) -> "ProjectParamsBuilder":
        return self._set("path", path)

    def namespace_id(self, namespace_id: int) -> "ProjectParamsBuilder":
        return self._set("namespace_id", int(namespace_id))

    def default_branch(self, branch: str) -> "ProjectParamsBuilder":
        return self._set("default_branch", branch)

    def description(self, description: str) -> "ProjectParamsBuilder":
        return self._set("description", description)

    def issues_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("issues_enabled", enabled)

    def merge_requests_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("merge_requests_enabled", enabled)

    def jobs_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("jobs_enabled", enabled)

    def wiki_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("wiki_enabled", enabled)

    def snippets_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("snippets_enabled", enabled)

    def container_registry_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("container_registry_enabled", enabled)

    def shared_runners_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("shared_runners_enabled", enabled)

    def visibility(self, visibility: Visibility | str) -> "ProjectParamsBuilder":
        try:
            return self._set("visibility", Visibility(visibility))
        except ValueError as e:
            raise ValidationError(
                f"Invalid visibility: {visibility}",
                details={"choices": [v.value for v in Visibility]},
            ) from e

    def import_url(self, url: str) -> "ProjectParamsBuilder":
        return self._set("import_url", url)

    def public_jobs(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("public_jobs", enabled)

    def only_allow_merge_if_pipeline_succeeds(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("only_allow_merge_if_pipeline_succeeds", enabled)

    def only_allow_merge_if_all_discussions_are_resolved(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("only_allow_merge_if_all_discussions_are_resolved", enabled)

    def lfs_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("lfs_enabled", enabled)

    def request_access_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("request_access_enabled", enabled)

    def tag_list(self, tags: list[str]) -> "ProjectParamsBuilder":
        return self._set("tag_list", tuple(tags))

    def printing_merge_requests_link_enabled(self, enabled: bool) -> "ProjectParamsBuilder":
        return self._set("printing_merge_requests_link_enabled", enabled)

    def ci_config_path(self, path: str) -> "ProjectParamsBuilder":
        return self._set("ci_config_path", path)

    def repository_storage(self, storage: str) -> "ProjectParamsBuilder":
        return self._set("repository_storage", storage)

    def approvals_before_merge(self, count: int) -> "ProjectParamsBuilder":
        return self._set("approvals_before_merge", int(count))

    def build(self) -> ProjectParams:
        return ProjectParams(**self._values)
