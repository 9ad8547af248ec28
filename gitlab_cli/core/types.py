"""
Core types mirroring the GitLab v4 API resources.

These dataclasses provide type safety and IDE support for API responses.
Fields the API is known to omit are optional; missing required fields
raise KeyError from ``from_dict``, which the client reports as a codec error.
"""

from dataclasses import dataclass, field
from typing import Any

# =============================================================================
# User Types
# =============================================================================


@dataclass
class User:
    """A GitLab user as listed on a project."""

    id: int
    name: str
    username: str | None = None
    state: str | None = None
    avatar_url: str | None = None
    web_url: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "User":
        """Create from API response dict."""
        return cls(
            id=int(data["id"]),
            name=data["name"],
            username=data.get("username"),
            state=data.get("state"),
            avatar_url=data.get("avatar_url"),
            web_url=data.get("web_url"),
        )


# =============================================================================
# Project Types
# =============================================================================


@dataclass
class Namespace:
    """The namespace (user or group) a project lives in."""

    id: int
    name: str
    path: str
    kind: str
    full_path: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Namespace":
        """Create from API response dict."""
        return cls(
            id=int(data["id"]),
            name=data["name"],
            path=data["path"],
            kind=data["kind"],
            full_path=data["full_path"],
        )


@dataclass
class Statistic:
    """Project storage statistics, returned when requested."""

    commit_count: int = 0
    storage_size: int = 0
    repository_size: int = 0
    lfs_objects_size: int = 0
    job_artifacts_size: int = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Statistic":
        """Create from API response dict."""
        return cls(
            commit_count=int(data["commit_count"]),
            storage_size=int(data["storage_size"]),
            repository_size=int(data["repository_size"]),
            lfs_objects_size=int(data["lfs_objects_size"]),
            job_artifacts_size=int(data.get("job_artifacts_size", 0)),
        )


@dataclass
class Permission:
    """An access level granted on a project or group."""

    access_level: int
    notification_level: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Permission":
        """Create from API response dict."""
        return cls(
            access_level=int(data["access_level"]),
            notification_level=data.get("notification_level"),
        )


@dataclass
class PermissionsWrapper:
    """The caller's permissions on a project."""

    project_access: Permission | None = None
    group_access: Permission | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PermissionsWrapper":
        """Create from API response dict."""
        project_access = data.get("project_access")
        group_access = data.get("group_access")
        return cls(
            project_access=Permission.from_dict(project_access) if project_access else None,
            group_access=Permission.from_dict(group_access) if group_access else None,
        )


@dataclass
class ProjectLinks:
    """Related resource URLs from a project's ``_links`` object."""

    self_link: str
    issues: str | None = None
    merge_requests: str | None = None
    repo_branches: str | None = None
    labels: str | None = None
    events: str | None = None
    members: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProjectLinks":
        """Create from API response dict."""
        return cls(
            # API uses 'self' which we normalize to 'self_link'
            self_link=data["self"],
            issues=data.get("issues"),
            merge_requests=data.get("merge_requests"),
            repo_branches=data.get("repo_branches"),
            labels=data.get("labels"),
            events=data.get("events"),
            members=data.get("members"),
        )


@dataclass
class SharedGroup:
    """A group a project is shared with."""

    group_id: int
    group_name: str
    group_access_level: int

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SharedGroup":
        """Create from API response dict."""
        return cls(
            group_id=int(data["group_id"]),
            group_name=data["group_name"],
            group_access_level=int(data["group_access_level"]),
        )


@dataclass
class Project:
    """A GitLab project."""

    id: int
    name: str
    name_with_namespace: str | None = None
    path: str | None = None
    path_with_namespace: str | None = None
    description: str | None = None
    default_branch: str | None = None
    visibility: str | None = None
    ssh_url_to_repo: str | None = None
    http_url_to_repo: str | None = None
    web_url: str | None = None
    tag_list: list[str] = field(default_factory=list)
    owner: User | None = None
    namespace: Namespace | None = None
    issues_enabled: bool | None = None
    open_issues_count: int | None = None
    merge_requests_enabled: bool | None = None
    jobs_enabled: bool | None = None
    wiki_enabled: bool | None = None
    snippets_enabled: bool | None = None
    container_registry_enabled: bool | None = None
    created_at: str | None = None
    last_activity_at: str | None = None
    creator_id: int | None = None
    import_status: str | None = None
    import_error: str | None = None
    permissions: PermissionsWrapper | None = None
    archived: bool = False
    avatar_url: str | None = None
    shared_runners_enabled: bool | None = None
    forks_count: int = 0
    star_count: int = 0
    ci_config_path: str | None = None
    runners_token: str | None = None
    public_jobs: bool | None = None
    shared_with_groups: list[SharedGroup] = field(default_factory=list)
    repository_storage: str | None = None
    only_allow_merge_if_pipeline_succeeds: bool | None = None
    only_allow_merge_if_all_discussions_are_resolved: bool | None = None
    printing_merge_requests_link_enabled: bool | None = None
    request_access_enabled: bool | None = None
    approvals_before_merge: int | None = None
    statistics: Statistic | None = None
    links: ProjectLinks | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Project":
        """Create from API response dict."""
        owner = data.get("owner")
        namespace = data.get("namespace")
        permissions = data.get("permissions")
        statistics = data.get("statistics")
        links = data.get("_links")

        return cls(
            id=int(data["id"]),
            name=data["name"],
            name_with_namespace=data.get("name_with_namespace"),
            path=data.get("path"),
            path_with_namespace=data.get("path_with_namespace"),
            description=data.get("description"),
            default_branch=data.get("default_branch"),
            visibility=data.get("visibility"),
            ssh_url_to_repo=data.get("ssh_url_to_repo"),
            http_url_to_repo=data.get("http_url_to_repo"),
            web_url=data.get("web_url"),
            # Newer API versions renamed tag_list to topics
            tag_list=list(data.get("tag_list") or data.get("topics") or []),
            owner=User.from_dict(owner) if owner else None,
            namespace=Namespace.from_dict(namespace) if namespace else None,
            issues_enabled=data.get("issues_enabled"),
            open_issues_count=data.get("open_issues_count"),
            merge_requests_enabled=data.get("merge_requests_enabled"),
            jobs_enabled=data.get("jobs_enabled"),
            wiki_enabled=data.get("wiki_enabled"),
            snippets_enabled=data.get("snippets_enabled"),
            container_registry_enabled=data.get("container_registry_enabled"),
            created_at=data.get("created_at"),
            last_activity_at=data.get("last_activity_at"),
            creator_id=data.get("creator_id"),
            import_status=data.get("import_status"),
            import_error=data.get("import_error"),
            permissions=PermissionsWrapper.from_dict(permissions) if permissions else None,
            archived=bool(data.get("archived")),
            avatar_url=data.get("avatar_url"),
            shared_runners_enabled=data.get("shared_runners_enabled"),
            forks_count=data.get("forks_count") or 0,
            star_count=data.get("star_count") or 0,
            ci_config_path=data.get("ci_config_path"),
            runners_token=data.get("runners_token"),
            public_jobs=data.get("public_jobs"),
            shared_with_groups=[SharedGroup.from_dict(g) for g in data.get("shared_with_groups") or []],
            repository_storage=data.get("repository_storage"),
            only_allow_merge_if_pipeline_succeeds=data.get("only_allow_merge_if_pipeline_succeeds"),
            only_allow_merge_if_all_discussions_are_resolved=data.get(
                "only_allow_merge_if_all_discussions_are_resolved"
            ),
            printing_merge_requests_link_enabled=data.get("printing_merge_requests_link_enabled"),
            request_access_enabled=data.get("request_access_enabled"),
            approvals_before_merge=data.get("approvals_before_merge"),
            statistics=Statistic.from_dict(statistics) if statistics else None,
            links=ProjectLinks.from_dict(links) if links else None,
        )


# =============================================================================
# Template Types
# =============================================================================


@dataclass
class Template:
    """A .gitignore template."""

    name: str
    content: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Template":
        """Create from API response dict."""
        return cls(name=data["name"], content=data.get("content"))


@dataclass
class TemplateListing:
    """An entry in the list of available templates."""

    key: str
    name: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TemplateListing":
        """Create from API response dict."""
        return cls(key=data["key"], name=data.get("name") or data["key"])
