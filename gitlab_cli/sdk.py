"""
GitLab SDK - High-level client with nice ergonomics.

This layer provides a clean, typed interface for GitLab v4 operations.
Built on top of the core APIClient.
"""

import builtins
from typing import Any

from gitlab_cli.core.client import (
    DEFAULT_HOST,
    DEFAULT_TIMEOUT,
    APIClient,
    Credentials,
    Transport,
    ValidationError,
)
from gitlab_cli.core.options import (
    GetProjectUsersOptions,
    ProjectParams,
    SingleProjectOptions,
    encode_path_segment,
    require_identifier,
)
from gitlab_cli.core.types import Project, Template, TemplateListing, User


def _with_query(resource: str, query: str | None) -> str:
    if query:
        return f"{resource}?{query}"
    return resource


class Gitlab:
    """
    High-level GitLab API client with typed methods.

    Example:
        gitlab = Gitlab("https://gitlab.com", credentials=Credentials.access_token(token))

        options = SingleProjectOptions.builder("group/project").statistics(True).build()
        project = gitlab.projects.project(options)

        template = gitlab.gitignores.single_template("Python")

    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        transport: Transport | None = None,
        credentials: Credentials | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the GitLab client.

        Args:
            host: GitLab instance URL, e.g. https://gitlab.com
            transport: HTTP transport (defaults to a urllib-based one)
            credentials: Authentication (defaults to anonymous)
            timeout: Request timeout for the default transport, in seconds

        """
        self._client = APIClient(
            host=host,
            transport=transport,
            credentials=credentials,
            timeout=timeout,
        )

        # Sub-clients for different resources
        self.projects = ProjectOperations(self._client)
        self.gitignores = GitIgnoreOperations(self._client)

    @property
    def host(self) -> str:
        """The normalized API root, including /api/v4."""
        return self._client.host

    @property
    def credentials(self) -> Credentials:
        return self._client.credentials


# =============================================================================
# Project Operations
# =============================================================================


class ProjectOperations:
    """Operations for managing projects."""

    def __init__(self, client: APIClient):
        self._client = client

    @staticmethod
    def _resource(id: str = "", more: str = "") -> str:
        if id:
            return f"/projects/{encode_path_segment(id)}{more}"
        return f"/projects{more}"

    def project(self, options: SingleProjectOptions) -> Project:
        """
        Get a single project.

        Args:
            options: Project ID or namespace path, plus query options

        Returns:
            Project details

        """
        resource = _with_query(self._resource(options.id), options.to_query_string())
        return self._client.get(resource, parser=Project.from_dict)

    def users(self, options: GetProjectUsersOptions) -> builtins.list[User]:
        """
        List the users of a project.

        Args:
            options: Project ID or namespace path, plus an optional search term

        Returns:
            List of Users

        """
        resource = _with_query(self._resource(options.id, "/users"), options.to_query_string())
        return self._client.get(resource, parser=lambda data: [User.from_dict(u) for u in data])

    def create(self, params: ProjectParams) -> Project:
        """
        Create a new project.

        Args:
            params: Project name and optional settings

        Returns:
            Created Project

        """
        return self._client.post(self._resource(), params.to_dict(), parser=Project.from_dict)

    def delete(self, id: str | int) -> Any:
        """
        Delete a project.

        Args:
            id: Project ID or namespace path

        Returns:
            The decoded response body, or None when the API returns no content

        """
        return self._client.delete(self._resource(require_identifier(id)))


# =============================================================================
# GitIgnore Template Operations
# =============================================================================


class GitIgnoreOperations:
    """Operations for .gitignore templates."""

    def __init__(self, client: APIClient):
        self._client = client

    @staticmethod
    def _resource(more: str = "") -> str:
        return f"/templates/gitignores{more}"

    def templates(self) -> builtins.list[TemplateListing]:
        """List all available .gitignore templates."""
        return self._client.get(
            self._resource(),
            parser=lambda data: [TemplateListing.from_dict(t) for t in data],
        )

    def single_template(self, name: str) -> Template:
        """
        Get a single .gitignore template.

        Args:
            name: Template name, e.g. "Python"

        Returns:
            Template with its content

        """
        if not name:
            raise ValidationError("Template name is required")
        return self._client.get(
            self._resource(f"/{encode_path_segment(name)}"),
            parser=Template.from_dict,
        )
