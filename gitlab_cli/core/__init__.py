"""
Core layer - Raw types, request options and HTTP client.

This layer provides:
- Typed dataclasses matching the GitLab v4 API resources
- Immutable request options built through per-call builders
- Low-level HTTP client with auth, status classification and error mapping
"""

from gitlab_cli.core.client import (
    APIClient,
    APIError,
    CodecError,
    CredentialKind,
    Credentials,
    GitlabError,
    ResponseIOError,
    Transport,
    TransportError,
    UrllibTransport,
    ValidationError,
)
from gitlab_cli.core.options import (
    GetProjectUsersOptions,
    ProjectParams,
    SingleProjectOptions,
    Visibility,
)
from gitlab_cli.core.types import (
    Namespace,
    Permission,
    PermissionsWrapper,
    Project,
    ProjectLinks,
    SharedGroup,
    Statistic,
    Template,
    TemplateListing,
    User,
)

__all__ = [
    "APIClient",
    "APIError",
    "CodecError",
    "CredentialKind",
    "Credentials",
    "GetProjectUsersOptions",
    "GitlabError",
    "Namespace",
    "Permission",
    "PermissionsWrapper",
    "Project",
    "ProjectLinks",
    "ProjectParams",
    "ResponseIOError",
    "SharedGroup",
    "SingleProjectOptions",
    "Statistic",
    "Template",
    "TemplateListing",
    "Transport",
    "TransportError",
    "UrllibTransport",
    "User",
    "ValidationError",
    "Visibility",
]
