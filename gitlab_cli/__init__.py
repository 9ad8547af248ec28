"""
GitLab CLI - Three-layer architecture for the GitLab v4 API.

Layers:
- core: Raw types, request options and HTTP client
- sdk: High-level Gitlab client with resource operations
- cli: Command-line interface
"""

from gitlab_cli.core.client import Credentials
from gitlab_cli.core.options import GetProjectUsersOptions, ProjectParams, SingleProjectOptions
from gitlab_cli.sdk import Gitlab

__version__ = "0.1.0"
__all__ = [
    "Credentials",
    "GetProjectUsersOptions",
    "Gitlab",
    "ProjectParams",
    "SingleProjectOptions",
]
