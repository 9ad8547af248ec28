"""
GitLab CLI - Command-line interface.

This layer provides the user-facing CLI commands, using the SDK layer
for all operations. It handles:
- Argument parsing
- Credential and host discovery from the environment (and .env)
- TTY detection for human vs machine output
- Mapping error kinds to exit codes
"""

import argparse
import json
import logging
import os
import sys
from collections.abc import Mapping
from dataclasses import asdict
from typing import Any

from dotenv import find_dotenv, load_dotenv

from gitlab_cli.core.client import (
    DEFAULT_HOST,
    APIError,
    CodecError,
    Credentials,
    GitlabError,
    ResponseIOError,
    Transport,
    TransportError,
    ValidationError,
)
from gitlab_cli.core.options import (
    GetProjectUsersOptions,
    ProjectParams,
    SingleProjectOptions,
    Visibility,
)
from gitlab_cli.sdk import Gitlab

logger = logging.getLogger(__name__)

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_FAULT = 3
EXIT_CODEC = 4
EXIT_TRANSPORT = 5
EXIT_IO = 6

_EXIT_CODES: list[tuple[type[GitlabError], int]] = [
    (APIError, EXIT_FAULT),
    (CodecError, EXIT_CODEC),
    (TransportError, EXIT_TRANSPORT),
    (ResponseIOError, EXIT_IO),
]


def exit_code_for(error: GitlabError) -> int:
    """Map an error kind to a process exit code."""
    for error_type, code in _EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return EXIT_ERROR


# =============================================================================
# Configuration
# =============================================================================


def credentials_from_env(environ: Mapping[str, str]) -> Credentials:
    """Pick credentials from GITLAB_ACCESS_TOKEN, then GITLAB_OAUTH_TOKEN."""
    access_token = environ.get("GITLAB_ACCESS_TOKEN")
    if access_token:
        return Credentials.access_token(access_token)
    oauth_token = environ.get("GITLAB_OAUTH_TOKEN")
    if oauth_token:
        return Credentials.oauth_token(oauth_token)
    return Credentials.anonymous()


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def configure_logging(verbose: bool = False, level: str | None = None) -> None:
    """Send log records to stderr so stdout stays machine-readable."""
    if level:
        log_level = getattr(logging, level.upper()) if level.upper() in LOG_LEVELS else logging.WARNING
    elif verbose:
        log_level = logging.DEBUG
    else:
        log_level = logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


# =============================================================================
# Output Helpers
# =============================================================================


def is_tty() -> bool:
    """Check if stdout is a TTY (human) or pipe (machine)."""
    return sys.stdout.isatty()


def json_output(data: Any, pretty: bool = False) -> None:
    """Print JSON output."""
    indent = 2 if pretty or is_tty() else None
    print(json.dumps(data, indent=indent, default=str))


def error_output(error: GitlabError) -> None:
    """Print error and exit with a code matching its kind."""
    json_output(error.to_dict())
    sys.exit(exit_code_for(error))


def success_output(data: Any) -> None:
    """Print success output."""
    json_output(data)


def table_output(
    headers: list[str],
    rows: list[list[str]],
    widths: list[int],
) -> None:
    """Print a formatted table for human output."""
    header_line = "  ".join(h.ljust(w) for h, w in zip(headers, widths))
    print(header_line)
    print("-" * len(header_line))

    for row in rows:
        print("  ".join(str(v)[:w].ljust(w) for v, w in zip(row, widths)))


# =============================================================================
# CLI Commands
# =============================================================================


def cmd_get_project(client: Gitlab, args: argparse.Namespace) -> None:
    """Get a project by ID or namespace path."""
    try:
        builder = SingleProjectOptions.builder(args.name)
        builder.statistics(not args.no_statistics)
        project = client.projects.project(builder.build())
        success_output(asdict(project))
    except GitlabError as e:
        error_output(e)


def cmd_gitignore(client: Gitlab, args: argparse.Namespace) -> None:
    """List gitignore templates or fetch one."""
    try:
        if args.list:
            listings = client.gitignores.templates()
            if is_tty():
                if not listings:
                    print("No templates found.")
                    return
                table_output(
                    ["Key", "Name"],
                    [[t.key, t.name] for t in listings],
                    [30, 40],
                )
            else:
                success_output({"data": [asdict(t) for t in listings]})
            return

        if not args.template:
            raise ValidationError("Template name required (or use --list)")

        template = client.gitignores.single_template(args.template)
        if is_tty():
            print(template.content or "")
        else:
            success_output(asdict(template))
    except GitlabError as e:
        error_output(e)


def cmd_list_users(client: Gitlab, args: argparse.Namespace) -> None:
    """List users of a project."""
    try:
        builder = GetProjectUsersOptions.builder(args.name)
        if args.search:
            builder.search_for_user(args.search)
        users = client.projects.users(builder.build())

        if is_tty():
            if not users:
                print("No users found.")
                return
            table_output(
                ["ID", "Username", "Name"],
                [[str(u.id), u.username or "", u.name] for u in users],
                [10, 25, 40],
            )
        else:
            success_output({"data": [asdict(u) for u in users], "total_count": len(users)})
    except GitlabError as e:
        error_output(e)


def cmd_create_project(client: Gitlab, args: argparse.Namespace) -> None:
    """Create a new project."""
    try:
        builder = ProjectParams.builder(args.name)
        if args.path:
            builder.path(args.path)
        if args.namespace_id is not None:
            builder.namespace_id(args.namespace_id)
        if args.description:
            builder.description(args.description)
        if args.visibility:
            builder.visibility(args.visibility)
        project = client.projects.create(builder.build())
        success_output(asdict(project))
    except GitlabError as e:
        error_output(e)


def cmd_delete_project(client: Gitlab, args: argparse.Namespace) -> None:
    """Delete a project."""
    try:
        result = client.projects.delete(args.name)
        output: dict[str, Any] = {"success": True, "message": f"Project {args.name} deleted"}
        if result is not None:
            output["response"] = result
        success_output(output)
    except GitlabError as e:
        error_output(e)


# =============================================================================
# Main CLI
# =============================================================================


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="gitlab",
        description="GitLab CLI - Command-line interface for the GitLab v4 API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Environment:
  GITLAB_ACCESS_TOKEN  Personal access token (PRIVATE-TOKEN header)
  GITLAB_OAUTH_TOKEN   OAuth2 token, used when no access token is set
  GITLAB_URL           Default for --host

Exit codes:
  0 success, 1 usage/validation, 3 API fault, 4 codec, 5 transport, 6 I/O

Examples:
  gitlab getproject gitlab-org/gitlab
  gitlab gitignore --list
  gitlab gitignore Python
  gitlab listusers 42 --search alice
""",
    )
    parser.add_argument("--host", help=f"GitLab host (default: $GITLAB_URL or {DEFAULT_HOST})")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests to stderr")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="Explicit log level (overrides --verbose)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ========== Projects ==========
    getproject = subparsers.add_parser("getproject", help="Get a project by ID, name, or namespace path")
    getproject.add_argument("name", help="ID or namespace path of the project")
    getproject.add_argument("--no-statistics", action="store_true", help="Don't request storage statistics")
    getproject.set_defaults(func=cmd_get_project)

    listusers = subparsers.add_parser("listusers", help="List users of a project")
    listusers.add_argument("name", help="ID or namespace path of the project")
    listusers.add_argument("--search", "-s", help="Filter users by name or username")
    listusers.set_defaults(func=cmd_list_users)

    createproject = subparsers.add_parser("createproject", help="Create a new project")
    createproject.add_argument("name", help="Name of the new project")
    createproject.add_argument("--path", help="Repository path (defaults to a slug of the name)")
    createproject.add_argument("--namespace-id", type=int, help="Namespace to create the project in")
    createproject.add_argument("--description", "-d", help="Project description")
    createproject.add_argument(
        "--visibility",
        choices=[v.value for v in Visibility],
        help="Project visibility",
    )
    createproject.set_defaults(func=cmd_create_project)

    deleteproject = subparsers.add_parser("deleteproject", help="Delete a project")
    deleteproject.add_argument("name", help="ID or namespace path of the project")
    deleteproject.set_defaults(func=cmd_delete_project)

    # ========== Templates ==========
    gitignore = subparsers.add_parser("gitignore", help="List or retrieve gitignore templates")
    gitignore_group = gitignore.add_mutually_exclusive_group()
    gitignore_group.add_argument(
        "--list", "-l", action="store_true", help="Fetch all available gitignore template names"
    )
    gitignore_group.add_argument("template", nargs="?", help="Name of template to retrieve")
    gitignore.set_defaults(func=cmd_gitignore)

    return parser


def main(argv: list[str] | None = None, transport: Transport | None = None) -> None:
    """Main CLI entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(EXIT_OK)

    configure_logging(verbose=args.verbose, level=args.log_level)

    # Existing environment variables win over .env values
    load_dotenv(find_dotenv(usecwd=True), override=False)

    host = args.host or os.environ.get("GITLAB_URL") or DEFAULT_HOST
    credentials = credentials_from_env(os.environ)
    logger.info("GitLab host: %s", host)
    logger.info("Credentials used: %s", credentials.kind.value)

    client = Gitlab(host, transport=transport, credentials=credentials)
    args.func(client, args)


if __name__ == "__main__":
    main()
