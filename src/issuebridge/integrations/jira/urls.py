"""URL resolution for the JIRA REST API and for host application links."""

from __future__ import annotations

from urllib.parse import urlsplit

from issuebridge.integrations.exceptions import InvalidURLError
from issuebridge.integrations.models import Noteable, Project, User, noteable_name

DEFAULT_PORTS = (80, 443)

# Route segment per noteable type; commits are singular in host routes.
ENTITY_ROUTES = {
    "commit": "commit",
    "issue": "issues",
    "merge_request": "merge_requests",
    "snippet": "snippets",
}


def server_url(project_url: str) -> str:
    """Reduce a tracker URL to scheme://host[:port].

    Default ports (80, 443) are dropped; any other explicit port is kept.

    Raises:
        InvalidURLError: If the URL has no scheme or host, or a bad port.
    """
    try:
        parts = urlsplit(project_url)
        port = parts.port
    except (TypeError, ValueError) as e:
        raise InvalidURLError(f"bad URI(is not URI?): {project_url!r}") from e

    if not parts.scheme or not parts.hostname:
        raise InvalidURLError(f"bad URI(is not URI?): {project_url!r}")

    # IPv6 literals keep their brackets.
    host = parts.netloc.rpartition("@")[2]
    if ":" in host.rpartition("]")[2]:
        host = host[: host.rindex(":")]

    url = f"{parts.scheme}://{host}"
    if port is not None and port not in DEFAULT_PORTS:
        url += f":{port}"
    return url


def close_issue_url(server: str, api_version: str, issue_name: str | int) -> str:
    return f"{server}/rest/api/{api_version}/issue/{issue_name}/transitions"


def add_comment_url(server: str, api_version: str, issue_name: str | int) -> str:
    return f"{server}/rest/api/{api_version}/issue/{issue_name}/comment"


def resource_url(base_url: str, path: str) -> str:
    """Join the host application's base URL with an absolute route path."""
    return f"{base_url.rstrip('/')}{path}"


def user_path(user: User) -> str:
    return f"/{user.username}"


def project_path(project: Project) -> str:
    return f"/{project.namespace.path}/{project.path}"


def entity_path(project: Project, entity_name: str, entity_id: str | int) -> str:
    """Path of a project-scoped entity, e.g. /group/proj/commit/<sha>."""
    try:
        segment = ENTITY_ROUTES[entity_name]
    except KeyError:
        raise ValueError(f"No route for entity type '{entity_name}'") from None
    return f"{project_path(project)}/{segment}/{entity_id}"


def noteable_path(project: Project, noteable: Noteable) -> str:
    return entity_path(project, noteable_name(noteable), noteable.url_id)
