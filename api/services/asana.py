"""Asana task tracker client.

Resolves bucket references to section gids, then creates tasks. Failures are
raised as one of two error types so the caller can tell a flaky connection
(worth retrying) from a request Asana refused.
"""

import logging
from typing import Any

import httpx

from api.config import get_settings
from api.models.submission import TaskCommand
from api.services.cache import TTLCache
from api.services.http_client import asana_headers, get_shared_client

logger = logging.getLogger(__name__)

# Section listings per project, created on first use so the TTL follows settings
_sections_cache: TTLCache | None = None


class TaskTrackerError(Exception):
    """Base error for task tracker failures."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TrackerUnavailableError(TaskTrackerError):
    """Network failure, timeout, rate limit or 5xx. Safe to retry."""


class TrackerRejectedError(TaskTrackerError):
    """Asana refused the request (bad token, bad payload, unknown project)."""


def _get_sections_cache() -> TTLCache:
    global _sections_cache
    if _sections_cache is None:
        _sections_cache = TTLCache(ttl=get_settings().section_cache_ttl)
    return _sections_cache


def _error_message(resp: httpx.Response) -> str:
    """Pull ``errors[0].message`` out of an Asana error body, if there is one."""
    try:
        errors = resp.json().get("errors") or []
        if errors and errors[0].get("message"):
            return errors[0]["message"]
    except (ValueError, AttributeError):
        pass
    return f"HTTP {resp.status_code}"


def _check_response(resp: httpx.Response, context: str, expected: type) -> Any:
    """Return the ``data`` member of a successful response or raise a tracker error.

    A 2xx whose body is not an Asana envelope (HTML from a proxy, empty body,
    ``"data": null``) is treated as the tracker being unavailable.
    """
    if resp.is_success:
        try:
            body = resp.json()
        except ValueError as e:
            raise TrackerUnavailableError(
                f"{context}: invalid JSON response", status_code=resp.status_code
            ) from e
        data = body.get("data") if isinstance(body, dict) else None
        if not isinstance(data, expected):
            raise TrackerUnavailableError(
                f"{context}: unexpected response body", status_code=resp.status_code
            )
        return data

    message = f"{context}: {_error_message(resp)}"
    if resp.status_code == 429 or resp.status_code >= 500:
        raise TrackerUnavailableError(message, status_code=resp.status_code)
    raise TrackerRejectedError(message, status_code=resp.status_code)


async def fetch_project_sections(project_id: str | None = None) -> list[dict[str, Any]]:
    """List the sections of an Asana project.

    Cached for ``section_cache_ttl`` seconds. When a refresh fails the last
    known listing is served instead; with nothing cached the error propagates.

    Raises:
        TrackerUnavailableError: On network errors, 5xx/429 responses or a
            2xx body that is not an Asana envelope.
        TrackerRejectedError: On other 4xx responses.
    """
    settings = get_settings()
    project_id = project_id or settings.asana_project_id
    cache = _get_sections_cache()
    cache_key = f"sections:{project_id}"

    cached = cache.get(cache_key)
    if cached is not None:
        return cached

    client = get_shared_client()
    url = f"{settings.asana_api_base}/projects/{project_id}/sections"
    try:
        try:
            resp = await client.get(url, headers=asana_headers())
        except httpx.HTTPError as e:
            raise TrackerUnavailableError(f"Listing sections failed: {e}") from e
        sections = _check_response(resp, "Listing sections failed", list)
    except TaskTrackerError:
        stale = cache.get_stale(cache_key)
        if stale is None:
            raise
        logger.warning("Section listing failed, serving stale copy for %s", project_id)
        return stale

    cache.set(cache_key, sections)
    return sections


async def resolve_bucket(bucket: str | None) -> str | None:
    """Resolve a bucket reference to an Asana section gid.

    Sections configured in ``section_ids`` are returned directly; anything
    else is looked up by exact name in the project's section listing.
    Returns None when the section cannot be found or listed, in which case
    the task lands in the project's default section.
    """
    if bucket is None:
        return None

    settings = get_settings()
    static_gid = settings.section_ids.get(bucket)
    if static_gid:
        return static_gid

    try:
        sections = await fetch_project_sections(settings.asana_project_id)
    except TaskTrackerError as e:
        logger.warning(
            'Could not list sections for "%s" (%s). Task will go to default location.',
            bucket,
            e,
        )
        return None

    for section in sections:
        if section.get("name") == bucket:
            logger.info("Found section: %s (ID: %s)", bucket, section.get("gid"))
            return str(section["gid"])

    logger.warning('Section "%s" not found. Task will go to default location.', bucket)
    return None


def build_task_payload(command: TaskCommand, section_gid: str | None) -> dict[str, Any]:
    """Build the body for ``POST /tasks``.

    ``memberships`` is only sent when a section resolved; otherwise Asana
    files the task under the project's default section.
    """
    project_id = command.destination_project_id or get_settings().asana_project_id
    data: dict[str, Any] = {
        "name": command.title,
        "notes": command.body,
        "projects": [project_id],
        "priority": command.priority_value,
    }
    if section_gid:
        data["memberships"] = [{"project": project_id, "section": section_gid}]
    return {"data": data}


async def create_task(command: TaskCommand) -> dict[str, Any]:
    """Create an Asana task from a command.

    Returns the ``data`` object of the Asana response (includes ``gid`` and
    ``name``).

    Raises:
        TrackerUnavailableError: On network errors, 5xx/429 responses or a
            2xx body that is not an Asana envelope.
        TrackerRejectedError: On other 4xx responses.
    """
    settings = get_settings()
    section_gid = await resolve_bucket(command.destination_bucket_id)
    payload = build_task_payload(command, section_gid)

    client = get_shared_client()
    try:
        resp = await client.post(
            f"{settings.asana_api_base}/tasks",
            headers=asana_headers(),
            json=payload,
        )
    except httpx.HTTPError as e:
        raise TrackerUnavailableError(f"Failed to create Asana task: {e}") from e

    task = _check_response(resp, "Failed to create Asana task", dict)
    logger.info(
        "Task created in section: %s", command.destination_bucket_id or "default"
    )
    return task
