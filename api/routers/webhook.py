"""Form webhook endpoints: relay submissions into Asana tasks."""

import json
import logging
from typing import Any
from urllib.parse import parse_qsl

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from api.config import get_settings
from api.models.submission import SectionInfo, SectionsResponse, WebhookResponse
from api.services.asana import (
    TaskTrackerError,
    TrackerUnavailableError,
    create_task,
    fetch_project_sections,
)
from api.services.composer import compose, normalize

router = APIRouter(tags=["webhook"])
logger = logging.getLogger(__name__)


async def _read_payload(request: Request) -> dict[str, Any]:
    """Parse a JSON or urlencoded body into a dict.

    Anything that is not a key/value object becomes an empty submission.
    """
    raw = await request.body()
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/x-www-form-urlencoded"):
        return dict(parse_qsl(raw.decode("utf-8", errors="replace")))

    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        logger.warning("Webhook body is not valid JSON, treating as empty")
        return {}
    return data if isinstance(data, dict) else {}


@router.post("/webhook", response_model=WebhookResponse)
async def receive_submission(request: Request):
    """Create an Asana task from a form submission."""
    payload = await _read_payload(request)
    logger.info("Received form submission with fields: %s", sorted(payload))
    logger.debug("Submission payload: %s", payload)

    submission = normalize(payload)
    command = compose(submission, project_id=get_settings().asana_project_id)
    if command.destination_bucket_id is None:
        logger.info(
            "No section mapped for request type %r, using default location",
            submission.category,
        )

    try:
        task = await create_task(command)
    except TaskTrackerError as e:
        retryable = isinstance(e, TrackerUnavailableError)
        logger.error("Error processing webhook: %s", e)
        return JSONResponse(
            status_code=503 if retryable else 502,
            content={"success": False, "error": str(e), "retryable": retryable},
        )

    logger.info("Created Asana task: %s", task.get("name", command.title))
    return WebhookResponse(
        message="Task created successfully!",
        task_id=str(task.get("gid", "")),
    )


@router.post("/webhook/preview")
async def preview_submission(request: Request):
    """Return the task that would be created, without calling Asana."""
    payload = await _read_payload(request)
    command = compose(normalize(payload), project_id=get_settings().asana_project_id)
    return command.model_dump(by_alias=True)


@router.get("/debug-sections", response_model=SectionsResponse)
async def debug_sections():
    """List the sections of the configured Asana project."""
    try:
        sections = await fetch_project_sections()
    except TaskTrackerError as e:
        logger.error("Error fetching sections: %s", e)
        return JSONResponse(status_code=500, content={"error": str(e)})

    return SectionsResponse(
        count=len(sections),
        sections=[SectionInfo(name=s["name"], gid=str(s["gid"])) for s in sections],
    )
