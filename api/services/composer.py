"""Turn form submissions into task commands.

Everything here is pure: no I/O, no clock, no randomness. A submission with
missing fields is filled with placeholders rather than rejected, so every
submission produces exactly one command.
"""

from collections.abc import Mapping
from typing import Any

from api.models.submission import FormSubmission, Submission, TaskCommand
from api.services.routing import (
    CATEGORY_ROUTES,
    DEFAULT_PRIORITY,
    FALLBACK_CATEGORY,
    priority_value,
)

PLACEHOLDER_NAME = "Unnamed Request"
PLACEHOLDER_EMAIL = "no-email@provided.com"
DEFAULT_CATEGORY = "General"
PLACEHOLDER_DESCRIPTION = "No description provided"

BODY_TEMPLATE = """
Request from: {email}
Type: {category}
Priority: {priority}

Description:
{description}
"""


def normalize(raw: FormSubmission | Mapping[str, Any] | None) -> Submission:
    """Apply defaults for every absent field. Never fails on missing data."""
    if raw is None:
        form = FormSubmission()
    elif isinstance(raw, FormSubmission):
        form = raw
    else:
        form = FormSubmission.model_validate(dict(raw))

    return Submission(
        first_name=form.first_name or "",
        last_name=form.last_name or "",
        email=form.email or PLACEHOLDER_EMAIL,
        category=form.request_type or DEFAULT_CATEGORY,
        description=form.description or PLACEHOLDER_DESCRIPTION,
        priority=form.priority or DEFAULT_PRIORITY,
    )


def lookup(category: str) -> tuple[str, str | None]:
    """Return (marker, bucket) for a category.

    Unknown categories get the fallback marker and no bucket.
    """
    route = CATEGORY_ROUTES.get(category)
    if route is None:
        return CATEGORY_ROUTES[FALLBACK_CATEGORY].marker, None
    return route.marker, route.bucket


def full_name(submission: Submission) -> str:
    name = f"{submission.first_name} {submission.last_name}".strip()
    return name or PLACEHOLDER_NAME


def compose(submission: Submission, project_id: str = "") -> TaskCommand:
    """Build the task command for a normalized submission."""
    marker, bucket = lookup(submission.category)

    body = BODY_TEMPLATE.format(
        email=submission.email,
        category=submission.category,
        priority=submission.priority,
        description=submission.description,
    ).strip()

    return TaskCommand(
        title=f"{marker} [{submission.category}] {full_name(submission)}",
        body=body,
        destination_project_id=project_id,
        destination_bucket_id=bucket,
        priority_value=priority_value(submission.priority),
    )
