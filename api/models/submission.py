"""Form submission and task command models."""

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FormSubmission(BaseModel):
    """Raw form submission as posted by the spreadsheet trigger.

    Every field is optional. Blank strings are treated as missing.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    email: str | None = None
    request_type: str | None = Field(None, alias="requestType")
    description: str | None = None
    priority: str | None = None

    @field_validator("*", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str):
            value = str(value)
        return value if value.strip() else None


@dataclass(frozen=True)
class Submission:
    """Normalized submission with every default applied."""

    first_name: str
    last_name: str
    email: str
    category: str
    description: str
    priority: str


class TaskCommand(BaseModel):
    """Instruction handed to the task tracker client.

    ``destination_bucket_id`` holds the bucket reference from the category
    table (a section name unless configured otherwise); ``None`` means the
    task goes to the project's default section.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    body: str
    destination_project_id: str = Field("", alias="destinationProjectId")
    destination_bucket_id: str | None = Field(None, alias="destinationBucketId")
    priority_value: str = Field(..., alias="priorityValue")


class WebhookResponse(BaseModel):
    """Response after a task was created."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str
    task_id: str = Field(..., alias="taskId")


class SectionInfo(BaseModel):
    name: str
    gid: str


class SectionsResponse(BaseModel):
    count: int
    sections: list[SectionInfo]
