"""
Job, job template and media processor models.

Jobs are created and managed by the processing pipeline; the client only
lists them, looks them up and deletes them.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import IntEnum
from typing import Any, ClassVar, Self

from media_services.api.odata import parse_datetime
from media_services.models.base import DeletableEntity, MediaEntity, enum_value


class JobState(IntEnum):
    """Processing state of a job."""

    QUEUED = 0
    SCHEDULED = 1
    PROCESSING = 2
    FINISHED = 3
    ERROR = 4
    CANCELED = 5
    CANCELING = 6


@dataclass(kw_only=True, eq=False)
class Job(DeletableEntity):
    entity_set: ClassVar[str] = "Jobs"

    name: str = ""
    state: JobState = JobState.QUEUED
    priority: int = 0
    template_id: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    created: datetime | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            state=enum_value(JobState, data.get("State"), JobState.QUEUED),
            priority=int(data.get("Priority") or 0),
            template_id=data.get("TemplateId"),
            start_time=parse_datetime(data.get("StartTime")),
            end_time=parse_datetime(data.get("EndTime")),
            created=parse_datetime(data.get("Created")),
            last_modified=parse_datetime(data.get("LastModified")),
        )

    @property
    def is_complete(self) -> bool:
        return self.state in (JobState.FINISHED, JobState.ERROR, JobState.CANCELED)


@dataclass(kw_only=True, eq=False)
class JobTemplate(MediaEntity):
    entity_set: ClassVar[str] = "JobTemplates"

    name: str = ""
    template_body: str = ""
    number_of_input_assets: int = 0
    template_type: int = 0
    created: datetime | None = None
    last_modified: datetime | None = None

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            template_body=data.get("JobTemplateBody") or "",
            number_of_input_assets=int(data.get("NumberofInputAssets") or 0),
            template_type=int(data.get("TemplateType") or 0),
            created=parse_datetime(data.get("Created")),
            last_modified=parse_datetime(data.get("LastModified")),
        )


@dataclass(kw_only=True, eq=False)
class MediaProcessor(MediaEntity):
    """A processing component (encoder, packager, encryptor) offered by the service."""

    entity_set: ClassVar[str] = "MediaProcessors"

    name: str = ""
    description: str = ""
    sku: str = ""
    vendor: str = ""
    version: str = ""

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> Self:
        return cls(
            id=data["Id"],
            name=data.get("Name") or "",
            description=data.get("Description") or "",
            sku=data.get("Sku") or "",
            vendor=data.get("Vendor") or "",
            version=data.get("Version") or "",
        )
