"""Job, job template and media processor collections."""

from media_services.collections.base import DeletableEntityCollection, EntityCollection
from media_services.models.job import Job, JobTemplate, MediaProcessor


class JobCollection(DeletableEntityCollection[Job]):
    entity_type = Job


class JobTemplateCollection(EntityCollection[JobTemplate]):
    entity_type = JobTemplate


class MediaProcessorCollection(EntityCollection[MediaProcessor]):
    entity_type = MediaProcessor
