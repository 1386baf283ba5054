import uuid

from django.db import models

from binhrs.common.models import TimeStampedModel
from binhrs.core.utils.common import get_upload_path
from binhrs.recruitment.constants import (
    APPLICATION_STATUS_CHOICES,
    REVISION_DE_DOCUMENTOS,
    TERMINAL_STATUSES,
    DOC_TYPE_CHOICES,
    DOC_PHASE_CHOICES
)
from binhrs.recruitment.models.candidate import Candidate
from binhrs.recruitment.models.vacancy import Vacancy


class FolioSequence(models.Model):
    """
    Per year counter backing folio numbers. The row is locked and
    incremented inside the intake transaction, so a rolled back intake
    gives its number back.
    """
    year = models.PositiveSmallIntegerField(unique=True)
    last_value = models.PositiveIntegerField(default=0)

    def __str__(self):
        return f"{self.year}: {self.last_value}"


class Application(TimeStampedModel):
    folio = models.CharField(max_length=20, unique=True, editable=False)
    candidate = models.ForeignKey(
        Candidate,
        on_delete=models.PROTECT,
        related_name='applications'
    )
    vacancy = models.ForeignKey(
        Vacancy,
        on_delete=models.PROTECT,
        related_name='applications'
    )
    status = models.CharField(
        choices=APPLICATION_STATUS_CHOICES,
        max_length=30,
        db_index=True,
        default=REVISION_DE_DOCUMENTOS
    )

    rh_interview_at = models.DateTimeField(null=True, blank=True)
    rh_interview_location = models.CharField(max_length=255, blank=True)
    manager_interview_at = models.DateTimeField(null=True, blank=True)
    manager_interview_location = models.CharField(max_length=255, blank=True)

    class Meta:
        unique_together = ('vacancy', 'candidate')
        ordering = ('-created_at',)

    def __str__(self):
        return self.folio

    @property
    def is_terminal(self):
        return self.status in TERMINAL_STATUSES

    @property
    def rh_interview_or_none(self):
        return getattr(self, 'rh_interview', None)

    @property
    def manager_interview_or_none(self):
        return getattr(self, 'manager_interview', None)

    @property
    def rh_interview_finished(self):
        interview = self.rh_interview_or_none
        return bool(interview and interview.finished_at)


class ApplicationDocument(TimeStampedModel):
    application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        related_name='documents'
    )
    doc_type = models.CharField(max_length=30, choices=DOC_TYPE_CHOICES)
    phase = models.CharField(max_length=10, choices=DOC_PHASE_CHOICES)
    version = models.PositiveIntegerField()
    attachment = models.FileField(upload_to=get_upload_path, max_length=255)
    filename = models.CharField(max_length=255, blank=True)

    class Meta:
        unique_together = ('application', 'doc_type', 'version')
        ordering = ('doc_type', 'version')

    def __str__(self):
        return f"{self.application} - {self.doc_type} v{self.version}"

    @property
    def uploaded_at(self):
        return self.created_at


class DocumentUpload(TimeStampedModel):
    """
    Pending write session for a post acceptance document. Nothing is
    recorded as uploaded until the session is finalized.
    """
    upload_id = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        related_name='document_uploads'
    )
    doc_type = models.CharField(max_length=30, choices=DOC_TYPE_CHOICES)
    filename = models.CharField(max_length=255)
    mimetype = models.CharField(max_length=100, blank=True)
    size = models.PositiveIntegerField(default=0)
    storage_path = models.CharField(max_length=255)
    expected_version = models.PositiveIntegerField()
    expires_at = models.DateTimeField()
    finalized_at = models.DateTimeField(null=True, blank=True)
    document = models.OneToOneField(
        ApplicationDocument,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='upload_session'
    )

    def __str__(self):
        return str(self.upload_id)
