from django.conf import settings
from django.db import models

from binhrs.common.models import BaseModel, TimeStampedModel
from binhrs.recruitment.constants import (
    VACANCY_TYPE_CHOICES,
    ADMINISTRATIVO,
    DOC_TYPE_CHOICES,
    DOC_PHASE_CHOICES,
    QUESTION_BANK_KIND_CHOICES
)


class Vacancy(BaseModel):
    """
    Job posting. Managed by RH through the admin, the lifecycle engine only
    reads it.
    """
    position = models.CharField(max_length=255)
    vacancy_type = models.CharField(
        max_length=20,
        choices=VACANCY_TYPE_CHOICES,
        default=ADMINISTRATIVO
    )
    manager = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='managed_vacancies'
    )
    is_active = models.BooleanField(default=True, db_index=True)
    # explicit question bank kind, resolved from the position when empty
    question_bank_kind = models.CharField(
        max_length=30,
        choices=QUESTION_BANK_KIND_CHOICES,
        blank=True
    )

    class Meta:
        verbose_name_plural = 'vacancies'
        ordering = ('-created_at',)

    def __str__(self):
        return self.position

    def required_doc_types(self, phase):
        return list(
            self.required_documents.filter(phase=phase).order_by(
                'id'
            ).values_list('doc_type', flat=True)
        )


class VacancyRequiredDocument(TimeStampedModel):
    vacancy = models.ForeignKey(
        Vacancy,
        on_delete=models.CASCADE,
        related_name='required_documents'
    )
    doc_type = models.CharField(max_length=30, choices=DOC_TYPE_CHOICES)
    phase = models.CharField(max_length=10, choices=DOC_PHASE_CHOICES)

    class Meta:
        unique_together = ('vacancy', 'doc_type', 'phase')

    def __str__(self):
        return f"{self.vacancy} - {self.doc_type} ({self.phase})"
