from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models

from binhrs.common.models import BaseModel, TimeStampedModel
from binhrs.recruitment.constants import (
    CRITERION_CHOICES,
    MIN_CRITERION_SCORE,
    MAX_CRITERION_SCORE
)
from binhrs.recruitment.models.application import Application


class EvaluationScore(TimeStampedModel):
    application = models.ForeignKey(
        Application,
        on_delete=models.CASCADE,
        related_name='evaluation_scores'
    )
    criterion = models.PositiveSmallIntegerField(choices=CRITERION_CHOICES)
    score = models.PositiveSmallIntegerField(
        validators=[
            MinValueValidator(MIN_CRITERION_SCORE),
            MaxValueValidator(MAX_CRITERION_SCORE)
        ]
    )

    class Meta:
        unique_together = ('application', 'criterion')
        ordering = ('criterion',)


class EvaluationSummary(BaseModel):
    application = models.OneToOneField(
        Application,
        on_delete=models.CASCADE,
        related_name='evaluation_summary'
    )
    factors_for = models.TextField(blank=True)
    factors_against = models.TextField(blank=True)
    conclusion = models.TextField(blank=True)
    references_laborales = models.TextField(blank=True)
    # sum of the criterion scores, persisted on finalize
    total = models.PositiveSmallIntegerField(null=True, blank=True)

    def __str__(self):
        return f"Evaluation {self.application}"

    @property
    def missing_fields(self):
        return [
            field for field in ('factors_for', 'factors_against', 'conclusion')
            if not (getattr(self, field) or '').strip()
        ]
