from django.conf import settings
from django.db import models
from django.db.models import Q

from binhrs.common.models import TimeStampedModel
from binhrs.recruitment.constants import QUESTION_BANK_KIND_CHOICES


class QuestionBank(TimeStampedModel):
    kind = models.CharField(
        max_length=30,
        choices=QUESTION_BANK_KIND_CHOICES,
        unique=True
    )
    name = models.CharField(max_length=255, blank=True)

    def __str__(self):
        return self.name or self.kind

    @property
    def active_version(self):
        return self.versions.filter(is_active=True).first()


class QuestionBankVersion(TimeStampedModel):
    """
    Immutable ordered set of questions. Interviews reference a version,
    so questions are never edited in place, a new version is imported
    instead.
    """
    bank = models.ForeignKey(
        QuestionBank,
        on_delete=models.CASCADE,
        related_name='versions'
    )
    version = models.PositiveIntegerField()
    is_active = models.BooleanField(default=False)
    imported_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )

    class Meta:
        unique_together = ('bank', 'version')
        ordering = ('bank', '-version')
        constraints = [
            models.UniqueConstraint(
                fields=['bank'],
                condition=Q(is_active=True),
                name='unique_active_version_per_bank'
            )
        ]

    def __str__(self):
        return f"{self.bank} v{self.version}"


class Question(models.Model):
    bank_version = models.ForeignKey(
        QuestionBankVersion,
        on_delete=models.CASCADE,
        related_name='questions'
    )
    ord = models.PositiveIntegerField()
    text = models.TextField()
    is_required = models.BooleanField(default=True)

    class Meta:
        unique_together = ('bank_version', 'ord')
        ordering = ('ord',)

    def __str__(self):
        return f"{self.ord}. {self.text}"
