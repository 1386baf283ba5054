from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models

from binhrs.common.models import BaseModel, TimeStampedModel
from binhrs.recruitment.constants import MIN_MANAGER_SCORE, MAX_MANAGER_SCORE
from binhrs.recruitment.models.application import Application
from binhrs.recruitment.models.question import QuestionBankVersion, Question


class RHInterview(TimeStampedModel):
    application = models.OneToOneField(
        Application,
        on_delete=models.CASCADE,
        related_name='rh_interview'
    )
    # snapshot taken at start, later activations do not affect it
    bank_version = models.ForeignKey(
        QuestionBankVersion,
        on_delete=models.PROTECT,
        related_name='rh_interviews'
    )
    interviewer = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='rh_interviews'
    )
    started_at = models.DateTimeField()
    finished_at = models.DateTimeField(null=True, blank=True)

    def __str__(self):
        return f"RH interview {self.application}"

    @property
    def is_finished(self):
        return self.finished_at is not None


class RHInterviewAnswer(TimeStampedModel):
    interview = models.ForeignKey(
        RHInterview,
        on_delete=models.CASCADE,
        related_name='answers'
    )
    question = models.ForeignKey(
        Question,
        on_delete=models.PROTECT,
        related_name='+'
    )
    answer = models.TextField(blank=True)

    class Meta:
        unique_together = ('interview', 'question')
        ordering = ('question__ord',)


class RHInterviewExtraQuestion(models.Model):
    interview = models.ForeignKey(
        RHInterview,
        on_delete=models.CASCADE,
        related_name='extra_questions'
    )
    ord = models.PositiveIntegerField()
    question = models.TextField()
    answer = models.TextField(blank=True)

    class Meta:
        ordering = ('ord',)


class ManagerInterview(BaseModel):
    application = models.OneToOneField(
        Application,
        on_delete=models.CASCADE,
        related_name='manager_interview'
    )
    score = models.PositiveSmallIntegerField(
        validators=[
            MinValueValidator(MIN_MANAGER_SCORE),
            MaxValueValidator(MAX_MANAGER_SCORE)
        ]
    )
    notes = models.TextField(blank=True)

    def __str__(self):
        return f"Manager interview {self.application}: {self.score}"

    @property
    def updated_at(self):
        return self.modified_at
