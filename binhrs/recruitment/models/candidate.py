from django.db import models
from django.utils.translation import gettext_lazy as _

from binhrs.common.models import TimeStampedModel


class Candidate(TimeStampedModel):
    """Person applying to vacancies, identified by email."""
    email = models.EmailField(_('candidate email'), max_length=255, unique=True)
    full_name = models.CharField(max_length=255)
    phone = models.CharField(max_length=30, blank=True)

    def __str__(self):
        return f"{self.full_name} <{self.email}>"
