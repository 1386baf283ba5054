from django.conf import settings
from django.db import models


class TimeStampedModel(models.Model):
    created_at = models.DateTimeField(auto_now_add=True)
    modified_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ('-created_at', '-modified_at')
        abstract = True


class ActorModel(models.Model):
    """
    Staff user who last touched the row. Set explicitly by the service
    performing the change, there is no request-global current user.
    """
    modified_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        related_name="%(app_label)s_%(class)s_modified",
        on_delete=models.SET_NULL,
        null=True,
        blank=True
    )

    class Meta:
        abstract = True


class BaseModel(ActorModel, TimeStampedModel):
    class Meta:
        ordering = ('-created_at', '-modified_at')
        abstract = True
