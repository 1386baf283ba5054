from django.conf import settings
from django.db import models

from binhrs.recruitment.constants import AUDIT_ACTION_CHOICES
from binhrs.recruitment.models.application import Application


class AuditLogQuerySet(models.QuerySet):
    def update(self, **kwargs):
        raise TypeError('Audit log entries are append only.')

    def delete(self):
        raise TypeError('Audit log entries are append only.')


class AuditLog(models.Model):
    application = models.ForeignKey(
        Application,
        on_delete=models.PROTECT,
        related_name='audit_logs'
    )
    # null for public (candidate) actions
    actor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='recruitment_audit_logs'
    )
    action = models.CharField(max_length=40, choices=AUDIT_ACTION_CHOICES, db_index=True)
    from_status = models.CharField(max_length=30, blank=True)
    to_status = models.CharField(max_length=30, blank=True)
    note = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    objects = AuditLogQuerySet.as_manager()

    class Meta:
        ordering = ('created_at', 'id')

    def __str__(self):
        return f"{self.application} {self.action}"

    def save(self, *args, **kwargs):
        if self.pk is not None:
            raise TypeError('Audit log entries are append only.')
        return super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise TypeError('Audit log entries are append only.')
