from django.contrib.auth.base_user import AbstractBaseUser
from django.contrib.auth.models import PermissionsMixin
from django.db import models
from django.utils.translation import gettext_lazy as _

from binhrs.common.models import TimeStampedModel
from binhrs.users.constants import ROLE_CHOICES, RH, MANAGER
from binhrs.users.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin, TimeStampedModel):
    """
    Staff account. Candidates never log in, they are tracked as
    `recruitment.Candidate`.
    """
    email = models.EmailField(
        _('user email'), max_length=255, unique=True,
    )
    full_name = models.CharField(_('Full Name'), max_length=255)
    role = models.CharField(
        max_length=10,
        choices=ROLE_CHOICES,
        db_index=True
    )
    is_active = models.BooleanField(default=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['full_name']

    class Meta:
        ordering = ('full_name',)

    def __str__(self):
        return self.full_name or self.email

    @property
    def is_staff(self):
        # django admin access
        return self.is_superuser

    @property
    def is_rh(self):
        return self.is_active and self.role == RH

    @property
    def is_manager(self):
        return self.is_active and self.role == MANAGER
