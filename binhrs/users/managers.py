from django.contrib.auth.base_user import BaseUserManager
from django.db.models import QuerySet

from binhrs.users.constants import RH, MANAGER


class UserQueryset(QuerySet):
    def current(self):
        return self.filter(is_active=True)

    def rh(self):
        return self.current().filter(role=RH)

    def managers(self):
        return self.current().filter(role=MANAGER)


class UserManager(BaseUserManager.from_queryset(UserQueryset)):

    def create_user(self, email, password, **extra_fields):
        extra_fields.setdefault('is_superuser', False)
        email = self.normalize_email(email).lower()
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)

        return user

    def create_superuser(self, email, password, full_name, **extra_fields):
        extra_fields.setdefault('role', RH)
        user = self.create_user(
            email=email,
            password=password,
            full_name=full_name,
            **extra_fields
        )
        user.is_superuser = True
        user.is_active = True
        user.save(using=self._db)
        return user

    def get_by_natural_key(self, _email):
        return self.get(email=_email)
