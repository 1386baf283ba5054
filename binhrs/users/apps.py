from django.apps import AppConfig


class UsersConfig(AppConfig):
    name = 'binhrs.users'
    label = 'users'
