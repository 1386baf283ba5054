from django.apps import AppConfig


class RecruitmentConfig(AppConfig):
    name = 'binhrs.recruitment'
    label = 'recruitment'
