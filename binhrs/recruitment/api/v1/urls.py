from django.urls import path
from rest_framework.routers import DefaultRouter

from binhrs.recruitment.api.v1.views import application, question

app_name = 'recruitment'

router = DefaultRouter()

router.register(
    r'applications',
    application.ApplicationViewSet,
    basename='application'
    # private all
)

router.register(
    r'question-banks',
    question.QuestionBankVersionViewSet,
    basename='question-bank'
    # RH only
)

router.register(
    r'public',
    application.PublicApplicationViewSet,
    basename='public'
    # all public
)

urlpatterns = [
    path(
        'apply/<int:vacancy_id>/',
        application.ApplicationCreateViewSet.as_view({'post': 'create'}),
        name='apply'
        # all public
    ),
    path(
        'public/after-docs/upload/<str:token>/',
        application.AfterDocUploadViewSet.as_view({'put': 'upload'}),
        name='after-docs-upload'
        # signed token
    ),
]

urlpatterns += router.urls
