from django.db.models import Q
from django.urls import reverse
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import status
from rest_framework.decorators import action
from rest_framework.filters import SearchFilter, OrderingFilter
from rest_framework.parsers import BaseParser
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from binhrs.core.mixins.serializers import DummySerializer
from binhrs.core.mixins.viewset_mixins import CreateViewSetMixin, ListRetrieveViewSetMixin
from binhrs.recruitment.api.v1.permissions import IsRHOrManager
from binhrs.recruitment.api.v1.serializers.application import (
    ApplicationCreateSerializer,
    ApplicationSerializer,
    ApplicationDetailSerializer,
    ApplicationDocumentSerializer,
    AuditLogSerializer,
    ScheduleSerializer,
    PublicLookupSerializer,
    AfterDocStartSerializer,
    AfterDocFinalizeSerializer
)
from binhrs.recruitment.api.v1.serializers.evaluation import (
    EvaluationScoresSerializer,
    EvaluationSummarySerializer,
    EvaluationFinalizeSerializer
)
from binhrs.recruitment.api.v1.serializers.interview import (
    RHDraftSerializer,
    RHInterviewSerializer,
    ManagerResultSerializer
)
from binhrs.recruitment.models import Application
from binhrs.recruitment.utils import documents, evaluation, manager_interview, rh_interview, stages
from binhrs.recruitment.utils.status import get_status


class RawBytesParser(BaseParser):
    media_type = '*/*'

    def parse(self, stream, media_type=None, parser_context=None):
        return stream.read() if stream is not None else b''


class ApplicationCreateViewSet(CreateViewSetMixin):
    serializer_class = ApplicationCreateSerializer
    permission_classes = []  # it is public api

    def get_serializer_context(self):
        ctx = super().get_serializer_context()
        ctx['vacancy_id'] = self.kwargs.get('vacancy_id')
        return ctx

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(
            serializer.data,
            status=status.HTTP_200_OK if serializer.instance.existing
            else status.HTTP_201_CREATED
        )


class PublicApplicationViewSet(GenericViewSet):
    """
    Candidate facing endpoints, authenticated by folio and email.
    """
    serializer_class = DummySerializer
    permission_classes = []  # it is public api

    def get_serializer_class(self):
        return {
            'application_status': PublicLookupSerializer,
            'after_docs_progress': PublicLookupSerializer,
            'after_docs_start': AfterDocStartSerializer,
            'after_docs_finalize': AfterDocFinalizeSerializer,
        }.get(self.action, DummySerializer)

    def _validated(self):
        serializer = self.get_serializer(data=self.request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data

    @action(detail=False, methods=['post'], url_name='status', url_path='status')
    def application_status(self, request):
        data = self._validated()
        return Response(get_status(data['folio'], data['email']))

    @action(detail=False, methods=['post'], url_name='after-docs-progress',
            url_path='after-docs/progress')
    def after_docs_progress(self, request):
        data = self._validated()
        return Response(documents.get_after_docs_progress(data['folio'], data['email']))

    @action(detail=False, methods=['post'], url_name='after-docs-start',
            url_path='after-docs/start')
    def after_docs_start(self, request):
        data = self._validated()
        upload, token = documents.start_upload(**data)
        return Response({
            'upload_id': upload.upload_id,
            'upload_url': request.build_absolute_uri(
                reverse('api_v1:recruitment:after-docs-upload', kwargs={'token': token})
            ),
            'expires_at': upload.expires_at,
            'max_version_expected': upload.expected_version,
        }, status=status.HTTP_201_CREATED)

    @action(detail=False, methods=['post'], url_name='after-docs-finalize',
            url_path='after-docs/finalize')
    def after_docs_finalize(self, request):
        data = self._validated()
        document = documents.finalize_upload(data['upload_id'])
        return Response(ApplicationDocumentSerializer(document).data)


class AfterDocUploadViewSet(GenericViewSet):
    """Write location handed out by `after-docs/start`."""
    serializer_class = DummySerializer
    permission_classes = []  # it is public api, the signed token is the credential
    parser_classes = [RawBytesParser]

    def upload(self, request, token=None):
        content = request.data if isinstance(request.data, bytes) else b''
        upload = documents.write_upload_content(token, content)
        return Response({'upload_id': upload.upload_id, 'size': len(content)})


class ApplicationViewSet(ListRetrieveViewSetMixin):
    """
    Staff view of applications. RH sees every application, a manager only
    those of vacancies assigned to them.

    Lifecycle actions delegate to the services, which lock the application
    and re-check role and stage guards.
    """
    permission_classes = [IsRHOrManager]
    filter_backends = [DjangoFilterBackend, SearchFilter, OrderingFilter]
    filterset_fields = ('status', 'vacancy', 'folio')
    search_fields = ('folio', 'candidate__full_name', 'candidate__email')
    ordering_fields = ('created_at', 'modified_at', 'folio', 'status')

    def get_queryset(self):
        qs = Application.objects.select_related(
            'candidate', 'vacancy', 'rh_interview', 'manager_interview'
        )
        user = self.request.user
        if not user.is_rh:
            qs = qs.filter(Q(vacancy__manager=user))
        return qs

    def get_serializer_class(self):
        return {
            'retrieve': ApplicationDetailSerializer,
            'schedule_rh': ScheduleSerializer,
            'schedule_manager': ScheduleSerializer,
            'rh_interview_draft': RHDraftSerializer,
            'manager_result': ManagerResultSerializer,
            'evaluation_scores': EvaluationScoresSerializer,
            'evaluation_summary': EvaluationSummarySerializer,
            'evaluation_finalize': EvaluationFinalizeSerializer,
        }.get(self.action, ApplicationSerializer)

    def _validated(self):
        serializer = self.get_serializer(data=self.request.data)
        serializer.is_valid(raise_exception=True)
        return serializer.validated_data

    def _application_response(self, application_id):
        application = self.get_queryset().get(pk=application_id)
        return Response(ApplicationSerializer(application).data)

    @action(detail=True, methods=['post'], url_name='schedule-rh', url_path='schedule-rh')
    def schedule_rh(self, request, pk=None):
        application = self.get_object()
        data = self._validated()
        stages.schedule_rh_interview(application.id, data['at'], data['location'], request.user)
        return self._application_response(application.id)

    @action(detail=True, methods=['get'], url_name='rh-interview', url_path='rh-interview')
    def rh_interview(self, request, pk=None):
        application = self.get_object()
        interview = application.rh_interview_or_none
        return Response(RHInterviewSerializer(interview).data if interview else None)

    @action(detail=True, methods=['post'], url_name='rh-interview-start',
            url_path='rh-interview/start')
    def rh_interview_start(self, request, pk=None):
        application = self.get_object()
        interview, existing = rh_interview.start_rh_interview(application.id, request.user)
        data = RHInterviewSerializer(interview).data
        data['existing'] = existing
        return Response(
            data, status=status.HTTP_200_OK if existing else status.HTTP_201_CREATED
        )

    @action(detail=True, methods=['post'], url_name='rh-interview-draft',
            url_path='rh-interview/draft')
    def rh_interview_draft(self, request, pk=None):
        application = self.get_object()
        data = self._validated()
        interview = rh_interview.save_rh_draft(
            application.id, data['answers'], data['extra_questions'], request.user
        )
        return Response(RHInterviewSerializer(interview).data)

    @action(detail=True, methods=['post'], url_name='rh-interview-finalize',
            url_path='rh-interview/finalize')
    def rh_interview_finalize(self, request, pk=None):
        application = self.get_object()
        interview = rh_interview.finalize_rh_interview(application.id, request.user)
        return Response(RHInterviewSerializer(interview).data)

    @action(detail=True, methods=['post'], url_name='schedule-manager',
            url_path='schedule-manager')
    def schedule_manager(self, request, pk=None):
        application = self.get_object()
        data = self._validated()
        stages.schedule_manager_interview(
            application.id, data['at'], data['location'], request.user
        )
        return self._application_response(application.id)

    @action(detail=True, methods=['get'], url_name='manager-context', url_path='manager-context')
    def manager_context(self, request, pk=None):
        application = self.get_object()
        context = manager_interview.get_manager_context(application.id, request.user)
        context['application'] = ApplicationSerializer(context['application']).data
        return Response(context)

    @action(detail=True, methods=['post'], url_name='manager-result', url_path='manager-result')
    def manager_result(self, request, pk=None):
        application = self.get_object()
        data = self._validated()
        interview = manager_interview.save_manager_result(
            application.id, data['score'], data['notes'], request.user
        )
        return Response({
            'score': interview.score,
            'notes': interview.notes,
            'updated_at': interview.updated_at,
        })

    @action(detail=True, methods=['get'], url_name='evaluation', url_path='evaluation')
    def evaluation(self, request, pk=None):
        application = self.get_object()
        return Response(evaluation.get_evaluation_context(application.id, request.user))

    @action(detail=True, methods=['post'], url_name='evaluation-start',
            url_path='evaluation/start')
    def evaluation_start(self, request, pk=None):
        application = self.get_object()
        stages.start_evaluation(application.id, request.user)
        return self._application_response(application.id)

    @action(detail=True, methods=['post'], url_name='evaluation-scores',
            url_path='evaluation/scores')
    def evaluation_scores(self, request, pk=None):
        application = self.get_object()
        data = self._validated()
        total = evaluation.save_scores(application.id, data['scores'], request.user)
        return Response({'total': total})

    @action(detail=True, methods=['post'], url_name='evaluation-summary',
            url_path='evaluation/summary')
    def evaluation_summary(self, request, pk=None):
        application = self.get_object()
        data = self._validated()
        evaluation.save_summary(
            application.id,
            factors_for=data['factors_for'],
            factors_against=data['factors_against'],
            conclusion=data['conclusion'],
            references_laborales=data['references_laborales'],
            actor=request.user
        )
        return Response(evaluation.get_evaluation_context(application.id, request.user))

    @action(detail=True, methods=['post'], url_name='evaluation-finalize',
            url_path='evaluation/finalize')
    def evaluation_finalize(self, request, pk=None):
        application = self.get_object()
        data = self._validated()
        evaluation.finalize_evaluation(application.id, data['decision'], request.user)
        return self._application_response(application.id)

    @action(detail=True, methods=['get'], url_name='audit', url_path='audit')
    def audit(self, request, pk=None):
        application = self.get_object()
        return Response(
            AuditLogSerializer(application.audit_logs.select_related('actor'), many=True).data
        )
