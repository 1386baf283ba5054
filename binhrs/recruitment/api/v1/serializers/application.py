from django.conf import settings
from django.core.validators import FileExtensionValidator
from rest_framework import serializers

from binhrs.core.mixins.serializers import DummySerializer, DynamicFieldsModelSerializer
from binhrs.core.validators import validate_file_size
from binhrs.recruitment.api.v1.mixins import Base64FileField
from binhrs.recruitment.constants import DOC_TYPE_CHOICES
from binhrs.recruitment.models import (
    Application,
    ApplicationDocument,
    AuditLog,
    Candidate,
    Vacancy
)
from binhrs.recruitment.utils.intake import apply


class ApplicationFileSerializer(DummySerializer):
    doc_type = serializers.ChoiceField(choices=DOC_TYPE_CHOICES)
    content = Base64FileField(
        validators=[
            FileExtensionValidator(
                allowed_extensions=settings.ACCEPTED_FILE_FORMATS_LIST
            ),
            validate_file_size
        ]
    )


class ApplicationCreateSerializer(DummySerializer):
    full_name = serializers.CharField(max_length=255, write_only=True)
    email = serializers.EmailField(max_length=255, write_only=True)
    phone = serializers.CharField(max_length=30, allow_blank=True, required=False, write_only=True)
    files = ApplicationFileSerializer(many=True, required=False, write_only=True)

    folio = serializers.CharField(read_only=True)
    status = serializers.CharField(read_only=True)
    existing = serializers.BooleanField(read_only=True)

    def create(self, validated_data):
        return apply(
            vacancy_id=self.context['vacancy_id'],
            candidate={
                'full_name': validated_data['full_name'],
                'email': validated_data['email'],
                'phone': validated_data.get('phone', ''),
            },
            files=validated_data.get('files', [])
        )


class CandidateSerializer(DynamicFieldsModelSerializer):
    class Meta:
        model = Candidate
        fields = ('id', 'full_name', 'email', 'phone')


class VacancyThinSerializer(DynamicFieldsModelSerializer):
    class Meta:
        model = Vacancy
        fields = ('id', 'position', 'vacancy_type', 'manager', 'is_active')


class ApplicationDocumentSerializer(DynamicFieldsModelSerializer):
    uploaded_at = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = ApplicationDocument
        fields = ('id', 'doc_type', 'phase', 'version', 'filename', 'attachment', 'uploaded_at')


class ApplicationSerializer(DynamicFieldsModelSerializer):
    candidate = CandidateSerializer(read_only=True)
    vacancy = VacancyThinSerializer(read_only=True)
    rh_interview_finished = serializers.BooleanField(read_only=True)
    has_manager_interview = serializers.SerializerMethodField()

    class Meta:
        model = Application
        fields = (
            'id', 'folio', 'status', 'candidate', 'vacancy',
            'rh_interview_at', 'rh_interview_location',
            'manager_interview_at', 'manager_interview_location',
            'rh_interview_finished', 'has_manager_interview',
            'created_at', 'modified_at'
        )

    @staticmethod
    def get_has_manager_interview(obj):
        return obj.manager_interview_or_none is not None


class ApplicationDetailSerializer(ApplicationSerializer):
    documents = ApplicationDocumentSerializer(many=True, read_only=True)

    class Meta(ApplicationSerializer.Meta):
        fields = ApplicationSerializer.Meta.fields + ('documents',)


class ScheduleSerializer(DummySerializer):
    at = serializers.DateTimeField()
    location = serializers.CharField(max_length=255, allow_blank=True, required=False, default='')


class PublicLookupSerializer(DummySerializer):
    # format checks happen in the service so that every lookup path
    # reports them the same way
    folio = serializers.CharField(max_length=20)
    email = serializers.CharField(max_length=255)


class AfterDocStartSerializer(PublicLookupSerializer):
    doc_type = serializers.ChoiceField(choices=DOC_TYPE_CHOICES)
    filename = serializers.CharField(max_length=255)
    mimetype = serializers.CharField(max_length=100, allow_blank=True, required=False, default='')
    size = serializers.IntegerField(min_value=0, required=False, default=0)


class AfterDocFinalizeSerializer(DummySerializer):
    upload_id = serializers.UUIDField()


class AuditLogSerializer(DynamicFieldsModelSerializer):
    actor = serializers.SlugRelatedField(slug_field='email', read_only=True)

    class Meta:
        model = AuditLog
        fields = ('id', 'action', 'actor', 'from_status', 'to_status', 'note', 'created_at')
