from django.core.validators import FileExtensionValidator
from rest_framework import serializers

from binhrs.core.mixins.serializers import DummySerializer, DynamicFieldsModelSerializer
from binhrs.recruitment.constants import QUESTION_BANK_KIND_CHOICES
from binhrs.recruitment.models import QuestionBankVersion, Question
from binhrs.recruitment.utils.question_bank import import_question_bank, read_question_rows


class QuestionSerializer(DynamicFieldsModelSerializer):
    class Meta:
        model = Question
        fields = ('id', 'ord', 'text', 'is_required')


class QuestionBankVersionSerializer(DynamicFieldsModelSerializer):
    kind = serializers.CharField(source='bank.kind', read_only=True)
    questions = QuestionSerializer(many=True, read_only=True)

    class Meta:
        model = QuestionBankVersion
        fields = ('id', 'kind', 'version', 'is_active', 'created_at', 'questions')


class QuestionBankImportSerializer(DummySerializer):
    kind = serializers.ChoiceField(choices=QUESTION_BANK_KIND_CHOICES, write_only=True)
    file = serializers.FileField(
        validators=[FileExtensionValidator(allowed_extensions=['csv', 'xlsx'])],
        write_only=True
    )
    version = serializers.IntegerField(min_value=1, required=False, allow_null=True, write_only=True)
    activate = serializers.BooleanField(default=False, write_only=True)
    name = serializers.CharField(max_length=255, allow_blank=True, required=False, write_only=True)

    bank_id = serializers.IntegerField(read_only=True)
    bank_version_id = serializers.IntegerField(read_only=True)
    questions_imported = serializers.IntegerField(read_only=True)
    activated = serializers.BooleanField(read_only=True)

    def to_representation(self, instance):
        data = super().to_representation(instance)
        data['version'] = instance.version
        return data

    def create(self, validated_data):
        return import_question_bank(
            kind=validated_data['kind'],
            rows=read_question_rows(validated_data['file']),
            actor=self.context['request'].user,
            version=validated_data.get('version'),
            activate=validated_data['activate'],
            name=validated_data.get('name', '')
        )
