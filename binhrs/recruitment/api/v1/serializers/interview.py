from rest_framework import serializers

from binhrs.core.mixins.serializers import DummySerializer, DynamicFieldsModelSerializer
from binhrs.recruitment.models import RHInterview, RHInterviewExtraQuestion
from binhrs.recruitment.utils.rh_interview import get_interview_questions


class RHAnswerSerializer(DummySerializer):
    question_id = serializers.IntegerField()
    answer = serializers.CharField(allow_blank=True, required=False, default='')


class RHExtraQuestionSerializer(DynamicFieldsModelSerializer):
    class Meta:
        model = RHInterviewExtraQuestion
        fields = ('ord', 'question', 'answer')
        read_only_fields = ('ord',)
        extra_kwargs = {'answer': {'allow_blank': True, 'required': False}}


class RHDraftSerializer(DummySerializer):
    answers = RHAnswerSerializer(many=True, required=False, default=list)
    extra_questions = RHExtraQuestionSerializer(many=True, required=False, allow_null=True, default=None)


class RHInterviewSerializer(DynamicFieldsModelSerializer):
    bank_version = serializers.IntegerField(source='bank_version.version', read_only=True)
    bank_kind = serializers.CharField(source='bank_version.bank.kind', read_only=True)
    questions = serializers.SerializerMethodField()
    extra_questions = RHExtraQuestionSerializer(many=True, read_only=True)
    interviewer = serializers.SlugRelatedField(slug_field='email', read_only=True)

    class Meta:
        model = RHInterview
        fields = (
            'id', 'bank_kind', 'bank_version', 'interviewer', 'started_at',
            'finished_at', 'questions', 'extra_questions'
        )

    @staticmethod
    def get_questions(obj):
        return get_interview_questions(obj)


class ManagerResultSerializer(DummySerializer):
    # range is checked by the service, it reports OutOfRange
    score = serializers.IntegerField()
    notes = serializers.CharField(allow_blank=True, required=False, default='')
