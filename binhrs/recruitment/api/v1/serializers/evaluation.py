from rest_framework import serializers

from binhrs.core.mixins.serializers import DummySerializer
from binhrs.recruitment.constants import ACEPTADO, RECHAZADO


class CriterionScoreSerializer(DummySerializer):
    criterion = serializers.IntegerField()
    score = serializers.IntegerField()


class EvaluationScoresSerializer(DummySerializer):
    scores = CriterionScoreSerializer(many=True, allow_empty=True)


class EvaluationSummarySerializer(DummySerializer):
    factors_for = serializers.CharField(allow_blank=True)
    factors_against = serializers.CharField(allow_blank=True)
    conclusion = serializers.CharField(allow_blank=True)
    references_laborales = serializers.CharField(allow_blank=True, required=False, default='')


class EvaluationFinalizeSerializer(DummySerializer):
    decision = serializers.ChoiceField(choices=[
        (ACEPTADO, ACEPTADO),
        (RECHAZADO, RECHAZADO)
    ])
