"""
Final evaluation: sixteen fixed criteria scored 1 to 5 plus a written
summary. Finalizing is the only way to reach Aceptado or Rechazado.
"""
from collections import Counter

from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import NotFound, ValidationError

from binhrs.recruitment.constants import (
    EVALUANDO,
    EVALUATION_CRITERIA,
    CRITERION_IDS,
    CRITERION_GROUP_CHOICES,
    MIN_CRITERION_SCORE,
    MAX_CRITERION_SCORE,
    EVALUATION_SAVE_SCORES,
    EVALUATION_SAVE_SUMMARY,
)
from binhrs.recruitment.exceptions import (
    InvalidTransition,
    IncompleteScoreSet,
    OutOfRange,
    PreconditionNotMet
)
from binhrs.recruitment.models import Application, EvaluationScore, EvaluationSummary
from binhrs.recruitment.utils.audit import write_audit
from binhrs.recruitment.utils.common import (
    lock_application,
    ensure_not_finalized,
    ensure_rh
)
from binhrs.recruitment.utils.stages import finalize_application, finalize_action_mapper

MANDATORY_SUMMARY_FIELDS = ('factors_for', 'factors_against', 'conclusion')


def _ensure_evaluating(application):
    ensure_not_finalized(application)
    if application.status != EVALUANDO:
        raise InvalidTransition(
            _('Evaluation has not been started.'),
            status=application.status
        )


def validate_score_set(scores):
    """
    `scores` is a list of {'criterion': id, 'score': n}. Exactly one entry
    per criterion is required, each score in 1..5.
    """
    criteria = [item.get('criterion') for item in scores]
    counts = Counter(criteria)
    missing = [criterion for criterion in CRITERION_IDS if criterion not in counts]
    unexpected = [criterion for criterion in counts if criterion not in CRITERION_IDS]
    duplicated = [criterion for criterion, count in counts.items() if count > 1]
    if missing or unexpected or duplicated or len(scores) != len(CRITERION_IDS):
        raise IncompleteScoreSet(
            missing=missing, unexpected=unexpected, duplicated=duplicated
        )

    out_of_range = [
        item['criterion'] for item in scores
        if isinstance(item.get('score'), bool)
        or not isinstance(item.get('score'), int)
        or not MIN_CRITERION_SCORE <= item['score'] <= MAX_CRITERION_SCORE
    ]
    if out_of_range:
        raise OutOfRange(
            _('Scores must be between {} and {}.').format(MIN_CRITERION_SCORE, MAX_CRITERION_SCORE),
            criteria=out_of_range
        )
    return {item['criterion']: item['score'] for item in scores}


def save_scores(application_id, scores, actor):
    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh(actor)
        _ensure_evaluating(application)
        score_map = validate_score_set(scores)

        for criterion, score in score_map.items():
            EvaluationScore.objects.update_or_create(
                application=application,
                criterion=criterion,
                defaults={'score': score}
            )
        total = sum(score_map.values())
        summary, _created = EvaluationSummary.objects.get_or_create(
            application=application
        )
        summary.total = total
        summary.modified_by = actor
        summary.save(update_fields=['total', 'modified_by', 'modified_at'])
        write_audit(
            application, EVALUATION_SAVE_SCORES, actor=actor,
            from_status=application.status, to_status=application.status,
            note=f"total={total}"
        )
    return total


def save_summary(application_id, factors_for, factors_against, conclusion,
                 actor, references_laborales=''):
    values = {
        'factors_for': factors_for,
        'factors_against': factors_against,
        'conclusion': conclusion,
    }
    errors = {
        field: _('This field is required.')
        for field, value in values.items()
        if not isinstance(value, str) or not value.strip()
    }
    if errors:
        raise ValidationError(errors)

    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh(actor)
        _ensure_evaluating(application)
        summary, _created = EvaluationSummary.objects.update_or_create(
            application=application,
            defaults={
                **{field: value.strip() for field, value in values.items()},
                'references_laborales': (references_laborales or '').strip(),
                'modified_by': actor,
            }
        )
        write_audit(
            application, EVALUATION_SAVE_SUMMARY, actor=actor,
            from_status=application.status, to_status=application.status
        )
    return summary


def finalize_evaluation(application_id, decision, actor):
    """
    Re-check completeness, persist the total and move the application to
    `decision`. A second call fails with AlreadyFinalized.
    """
    if decision not in finalize_action_mapper:
        raise ValidationError({'decision': _('Decision must be Aceptado or Rechazado.')})
    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh(actor)
        _ensure_evaluating(application)

        scores = dict(
            application.evaluation_scores.values_list('criterion', 'score')
        )
        missing = [criterion for criterion in CRITERION_IDS if criterion not in scores]
        if missing:
            raise IncompleteScoreSet(missing=missing, unexpected=[], duplicated=[])

        summary = EvaluationSummary.objects.filter(application=application).first()
        missing_fields = summary.missing_fields if summary else list(MANDATORY_SUMMARY_FIELDS)
        if missing_fields:
            raise PreconditionNotMet(
                _('Complete evaluation summary required.'),
                missing=missing_fields
            )

        total = sum(scores.values())
        summary.total = total
        summary.modified_by = actor
        summary.save(update_fields=['total', 'modified_by', 'modified_at'])
        finalize_application(application, decision, actor, note=f"total={total}")
    return application


def get_evaluation_context(application_id, actor):
    ensure_rh(actor)
    application = Application.objects.filter(pk=application_id).first()
    if not application:
        raise NotFound(_('Application not found.'))
    scores = dict(application.evaluation_scores.values_list('criterion', 'score'))
    summary = EvaluationSummary.objects.filter(application=application).first()
    groups = []
    for group, label in CRITERION_GROUP_CHOICES:
        groups.append({
            'group': group,
            'label': label,
            'criteria': [
                {
                    'id': criterion_id,
                    'ord': ord_,
                    'label': criterion_label,
                    'score': scores.get(criterion_id),
                }
                for criterion_id, criterion_group, ord_, criterion_label in EVALUATION_CRITERIA
                if criterion_group == group
            ]
        })
    return {
        'status': application.status,
        'groups': groups,
        'summary': {
            'factors_for': summary.factors_for,
            'factors_against': summary.factors_against,
            'conclusion': summary.conclusion,
            'references_laborales': summary.references_laborales,
        } if summary else None,
        'total': summary.total if summary and summary.total is not None
        else (sum(scores.values()) if scores else None),
    }
