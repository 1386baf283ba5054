from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import NotFound, ValidationError

from binhrs.recruitment.constants import (
    MIN_MANAGER_SCORE,
    MAX_MANAGER_SCORE,
    MANAGER_SCORE_SAVE
)
from binhrs.recruitment.exceptions import OutOfRange
from binhrs.recruitment.models import Application, ManagerInterview
from binhrs.recruitment.utils.audit import write_audit
from binhrs.recruitment.utils.common import (
    lock_application,
    ensure_not_finalized,
    ensure_rh_or_assigned_manager
)
from binhrs.recruitment.utils.rh_interview import get_interview_questions


def validate_manager_score(score):
    if isinstance(score, bool) or not isinstance(score, int):
        raise ValidationError({'score': _('Score must be an integer.')})
    if not MIN_MANAGER_SCORE <= score <= MAX_MANAGER_SCORE:
        raise OutOfRange(
            _('Score must be between {} and {}.').format(MIN_MANAGER_SCORE, MAX_MANAGER_SCORE),
            score=score
        )
    return score


def save_manager_result(application_id, score, notes, actor):
    validate_manager_score(score)
    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh_or_assigned_manager(actor, application)
        ensure_not_finalized(application)
        interview, _created = ManagerInterview.objects.update_or_create(
            application=application,
            defaults={'score': score, 'notes': notes or '', 'modified_by': actor}
        )
        write_audit(
            application, MANAGER_SCORE_SAVE, actor=actor,
            from_status=application.status, to_status=application.status,
            note=f"score={score}"
        )
    return interview


def get_manager_context(application_id, actor):
    """Everything a manager needs to interview: RH answers and own result."""
    application = Application.objects.select_related(
        'vacancy', 'candidate'
    ).filter(pk=application_id).first()
    if not application:
        raise NotFound(_('Application not found.'))
    ensure_rh_or_assigned_manager(actor, application)

    rh_interview = application.rh_interview_or_none
    manager_interview = application.manager_interview_or_none
    return {
        'application': application,
        'rh_interview': {
            'started_at': rh_interview.started_at,
            'finished_at': rh_interview.finished_at,
            'bank_version': rh_interview.bank_version.version,
            'questions': get_interview_questions(rh_interview),
            'extra_questions': [
                {'question': extra.question, 'answer': extra.answer}
                for extra in rh_interview.extra_questions.all()
            ],
        } if rh_interview else None,
        'manager_interview': {
            'score': manager_interview.score,
            'notes': manager_interview.notes,
            'updated_at': manager_interview.updated_at,
        } if manager_interview else None,
    }
