import logging

from django.db import transaction
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import ValidationError

from binhrs.recruitment.constants import (
    ENTREVISTA_CON_RH,
    INTERVIEW_RH_START,
    INTERVIEW_RH_SAVE_DRAFT,
    INTERVIEW_RH_FINALIZE,
)
from binhrs.recruitment.exceptions import (
    InvalidTransition,
    PreconditionNotMet,
    MissingRequiredAnswers
)
from binhrs.recruitment.models import (
    RHInterview,
    RHInterviewAnswer,
    RHInterviewExtraQuestion
)
from binhrs.recruitment.utils.audit import write_audit
from binhrs.recruitment.utils.common import (
    lock_application,
    ensure_not_finalized,
    ensure_rh
)
from binhrs.recruitment.utils.question_bank import (
    get_active_bank_version,
    get_vacancy_bank_kind
)

logger = logging.getLogger(__name__)


def _get_open_interview(application):
    interview = application.rh_interview_or_none
    if not interview:
        raise PreconditionNotMet(
            _('RH interview has not been started.'),
            missing=['rh_interview']
        )
    if interview.is_finished:
        raise InvalidTransition(_('RH interview is finalized and read only.'))
    return interview


def start_rh_interview(application_id, actor):
    """
    Start the RH interview on the currently active question bank version of
    the vacancy's kind. That version stays attached to the interview even if
    another one is activated later.

    :return: (interview, existing) where existing tells whether the
        interview had already been started
    """
    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh(actor)
        ensure_not_finalized(application)

        if application.status != ENTREVISTA_CON_RH:
            raise InvalidTransition(
                _('RH interview can only start in {}.').format(ENTREVISTA_CON_RH),
                status=application.status
            )
        interview = application.rh_interview_or_none
        if interview:
            return interview, True

        bank_version = get_active_bank_version(
            get_vacancy_bank_kind(application.vacancy)
        )
        interview = RHInterview.objects.create(
            application=application,
            bank_version=bank_version,
            interviewer=actor,
            started_at=timezone.now()
        )
        write_audit(
            application, INTERVIEW_RH_START, actor=actor,
            from_status=application.status, to_status=application.status,
            note=f"{bank_version}"
        )
    return interview, False


def save_rh_draft(application_id, answers, extra_questions, actor):
    """
    Upsert answers to snapshot questions. `extra_questions`, when given,
    replaces the free form questions as a whole.
    """
    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh(actor)
        ensure_not_finalized(application)
        interview = _get_open_interview(application)

        question_ids = set(
            interview.bank_version.questions.values_list('id', flat=True)
        )
        unknown = [
            item['question_id'] for item in answers or []
            if item['question_id'] not in question_ids
        ]
        if unknown:
            raise ValidationError({
                'answers': _('Questions {} are not part of this interview.').format(unknown)
            })

        for item in answers or []:
            RHInterviewAnswer.objects.update_or_create(
                interview=interview,
                question_id=item['question_id'],
                defaults={'answer': item.get('answer') or ''}
            )
        if extra_questions is not None:
            interview.extra_questions.all().delete()
            RHInterviewExtraQuestion.objects.bulk_create([
                RHInterviewExtraQuestion(
                    interview=interview,
                    ord=index,
                    question=item['question'],
                    answer=item.get('answer') or ''
                ) for index, item in enumerate(extra_questions, 1)
            ])
        interview.save(update_fields=['modified_at'])
        write_audit(
            application, INTERVIEW_RH_SAVE_DRAFT, actor=actor,
            from_status=application.status, to_status=application.status
        )
    return interview


def get_unanswered_required_questions(interview):
    answered = {
        answer.question_id for answer in interview.answers.all()
        if (answer.answer or '').strip()
    }
    return [
        question for question in interview.bank_version.questions.filter(is_required=True)
        if question.id not in answered
    ]


def finalize_rh_interview(application_id, actor):
    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh(actor)
        ensure_not_finalized(application)
        interview = _get_open_interview(application)

        unanswered = get_unanswered_required_questions(interview)
        if unanswered:
            raise MissingRequiredAnswers(questions=[
                {'id': question.id, 'ord': question.ord, 'text': question.text}
                for question in unanswered
            ])
        interview.finished_at = timezone.now()
        interview.save(update_fields=['finished_at', 'modified_at'])
        write_audit(
            application, INTERVIEW_RH_FINALIZE, actor=actor,
            from_status=application.status, to_status=application.status
        )
    return interview


def get_interview_questions(interview):
    """Snapshot questions in order with the answer given so far."""
    answers = {answer.question_id: answer.answer for answer in interview.answers.all()}
    return [
        {
            'id': question.id,
            'ord': question.ord,
            'text': question.text,
            'is_required': question.is_required,
            'answer': answers.get(question.id, ''),
        } for question in interview.bank_version.questions.all()
    ]
