from datetime import timedelta

from django.utils import timezone

from binhrs.recruitment.constants import (
    ADMINISTRATIVO,
    CRITERION_IDS
)
from binhrs.recruitment.api.v1.tests.factory import QuestionBankVersionFactory, QuestionFactory
from binhrs.recruitment.utils import evaluation, manager_interview, rh_interview, stages


def create_active_bank(kind=ADMINISTRATIVO, required=2, optional=1):
    bank_version = QuestionBankVersionFactory(bank__kind=kind, is_active=True)
    for index in range(required + optional):
        QuestionFactory(
            bank_version=bank_version,
            ord=index + 1,
            is_required=index < required
        )
    return bank_version


def in_days(days=1):
    return timezone.now() + timedelta(days=days)


def score_set(score=3):
    return [{'criterion': criterion, 'score': score} for criterion in CRITERION_IDS]


def answer_all(interview):
    return [
        {'question_id': question.id, 'answer': f'answer {question.ord}'}
        for question in interview.bank_version.questions.all()
    ]


def advance_to_rh_interview(application, rh_user):
    stages.schedule_rh_interview(application.id, in_days(1), 'Oficina central', rh_user)
    application.refresh_from_db()
    return application


def advance_to_rh_finished(application, rh_user):
    advance_to_rh_interview(application, rh_user)
    interview, _existing = rh_interview.start_rh_interview(application.id, rh_user)
    rh_interview.save_rh_draft(application.id, answer_all(interview), None, rh_user)
    rh_interview.finalize_rh_interview(application.id, rh_user)
    application.refresh_from_db()
    return application


def advance_to_manager_interview(application, rh_user, score=80):
    advance_to_rh_finished(application, rh_user)
    stages.schedule_manager_interview(application.id, in_days(2), 'Patio 2', rh_user)
    manager_interview.save_manager_result(application.id, score, 'Buen perfil', rh_user)
    application.refresh_from_db()
    return application


def advance_to_evaluation(application, rh_user):
    advance_to_manager_interview(application, rh_user)
    stages.start_evaluation(application.id, rh_user)
    application.refresh_from_db()
    return application


def complete_evaluation(application, rh_user, score=3):
    evaluation.save_scores(application.id, score_set(score), rh_user)
    evaluation.save_summary(
        application.id,
        factors_for='Experiencia relevante',
        factors_against='Disponibilidad limitada',
        conclusion='Apto para el puesto',
        actor=rh_user
    )
    return application


def advance_to_final(application, rh_user, decision):
    advance_to_evaluation(application, rh_user)
    complete_evaluation(application, rh_user)
    evaluation.finalize_evaluation(application.id, decision, rh_user)
    application.refresh_from_db()
    return application
