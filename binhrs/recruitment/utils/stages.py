"""
Application state machine.

RevisionDeDocumentos -> EntrevistaConRH -> EntrevistaConManager -> Evaluando
-> Aceptado | Rechazado

Every function here that changes an application takes the row lock first
(`lock_application`) and performs its guard checks and its status write
inside the same transaction, so two concurrent calls are serialized and the
loser observes the state left by the winner.
"""
import logging

from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import ValidationError

from binhrs.recruitment.constants import (
    REVISION_DE_DOCUMENTOS,
    ENTREVISTA_CON_RH,
    ENTREVISTA_CON_MANAGER,
    EVALUANDO,
    ACEPTADO,
    RECHAZADO,
    PIPELINE_STATUSES,
    FINAL_STEP,
    INTERVIEW_RH_SCHEDULED,
    MANAGER_SCHEDULE_SET,
    MANAGER_SCHEDULE_UPDATE,
    EVALUATION_START,
    EVALUATION_FINALIZE_ACCEPT,
    EVALUATION_FINALIZE_REJECT,
)
from binhrs.recruitment.exceptions import InvalidTransition, PreconditionNotMet
from binhrs.recruitment.utils.audit import write_audit
from binhrs.recruitment.utils.common import (
    lock_application,
    ensure_not_finalized,
    ensure_rh,
    ensure_rh_or_assigned_manager
)

logger = logging.getLogger(__name__)

display_name_mapper = {
    REVISION_DE_DOCUMENTOS: "Revisión de documentos",
    ENTREVISTA_CON_RH: "Entrevista con RH",
    ENTREVISTA_CON_MANAGER: "Entrevista con Manager",
    EVALUANDO: "Evaluando",
    FINAL_STEP: "Resultado final",
}

# statuses from which each transition may be taken
allowed_from_mapper = {
    INTERVIEW_RH_SCHEDULED: (REVISION_DE_DOCUMENTOS, ENTREVISTA_CON_RH),
    MANAGER_SCHEDULE_SET: (ENTREVISTA_CON_RH, ENTREVISTA_CON_MANAGER),
    EVALUATION_START: (ENTREVISTA_CON_MANAGER,),
    EVALUATION_FINALIZE_ACCEPT: (EVALUANDO,),
    EVALUATION_FINALIZE_REJECT: (EVALUANDO,),
}

finalize_action_mapper = {
    ACEPTADO: EVALUATION_FINALIZE_ACCEPT,
    RECHAZADO: EVALUATION_FINALIZE_REJECT,
}


def ensure_status(application, action):
    allowed = allowed_from_mapper[action]
    if application.status not in allowed:
        raise InvalidTransition(
            _('Invalid transition. Current status: {}').format(application.status),
            status=application.status,
            allowed=list(allowed)
        )


def change_status(application, new_status, action, actor=None, note=''):
    """Persist a status change of a locked application and audit it."""
    old_status = application.status
    application.status = new_status
    application.save(update_fields=['status', 'modified_at'])
    write_audit(
        application, action, actor=actor,
        from_status=old_status, to_status=new_status, note=note
    )
    return application


def schedule_rh_interview(application_id, at, location, actor):
    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh(actor)
        ensure_not_finalized(application)
        ensure_status(application, INTERVIEW_RH_SCHEDULED)

        old_status = application.status
        application.rh_interview_at = at
        application.rh_interview_location = location or ''
        if application.status == REVISION_DE_DOCUMENTOS:
            application.status = ENTREVISTA_CON_RH
        application.save()
        write_audit(
            application, INTERVIEW_RH_SCHEDULED, actor=actor,
            from_status=old_status, to_status=application.status,
            note=f"{at.isoformat()} @ {location or ''}"
        )
    return application


def schedule_manager_interview(application_id, at, location, actor):
    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh_or_assigned_manager(actor, application)
        ensure_not_finalized(application)
        if not application.rh_interview_finished:
            raise PreconditionNotMet(
                _('RH interview must be completed first.'),
                missing=['rh_interview_finished']
            )
        ensure_status(application, MANAGER_SCHEDULE_SET)

        old_status = application.status
        action = MANAGER_SCHEDULE_SET if application.manager_interview_at is None \
            else MANAGER_SCHEDULE_UPDATE
        application.manager_interview_at = at
        application.manager_interview_location = location or ''
        application.status = ENTREVISTA_CON_MANAGER
        application.save()
        write_audit(
            application, action, actor=actor,
            from_status=old_status, to_status=application.status,
            note=f"{at.isoformat()} @ {location or ''}"
        )
    return application


def start_evaluation(application_id, actor):
    with transaction.atomic():
        application = lock_application(application_id)
        ensure_rh(actor)
        ensure_not_finalized(application)

        missing = []
        if not application.rh_interview_finished:
            missing.append('rh_interview_finished')
        if not application.manager_interview_or_none:
            missing.append('manager_interview')
        if missing:
            raise PreconditionNotMet(
                _('Both interviews must be completed before evaluating.'),
                missing=missing
            )
        ensure_status(application, EVALUATION_START)
        change_status(application, EVALUANDO, EVALUATION_START, actor=actor)
    return application


def finalize_application(application, decision, actor, note=''):
    """
    Move a locked application in `Evaluando` to its terminal status. The
    caller validates evaluation completeness before calling this.
    """
    if decision not in finalize_action_mapper:
        raise ValidationError({'decision': _('Decision must be Aceptado or Rechazado.')})
    ensure_not_finalized(application)
    action = finalize_action_mapper[decision]
    ensure_status(application, action)
    change_status(application, decision, action, actor=actor, note=note)
    logger.info(f"Application {application.folio} finalized as {decision}.")
    return application


def get_timeline(status):
    """
    The four pipeline steps followed by the final step. Each step reports
    whether it has been reached and whether it is the current one, the
    final step also carries the decision once there is one.
    """
    is_final = status not in PIPELINE_STATUSES
    current_index = len(PIPELINE_STATUSES) if is_final else PIPELINE_STATUSES.index(status)
    timeline = []
    for index, step in enumerate(PIPELINE_STATUSES + (FINAL_STEP,)):
        item = {
            'step': step,
            'label': display_name_mapper[step],
            'reached': index <= current_index,
            'current': index == current_index,
        }
        if step == FINAL_STEP:
            item['value'] = status if is_final else None
        timeline.append(item)
    return timeline
