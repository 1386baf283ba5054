from binhrs.core.utils.common import hash_email
from binhrs.recruitment.constants import NECESARIO, DESPUES, ACEPTADO, STATUS_QUERY
from binhrs.recruitment.utils.audit import write_audit
from binhrs.recruitment.utils.common import get_public_application
from binhrs.recruitment.utils.documents import get_fulfillment
from binhrs.recruitment.utils.stages import get_timeline


def _schedule(at, location):
    if not at:
        return None
    return {'at': at, 'location': location}


def get_status(folio, email):
    """
    Candidate facing status of an application looked up by folio and email.
    The query is audited with a hash of the email, never the address itself.
    """
    application = get_public_application(folio, email)
    write_audit(
        application, STATUS_QUERY,
        from_status=application.status, to_status=application.status,
        note=f"email_sha256={hash_email(email)}"
    )
    vacancy = application.vacancy
    despues = get_fulfillment(application, DESPUES)
    despues['can_upload'] = application.status == ACEPTADO
    return {
        'folio': application.folio,
        'vacancy': {
            'id': vacancy.id,
            'position': vacancy.position,
            'type': vacancy.vacancy_type,
        },
        'status': application.status,
        'timeline': get_timeline(application.status),
        'schedules': {
            'rh': _schedule(application.rh_interview_at, application.rh_interview_location),
            'manager': _schedule(
                application.manager_interview_at, application.manager_interview_location
            ),
        },
        'docs': {
            'necesarios': get_fulfillment(application, NECESARIO),
            'despues': despues,
        },
    }
