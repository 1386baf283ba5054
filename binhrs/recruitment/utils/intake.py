import logging

from django.db import transaction
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import NotFound, ValidationError

from binhrs.core.utils.common import DummyObject, normalize_email
from binhrs.core.validators import validate_email_address
from binhrs.recruitment.constants import REVISION_DE_DOCUMENTOS, APPLICATION_CREATE
from binhrs.recruitment.exceptions import Inactive
from binhrs.recruitment.models import Application, Candidate, Vacancy
from binhrs.recruitment.utils.audit import write_audit
from binhrs.recruitment.utils.common import retry_once_on_conflict
from binhrs.recruitment.utils.documents import record_necessary_documents, validate_doc_type
from binhrs.recruitment.utils.folio import next_folio

logger = logging.getLogger(__name__)


def upsert_candidate(full_name, email, phone=''):
    email = normalize_email(email)
    candidate = Candidate.objects.select_for_update().filter(email=email).first()
    if candidate:
        candidate.full_name = full_name
        candidate.phone = phone or ''
        candidate.save(update_fields=['full_name', 'phone', 'modified_at'])
        return candidate
    return Candidate.objects.create(email=email, full_name=full_name, phone=phone or '')


@retry_once_on_conflict
def apply(vacancy_id, candidate, files=None):
    """
    Open an application of `candidate` for a vacancy.

    Submitting twice for the same vacancy and email does not create a second
    application: the existing folio and status are returned with
    `existing=True`. A race between two such submissions is resolved by the
    (vacancy, candidate) unique constraint, the loser retries and reads the
    winner's row.

    :param vacancy_id: id of an active vacancy
    :param candidate: dict with full_name, email and phone
    :param files: list of dicts with doc_type and content (a django File)
    :return: object with folio, status and existing
    """
    files = files or []
    if not (candidate.get('full_name') or '').strip():
        raise ValidationError({'full_name': _('This field is required.')})
    validate_email_address(candidate.get('email'))
    for item in files:
        validate_doc_type(item.get('doc_type'))

    with transaction.atomic():
        vacancy = Vacancy.objects.filter(pk=vacancy_id).first()
        if not vacancy:
            raise NotFound(_('Vacancy not found.'))
        if not vacancy.is_active:
            raise Inactive()

        candidate = upsert_candidate(
            candidate['full_name'].strip(), candidate['email'], candidate.get('phone')
        )
        application = Application.objects.filter(
            vacancy=vacancy, candidate=candidate
        ).first()
        if application:
            logger.info(
                f"Duplicate application of {candidate.email} for vacancy "
                f"{vacancy.id}, returning {application.folio}."
            )
            return DummyObject(
                folio=application.folio, status=application.status, existing=True
            )

        application = Application.objects.create(
            folio=next_folio(),
            vacancy=vacancy,
            candidate=candidate,
            status=REVISION_DE_DOCUMENTOS
        )
        documents = record_necessary_documents(application, files)
        write_audit(
            application, APPLICATION_CREATE,
            to_status=application.status,
            note=f"{len(documents)} document(s) received"
        )
    return DummyObject(folio=application.folio, status=application.status, existing=False)
