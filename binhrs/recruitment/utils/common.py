import functools
import logging

from django.db import IntegrityError
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import NotFound, PermissionDenied

from binhrs.core.utils.common import normalize_email
from binhrs.core.validators import validate_folio, validate_email_address
from binhrs.recruitment.exceptions import Conflict, AlreadyFinalized
from binhrs.recruitment.models import Application

logger = logging.getLogger(__name__)

APPLICATION_NOT_FOUND = _('Application not found.')


def retry_once_on_conflict(func):
    """
    Run `func` again when it loses a uniqueness race. `func` must open its
    own transaction so that the retry re-reads committed state. A second
    loss surfaces as `Conflict`.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except IntegrityError:
            logger.warning(f"{func.__name__} lost a uniqueness race, retrying once.")
        try:
            return func(*args, **kwargs)
        except IntegrityError as e:
            logger.error(e, exc_info=True)
            raise Conflict()
    return wrapper


def lock_application(application_id):
    """
    Fetch the application row with a write lock. Must be called inside
    `transaction.atomic()`, every mutation of an application goes through
    here.
    """
    application = Application.objects.select_for_update().filter(
        pk=application_id
    ).first()
    if not application:
        raise NotFound(APPLICATION_NOT_FOUND)
    return application


def get_public_application(folio, email, lock=False):
    """
    Application matching both folio and candidate email. A mismatch is
    reported exactly like a missing folio.
    """
    folio = validate_folio(folio)
    validate_email_address(email)
    qs = Application.objects.select_related('vacancy', 'candidate')
    if lock:
        qs = Application.objects.select_for_update(of=('self',))
    application = qs.filter(
        folio=folio,
        candidate__email=normalize_email(email)
    ).first()
    if not application:
        raise NotFound(APPLICATION_NOT_FOUND)
    return application


def ensure_not_finalized(application):
    if application.is_terminal:
        raise AlreadyFinalized(status=application.status)


def ensure_rh(actor):
    if not (actor and getattr(actor, 'is_rh', False)):
        raise PermissionDenied(_('RH role required.'))


def ensure_rh_or_assigned_manager(actor, application):
    if actor and getattr(actor, 'is_rh', False):
        return
    if (
        actor and getattr(actor, 'is_manager', False)
        and application.vacancy.manager_id == actor.id
    ):
        return
    raise PermissionDenied(_('RH or the assigned manager role required.'))
