from django.utils.translation import gettext_lazy as _

from binhrs.core.utils.common import get_today
from binhrs.recruitment.constants import FOLIO_PREFIX, MAX_FOLIO_SEQUENCE
from binhrs.recruitment.exceptions import Conflict
from binhrs.recruitment.models import Application, FolioSequence


def format_folio(year, sequence):
    return f"{FOLIO_PREFIX}-{year}-{sequence:05d}"


def max_issued_sequence(year):
    last_folio = Application.objects.filter(
        folio__startswith=f"{FOLIO_PREFIX}-{year}-"
    ).order_by('-folio').values_list('folio', flat=True).first()
    return int(last_folio.rsplit('-', 1)[-1]) if last_folio else 0


def next_folio(year=None):
    """
    Reserve the next folio of `year`. Must run inside the transaction that
    inserts the application: the counter row stays locked until commit and
    a rollback releases the number.
    """
    year = year or get_today().year
    sequence, _created = FolioSequence.objects.select_for_update().get_or_create(
        year=year
    )
    value = max(sequence.last_value, max_issued_sequence(year)) + 1
    if value > MAX_FOLIO_SEQUENCE:
        raise Conflict(_('Folio sequence exhausted for {}.').format(year))
    sequence.last_value = value
    sequence.save(update_fields=['last_value'])
    return format_folio(year, value)
