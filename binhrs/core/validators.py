import re

from django.conf import settings
from django.core.exceptions import ValidationError as CoreValidationError
from django.core.validators import validate_email as core_validate_email
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import ValidationError

FOLIO_REGEX = r"^BIN-[0-9]{4}-[0-9]{5}$"


def validate_folio(folio):
    """Raises Validation Error unless folio looks like BIN-YYYY-NNNNN"""
    if not isinstance(folio, str) or not re.fullmatch(FOLIO_REGEX, folio.strip()):
        raise ValidationError({'folio': _("Invalid folio format. Expected BIN-YYYY-NNNNN.")})
    return folio.strip()


def validate_email_address(email):
    try:
        core_validate_email((email or '').strip())
    except CoreValidationError:
        raise ValidationError({'email': _("Enter a valid email address.")})
    return email


def validate_file_size(file):
    """
    Raises Validation Error if the file size is greater than MAX_FILE_SIZE
    :param file:
    :return:
    """
    if file.size > settings.MAX_FILE_SIZE * 1024 * 1024:
        raise ValidationError("File must be less than " +
                              str(settings.MAX_FILE_SIZE) + " MB.")
    return file
