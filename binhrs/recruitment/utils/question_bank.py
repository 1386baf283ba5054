"""
Interview question banks.

A bank exists per kind of position; its questions live in immutable numbered
versions. Importing always creates a new version, activating one version
deactivates the others of the same bank.
"""
import csv
import io
import logging
from zipfile import BadZipFile

from django.db import transaction
from django.db.models import Max
from django.utils.translation import gettext_lazy as _
from openpyxl.utils.exceptions import InvalidFileException
from rest_framework.exceptions import NotFound, ValidationError

from binhrs.core.utils.common import DummyObject
from binhrs.core.utils.excel import ExcelList
from binhrs.recruitment.constants import (
    ADMINISTRATIVO,
    OPERATIVO,
    OPERADOR_UNIDADES,
    GUARDIA_SEGURIDAD,
    AUX_LIMPIEZA_UNIDADES,
    JEFE_PATIO,
    AUXILIAR_PATIO,
    TECNICOS,
    QUESTION_BANK_KIND_CHOICES,
)
from binhrs.recruitment.exceptions import Conflict
from binhrs.recruitment.models import QuestionBank, QuestionBankVersion, Question
from binhrs.recruitment.utils.common import ensure_rh

logger = logging.getLogger(__name__)

IMPORT_COLUMNS = ('ord', 'text', 'is_required')
TRUE_VALUES = ('true', '1', 'si', 'sí', 'yes', 'y', 'x')
FALSE_VALUES = ('false', '0', 'no', 'n', '')

# evaluated in order, first rule whose every group matches wins
kind_keyword_rules = (
    (OPERADOR_UNIDADES, (('operador',), ('unidad',))),
    (OPERADOR_UNIDADES, (('chofer', 'conductor'),)),
    (GUARDIA_SEGURIDAD, (('guardia', 'seguridad'),)),
    (AUX_LIMPIEZA_UNIDADES, (('limpieza',), ('unidad',))),
    (JEFE_PATIO, (('jefe',), ('patio',))),
    (AUXILIAR_PATIO, (('auxiliar', 'aux'), ('patio',))),
    (TECNICOS, (('mecanic', 'mecánic', 'hojalat', 'pintur', 'electric', 'eléctric', 'tecnic', 'técnic'),)),
)


def resolve_question_bank_kind(position, vacancy_type):
    position = (position or '').lower()
    for kind, keyword_groups in kind_keyword_rules:
        if all(
            any(keyword in position for keyword in group)
            for group in keyword_groups
        ):
            return kind
    return OPERATIVO if vacancy_type == OPERATIVO else ADMINISTRATIVO


def get_vacancy_bank_kind(vacancy):
    return vacancy.question_bank_kind or resolve_question_bank_kind(
        vacancy.position, vacancy.vacancy_type
    )


def get_active_bank_version(kind):
    version = QuestionBankVersion.objects.filter(
        bank__kind=kind, is_active=True
    ).select_related('bank').first()
    if not version:
        raise NotFound(_('No active question bank for {}.').format(kind))
    return version


def _parse_bool(value):
    if isinstance(value, bool):
        return value
    normalized = str(value if value is not None else '').strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(value)


def read_question_rows(file):
    """Rows of a CSV or XLSX upload as dicts keyed by the header."""
    name = (getattr(file, 'name', '') or '').lower()
    if name.endswith(('.xlsx', '.xlsm')):
        try:
            excel_list = ExcelList(file)
        except (BadZipFile, InvalidFileException, KeyError):
            raise ValidationError({'file': _('Could not read the spreadsheet.')})
        if not excel_list:
            return []
        headers = [str(header or '').strip().lower() for header in excel_list[0]]
        return [dict(zip(headers, row)) for row in excel_list[1:]]

    content = file.read()
    if isinstance(content, bytes):
        try:
            content = content.decode('utf-8-sig')
        except UnicodeDecodeError:
            raise ValidationError({'file': _('The CSV file must be UTF-8 encoded.')})
    reader = csv.DictReader(io.StringIO(content))
    return [
        {(key or '').strip().lower(): value for key, value in row.items()}
        for row in reader
    ]


def clean_question_rows(rows):
    errors = {}
    questions = []
    seen = set()
    if not rows:
        raise ValidationError({'rows': _('At least one question is required.')})
    missing_columns = [column for column in IMPORT_COLUMNS if column not in rows[0]]
    if missing_columns:
        raise ValidationError({'columns': [
            _('Missing column {}.').format(column) for column in missing_columns
        ]})

    for index, row in enumerate(rows, 1):
        row_errors = []
        try:
            ord_ = int(str(row.get('ord')).strip())
            if ord_ < 1:
                raise ValueError
        except (TypeError, ValueError):
            row_errors.append(_('ord must be a positive integer.'))
            ord_ = None
        if ord_ is not None and ord_ in seen:
            row_errors.append(_('Duplicate ord {}.').format(ord_))
        text = str(row.get('text') or '').strip()
        if not text:
            row_errors.append(_('text is required.'))
        try:
            is_required = _parse_bool(row.get('is_required'))
        except ValueError:
            row_errors.append(_('is_required must be true or false.'))
            is_required = None

        if row_errors:
            errors[f"row {index}"] = row_errors
            continue
        seen.add(ord_)
        questions.append({'ord': ord_, 'text': text, 'is_required': is_required})

    if errors:
        raise ValidationError(errors)
    return sorted(questions, key=lambda question: question['ord'])


def _deactivate_others(version):
    QuestionBankVersion.objects.filter(
        bank=version.bank, is_active=True
    ).exclude(pk=version.pk).update(is_active=False)


def import_question_bank(kind, rows, actor, version=None, activate=False, name=''):
    """
    Create a new immutable version of the bank of `kind` from `rows`.

    :return: object with bank_id, bank_version_id, version,
        questions_imported and activated
    """
    ensure_rh(actor)
    if kind not in dict(QUESTION_BANK_KIND_CHOICES):
        raise ValidationError({'kind': _('Unknown question bank kind {}.').format(kind)})
    questions = clean_question_rows(rows)

    with transaction.atomic():
        bank, _created = QuestionBank.objects.select_for_update().get_or_create(
            kind=kind, defaults={'name': name}
        )
        if version is None:
            current = bank.versions.aggregate(current=Max('version'))['current']
            version = (current or 0) + 1
        elif bank.versions.filter(version=version).exists():
            raise Conflict(_('Version {} already exists for {}.').format(version, kind))

        bank_version = QuestionBankVersion.objects.create(
            bank=bank, version=version, imported_by=actor
        )
        Question.objects.bulk_create([
            Question(bank_version=bank_version, **question)
            for question in questions
        ])
        if activate:
            _deactivate_others(bank_version)
            bank_version.is_active = True
            bank_version.save(update_fields=['is_active', 'modified_at'])

    logger.info(
        f"Imported {len(questions)} questions into {kind} v{version} "
        f"by {actor.email}, active={activate}."
    )
    return DummyObject(
        bank_id=bank.id,
        bank_version_id=bank_version.id,
        version=version,
        questions_imported=len(questions),
        activated=activate
    )


def activate_bank_version(bank_version_id, actor):
    ensure_rh(actor)
    with transaction.atomic():
        bank_version = QuestionBankVersion.objects.select_for_update().filter(
            pk=bank_version_id
        ).select_related('bank').first()
        if not bank_version:
            raise NotFound(_('Question bank version not found.'))
        _deactivate_others(bank_version)
        bank_version.is_active = True
        bank_version.save(update_fields=['is_active', 'modified_at'])
    logger.info(f"Activated {bank_version} by {actor.email}.")
    return bank_version
