"""
Document fulfillment: what a vacancy requires per phase, what an application
has uploaded and at which version.

Versions of a (application, doc_type) pair start at 1 and grow by one. The
next version is read and inserted while the application row is locked.
"""
import logging
import os
from datetime import timedelta

from django.conf import settings
from django.core import signing
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.db import transaction
from django.db.models import Max
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import NotFound, PermissionDenied, ValidationError

from binhrs.core.utils.common import get_uuid_filename
from binhrs.recruitment.constants import (
    NECESARIO,
    DESPUES,
    ACEPTADO,
    DOC_TYPES,
    DOC_UPLOAD
)
from binhrs.recruitment.exceptions import UploadNotAllowed, PreconditionNotMet
from binhrs.recruitment.models import ApplicationDocument, DocumentUpload
from binhrs.recruitment.utils.audit import write_audit
from binhrs.recruitment.utils.common import (
    get_public_application,
    lock_application,
    retry_once_on_conflict
)

logger = logging.getLogger(__name__)

UPLOAD_TOKEN_SALT = 'binhrs.recruitment.after-docs'


def validate_doc_type(doc_type):
    if doc_type not in DOC_TYPES:
        raise ValidationError({'doc_type': _('Unknown document type {}.').format(doc_type)})
    return doc_type


def next_document_version(application, doc_type):
    current = application.documents.filter(
        doc_type=doc_type
    ).aggregate(current=Max('version'))['current']
    return (current or 0) + 1


def record_document(application, doc_type, phase, content, version=None):
    """
    Store `content` as the next version of `doc_type`. The application must
    be locked by the caller.
    """
    validate_doc_type(doc_type)
    version = version or next_document_version(application, doc_type)
    document = ApplicationDocument(
        application=application,
        doc_type=doc_type,
        phase=phase,
        version=version,
        filename=os.path.basename(getattr(content, 'name', '') or doc_type)
    )
    document.attachment.save(document.filename, content, save=False)
    document.save()
    return document


def get_fulfillment(application, phase):
    required = application.vacancy.required_doc_types(phase)
    present = set(
        application.documents.filter(phase=phase).values_list('doc_type', flat=True)
    )
    return {
        'required': required,
        'uploaded': [doc_type for doc_type in required if doc_type in present],
        'pending': [doc_type for doc_type in required if doc_type not in present],
    }


def get_after_docs_progress(folio, email):
    application = get_public_application(folio, email)
    progress = get_fulfillment(application, DESPUES)
    progress['can_upload'] = application.status == ACEPTADO
    return progress


def _upload_expiry():
    return timedelta(minutes=settings.AFTER_DOC_UPLOAD_EXPIRY_MINUTES)


def make_upload_token(upload):
    return signing.TimestampSigner(salt=UPLOAD_TOKEN_SALT).sign(str(upload.upload_id))


def start_upload(folio, email, doc_type, filename, mimetype, size):
    """
    Open a write session for a post acceptance document. Returns the
    session and the signed token addressing its write location.
    """
    validate_doc_type(doc_type)
    if size and size > settings.MAX_FILE_SIZE * 1024 * 1024:
        raise ValidationError({'size': _('File must be less than {} MB.').format(settings.MAX_FILE_SIZE)})

    with transaction.atomic():
        application = get_public_application(folio, email, lock=True)
        if application.status != ACEPTADO:
            raise UploadNotAllowed(status=application.status)
        if doc_type not in application.vacancy.required_doc_types(DESPUES):
            raise ValidationError({
                'doc_type': _('{} is not required after acceptance for this vacancy.').format(doc_type)
            })
        upload = DocumentUpload.objects.create(
            application=application,
            doc_type=doc_type,
            filename=os.path.basename(filename),
            mimetype=mimetype or '',
            size=size or 0,
            storage_path=os.path.join(
                'uploads/applicationdocument', get_uuid_filename(filename)
            ),
            expected_version=next_document_version(application, doc_type),
            expires_at=timezone.now() + _upload_expiry()
        )
    logger.info(f"After-doc upload {upload.upload_id} started for {application.folio}.")
    return upload, make_upload_token(upload)


def get_upload_for_token(token):
    try:
        upload_id = signing.TimestampSigner(salt=UPLOAD_TOKEN_SALT).unsign(
            token, max_age=_upload_expiry()
        )
    except signing.SignatureExpired:
        raise PermissionDenied(_('Upload location expired.'))
    except signing.BadSignature:
        raise NotFound(_('Upload location not found.'))
    upload = DocumentUpload.objects.filter(upload_id=upload_id).first()
    if not upload:
        raise NotFound(_('Upload location not found.'))
    return upload


def write_upload_content(token, content):
    """Write raw bytes to the location addressed by a signed upload token."""
    upload = get_upload_for_token(token)
    if not content:
        raise ValidationError(_('The submitted file is empty.'))
    if len(content) > settings.MAX_FILE_SIZE * 1024 * 1024:
        raise ValidationError(_('File must be less than {} MB.').format(settings.MAX_FILE_SIZE))

    # finalize_upload holds the same row lock while recording the document
    with transaction.atomic():
        upload = DocumentUpload.objects.select_for_update().get(pk=upload.pk)
        if upload.finalized_at:
            raise PermissionDenied(_('Upload already finalized.'))
        if default_storage.exists(upload.storage_path):
            default_storage.delete(upload.storage_path)
        saved_path = default_storage.save(upload.storage_path, ContentFile(content))
        if saved_path != upload.storage_path:
            upload.storage_path = saved_path
            upload.save(update_fields=['storage_path', 'modified_at'])
    return upload


@retry_once_on_conflict
def finalize_upload(upload_id):
    """
    Record the written bytes as the next version of the document. Calling it
    again for the same session returns the already recorded document.
    """
    with transaction.atomic():
        upload = DocumentUpload.objects.select_for_update().filter(
            upload_id=upload_id
        ).first()
        if not upload:
            raise NotFound(_('Upload not found.'))
        application = lock_application(upload.application_id)
        if upload.finalized_at:
            return upload.document
        if application.status != ACEPTADO:
            raise UploadNotAllowed(status=application.status)
        if upload.expires_at < timezone.now():
            raise ValidationError({'upload_id': _('Upload session expired.')})
        if not default_storage.exists(upload.storage_path):
            raise PreconditionNotMet(
                _('No file has been written for this upload.'),
                missing=['file']
            )

        document = ApplicationDocument.objects.create(
            application=application,
            doc_type=upload.doc_type,
            phase=DESPUES,
            version=next_document_version(application, upload.doc_type),
            attachment=upload.storage_path,
            filename=upload.filename
        )
        upload.finalized_at = timezone.now()
        upload.document = document
        upload.save(update_fields=['finalized_at', 'document', 'modified_at'])
        write_audit(
            application, DOC_UPLOAD,
            from_status=application.status, to_status=application.status,
            note=f"{document.doc_type} v{document.version}"
        )
    return document


def record_necessary_documents(application, files):
    """Intake files, each stored with phase NECESARIO."""
    return [
        record_document(application, item['doc_type'], NECESARIO, item['content'])
        for item in files
    ]
