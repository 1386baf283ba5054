"""
Typed failures of the application lifecycle.

All of them are DRF `APIException` subclasses so that views can let them
propagate and the framework renders `detail` (plus any structured payload)
with the matching status code.
"""
from django.utils.translation import gettext_lazy as _
from rest_framework import status
from rest_framework.exceptions import APIException


class RecruitmentError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = _('Recruitment operation failed.')
    default_code = 'recruitment_error'

    def __init__(self, detail=None, code=None, **payload):
        detail = detail or self.default_detail
        if payload:
            detail = {'detail': detail, **payload}
        super().__init__(detail=detail, code=code)
        self.payload = payload


class InvalidTransition(RecruitmentError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _('This action is not allowed in the current status.')
    default_code = 'invalid_transition'


class AlreadyFinalized(InvalidTransition):
    default_detail = _('The application is already finalized and is read only.')
    default_code = 'already_finalized'


class PreconditionNotMet(RecruitmentError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _('A previous stage has not been completed.')
    default_code = 'precondition_not_met'


class IncompleteScoreSet(RecruitmentError):
    default_detail = _('Exactly one score per evaluation criterion is required.')
    default_code = 'incomplete_score_set'


class MissingRequiredAnswers(RecruitmentError):
    default_detail = _('Required questions are unanswered.')
    default_code = 'missing_required_answers'


class UploadNotAllowed(RecruitmentError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = _('Documents can only be uploaded after acceptance.')
    default_code = 'upload_not_allowed'


class OutOfRange(RecruitmentError):
    default_detail = _('Score out of range.')
    default_code = 'out_of_range'


class Inactive(RecruitmentError):
    default_detail = _('The vacancy is not active.')
    default_code = 'inactive'


class Conflict(RecruitmentError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = _('Concurrent update conflict, please retry.')
    default_code = 'conflict'
