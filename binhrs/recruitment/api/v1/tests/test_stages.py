from django.urls import reverse
from rest_framework.exceptions import PermissionDenied

from binhrs.common.api.tests.common import BINHRSAPITestCase, BaseTestCase
from binhrs.recruitment.api.v1.tests.factory import ApplicationFactory, VacancyFactory
from binhrs.recruitment.api.v1.tests.utils import (
    create_active_bank,
    advance_to_rh_interview,
    advance_to_rh_finished,
    advance_to_manager_interview,
    advance_to_final,
    in_days
)
from binhrs.recruitment.constants import (
    REVISION_DE_DOCUMENTOS,
    ENTREVISTA_CON_RH,
    ENTREVISTA_CON_MANAGER,
    EVALUANDO,
    ACEPTADO,
    RECHAZADO,
    INTERVIEW_RH_SCHEDULED,
    MANAGER_SCHEDULE_SET,
    MANAGER_SCHEDULE_UPDATE,
    EVALUATION_START
)
from binhrs.recruitment.exceptions import (
    AlreadyFinalized,
    InvalidTransition,
    PreconditionNotMet
)
from binhrs.recruitment.models import Application, ManagerInterview
from binhrs.recruitment.utils import stages
from binhrs.users.api.v1.tests.factory import ManagerFactory


class TestApplicationStages(BINHRSAPITestCase):
    def setUp(self):
        super().setUp()
        create_active_bank()
        self.vacancy = VacancyFactory(manager=self.manager)
        self.application = ApplicationFactory(vacancy=self.vacancy)

    def url(self, name):
        return reverse(
            f'api_v1:recruitment:application-{name}',
            kwargs={'pk': self.application.id}
        )

    def test_schedule_rh_interview(self):
        at = in_days(3)
        response = self.client.post(
            self.url('schedule-rh'),
            {'at': at.isoformat(), 'location': 'Sala 1'}
        )
        self.assertEqual(response.status_code, self.status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['status'], ENTREVISTA_CON_RH)
        self.assertEqual(response.data['rh_interview_location'], 'Sala 1')

        log = self.application.audit_logs.get(action=INTERVIEW_RH_SCHEDULED)
        self.assertEqual(
            (log.actor, log.from_status, log.to_status),
            (self.rh_user, REVISION_DE_DOCUMENTOS, ENTREVISTA_CON_RH)
        )

    def test_rh_interview_can_be_rescheduled(self):
        advance_to_rh_interview(self.application, self.rh_user)
        response = self.client.post(
            self.url('schedule-rh'),
            {'at': in_days(5).isoformat(), 'location': 'Sala 2'}
        )
        self.assertEqual(response.status_code, self.status.HTTP_200_OK)
        self.application.refresh_from_db()
        self.assertEqual(self.application.status, ENTREVISTA_CON_RH)
        self.assertEqual(self.application.rh_interview_location, 'Sala 2')
        self.assertEqual(
            self.application.audit_logs.filter(action=INTERVIEW_RH_SCHEDULED).count(), 2
        )

    def test_schedule_rh_after_rh_stage_is_invalid(self):
        advance_to_manager_interview(self.application, self.rh_user)
        response = self.client.post(
            self.url('schedule-rh'), {'at': in_days(3).isoformat()}
        )
        self.assertEqual(response.status_code, self.status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['detail'].code, 'invalid_transition')
        self.assertEqual(response.data['status'], ENTREVISTA_CON_MANAGER)
        self.assertEqual(
            response.data['allowed'], [REVISION_DE_DOCUMENTOS, ENTREVISTA_CON_RH]
        )

    def test_manager_cannot_schedule_rh_interview(self):
        self.login(self.manager)
        response = self.client.post(
            self.url('schedule-rh'), {'at': in_days(3).isoformat()}
        )
        self.assertEqual(response.status_code, self.status.HTTP_403_FORBIDDEN)
        self.application.refresh_from_db()
        self.assertEqual(self.application.status, REVISION_DE_DOCUMENTOS)

    def test_schedule_manager_requires_finished_rh_interview(self):
        advance_to_rh_interview(self.application, self.rh_user)
        with self.assertRaises(PreconditionNotMet) as context:
            stages.schedule_manager_interview(
                self.application.id, in_days(2), 'Patio', self.rh_user
            )
        self.assertEqual(context.exception.payload['missing'], ['rh_interview_finished'])

    def test_assigned_manager_schedules_and_reschedules(self):
        advance_to_rh_finished(self.application, self.rh_user)
        self.login(self.manager)
        for location in ('Patio 1', 'Patio 3'):
            response = self.client.post(
                self.url('schedule-manager'),
                {'at': in_days(4).isoformat(), 'location': location}
            )
            self.assertEqual(response.status_code, self.status.HTTP_200_OK, response.data)
            self.assertEqual(response.data['status'], ENTREVISTA_CON_MANAGER)
            self.assertEqual(response.data['manager_interview_location'], location)
        self.assertEqual(
            list(
                self.application.audit_logs.filter(
                    action__in=[MANAGER_SCHEDULE_SET, MANAGER_SCHEDULE_UPDATE]
                ).values_list('action', flat=True)
            ),
            [MANAGER_SCHEDULE_SET, MANAGER_SCHEDULE_UPDATE]
        )

    def test_other_manager_cannot_schedule(self):
        advance_to_rh_finished(self.application, self.rh_user)
        other_manager = ManagerFactory()
        with self.assertRaises(PermissionDenied):
            stages.schedule_manager_interview(
                self.application.id, in_days(2), 'Patio', other_manager
            )

    def test_start_evaluation_requires_both_interviews(self):
        advance_to_rh_finished(self.application, self.rh_user)
        stages.schedule_manager_interview(self.application.id, in_days(2), 'Patio', self.rh_user)
        with self.assertRaises(PreconditionNotMet) as context:
            stages.start_evaluation(self.application.id, self.rh_user)
        self.assertEqual(context.exception.payload['missing'], ['manager_interview'])

        response = self.client.post(self.url('evaluation-start'))
        self.assertEqual(response.status_code, self.status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['detail'].code, 'precondition_not_met')

    def test_start_evaluation_reports_every_missing_interview(self):
        with self.assertRaises(PreconditionNotMet) as context:
            stages.start_evaluation(self.application.id, self.rh_user)
        self.assertEqual(
            context.exception.payload['missing'],
            ['rh_interview_finished', 'manager_interview']
        )

    def test_manager_result_alone_does_not_allow_skipping_the_schedule(self):
        advance_to_rh_finished(self.application, self.rh_user)
        ManagerInterview.objects.create(application=self.application, score=90)
        with self.assertRaises(InvalidTransition) as context:
            stages.start_evaluation(self.application.id, self.rh_user)
        self.assertEqual(context.exception.payload['status'], ENTREVISTA_CON_RH)

    def test_start_evaluation(self):
        advance_to_manager_interview(self.application, self.rh_user)
        response = self.client.post(self.url('evaluation-start'))
        self.assertEqual(response.status_code, self.status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['status'], EVALUANDO)
        self.assertTrue(
            self.application.audit_logs.filter(
                action=EVALUATION_START,
                from_status=ENTREVISTA_CON_MANAGER,
                to_status=EVALUANDO
            ).exists()
        )

    def test_terminal_application_is_read_only(self):
        advance_to_final(self.application, self.rh_user, RECHAZADO)
        operations = [
            lambda: stages.schedule_rh_interview(self.application.id, in_days(1), '', self.rh_user),
            lambda: stages.schedule_manager_interview(self.application.id, in_days(1), '', self.rh_user),
            lambda: stages.start_evaluation(self.application.id, self.rh_user),
        ]
        for index, operation in enumerate(operations):
            with self.atomicSubTest(operation=index):
                with self.assertRaises(AlreadyFinalized) as context:
                    operation()
                self.assertEqual(context.exception.payload['status'], RECHAZADO)
        self.assertEqual(Application.objects.get(pk=self.application.id).status, RECHAZADO)

    def test_finalized_response_code(self):
        advance_to_final(self.application, self.rh_user, ACEPTADO)
        response = self.client.post(
            self.url('schedule-rh'), {'at': in_days(1).isoformat()}
        )
        self.assertEqual(response.status_code, self.status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['detail'].code, 'already_finalized')


class TestTimeline(BaseTestCase):
    def test_timeline_in_progress(self):
        timeline = stages.get_timeline(ENTREVISTA_CON_MANAGER)
        self.assertEqual(
            [(item['step'], item['reached'], item['current']) for item in timeline],
            [
                (REVISION_DE_DOCUMENTOS, True, False),
                (ENTREVISTA_CON_RH, True, False),
                (ENTREVISTA_CON_MANAGER, True, True),
                (EVALUANDO, False, False),
                ('Final', False, False),
            ]
        )
        self.assertIsNone(timeline[-1]['value'])

    def test_timeline_finalized(self):
        for decision in (ACEPTADO, RECHAZADO):
            with self.subTest(decision=decision):
                timeline = stages.get_timeline(decision)
                self.assertTrue(all(item['reached'] for item in timeline))
                self.assertEqual(
                    [item['current'] for item in timeline],
                    [False, False, False, False, True]
                )
                self.assertEqual(timeline[-1]['value'], decision)
