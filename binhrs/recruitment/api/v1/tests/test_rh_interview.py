from django.urls import reverse

from binhrs.common.api.tests.common import BINHRSAPITestCase
from binhrs.recruitment.api.v1.tests.factory import (
    ApplicationFactory,
    VacancyFactory,
    QuestionBankVersionFactory,
    QuestionFactory
)
from binhrs.recruitment.api.v1.tests.utils import (
    create_active_bank,
    advance_to_rh_interview,
    advance_to_manager_interview
)
from binhrs.recruitment.constants import (
    OPERATIVO,
    OPERADOR_UNIDADES,
    INTERVIEW_RH_START,
    INTERVIEW_RH_FINALIZE
)
from binhrs.recruitment.exceptions import MissingRequiredAnswers
from binhrs.recruitment.models import RHInterview
from binhrs.recruitment.utils import rh_interview
from binhrs.recruitment.utils.question_bank import activate_bank_version


class TestRHInterview(BINHRSAPITestCase):
    def setUp(self):
        super().setUp()
        self.bank_version = create_active_bank(required=2, optional=1)
        self.vacancy = VacancyFactory(manager=self.manager)
        self.application = advance_to_rh_interview(
            ApplicationFactory(vacancy=self.vacancy), self.rh_user
        )

    def url(self, name):
        return reverse(
            f'api_v1:recruitment:application-{name}',
            kwargs={'pk': self.application.id}
        )

    def start(self):
        return self.client.post(self.url('rh-interview-start'))

    def questions(self):
        return list(self.bank_version.questions.order_by('ord'))

    def test_start_snapshots_active_bank(self):
        response = self.start()
        self.assertEqual(response.status_code, self.status.HTTP_201_CREATED, response.data)
        self.assertFalse(response.data['existing'])
        self.assertEqual(response.data['bank_version'], self.bank_version.version)
        self.assertEqual(
            [question['ord'] for question in response.data['questions']], [1, 2, 3]
        )
        self.assertTrue(self.application.audit_logs.filter(action=INTERVIEW_RH_START).exists())

    def test_start_twice_returns_existing_interview(self):
        first = self.start()
        second = self.start()
        self.assertEqual(second.status_code, self.status.HTTP_200_OK)
        self.assertTrue(second.data['existing'])
        self.assertEqual(first.data['id'], second.data['id'])
        self.assertEqual(RHInterview.objects.count(), 1)

    def test_start_uses_bank_resolved_from_position(self):
        operador_bank = create_active_bank(kind=OPERADOR_UNIDADES, required=1, optional=0)
        vacancy = VacancyFactory(
            position='Operador de unidad', vacancy_type=OPERATIVO, question_bank_kind=''
        )
        application = advance_to_rh_interview(ApplicationFactory(vacancy=vacancy), self.rh_user)
        interview, existing = rh_interview.start_rh_interview(application.id, self.rh_user)
        self.assertFalse(existing)
        self.assertEqual(interview.bank_version, operador_bank)

    def test_start_without_active_bank(self):
        vacancy = VacancyFactory(question_bank_kind=OPERATIVO)
        application = advance_to_rh_interview(ApplicationFactory(vacancy=vacancy), self.rh_user)
        response = self.client.post(reverse(
            'api_v1:recruitment:application-rh-interview-start',
            kwargs={'pk': application.id}
        ))
        self.assertEqual(response.status_code, self.status.HTTP_404_NOT_FOUND)

    def test_start_before_scheduling(self):
        application = ApplicationFactory(vacancy=self.vacancy)
        response = self.client.post(reverse(
            'api_v1:recruitment:application-rh-interview-start',
            kwargs={'pk': application.id}
        ))
        self.assertEqual(response.status_code, self.status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['detail'].code, 'invalid_transition')

    def test_start_after_rh_stage_is_rejected(self):
        advance_to_manager_interview(self.application, self.rh_user)
        response = self.start()
        self.assertEqual(response.status_code, self.status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['detail'].code, 'invalid_transition')
        self.assertEqual(RHInterview.objects.count(), 1)

    def test_later_activation_does_not_change_started_interview(self):
        self.start()
        new_version = QuestionBankVersionFactory(bank=self.bank_version.bank, is_active=False)
        QuestionFactory(bank_version=new_version, ord=1)
        activate_bank_version(new_version.id, self.rh_user)

        response = self.client.get(self.url('rh-interview'))
        self.assertEqual(response.data['bank_version'], self.bank_version.version)
        self.assertEqual(len(response.data['questions']), 3)

    def test_draft_merges_answers_and_replaces_extra_questions(self):
        self.start()
        first, second, optional = self.questions()
        self.client.post(self.url('rh-interview-draft'), {
            'answers': [{'question_id': first.id, 'answer': 'Cinco años'}],
            'extra_questions': [
                {'question': '¿Disponibilidad de horario?', 'answer': 'Sí'},
                {'question': '¿Licencia vigente?', 'answer': 'No'},
            ]
        })
        response = self.client.post(self.url('rh-interview-draft'), {
            'answers': [{'question_id': second.id, 'answer': 'Por crecimiento'}],
            'extra_questions': [{'question': '¿Expectativa salarial?', 'answer': '15000'}]
        })
        self.assertEqual(response.status_code, self.status.HTTP_200_OK, response.data)
        answers = {item['id']: item['answer'] for item in response.data['questions']}
        self.assertEqual(answers[first.id], 'Cinco años')
        self.assertEqual(answers[second.id], 'Por crecimiento')
        self.assertEqual(answers[optional.id], '')
        self.assertEqual(
            response.data['extra_questions'],
            [{'ord': 1, 'question': '¿Expectativa salarial?', 'answer': '15000'}]
        )

    def test_draft_without_extra_questions_keeps_them(self):
        self.start()
        first = self.questions()[0]
        self.client.post(self.url('rh-interview-draft'), {
            'extra_questions': [{'question': '¿Turno nocturno?', 'answer': 'Sí'}]
        })
        response = self.client.post(self.url('rh-interview-draft'), {
            'answers': [{'question_id': first.id, 'answer': 'Respuesta'}]
        })
        self.assertEqual(len(response.data['extra_questions']), 1)

    def test_draft_rejects_questions_of_other_versions(self):
        self.start()
        foreign_question = QuestionFactory(bank_version__is_active=False)
        response = self.client.post(self.url('rh-interview-draft'), {
            'answers': [{'question_id': foreign_question.id, 'answer': 'x'}]
        })
        self.assertEqual(response.status_code, self.status.HTTP_400_BAD_REQUEST)

    def test_draft_before_start(self):
        response = self.client.post(self.url('rh-interview-draft'), {'answers': []})
        self.assertEqual(response.status_code, self.status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['detail'].code, 'precondition_not_met')

    def test_finalize_requires_required_answers(self):
        self.start()
        first, second, _optional = self.questions()
        self.client.post(self.url('rh-interview-draft'), {
            'answers': [
                {'question_id': first.id, 'answer': 'Sí'},
                {'question_id': second.id, 'answer': '   '},
            ]
        })
        with self.assertRaises(MissingRequiredAnswers) as context:
            rh_interview.finalize_rh_interview(self.application.id, self.rh_user)
        self.assertEqual(
            context.exception.payload['questions'],
            [{'id': second.id, 'ord': second.ord, 'text': second.text}]
        )

        response = self.client.post(self.url('rh-interview-finalize'))
        self.assertEqual(response.status_code, self.status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data['detail'].code, 'missing_required_answers')

    def test_finalize_ignores_optional_questions(self):
        self.start()
        first, second, _optional = self.questions()
        self.client.post(self.url('rh-interview-draft'), {
            'answers': [
                {'question_id': first.id, 'answer': 'Sí'},
                {'question_id': second.id, 'answer': 'No'},
            ]
        })
        response = self.client.post(self.url('rh-interview-finalize'))
        self.assertEqual(response.status_code, self.status.HTTP_200_OK, response.data)
        self.assertIsNotNone(response.data['finished_at'])
        self.assertTrue(
            self.application.audit_logs.filter(action=INTERVIEW_RH_FINALIZE).exists()
        )

        # finished interviews are read only
        response = self.client.post(self.url('rh-interview-draft'), {
            'answers': [{'question_id': first.id, 'answer': 'Cambio'}]
        })
        self.assertEqual(response.status_code, self.status.HTTP_409_CONFLICT)
        response = self.client.post(self.url('rh-interview-finalize'))
        self.assertEqual(response.status_code, self.status.HTTP_409_CONFLICT)

    def test_manager_cannot_run_rh_interview(self):
        self.login(self.manager)
        response = self.start()
        self.assertEqual(response.status_code, self.status.HTTP_403_FORBIDDEN)
        self.assertFalse(RHInterview.objects.exists())
