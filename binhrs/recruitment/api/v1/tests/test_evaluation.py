from django.urls import reverse

from binhrs.common.api.tests.common import BINHRSAPITestCase
from binhrs.recruitment.api.v1.tests.factory import ApplicationFactory, VacancyFactory
from binhrs.recruitment.api.v1.tests.utils import (
    create_active_bank,
    advance_to_manager_interview,
    advance_to_evaluation,
    complete_evaluation,
    score_set
)
from binhrs.recruitment.constants import (
    ACEPTADO,
    RECHAZADO,
    EVALUANDO,
    CRITERION_IDS,
    EVALUATION_FINALIZE_ACCEPT,
    EVALUATION_FINALIZE_REJECT
)
from binhrs.recruitment.exceptions import (
    AlreadyFinalized,
    IncompleteScoreSet,
    InvalidTransition,
    OutOfRange,
    PreconditionNotMet
)
from binhrs.recruitment.models import EvaluationScore, EvaluationSummary
from binhrs.recruitment.utils import evaluation


class TestEvaluation(BINHRSAPITestCase):
    def setUp(self):
        super().setUp()
        create_active_bank()
        self.vacancy = VacancyFactory(manager=self.manager)
        self.application = advance_to_evaluation(
            ApplicationFactory(vacancy=self.vacancy), self.rh_user
        )

    def url(self, name):
        return reverse(
            f'api_v1:recruitment:application-{name}',
            kwargs={'pk': self.application.id}
        )

    def test_validate_score_set(self):
        self.assertEqual(evaluation.validate_score_set(score_set(4)), {c: 4 for c in CRITERION_IDS})

        with self.assertRaises(IncompleteScoreSet) as context:
            evaluation.validate_score_set(score_set()[:15])
        self.assertEqual(context.exception.payload['missing'], [16])

        with self.assertRaises(IncompleteScoreSet) as context:
            evaluation.validate_score_set(score_set() + [{'criterion': 3, 'score': 5}])
        self.assertEqual(context.exception.payload['duplicated'], [3])

        with self.assertRaises(IncompleteScoreSet) as context:
            evaluation.validate_score_set(score_set()[1:] + [{'criterion': 17, 'score': 5}])
        self.assertEqual(context.exception.payload['missing'], [1])
        self.assertEqual(context.exception.payload['unexpected'], [17])

        scores = score_set()
        scores[4]['score'] = 0
        scores[9]['score'] = 6
        with self.assertRaises(OutOfRange) as context:
            evaluation.validate_score_set(scores)
        self.assertEqual(context.exception.payload['criteria'], [5, 10])

    def test_totals(self):
        for score, total in ((1, 16), (5, 80), (3, 48)):
            with self.subTest(score=score):
                response = self.client.post(
                    self.url('evaluation-scores'), {'scores': score_set(score)}
                )
                self.assertEqual(response.status_code, self.status.HTTP_200_OK, response.data)
                self.assertEqual(response.data['total'], total)
        self.assertEqual(EvaluationScore.objects.filter(application=self.application).count(), 16)

    def test_rejected_score_sets_are_not_saved(self):
        cases = {
            '15 criteria': score_set()[:15],
            '17 entries': score_set() + [{'criterion': 1, 'score': 2}],
            'out of range': score_set(6),
            'empty': [],
        }
        for case, scores in cases.items():
            with self.atomicSubTest(case=case):
                response = self.client.post(self.url('evaluation-scores'), {'scores': scores})
                self.assertEqual(response.status_code, self.status.HTTP_400_BAD_REQUEST)
        self.assertFalse(EvaluationScore.objects.exists())

    def test_scores_before_evaluation_started(self):
        application = advance_to_manager_interview(
            ApplicationFactory(vacancy=self.vacancy), self.rh_user
        )
        with self.assertRaises(InvalidTransition):
            evaluation.save_scores(application.id, score_set(), self.rh_user)

    def test_summary_requires_mandatory_fields(self):
        response = self.client.post(self.url('evaluation-summary'), {
            'factors_for': 'Experiencia',
            'factors_against': '  ',
            'conclusion': '',
        })
        self.assertEqual(response.status_code, self.status.HTTP_400_BAD_REQUEST)
        self.assertEqual(set(response.data), {'factors_against', 'conclusion'})

    def test_summary_and_context(self):
        evaluation.save_scores(self.application.id, score_set(2), self.rh_user)
        response = self.client.post(self.url('evaluation-summary'), {
            'factors_for': 'Experiencia',
            'factors_against': 'Distancia',
            'conclusion': 'Apto',
            'references_laborales': 'Buenas referencias',
        })
        self.assertEqual(response.status_code, self.status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['status'], EVALUANDO)
        self.assertEqual(response.data['total'], 32)
        self.assertEqual(response.data['summary']['references_laborales'], 'Buenas referencias')
        self.assertEqual(
            [len(group['criteria']) for group in response.data['groups']], [8, 8]
        )
        self.assertTrue(all(
            criterion['score'] == 2
            for group in response.data['groups'] for criterion in group['criteria']
        ))

    def test_finalize_requires_scores_and_summary(self):
        with self.assertRaises(IncompleteScoreSet) as context:
            evaluation.finalize_evaluation(self.application.id, ACEPTADO, self.rh_user)
        self.assertEqual(context.exception.payload['missing'], CRITERION_IDS)

        evaluation.save_scores(self.application.id, score_set(), self.rh_user)
        with self.assertRaises(PreconditionNotMet) as context:
            evaluation.finalize_evaluation(self.application.id, ACEPTADO, self.rh_user)
        self.assertEqual(
            context.exception.payload['missing'],
            ['factors_for', 'factors_against', 'conclusion']
        )
        self.application.refresh_from_db()
        self.assertEqual(self.application.status, EVALUANDO)

    def test_finalize_accept(self):
        complete_evaluation(self.application, self.rh_user, score=5)
        response = self.client.post(self.url('evaluation-finalize'), {'decision': ACEPTADO})
        self.assertEqual(response.status_code, self.status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['status'], ACEPTADO)
        self.assertEqual(EvaluationSummary.objects.get(application=self.application).total, 80)

        log = self.application.audit_logs.get(action=EVALUATION_FINALIZE_ACCEPT)
        self.assertEqual(
            (log.actor, log.from_status, log.to_status, log.note),
            (self.rh_user, EVALUANDO, ACEPTADO, 'total=80')
        )

    def test_finalize_twice(self):
        complete_evaluation(self.application, self.rh_user)
        evaluation.finalize_evaluation(self.application.id, RECHAZADO, self.rh_user)
        with self.assertRaises(AlreadyFinalized):
            evaluation.finalize_evaluation(self.application.id, ACEPTADO, self.rh_user)

        response = self.client.post(self.url('evaluation-finalize'), {'decision': ACEPTADO})
        self.assertEqual(response.status_code, self.status.HTTP_409_CONFLICT)
        self.assertEqual(response.data['detail'].code, 'already_finalized')
        self.assertEqual(response.data['status'], RECHAZADO)
        self.assertEqual(
            self.application.audit_logs.filter(
                action__in=[EVALUATION_FINALIZE_ACCEPT, EVALUATION_FINALIZE_REJECT]
            ).count(), 1
        )

        # scores and summary are frozen too
        with self.assertRaises(AlreadyFinalized):
            evaluation.save_scores(self.application.id, score_set(5), self.rh_user)

    def test_invalid_decision(self):
        complete_evaluation(self.application, self.rh_user)
        response = self.client.post(self.url('evaluation-finalize'), {'decision': 'Pendiente'})
        self.assertEqual(response.status_code, self.status.HTTP_400_BAD_REQUEST)
        self.assertIn('decision', response.data)

    def test_manager_cannot_evaluate(self):
        self.login(self.manager)
        response = self.client.post(self.url('evaluation-scores'), {'scores': score_set()})
        self.assertEqual(response.status_code, self.status.HTTP_403_FORBIDDEN)
        response = self.client.get(self.url('evaluation'))
        self.assertEqual(response.status_code, self.status.HTTP_403_FORBIDDEN)
