from django.urls import reverse

from binhrs.common.api.tests.common import BINHRSAPITestCase, FileHelpers
from binhrs.core.utils.common import hash_email
from binhrs.recruitment.api.v1.tests.factory import (
    ApplicationFactory,
    VacancyFactory,
    VacancyRequiredDocumentFactory
)
from binhrs.recruitment.api.v1.tests.utils import create_active_bank, advance_to_rh_interview
from binhrs.recruitment.constants import (
    ENTREVISTA_CON_RH,
    NECESARIO,
    DESPUES,
    CV,
    INE,
    NSS,
    STATUS_QUERY
)
from binhrs.recruitment.utils.documents import record_document


class TestApplicationStatus(BINHRSAPITestCase):
    def setUp(self):
        super().setUp()
        create_active_bank()
        self.vacancy = VacancyFactory(position='Contador', manager=self.manager)
        VacancyRequiredDocumentFactory(vacancy=self.vacancy, doc_type=CV, phase=NECESARIO)
        VacancyRequiredDocumentFactory(vacancy=self.vacancy, doc_type=INE, phase=NECESARIO)
        VacancyRequiredDocumentFactory(vacancy=self.vacancy, doc_type=NSS, phase=DESPUES)
        self.application = advance_to_rh_interview(
            ApplicationFactory(vacancy=self.vacancy), self.rh_user
        )
        record_document(self.application, CV, NECESARIO, FileHelpers.get_pdf())
        self.email = self.application.candidate.email
        self.logout()

    def query(self, folio=None, email=None):
        return self.client.post(reverse('api_v1:recruitment:public-status'), {
            'folio': folio or self.application.folio,
            'email': email or self.email,
        })

    def test_status(self):
        response = self.query(email=self.email.upper())
        self.assertEqual(response.status_code, self.status.HTTP_200_OK, response.data)
        self.assertEqual(response.data['folio'], self.application.folio)
        self.assertEqual(response.data['status'], ENTREVISTA_CON_RH)
        self.assertEqual(response.data['vacancy']['position'], 'Contador')
        self.assertEqual(
            [step['current'] for step in response.data['timeline']],
            [False, True, False, False, False]
        )
        self.assertEqual(response.data['schedules']['rh']['location'], 'Oficina central')
        self.assertIsNone(response.data['schedules']['manager'])
        self.assertEqual(response.data['docs']['necesarios'], {
            'required': [CV, INE], 'uploaded': [CV], 'pending': [INE]
        })
        self.assertEqual(response.data['docs']['despues']['pending'], [NSS])
        self.assertFalse(response.data['docs']['despues']['can_upload'])

    def test_status_query_is_audited_without_email(self):
        self.query()
        log = self.application.audit_logs.get(action=STATUS_QUERY)
        self.assertIsNone(log.actor)
        self.assertEqual(log.note, f'email_sha256={hash_email(self.email)}')
        self.assertNotIn(self.email, log.note)

    def test_mismatch_is_indistinguishable_from_missing_folio(self):
        wrong_email = self.query(email='other@example.com')
        missing_folio = self.query(folio='BIN-1999-00001')
        self.assertEqual(wrong_email.status_code, self.status.HTTP_404_NOT_FOUND)
        self.assertEqual(missing_folio.status_code, self.status.HTTP_404_NOT_FOUND)
        self.assertEqual(wrong_email.data, missing_folio.data)
        self.assertFalse(self.application.audit_logs.filter(action=STATUS_QUERY).exists())

    def test_malformed_input(self):
        for field, folio, email in (
            ('folio', 'BIN-26-1', None),
            ('folio', 'XYZ-2026-00001', None),
            ('folio', 'BIN-２０２６-00001', None),
            ('email', None, 'not-an-email'),
        ):
            with self.atomicSubTest(folio=folio, email=email):
                response = self.query(folio=folio, email=email)
                self.assertEqual(response.status_code, self.status.HTTP_400_BAD_REQUEST)
                self.assertIn(field, response.data)
