import contextlib
import csv
import io
import shutil
import tempfile

from django.core.files.uploadedfile import SimpleUploadedFile
from django.db import transaction
from django.test import TestCase, override_settings
from faker import Factory
from openpyxl import Workbook
from rest_framework import status as drf_status
from rest_framework.test import APITestCase

from binhrs.users.api.v1.tests.factory import UserFactory, ManagerFactory

MEDIA_ROOT = tempfile.mkdtemp(prefix='binhrs-test-media-')


@override_settings(MEDIA_ROOT=MEDIA_ROOT)
class BaseTestCase(TestCase):

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(MEDIA_ROOT, ignore_errors=True)
        super().tearDownClass()

    @contextlib.contextmanager
    def atomicSubTest(self, **kwargs):
        """
        :keyword kwargs: kwargs to pass in subTest
        :return: A ContextManager which will rollback to initial save point upon exit

        Run all your cases inside a test case. Test execution will not be interrupted when single
        test fails, it will run all test cases and show result at last

        Usage
        ---
        .. code-block:: python

            for case in cases:
                with self.atomicSubTest():
                    run_test(case)
        """
        savepoint = transaction.savepoint()

        try:
            with self.subTest(**kwargs):
                yield savepoint
        finally:
            transaction.savepoint_rollback(savepoint)


class BINHRSAPITestCase(APITestCase, BaseTestCase):
    """
    Base Test Case for BINHRS

    Creates one RH user and one manager, and logs in the RH user.

    self.rh_user      --> RH staff, logged in by default
    self.manager      --> manager, assign him to vacancies as needed
    self.login(user)  --> switch the authenticated user
    self.logout()     --> act as an anonymous candidate
    """
    status = drf_status
    fake = Factory.create()

    def setUp(self):
        super().setUp()
        self.rh_user = UserFactory()
        self.manager = ManagerFactory()
        self.created_users = [self.rh_user, self.manager]
        self.login(self.rh_user)

    def login(self, user):
        self.client.force_authenticate(user=user)

    def logout(self):
        self.client.force_authenticate(user=None)


class FileHelpers:
    """
    Helper class that helps in testing files
    """

    @staticmethod
    def get_pdf(name='document.pdf', content=b'%PDF-1.4 test document'):
        return SimpleUploadedFile(name, content, content_type='application/pdf')

    @staticmethod
    def get_csv(rows, name='questions.csv', headers=('ord', 'text', 'is_required')):
        stream = io.StringIO()
        writer = csv.writer(stream)
        writer.writerow(headers)
        writer.writerows(rows)
        return SimpleUploadedFile(name, stream.getvalue().encode(), content_type='text/csv')

    @staticmethod
    def get_xlsx(rows, name='questions.xlsx', headers=('ord', 'text', 'is_required')):
        wb = Workbook()
        ws = wb.active
        ws.append(list(headers))
        for row in rows:
            ws.append(list(row))
        stream = io.BytesIO()
        wb.save(stream)
        return SimpleUploadedFile(
            name, stream.getvalue(),
            content_type='application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        )
