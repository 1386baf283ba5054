from rest_framework import status
from rest_framework.decorators import action
from rest_framework.parsers import MultiPartParser, FormParser, JSONParser
from rest_framework.response import Response

from binhrs.core.mixins.viewset_mixins import ListRetrieveViewSetMixin
from binhrs.recruitment.api.v1.permissions import IsRHUser
from binhrs.recruitment.api.v1.serializers.question import (
    QuestionBankVersionSerializer,
    QuestionBankImportSerializer
)
from binhrs.recruitment.models import QuestionBankVersion
from binhrs.recruitment.utils.question_bank import activate_bank_version


class QuestionBankVersionViewSet(ListRetrieveViewSetMixin):
    queryset = QuestionBankVersion.objects.select_related('bank').prefetch_related('questions')
    serializer_class = QuestionBankVersionSerializer
    permission_classes = [IsRHUser]
    parser_classes = [MultiPartParser, FormParser, JSONParser]
    filterset_fields = ('bank__kind', 'is_active')

    def get_serializer_class(self):
        if self.action == 'import_bank':
            return QuestionBankImportSerializer
        return super().get_serializer_class()

    @action(detail=False, methods=['post'], url_name='import', url_path='import')
    def import_bank(self, request):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        serializer.save()
        return Response(serializer.data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=['post'], url_name='activate', url_path='activate')
    def activate(self, request, pk=None):
        bank_version = activate_bank_version(self.get_object().id, request.user)
        return Response(self.get_serializer(bank_version).data)
