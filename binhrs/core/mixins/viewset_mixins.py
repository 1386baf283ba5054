from rest_framework import mixins
from rest_framework.viewsets import GenericViewSet


class CreateViewSetMixin(mixins.CreateModelMixin,
                         GenericViewSet):
    """
    A viewset that provides  `create` action.

    To use it, override the class and set the `.queryset` and
    `.serializer_class` attributes.
    """
    pass


class ListRetrieveViewSetMixin(mixins.ListModelMixin,
                               mixins.RetrieveModelMixin,
                               GenericViewSet):
    """
    A viewset that provides `list` and `retrieve` actions.

    To use it, override the class and set the `.queryset` and
    `.serializer_class` attributes.
    """
    pass
