from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, \
    TokenRefreshView

app_name = 'api_v1'

urlpatterns = [
    # authentication urls
    path('auth/', include((
        [
            path('obtain/', TokenObtainPairView.as_view(), name='obtain'),
            path('refresh/', TokenRefreshView.as_view(), name='refresh'),
        ], 'jwt'))),

    # modules
    path('recruitment/', include('binhrs.recruitment.api.v1.urls')),
]
