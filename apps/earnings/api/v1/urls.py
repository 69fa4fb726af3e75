from django.urls import path, include
from rest_framework.routers import DefaultRouter

from apps.earnings.api.v1.views import EarningsViewSet, TransactionViewSet

router = DefaultRouter()
router.register(r'transactions', TransactionViewSet, basename='transaction')

urlpatterns = [
    path(
        'international/',
        EarningsViewSet.as_view({'get': 'international'}),
        name='earnings-international'
    ),
    path('', include(router.urls)),
]
