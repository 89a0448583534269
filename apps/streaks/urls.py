from django.urls import path
from . import views

app_name = 'streaks'

urlpatterns = [
    # GET  /api/streaks/me/                      - Stats projection
    # GET  /api/streaks/me/vouchers/             - Full reward ledger
    # POST /api/streaks/vouchers/{id}/redeem/    - Redeem a voucher
    path('me/', views.my_streak, name='my-streak'),
    path('me/vouchers/', views.my_vouchers, name='my-vouchers'),
    path('vouchers/<uuid:voucher_id>/redeem/', views.redeem, name='voucher-redeem'),
]
