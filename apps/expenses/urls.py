from django.urls import path, include
from rest_framework.routers import DefaultRouter
from . import views

app_name = 'expenses'

router = DefaultRouter()
router.register(r'', views.ExpenseViewSet, basename='expense')

urlpatterns = [
    # GET    /api/expenses/            - List own expenses
    # POST   /api/expenses/            - Create expense (+ streak outcome)
    # GET    /api/expenses/summary/    - Spending totals
    # GET    /api/expenses/{id}/       - Get expense
    # PUT    /api/expenses/{id}/       - Update expense
    # PATCH  /api/expenses/{id}/       - Partial update
    # DELETE /api/expenses/{id}/       - Delete expense
    path('', include(router.urls)),
]
