from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.pagination import PageNumberPagination
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .models import Expense
from .serializers import (
    ExpenseSerializer,
    ExpenseCreateSerializer,
    ExpenseSummarySerializer,
    # Input serializers
    ExpenseFilterSerializer,
    ExpenseSummaryQuerySerializer,
)
from .services import (
    create_expense,
    get_expense_summary,
    InvalidExpenseError,
    StreakSyncError,
)
from apps.streaks.serializers import StreakUpdateSerializer
from apps.streaks.services import StreaksServiceError
from apps.streaks.views import ErrorResponseSerializer, error_response


# Response serializers for API documentation
class ExpenseCreateResponseSerializer(drf_serializers.Serializer):
    expense = ExpenseSerializer()
    streak = StreakUpdateSerializer()


class ExpensePagination(PageNumberPagination):
    """Custom pagination for expenses."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


class ExpenseViewSet(viewsets.ModelViewSet):
    """
    ViewSet for the current user's expenses.

    list: Get own expenses (filterable by date range, category, impulse flag)
    create: Record an expense and apply it to the streak
    retrieve: Get a specific expense
    update: Update an expense (streak is not recomputed)
    destroy: Delete an expense (streak is not recomputed)
    """

    serializer_class = ExpenseSerializer
    permission_classes = [IsAuthenticated]
    pagination_class = ExpensePagination

    def get_queryset(self):
        """Own expenses only, filtered by validated query parameters."""
        queryset = Expense.objects.filter(user=self.request.user)

        if self.action != 'list':
            return queryset

        filter_serializer = ExpenseFilterSerializer(data=self.request.query_params)
        filter_serializer.is_valid(raise_exception=True)
        params = filter_serializer.validated_data

        if 'date_from' in params:
            queryset = queryset.filter(date__gte=params['date_from'])
        if 'date_to' in params:
            queryset = queryset.filter(date__lte=params['date_to'])
        if params.get('category'):
            queryset = queryset.filter(category=params['category'])
        if params.get('is_impulse') is not None:
            queryset = queryset.filter(is_impulse=params['is_impulse'])

        return queryset

    def get_serializer_class(self):
        if self.action == 'create':
            return ExpenseCreateSerializer
        return ExpenseSerializer

    @extend_schema(
        parameters=[
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
            OpenApiParameter('category', OpenApiTypes.STR),
            OpenApiParameter('is_impulse', OpenApiTypes.BOOL),
        ],
        tags=['expenses'],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(
        request=ExpenseCreateSerializer,
        responses={
            201: ExpenseCreateResponseSerializer,
            400: ErrorResponseSerializer,
            409: ErrorResponseSerializer,
            503: ErrorResponseSerializer,
        },
        description="Record an expense. The response carries the streak outcome of this purchase.",
        tags=['expenses'],
    )
    def create(self, request, *args, **kwargs):
        """
        Create an expense and run one streak transition for it.

        POST /api/expenses/
        Body: expense fields plus optional "use_free_credit": true
        """
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        fields = dict(serializer.validated_data)
        use_free_credit = fields.pop('use_free_credit', False)

        try:
            expense, update = create_expense(
                user=request.user,
                use_free_credit=use_free_credit,
                **fields
            )
        except StreakSyncError as e:
            return Response({'error': str(e)}, status=status.HTTP_409_CONFLICT)
        except InvalidExpenseError as e:
            return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
        except StreaksServiceError as e:
            return error_response(e)

        streak = StreakUpdateSerializer(
            update.as_dict(),
            context={'as_of': update.stats['as_of']}
        )
        return Response(
            {
                'expense': ExpenseSerializer(expense).data,
                'streak': streak.data,
            },
            status=status.HTTP_201_CREATED
        )

    @extend_schema(
        parameters=[
            OpenApiParameter('date_from', OpenApiTypes.DATE),
            OpenApiParameter('date_to', OpenApiTypes.DATE),
        ],
        responses={200: ExpenseSummarySerializer},
        description="Spending totals for the current user.",
        tags=['expenses'],
    )
    @action(detail=False, methods=['get'])
    def summary(self, request):
        """
        Spending totals, optionally bounded by date.

        GET /api/expenses/summary/?date_from=...&date_to=...
        """
        query = ExpenseSummaryQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        summary = get_expense_summary(
            user=request.user,
            date_from=query.validated_data.get('date_from'),
            date_to=query.validated_data.get('date_to'),
        )
        return Response(ExpenseSummarySerializer(summary).data)
