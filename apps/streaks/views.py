from rest_framework import status, serializers as drf_serializers
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter
from drf_spectacular.types import OpenApiTypes
from .serializers import (
    StatsQuerySerializer,
    StreakStatsSerializer,
    VoucherSerializer,
)
from .services import (
    project_stats,
    get_reward_ledger,
    redeem_voucher,
    StreaksServiceError,
    InvalidInputError,
    StoreUnavailableError,
    ConcurrentModificationError,
    VoucherNotFoundError,
    VoucherAlreadyUsedError,
    VoucherExpiredError,
)


class ErrorResponseSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


# Most specific first
ERROR_STATUS = (
    (VoucherNotFoundError, status.HTTP_404_NOT_FOUND),
    (VoucherAlreadyUsedError, status.HTTP_400_BAD_REQUEST),
    (VoucherExpiredError, status.HTTP_400_BAD_REQUEST),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (ConcurrentModificationError, status.HTTP_409_CONFLICT),
    (StoreUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def error_response(exc: StreaksServiceError) -> Response:
    """Translate a streak service error into an API response."""
    for error_class, code in ERROR_STATUS:
        if isinstance(exc, error_class):
            return Response({'error': str(exc)}, status=code)
    return Response({'error': str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)


@extend_schema(
    parameters=[
        OpenApiParameter('as_of', OpenApiTypes.STR, description='ISO date or datetime (default: now)'),
    ],
    responses={200: StreakStatsSerializer, 400: ErrorResponseSerializer},
    description="Current streak, best streak, completions, free credits and vouchers for the current user.",
    tags=['streaks'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_streak(request):
    """Stats projection for the current user."""
    query = StatsQuerySerializer(data=request.query_params)
    query.is_valid(raise_exception=True)

    try:
        stats = project_stats(
            user_id=request.user.id,
            as_of=query.validated_data.get('as_of'),
        )
    except StreaksServiceError as e:
        return error_response(e)

    serializer = StreakStatsSerializer(stats, context={'as_of': stats['as_of']})
    return Response(serializer.data)


@extend_schema(
    responses={200: VoucherSerializer(many=True)},
    description="Every voucher the current user has earned, in earn order.",
    tags=['streaks'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_vouchers(request):
    """Full reward ledger for the current user."""
    try:
        ledger = get_reward_ledger(user_id=request.user.id)
    except StreaksServiceError as e:
        return error_response(e)

    return Response(VoucherSerializer(ledger, many=True).data)


@extend_schema(
    request=None,
    responses={
        200: VoucherSerializer,
        400: ErrorResponseSerializer,
        404: ErrorResponseSerializer,
    },
    description="Redeem one of the current user's unused, unexpired vouchers.",
    tags=['streaks'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def redeem(request, voucher_id):
    """Mark a voucher as used."""
    try:
        voucher = redeem_voucher(user_id=request.user.id, voucher_id=voucher_id)
    except StreaksServiceError as e:
        return error_response(e)

    return Response(VoucherSerializer(voucher).data)
