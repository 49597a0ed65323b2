"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

import logging

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from revenue.domain.errors import DomainError, ErrorCode
from revenue.handlers.serializers import (
    FestivalAnalyticsRequestSerializer,
    FestivalReportSerializer,
    FilmmakerAnalyticsRequestSerializer,
    FilmmakerReportSerializer,
    PlatformReportSerializer,
    PromoQuoteSerializer,
    PromoValidateRequestSerializer,
    PurchaseRequestSerializer,
    PurchaseResultSerializer,
)
from revenue.services import factories
from revenue.services.purchase_service import PurchaseRequest

logger = logging.getLogger(__name__)

ERROR_STATUS = {
    ErrorCode.UNKNOWN_ACCESS_TYPE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.AMOUNT_TOO_LOW: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ITEM_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.PROMO_CODE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.QUOTA_EXCEEDED: status.HTTP_403_FORBIDDEN,
    ErrorCode.PROMO_CODE_EXPIRED: status.HTTP_403_FORBIDDEN,
    ErrorCode.PROMO_CODE_NOT_APPLICABLE: status.HTTP_403_FORBIDDEN,
    ErrorCode.GATEWAY_ERROR: status.HTTP_402_PAYMENT_REQUIRED,
    ErrorCode.GATEWAY_UNREACHABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorCode.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(error: DomainError) -> Response:
    http_status = ERROR_STATUS.get(error.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if http_status >= 500:
        logger.error("Request failed: %s", error)
    return Response(
        {"error": {"code": error.code.value, "message": error.message}},
        status=http_status,
    )


def validation_response(errors) -> Response:
    return Response(
        {"error": {"code": "INVALID_REQUEST", "message": "Invalid request", "fields": errors}},
        status=status.HTTP_400_BAD_REQUEST,
    )


class PlatformAnalyticsView(APIView):
    """Handler for GET /api/revenue/analytics"""

    def get(self, request: Request) -> Response:
        try:
            report = factories.build_analytics_service().platform_report()
        except DomainError as exc:
            return error_response(exc)
        return Response(PlatformReportSerializer(report).data)


class FilmmakerAnalyticsView(APIView):
    """Handler for POST /api/revenue/analytics/filmmaker"""

    def post(self, request: Request) -> Response:
        serializer = FilmmakerAnalyticsRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        try:
            report = factories.build_analytics_service().filmmaker_report(
                serializer.validated_data["director_name"]
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(FilmmakerReportSerializer(report).data)


class FestivalAnalyticsView(APIView):
    """Handler for POST /api/revenue/analytics/festival"""

    def post(self, request: Request) -> Response:
        serializer = FestivalAnalyticsRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        try:
            report = factories.build_analytics_service().festival_report(
                serializer.validated_data.get("recipient") or None
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(FestivalReportSerializer(report).data)


class PromoValidateView(APIView):
    """Handler for POST /api/revenue/promo-codes/validate"""

    def post(self, request: Request) -> Response:
        serializer = PromoValidateRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        data = serializer.validated_data
        try:
            quote = factories.build_promo_engine().quote(
                data["code"], data["original_price"], item_id=data.get("item_id")
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(PromoQuoteSerializer(quote).data)


class PurchaseView(APIView):
    """Handler for POST /api/revenue/purchases"""

    def post(self, request: Request) -> Response:
        serializer = PurchaseRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return validation_response(serializer.errors)
        try:
            result = factories.build_purchase_service().purchase(
                PurchaseRequest(**serializer.validated_data)
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(PurchaseResultSerializer(result).data, status=status.HTTP_201_CREATED)
