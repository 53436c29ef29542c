"""HTTP handlers (views) - handle HTTP concerns only.

Handlers:
- Parse requests and validate input format
- Call services for business logic
- Map domain errors to HTTP responses
- Never contain business logic
- Never expose internal error details
"""

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.views import APIView

from scheduling.domain import ProrationMethod, VenueId
from scheduling.domain.errors import DomainError, ErrorCategory, InvalidIdError
from scheduling.handlers.serializers import (
    BatchDraftSerializer,
    BatchProgressSerializer,
    BatchProrationRequestSerializer,
    BatchSerializer,
    BlockedDatesQuerySerializer,
    ProrationQuoteSerializer,
    ProrationRequestSerializer,
    RescheduleSerializer,
    SessionSerializer,
)
from scheduling.services import get_billing_service, get_reschedule_service, get_schedule_service

STATUS_BY_CATEGORY = {
    ErrorCategory.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCategory.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCategory.CAPACITY: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorCategory.NOT_FOUND: status.HTTP_404_NOT_FOUND,
}


def error_response(exc: DomainError) -> Response:
    return Response(
        {"error": {"code": exc.code.value, "message": exc.message, "details": exc.details}},
        status=STATUS_BY_CATEGORY[exc.category],
    )


def actor_id(request: Request) -> str:
    user = request.user
    if user is not None and user.is_authenticated:
        return str(user.pk)
    return "anonymous"


def _method(data: dict) -> ProrationMethod | None:
    return ProrationMethod(data["method"]) if "method" in data else None


class BatchListView(APIView):
    """Handler for POST /api/batches"""

    def post(self, request: Request) -> Response:
        serializer = BatchDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            batch, sessions = get_schedule_service().create_batch(
                serializer.validated_data["draft"], actor_id(request)
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(
            {
                "batch": BatchSerializer(batch).data,
                "sessions": SessionSerializer(sessions, many=True).data,
            },
            status=status.HTTP_201_CREATED,
        )


class BatchDetailView(APIView):
    """Handler for GET/PUT /api/batches/{batch_id}"""

    def get(self, request: Request, batch_id: str) -> Response:
        try:
            batch = get_schedule_service().get_batch(batch_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(BatchSerializer(batch).data)

    def put(self, request: Request, batch_id: str) -> Response:
        serializer = BatchDraftSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            batch, sessions, regenerated = get_schedule_service().update_batch(
                batch_id,
                serializer.validated_data["draft"],
                actor_id(request),
                regenerate=serializer.validated_data["regenerate"],
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(
            {
                "batch": BatchSerializer(batch).data,
                "sessions": SessionSerializer(sessions, many=True).data,
                "regenerated": regenerated,
            }
        )


class SessionListView(APIView):
    """Handler for GET /api/batches/{batch_id}/sessions"""

    def get(self, request: Request, batch_id: str) -> Response:
        try:
            sessions = get_schedule_service().get_sessions(batch_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(SessionSerializer(sessions, many=True).data)


class ScheduleView(APIView):
    """Handler for POST /api/batches/{batch_id}/schedule"""

    def post(self, request: Request, batch_id: str) -> Response:
        try:
            sessions = get_schedule_service().generate_schedule(batch_id, actor_id(request))
        except DomainError as exc:
            return error_response(exc)
        return Response(SessionSerializer(sessions, many=True).data)


class BatchProgressView(APIView):
    """Handler for GET /api/batches/{batch_id}/progress"""

    def get(self, request: Request, batch_id: str) -> Response:
        try:
            progress = get_schedule_service().get_progress(batch_id)
        except DomainError as exc:
            return error_response(exc)
        return Response(BatchProgressSerializer(progress).data)


class BatchProrationView(APIView):
    """Handler for POST /api/batches/{batch_id}/proration-quote"""

    def post(self, request: Request, batch_id: str) -> Response:
        serializer = BatchProrationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            quote = get_billing_service().quote_for_batch(batch_id, data["join_date"], method=_method(data))
        except DomainError as exc:
            return error_response(exc)
        return Response(ProrationQuoteSerializer(quote).data)


class SessionRescheduleView(APIView):
    """Handler for PUT /api/sessions/{session_id}/reschedule"""

    def put(self, request: Request, session_id: str) -> Response:
        serializer = RescheduleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        try:
            session = get_reschedule_service().reschedule_session(
                session_id,
                data["date"],
                data["start_time"],
                data["end_time"],
                data["reason"],
                actor_id(request),
            )
        except DomainError as exc:
            return error_response(exc)
        return Response(SessionSerializer(session).data)


class ProrationQuoteView(APIView):
    """Handler for POST /api/proration-quotes"""

    def post(self, request: Request) -> Response:
        serializer = ProrationRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        quote = get_billing_service().quote_proration(
            data["join_date"], data["monthly_amount"], method=_method(data), currency=data["currency"]
        )
        return Response(ProrationQuoteSerializer(quote).data)


class BlockedDatesView(APIView):
    """Handler for GET /api/venues/{venue_id}/blocked-dates?start=&end="""

    def get(self, request: Request, venue_id: str) -> Response:
        serializer = BlockedDatesQuerySerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        try:
            parsed = VenueId.from_string(venue_id)
        except ValueError:
            return error_response(InvalidIdError())
        dates = get_schedule_service().blocked_dates(
            parsed, serializer.validated_data["start"], serializer.validated_data["end"]
        )
        return Response({"venue_id": venue_id, "dates": [value.isoformat() for value in dates]})
