from rest_framework import viewsets, status, serializers as drf_serializers
from rest_framework.decorators import action, api_view, permission_classes
from rest_framework.pagination import PageNumberPagination
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema

from .serializers import (
    # Input serializers
    LedgerEntryFilterSerializer,
    LedgerEntryCreateSerializer,
    AssignSplitsInputSerializer,
    RecordPaymentInputSerializer,
    # Output serializers
    LedgerEntrySerializer,
    LedgerSplitSerializer,
    MemberBalanceSerializer,
)
from .services import (
    create_entry,
    get_entry,
    list_entries,
    cancel_entry,
    delete_entry,
    assign_splits,
    calculate_equal_splits,
    record_payment,
    member_balances,
    member_balance,
)
from .exceptions import (
    LedgerServiceError,
    LedgerNotFoundError,
    LedgerPermissionError,
    SplitTotalMismatchError,
)


# Response serializer for API documentation
class ErrorSerializer(drf_serializers.Serializer):
    error = drf_serializers.CharField()


class LedgerEntryPagination(PageNumberPagination):
    """Custom pagination for ledger entries."""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def error_response(exc):
    """Translate a ledger service error into an HTTP response."""
    if isinstance(exc, LedgerNotFoundError):
        status_code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, LedgerPermissionError):
        status_code = status.HTTP_403_FORBIDDEN
    else:
        status_code = status.HTTP_400_BAD_REQUEST

    body = {'error': str(exc)}
    if isinstance(exc, SplitTotalMismatchError):
        body['expected'] = str(exc.expected)
        body['actual'] = str(exc.actual)

    return Response(body, status=status_code)


@extend_schema(
    request=LedgerEntryCreateSerializer,
    responses={
        200: LedgerEntrySerializer(many=True),
        201: LedgerEntrySerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="List a room's ledger entries (paginated), or create a new entry (landlord or head roommate).",
    tags=['ledger'],
)
@api_view(['GET', 'POST'])
@permission_classes([IsAuthenticated])
def room_ledger(request, room_id):
    """List or create ledger entries for a room - thin HTTP handler."""
    if request.method == 'POST':
        serializer = LedgerEntryCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            entry = create_entry(
                room_id=room_id,
                user=request.user,
                **serializer.validated_data
            )
        except LedgerServiceError as e:
            return error_response(e)

        return Response(
            LedgerEntrySerializer(entry).data,
            status=status.HTTP_201_CREATED
        )

    filter_serializer = LedgerEntryFilterSerializer(data=request.query_params)
    filter_serializer.is_valid(raise_exception=True)
    params = filter_serializer.validated_data

    try:
        entries = list_entries(
            room_id=room_id,
            user=request.user,
            status=params.get('status'),
            include_cancelled=params.get('include_cancelled', False)
        )
    except LedgerServiceError as e:
        return error_response(e)

    paginator = LedgerEntryPagination()
    page = paginator.paginate_queryset(entries, request)
    serializer = LedgerEntrySerializer(page, many=True)
    return paginator.get_paginated_response(serializer.data)


@extend_schema(
    responses={
        200: MemberBalanceSerializer(many=True),
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Get owed/paid/outstanding totals for every non-landlord member of a room.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def room_balances(request, room_id):
    """Get all member balances for a room."""
    try:
        balances = member_balances(room_id=room_id, user=request.user)
    except LedgerServiceError as e:
        return error_response(e)

    return Response(MemberBalanceSerializer(balances, many=True).data)


@extend_schema(
    responses={
        200: MemberBalanceSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Get owed/paid/outstanding totals for one room member.",
    tags=['ledger'],
)
@api_view(['GET'])
@permission_classes([IsAuthenticated])
def room_member_balance(request, room_id, member_id):
    """Get a specific member's balance."""
    try:
        balance = member_balance(
            room_id=room_id,
            member_id=member_id,
            user=request.user
        )
    except LedgerServiceError as e:
        return error_response(e)

    return Response(MemberBalanceSerializer(balance).data)


@extend_schema(
    request=RecordPaymentInputSerializer,
    responses={
        200: LedgerSplitSerializer,
        400: ErrorSerializer,
        403: ErrorSerializer,
        404: ErrorSerializer,
    },
    description="Record a payment against a split (the split's member or the head roommate).",
    tags=['ledger'],
)
@api_view(['POST'])
@permission_classes([IsAuthenticated])
def pay_split(request, split_id):
    """
    Record a payment against a split.

    POST /api/ledger/splits/{id}/pay/
    Body: {"amount": "20.00", "notes": "optional"}
    """
    serializer = RecordPaymentInputSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)

    try:
        split = record_payment(
            split_id=split_id,
            user=request.user,
            amount=serializer.validated_data['amount'],
            notes=serializer.validated_data.get('notes', '')
        )
    except LedgerServiceError as e:
        return error_response(e)

    return Response(LedgerSplitSerializer(split).data)


class LedgerEntryViewSet(viewsets.GenericViewSet):
    """
    ViewSet for single ledger entries.

    All business logic, including authorization, is handled by services.
    Views are thin HTTP handlers only.

    retrieve: Get an entry with its splits (any room member)
    destroy: Delete an entry and its splits (head roommate)
    assign_splits: Replace splits with a manual breakdown (head roommate)
    equal_splits: Replace splits with an equal split (head roommate)
    cancel: Cancel an entry (head roommate or creator)
    """

    serializer_class = LedgerEntrySerializer
    permission_classes = [IsAuthenticated]
    lookup_field = 'pk'
    lookup_value_regex = '[0-9a-f-]{36}'

    @extend_schema(responses={200: LedgerEntrySerializer, 403: ErrorSerializer, 404: ErrorSerializer})
    def retrieve(self, request, pk=None):
        """Get a ledger entry."""
        try:
            entry = get_entry(entry_id=pk, user=request.user)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(LedgerEntrySerializer(entry).data)

    @extend_schema(responses={204: None, 403: ErrorSerializer, 404: ErrorSerializer})
    def destroy(self, request, pk=None):
        """Delete a ledger entry."""
        try:
            delete_entry(entry_id=pk, user=request.user)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(
        request=AssignSplitsInputSerializer,
        responses={200: LedgerEntrySerializer, 400: ErrorSerializer, 403: ErrorSerializer, 404: ErrorSerializer},
    )
    @action(detail=True, methods=['put'], url_path='splits')
    def assign_splits(self, request, pk=None):
        """
        Replace the entry's splits with a manual breakdown.

        PUT /api/ledger/{id}/splits/
        Body: {"assignments": [{"member_id": "...", "amount": "50.00", "notes": ""}]}
        """
        serializer = AssignSplitsInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            entry = assign_splits(
                entry_id=pk,
                user=request.user,
                assignments=serializer.validated_data['assignments']
            )
        except LedgerServiceError as e:
            return error_response(e)

        return Response(LedgerEntrySerializer(entry).data)

    @extend_schema(
        request=None,
        responses={200: LedgerEntrySerializer, 400: ErrorSerializer, 403: ErrorSerializer, 404: ErrorSerializer},
    )
    @action(detail=True, methods=['post'], url_path='splits/equal', url_name='equal-splits')
    def equal_splits(self, request, pk=None):
        """
        Split the entry's total equally among eligible members.

        POST /api/ledger/{id}/splits/equal/
        """
        try:
            entry = calculate_equal_splits(entry_id=pk, user=request.user)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(LedgerEntrySerializer(entry).data)

    @extend_schema(
        request=None,
        responses={200: LedgerEntrySerializer, 403: ErrorSerializer, 404: ErrorSerializer},
    )
    @action(detail=True, methods=['post'])
    def cancel(self, request, pk=None):
        """
        Cancel the entry.

        POST /api/ledger/{id}/cancel/
        """
        try:
            cancel_entry(entry_id=pk, user=request.user)
            entry = get_entry(entry_id=pk, user=request.user)
        except LedgerServiceError as e:
            return error_response(e)

        return Response(LedgerEntrySerializer(entry).data)
