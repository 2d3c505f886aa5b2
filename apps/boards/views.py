from django.db.models import Q
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Board
from .serializers import (
    AddMemberSerializer,
    BoardCreateSerializer,
    BoardMemberSerializer,
    BoardSerializer,
    BoardUpdateSerializer,
    UpdateMemberRoleSerializer,
)

from apps.boards.services import (
    add_member,
    archive_board,
    change_member_role,
    create_board,
    delete_board,
    get_board,
    get_board_members,
    remove_member,
    star_board,
    unarchive_board,
    unstar_board,
    update_board,
    # Exceptions
    BoardsServiceError,
    BoardsNotFoundError,
    BoardsPermissionDeniedError,
    BoardsConflictError,
    BusinessRuleViolationError,
    BoardsInputError,
)


UUID_PATTERN = r'[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}'

ERROR_STATUS = (
    (BoardsNotFoundError, status.HTTP_404_NOT_FOUND),
    (BoardsPermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (BoardsConflictError, status.HTTP_409_CONFLICT),
    (BusinessRuleViolationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (BoardsInputError, status.HTTP_400_BAD_REQUEST),
)


def error_response(exc: BoardsServiceError) -> Response:
    """Translate a boards service error into an API error response."""
    for error_class, error_status in ERROR_STATUS:
        if isinstance(exc, error_class):
            break
    else:
        error_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    return Response({'error': str(exc), 'code': exc.code}, status=error_status)


class BoardViewSet(viewsets.GenericViewSet):
    """
    ViewSet for boards and their members.

    All business logic is handled by services.
    Views are thin HTTP handlers only.

    list: Boards the user owns or is an active member of
    create: Create a new board
    retrieve: Get a board (read access)
    partial_update: Rename or re-describe a board (write access)
    destroy: Delete a board with its lists, cards and members (owner only)
    """

    serializer_class = BoardSerializer
    permission_classes = [IsAuthenticated]
    lookup_value_regex = UUID_PATTERN

    def get_queryset(self):
        user = self.request.user
        return (
            Board.objects
            .filter(Q(owner=user) | Q(memberships__user=user, memberships__is_active=True))
            .select_related('owner')
            .distinct()
        )

    def list(self, request):
        serializer = BoardSerializer(self.get_queryset(), many=True)
        return Response(serializer.data)

    @extend_schema(request=BoardCreateSerializer, responses=BoardSerializer)
    def create(self, request):
        serializer = BoardCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            board = create_board(
                title=serializer.validated_data['title'],
                description=serializer.validated_data.get('description', ''),
                owner_id=request.user.id
            )
        except BoardsServiceError as e:
            return error_response(e)

        return Response(BoardSerializer(board).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        try:
            board = get_board(board_id=pk, requested_by=request.user.id)
        except BoardsServiceError as e:
            return error_response(e)
        return Response(BoardSerializer(board).data)

    @extend_schema(request=BoardUpdateSerializer, responses=BoardSerializer)
    def partial_update(self, request, pk=None):
        serializer = BoardUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        try:
            board = update_board(
                board_id=pk,
                requested_by=request.user.id,
                title=serializer.validated_data.get('title'),
                description=serializer.validated_data.get('description')
            )
        except BoardsServiceError as e:
            return error_response(e)

        return Response(BoardSerializer(board).data)

    def destroy(self, request, pk=None):
        try:
            delete_board(board_id=pk, requested_by=request.user.id)
        except BoardsServiceError as e:
            return error_response(e)
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _toggle(self, service, request, pk):
        try:
            board = service(board_id=pk, requested_by=request.user.id)
        except BoardsServiceError as e:
            return error_response(e)
        return Response(BoardSerializer(board).data)

    @extend_schema(request=None, responses=BoardSerializer)
    @action(detail=True, methods=['post'])
    def archive(self, request, pk=None):
        return self._toggle(archive_board, request, pk)

    @extend_schema(request=None, responses=BoardSerializer)
    @action(detail=True, methods=['post'])
    def unarchive(self, request, pk=None):
        return self._toggle(unarchive_board, request, pk)

    @extend_schema(request=None, responses=BoardSerializer)
    @action(detail=True, methods=['post'])
    def star(self, request, pk=None):
        return self._toggle(star_board, request, pk)

    @extend_schema(request=None, responses=BoardSerializer)
    @action(detail=True, methods=['post'])
    def unstar(self, request, pk=None):
        return self._toggle(unstar_board, request, pk)

    @extend_schema(request=AddMemberSerializer, responses=BoardMemberSerializer)
    @action(detail=True, methods=['get', 'post'])
    def members(self, request, pk=None):
        """List active members, or add one (owner/admin only)."""
        if request.method == 'GET':
            try:
                memberships = get_board_members(board_id=pk, requested_by=request.user.id)
            except BoardsServiceError as e:
                return error_response(e)
            return Response(BoardMemberSerializer(memberships, many=True).data)

        serializer = AddMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = add_member(
                board_id=pk,
                user_id=serializer.validated_data['user_id'],
                role=serializer.validated_data['role'],
                requested_by=request.user.id
            )
        except BoardsServiceError as e:
            return error_response(e)

        return Response(BoardMemberSerializer(membership).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=UpdateMemberRoleSerializer, responses=BoardMemberSerializer)
    @action(detail=True, methods=['patch', 'delete'], url_path=r'members/(?P<user_id>' + UUID_PATTERN + ')')
    def member(self, request, pk=None, user_id=None):
        """Change a member's role or remove the member (owner/admin only)."""
        if request.method == 'DELETE':
            try:
                remove_member(board_id=pk, user_id=user_id, requested_by=request.user.id)
            except BoardsServiceError as e:
                return error_response(e)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = UpdateMemberRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            membership = change_member_role(
                board_id=pk,
                user_id=user_id,
                new_role=serializer.validated_data['role'],
                requested_by=request.user.id
            )
        except BoardsServiceError as e:
            return error_response(e)

        return Response(BoardMemberSerializer(membership).data)
