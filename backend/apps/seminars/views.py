"""
Seminar views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.core.permissions import IsTokenAuthenticated, is_token_user
from .serializers import (
    SeminarSerializer,
    SeminarWriteSerializer,
    SeminarStatusSerializer,
    SeminarApplicationSerializer,
    MyApplicationSerializer,
)
from .services import seminar_service


class SeminarListView(APIView):
    """
    GET /api/seminars?region=&status=&upcoming=true&academy=
    """
    permission_classes = [AllowAny]

    def get(self, request):
        seminars = seminar_service.list_seminars(
            region=request.query_params.get('region'),
            status=request.query_params.get('status'),
            upcoming=request.query_params.get('upcoming') == 'true',
            academy_id=request.query_params.get('academy'),
        )
        return Response({
            'seminars': SeminarSerializer(seminars, many=True).data,
            'count': len(seminars),
        })


class AcademySeminarsView(APIView):
    """
    POST /api/seminars/academy/:academyId
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, academy_id):
        serializer = SeminarWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        seminar = seminar_service.create_seminar(request.user.user_id, academy_id, serializer.validated_data)
        return Response({'seminar': SeminarSerializer(seminar).data}, status=status.HTTP_201_CREATED)


class SeminarDetailView(APIView):
    """
    GET /api/seminars/:seminarId
    PATCH /api/seminars/:seminarId
    DELETE /api/seminars/:seminarId
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsTokenAuthenticated()]

    def get(self, request, seminar_id):
        seminar = seminar_service.get_seminar(seminar_id)
        my_application = None
        if is_token_user(request.user):
            application = seminar_service.get_application(request.user.user_id, seminar.id)
            if application:
                my_application = SeminarApplicationSerializer(application).data

        return Response({
            'seminar': SeminarSerializer(seminar).data,
            'my_application': my_application,
        })

    def patch(self, request, seminar_id):
        serializer = SeminarWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        seminar = seminar_service.update_seminar(request.user.user_id, seminar_id, serializer.validated_data)
        return Response({'seminar': SeminarSerializer(seminar).data})

    def delete(self, request, seminar_id):
        seminar_service.delete_seminar(request.user.user_id, seminar_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SeminarStatusView(APIView):
    """
    Close or reopen recruiting

    PUT /api/seminars/:seminarId/status
    """
    permission_classes = [IsTokenAuthenticated]

    def put(self, request, seminar_id):
        serializer = SeminarStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        seminar = seminar_service.set_status(request.user.user_id, seminar_id, serializer.validated_data['status'])
        return Response({'seminar': SeminarSerializer(seminar).data})


class SeminarApplyView(APIView):
    """
    POST /api/seminars/:seminarId/apply
    DELETE /api/seminars/:seminarId/apply
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, seminar_id):
        serializer = SeminarApplicationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        application = seminar_service.apply(request.user.user_id, seminar_id, serializer.validated_data)
        return Response({'application': SeminarApplicationSerializer(application).data}, status=status.HTTP_201_CREATED)

    def delete(self, request, seminar_id):
        seminar_service.cancel_application(request.user.user_id, seminar_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class SeminarApplicationsView(APIView):
    """
    Applications received, for academy staff

    GET /api/seminars/:seminarId/applications
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request, seminar_id):
        applications = seminar_service.list_applications(request.user.user_id, seminar_id)
        return Response({'applications': SeminarApplicationSerializer(applications, many=True).data})


class MyApplicationsView(APIView):
    """
    GET /api/seminars/applications/mine
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        applications = seminar_service.my_applications(request.user.user_id)
        return Response({'applications': MyApplicationSerializer(applications, many=True).data})
