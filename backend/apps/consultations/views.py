"""
Consultation views.
"""

from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from apps.core.permissions import IsTokenAuthenticated
from .serializers import ConsultationSerializer, ReservationSerializer, ReservationStatusSerializer
from .services import consultation_service


class AcademyConsultationsView(APIView):
    """
    GET /api/consultations/academy/:academyId?status=   (staff)
    POST /api/consultations/academy/:academyId          (parent request)
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request, academy_id):
        consultations = consultation_service.list_for_academy(
            request.user.user_id, academy_id, request.query_params.get('status')
        )
        return Response({'consultations': ConsultationSerializer(consultations, many=True).data})

    def post(self, request, academy_id):
        serializer = ConsultationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        consultation = consultation_service.request_consultation(
            request.user.user_id, academy_id, serializer.validated_data
        )
        return Response({'consultation': ConsultationSerializer(consultation).data}, status=status.HTTP_201_CREATED)


class ConsultationCompleteView(APIView):
    """
    POST /api/consultations/:consultationId/complete
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, consultation_id):
        consultation = consultation_service.complete(request.user.user_id, consultation_id)
        return Response({'consultation': ConsultationSerializer(consultation).data})


class AcademyReservationsView(APIView):
    """
    GET /api/consultations/academy/:academyId/reservations?status=   (staff)
    POST /api/consultations/academy/:academyId/reservations          (parent booking)
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request, academy_id):
        rows = consultation_service.list_reservations_for_academy(
            request.user.user_id, academy_id, request.query_params.get('status')
        )
        reservations = []
        for row in rows:
            data = ReservationSerializer(row['reservation']).data
            data['parent'] = row['parent'].to_summary() if row['parent'] else None
            reservations.append(data)
        return Response({'reservations': reservations})

    def post(self, request, academy_id):
        serializer = ReservationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reservation = consultation_service.create_reservation(
            request.user.user_id, academy_id, serializer.validated_data
        )
        return Response({'reservation': ReservationSerializer(reservation).data}, status=status.HTTP_201_CREATED)


class MyReservationsView(APIView):
    """
    GET /api/consultations/reservations/mine
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        reservations = consultation_service.my_reservations(request.user.user_id)
        return Response({'reservations': ReservationSerializer(reservations, many=True).data})


class ReservationCancelView(APIView):
    """
    POST /api/consultations/reservations/:reservationId/cancel
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, reservation_id):
        reservation = consultation_service.cancel_my_reservation(request.user.user_id, reservation_id)
        return Response({'reservation': ReservationSerializer(reservation).data})


class ReservationStatusView(APIView):
    """
    PUT /api/consultations/reservations/:reservationId/status
    """
    permission_classes = [IsTokenAuthenticated]

    def put(self, request, reservation_id):
        serializer = ReservationStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        reservation = consultation_service.set_reservation_status(
            request.user.user_id, reservation_id, serializer.validated_data['status']
        )
        return Response({'reservation': ReservationSerializer(reservation).data})
