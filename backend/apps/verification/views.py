"""
Verification views.
"""

import logging
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from apps.core.permissions import IsTokenAuthenticated, IsSuperAdmin
from apps.core.utils.params import body_object
from .email import verification_email_service
from .serializers import (
    BusinessVerificationSerializer,
    AdminVerificationSerializer,
    SubmitVerificationSerializer,
    RejectVerificationSerializer,
)
from .services import verification_service

logger = logging.getLogger(__name__)


class MyVerificationView(APIView):
    """
    GET /api/verification  (caller's verification or null)
    POST /api/verification  (submit / resubmit)
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        verification = verification_service.get_mine(request.user.user_id)
        return Response({
            'verification': BusinessVerificationSerializer(verification).data if verification else None,
        })

    def post(self, request):
        serializer = SubmitVerificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        verification = verification_service.submit(request.user.user_id, **serializer.validated_data)
        return Response(
            {'verification': BusinessVerificationSerializer(verification).data},
            status=status.HTTP_201_CREATED
        )


class VerificationListView(APIView):
    """
    GET /api/verification/admin?status=pending|approved|rejected
    """
    permission_classes = [IsSuperAdmin]

    def get(self, request):
        verifications = verification_service.list_verifications(request.query_params.get('status'))
        return Response({
            'verifications': AdminVerificationSerializer(verifications, many=True).data,
            'count': len(verifications),
        })


class VerificationStatsView(APIView):
    """
    GET /api/verification/admin/stats
    """
    permission_classes = [IsSuperAdmin]

    def get(self, request):
        return Response(verification_service.stats())


class ApproveVerificationView(APIView):
    """
    POST /api/verification/admin/:verificationId/approve
    """
    permission_classes = [IsSuperAdmin]

    def post(self, request, verification_id):
        verification = verification_service.approve(request.user.user_id, verification_id)
        return Response({'verification': AdminVerificationSerializer(verification).data})


class RejectVerificationView(APIView):
    """
    POST /api/verification/admin/:verificationId/reject
    """
    permission_classes = [IsSuperAdmin]

    def post(self, request, verification_id):
        serializer = RejectVerificationSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        verification = verification_service.reject(
            request.user.user_id,
            verification_id,
            serializer.validated_data['reason'],
        )
        return Response({'verification': AdminVerificationSerializer(verification).data})


class VerificationEmailView(APIView):
    """
    Send a verification result email

    POST /api/verification/email
    Body: {email, businessName, status: approved|rejected, rejectionReason?}
    """
    permission_classes = [IsSuperAdmin]

    def post(self, request):
        data = body_object(request)
        result = verification_email_service.send(
            email=data.get('email'),
            business_name=data.get('businessName'),
            status=data.get('status'),
            rejection_reason=data.get('rejectionReason'),
        )
        return Response(result)
