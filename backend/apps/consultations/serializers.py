"""
Consultation serializers.
"""

import re
from rest_framework import serializers
from .models import Consultation, ConsultationReservation

TIME_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


class ConsultationSerializer(serializers.ModelSerializer):
    class Meta:
        model = Consultation
        fields = ['id', 'academy_id', 'parent_id', 'student_name', 'student_grade', 'message', 'status', 'created_at']
        read_only_fields = ['id', 'academy_id', 'parent_id', 'status', 'created_at']


class ReservationSerializer(serializers.ModelSerializer):
    academy = serializers.SerializerMethodField()

    class Meta:
        model = ConsultationReservation
        fields = [
            'id',
            'academy',
            'parent_id',
            'student_name',
            'student_grade',
            'reservation_date',
            'reservation_time',
            'message',
            'status',
            'created_at',
        ]
        read_only_fields = ['id', 'academy', 'parent_id', 'status', 'created_at']

    def get_academy(self, obj):
        return obj.academy.to_summary()

    def validate_reservation_time(self, value):
        if not TIME_PATTERN.match(value):
            raise serializers.ValidationError('Time must be HH:MM')
        return value


class ReservationStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=['confirmed', 'cancelled', 'completed'])
