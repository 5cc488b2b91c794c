"""
Seminar serializers.
"""

from rest_framework import serializers
from .models import Seminar, SeminarApplication


class SeminarSerializer(serializers.ModelSerializer):
    academy = serializers.SerializerMethodField()
    application_count = serializers.SerializerMethodField()
    reserved_seats = serializers.SerializerMethodField()
    remaining_spots = serializers.SerializerMethodField()

    class Meta:
        model = Seminar
        fields = [
            'id',
            'academy',
            'title',
            'description',
            'date',
            'location',
            'capacity',
            'status',
            'subject',
            'target_grade',
            'image_url',
            'application_count',
            'reserved_seats',
            'remaining_spots',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']

    def get_academy(self, obj):
        return obj.academy.to_summary()

    def get_application_count(self, obj):
        return obj.applications.count()

    def get_reserved_seats(self, obj):
        return obj.reserved_seats()

    def get_remaining_spots(self, obj):
        return obj.remaining_spots()


class SeminarWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = Seminar
        fields = ['title', 'description', 'date', 'location', 'capacity', 'status', 'subject', 'target_grade', 'image_url']
        extra_kwargs = {'capacity': {'min_value': 1}}


class SeminarStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=Seminar.STATUS_CHOICES)


class SeminarApplicationSerializer(serializers.ModelSerializer):
    class Meta:
        model = SeminarApplication
        fields = ['id', 'seminar_id', 'user_id', 'student_name', 'student_grade', 'attendee_count', 'message', 'created_at']
        read_only_fields = ['id', 'seminar_id', 'user_id', 'created_at']
        extra_kwargs = {'attendee_count': {'min_value': 1, 'required': False}}


class MyApplicationSerializer(serializers.ModelSerializer):
    """Application with the seminar it belongs to"""
    seminar = SeminarSerializer(read_only=True)

    class Meta:
        model = SeminarApplication
        fields = ['id', 'seminar', 'student_name', 'student_grade', 'attendee_count', 'message', 'created_at']
