"""
Django admin configuration for verification app.
"""

from django.contrib import admin
from .models import BusinessVerification


@admin.register(BusinessVerification)
class BusinessVerificationAdmin(admin.ModelAdmin):
    """Admin interface for business verifications"""
    list_display = ('business_name', 'business_number', 'user', 'status', 'created_at', 'reviewed_at')
    list_filter = ('status',)
    search_fields = ('business_name', 'business_number', 'user__email')
    readonly_fields = ('id', 'created_at', 'updated_at', 'reviewed_at')
