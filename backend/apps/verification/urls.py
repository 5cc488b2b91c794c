"""
Verification URL configuration.
"""

from django.urls import path
from . import views

app_name = 'verification'

urlpatterns = [
    path('', views.MyVerificationView.as_view(), name='mine'),
    path('email', views.VerificationEmailView.as_view(), name='email'),
    path('admin', views.VerificationListView.as_view(), name='admin_list'),
    path('admin/stats', views.VerificationStatsView.as_view(), name='admin_stats'),
    path('admin/<uuid:verification_id>/approve', views.ApproveVerificationView.as_view(), name='approve'),
    path('admin/<uuid:verification_id>/reject', views.RejectVerificationView.as_view(), name='reject'),
]
