"""
Seminar URL configuration.
"""

from django.urls import path
from . import views

app_name = 'seminars'

urlpatterns = [
    # GET /api/seminars
    path('', views.SeminarListView.as_view(), name='seminar_list'),

    # GET /api/seminars/applications/mine
    path('applications/mine', views.MyApplicationsView.as_view(), name='my_applications'),

    # POST /api/seminars/academy/:academyId
    path('academy/<uuid:academy_id>', views.AcademySeminarsView.as_view(), name='academy_seminars'),

    path('<uuid:seminar_id>', views.SeminarDetailView.as_view(), name='seminar_detail'),
    path('<uuid:seminar_id>/status', views.SeminarStatusView.as_view(), name='seminar_status'),
    path('<uuid:seminar_id>/apply', views.SeminarApplyView.as_view(), name='seminar_apply'),
    path('<uuid:seminar_id>/applications', views.SeminarApplicationsView.as_view(), name='seminar_applications'),
]
