"""
Academy URL configuration.
"""

from django.urls import path
from . import views

app_name = 'academies'

urlpatterns = [
    # GET, POST /api/academies
    path('', views.AcademyListView.as_view(), name='academy_list'),

    # Caller-scoped collections
    path('join', views.JoinAcademyView.as_view(), name='join'),
    path('memberships', views.MyMembershipsView.as_view(), name='my_memberships'),
    path('bookmarks', views.BookmarkListView.as_view(), name='bookmark_list'),
    path('enrollments', views.MyEnrollmentsView.as_view(), name='my_enrollments'),
    path('timetable', views.TimetableView.as_view(), name='timetable'),
    path('recommendations', views.RecommendationsView.as_view(), name='recommendations'),

    # Teachers, classes, posts by id
    path('teachers/<uuid:teacher_id>', views.TeacherDetailView.as_view(), name='teacher_detail'),
    path('classes/<uuid:class_id>', views.ClassDetailView.as_view(), name='class_detail'),
    path('classes/<uuid:class_id>/enrollment', views.EnrollmentView.as_view(), name='enrollment'),
    path('posts/<uuid:post_id>', views.PostDetailView.as_view(), name='post_detail'),

    # Single academy
    path('<uuid:academy_id>', views.AcademyDetailView.as_view(), name='academy_detail'),
    path('<uuid:academy_id>/target-tags', views.AcademyTargetTagsView.as_view(), name='target_tags'),
    path('<uuid:academy_id>/target-regions', views.AcademyTargetRegionsView.as_view(), name='target_regions'),
    path('<uuid:academy_id>/join-code', views.JoinCodeView.as_view(), name='join_code'),
    path('<uuid:academy_id>/bookmark', views.BookmarkToggleView.as_view(), name='bookmark'),
    path('<uuid:academy_id>/dashboard', views.DashboardStatsView.as_view(), name='dashboard'),
    path('<uuid:academy_id>/teachers', views.TeacherListView.as_view(), name='teacher_list'),
    path('<uuid:academy_id>/classes', views.ClassListView.as_view(), name='class_list'),
    path('<uuid:academy_id>/posts', views.PostListView.as_view(), name='post_list'),

    # Staff members
    path('<uuid:academy_id>/members', views.MemberListView.as_view(), name='member_list'),
    path('<uuid:academy_id>/members/<uuid:member_id>', views.MemberDetailView.as_view(), name='member_detail'),
    path('<uuid:academy_id>/members/<uuid:member_id>/approve', views.MemberApproveView.as_view(), name='member_approve'),
    path('<uuid:academy_id>/members/<uuid:member_id>/grade', views.MemberGradeView.as_view(), name='member_grade'),
    path(
        '<uuid:academy_id>/members/<uuid:member_id>/permissions',
        views.MemberPermissionsView.as_view(),
        name='member_permissions'
    ),
]
