"""
Account URL configuration.
"""

from django.urls import path
from .views import (
    RegisterView,
    LoginView,
    RefreshTokenView,
    LogoutView,
    CurrentUserView,
    ProfileView,
    LearningStyleView,
    PreferenceTestView,
)

app_name = 'authentication'

urlpatterns = [
    # POST /api/auth/register
    path('register', RegisterView.as_view(), name='register'),

    # POST /api/auth/login
    path('login', LoginView.as_view(), name='login'),

    # POST /api/auth/refresh
    # Rotate refresh token
    path('refresh', RefreshTokenView.as_view(), name='refresh'),

    # POST /api/auth/logout
    path('logout', LogoutView.as_view(), name='logout'),

    # GET /api/auth/me
    path('me', CurrentUserView.as_view(), name='current_user'),

    # GET, PATCH /api/auth/profile
    path('profile', ProfileView.as_view(), name='profile'),

    # PUT /api/auth/profile/learning-style
    path('profile/learning-style', LearningStyleView.as_view(), name='learning_style'),

    # GET, POST /api/auth/preference-test
    path('preference-test', PreferenceTestView.as_view(), name='preference_test'),
]
