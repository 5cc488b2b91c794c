"""
Django admin configuration for the account app.
"""

from django.contrib import admin
from .models import User, RefreshToken, Profile, UserRole


class ProfileInline(admin.StackedInline):
    model = Profile
    can_delete = False


class UserRoleInline(admin.StackedInline):
    model = UserRole
    can_delete = False


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    """Admin interface for User model"""
    list_display = ('email', 'created_at', 'updated_at')
    search_fields = ('email',)
    readonly_fields = ('id', 'created_at', 'updated_at', 'password_hash')
    ordering = ('-created_at',)
    inlines = [ProfileInline, UserRoleInline]

    fieldsets = (
        ('User Information', {
            'fields': ('id', 'email')
        }),
        ('Security', {
            'fields': ('password_hash',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at')
        }),
    )


@admin.register(RefreshToken)
class RefreshTokenAdmin(admin.ModelAdmin):
    """Admin interface for RefreshToken model"""
    list_display = ('user', 'expires_at', 'is_valid', 'created_at', 'revoked_at')
    search_fields = ('user__email',)
    list_filter = ('revoked_at', 'expires_at')
    readonly_fields = ('id', 'token', 'created_at')
    ordering = ('-created_at',)

    def is_valid(self, obj):
        return obj.is_valid
    is_valid.boolean = True
    is_valid.short_description = 'Valid'


@admin.register(UserRole)
class UserRoleAdmin(admin.ModelAdmin):
    list_display = ('user', 'role', 'is_super_admin', 'created_at')
    list_filter = ('role', 'is_super_admin')
    search_fields = ('user__email',)
