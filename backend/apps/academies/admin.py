"""
Django admin configuration for academies app.
"""

from django.contrib import admin
from .models import Academy, AcademyMember, Teacher, AcademyClass, ClassEnrollment, Bookmark, Post


class AcademyMemberInline(admin.TabularInline):
    model = AcademyMember
    extra = 0
    readonly_fields = ('user', 'created_at')


@admin.register(Academy)
class AcademyAdmin(admin.ModelAdmin):
    """Admin interface for Academy model"""
    list_display = ('name', 'subject', 'owner', 'is_mou', 'join_code', 'created_at')
    list_filter = ('is_mou', 'subject')
    search_fields = ('name', 'address', 'owner__email')
    readonly_fields = ('id', 'join_code', 'created_at', 'updated_at')
    inlines = [AcademyMemberInline]


@admin.register(Teacher)
class TeacherAdmin(admin.ModelAdmin):
    list_display = ('name', 'academy', 'subject', 'created_at')
    search_fields = ('name', 'academy__name')


@admin.register(AcademyClass)
class AcademyClassAdmin(admin.ModelAdmin):
    list_display = ('name', 'academy', 'teacher', 'schedule', 'fee', 'is_recruiting')
    list_filter = ('is_recruiting',)
    search_fields = ('name', 'academy__name')


@admin.register(Post)
class PostAdmin(admin.ModelAdmin):
    list_display = ('title', 'academy', 'category', 'created_at')
    list_filter = ('category',)
    search_fields = ('title', 'academy__name')


admin.site.register(ClassEnrollment)
admin.site.register(Bookmark)
