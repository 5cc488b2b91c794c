"""
Academy serializers for request/response validation.
"""

from rest_framework import serializers
from apps.core.utils.schedule import parse_schedule
from .models import Academy, AcademyMember, Teacher, AcademyClass, ClassEnrollment, Bookmark, Post


class TeacherSerializer(serializers.ModelSerializer):
    class Meta:
        model = Teacher
        fields = ['id', 'academy_id', 'name', 'subject', 'bio', 'image_url', 'created_at', 'updated_at']
        read_only_fields = ['id', 'academy_id', 'created_at', 'updated_at']


class CurriculumStepSerializer(serializers.Serializer):
    title = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')


class AcademyClassSerializer(serializers.ModelSerializer):
    """Class with its schedule also broken out into entries"""
    teacher_id = serializers.UUIDField(required=False, allow_null=True)
    teacher_name = serializers.CharField(source='teacher.name', read_only=True, default=None)
    curriculum = CurriculumStepSerializer(many=True, required=False)
    schedule_entries = serializers.SerializerMethodField()

    class Meta:
        model = AcademyClass
        fields = [
            'id',
            'academy_id',
            'teacher_id',
            'teacher_name',
            'name',
            'description',
            'schedule',
            'schedule_entries',
            'curriculum',
            'target_grade',
            'fee',
            'is_recruiting',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'academy_id', 'created_at', 'updated_at']

    def get_schedule_entries(self, obj):
        return [entry.to_dict() for entry in parse_schedule(obj.schedule or '')]


class PostSerializer(serializers.ModelSerializer):
    class Meta:
        model = Post
        fields = ['id', 'academy_id', 'category', 'title', 'content', 'image_url', 'created_at', 'updated_at']
        read_only_fields = ['id', 'academy_id', 'created_at', 'updated_at']


class AcademyListSerializer(serializers.ModelSerializer):
    """Lightweight serializer for academy list"""

    class Meta:
        model = Academy
        fields = [
            'id',
            'name',
            'subject',
            'address',
            'profile_image',
            'tags',
            'target_grade',
            'target_regions',
            'is_mou',
        ]


class AcademySerializer(serializers.ModelSerializer):
    """Academy profile as edited by staff"""

    class Meta:
        model = Academy
        fields = [
            'id',
            'name',
            'subject',
            'description',
            'address',
            'profile_image',
            'tags',
            'target_tags',
            'target_grade',
            'target_regions',
            'is_mou',
            'owner_id',
            'created_at',
            'updated_at',
        ]
        read_only_fields = ['id', 'owner_id', 'target_tags', 'target_regions', 'is_mou', 'created_at', 'updated_at']


class AcademyCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200)
    subject = serializers.CharField(max_length=100)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    address = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=500)
    profile_image = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False, default=list)
    target_tags = serializers.ListField(child=serializers.CharField(max_length=50), required=False, default=list)
    target_grade = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=100)
    target_regions = serializers.ListField(child=serializers.CharField(max_length=30), required=False, default=list)


class TagListSerializer(serializers.Serializer):
    tags = serializers.ListField(child=serializers.CharField(max_length=50), allow_empty=True)


class RegionListSerializer(serializers.Serializer):
    regions = serializers.ListField(child=serializers.CharField(max_length=30), allow_empty=True)


class JoinCodeSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=12)


class MemberSerializer(serializers.ModelSerializer):
    profile = serializers.SerializerMethodField()

    class Meta:
        model = AcademyMember
        fields = ['id', 'academy_id', 'user_id', 'role', 'grade', 'status', 'permissions', 'profile', 'created_at']

    def get_profile(self, obj):
        profile = self.context.get('profiles', {}).get(obj.user_id)
        return profile.to_summary() if profile else None


class MembershipSerializer(serializers.ModelSerializer):
    """A caller's own membership, with the academy summary"""
    academy = serializers.SerializerMethodField()

    class Meta:
        model = AcademyMember
        fields = ['id', 'academy', 'role', 'grade', 'status', 'permissions', 'created_at']

    def get_academy(self, obj):
        return obj.academy.to_summary()


class MemberGradeSerializer(serializers.Serializer):
    grade = serializers.ChoiceField(choices=[c for c, _ in AcademyMember.GRADE_CHOICES if c != AcademyMember.GRADE_OWNER])


class MemberPermissionsSerializer(serializers.Serializer):
    permissions = serializers.DictField(child=serializers.BooleanField())


class BookmarkSerializer(serializers.ModelSerializer):
    academy = AcademyListSerializer(read_only=True)

    class Meta:
        model = Bookmark
        fields = ['id', 'academy', 'created_at']


class EnrollmentSerializer(serializers.ModelSerializer):
    academy_class = AcademyClassSerializer(read_only=True)
    academy = serializers.SerializerMethodField()

    class Meta:
        model = ClassEnrollment
        fields = ['id', 'academy_class', 'academy', 'created_at']

    def get_academy(self, obj):
        return obj.academy_class.academy.to_summary()
