"""
Academy views.
"""

import logging
from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status
from rest_framework.permissions import AllowAny

from apps.authentication.models import Profile
from apps.core.permissions import IsTokenAuthenticated, is_token_user
from apps.core.utils.params import int_param, list_param
from .models import AcademyClass, Post
from .permissions import has_academy_permission
from .serializers import (
    AcademyListSerializer,
    AcademySerializer,
    AcademyCreateSerializer,
    AcademyClassSerializer,
    TeacherSerializer,
    PostSerializer,
    TagListSerializer,
    RegionListSerializer,
    JoinCodeSerializer,
    MemberSerializer,
    MembershipSerializer,
    MemberGradeSerializer,
    MemberPermissionsSerializer,
    BookmarkSerializer,
    EnrollmentSerializer,
)
from .services import (
    get_academy,
    academy_service,
    membership_service,
    catalog_service,
    bookmark_service,
    enrollment_service,
)

logger = logging.getLogger(__name__)


class AuthenticatedWritesMixin:
    """GET is public, every other method needs a token"""

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsTokenAuthenticated()]


class AcademyListView(AuthenticatedWritesMixin, APIView):
    """
    GET /api/academies?region=&subject=&search=&limit=&offset=
    POST /api/academies
    """

    def get(self, request):
        limit = int_param(request, 'limit', 20, maximum=100)
        offset = int_param(request, 'offset', 0)

        academies, total = academy_service.list_academies(
            region=request.query_params.get('region'),
            subject=request.query_params.get('subject'),
            search=request.query_params.get('search'),
            limit=limit,
            offset=offset,
        )
        return Response({
            'academies': AcademyListSerializer(academies, many=True).data,
            'count': len(academies),
            'total': total,
            'limit': limit,
            'offset': offset,
        })

    def post(self, request):
        serializer = AcademyCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        academy = academy_service.create_academy(request.user.user_id, serializer.validated_data)
        data = AcademySerializer(academy).data
        data['join_code'] = academy.join_code
        return Response({'academy': data}, status=status.HTTP_201_CREATED)


class AcademyDetailView(AuthenticatedWritesMixin, APIView):
    """
    GET /api/academies/:academyId
    PATCH /api/academies/:academyId
    DELETE /api/academies/:academyId
    """

    def get(self, request, academy_id):
        academy = get_academy(academy_id)
        user_id = request.user.user_id if is_token_user(request.user) else None

        return Response({
            'academy': AcademySerializer(academy).data,
            'teachers': TeacherSerializer(academy.teachers.all(), many=True).data,
            'classes': AcademyClassSerializer(academy.classes.select_related('teacher'), many=True).data,
            'posts': PostSerializer(academy.posts.all()[:20], many=True).data,
            'is_bookmarked': bookmark_service.is_bookmarked(user_id, academy.id),
        })

    def patch(self, request, academy_id):
        serializer = AcademySerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        academy = academy_service.update_profile(request.user.user_id, academy_id, dict(serializer.validated_data))
        return Response({'academy': AcademySerializer(academy).data})

    def delete(self, request, academy_id):
        academy_service.delete_academy(request.user.user_id, academy_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class AcademyTargetTagsView(APIView):
    """
    PUT /api/academies/:academyId/target-tags
    """
    permission_classes = [IsTokenAuthenticated]

    def put(self, request, academy_id):
        serializer = TagListSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        academy = academy_service.set_target_tags(request.user.user_id, academy_id, serializer.validated_data['tags'])
        return Response({'target_tags': academy.target_tags})


class AcademyTargetRegionsView(APIView):
    """
    PUT /api/academies/:academyId/target-regions
    """
    permission_classes = [IsTokenAuthenticated]

    def put(self, request, academy_id):
        serializer = RegionListSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        academy = academy_service.set_target_regions(
            request.user.user_id, academy_id, serializer.validated_data['regions']
        )
        return Response({'target_regions': academy.target_regions})


class JoinCodeView(APIView):
    """
    Issue a new join code (replaces the previous one)

    POST /api/academies/:academyId/join-code
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, academy_id):
        code = membership_service.generate_join_code(request.user.user_id, academy_id)
        return Response({'join_code': code}, status=status.HTTP_201_CREATED)


class JoinAcademyView(APIView):
    """
    POST /api/academies/join
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request):
        serializer = JoinCodeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = membership_service.join_by_code(request.user.user_id, serializer.validated_data['code'])
        return Response({'membership': MembershipSerializer(member).data}, status=status.HTTP_201_CREATED)


class MyMembershipsView(APIView):
    """
    GET /api/academies/memberships
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        memberships = membership_service.my_memberships(request.user.user_id)
        return Response({'memberships': MembershipSerializer(memberships, many=True).data})


class MemberListView(APIView):
    """
    GET /api/academies/:academyId/members
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request, academy_id):
        rows = membership_service.list_members(request.user.user_id, academy_id)
        members = [row['member'] for row in rows]
        profiles = {row['member'].user_id: row['profile'] for row in rows if row['profile']}
        return Response({
            'members': MemberSerializer(members, many=True, context={'profiles': profiles}).data,
            'academy': {'join_code': get_academy(academy_id).join_code},
        })


class MemberDetailView(APIView):
    """
    Reject a join request or remove a member

    DELETE /api/academies/:academyId/members/:memberId
    """
    permission_classes = [IsTokenAuthenticated]

    def delete(self, request, academy_id, member_id):
        membership_service.remove_member(request.user.user_id, academy_id, member_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MemberApproveView(APIView):
    """
    POST /api/academies/:academyId/members/:memberId/approve
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, academy_id, member_id):
        member = membership_service.approve_member(request.user.user_id, academy_id, member_id)
        return Response({'member': MemberSerializer(member).data})


class MemberGradeView(APIView):
    """
    PUT /api/academies/:academyId/members/:memberId/grade
    """
    permission_classes = [IsTokenAuthenticated]

    def put(self, request, academy_id, member_id):
        serializer = MemberGradeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = membership_service.change_grade(
            request.user.user_id, academy_id, member_id, serializer.validated_data['grade']
        )
        return Response({'member': MemberSerializer(member).data})


class MemberPermissionsView(APIView):
    """
    PUT /api/academies/:academyId/members/:memberId/permissions
    """
    permission_classes = [IsTokenAuthenticated]

    def put(self, request, academy_id, member_id):
        serializer = MemberPermissionsSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        member = membership_service.update_permissions(
            request.user.user_id, academy_id, member_id, serializer.validated_data['permissions']
        )
        return Response({'member': MemberSerializer(member).data})


class TeacherListView(AuthenticatedWritesMixin, APIView):
    """
    GET /api/academies/:academyId/teachers
    POST /api/academies/:academyId/teachers
    """

    def get(self, request, academy_id):
        academy = get_academy(academy_id)
        return Response({'teachers': TeacherSerializer(academy.teachers.all(), many=True).data})

    def post(self, request, academy_id):
        serializer = TeacherSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        teacher = catalog_service.create_teacher(request.user.user_id, academy_id, serializer.validated_data)
        return Response({'teacher': TeacherSerializer(teacher).data}, status=status.HTTP_201_CREATED)


class TeacherDetailView(APIView):
    """
    PATCH /api/academies/teachers/:teacherId
    DELETE /api/academies/teachers/:teacherId
    """
    permission_classes = [IsTokenAuthenticated]

    def patch(self, request, teacher_id):
        serializer = TeacherSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        teacher = catalog_service.update_teacher(request.user.user_id, teacher_id, serializer.validated_data)
        return Response({'teacher': TeacherSerializer(teacher).data})

    def delete(self, request, teacher_id):
        catalog_service.delete_teacher(request.user.user_id, teacher_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class ClassListView(AuthenticatedWritesMixin, APIView):
    """
    GET /api/academies/:academyId/classes
    POST /api/academies/:academyId/classes
    """

    def get(self, request, academy_id):
        academy = get_academy(academy_id)
        classes = AcademyClass.objects.filter(academy=academy).select_related('teacher')
        return Response({'classes': AcademyClassSerializer(classes, many=True).data})

    def post(self, request, academy_id):
        serializer = AcademyClassSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        academy_class = catalog_service.create_class(request.user.user_id, academy_id, serializer.validated_data)
        return Response({'class': AcademyClassSerializer(academy_class).data}, status=status.HTTP_201_CREATED)


class ClassDetailView(APIView):
    """
    PATCH /api/academies/classes/:classId
    DELETE /api/academies/classes/:classId
    """
    permission_classes = [IsTokenAuthenticated]

    def patch(self, request, class_id):
        serializer = AcademyClassSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        academy_class = catalog_service.update_class(request.user.user_id, class_id, serializer.validated_data)
        return Response({'class': AcademyClassSerializer(academy_class).data})

    def delete(self, request, class_id):
        catalog_service.delete_class(request.user.user_id, class_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PostListView(AuthenticatedWritesMixin, APIView):
    """
    GET /api/academies/:academyId/posts
    POST /api/academies/:academyId/posts
    """

    def get(self, request, academy_id):
        academy = get_academy(academy_id)
        posts = Post.objects.filter(academy=academy)
        category = request.query_params.get('category')
        if category:
            posts = posts.filter(category=category)
        return Response({'posts': PostSerializer(posts, many=True).data})

    def post(self, request, academy_id):
        serializer = PostSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        post = catalog_service.create_post(request.user.user_id, academy_id, serializer.validated_data)
        return Response({'post': PostSerializer(post).data}, status=status.HTTP_201_CREATED)


class PostDetailView(APIView):
    """
    PATCH /api/academies/posts/:postId
    DELETE /api/academies/posts/:postId
    """
    permission_classes = [IsTokenAuthenticated]

    def patch(self, request, post_id):
        serializer = PostSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        post = catalog_service.update_post(request.user.user_id, post_id, serializer.validated_data)
        return Response({'post': PostSerializer(post).data})

    def delete(self, request, post_id):
        catalog_service.delete_post(request.user.user_id, post_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class BookmarkListView(APIView):
    """
    GET /api/academies/bookmarks
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        bookmarks = bookmark_service.list_for_user(request.user.user_id)
        return Response({'bookmarks': BookmarkSerializer(bookmarks, many=True).data})


class BookmarkToggleView(APIView):
    """
    POST /api/academies/:academyId/bookmark  (toggle)
    DELETE /api/academies/:academyId/bookmark
    """
    permission_classes = [IsTokenAuthenticated]

    def post(self, request, academy_id):
        bookmarked = bookmark_service.toggle(request.user.user_id, academy_id)
        return Response({'is_bookmarked': bookmarked})

    def delete(self, request, academy_id):
        bookmark_service.remove(request.user.user_id, academy_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class EnrollmentView(APIView):
    """
    GET /api/academies/classes/:classId/enrollment
    POST /api/academies/classes/:classId/enrollment
    DELETE /api/academies/classes/:classId/enrollment
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request, class_id):
        return Response({'is_enrolled': enrollment_service.is_enrolled(request.user.user_id, class_id)})

    def post(self, request, class_id):
        enrollment_service.enroll(request.user.user_id, class_id)
        return Response({'is_enrolled': True}, status=status.HTTP_201_CREATED)

    def delete(self, request, class_id):
        enrollment_service.unenroll(request.user.user_id, class_id)
        return Response(status=status.HTTP_204_NO_CONTENT)


class MyEnrollmentsView(APIView):
    """
    GET /api/academies/enrollments
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        enrollments = enrollment_service.list_for_user(request.user.user_id)
        return Response({'enrollments': EnrollmentSerializer(enrollments, many=True).data})


class TimetableView(APIView):
    """
    GET /api/academies/timetable
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        return Response({'slots': enrollment_service.timetable(request.user.user_id)})


class RecommendationsView(APIView):
    """
    Academies matching the caller's preference test answers

    GET /api/academies/recommendations?tags=&limit=&region=
    Tags default to the caller's stored profile tags.
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request):
        tags = list_param(request, 'tags')
        if not tags:
            profile = Profile.objects.filter(user_id=request.user.user_id).first()
            tags = (profile.profile_tags if profile else None) or []

        results = academy_service.recommend(
            tags,
            limit=int_param(request, 'limit', 3, maximum=20),
            region=request.query_params.get('region') or None,
        )
        return Response({
            'recommendations': [
                {
                    'academy': AcademyListSerializer(row['academy']).data,
                    **row['match'].to_dict(),
                }
                for row in results
            ],
            'has_preferences': bool(tags),
        })


class DashboardStatsView(APIView):
    """
    GET /api/academies/:academyId/dashboard
    """
    permission_classes = [IsTokenAuthenticated]

    def get(self, request, academy_id):
        stats = academy_service.dashboard_stats(request.user.user_id, academy_id)
        return Response({
            'stats': stats,
            'can_manage_members': has_academy_permission(request.user.user_id, academy_id, 'manage_members'),
        })
