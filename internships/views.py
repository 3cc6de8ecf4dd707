import logging

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.exceptions import PermissionDenied
from rest_framework.generics import GenericAPIView, ListCreateAPIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

# Models
from authentication.models import User
from internships.models import Internship, Task
from profiles.models import StudentProfile

# Permissions
from authentication.permissions import (
    CanManageInternships,
    IsEnterpriseCell,
    IsStaffOrSupervisor,
    IsStudent,
    IsSupervisor,
)

# Serializers
from profiles.serializers import StudentProfileSerializer, FacultyProfileSerializer
from .serializers import (
    ApprovalEventSerializer,
    AssignFacultySerializer,
    AssignStudentSerializer,
    BatchReportRequestSerializer,
    GradeSerializer,
    InternshipSerializer,
    InvolvementRowSerializer,
    SubmissionSerializer,
    SubmitSerializer,
    TaskSerializer,
    ToggleApprovalSerializer,
)

# Services
from internportal.exceptions import NotFoundError
from .services import approval, assignments, grade_report, lifecycle, submissions, task_ledger
from .services.access import check_report_reader
from .services.lookups import get_internship, get_task

logger = logging.getLogger(__name__)


def _student_profile(user):
    try:
        return user.student_profile
    except StudentProfile.DoesNotExist:
        raise NotFoundError("No student profile is linked to this account.")


# ---------------------------------------------------
# 1. INTERNSHIPS
# ---------------------------------------------------
class InternshipListCreateView(ListCreateAPIView):
    """
    Lists the internships visible to the caller's role; the enterprise
    cell and industry partners can post new ones.
    """

    serializer_class = InternshipSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), CanManageInternships()]
        return [IsAuthenticated()]

    def get_queryset(self):
        user = self.request.user
        queryset = Internship.objects.select_related("created_by").order_by("-created_at", "-id")

        if user.role in (User.Role.ADMIN, User.Role.ENTERPRISE_CELL):
            return queryset
        if user.role == User.Role.INDUSTRY:
            return queryset.filter(industry_supervisor=user) | queryset.filter(created_by=user)
        if user.role == User.Role.FACULTY:
            return queryset.filter(faculty_links__faculty__user=user)
        return queryset.filter(student_links__student__user=user)

    def perform_create(self, serializer):
        user = self.request.user
        extra = {"created_by": user}
        if user.role == User.Role.INDUSTRY and not serializer.validated_data.get("industry_supervisor"):
            extra["industry_supervisor"] = user
        internship = serializer.save(**extra)
        logger.info("Internship %s '%s' posted by %s", internship.pk, internship.title, user.username)


class InternshipDetailView(GenericAPIView):
    serializer_class = InternshipSerializer

    def get_permissions(self):
        if self.request.method == "DELETE":
            return [IsAuthenticated(), CanManageInternships()]
        return [IsAuthenticated()]

    def get(self, request, pk):
        return Response(self.get_serializer(get_internship(pk)).data)

    def delete(self, request, pk):
        lifecycle.delete_internship(pk, actor=request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------
# 2. ASSIGNMENTS
# ---------------------------------------------------
class InternshipStudentsView(GenericAPIView):
    serializer_class = AssignStudentSerializer

    def get_permissions(self):
        if self.request.method == "PUT":
            return [IsAuthenticated(), CanManageInternships()]
        return [IsAuthenticated(), IsStaffOrSupervisor()]

    def get(self, request, pk):
        students = assignments.list_assigned_students(pk)
        return Response(StudentProfileSerializer(students, many=True).data)

    def put(self, request, pk):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        _, created = assignments.assign_student(
            pk, serializer.validated_data["student_id"], actor=request.user
        )
        return Response(
            {"message": "Student assigned" if created else "Student already assigned"},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


@api_view(["DELETE"])
@permission_classes([IsAuthenticated, CanManageInternships])
def unassign_student_view(request, pk, student_id):
    assignments.unassign_student(pk, student_id, actor=request.user)
    return Response(status=status.HTTP_204_NO_CONTENT)


class InternshipFacultyView(GenericAPIView):
    serializer_class = AssignFacultySerializer

    def get_permissions(self):
        if self.request.method == "PUT":
            return [IsAuthenticated(), CanManageInternships()]
        return [IsAuthenticated(), IsStaffOrSupervisor()]

    def get(self, request, pk):
        faculty = assignments.list_assigned_faculty(pk)
        return Response(FacultyProfileSerializer(faculty, many=True).data)

    def put(self, request, pk):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        _, created = assignments.assign_faculty(
            pk, serializer.validated_data["faculty_id"], actor=request.user
        )
        return Response(
            {"message": "Faculty assigned" if created else "Faculty already assigned"},
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


# ---------------------------------------------------
# 3. APPROVAL & COMPLETION
# ---------------------------------------------------
@api_view(["PUT"])
@permission_classes([IsAuthenticated, IsEnterpriseCell])
def toggle_approval_view(request, pk):
    serializer = ToggleApprovalSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    internship = approval.toggle_approval(
        pk, actor=request.user, comment=serializer.validated_data["comment"]
    )
    return Response({"id": internship.pk, "is_approved": internship.is_approved,
                     "approval_state": internship.approval_state})


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsStaffOrSupervisor])
def approval_history_view(request, pk):
    events = approval.approval_history(pk)
    return Response(ApprovalEventSerializer(events, many=True).data)


@api_view(["PUT"])
@permission_classes([IsAuthenticated, CanManageInternships])
def complete_internship_view(request, pk):
    internship = lifecycle.mark_complete(pk, actor=request.user)
    return Response({"id": internship.pk, "is_complete": internship.is_complete})


# ---------------------------------------------------
# 4. TASKS
# ---------------------------------------------------
class InternshipTasksView(GenericAPIView):
    """
    /internships/<pk>/tasks/<origin>/ where origin is "faculty" or "industry".
    """

    serializer_class = TaskSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsSupervisor()]
        return [IsAuthenticated(), IsStaffOrSupervisor()]

    def initial(self, request, *args, **kwargs):
        super().initial(request, *args, **kwargs)
        if kwargs["origin"] not in Task.Origin.values:
            raise NotFoundError(f"No task list named '{kwargs['origin']}'.")

    def get(self, request, pk, origin):
        tasks = task_ledger.list_tasks(pk, origin)
        return Response(self.get_serializer(tasks, many=True).data)

    def post(self, request, pk, origin):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        task = task_ledger.create_task(
            pk,
            origin,
            title=data["title"],
            description=data["description"],
            deadline=data["deadline"],
            marks=data["marks"],
            weightage=data["weightage"],
            assigned_students=data.get("assigned_students", []),
            actor=request.user,
        )
        return Response(self.get_serializer(task).data, status=status.HTTP_201_CREATED)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsStaffOrSupervisor])
def student_tasks_view(request, pk, student_id):
    tasks = task_ledger.list_tasks_for_student(pk, student_id)
    return Response(TaskSerializer(tasks, many=True).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated, IsStudent])
def my_tasks_view(request, pk):
    student = _student_profile(request.user)
    tasks = task_ledger.list_tasks_for_student(pk, student.pk)
    return Response(TaskSerializer(tasks, many=True).data)


class TaskDetailView(GenericAPIView):
    serializer_class = TaskSerializer

    def get_permissions(self):
        if self.request.method == "PATCH":
            return [IsAuthenticated(), IsSupervisor()]
        return [IsAuthenticated()]

    def get(self, request, task_id):
        return Response(self.get_serializer(get_task(task_id)).data)

    def patch(self, request, task_id):
        serializer = self.get_serializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        task = task_ledger.update_task(task_id, actor=request.user, **serializer.validated_data)
        return Response(self.get_serializer(task).data)


# ---------------------------------------------------
# 5. SUBMISSIONS & GRADING
# ---------------------------------------------------
class TaskSubmissionsView(GenericAPIView):
    serializer_class = SubmitSerializer

    def get_permissions(self):
        if self.request.method == "POST":
            return [IsAuthenticated(), IsStudent()]
        return [IsAuthenticated(), IsSupervisor()]

    def get(self, request, task_id):
        rows = submissions.list_submissions(task_id)
        return Response(SubmissionSerializer(rows, many=True).data)

    def post(self, request, task_id):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        student = _student_profile(request.user)
        submission, created = submissions.submit(
            task_id,
            student.pk,
            serializer.validated_data.get("student_name", ""),
            serializer.validated_data["file_url"],
        )
        return Response(
            SubmissionSerializer(submission).data,
            status=status.HTTP_201_CREATED if created else status.HTTP_200_OK,
        )


@api_view(["PATCH"])
@permission_classes([IsAuthenticated, IsSupervisor])
def grade_submission_view(request, submission_id):
    serializer = GradeSerializer(data=request.data)
    serializer.is_valid(raise_exception=True)
    submission = submissions.grade(submission_id, serializer.validated_data["grade"], actor=request.user)
    return Response(SubmissionSerializer(submission).data)


# ---------------------------------------------------
# 6. GRADE REPORTS
# ---------------------------------------------------
@api_view(["GET"])
@permission_classes([IsAuthenticated])
def grade_report_view(request, pk, student_id):
    """Students read their own report; supervisors only on internships they supervise."""
    if request.user.role == User.Role.STUDENT and _student_profile(request.user).pk != student_id:
        raise PermissionDenied("Students can only view their own grade report.")
    check_report_reader(request.user, get_internship(pk))

    rows = grade_report.build_involvement_report(pk, student_id)
    return Response({
        "internship_id": pk,
        "student_id": student_id,
        "rows": InvolvementRowSerializer(rows, many=True).data,
    })


@api_view(["GET", "POST"])
@permission_classes([IsAuthenticated, IsStaffOrSupervisor])
def grade_reports_view(request, pk):
    """
    Batched reports. GET covers every assigned student; POST takes
    {"student_ids": [...], "strict": false}. Failed entries come back
    next to the successful ones with a 207 status.
    """
    check_report_reader(request.user, get_internship(pk))
    serializer = BatchReportRequestSerializer(data=request.data if request.method == "POST" else {})
    serializer.is_valid(raise_exception=True)

    batch = grade_report.build_involvement_reports(pk, serializer.validated_data["student_ids"])
    if serializer.validated_data["strict"]:
        batch.raise_for_failures()

    payload = {
        "internship_id": batch.internship_id,
        "succeeded": {
            str(student_id): InvolvementRowSerializer(rows, many=True).data
            for student_id, rows in batch.succeeded.items()
        },
        "failed": {str(student_id): reason for student_id, reason in batch.failed.items()},
    }
    return Response(payload, status=status.HTTP_207_MULTI_STATUS if batch.is_partial else status.HTTP_200_OK)
