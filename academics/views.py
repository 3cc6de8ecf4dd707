from rest_framework.generics import ListAPIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.decorators import api_view, permission_classes

# Models
from .models import Department

# Permissions
from authentication.permissions import IsStaffOrSupervisor

# Serializers
from .serializers import DepartmentSerializer, BatchSummarySerializer
from profiles.serializers import StudentProfileSerializer

# Services
from .services.batch_rollup import summarize_batches
from internships.services.assignments import students_without_internship


# ---------------------------------------------------
# 1. LIST DEPARTMENTS
# ---------------------------------------------------
class DepartmentListAPIView(ListAPIView):
    queryset = Department.objects.all()
    serializer_class = DepartmentSerializer
    permission_classes = [IsAuthenticated]


# ---------------------------------------------------
# 2. BATCH SUMMARY
# ---------------------------------------------------
@api_view(["GET"])
@permission_classes([IsAuthenticated, IsStaffOrSupervisor])
def batch_summary_view(request, pk):
    """
    Returns total / did-internship / missing / sections for each batch
    of the department.
    """
    summaries = summarize_batches(pk)
    return Response(BatchSummarySerializer(summaries, many=True).data)


# ---------------------------------------------------
# 3. STUDENTS WITHOUT INTERNSHIP
# ---------------------------------------------------
@api_view(["GET"])
@permission_classes([IsAuthenticated, IsStaffOrSupervisor])
def students_without_internship_view(request, pk):
    students = students_without_internship(pk)
    return Response(StudentProfileSerializer(students, many=True).data)
