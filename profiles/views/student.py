from rest_framework.generics import ListAPIView
from rest_framework.permissions import IsAuthenticated

# Models
from profiles.models import StudentProfile, FacultyProfile

# Permissions
from authentication.permissions import IsStaffOrSupervisor

# Serializers
from profiles.serializers import StudentProfileSerializer, FacultyProfileSerializer


# ---------------------------------------------------
# 1. LIST STUDENTS
# ---------------------------------------------------
class StudentListView(ListAPIView):
    """
    Lists students, optionally narrowed with ?department=<id>&batch=<batch>.
    """

    permission_classes = [IsAuthenticated, IsStaffOrSupervisor]
    serializer_class = StudentProfileSerializer

    def get_queryset(self):
        queryset = StudentProfile.objects.select_related("user", "department").order_by("id")
        department = self.request.query_params.get("department")
        batch = self.request.query_params.get("batch")
        if department:
            queryset = queryset.filter(department_id=department)
        if batch:
            queryset = queryset.filter(batch=batch)
        return queryset


# ---------------------------------------------------
# 2. LIST FACULTY
# ---------------------------------------------------
class FacultyListView(ListAPIView):
    """
    Lists faculty, optionally narrowed with ?department=<id>.
    """

    permission_classes = [IsAuthenticated, IsStaffOrSupervisor]
    serializer_class = FacultyProfileSerializer

    def get_queryset(self):
        queryset = FacultyProfile.objects.select_related("user", "department").order_by("id")
        department = self.request.query_params.get("department")
        if department:
            queryset = queryset.filter(department_id=department)
        return queryset
