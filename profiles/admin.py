from django.contrib import admin
from profiles.models import StudentProfile, FacultyProfile


@admin.register(StudentProfile)
class StudentProfileAdmin(admin.ModelAdmin):
    list_display = [
        "registration_number",
        "user",
        "department",
        "batch",
        "section",
        "did_internship",
    ]
    list_filter = ["department", "batch", "did_internship"]
    search_fields = [
        "registration_number",
        "user__first_name",
        "user__last_name",
        "user__email",
    ]
    raw_id_fields = ["user"]


@admin.register(FacultyProfile)
class FacultyProfileAdmin(admin.ModelAdmin):
    list_display = ["employee_id", "user", "department", "designation", "is_hod"]
    list_filter = ["department", "designation", "is_hod"]
    search_fields = ["employee_id", "user__first_name", "user__last_name"]
    raw_id_fields = ["user"]
