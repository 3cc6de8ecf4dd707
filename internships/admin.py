from django.contrib import admin
from internships.models import (
    Internship,
    InternshipStudent,
    InternshipFaculty,
    ApprovalEvent,
    Task,
    Submission,
)


class InternshipStudentInline(admin.TabularInline):
    model = InternshipStudent
    extra = 0
    raw_id_fields = ["student", "assigned_by"]


class InternshipFacultyInline(admin.TabularInline):
    model = InternshipFaculty
    extra = 0
    raw_id_fields = ["faculty", "assigned_by"]


@admin.register(Internship)
class InternshipAdmin(admin.ModelAdmin):
    list_display = ["title", "host_institution", "category", "start_date", "is_approved", "is_complete"]
    list_filter = ["is_approved", "is_complete", "category", "assigned_department"]
    search_fields = ["title", "host_institution"]
    inlines = [InternshipStudentInline, InternshipFacultyInline]
    # Approval goes through the toggle endpoint so it gets an audit row
    readonly_fields = ["is_approved"]


@admin.register(ApprovalEvent)
class ApprovalEventAdmin(admin.ModelAdmin):
    list_display = ["internship", "is_approved", "actor", "created_at"]
    list_filter = ["is_approved"]


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ["title", "internship", "origin", "marks", "weightage", "deadline"]
    list_filter = ["origin"]
    search_fields = ["title", "internship__title"]


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ["student_name", "task", "grade", "submitted_at"]
    search_fields = ["student_name", "task__title"]
