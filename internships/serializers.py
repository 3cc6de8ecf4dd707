from rest_framework import serializers

from authentication.models import User
from internships.models import Internship, Task, Submission, ApprovalEvent


class InternshipSerializer(serializers.ModelSerializer):
    approval_state = serializers.CharField(read_only=True)
    created_by = serializers.StringRelatedField(read_only=True)
    student_count = serializers.SerializerMethodField()

    class Meta:
        model = Internship
        fields = [
            "id",
            "title",
            "host_institution",
            "location",
            "category",
            "description",
            "start_date",
            "end_date",
            "assigned_department",
            "industry_supervisor",
            "is_approved",
            "approval_state",
            "is_complete",
            "student_count",
            "created_by",
            "created_at",
        ]
        read_only_fields = ["is_approved", "is_complete", "created_at"]

    def get_student_count(self, obj):
        return obj.student_links.count()

    def validate_industry_supervisor(self, value):
        if value is not None and value.role != User.Role.INDUSTRY:
            raise serializers.ValidationError("Industry supervisor must have the Industry Supervisor role.")
        return value

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end < start:
            raise serializers.ValidationError({"end_date": "End date cannot be before the start date."})
        return attrs


class AssignStudentSerializer(serializers.Serializer):
    student_id = serializers.IntegerField()


class AssignFacultySerializer(serializers.Serializer):
    faculty_id = serializers.IntegerField()


class ToggleApprovalSerializer(serializers.Serializer):
    comment = serializers.CharField(required=False, allow_blank=True, default="")


class ApprovalEventSerializer(serializers.ModelSerializer):
    actor = serializers.StringRelatedField(read_only=True)

    class Meta:
        model = ApprovalEvent
        fields = ["id", "actor", "is_approved", "comment", "created_at"]


class TaskSerializer(serializers.ModelSerializer):
    """
    Used for both reading and writing tasks. Writes go through the task
    ledger, which owns origin/issuer and the roster intersection.
    """

    assigned_students = serializers.ListField(
        child=serializers.IntegerField(), required=False, write_only=True
    )
    students = serializers.SerializerMethodField()

    class Meta:
        model = Task
        fields = [
            "id",
            "internship",
            "origin",
            "title",
            "description",
            "deadline",
            "marks",
            "weightage",
            "assigned_students",
            "students",
            "created_by",
            "created_at",
        ]
        read_only_fields = ["internship", "origin", "created_by", "created_at"]

    def get_students(self, obj):
        return [student.pk for student in obj.assigned_students.all()]


class SubmissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Submission
        fields = [
            "id",
            "task",
            "student",
            "student_name",
            "file_url",
            "grade",
            "submitted_at",
            "graded_at",
        ]
        read_only_fields = fields


class SubmitSerializer(serializers.Serializer):
    file_url = serializers.CharField(max_length=500)
    student_name = serializers.CharField(max_length=255, required=False, allow_blank=True)


class GradeSerializer(serializers.Serializer):
    grade = serializers.DecimalField(max_digits=7, decimal_places=2)


class InvolvementRowSerializer(serializers.Serializer):
    task_id = serializers.IntegerField()
    task_title = serializers.CharField()
    origin = serializers.CharField()
    total_marks = serializers.FloatField()
    obtained_marks = serializers.SerializerMethodField()
    submitted = serializers.BooleanField()

    def get_obtained_marks(self, row):
        # Numeric grade, or the "Not Submitted" marker as-is
        if isinstance(row.obtained_marks, str):
            return row.obtained_marks
        return float(row.obtained_marks)


class BatchReportRequestSerializer(serializers.Serializer):
    student_ids = serializers.ListField(child=serializers.IntegerField(), required=False, default=list)
    strict = serializers.BooleanField(required=False, default=False)
