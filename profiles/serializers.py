from rest_framework import serializers
from authentication.models import User
from profiles.models import StudentProfile, FacultyProfile


class BulkProfileUploadSerializer(serializers.Serializer):
    """
    Validates Excel upload for bulk student/faculty creation.
    """

    file = serializers.FileField()
    role = serializers.ChoiceField(choices=["STUDENT", "FACULTY"])

    def validate_file(self, value):
        if not value.name.endswith((".xlsx", ".xls", ".csv")):
            raise serializers.ValidationError("Invalid file type.")
        return value


class UserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "first_name",
            "last_name",
            "role",
            "phone_number",
        ]


class StudentProfileSerializer(serializers.ModelSerializer):
    """
    Used for listing/retrieving student profiles with nested user data.
    """

    user = UserSerializer(read_only=True)
    department = serializers.SlugRelatedField(slug_field="code", read_only=True)

    class Meta:
        model = StudentProfile
        fields = [
            "id",
            "registration_number",
            "batch",
            "section",
            "current_semester",
            "did_internship",
            "department",
            "user",
        ]


class FacultyProfileSerializer(serializers.ModelSerializer):
    """
    Used for listing/retrieving faculty profiles with nested user data.
    """

    user = UserSerializer(read_only=True)
    department = serializers.SlugRelatedField(slug_field="code", read_only=True)

    class Meta:
        model = FacultyProfile
        fields = ["id", "employee_id", "designation", "is_hod", "department", "user"]
