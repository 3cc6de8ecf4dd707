from djoser.serializers import UserSerializer as BaseUserSerializer
from rest_framework import serializers
from .models import User
from profiles.models import StudentProfile, FacultyProfile

# 1. Serializers for nested Profile Data
class StudentProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = StudentProfile
        fields = ['registration_number', 'batch', 'section', 'current_semester', 'department', 'did_internship']

class FacultyProfileSerializer(serializers.ModelSerializer):
    class Meta:
        model = FacultyProfile
        fields = ['employee_id', 'designation', 'is_hod', 'department']

# 2. Serializer for Viewing Current User (GET /auth/users/me/)
class CurrentUserSerializer(BaseUserSerializer):
    profile = serializers.SerializerMethodField()

    class Meta(BaseUserSerializer.Meta):
        model = User
        fields = ('id', 'email', 'username', 'first_name', 'last_name', 'role', 'profile')

    def get_profile(self, obj):
        # Dynamically attach the correct profile data
        if obj.role == User.Role.STUDENT:
            try:
                return StudentProfileSerializer(obj.student_profile).data
            except StudentProfile.DoesNotExist:
                return None
        elif obj.role == User.Role.FACULTY:
            try:
                return FacultyProfileSerializer(obj.faculty_profile).data
            except FacultyProfile.DoesNotExist:
                return None
        return None
