from rest_framework import serializers
from academics.models import Department


class DepartmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Department
        fields = ['id', 'name', 'code']


class BatchSummarySerializer(serializers.Serializer):
    batch = serializers.CharField()
    total = serializers.IntegerField()
    did_internship = serializers.IntegerField()
    missing_internship = serializers.IntegerField()
    total_sections = serializers.IntegerField()
