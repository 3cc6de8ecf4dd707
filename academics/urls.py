from django.urls import path
from .views import (
    DepartmentListAPIView,
    batch_summary_view,
    students_without_internship_view,
)

urlpatterns = [
    path('departments/', DepartmentListAPIView.as_view(), name="department-list"),

    # Per-batch internship completion
    path('departments/<int:pk>/batches/', batch_summary_view, name="department-batches"),

    # Students not placed in any internship yet
    path(
        'departments/<int:pk>/students-without-internship/',
        students_without_internship_view,
        name="students-without-internship",
    ),
]
