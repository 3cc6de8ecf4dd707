from django.urls import path
from .views import StudentListView, FacultyListView, BulkProfileUploadView

urlpatterns = [
    path('students/', StudentListView.as_view(), name='student-list'),
    path('faculty/', FacultyListView.as_view(), name='faculty-list'),

    # Upload Excel/CSV file to create users
    path('bulk-upload/', BulkProfileUploadView.as_view(), name='bulk-upload'),
]
