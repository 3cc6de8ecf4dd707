# profiles/views/__init__.py
# Re-export all views so imports like `from profiles.views import StudentListView` work.

from profiles.views.student import (
    StudentListView,
    FacultyListView,
)

from profiles.views.bulk import (
    BulkProfileUploadView,
)
