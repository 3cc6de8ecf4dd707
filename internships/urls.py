from django.urls import path
from .views import (
    InternshipListCreateView,
    InternshipDetailView,
    InternshipStudentsView,
    InternshipFacultyView,
    InternshipTasksView,
    TaskDetailView,
    TaskSubmissionsView,
    unassign_student_view,
    toggle_approval_view,
    approval_history_view,
    complete_internship_view,
    student_tasks_view,
    my_tasks_view,
    grade_submission_view,
    grade_report_view,
    grade_reports_view,
)

urlpatterns = [
    path('', InternshipListCreateView.as_view(), name='internship-list'),
    path('<int:pk>/', InternshipDetailView.as_view(), name='internship-detail'),

    # Assignment
    path('<int:pk>/students/', InternshipStudentsView.as_view(), name='internship-students'),
    path('<int:pk>/students/<int:student_id>/', unassign_student_view, name='internship-unassign-student'),
    path('<int:pk>/faculty/', InternshipFacultyView.as_view(), name='internship-faculty'),

    # Enterprise cell sign-off and closing
    path('<int:pk>/toggle-approval/', toggle_approval_view, name='internship-toggle-approval'),
    path('<int:pk>/approval-history/', approval_history_view, name='internship-approval-history'),
    path('<int:pk>/complete/', complete_internship_view, name='internship-complete'),

    # Tasks (origin is "faculty" or "industry")
    path('<int:pk>/tasks/<str:origin>/', InternshipTasksView.as_view(), name='internship-tasks'),
    path('<int:pk>/students/<int:student_id>/tasks/', student_tasks_view, name='internship-student-tasks'),
    path('<int:pk>/my-tasks/', my_tasks_view, name='internship-my-tasks'),
    path('tasks/<int:task_id>/', TaskDetailView.as_view(), name='task-detail'),

    # Submissions
    path('tasks/<int:task_id>/submissions/', TaskSubmissionsView.as_view(), name='task-submissions'),
    path('submissions/<int:submission_id>/grade/', grade_submission_view, name='submission-grade'),

    # Reports
    path('<int:pk>/grade-report/<int:student_id>/', grade_report_view, name='internship-grade-report'),
    path('<int:pk>/grade-reports/', grade_reports_view, name='internship-grade-reports'),
]
