from internportal.exceptions import NotFoundError
from internships.models import Internship, Task
from profiles.models import StudentProfile, FacultyProfile


def get_internship(internship_id):
    try:
        return Internship.objects.get(pk=internship_id)
    except Internship.DoesNotExist:
        raise NotFoundError(f"Internship {internship_id} not found.")


def get_student(student_id):
    try:
        return StudentProfile.objects.select_related("user").get(pk=student_id)
    except StudentProfile.DoesNotExist:
        raise NotFoundError(f"Student {student_id} not found.")


def get_faculty(faculty_id):
    try:
        return FacultyProfile.objects.select_related("user").get(pk=faculty_id)
    except FacultyProfile.DoesNotExist:
        raise NotFoundError(f"Faculty {faculty_id} not found.")


def get_task(task_id):
    try:
        return Task.objects.select_related("internship").get(pk=task_id)
    except Task.DoesNotExist:
        raise NotFoundError(f"Task {task_id} not found.")
