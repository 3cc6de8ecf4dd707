"""
Links students and faculty to internships.

Links live in join tables with a uniqueness constraint, so an assignment
is one guarded INSERT rather than a read-modify-write of a shared list.
Two clients assigning the same student at the same time end up with a
single row.
"""
import logging

from django.db import transaction, IntegrityError

from academics.services.batch_rollup import get_department
from internportal.exceptions import ConcurrencyError, NotFoundError
from internships.models import InternshipStudent, InternshipFaculty, Task
from profiles.models import StudentProfile, FacultyProfile

from .access import check_manager
from .lookups import get_internship, get_student, get_faculty

logger = logging.getLogger(__name__)


def _link(model, actor, **lookup):
    try:
        with transaction.atomic():
            return model.objects.get_or_create(defaults={"assigned_by": actor}, **lookup)
    except IntegrityError as exc:
        # get_or_create already retried the read; the row is still missing
        raise ConcurrencyError(f"Could not record assignment: {exc}")


def assign_student(internship_id, student_id, actor=None):
    """Returns (link, created). Assigning an already-assigned student is a no-op."""
    internship = get_internship(internship_id)
    check_manager(actor, internship)
    student = get_student(student_id)

    link, created = _link(InternshipStudent, actor, internship=internship, student=student)
    if created:
        logger.info("Student %s assigned to internship %s", student.pk, internship.pk)
    else:
        logger.debug("Student %s already assigned to internship %s", student.pk, internship.pk)
    return link, created


def assign_faculty(internship_id, faculty_id, actor=None):
    internship = get_internship(internship_id)
    check_manager(actor, internship)
    faculty = get_faculty(faculty_id)

    link, created = _link(InternshipFaculty, actor, internship=internship, faculty=faculty)
    if created:
        logger.info("Faculty %s assigned to internship %s", faculty.pk, internship.pk)
    return link, created


def unassign_student(internship_id, student_id, actor=None):
    """
    Removes the student from the internship and from every task issued
    against it, keeping tasks a subset of the internship's students.
    Existing submissions are kept.
    """
    internship = get_internship(internship_id)
    check_manager(actor, internship)
    student = get_student(student_id)

    with transaction.atomic():
        deleted, _ = InternshipStudent.objects.filter(internship=internship, student=student).delete()
        if not deleted:
            raise NotFoundError(f"Student {student.pk} is not assigned to internship {internship.pk}.")
        task_links, _ = Task.assigned_students.through.objects.filter(
            task__internship=internship, studentprofile=student
        ).delete()

    logger.info(
        "Student %s removed from internship %s (%d task assignments dropped)",
        student.pk, internship.pk, task_links,
    )


def list_assigned_students(internship_id):
    internship = get_internship(internship_id)
    return (
        StudentProfile.objects.filter(internship_links__internship=internship)
        .select_related("user", "department")
        .order_by("internship_links__assigned_at", "internship_links__id")
    )


def list_assigned_faculty(internship_id):
    internship = get_internship(internship_id)
    return (
        FacultyProfile.objects.filter(internship_links__internship=internship)
        .select_related("user", "department")
        .order_by("internship_links__assigned_at", "internship_links__id")
    )


def students_without_internship(department_id):
    """Students of the department that no internship has picked up yet."""
    department = get_department(department_id)
    return (
        StudentProfile.objects.filter(department=department, internship_links__isnull=True)
        .select_related("user", "department")
        .order_by("id")
    )
