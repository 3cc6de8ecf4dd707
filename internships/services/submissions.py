import logging

from django.db import transaction, IntegrityError
from django.utils import timezone

from internportal.exceptions import ConcurrencyError, NotFoundError, ValidationError
from internships.models import Submission

from .lookups import get_student, get_task
from .task_ledger import check_issuer, to_decimal

logger = logging.getLogger(__name__)


def get_submission(submission_id):
    try:
        return Submission.objects.select_related("task__internship", "student").get(pk=submission_id)
    except Submission.DoesNotExist:
        raise NotFoundError(f"Submission {submission_id} not found.")


def submit(task_id, student_id, student_name, file_ref):
    """
    Records a student's artifact for a task. One row per (task, student):
    a resubmission replaces the file reference, refreshes the timestamp and
    clears any grade. Returns (submission, created).
    """
    task = get_task(task_id)
    student = get_student(student_id)

    if not file_ref or not str(file_ref).strip():
        raise ValidationError("A file reference is required.")
    if not task.assigned_students.filter(pk=student.pk).exists():
        raise ValidationError(f"Student {student.pk} is not assigned to task {task.pk}.")

    name = (student_name or "").strip() or student.full_name

    try:
        with transaction.atomic():
            submission, created = Submission.objects.update_or_create(
                task=task,
                student=student,
                defaults={
                    "student_name": name,
                    "file_url": str(file_ref).strip(),
                    "submitted_at": timezone.now(),
                    "grade": None,
                    "graded_at": None,
                    "graded_by": None,
                },
            )
    except IntegrityError as exc:
        raise ConcurrencyError(f"Could not record submission: {exc}")

    logger.info(
        "%s submission %s for task %s by student %s",
        "New" if created else "Replaced", submission.pk, task.pk, student.pk,
    )
    return submission, created


def grade(submission_id, grade, actor=None):
    """Awards a grade within [0, task.marks]. Only the task's issuing side may grade."""
    submission = get_submission(submission_id)
    task = submission.task

    value = to_decimal(grade, "grade")
    if value < 0 or value > task.marks:
        raise ValidationError(f"Grade must be between 0 and {task.marks}.")

    check_issuer(actor, task.internship, task.origin)

    submission.grade = value
    submission.graded_at = timezone.now()
    submission.graded_by = actor
    submission.save(update_fields=["grade", "graded_at", "graded_by"])

    logger.info("Submission %s graded %s/%s", submission.pk, value, task.marks)
    return submission


def list_submissions(task_id):
    task = get_task(task_id)
    return (
        Submission.objects.filter(task=task)
        .select_related("student__user")
        .order_by("-submitted_at", "-id")
    )
