"""
Tasks issued against an internship by its two supervising sides.

Faculty-issued and industry-issued tasks share one model and one code
path; `origin` tells them apart. A task only ever targets students that
are assigned to its internship: whatever the caller asks for is
intersected with the internship roster before it is stored.
"""
import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction
from django.db.models import Max
from rest_framework.exceptions import PermissionDenied

from authentication.models import User
from internportal.exceptions import ValidationError
from internships.models import Task

from .lookups import get_internship, get_student, get_task

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "deadline", "marks", "weightage", "assigned_students")


def validate_origin(origin):
    if origin not in Task.Origin.values:
        raise ValidationError(
            f"Unknown task origin '{origin}'. Expected one of: {', '.join(Task.Origin.values)}."
        )
    return origin


def _require(value, field):
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required.")


def to_decimal(value, field):
    try:
        return Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f"{field} must be a number.")


def _validate_marks(marks):
    marks = to_decimal(marks, "marks")
    if marks <= 0:
        raise ValidationError("marks must be greater than zero.")
    return marks


def _validate_weightage(weightage):
    weightage = to_decimal(weightage, "weightage")
    if weightage < 0 or weightage > 100:
        raise ValidationError("weightage must be a percentage between 0 and 100.")
    return weightage


def check_issuer(actor, internship, origin):
    """
    Faculty tasks come from faculty assigned to the internship; industry
    tasks come from the internship's industry supervisor. Admins and
    internal calls (actor=None) are not restricted.
    """
    if actor is None or actor.role == User.Role.ADMIN:
        return

    if origin == Task.Origin.FACULTY:
        allowed = (
            actor.role == User.Role.FACULTY
            and internship.faculty_links.filter(faculty__user=actor).exists()
        )
        if not allowed:
            raise PermissionDenied("Only faculty assigned to this internship can manage its faculty tasks.")
    else:
        allowed = actor.role == User.Role.INDUSTRY and internship.industry_supervisor_id == actor.pk
        if not allowed:
            raise PermissionDenied("Only the internship's industry supervisor can manage its industry tasks.")


def restrict_to_internship(internship, student_ids):
    """Keeps only the ids that are assigned to the internship."""
    requested = {int(pk) for pk in (student_ids or [])}
    if not requested:
        return set()

    allowed = set(
        internship.student_links.filter(student_id__in=requested).values_list("student_id", flat=True)
    )
    dropped = requested - allowed
    if dropped:
        logger.info(
            "Ignoring students %s: not assigned to internship %s",
            sorted(dropped), internship.pk,
        )
    return allowed


def create_task(internship_id, origin, title, description, deadline, marks, weightage,
                assigned_students=(), actor=None):
    validate_origin(origin)
    _require(title, "title")
    _require(description, "description")
    _require(deadline, "deadline")
    marks = _validate_marks(marks)
    weightage = _validate_weightage(weightage)

    internship = get_internship(internship_id)
    check_issuer(actor, internship, origin)

    targets = restrict_to_internship(internship, assigned_students)

    with transaction.atomic():
        task = Task.objects.create(
            internship=internship,
            origin=origin,
            title=title.strip(),
            description=description,
            deadline=deadline,
            marks=marks,
            weightage=weightage,
            created_by=actor,
        )
        task.assigned_students.set(targets)

    logger.info(
        "%s task %s '%s' created on internship %s for %d students",
        origin.title(), task.pk, task.title, internship.pk, len(targets),
    )
    return task


def update_task(task_id, actor=None, **changes):
    """
    Edits a task in place. Origin and issuer stay fixed; marks can't drop
    below a grade that has already been awarded.
    """
    unknown = set(changes) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValidationError(f"Cannot change {', '.join(sorted(unknown))} on an existing task.")

    task = get_task(task_id)
    check_issuer(actor, task.internship, task.origin)

    for field in ("title", "description", "deadline"):
        if field in changes:
            _require(changes[field], field)
            value = changes[field]
            setattr(task, field, value.strip() if field == "title" else value)

    if "marks" in changes:
        marks = _validate_marks(changes["marks"])
        highest = task.submissions.aggregate(highest=Max("grade"))["highest"]
        if highest is not None and highest > marks:
            raise ValidationError(f"marks cannot drop below an awarded grade of {highest}.")
        task.marks = marks

    if "weightage" in changes:
        task.weightage = _validate_weightage(changes["weightage"])

    with transaction.atomic():
        task.save()
        if "assigned_students" in changes:
            task.assigned_students.set(restrict_to_internship(task.internship, changes["assigned_students"]))

    logger.info("Task %s updated (%s)", task.pk, ", ".join(sorted(changes)) or "no changes")
    return task


def list_tasks(internship_id, origin):
    """Tasks of one origin, oldest first."""
    validate_origin(origin)
    internship = get_internship(internship_id)
    return (
        Task.objects.filter(internship=internship, origin=origin)
        .prefetch_related("assigned_students")
        .order_by("created_at", "id")
    )


def list_tasks_for_student(internship_id, student_id):
    """
    What a student sees: tasks of both origins that target them,
    interleaved by creation time.
    """
    internship = get_internship(internship_id)
    student = get_student(student_id)
    return (
        Task.objects.filter(internship=internship, assigned_students=student)
        .prefetch_related("assigned_students")
        .order_by("created_at", "id")
    )
