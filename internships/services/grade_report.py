"""
Involvement (grade) reports.

A report lists, for one student on one internship, every task of either
origin that targets the student, in task creation order, with the task's
total marks next to the marks the student obtained. Nothing is dropped:
a task without a graded submission still yields a row.

The batched variant resolves the whole roster with a fixed number of
queries and correlates submissions by (task_id, student_id), so the row
order never depends on the order rows come back from the database.
"""
import logging
from collections import defaultdict
from dataclasses import dataclass, field

from internportal.exceptions import PartialAggregationFailure
from internships.models import Submission, Task
from profiles.models import StudentProfile

from .lookups import get_internship, get_student
from .task_ledger import list_tasks_for_student

logger = logging.getLogger(__name__)

NOT_SUBMITTED = "Not Submitted"


@dataclass(frozen=True)
class InvolvementRow:
    task_id: int
    task_title: str
    origin: str
    total_marks: object
    obtained_marks: object
    submitted: bool


@dataclass
class InvolvementBatch:
    internship_id: int
    succeeded: dict = field(default_factory=dict)
    failed: dict = field(default_factory=dict)

    @property
    def is_partial(self):
        return bool(self.failed)

    def raise_for_failures(self):
        if self.failed:
            raise PartialAggregationFailure(self.failed)
        return self


def latest_submissions(submissions):
    """
    Picks one submission per (task_id, student_id). When a pair has more
    than one row the latest submitted_at wins, then the highest pk.
    """
    latest = {}
    for submission in submissions:
        key = (submission.task_id, submission.student_id)
        current = latest.get(key)
        if current is None or (submission.submitted_at, submission.pk) > (current.submitted_at, current.pk):
            latest[key] = submission
    return latest


def _row(task, submission):
    if submission is None:
        obtained, submitted = NOT_SUBMITTED, False
    else:
        obtained = submission.grade if submission.grade is not None else NOT_SUBMITTED
        submitted = True
    return InvolvementRow(
        task_id=task.pk,
        task_title=task.title,
        origin=task.origin,
        total_marks=task.marks,
        obtained_marks=obtained,
        submitted=submitted,
    )


def build_involvement_report(internship_id, student_id):
    # Both lookups run before any row is built so a bad id never yields a partial list
    internship = get_internship(internship_id)
    student = get_student(student_id)

    tasks = list(list_tasks_for_student(internship.pk, student.pk))
    submissions = latest_submissions(
        Submission.objects.filter(task__in=tasks, student=student)
    )

    rows = [_row(task, submissions.get((task.pk, student.pk))) for task in tasks]
    logger.debug(
        "Involvement report for student %s on internship %s: %d rows",
        student.pk, internship.pk, len(rows),
    )
    return rows


def build_involvement_reports(internship_id, student_ids=None):
    """
    Reports for several students on one internship. Unknown or unassigned
    students land in `failed` with a reason instead of being skipped. An
    empty `student_ids` means every student assigned to the internship.
    """
    internship = get_internship(internship_id)
    batch = InvolvementBatch(internship_id=internship.pk)

    if student_ids:
        requested = []
        for raw in dict.fromkeys(student_ids):
            try:
                requested.append(int(raw))
            except (TypeError, ValueError):
                batch.failed[raw] = f"'{raw}' is not a valid student id."
        requested = list(dict.fromkeys(requested))
    else:
        requested = list(
            internship.student_links.order_by("assigned_at", "id").values_list("student_id", flat=True)
        )

    students = StudentProfile.objects.in_bulk(requested)
    assigned = set(internship.student_links.values_list("student_id", flat=True))

    tasks = list(
        Task.objects.filter(internship=internship)
        .prefetch_related("assigned_students")
        .order_by("created_at", "id")
    )
    targets = {task.pk: {student.pk for student in task.assigned_students.all()} for task in tasks}

    submissions = latest_submissions(
        Submission.objects.filter(task__internship=internship, student_id__in=list(students))
    )

    tasks_by_student = defaultdict(list)
    for task in tasks:
        for pk in targets[task.pk]:
            tasks_by_student[pk].append(task)

    for student_id in requested:
        student = students.get(student_id)
        if student is None:
            batch.failed[student_id] = f"Student {student_id} not found."
            continue
        if student.pk not in assigned:
            batch.failed[student_id] = f"Student {student.pk} is not assigned to internship {internship.pk}."
            continue
        batch.succeeded[student.pk] = [
            _row(task, submissions.get((task.pk, student.pk)))
            for task in tasks_by_student[student.pk]
        ]

    if batch.failed:
        logger.warning(
            "Batched report for internship %s: %d succeeded, %d failed",
            internship.pk, len(batch.succeeded), len(batch.failed),
        )
    return batch
