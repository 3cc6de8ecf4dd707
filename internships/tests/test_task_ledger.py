import datetime
from decimal import Decimal

from django.test import TestCase
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from authentication.models import User
from internportal.exceptions import NotFoundError, ValidationError
from internships.models import Submission, Task
from internships.services import task_ledger

from .factories import (
    make_faculty,
    make_internship,
    make_student,
    make_task,
    make_user,
    link_faculty,
    link_student,
)


def task_fields(**overrides):
    fields = {
        "title": "Weekly report",
        "description": "Summarise the week",
        "deadline": timezone.now() + datetime.timedelta(days=3),
        "marks": 20,
        "weightage": 10,
    }
    fields.update(overrides)
    return fields


class CreateTaskTests(TestCase):
    def setUp(self):
        self.supervisor = make_user(User.Role.INDUSTRY)
        self.internship = make_internship(industry_supervisor=self.supervisor)
        self.faculty = make_faculty()
        link_faculty(self.internship, self.faculty)
        self.assigned = [make_student(), make_student()]
        for student in self.assigned:
            link_student(self.internship, student)
        self.outsider = make_student()

    def test_targets_are_restricted_to_the_internship_roster(self):
        requested = [s.pk for s in self.assigned] + [self.outsider.pk]
        task = task_ledger.create_task(
            self.internship.pk, Task.Origin.FACULTY, assigned_students=requested,
            actor=self.faculty.user, **task_fields()
        )

        targets = set(task.assigned_students.values_list("pk", flat=True))
        roster = set(self.internship.student_links.values_list("student_id", flat=True))
        self.assertEqual(targets, {s.pk for s in self.assigned})
        self.assertTrue(targets <= roster)

    def test_issuer_is_recorded(self):
        task = task_ledger.create_task(
            self.internship.pk, Task.Origin.INDUSTRY, actor=self.supervisor, **task_fields()
        )
        self.assertEqual(task.created_by, self.supervisor)
        self.assertEqual(task.origin, Task.Origin.INDUSTRY)

    def test_missing_fields_are_rejected(self):
        for field in ("title", "description", "deadline"):
            with self.subTest(field=field):
                with self.assertRaises(ValidationError):
                    task_ledger.create_task(
                        self.internship.pk, Task.Origin.FACULTY, **task_fields(**{field: None})
                    )
        self.assertFalse(Task.objects.exists())

    def test_marks_and_weightage_ranges(self):
        with self.assertRaises(ValidationError):
            task_ledger.create_task(self.internship.pk, Task.Origin.FACULTY, **task_fields(marks=0))
        with self.assertRaises(ValidationError):
            task_ledger.create_task(self.internship.pk, Task.Origin.FACULTY, **task_fields(weightage=120))
        with self.assertRaises(ValidationError):
            task_ledger.create_task(self.internship.pk, Task.Origin.FACULTY, **task_fields(marks="lots"))

    def test_unknown_origin(self):
        with self.assertRaises(ValidationError):
            task_ledger.create_task(self.internship.pk, "mentor", **task_fields())

    def test_unknown_internship(self):
        with self.assertRaises(NotFoundError):
            task_ledger.create_task(999999, Task.Origin.FACULTY, **task_fields())

    def test_unassigned_faculty_cannot_issue(self):
        stranger = make_faculty()
        with self.assertRaises(PermissionDenied):
            task_ledger.create_task(
                self.internship.pk, Task.Origin.FACULTY, actor=stranger.user, **task_fields()
            )

    def test_faculty_cannot_issue_industry_tasks(self):
        with self.assertRaises(PermissionDenied):
            task_ledger.create_task(
                self.internship.pk, Task.Origin.INDUSTRY, actor=self.faculty.user, **task_fields()
            )

    def test_other_industry_user_cannot_issue(self):
        with self.assertRaises(PermissionDenied):
            task_ledger.create_task(
                self.internship.pk, Task.Origin.INDUSTRY, actor=make_user(User.Role.INDUSTRY),
                **task_fields()
            )

    def test_admin_can_issue_either_origin(self):
        admin = make_user(User.Role.ADMIN)
        for origin in Task.Origin.values:
            task_ledger.create_task(self.internship.pk, origin, actor=admin, **task_fields())
        self.assertEqual(self.internship.tasks.count(), 2)


class UpdateTaskTests(TestCase):
    def setUp(self):
        self.internship = make_internship()
        self.student = make_student()
        link_student(self.internship, self.student)
        self.task = make_task(self.internship, marks=50, students=[self.student])

    def test_marks_cannot_drop_below_an_awarded_grade(self):
        Submission.objects.create(
            task=self.task, student=self.student, student_name="S", file_url="f.pdf", grade=45
        )
        with self.assertRaises(ValidationError):
            task_ledger.update_task(self.task.pk, marks=40)

        task = task_ledger.update_task(self.task.pk, marks=45)
        self.assertEqual(task.marks, Decimal("45"))

    def test_title_is_stripped(self):
        task_ledger.update_task(self.task.pk, title="  Renamed  ")
        self.task.refresh_from_db()
        self.assertEqual(self.task.title, "Renamed")

        with self.assertRaises(ValidationError):
            task_ledger.update_task(self.task.pk, title="   ")

    def test_origin_is_fixed(self):
        with self.assertRaises(ValidationError):
            task_ledger.update_task(self.task.pk, origin=Task.Origin.INDUSTRY)

    def test_reassignment_is_restricted_to_roster(self):
        outsider = make_student()
        task = task_ledger.update_task(self.task.pk, assigned_students=[outsider.pk])
        self.assertEqual(task.assigned_students.count(), 0)

    def test_unknown_task(self):
        with self.assertRaises(NotFoundError):
            task_ledger.update_task(999999, title="New")


class ListTaskTests(TestCase):
    def setUp(self):
        self.internship = make_internship()
        self.student = make_student()
        self.other = make_student()
        link_student(self.internship, self.student)
        link_student(self.internship, self.other)

    def test_list_by_origin_in_creation_order(self):
        first = make_task(self.internship, Task.Origin.FACULTY)
        make_task(self.internship, Task.Origin.INDUSTRY)
        second = make_task(self.internship, Task.Origin.FACULTY)

        self.assertEqual(list(task_ledger.list_tasks(self.internship.pk, Task.Origin.FACULTY)), [first, second])

    def test_list_for_student_mixes_origins_and_skips_untargeted(self):
        t1 = make_task(self.internship, Task.Origin.FACULTY, students=[self.student])
        make_task(self.internship, Task.Origin.FACULTY, students=[self.other])
        t3 = make_task(self.internship, Task.Origin.INDUSTRY, students=[self.student, self.other])

        self.assertEqual(
            list(task_ledger.list_tasks_for_student(self.internship.pk, self.student.pk)), [t1, t3]
        )

    def test_list_for_unknown_student(self):
        with self.assertRaises(NotFoundError):
            task_ledger.list_tasks_for_student(self.internship.pk, 999999)
