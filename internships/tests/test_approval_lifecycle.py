from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework.exceptions import PermissionDenied

from authentication.models import User
from internportal.exceptions import ConflictError, NotFoundError
from internships.models import Internship
from internships.services import approval, lifecycle

from .factories import make_internship, make_student, make_task, make_user, link_student


class ToggleApprovalTests(TestCase):
    def setUp(self):
        self.internship = make_internship()
        self.cell = make_user(User.Role.ENTERPRISE_CELL)

    def test_two_toggles_restore_the_original_state(self):
        first = approval.toggle_approval(self.internship.pk, actor=self.cell)
        self.assertTrue(first.is_approved)
        self.assertEqual(first.approval_state, "APPROVED")

        second = approval.toggle_approval(self.internship.pk, actor=self.cell)
        self.assertFalse(second.is_approved)
        self.assertFalse(Internship.objects.get(pk=self.internship.pk).is_approved)

    def test_each_flip_is_recorded(self):
        approval.toggle_approval(self.internship.pk, actor=self.cell, comment="Paperwork received")
        approval.toggle_approval(self.internship.pk, actor=self.cell)

        history = list(approval.approval_history(self.internship.pk))

        self.assertEqual([event.is_approved for event in history], [False, True])
        self.assertEqual(history[1].comment, "Paperwork received")
        self.assertEqual(history[0].actor, self.cell)

    def test_toggle_bumps_updated_at(self):
        stale = timezone.now() - timedelta(days=3)
        Internship.objects.filter(pk=self.internship.pk).update(updated_at=stale)

        toggled = approval.toggle_approval(self.internship.pk, actor=self.cell)

        self.assertGreater(toggled.updated_at, stale)
        self.assertEqual(Internship.objects.get(pk=self.internship.pk).updated_at, toggled.updated_at)

    def test_unknown_internship(self):
        with self.assertRaises(NotFoundError):
            approval.toggle_approval(999999)


class MarkCompleteTests(TestCase):
    def test_assigned_students_are_credited(self):
        internship = make_internship()
        placed = [make_student(), make_student()]
        for student in placed:
            link_student(internship, student)
        bystander = make_student()

        lifecycle.mark_complete(internship.pk)
        lifecycle.mark_complete(internship.pk)

        internship.refresh_from_db()
        self.assertTrue(internship.is_complete)
        for student in placed:
            student.refresh_from_db()
            self.assertTrue(student.did_internship)
        bystander.refresh_from_db()
        self.assertFalse(bystander.did_internship)


class DeleteInternshipTests(TestCase):
    def test_internship_with_tasks_cannot_be_deleted(self):
        internship = make_internship()
        make_task(internship)

        with self.assertRaises(ConflictError):
            lifecycle.delete_internship(internship.pk)
        self.assertTrue(Internship.objects.filter(pk=internship.pk).exists())

    def test_internship_without_tasks_is_deleted(self):
        internship = make_internship()
        link_student(internship, make_student())

        lifecycle.delete_internship(internship.pk)

        self.assertFalse(Internship.objects.filter(pk=internship.pk).exists())


class ManagerCheckTests(TestCase):
    def setUp(self):
        self.owner = make_user(User.Role.INDUSTRY)
        self.internship = make_internship(industry_supervisor=self.owner)
        self.student = make_student()
        link_student(self.internship, self.student)

    def test_unrelated_industry_user_cannot_complete_or_delete(self):
        outsider = make_user(User.Role.INDUSTRY)

        with self.assertRaises(PermissionDenied):
            lifecycle.mark_complete(self.internship.pk, actor=outsider)
        with self.assertRaises(PermissionDenied):
            lifecycle.delete_internship(self.internship.pk, actor=outsider)

        self.student.refresh_from_db()
        self.assertFalse(self.student.did_internship)
        self.assertTrue(Internship.objects.filter(pk=self.internship.pk).exists())

    def test_supervisor_completes(self):
        lifecycle.mark_complete(self.internship.pk, actor=self.owner)
        self.student.refresh_from_db()
        self.assertTrue(self.student.did_internship)
