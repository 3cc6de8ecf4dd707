from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from academics.services.batch_rollup import summarize_batches
from authentication.models import User
from internportal.exceptions import NotFoundError
from internships.tests.factories import make_department, make_student, make_user


class SummarizeBatchesTests(TestCase):
    def setUp(self):
        self.department = make_department(code="CSE")
        make_student(self.department, batch="2022", section="A", did_internship=True)
        make_student(self.department, batch="2021", section="A")
        make_student(self.department, batch="2022", section="B")
        make_student(self.department, batch="2022", section="B", did_internship=True)
        make_student(self.department, batch="2021", section="A", did_internship=True)
        make_student(make_department(), batch="2022", section="C")

    def test_counts_per_batch(self):
        summaries = {s.batch: s for s in summarize_batches(self.department.pk)}

        self.assertEqual(summaries["2022"].total, 3)
        self.assertEqual(summaries["2022"].did_internship, 2)
        self.assertEqual(summaries["2022"].missing_internship, 1)
        self.assertEqual(summaries["2022"].total_sections, 2)
        self.assertEqual(summaries["2021"].total_sections, 1)

    def test_missing_plus_done_equals_total(self):
        for summary in summarize_batches(self.department.pk):
            self.assertEqual(summary.did_internship + summary.missing_internship, summary.total)

    def test_batches_in_roster_order(self):
        self.assertEqual([s.batch for s in summarize_batches(self.department.pk)], ["2022", "2021"])

    def test_empty_department(self):
        self.assertEqual(summarize_batches(make_department().pk), [])

    def test_unknown_department(self):
        with self.assertRaises(NotFoundError):
            summarize_batches(999999)


class DepartmentEndpointTests(APITestCase):
    def setUp(self):
        self.department = make_department(code="ECE")
        make_student(self.department, batch="2023", section="A")
        self.client.force_authenticate(make_user(User.Role.FACULTY))

    def test_batch_summary(self):
        response = self.client.get(reverse("department-batches", args=[self.department.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(
            response.data,
            [{"batch": "2023", "total": 1, "did_internship": 0, "missing_internship": 1, "total_sections": 1}],
        )

    def test_unknown_department_is_404(self):
        response = self.client.get(reverse("department-batches", args=[999999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_students_without_internship(self):
        response = self.client.get(reverse("students-without-internship", args=[self.department.pk]))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_students_are_denied(self):
        self.client.force_authenticate(make_user(User.Role.STUDENT))
        response = self.client.get(reverse("department-batches", args=[self.department.pk]))
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
