from rest_framework import status
from rest_framework.test import APITestCase

from authentication.models import User
from internships.tests.factories import make_department, make_faculty, make_student, make_user


class CurrentUserTests(APITestCase):
    url = "/auth/users/me/"

    def test_student_sees_profile(self):
        student = make_student(make_department(code="IT"), batch="2022", section="C")
        self.client.force_authenticate(student.user)

        response = self.client.get(self.url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["role"], User.Role.STUDENT)
        self.assertEqual(response.data["profile"]["batch"], "2022")
        self.assertFalse(response.data["profile"]["did_internship"])

    def test_faculty_sees_profile(self):
        faculty = make_faculty()
        self.client.force_authenticate(faculty.user)

        response = self.client.get(self.url)

        self.assertEqual(response.data["profile"]["employee_id"], faculty.employee_id)

    def test_enterprise_cell_has_no_profile(self):
        self.client.force_authenticate(make_user(User.Role.ENTERPRISE_CELL))
        self.assertIsNone(self.client.get(self.url).data["profile"])

    def test_anonymous_is_rejected(self):
        self.assertEqual(self.client.get(self.url).status_code, status.HTTP_401_UNAUTHORIZED)
