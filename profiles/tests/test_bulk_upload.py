from io import BytesIO

import pandas as pd
from django.core.files.uploadedfile import SimpleUploadedFile
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from authentication.models import User
from internships.tests.factories import make_department, make_student, make_user
from profiles.models import FacultyProfile, StudentProfile

XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
HEADER = "Email,First Name,Last Name,Department,Registration Number,Batch,Section\n"
FACULTY_HEADER = "Email,First Name,Last Name,Department,Employee ID,Designation\n"


def roster(*lines, name="roster.csv", header=HEADER):
    content = header + "".join(line + "\n" for line in lines)
    return SimpleUploadedFile(name, content.encode("utf-8"), content_type="text/csv")


class BulkProfileUploadTests(APITestCase):
    def setUp(self):
        self.department = make_department(code="CSE")
        self.url = reverse("bulk-upload")
        self.client.force_authenticate(make_user(User.Role.ADMIN))

    def test_creates_students_and_returns_credentials(self):
        upload = roster(
            "asha@example.com,Asha,Rao,cse,21CS001,2021,A",
            "ravi@example.com,Ravi,Kumar,CSE,21CS002,2021,B",
        )

        response = self.client.post(self.url, {"file": upload, "role": "STUDENT"}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response["Content-Type"], XLSX)
        self.assertEqual(StudentProfile.objects.filter(department=self.department).count(), 2)

        credentials = pd.read_excel(BytesIO(response.content), sheet_name="Credentials", dtype=str)
        self.assertEqual(list(credentials["Username"]), ["21cs001", "21cs002"])

    def test_bad_rows_are_reported_without_blocking_good_ones(self):
        make_student(self.department, registration_number="21CS009")
        upload = roster(
            "new@example.com,New,Student,CSE,21CS010,2021,A",
            "dup@example.com,Dup,Student,CSE,21CS009,2021,A",
            "nodept@example.com,No,Dept,MECH,21ME001,2021,A",
        )

        response = self.client.post(self.url, {"file": upload, "role": "STUDENT"}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue(StudentProfile.objects.filter(registration_number="21CS010").exists())
        errors = pd.read_excel(BytesIO(response.content), sheet_name="Errors")
        self.assertEqual(len(errors), 2)

    def test_nothing_created_is_400(self):
        upload = roster("x@example.com,X,Y,MECH,21ME001,2021,A")

        response = self.client.post(self.url, {"file": upload, "role": "STUDENT"}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(len(response.data["errors"]), 1)

    def test_only_admins_upload(self):
        self.client.force_authenticate(make_user(User.Role.FACULTY))
        response = self.client.post(
            self.url, {"file": roster(), "role": "STUDENT"}, format="multipart"
        )
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_faculty_designations_are_validated(self):
        upload = roster(
            "meera@example.com,Meera,Iyer,CSE,EMP100,Professor",
            "john@example.com,John,Paul,CSE,EMP101,LECTURER",
            "anil@example.com,Anil,Das,CSE,EMP102,",
            "dean@example.com,Dean,Roy,CSE,EMP103,Dean of Magic",
            header=FACULTY_HEADER,
        )

        response = self.client.post(self.url, {"file": upload, "role": "FACULTY"}, format="multipart")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        designations = dict(FacultyProfile.objects.values_list("employee_id", "designation"))
        self.assertEqual(
            designations,
            {
                "EMP100": FacultyProfile.Designation.PROFESSOR,
                "EMP101": FacultyProfile.Designation.LECTURER,
                "EMP102": FacultyProfile.Designation.ASST_PROF,
            },
        )
        errors = pd.read_excel(BytesIO(response.content), sheet_name="Errors")
        self.assertEqual(list(errors["Errors"]), ["Row 5: Unknown designation 'Dean of Magic'"])
