import logging
import secrets
import string
from io import BytesIO

import pandas as pd
from django.db import transaction, IntegrityError
from django.http import HttpResponse
from rest_framework.generics import GenericAPIView
from rest_framework.response import Response
from rest_framework.permissions import IsAuthenticated
from rest_framework.parsers import MultiPartParser, FormParser

# Models
from authentication.models import User
from profiles.models import StudentProfile, FacultyProfile
from academics.models import Department

# Permissions
from authentication.permissions import IsInstitutionAdmin

# Serializers
from profiles.serializers import BulkProfileUploadSerializer

logger = logging.getLogger(__name__)


def _cell(row, column, default=""):
    value = row.get(column, default)
    if pd.isna(value):
        return default
    return str(value).strip()


def _designation(value):
    """Matches a designation by code or label; blank means Assistant Professor."""
    if not value:
        return FacultyProfile.Designation.ASST_PROF
    wanted = value.strip().lower()
    for code, label in FacultyProfile.Designation.choices:
        if wanted in (code.lower(), label.lower()):
            return code
    return None


class BulkProfileUploadView(GenericAPIView):
    """
    Accepts a CSV/Excel roster and creates User + StudentProfile/FacultyProfile
    records in bulk. Returns an Excel file with generated credentials.

    Student columns: Email, First Name, Last Name, Department (code),
    Registration Number, Batch, Section.
    Faculty columns: Email, First Name, Last Name, Department (code),
    Employee ID, Designation.
    """

    serializer_class = BulkProfileUploadSerializer
    parser_classes = [MultiPartParser, FormParser]
    permission_classes = [IsAuthenticated, IsInstitutionAdmin]

    def generate_random_password(self, length=10):
        """Generate a random password with letters, numbers, and special characters."""
        characters = string.ascii_letters + string.digits + "!@#$%"
        return "".join(secrets.choice(characters) for _ in range(length))

    def post(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        input_file = serializer.validated_data["file"]
        role = serializer.validated_data["role"]

        # Read Excel/CSV; identifiers stay strings so "007" survives
        try:
            df = (
                pd.read_excel(input_file, dtype=str)
                if input_file.name.endswith((".xlsx", ".xls"))
                else pd.read_csv(input_file, dtype=str)
            )
        except Exception as e:
            logger.warning("Roster upload could not be parsed: %s", e)
            return Response({"error": f"Failed to read file: {e}"}, status=400)

        error_rows = []
        credentials_data = []

        # Pre-fetch departments to avoid N+1 queries
        dept_map = {d.code.lower(): d for d in Department.objects.all()}

        for index, row in df.iterrows():
            line = index + 2  # header is line 1
            email = _cell(row, "Email")
            first_name = _cell(row, "First Name")
            last_name = _cell(row, "Last Name")
            dept_code = _cell(row, "Department").lower()

            if not email or not dept_code:
                error_rows.append(f"Row {line}: Missing email or department")
                continue

            department = dept_map.get(dept_code)
            if not department:
                error_rows.append(f"Row {line}: Department '{dept_code}' not found")
                continue

            if role == User.Role.STUDENT:
                identifier = _cell(row, "Registration Number")
                batch = _cell(row, "Batch")
                section = _cell(row, "Section")
                if not identifier or not batch or not section:
                    error_rows.append(f"Row {line}: Missing registration number, batch or section")
                    continue
            else:
                identifier = _cell(row, "Employee ID")
                if not identifier:
                    error_rows.append(f"Row {line}: Missing employee id")
                    continue
                raw_designation = _cell(row, "Designation")
                designation = _designation(raw_designation)
                if designation is None:
                    error_rows.append(f"Row {line}: Unknown designation '{raw_designation}'")
                    continue

            username = identifier.lower()
            password = self.generate_random_password()

            # One savepoint per row so a duplicate doesn't poison the rest
            try:
                with transaction.atomic():
                    user = User.objects.create_user(
                        username=username,
                        email=email,
                        password=password,
                        first_name=first_name,
                        last_name=last_name,
                        role=role,
                    )
                    if role == User.Role.STUDENT:
                        StudentProfile.objects.create(
                            user=user,
                            registration_number=identifier,
                            department=department,
                            batch=batch,
                            section=section,
                        )
                    else:
                        FacultyProfile.objects.create(
                            user=user,
                            employee_id=identifier,
                            department=department,
                            designation=designation,
                        )
            except IntegrityError:
                error_rows.append(f"Row {line}: Duplicate user (username, email or identifier already exists)")
                continue

            credentials_data.append(
                {
                    "Email": email,
                    "First Name": first_name,
                    "Last Name": last_name,
                    "Username": username,
                    "Password": password,
                    "Role": role.title(),
                    "Department": department.code,
                    "Identifier": identifier,
                }
            )

        logger.info(
            "Roster upload (%s): %d created, %d rejected",
            role, len(credentials_data), len(error_rows),
        )

        if not credentials_data:
            return Response(
                {"error": "No profiles were created", "errors": error_rows}, status=400
            )

        # Generate Excel file with credentials
        output = BytesIO()
        with pd.ExcelWriter(output, engine="openpyxl") as writer:
            pd.DataFrame(credentials_data).to_excel(writer, sheet_name="Credentials", index=False)
            if error_rows:
                pd.DataFrame({"Errors": error_rows}).to_excel(writer, sheet_name="Errors", index=False)

        output.seek(0)
        response = HttpResponse(
            output.read(),
            content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )
        response["Content-Disposition"] = (
            f"attachment; filename=bulk_upload_credentials_{role.lower()}.xlsx"
        )
        return response
