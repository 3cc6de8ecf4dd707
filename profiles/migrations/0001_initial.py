import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("academics", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="StudentProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("registration_number", models.CharField(max_length=50, unique=True)),
                ("batch", models.CharField(help_text="e.g. 2021", max_length=20)),
                ("section", models.CharField(help_text="e.g. A", max_length=10)),
                ("current_semester", models.IntegerField(default=1)),
                ("did_internship", models.BooleanField(default=False)),
                (
                    "department",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="students",
                        to="academics.department",
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="student_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "indexes": [models.Index(fields=["department", "batch"], name="student_dept_batch_idx")],
            },
        ),
        migrations.CreateModel(
            name="FacultyProfile",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("employee_id", models.CharField(max_length=50, unique=True)),
                (
                    "designation",
                    models.CharField(
                        choices=[
                            ("PROFESSOR", "Professor"),
                            ("ASSOC_PROF", "Associate Professor"),
                            ("ASST_PROF", "Assistant Professor"),
                            ("LECTURER", "Lecturer"),
                            ("LAB_INSTRUCTOR", "Lab Instructor"),
                        ],
                        default="ASST_PROF",
                        max_length=50,
                    ),
                ),
                ("is_hod", models.BooleanField(default=False)),
                ("joining_date", models.DateField(blank=True, null=True)),
                (
                    "department",
                    models.ForeignKey(
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="faculty",
                        to="academics.department",
                    ),
                ),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="faculty_profile",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
        ),
    ]
