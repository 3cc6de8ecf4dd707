from django.db import models
from django.conf import settings


class StudentProfile(models.Model):
    """
    Strict Data for Students only.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='student_profile')

    # Unique ID within the institution
    registration_number = models.CharField(max_length=50, unique=True)

    # Link to Academics App
    department = models.ForeignKey(
        'academics.Department',
        on_delete=models.SET_NULL,
        null=True,
        related_name='students'
    )
    batch = models.CharField(max_length=20, help_text="e.g. 2021")
    section = models.CharField(max_length=10, help_text="e.g. A")
    current_semester = models.IntegerField(default=1)

    # Flipped when an internship the student was placed in is marked complete
    did_internship = models.BooleanField(default=False)

    class Meta:
        indexes = [
            models.Index(fields=['department', 'batch'], name='student_dept_batch_idx'),
        ]

    def __str__(self):
        return f"{self.registration_number} - {self.full_name}"

    @property
    def full_name(self):
        return self.user.get_full_name() or self.user.username


class FacultyProfile(models.Model):
    """
    Strict Data for Faculty only.
    """
    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='faculty_profile')

    employee_id = models.CharField(max_length=50, unique=True)

    # Hardcoded Designations
    class Designation(models.TextChoices):
        PROFESSOR = 'PROFESSOR', 'Professor'
        ASSOC_PROF = 'ASSOC_PROF', 'Associate Professor'
        ASST_PROF = 'ASST_PROF', 'Assistant Professor'
        LECTURER = 'LECTURER', 'Lecturer'
        LAB_INSTRUCTOR = 'LAB_INSTRUCTOR', 'Lab Instructor'

    designation = models.CharField(
        max_length=50,
        choices=Designation.choices,
        default=Designation.ASST_PROF
    )

    department = models.ForeignKey(
        'academics.Department',
        on_delete=models.SET_NULL,
        null=True,
        related_name='faculty'
    )

    # Role Flags
    is_hod = models.BooleanField(default=False)
    joining_date = models.DateField(null=True, blank=True)

    def __str__(self):
        return f"{self.user.get_full_name()} ({self.get_designation_display()})"
