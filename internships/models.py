from django.conf import settings
from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models
from django.utils import timezone


# =============================================================================
# 1. PLACEMENTS
# =============================================================================

class Internship(models.Model):
    """
    A placement at a host institution. Students and faculty supervisors
    are linked through join tables so assignment is a single guarded insert.
    """
    title = models.CharField(max_length=255)
    host_institution = models.CharField(max_length=255)  # e.g. "Systems Ltd"
    location = models.CharField(max_length=255, blank=True)
    category = models.CharField(max_length=100)  # e.g. "Software", "Research"
    description = models.TextField(blank=True)
    start_date = models.DateField()
    end_date = models.DateField()

    assigned_students = models.ManyToManyField(
        'profiles.StudentProfile',
        through='InternshipStudent',
        related_name='internships',
        blank=True
    )
    assigned_faculty = models.ManyToManyField(
        'profiles.FacultyProfile',
        through='InternshipFaculty',
        related_name='internships',
        blank=True
    )

    # Enterprise cell sign-off (Pending <-> Approved)
    is_approved = models.BooleanField(default=False)
    is_complete = models.BooleanField(default=False)

    assigned_department = models.ForeignKey(
        'academics.Department',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='internships'
    )
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='created_internships'
    )
    # Industry actor who issues industry-origin tasks
    industry_supervisor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='supervised_internships'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        return f"{self.title} @ {self.host_institution}"

    @property
    def approval_state(self):
        return "APPROVED" if self.is_approved else "PENDING"


class InternshipStudent(models.Model):
    internship = models.ForeignKey(Internship, on_delete=models.CASCADE, related_name='student_links')
    student = models.ForeignKey('profiles.StudentProfile', on_delete=models.CASCADE, related_name='internship_links')
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['internship', 'student'], name='unique_internship_student'),
        ]

    def __str__(self):
        return f"{self.student_id} → {self.internship_id}"


class InternshipFaculty(models.Model):
    internship = models.ForeignKey(Internship, on_delete=models.CASCADE, related_name='faculty_links')
    faculty = models.ForeignKey('profiles.FacultyProfile', on_delete=models.CASCADE, related_name='internship_links')
    assigned_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )
    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(fields=['internship', 'faculty'], name='unique_internship_faculty'),
        ]

    def __str__(self):
        return f"{self.faculty_id} → {self.internship_id}"


class ApprovalEvent(models.Model):
    """Audit row written on every approval toggle."""
    internship = models.ForeignKey(Internship, on_delete=models.CASCADE, related_name='approval_events')
    actor = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, related_name='+')
    is_approved = models.BooleanField()  # state AFTER the toggle
    comment = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at', '-id']

    def __str__(self):
        state = "approved" if self.is_approved else "pending"
        return f"{self.internship_id} → {state} by {self.actor}"


# =============================================================================
# 2. TASKS & SUBMISSIONS
# =============================================================================

class Task(models.Model):
    """
    Gradable task issued against an internship by a faculty or an industry
    supervisor. Origin and issuer are fixed at creation.
    """
    class Origin(models.TextChoices):
        FACULTY = 'faculty', 'Faculty Supervisor'
        INDUSTRY = 'industry', 'Industry Supervisor'

    # PROTECT: an internship can't disappear from under its tasks
    internship = models.ForeignKey(Internship, on_delete=models.PROTECT, related_name='tasks')
    origin = models.CharField(max_length=20, choices=Origin.choices)

    title = models.CharField(max_length=255)
    description = models.TextField()
    deadline = models.DateTimeField()
    marks = models.DecimalField(max_digits=7, decimal_places=2, validators=[MinValueValidator(0)])
    weightage = models.DecimalField(
        max_digits=5, decimal_places=2,
        validators=[MinValueValidator(0), MaxValueValidator(100)],
        help_text="Percent of the final grade"
    )

    # Always a subset of internship.assigned_students
    assigned_students = models.ManyToManyField('profiles.StudentProfile', related_name='tasks', blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name='issued_tasks'
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['internship', 'origin'], name='task_internship_origin_idx'),
        ]

    def __str__(self):
        return f"{self.title} ({self.origin}) - {self.marks} marks"


class Submission(models.Model):
    """
    A student's artifact for a task. One row per (task, student): a
    resubmission overwrites the file reference and clears the grade.
    """
    task = models.ForeignKey(Task, on_delete=models.CASCADE, related_name='submissions')
    student = models.ForeignKey('profiles.StudentProfile', on_delete=models.CASCADE, related_name='submissions')
    student_name = models.CharField(max_length=255)
    file_url = models.CharField(max_length=500)

    grade = models.DecimalField(max_digits=7, decimal_places=2, null=True, blank=True)
    submitted_at = models.DateTimeField(default=timezone.now)
    graded_at = models.DateTimeField(null=True, blank=True)
    graded_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.SET_NULL, null=True, blank=True, related_name='+'
    )

    class Meta:
        ordering = ['-submitted_at', '-id']
        constraints = [
            models.UniqueConstraint(fields=['task', 'student'], name='unique_task_submission'),
        ]

    def __str__(self):
        return f"{self.student_name} - {self.task.title}"
