import datetime
import itertools

from django.utils import timezone

from academics.models import Department
from authentication.models import User
from internships.models import Internship, InternshipStudent, InternshipFaculty, Task
from profiles.models import StudentProfile, FacultyProfile

_seq = itertools.count(1)


def make_user(role=User.Role.STUDENT, username=None, **extra):
    n = next(_seq)
    username = username or f"{role.lower()}{n}"
    return User.objects.create_user(
        username=username,
        email=f"{username}@example.com",
        password="not-a-real-password",
        first_name=extra.pop("first_name", "Test"),
        last_name=extra.pop("last_name", f"User{n}"),
        role=role,
        **extra,
    )


def make_department(code=None, name=None):
    n = next(_seq)
    code = code or f"D{n}"
    return Department.objects.create(code=code, name=name or f"Department {code}")


def make_student(department=None, batch="2021", section="A", **extra):
    user = make_user(User.Role.STUDENT)
    return StudentProfile.objects.create(
        user=user,
        registration_number=extra.pop("registration_number", f"REG-{user.pk}"),
        department=department,
        batch=batch,
        section=section,
        **extra,
    )


def make_faculty(department=None):
    user = make_user(User.Role.FACULTY)
    return FacultyProfile.objects.create(user=user, employee_id=f"EMP-{user.pk}", department=department)


def make_internship(**fields):
    today = datetime.date.today()
    defaults = {
        "title": "Backend Intern",
        "host_institution": "Systems Ltd",
        "category": "Software",
        "start_date": today,
        "end_date": today + datetime.timedelta(days=60),
    }
    defaults.update(fields)
    return Internship.objects.create(**defaults)


def link_student(internship, student):
    return InternshipStudent.objects.create(internship=internship, student=student)


def link_faculty(internship, faculty):
    return InternshipFaculty.objects.create(internship=internship, faculty=faculty)


def make_task(internship, origin=Task.Origin.FACULTY, marks=50, students=(), title=None, weightage=10):
    task = Task.objects.create(
        internship=internship,
        origin=origin,
        title=title or f"Task {next(_seq)}",
        description="Write it up",
        deadline=timezone.now() + datetime.timedelta(days=7),
        marks=marks,
        weightage=weightage,
    )
    task.assigned_students.set(students)
    return task
