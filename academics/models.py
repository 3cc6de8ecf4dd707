from django.db import models


class Department(models.Model):
    name = models.CharField(max_length=100, unique=True)       # e.g., "Computer Science"
    code = models.CharField(max_length=20, unique=True)        # e.g., "CSE"

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['code']

    def __str__(self):
        return self.name
