"""
Per-batch internship completion figures for a department.

The roster changes in bulk (spreadsheet uploads), so the summary is
recomputed from the full student set on every call instead of being
maintained incrementally.
"""
import logging
from dataclasses import dataclass

import pandas as pd

from academics.models import Department
from internportal.exceptions import NotFoundError
from profiles.models import StudentProfile

logger = logging.getLogger(__name__)


@dataclass
class BatchSummary:
    batch: str
    total: int
    did_internship: int
    missing_internship: int
    total_sections: int


def get_department(department_id):
    try:
        return Department.objects.get(pk=department_id)
    except Department.DoesNotExist:
        raise NotFoundError(f"Department {department_id} not found.")


def summarize_batches(department_id):
    """
    Groups the department's students by batch.

    Batches come back in the order they first appear in the roster
    (students ordered by id), matching the admin batch screen.
    """
    department = get_department(department_id)

    records = list(
        StudentProfile.objects.filter(department=department)
        .order_by("id")
        .values("batch", "section", "did_internship")
    )
    if not records:
        return []

    df = pd.DataFrame.from_records(records)
    grouped = df.groupby("batch", sort=False).agg(
        total=("batch", "size"),
        did_internship=("did_internship", "sum"),
        total_sections=("section", "nunique"),
    )

    summaries = []
    for batch, row in grouped.iterrows():
        total = int(row["total"])
        did_internship = int(row["did_internship"])
        summaries.append(
            BatchSummary(
                batch=str(batch),
                total=total,
                did_internship=did_internship,
                missing_internship=total - did_internship,
                total_sections=int(row["total_sections"]),
            )
        )

    logger.info(
        "Batch summary for %s: %d students across %d batches",
        department.code, len(records), len(summaries),
    )
    return summaries
