import importlib
from datetime import date
from types import SimpleNamespace

import pytest

from schoolhub.schemas.enums import ExaminationStatus, ResultStatus


@pytest.mark.parametrize("module", [
    "schoolhub.schemas",
    "schoolhub.schemas.academics.base",
    "schoolhub.schemas.school.base",
    "schoolhub.schemas.user.base",
])
def test_schema_modules_import(module):
    assert importlib.import_module(module)


def test_academic_records_read_orm_rows():
    from schoolhub.schemas.academics.base import ClassRecord, ExaminationRecord

    row = SimpleNamespace(
        name="Grade 1 East",
        grade="1",
        section=None,
        academic_year="2025",
        capacity=None,
        teacher_ids=[],
        created_by="t1",
    )
    record = ClassRecord.model_validate(row)
    assert record.name == "Grade 1 East"
    assert ClassRecord.model_config["from_attributes"] is True

    exam = ExaminationRecord(
        title="Mid Term",
        code="MT-MAT-G1-2025-123",
        subject="Mathematics",
        grade_level="G1",
        exam_date=date(2025, 3, 14),
        start_time="09:00",
        duration=90,
        total_marks=100,
        passing_marks=50,
        venue="Main Hall",
        examiner_id="t1",
    )
    assert exam.status == ExaminationStatus.UPCOMING.value
    assert exam.model_dump()["status"] == "upcoming"


def test_result_record_defaults_to_active():
    from schoolhub.schemas.academics.base import ResultRecord

    result = ResultRecord(
        student_name="Amina Hassan",
        subject="Mathematics",
        exam_type="Midterm",
        score=44,
        total_marks=50,
        percentage=88.0,
        grade="B",
        term="First",
        academic_year="2025",
    )
    assert result.status == ResultStatus.ACTIVE.value
    assert result.model_dump()["term"] == "First"
