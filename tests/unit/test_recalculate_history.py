"""Unit tests for the academic history recalculation script"""
import uuid
from unittest.mock import MagicMock, patch

from factories import make_history, make_record, make_result
from standing_engine.models.enums import AcademicStanding
from standing_engine.scripts.recalculate_history import recalculate_student

SESSION_FACTORY = "standing_engine.scripts.recalculate_history.AsyncSessionLocal"


def session_factory_for(mock_db):
    factory = MagicMock()
    factory.return_value.__aenter__.return_value = mock_db
    return factory


async def test_recalculates_and_commits(mock_db, student_id, capsys):
    history = make_history(student_id)
    records = [
        make_record(student_id, uuid.uuid4(), is_finalized=True, semester_gpa=1.6,
                    total_grade_points=24.0, credits_attempted=15, credits_earned=15),
        make_record(student_id, uuid.uuid4(), is_finalized=True, semester_gpa=1.6,
                    total_grade_points=24.0, credits_attempted=15, credits_earned=12),
    ]
    mock_db.execute.side_effect = [make_result(history), make_result(rows=records), make_result()]

    with patch(SESSION_FACTORY, session_factory_for(mock_db)):
        assert await recalculate_student(student_id) is True

    assert history.cumulative_gpa == 1.6
    assert history.current_level == 200
    assert history.current_status == AcademicStanding.PROBATION.value
    mock_db.commit.assert_awaited_once()
    assert "level 100 -> 200" in capsys.readouterr().out


async def test_nothing_finalized(mock_db, student_id, capsys):
    history = make_history(student_id)
    mock_db.execute.side_effect = [make_result(history), make_result(rows=[])]

    with patch(SESSION_FACTORY, session_factory_for(mock_db)):
        assert await recalculate_student(student_id) is True

    mock_db.commit.assert_not_awaited()
    assert "no finalized semesters" in capsys.readouterr().out


async def test_missing_history_reported(mock_db, student_id, capsys):
    mock_db.execute.side_effect = [make_result(None)]

    with patch(SESSION_FACTORY, session_factory_for(mock_db)):
        assert await recalculate_student(student_id) is False

    mock_db.rollback.assert_awaited_once()
    assert "ACADEMIC_HISTORY_NOT_FOUND" in capsys.readouterr().out
