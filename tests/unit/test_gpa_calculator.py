"""
Unit tests for the GPA calculator

Tests grade point lookup, semester GPA, cumulative GPA and half-up rounding.
"""
from types import SimpleNamespace

import pytest

from standing_engine.schemas.academic import (
    CumulativeGPAResult,
    NoFinalizedSemesters,
    NoGradeData,
    SemesterGPAResult,
)
from standing_engine.services.gpa_calculator import (
    GRADE_POINTS,
    calculate_cumulative_gpa,
    calculate_semester_gpa,
    get_grade_point,
    round_half_up,
)


class TestGradePoints:
    """Test letter grade lookup"""

    @pytest.mark.parametrize(
        "grade,expected",
        [("A", 4.0), ("B+", 3.5), ("B", 3.0), ("C+", 2.5), ("C", 2.0), ("D+", 1.5), ("D", 1.0), ("F", 0.0)],
    )
    def test_letter_grades(self, grade, expected):
        assert get_grade_point(grade) == expected

    def test_non_scoring_grades_are_zero(self):
        """I, W and P carry no grade points"""
        assert GRADE_POINTS["I"] == 0.0
        assert GRADE_POINTS["W"] == 0.0
        assert GRADE_POINTS["P"] == 0.0

    def test_grade_is_normalised(self):
        assert get_grade_point(" b+ ") == 3.5
        assert get_grade_point("a") == 4.0

    def test_unknown_or_missing_grade(self):
        assert get_grade_point("E") is None
        assert get_grade_point("") is None
        assert get_grade_point(None) is None


class TestRounding:
    """Test half-up rounding to 2 decimals"""

    def test_half_rounds_up(self):
        assert round_half_up(2.525) == 2.53
        assert round_half_up(1.005) == 1.01
        assert round_half_up(2.675) == 2.68

    def test_below_half_rounds_down(self):
        assert round_half_up(2.524) == 2.52

    def test_already_rounded(self):
        assert round_half_up(3.0) == 3.0


class TestSemesterGPA:
    """Test semester GPA from (grade, credit hours) pairs"""

    def test_weighted_average(self):
        """A(3) + B(3) + C(4) = 12 + 9 + 8 = 29 points over 10 credits"""
        outcome = calculate_semester_gpa([("A", 3), ("B", 3), ("C", 4)])

        assert isinstance(outcome, SemesterGPAResult)
        assert outcome.semester_gpa == 2.9
        assert outcome.total_grade_points == 29.0
        assert outcome.credits_attempted == 10
        assert outcome.credits_earned == 10
        assert outcome.courses_completed == 3

    def test_plus_grades(self):
        """A(3) + B+(3) + C(4) = 12 + 10.5 + 8 = 30.5 points over 10 credits"""
        outcome = calculate_semester_gpa([("A", 3), ("B+", 3), ("C", 4)])

        assert outcome.total_grade_points == 30.5
        assert outcome.credits_attempted == 10
        assert outcome.semester_gpa == 3.05
        assert outcome.credits_earned == 10

    def test_failed_course_attempted_not_earned(self):
        outcome = calculate_semester_gpa([("A", 3), ("F", 3)])

        assert outcome.semester_gpa == 2.0
        assert outcome.credits_attempted == 6
        assert outcome.credits_earned == 3
        assert outcome.courses_completed == 2

    def test_d_is_passing(self):
        outcome = calculate_semester_gpa([("D", 3)])

        assert outcome.semester_gpa == 1.0
        assert outcome.credits_earned == 3

    def test_pass_grade_earns_no_credit(self):
        """P scores 0 points and is below the passing grade point"""
        outcome = calculate_semester_gpa([("A", 3), ("P", 1)])

        assert outcome.credits_attempted == 4
        assert outcome.credits_earned == 3
        assert outcome.semester_gpa == 3.0

    def test_unknown_grades_skipped(self):
        outcome = calculate_semester_gpa([("A", 3), ("X", 3), (None, 3)])

        assert outcome.credits_attempted == 3
        assert outcome.courses_completed == 1
        assert outcome.semester_gpa == 4.0

    def test_rounding_applied(self):
        """A(1) + B(2) = 10 points over 3 credits = 3.333..."""
        outcome = calculate_semester_gpa([("A", 1), ("B", 2)])

        assert outcome.semester_gpa == 3.33
        assert outcome.total_grade_points == 10.0

    def test_no_grades(self):
        outcome = calculate_semester_gpa([])

        assert isinstance(outcome, NoGradeData)
        assert outcome.semester_gpa is None
        assert outcome.credits_attempted == 0

    def test_zero_credit_courses_only(self):
        """Graded but zero-credit courses give no GPA"""
        outcome = calculate_semester_gpa([("A", 0), ("B", 0)])

        assert isinstance(outcome, NoGradeData)


class TestCumulativeGPA:
    """Test cumulative GPA from finalized semester totals"""

    def test_rolls_up_semesters(self):
        semesters = [
            SimpleNamespace(total_grade_points=45.0, credits_attempted=15, credits_earned=15),
            SimpleNamespace(total_grade_points=29.0, credits_attempted=10, credits_earned=7),
        ]

        outcome = calculate_cumulative_gpa(semesters)

        assert isinstance(outcome, CumulativeGPAResult)
        assert outcome.cumulative_gpa == 2.96  # 74 / 25
        assert outcome.total_credits_attempted == 25
        assert outcome.total_credits_earned == 22
        assert outcome.total_semesters_completed == 2

    def test_weighted_by_credits_not_by_semester(self):
        """A 4.0 over 3 credits and a 2.0 over 12 credits is 2.4, not 3.0"""
        semesters = [
            SimpleNamespace(total_grade_points=12.0, credits_attempted=3, credits_earned=3),
            SimpleNamespace(total_grade_points=24.0, credits_attempted=12, credits_earned=12),
        ]

        assert calculate_cumulative_gpa(semesters).cumulative_gpa == 2.4

    def test_half_point_rounds_up(self):
        """(30.5 + 20) / 20 = 2.525 -> 2.53"""
        semesters = [
            SimpleNamespace(total_grade_points=30.5, credits_attempted=10, credits_earned=10),
            SimpleNamespace(total_grade_points=20.0, credits_attempted=10, credits_earned=10),
        ]

        assert calculate_cumulative_gpa(semesters).cumulative_gpa == 2.53

    def test_no_semesters(self):
        outcome = calculate_cumulative_gpa([])

        assert isinstance(outcome, NoFinalizedSemesters)
        assert outcome.cumulative_gpa is None

    def test_zero_attempted_credits(self):
        semesters = [SimpleNamespace(total_grade_points=0.0, credits_attempted=0, credits_earned=0)]

        outcome = calculate_cumulative_gpa(semesters)

        assert isinstance(outcome, CumulativeGPAResult)
        assert outcome.cumulative_gpa is None
        assert outcome.total_semesters_completed == 1

    def test_order_independent(self):
        first = SimpleNamespace(total_grade_points=40.0, credits_attempted=12, credits_earned=12)
        second = SimpleNamespace(total_grade_points=18.0, credits_attempted=9, credits_earned=6)

        assert calculate_cumulative_gpa([first, second]) == calculate_cumulative_gpa([second, first])
