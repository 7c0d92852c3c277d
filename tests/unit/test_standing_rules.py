"""
Unit tests for standing classification, level progression and graduation rules
"""
import pytest

from standing_engine.models.enums import AcademicStanding
from standing_engine.services.graduation_checker import (
    DEFAULT_REQUIRED_CREDITS,
    evaluate_graduation_eligibility,
    resolve_required_credits,
)
from standing_engine.services.level_progression import (
    MAX_LEVEL,
    STARTING_LEVEL,
    credits_to_next_level,
    resolve_level,
)
from standing_engine.services.standing_classifier import (
    determine_academic_standing,
    next_probation_count,
)


class TestAcademicStanding:
    """Test GPA -> standing thresholds"""

    @pytest.mark.parametrize(
        "gpa,expected",
        [
            (4.0, AcademicStanding.GOOD_STANDING),
            (2.0, AcademicStanding.GOOD_STANDING),
            (1.99, AcademicStanding.ACADEMIC_WARNING),
            (1.75, AcademicStanding.ACADEMIC_WARNING),
            (1.74, AcademicStanding.PROBATION),
            (1.5, AcademicStanding.PROBATION),
            (1.49, AcademicStanding.SUSPENDED),
            (0.0, AcademicStanding.SUSPENDED),
        ],
    )
    def test_thresholds(self, gpa, expected):
        assert determine_academic_standing(gpa) == expected

    def test_probation_count_increments(self):
        assert next_probation_count(AcademicStanding.PROBATION, 0) == 1
        assert next_probation_count(AcademicStanding.PROBATION, 2) == 3

    def test_probation_count_resets(self):
        """Any other standing breaks the consecutive run"""
        assert next_probation_count(AcademicStanding.GOOD_STANDING, 3) == 0
        assert next_probation_count(AcademicStanding.ACADEMIC_WARNING, 1) == 0
        assert next_probation_count(AcademicStanding.SUSPENDED, 2) == 0


class TestLevelProgression:
    """Test credits earned -> level"""

    @pytest.mark.parametrize(
        "credits,expected",
        [(0, 100), (23, 100), (24, 200), (59, 200), (60, 300), (90, 300), (95, 300), (96, 400), (150, 400)],
    )
    def test_resolve_level(self, credits, expected):
        assert resolve_level(credits) == expected

    def test_level_bounds(self):
        assert STARTING_LEVEL == 100
        assert MAX_LEVEL == 400

    def test_credits_to_next_level(self):
        assert credits_to_next_level(100, 10) == 14
        assert credits_to_next_level(200, 30) == 30
        assert credits_to_next_level(300, 90) == 6

    def test_credits_to_next_level_never_negative(self):
        assert credits_to_next_level(100, 40) == 0

    def test_no_next_level_at_top(self):
        assert credits_to_next_level(400, 130) == 0


class TestGraduationEligibility:
    """Test graduation requirements"""

    def test_eligible(self):
        result = evaluate_graduation_eligibility(
            credits_earned=120,
            cumulative_gpa=2.0,
            current_level=400,
            academic_standing=AcademicStanding.GOOD_STANDING,
        )

        assert result.is_eligible is True
        assert result.remaining_credits == 0
        assert result.unmet_requirements == []

    def test_eligible_above_requirements(self):
        result = evaluate_graduation_eligibility(
            credits_earned=130,
            cumulative_gpa=2.4,
            current_level=400,
            academic_standing=AcademicStanding.GOOD_STANDING,
            required_credits=120,
        )

        assert result.is_eligible is True
        assert result.remaining_credits == 0

    def test_all_requirements_unmet(self):
        result = evaluate_graduation_eligibility(
            credits_earned=100,
            cumulative_gpa=1.8,
            current_level=300,
            academic_standing=AcademicStanding.ACADEMIC_WARNING,
        )

        assert result.is_eligible is False
        assert result.remaining_credits == 20
        assert result.unmet_requirements == ["credits", "cumulative_gpa", "level"]

    def test_missing_gpa_counts_as_zero(self):
        result = evaluate_graduation_eligibility(
            credits_earned=130,
            cumulative_gpa=None,
            current_level=400,
            academic_standing=AcademicStanding.GOOD_STANDING,
        )

        assert result.is_eligible is False
        assert result.cumulative_gpa is None
        assert result.unmet_requirements == ["cumulative_gpa"]

    def test_program_requirement(self):
        result = evaluate_graduation_eligibility(
            credits_earned=130,
            cumulative_gpa=3.1,
            current_level=400,
            academic_standing=AcademicStanding.GOOD_STANDING,
            required_credits=144,
        )

        assert result.is_eligible is False
        assert result.required_credits == 144
        assert result.remaining_credits == 14

    def test_required_credits_default(self):
        assert resolve_required_credits(None) == DEFAULT_REQUIRED_CREDITS == 120
        assert resolve_required_credits(132) == 132
