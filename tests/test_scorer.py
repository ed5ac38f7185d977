import pytest

from quizzle_app.modules.quiz.logics.scorer import grade_for, is_passing, percentage_of, score

from conftest import make_question


class TestScore:
    def test_one_of_two_correct(self):
        questions = [
            make_question(options=['A', 'B'], correct='A'),
            make_question(options=['A', 'B'], correct='B'),
        ]
        summary = score(questions, {0: 'A', 1: 'A'})
        assert summary.correct_count == 1
        assert summary.percentage == 50
        assert summary.passed is False

    def test_unanswered_counts_as_incorrect(self):
        questions = [make_question(correct='Option A') for _ in range(4)]
        summary = score(questions, {0: 'Option A'})
        assert summary.correct_count == 1
        assert summary.unanswered == 3
        assert summary.incorrect == 0
        assert summary.percentage == 25

    def test_empty_quiz_scores_zero(self):
        summary = score([], {})
        assert summary.percentage == 0
        assert summary.passed is False

    def test_no_breakdown_without_tags(self):
        assert score([make_question()], {}).per_tag_breakdown is None

    def test_per_tag_breakdown(self):
        questions = [
            make_question(tag='operating-systems'),
            make_question(tag='operating-systems'),
            make_question(tag='data-analytics'),
        ]
        summary = score(questions, {0: 'Option A', 2: 'Option B'})
        breakdown = summary.per_tag_breakdown
        assert (breakdown['operating-systems'].correct, breakdown['operating-systems'].total) == (1, 2)
        assert breakdown['operating-systems'].percentage == 50
        assert breakdown['data-analytics'].percentage == 0


class TestRounding:
    @pytest.mark.parametrize('correct,total,expected', [
        (1, 8, 13),     # 12.5 rounds up
        (2, 3, 67),
        (1, 3, 33),
        (5, 8, 63),     # 62.5 rounds up
        (0, 5, 0),
        (5, 5, 100),
    ])
    def test_half_up(self, correct, total, expected):
        assert percentage_of(correct, total) == expected


class TestPassThreshold:
    def test_sixty_passes(self):
        assert is_passing(60)

    def test_fifty_nine_fails(self):
        assert not is_passing(59)

    def test_threshold_through_score(self):
        questions = [make_question() for _ in range(5)]
        assert score(questions, {0: 'Option A', 1: 'Option A', 2: 'Option A'}).passed
        assert not score(questions, {0: 'Option A', 1: 'Option A'}).passed


@pytest.mark.parametrize('percentage,grade', [
    (100, 'A+'), (90, 'A+'), (89, 'A'), (80, 'A'), (75, 'B'), (60, 'C'), (59, 'F'), (0, 'F'),
])
def test_grade_bands(percentage, grade):
    assert grade_for(percentage)['grade'] == grade
