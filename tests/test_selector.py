"""
Tests for question selection.

Tests cover:
- Fisher-Yates shuffle uniformity
- Lesson truncation
- Chapter-balanced quotas, short and empty chapters
- Full-syllabus composition and subject tagging
"""

import itertools
import random
from collections import Counter

import pytest

from quizzle_app.modules.quiz.logics.selector import (
    select,
    select_balanced,
    select_full_syllabus,
    select_lesson,
    shuffle,
)

from conftest import make_question


def _pool(subject='operating-systems', chapters=5, per_chapter=10):
    return [
        make_question(text=f'{subject}-ch{c}-{i}', subject=subject, chapter=f'ch{c}')
        for c in range(1, chapters + 1)
        for i in range(per_chapter)
    ]


class TestShuffle:
    def test_every_permutation_equally_likely(self):
        """Chi-square over all 3! orderings stays under the p=0.001 bound (df=5)."""
        rng = random.Random(1234)
        pool = [make_question(text=t) for t in ('a', 'b', 'c')]
        trials = 6000

        counts = Counter(tuple(q.text for q in select(pool, 5, 'lesson', rng=rng)) for _ in range(trials))

        assert set(counts) == set(itertools.permutations('abc'))
        expected = trials / 6
        chi_square = sum((observed - expected) ** 2 / expected for observed in counts.values())
        assert chi_square < 20.52

    def test_does_not_mutate_input(self):
        items = list(range(10))
        shuffle(items, random.Random(3))
        assert items == list(range(10))

    def test_empty_and_single(self):
        assert shuffle([]) == []
        assert shuffle([7]) == [7]


class TestLessonSelection:
    def test_small_pool_returns_everything(self):
        pool = _pool(chapters=1, per_chapter=3)
        picked = select_lesson(pool, 5, rng=random.Random(0))
        assert sorted(q.text for q in picked) == sorted(q.text for q in pool)

    def test_large_pool_is_truncated(self):
        pool = _pool(chapters=1, per_chapter=20)
        picked = select_lesson(pool, 5, rng=random.Random(0))
        assert len(picked) == 5
        assert len({q.text for q in picked}) == 5


class TestBalancedSelection:
    def test_equal_quota_per_chapter(self):
        picked = select_balanced(_pool(chapters=5, per_chapter=10), 30, rng=random.Random(9))
        assert len(picked) == 30
        assert Counter(q.chapter for q in picked) == {f'ch{c}': 6 for c in range(1, 6)}

    def test_quota_rounds_up(self):
        """Four chapters and a target of 30 give a quota of 8 each."""
        picked = select_balanced(_pool(chapters=4, per_chapter=10), 30, rng=random.Random(9))
        assert len(picked) == 32
        assert set(Counter(q.chapter for q in picked).values()) == {8}

    def test_short_chapter_contributes_what_it_has(self):
        pool = _pool(chapters=4, per_chapter=10) + [
            make_question(text=f'short-{i}', subject='operating-systems', chapter='ch5') for i in range(2)
        ]
        picked = select_balanced(pool, 30, rng=random.Random(2))
        counts = Counter(q.chapter for q in picked)
        assert counts['ch5'] == 2
        assert len(picked) == 4 * 6 + 2

    def test_empty_pool(self):
        assert select_balanced([], 30) == []


class TestFullSyllabusSelection:
    def test_twenty_five_per_subject_tagged(self):
        subjects = ['data-analytics', 'operating-systems', 'entrepreneurship', 'software-engineering']
        pool = [q for s in subjects for q in _pool(subject=s, chapters=5, per_chapter=10)]

        picked = select(pool, 100, 'full-syllabus', rng=random.Random(5))

        assert len(picked) == 100
        assert Counter(q.topic_tag for q in picked) == {s: 25 for s in subjects}
        assert all(q.topic_tag == q.subject for q in picked)

    def test_missing_subject_shrinks_the_exam(self):
        pool = _pool(subject='data-analytics') + _pool(subject='operating-systems')
        picked = select_full_syllabus(pool, per_subject=25, rng=random.Random(5))
        assert len(picked) == 50

    def test_missing_subject_keeps_fixed_share_through_dispatch(self):
        """Two subjects with content still get 25 each, not a larger share of 100."""
        pool = _pool(subject='data-analytics') + _pool(subject='operating-systems')
        picked = select(pool, 100, 'full-syllabus', rng=random.Random(5))
        assert len(picked) == 50
        assert Counter(q.topic_tag for q in picked) == {'data-analytics': 25, 'operating-systems': 25}


def test_unknown_mode_rejected():
    with pytest.raises(ValueError):
        select([], 5, 'weekly')
