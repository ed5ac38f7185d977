# File: quizzle_app/modules/question_bank/services/loader.py
"""
Question Bank Loader
====================
Reads question records from the static content store:

    <root>/<subject>/<difficulty>/<chapter>.json

Each file is a JSON array of ``{question, options, answer, explanation?}``.
Pure retrieval: selection and ordering belong to the quiz selector.
"""

from __future__ import annotations

import json
import os
from typing import Dict, List

from flask import current_app

from quizzle_app.core.error_handlers import ContentUnavailable
from quizzle_app.core.logging_config import get_logger

from ..config import QuestionBankConfig
from ..schemas import Question

logger = get_logger(__name__)


class QuestionBankLoader:
    """File-backed access to the question bank."""

    def __init__(self, root_dir: str):
        self.root_dir = root_dir

    @classmethod
    def from_app(cls) -> 'QuestionBankLoader':
        return cls(current_app.config['QUESTION_BANK_DIR'])

    def _chapter_path(self, subject: str, difficulty: str, chapter: str) -> str:
        return os.path.join(self.root_dir, subject, difficulty, f"{chapter}.json")

    def load_questions(self, subject: str, difficulty: str, chapter: str) -> List[Question]:
        """
        Load every valid question for one (subject, difficulty, chapter).

        Raises:
            ContentUnavailable: no file, unreadable file, or zero valid questions.
        """
        resource = f"{subject}/{difficulty}/{chapter}"
        if subject not in QuestionBankConfig.SUBJECT_IDS or difficulty not in QuestionBankConfig.DIFFICULTIES:
            raise ContentUnavailable(f"Unknown subject or difficulty: {resource}", resource=resource)

        path = self._chapter_path(subject, difficulty, chapter)
        if not os.path.isfile(path):
            logger.warning(f"[QUESTION_BANK] Missing content file {path}")
            raise ContentUnavailable(f"No questions found for {resource}", resource=resource)

        try:
            with open(path, encoding='utf-8') as handle:
                records = json.load(handle)
        except (OSError, ValueError) as exc:
            logger.warning(f"[QUESTION_BANK] Cannot read {path}: {exc}")
            raise ContentUnavailable(f"No questions found for {resource}", resource=resource) from exc

        if not isinstance(records, list):
            records = []

        questions = []
        for position, record in enumerate(records):
            if not isinstance(record, dict):
                logger.warning(f"[QUESTION_BANK] Skipping non-object record #{position} in {resource}")
                continue
            try:
                questions.append(Question.from_dict(record, subject=subject, chapter=chapter))
            except (TypeError, ValueError) as exc:
                logger.warning(f"[QUESTION_BANK] Skipping invalid record #{position} in {resource}: {exc}")

        if not questions:
            raise ContentUnavailable(f"No questions found for {resource}", resource=resource)

        return questions

    def load_lesson_pool(self, subject: str, lesson_title: str, difficulty: str) -> List[Question]:
        """All questions of the chapter a lesson maps to."""
        subject_info = QuestionBankConfig.get_subject(subject)
        chapter = (subject_info or {}).get('lesson_chapters', {}).get(lesson_title)
        if not chapter:
            logger.warning(f"[QUESTION_BANK] No chapter mapping for lesson '{lesson_title}' ({subject})")
            raise ContentUnavailable(
                f"No questions found for lesson '{lesson_title}'", resource=f"{subject}/{lesson_title}"
            )
        return self.load_questions(subject, difficulty, chapter)

    def load_subject_pool(self, subject: str, difficulty: str) -> List[Question]:
        """Questions of every chapter of a subject; a missing chapter contributes nothing."""
        subject_info = QuestionBankConfig.get_subject(subject)
        if not subject_info:
            raise ContentUnavailable(f"Unknown subject: {subject}", resource=subject)

        pool: List[Question] = []
        for chapter in subject_info['chapters']:
            try:
                pool.extend(self.load_questions(subject, difficulty, chapter))
            except ContentUnavailable:
                continue
        return pool

    def load_full_syllabus_pool(self, difficulty: str) -> List[Question]:
        pool: List[Question] = []
        for subject in QuestionBankConfig.SUBJECT_IDS:
            pool.extend(self.load_subject_pool(subject, difficulty))
        return pool

    def chapter_counts(self, subject: str, difficulty: str) -> Dict[str, int]:
        """Number of valid questions per chapter, 0 for missing chapters."""
        subject_info = QuestionBankConfig.get_subject(subject) or {'chapters': []}
        counts = {}
        for chapter in subject_info['chapters']:
            try:
                counts[chapter] = len(self.load_questions(subject, difficulty, chapter))
            except ContentUnavailable:
                counts[chapter] = 0
        return counts
