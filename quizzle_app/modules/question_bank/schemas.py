from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class Question:
    """A multiple-choice question. Immutable once loaded from the bank."""

    text: str
    options: Tuple[str, ...]
    correct_option: str
    topic_tag: Optional[str] = None
    subject: Optional[str] = None
    chapter: Optional[str] = None
    explanation: Optional[str] = None

    def __post_init__(self):
        if not self.text:
            raise ValueError("question text is empty")
        if not 2 <= len(self.options) <= 4:
            raise ValueError(f"expected 2-4 options, got {len(self.options)}")
        if len(set(self.options)) != len(self.options):
            raise ValueError("options are not unique")
        if self.correct_option not in self.options:
            raise ValueError("correct option is not one of the options")

    @classmethod
    def from_dict(cls, data: Dict[str, Any], subject: str = None, chapter: str = None) -> 'Question':
        """Build from a bank record ``{question, options, answer, explanation?}``."""
        options = data.get('options')
        if not isinstance(options, (list, tuple)) or not all(isinstance(o, str) for o in options):
            raise ValueError("options must be a list of strings")
        return cls(
            text=str(data.get('question') or '').strip(),
            options=tuple(options),
            correct_option=data.get('answer'),
            topic_tag=data.get('subject') or None,
            subject=subject or data.get('subject') or None,
            chapter=chapter or data.get('chapter') or None,
            explanation=data.get('explanation') or None,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'question': self.text,
            'options': list(self.options),
            'answer': self.correct_option,
        }
        if self.topic_tag:
            payload['subject'] = self.topic_tag
        if self.chapter:
            payload['chapter'] = self.chapter
        if self.explanation:
            payload['explanation'] = self.explanation
        return payload
