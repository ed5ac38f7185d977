from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class SubjectProgress:
    lessons_completed: int = 0
    total_lessons: int = 0
    average_score: int = 0
    total_quizzes_taken: int = 0
    subject_quiz_completed: bool = False
    subject_quiz_score: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            'lessonsCompleted': self.lessons_completed,
            'totalLessons': self.total_lessons,
            'averageScore': self.average_score,
            'totalQuizzesTaken': self.total_quizzes_taken,
            'subjectQuizCompleted': self.subject_quiz_completed,
        }
        if self.subject_quiz_score is not None:
            payload['subjectQuizScore'] = self.subject_quiz_score
        return payload


@dataclass
class UserProgress:
    """Derived view over a user's results; never stored."""
    subjects: Dict[str, SubjectProgress] = field(default_factory=dict)
    streak: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'subjects': {sid: p.to_dict() for sid, p in self.subjects.items()},
            'streak': self.streak,
        }
