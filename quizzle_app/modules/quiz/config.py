# File: quizzle_app/modules/quiz/config.py


class QuizConfig:
    """
    Cấu hình mặc định cho các loại quiz.
    """
    QUIZ_LESSON = 'lesson'
    QUIZ_SUBJECT = 'subject'
    QUIZ_FULL_SYLLABUS = 'full-syllabus'
    QUIZ_TYPES = (QUIZ_LESSON, QUIZ_SUBJECT, QUIZ_FULL_SYLLABUS)

    PASS_THRESHOLD = 60

    QUESTION_COUNTS = {
        QUIZ_LESSON: 5,
        QUIZ_SUBJECT: 30,
        QUIZ_FULL_SYLLABUS: 100,
    }

    # Seconds; lesson quizzes are timed but never cut off.
    TIME_LIMITS = {
        QUIZ_LESSON: None,
        QUIZ_SUBJECT: 1200,
        QUIZ_FULL_SYLLABUS: 3600,
    }

    # Remaining seconds at which the one-time warning fires.
    WARNING_THRESHOLDS = {
        QUIZ_LESSON: None,
        QUIZ_SUBJECT: 300,
        QUIZ_FULL_SYLLABUS: 600,
    }

    FULL_SYLLABUS_PER_SUBJECT = 25

    # Labels stored as lesson_title for non-lesson quizzes
    SUBJECT_QUIZ_TITLE = 'Subject Quiz'
    FULL_SYLLABUS_SUBJECT_ID = 'full-syllabus'
    FULL_SYLLABUS_TITLE = 'Full Syllabus Exam'

    GRADE_BANDS = [
        (90, 'A+', 'Excellent'),
        (80, 'A', 'Very Good'),
        (70, 'B', 'Good'),
        (60, 'C', 'Satisfactory'),
        (0, 'F', 'Needs Improvement'),
    ]
