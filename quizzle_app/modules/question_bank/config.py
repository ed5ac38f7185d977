# File: quizzle_app/modules/question_bank/config.py


class QuestionBankConfig:
    """
    Danh mục môn học, bài học và chương của ngân hàng câu hỏi.
    """

    DIFFICULTIES = ('easy', 'hard')
    DEFAULT_DIFFICULTY = 'hard'

    SUBJECTS = [
        {
            'id': 'data-analytics',
            'name': 'Data Analytics',
            'description': 'Master data analysis, visualization, and statistical methods',
            'chapters': ['ch1', 'ch2', 'ch3', 'ch4', 'ch5'],
            'lessons': [
                {'id': 'da-1', 'title': 'Introduction to Data Analytics', 'order': 1, 'estimated_time': 25},
                {'id': 'da-2', 'title': 'Data Collection Methods', 'order': 2, 'estimated_time': 30},
                {'id': 'da-3', 'title': 'Data Cleaning and Preprocessing', 'order': 3, 'estimated_time': 35},
                {'id': 'da-4', 'title': 'Statistical Analysis', 'order': 4, 'estimated_time': 40},
                {'id': 'da-5', 'title': 'Data Visualization', 'order': 5, 'estimated_time': 30},
            ],
            'lesson_chapters': {
                'Introduction to Data Analytics': 'ch1',
                'Data Collection Methods': 'ch2',
                'Data Cleaning and Preprocessing': 'ch3',
                'Statistical Analysis': 'ch4',
                'Data Visualization': 'ch5',
            },
        },
        {
            'id': 'operating-systems',
            'name': 'Operating Systems',
            'description': 'Understand OS concepts, processes, memory management, and system calls',
            'chapters': ['ch1', 'ch2', 'ch3', 'ch4', 'ch5'],
            'lessons': [
                {'id': 'os-1', 'title': 'Introduction to Operating Systems', 'order': 1, 'estimated_time': 30},
                {'id': 'os-2', 'title': 'Process Management', 'order': 2, 'estimated_time': 35},
                {'id': 'os-3', 'title': 'Memory Management', 'order': 3, 'estimated_time': 40},
                {'id': 'os-4', 'title': 'File Systems', 'order': 4, 'estimated_time': 35},
                {'id': 'os-5', 'title': 'System Security', 'order': 5, 'estimated_time': 30},
            ],
            'lesson_chapters': {
                'Introduction to Operating Systems': 'ch1',
                'Process Management': 'ch2',
                'Memory Management': 'ch4',
                'File Systems': 'ch5',
                # ch3 holds scheduling and deadlocks
                'System Security': 'ch3',
            },
        },
        {
            'id': 'entrepreneurship',
            'name': 'Entrepreneurship',
            'description': 'Learn business planning, innovation, and startup fundamentals',
            'chapters': ['ch1', 'ch2', 'ch3', 'ch4'],
            'lessons': [
                {'id': 'ent-1', 'title': 'Introduction to Entrepreneurship', 'order': 1, 'estimated_time': 25},
                {'id': 'ent-2', 'title': 'Business Planning', 'order': 2, 'estimated_time': 40},
                {'id': 'ent-3', 'title': 'Market Research and Analysis', 'order': 3, 'estimated_time': 35},
                {'id': 'ent-4', 'title': 'Finance and Funding', 'order': 4, 'estimated_time': 45},
                {'id': 'ent-5', 'title': 'Marketing and Sales', 'order': 5, 'estimated_time': 35},
            ],
            # 'Marketing and Sales' has no chapter in the bank yet.
            'lesson_chapters': {
                'Introduction to Entrepreneurship': 'ch1',
                'Business Planning': 'ch2',
                'Market Research and Analysis': 'ch3',
                'Finance and Funding': 'ch4',
            },
        },
        {
            'id': 'software-engineering',
            'name': 'Software Engineering',
            'description': 'Master software development lifecycle, design patterns, and best practices',
            'chapters': ['ch1', 'ch2', 'ch3', 'ch4', 'ch5', 'ch6'],
            'lessons': [
                {'id': 'se-1', 'title': 'Introduction to Software Engineering', 'order': 1, 'estimated_time': 30},
                {'id': 'se-2', 'title': 'Software Development Lifecycle', 'order': 2, 'estimated_time': 35},
                {'id': 'se-3', 'title': 'Requirements Engineering', 'order': 3, 'estimated_time': 40},
                {'id': 'se-4', 'title': 'Software Design and Architecture', 'order': 4, 'estimated_time': 45},
                {'id': 'se-5', 'title': 'Testing and Quality Assurance', 'order': 5, 'estimated_time': 35},
            ],
            'lesson_chapters': {
                'Introduction to Software Engineering': 'ch1',
                'Software Development Lifecycle': 'ch2',
                'Requirements Engineering': 'ch3',
                'Software Design and Architecture': 'ch4',
                'Testing and Quality Assurance': 'ch5',
            },
        },
    ]

    SUBJECT_IDS = tuple(subject['id'] for subject in SUBJECTS)

    @classmethod
    def get_subject(cls, subject_id):
        for subject in cls.SUBJECTS:
            if subject['id'] == subject_id:
                return subject
        return None
