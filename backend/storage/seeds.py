"""Default records written the first time a collection has no document."""

from datetime import datetime, timezone

from backend.storage.base import Record

USERS = 'users'
RESOURCES = 'resources'
SESSIONS = 'sessions'
GROUPS = 'groups'
ASSESSMENTS = 'assessments'

FREQUENCY_OPTIONS = [
    {'text': 'Not at all', 'score': 0},
    {'text': 'Several days', 'score': 1},
    {'text': 'More than half the days', 'score': 2},
    {'text': 'Nearly every day', 'score': 3},
]

PHQ9_QUESTIONS = [
    'How often have you felt down, depressed, or hopeless over the last two weeks?',
    'How often have you had little interest or pleasure in doing things over the last two weeks?',
    'How often have you felt tired or had little energy over the last two weeks?',
    'How often have you had trouble falling or staying asleep, or sleeping too much over the last two weeks?',
    'How often have you felt bad about yourself - or that you are a failure or have let yourself '
    'or your family down over the last two weeks?',
    'How often have you had trouble concentrating on things, such as reading the newspaper or '
    'watching television, over the last two weeks?',
    'How often have you been moving or speaking so slowly that other people could have noticed, '
    'or the opposite - being so fidgety or restless that you have been moving around a lot more than usual?',
    'How often have you had thoughts that you would be better off dead, or of hurting yourself, '
    'over the last two weeks?',
    'How often have you felt anxious, nervous, or worried over the last two weeks?',
]


def build_seed_data(now: datetime | None = None) -> dict[str, list[Record]]:
    created_at = (now or datetime.now(timezone.utc)).isoformat()

    resources = [
        {
            'id': 1,
            'title': 'Understanding Stress and Anxiety',
            'description': 'Learn about common stress triggers and effective coping strategies.',
            'category': 'Self-Help',
            'content': (
                'Stress is a natural response to challenges. Understanding your triggers and developing '
                'healthy coping mechanisms is key to managing anxiety.'
            ),
            'type': 'Article',
            'createdAt': created_at,
        },
        {
            'id': 2,
            'title': 'Mindfulness Meditation Guide',
            'description': "A beginner's guide to mindfulness and meditation practices.",
            'category': 'Wellness',
            'content': (
                'Mindfulness meditation can help reduce stress and improve mental clarity. '
                'Start with just 5 minutes a day.'
            ),
            'type': 'Guide',
            'createdAt': created_at,
        },
    ]

    groups = [
        {
            'id': 1,
            'name': 'Anxiety Support Group',
            'description': (
                'A safe space for students dealing with anxiety to share experiences and support each other.'
            ),
            'members': [],
            'createdAt': created_at,
        },
        {
            'id': 2,
            'name': 'Stress Management Circle',
            'description': 'Learn and share stress management techniques with peers.',
            'members': [],
            'createdAt': created_at,
        },
    ]

    questions = [
        {
            'id': index,
            'question': question,
            'options': [dict(option) for option in FREQUENCY_OPTIONS],
        }
        for index, question in enumerate(PHQ9_QUESTIONS, start=1)
    ]

    return {
        USERS: [],
        RESOURCES: resources,
        SESSIONS: [],
        GROUPS: groups,
        ASSESSMENTS: questions,
    }
