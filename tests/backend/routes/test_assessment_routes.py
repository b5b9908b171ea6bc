def _answers(client, score: int) -> list[dict]:
    questions = client.get('/assessments/questions').json()
    return [{'questionId': question['id'], 'score': score} for question in questions]


def test_questions_are_public(client) -> None:
    response = client.get('/assessments/questions')

    assert response.status_code == 200
    questions = response.json()
    assert len(questions) == 9
    assert [option['score'] for option in questions[0]['options']] == [0, 1, 2, 3]


def test_submit_scores_answers(client, student_headers) -> None:
    response = client.post('/assessments/submit', json={'answers': _answers(client, 1)}, headers=student_headers)

    assert response.status_code == 200
    body = response.json()
    assert body['totalScore'] == 9
    assert body['rating'] == 'Good Mental Health'
    assert body['maxScore'] == 27


def test_submit_all_maximum_scores(client, admin_headers) -> None:
    response = client.post('/assessments/submit', json={'answers': _answers(client, 3)}, headers=admin_headers)

    assert response.json()['totalScore'] == 27
    assert response.json()['rating'] == 'Severe Mental Health Concerns'


def test_submit_requires_token(client) -> None:
    response = client.post('/assessments/submit', json={'answers': _answers(client, 0)})

    assert response.status_code == 401


def test_submit_incomplete_answers(client, student_headers) -> None:
    response = client.post('/assessments/submit', json={'answers': _answers(client, 1)[:5]}, headers=student_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Please answer all questions before submitting.'}


def test_submit_invalid_answers_format(client, student_headers) -> None:
    response = client.post('/assessments/submit', json={'answers': 'none'}, headers=student_headers)

    assert response.status_code == 400
    assert response.json() == {'error': 'Invalid answers format'}


def test_submit_with_unhashable_question_ids(client, student_headers) -> None:
    answers = [{'questionId': [answer['questionId']], 'score': 1} for answer in _answers(client, 1)]

    response = client.post('/assessments/submit', json={'answers': answers}, headers=student_headers)

    assert response.status_code == 200
    assert response.json()['totalScore'] == 0
    assert response.json()['rating'] == 'Excellent Mental Health'
