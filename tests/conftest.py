import pytest

from app import create_app
from models import db
from models.quizzes import Quiz
from models.quiz_questions import QuizQuestion
from models.quiz_answer_options import QuizAnswerOption
from utils.tokens import get_jwt_token


@pytest.fixture
def app():
    app = create_app("testing")
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    def _headers(user_id, role="student"):
        token = get_jwt_token({"user_id": user_id, "role": role})
        return {"Authorization": f"Bearer {token}"}
    return _headers


def _choice(question_type, text, points, order, options):
    question = QuizQuestion(
        question_text=text,
        question_type=question_type,
        points=points,
        order_position=order,
    )
    for position, (option_text, is_correct, feedback) in enumerate(options):
        question.options.append(QuizAnswerOption(
            option_text=option_text,
            is_correct=is_correct,
            feedback=feedback,
            order_position=position,
        ))
    return question


@pytest.fixture
def make_quiz(app):
    """Create a published quiz; `questions` picks from the standard question set by key."""
    def _make(questions=("mcq", "tf", "short", "keywords", "essay"), **fields):
        builders = {
            "mcq": lambda order: _choice(
                "multiple_choice", "Which planet is known as the red planet?", 10, order,
                [("Mars", True, "Well done"), ("Venus", False, None), ("Jupiter", False, None)],
            ),
            "tf": lambda order: _choice(
                "true_false", "Water boils at 100C at sea level.", 5, order,
                [("True", True, None), ("False", False, None)],
            ),
            "short": lambda order: QuizQuestion(
                question_text="What is the capital of France?",
                question_type="short_answer",
                points=5,
                order_position=order,
                acceptable_answers=["Paris", "Paris, France"],
            ),
            "keywords": lambda order: QuizQuestion(
                question_text="Describe photosynthesis.",
                question_type="short_answer_keywords",
                points=20,
                order_position=order,
                keyword_groups=[["chlorophyll"], ["sunlight", "light"], ["carbon dioxide", "co2"], ["glucose", "sugar"]],
                required_keywords=4,
            ),
            "essay": lambda order: QuizQuestion(
                question_text="Discuss the causes of the First World War.",
                question_type="essay",
                points=10,
                order_position=order,
            ),
        }

        values = {
            "course_id": 1,
            "title": "Sample quiz",
            "passing_score": 60.0,
            "attempts_allowed": 2,
            "is_published": True,
        }
        values.update(fields)
        quiz = Quiz(**values)
        for order, key in enumerate(questions):
            quiz.questions.append(builders[key](order))

        db.session.add(quiz)
        db.session.commit()
        return quiz
    return _make


def question_of(quiz, question_type):
    return next(q for q in quiz.questions if q.question_type == question_type)


def option_of(question, text):
    return next(o for o in question.options if o.option_text == text)
