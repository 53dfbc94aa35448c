from models import db
from models.quizzes import Quiz
from models.quiz_questions import QuizQuestion
from models.quiz_attempts import QuizAttempt
from models.quiz_attempts_answers import QuizAttemptAnswer
from models.quiz_results import QuizResult


class QuizRepository:
    """
    Persistence for the attempt engine over the Flask-SQLAlchemy session.

    Methods only add and flush; committing or rolling back is left to the
    caller so each engine operation stays all-or-nothing.
    """

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    # Quizzes and questions

    def load_quiz(self, quiz_id):
        return self.session.get(Quiz, quiz_id)

    def load_questions(self, quiz_id):
        return (
            QuizQuestion.query
            .filter_by(quiz_id=quiz_id)
            .order_by(QuizQuestion.order_position, QuizQuestion.id)
            .all()
        )

    def get_question(self, quiz_id, question_id):
        return QuizQuestion.query.filter_by(quiz_id=quiz_id, id=question_id).first()

    # Attempts

    def count_attempts(self, quiz_id, student_id):
        return QuizAttempt.query.filter_by(quiz_id=quiz_id, student_id=student_id).count()

    def create_attempt(self, attempt):
        """Insert and flush; a duplicate attempt number raises IntegrityError here."""
        self.session.add(attempt)
        self.session.flush()
        return attempt

    def get_attempt(self, attempt_id, for_update=False):
        query = QuizAttempt.query.filter_by(id=attempt_id)
        if for_update:
            query = query.with_for_update()
        return query.first()

    def latest_attempt(self, quiz_id, student_id):
        return (
            QuizAttempt.query
            .filter_by(quiz_id=quiz_id, student_id=student_id)
            .order_by(QuizAttempt.attempt_number.desc())
            .first()
        )

    def list_attempts(self, quiz_id=None, student_id=None, status=None, limit=100):
        query = QuizAttempt.query
        if quiz_id is not None:
            query = query.filter(QuizAttempt.quiz_id == quiz_id)
        if student_id is not None:
            query = query.filter(QuizAttempt.student_id == student_id)
        if status:
            query = query.filter(QuizAttempt.status == status)
        return (
            query
            .order_by(QuizAttempt.started_at.desc(), QuizAttempt.id.desc())
            .limit(limit)
            .all()
        )

    # Responses

    def get_response(self, attempt_id, question_id):
        return QuizAttemptAnswer.query.filter_by(attempt_id=attempt_id, question_id=question_id).first()

    def upsert_response(self, attempt_id, question_id, **values):
        """Replace the stored answer for (attempt, question), inserting it on first write."""
        response = self.get_response(attempt_id, question_id)
        if response is None:
            response = QuizAttemptAnswer(attempt_id=attempt_id, question_id=question_id)
            self.session.add(response)
        for key, value in values.items():
            setattr(response, key, value)
        self.session.flush()
        return response

    def list_responses(self, attempt_id):
        return (
            QuizAttemptAnswer.query
            .filter_by(attempt_id=attempt_id)
            .order_by(QuizAttemptAnswer.question_id)
            .all()
        )

    # Grades

    def get_grade(self, attempt_id):
        return QuizResult.query.filter_by(attempt_id=attempt_id).first()

    def upsert_grade(self, attempt, quiz, stats):
        grade = self.get_grade(attempt.id)
        if grade is None:
            grade = QuizResult(attempt_id=attempt.id)
            self.session.add(grade)

        grade.quiz_id = attempt.quiz_id
        grade.student_id = attempt.student_id
        grade.course_id = quiz.course_id
        grade.score = stats.total_score
        grade.max_score = stats.max_score
        grade.percentage = stats.percentage
        grade.passed = stats.passed
        grade.total_questions = stats.total_questions
        grade.questions_answered = stats.questions_answered
        grade.questions_unanswered = stats.questions_unanswered
        grade.time_spent_seconds = stats.time_spent_seconds
        self.session.flush()
        return grade

    def delete_grade(self, attempt_id):
        grade = self.get_grade(attempt_id)
        if grade is not None:
            self.session.delete(grade)
            self.session.flush()
