from models import db

class QuizResult(db.Model):
    """Attempt-level grade, one per attempt, written only when the attempt is graded."""
    __tablename__ = "quiz_results"

    id = db.Column(db.Integer, primary_key=True)
    attempt_id = db.Column(db.Integer, db.ForeignKey("quiz_attempts.id"), nullable=False, unique=True)
    quiz_id = db.Column(db.Integer, nullable=False)
    student_id = db.Column(db.Integer, nullable=False)
    course_id = db.Column(db.Integer, nullable=True)
    score = db.Column(db.Float, nullable=False, default=0)
    max_score = db.Column(db.Float, nullable=False, default=0)
    percentage = db.Column(db.Float, nullable=False, default=0)
    passed = db.Column(db.Boolean, nullable=False, default=False)
    total_questions = db.Column(db.Integer, nullable=False, default=0)
    questions_answered = db.Column(db.Integer, nullable=False, default=0)
    questions_unanswered = db.Column(db.Integer, nullable=False, default=0)
    time_spent_seconds = db.Column(db.Integer, nullable=True)

    attempt = db.relationship("QuizAttempt", back_populates="result")

    def to_dict(self):
        return {
            "attempt_id": self.attempt_id,
            "quiz_id": self.quiz_id,
            "student_id": self.student_id,
            "course_id": self.course_id,
            "score": self.score,
            "max_score": self.max_score,
            "percentage": self.percentage,
            "passed": self.passed,
            "total_questions": self.total_questions,
            "questions_answered": self.questions_answered,
            "questions_unanswered": self.questions_unanswered,
            "time_spent_seconds": self.time_spent_seconds,
        }
