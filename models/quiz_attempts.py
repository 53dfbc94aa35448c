from models import db
from utils.helpers import format_datetime

IN_PROGRESS = "in_progress"
SUBMITTED = "submitted"
GRADED = "graded"
ABANDONED = "abandoned"

class QuizAttempt(db.Model):
    __tablename__ = "quiz_attempts"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False)
    student_id = db.Column(db.Integer, nullable=False)
    attempt_number = db.Column(db.Integer, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=IN_PROGRESS)
    started_at = db.Column(db.DateTime, nullable=False)
    submitted_at = db.Column(db.DateTime, nullable=True)
    graded_at = db.Column(db.DateTime, nullable=True)
    time_spent_seconds = db.Column(db.Integer, nullable=True)

    total_score = db.Column(db.Float, nullable=True)
    max_score = db.Column(db.Float, nullable=True)
    percentage_score = db.Column(db.Float, nullable=True)
    passed = db.Column(db.Boolean, nullable=True)
    questions_answered = db.Column(db.Integer, nullable=True)
    questions_unanswered = db.Column(db.Integer, nullable=True)
    needs_review = db.Column(db.Boolean, nullable=False, default=False)

    quiz = db.relationship("Quiz", backref=db.backref("attempts", lazy=True))
    answers = db.relationship(
        "QuizAttemptAnswer",
        back_populates="attempt",
        lazy=True,
        cascade="all, delete-orphan",
    )
    result = db.relationship("QuizResult", uselist=False, back_populates="attempt")

    __table_args__ = (
        db.UniqueConstraint("quiz_id", "student_id", "attempt_number", name="uq_quiz_student_attempt_number"),
        db.Index("ix_quiz_attempts_quiz_student", "quiz_id", "student_id"),
    )

    def __repr__(self):
        return f"<QuizAttempt {self.id} quiz={self.quiz_id} student={self.student_id} #{self.attempt_number} {self.status}>"

    def to_dict(self, include_answers=False):
        data = {
            "id": self.id,
            "quiz_id": self.quiz_id,
            "student_id": self.student_id,
            "attempt_number": self.attempt_number,
            "status": self.status,
            "started_at": format_datetime(self.started_at),
            "submitted_at": format_datetime(self.submitted_at),
            "graded_at": format_datetime(self.graded_at),
            "time_spent_seconds": self.time_spent_seconds,
            "total_score": self.total_score,
            "max_score": self.max_score,
            "percentage_score": self.percentage_score,
            "passed": self.passed,
            "questions_answered": self.questions_answered,
            "questions_unanswered": self.questions_unanswered,
            "needs_review": self.needs_review,
        }
        if include_answers:
            data["answers"] = [answer.to_dict() for answer in self.answers]
            data["result"] = self.result.to_dict() if self.result else None
        return data
