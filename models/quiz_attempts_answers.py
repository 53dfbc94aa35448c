from models import db
from utils.helpers import format_datetime

class QuizAttemptAnswer(db.Model):
    """One student response to one question within one attempt."""
    __tablename__ = "quiz_attempt_answers"

    id = db.Column(db.Integer, primary_key=True)
    attempt_id = db.Column(db.Integer, db.ForeignKey("quiz_attempts.id"), nullable=False)
    question_id = db.Column(db.Integer, db.ForeignKey("quiz_questions.id"), nullable=False)
    selected_option_id = db.Column(db.Integer, nullable=True)
    answer_text = db.Column(db.Text, nullable=True)
    answered_at = db.Column(db.DateTime, nullable=True)

    points_earned = db.Column(db.Float, nullable=False, default=0)
    is_correct = db.Column(db.Boolean, nullable=True)
    feedback = db.Column(db.Text, nullable=True)
    requires_manual_review = db.Column(db.Boolean, nullable=False, default=False)

    reviewer_points = db.Column(db.Float, nullable=True)
    reviewer_feedback = db.Column(db.Text, nullable=True)
    reviewed_by = db.Column(db.Integer, nullable=True)
    reviewed_at = db.Column(db.DateTime, nullable=True)

    attempt = db.relationship("QuizAttempt", back_populates="answers")
    question = db.relationship("QuizQuestion")

    __table_args__ = (
        db.UniqueConstraint("attempt_id", "question_id", name="uq_attempt_question"),
    )

    @property
    def is_blank(self):
        return self.selected_option_id is None and not (self.answer_text or "").strip()

    @property
    def is_resolved(self):
        """A manual-review response counts as resolved once a reviewer scored it."""
        return self.reviewer_points is not None

    @property
    def pending_review(self):
        return self.requires_manual_review and not self.is_resolved

    def to_dict(self):
        return {
            "id": self.id,
            "attempt_id": self.attempt_id,
            "question_id": self.question_id,
            "selected_option_id": self.selected_option_id,
            "answer_text": self.answer_text,
            "answered_at": format_datetime(self.answered_at),
            "points_earned": self.points_earned,
            "is_correct": self.is_correct,
            "feedback": self.feedback,
            "requires_manual_review": self.requires_manual_review,
            "reviewer_points": self.reviewer_points,
            "reviewer_feedback": self.reviewer_feedback,
            "reviewed_by": self.reviewed_by,
            "reviewed_at": format_datetime(self.reviewed_at),
        }
