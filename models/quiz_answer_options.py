from models import db

class QuizAnswerOption(db.Model):
    __tablename__ = "quiz_answer_options"

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey("quiz_questions.id"), nullable=False, index=True)
    option_text = db.Column(db.Text, nullable=False)
    is_correct = db.Column(db.Boolean, nullable=False, default=False)
    feedback = db.Column(db.Text, nullable=True)
    order_position = db.Column(db.Integer, nullable=False, default=0)

    question = db.relationship("QuizQuestion", back_populates="options")

    def to_dict(self, include_key=False):
        data = {
            "id": self.id,
            "question_id": self.question_id,
            "option_text": self.option_text,
            "order_position": self.order_position,
        }
        if include_key:
            data["is_correct"] = self.is_correct
            data["feedback"] = self.feedback
        return data
