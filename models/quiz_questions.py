from models import db

QUESTION_TYPES = (
    "multiple_choice",
    "true_false",
    "short_answer",
    "short_answer_keywords",
    "essay",
)

class QuizQuestion(db.Model):
    __tablename__ = "quiz_questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id"), nullable=False, index=True)
    question_text = db.Column(db.Text, nullable=False)
    question_type = db.Column(db.String(30), nullable=False)
    points = db.Column(db.Float, nullable=False, default=1)
    order_position = db.Column(db.Integer, nullable=False, default=0)

    # short_answer: literal answers accepted after trim/case-fold
    acceptable_answers = db.Column(db.JSON, nullable=True)
    # short_answer_keywords: [["photosynthesis"], ["light", "sunlight"], ...]
    keyword_groups = db.Column(db.JSON, nullable=True)
    required_keywords = db.Column(db.Integer, nullable=False, default=1)

    quiz = db.relationship("Quiz", back_populates="questions")
    options = db.relationship(
        "QuizAnswerOption",
        back_populates="question",
        order_by="QuizAnswerOption.order_position",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def is_choice(self):
        return self.question_type in ("multiple_choice", "true_false")

    def __repr__(self):
        return f"<QuizQuestion {self.id} ({self.question_type})>"

    def to_dict(self, include_key=False):
        data = {
            "id": self.id,
            "quiz_id": self.quiz_id,
            "question_text": self.question_text,
            "question_type": self.question_type,
            "points": self.points,
            "order_position": self.order_position,
            "options": [o.to_dict(include_key=include_key) for o in self.options],
        }
        if include_key:
            data["acceptable_answers"] = self.acceptable_answers or []
            data["keyword_groups"] = self.keyword_groups or []
            data["required_keywords"] = self.required_keywords
        return data
