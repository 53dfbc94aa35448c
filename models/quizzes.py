from models import db

class Quiz(db.Model):
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    course_id = db.Column(db.Integer, nullable=False, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    passing_score = db.Column(db.Float, nullable=True)  # percentage; None uses DEFAULT_PASSING_SCORE
    time_limit = db.Column(db.Integer, nullable=True)  # minutes
    attempts_allowed = db.Column(db.Integer, nullable=False, default=1)  # 0 = unlimited
    shuffle_questions = db.Column(db.Boolean, nullable=False, default=False)
    random_selection = db.Column(db.Boolean, nullable=False, default=False)
    number_of_random_questions = db.Column(db.Integer, nullable=True)
    is_published = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=db.func.now(), nullable=False)

    questions = db.relationship(
        "QuizQuestion",
        back_populates="quiz",
        order_by="QuizQuestion.order_position",
        cascade="all, delete-orphan",
    )

    @property
    def total_questions(self):
        """Dynamically count total questions without storing in the database"""
        return len(self.questions)

    @property
    def total_points(self):
        return sum(q.points or 0 for q in self.questions)

    def __repr__(self):
        return f"<Quiz {self.title}>"

    def to_dict(self):
        return {
            "id": self.id,
            "course_id": self.course_id,
            "title": self.title,
            "description": self.description,
            "passing_score": self.passing_score,
            "time_limit": self.time_limit,
            "attempts_allowed": self.attempts_allowed,
            "shuffle_questions": self.shuffle_questions,
            "random_selection": self.random_selection,
            "number_of_random_questions": self.number_of_random_questions,
            "is_published": self.is_published,
            "total_questions": self.total_questions,
            "total_points": self.total_points,
        }
