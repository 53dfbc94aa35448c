from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Import models
from models.quizzes import Quiz
from models.quiz_questions import QuizQuestion
from models.quiz_answer_options import QuizAnswerOption
from models.quiz_attempts import QuizAttempt
from models.quiz_attempts_answers import QuizAttemptAnswer
from models.quiz_results import QuizResult
