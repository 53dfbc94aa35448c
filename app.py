import logging
import os
from dotenv import load_dotenv
load_dotenv()
from flask import Flask, jsonify
from flask_cors import CORS
from flask_migrate import Migrate
from config import config_dict, ProdConfig
from classes.errors import QuizEngineError
from models import db
from routes.lecturers import lecturer_bp
from routes.students import student_bp

logger = logging.getLogger(__name__)

migrate = Migrate()


def create_app(env=None):
    env = (env or os.environ.get("FLASK_ENV", "production")).lower()

    app = Flask(__name__)
    app.config.from_object(config_dict.get(env, ProdConfig))
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError("No database configured: set DATABASE_URL or JAWSDB_URL")

    logging.basicConfig(
        level=app.config.get("LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    logger.info("Environment: %s", env)

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"], "supports_credentials": True}})

    db.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(lecturer_bp, url_prefix='/api/lecturer')
    app.register_blueprint(student_bp, url_prefix='/api/student')

    @app.errorhandler(QuizEngineError)
    def handle_quiz_engine_error(error):
        return jsonify(error.to_dict()), error.http_status

    @app.route('/')
    def home():
        return "Welcome to the LMS Quiz Engine!"

    @app.route('/health')
    def health():
        return jsonify({"status": "ok"}), 200

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=app.config['DEBUG'])
