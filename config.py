import os
from urllib.parse import urlparse
from dotenv import load_dotenv
from sqlalchemy.pool import QueuePool, StaticPool
import pymysql
pymysql.install_as_MySQLdb()

load_dotenv()

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'change_this_secret_key')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": QueuePool,
        "pool_size": 5,
        "max_overflow": 2,
        "pool_timeout": 10,
        "pool_pre_ping": True,
    }

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "https://lms-frontend-henna-sigma.vercel.app").split(",")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Retries for a start request that lost the attempt-number race
    QUIZ_START_MAX_RETRIES = int(os.getenv("QUIZ_START_MAX_RETRIES", "3"))
    MAX_ANSWER_LENGTH = int(os.getenv("MAX_ANSWER_LENGTH", "10000"))
    DEFAULT_PASSING_SCORE = float(os.getenv("DEFAULT_PASSING_SCORE", "60.0"))

class DevConfig(Config):
    """Development Configuration"""
    DEBUG = True
    TESTING = False
    SQLALCHEMY_DATABASE_URI = os.getenv('SQLALCHEMY_DATABASE_URI', 'mysql+pymysql://root:@localhost/lms_quiz')

class TestConfig(Config):
    DEBUG = False
    TESTING = True
    SECRET_KEY = 'test-secret-key'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_ENGINE_OPTIONS = {
        "poolclass": StaticPool,
        "connect_args": {"check_same_thread": False},
    }
    CORS_ORIGINS = ["http://localhost"]
    LOG_LEVEL = "DEBUG"

class ProdConfig(Config):
    """Production Configuration (Heroku deployment)"""
    DEBUG = False

    raw_db_url = os.getenv('DATABASE_URL')

    if raw_db_url:
        if raw_db_url.startswith("mysql://"):
            raw_db_url = raw_db_url.replace("mysql://", "mysql+pymysql://", 1)

        parsed_url = urlparse(raw_db_url)
        SQLALCHEMY_DATABASE_URI = f"{parsed_url.scheme}://{parsed_url.netloc}{parsed_url.path}"
    else:
        SQLALCHEMY_DATABASE_URI = os.getenv('JAWSDB_URL')


config_dict = {
    "development": DevConfig,
    "testing": TestConfig,
    "production": ProdConfig
}

