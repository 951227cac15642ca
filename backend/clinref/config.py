import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Revision engine
    REVISION_MAX_ATTEMPTS = int(os.getenv("REVISION_MAX_ATTEMPTS", "3"))
    REVISIONS_PAGE_SIZE = int(os.getenv("REVISIONS_PAGE_SIZE", "20"))
    REVISIONS_MAX_PAGE_SIZE = int(os.getenv("REVISIONS_MAX_PAGE_SIZE", "100"))
    DEFAULT_EDITOR = os.getenv("DEFAULT_EDITOR", "admin")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///clinref-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-secret-key-for-jwt-minimum-32-chars"
    SQLALCHEMY_DATABASE_URI = "sqlite://"

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
