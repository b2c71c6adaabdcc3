import os
from dotenv import load_dotenv

load_dotenv()

class BaseConfig:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", os.getenv("SECRET_KEY", "dev-secret"))
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Pages a section may belong to when none is given
    DEFAULT_PAGE_SLUG = os.getenv("DEFAULT_PAGE_SLUG", "home")

    # Used by `flask seed-tenant`
    SEED_TENANT_SLUG = os.getenv("SEED_TENANT_SLUG", "springfield")
    SEED_TENANT_NAME = os.getenv("SEED_TENANT_NAME", "Springfield Academy")

class DevelopmentConfig(BaseConfig):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv("DEV_DATABASE_URI", "sqlite:///sitecms-dev.db")

class TestingConfig(BaseConfig):
    TESTING = True
    LOG_LEVEL = "WARNING"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URI", "sqlite:///:memory:")

class ProductionConfig(BaseConfig):
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URI")

config_by_name = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig
}
