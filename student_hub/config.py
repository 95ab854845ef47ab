import os

import cloudinary
from dotenv import load_dotenv
load_dotenv()


def _split_origins(value):
    return [origin.strip() for origin in value.split(",") if origin.strip()]


class Config:
    # JWT
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key-change-me")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "dev-jwt-secret-key-change-me")
    JWT_ALGORITHM = "HS256"
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///student_hub.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # ======= REQUEST LIMITS =======
    MAX_CONTENT_LENGTH = 10 * 1024 * 1024
    MAX_CERTIFICATE_SIZE = 5 * 1024 * 1024
    MAX_PROFILE_PICTURE_SIZE = 5 * 1024 * 1024

    ALLOWED_ORIGINS = _split_origins(
        os.getenv("ALLOWED_ORIGINS", "http://localhost:5173,http://localhost:3000")
    )
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # ======= FILE STORAGE =======
    FILE_FETCH_TIMEOUT = int(os.getenv("FILE_FETCH_TIMEOUT", "30"))
    CLOUDINARY_CLOUD_NAME = os.getenv("CLOUDINARY_CLOUD_NAME", "")
    CLOUDINARY_API_KEY = os.getenv("CLOUDINARY_API_KEY", "")
    CLOUDINARY_API_SECRET = os.getenv("CLOUDINARY_API_SECRET", "")
    CERTIFICATE_FOLDER = "student-hub/certificates"
    PROFILE_FOLDER = "student-hub/profiles"

    @classmethod
    def init_cloudinary(cls):
        cloudinary.config(
            cloud_name=cls.CLOUDINARY_CLOUD_NAME,
            api_key=cls.CLOUDINARY_API_KEY,
            api_secret=cls.CLOUDINARY_API_SECRET,
            secure=True
        )


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SECRET_KEY = "test-secret-key"
    JWT_SECRET_KEY = "test-jwt-secret-key-for-testing-only-0123456789"
    CLOUDINARY_CLOUD_NAME = "demo-hub"
    CLOUDINARY_API_KEY = "123456789012345"
    CLOUDINARY_API_SECRET = "test-api-secret"
    LOG_LEVEL = "WARNING"
