import os

from dotenv import load_dotenv


load_dotenv()


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if not value:
        return default
    return [item.strip() for item in value.split(',') if item.strip()]

APP_ENV = os.getenv("APP_ENV", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./escuela.db")
# "sql" persists through DATABASE_URL, "memory" keeps records for the process lifetime.
STORE_BACKEND = os.getenv("STORE_BACKEND", "sql").strip().lower()

CORS_ORIGINS = _get_list(os.getenv("CORS_ORIGINS"), ['http://localhost:4200'])

AWS_REGION = os.getenv("AWS_REGION", "us-east-1")
S3_BUCKET_NAME = os.getenv("S3_BUCKET_NAME", "")
SNS_TOPIC_ARN = os.getenv("SNS_TOPIC_ARN", "")

SESSION_TOKEN_BYTES = int(os.getenv("SESSION_TOKEN_BYTES", "64"))


def validate_runtime_config() -> None:
    if STORE_BACKEND not in {"sql", "memory"}:
        raise RuntimeError(f"Unknown STORE_BACKEND '{STORE_BACKEND}'.")
    if APP_ENV.lower() != "production":
        return
    if STORE_BACKEND == "memory":
        raise RuntimeError("STORE_BACKEND=memory is not allowed in production.")
    if not S3_BUCKET_NAME:
        raise RuntimeError("S3_BUCKET_NAME must be set in production.")
    if not SNS_TOPIC_ARN:
        raise RuntimeError("SNS_TOPIC_ARN must be set in production.")
