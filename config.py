import os
from dotenv import load_dotenv
load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    DATA_FILE = os.getenv("DATA_FILE", "./db.json")
    # empty REDIS_URL runs notification jobs inline
    REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    NOTIFY_QUEUE = os.getenv("NOTIFY_QUEUE", "default")
    SENDGRID_API_KEY = os.getenv("SENDGRID_API_KEY")
    MAIL_FROM = os.getenv("MAIL_FROM", "noreply@example.com")
    MAIL_FROM_NAME = os.getenv("MAIL_FROM_NAME", "Recruit Team")
    UID_DOMAIN = os.getenv("UID_DOMAIN", "example.local")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
