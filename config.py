# config.py
import os
from dotenv import load_dotenv

load_dotenv()

DEFAULT_MONGO_URI = "mongodb://localhost:27017/mentor-student"
DEFAULT_DB_NAME = "mentor-student"


class Settings:
    def __init__(self):
        self.mongo_uri = os.getenv("MONGO_URI", DEFAULT_MONGO_URI)
        self.mongo_db_name = os.getenv("MONGO_DB_NAME")  # falls back to the URI's database
        self.host = os.getenv("HOST", "0.0.0.0")
        self.port = int(os.getenv("PORT", "3000"))
        self.cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
