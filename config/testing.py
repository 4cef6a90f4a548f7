import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "batch_attendance_test"),
}

DEBUG = False
TESTING = True

AUTO_INIT_DB = False

UTC_OFFSET_MINUTES = 180
CHECKIN_OPEN_MINUTES = 30
ABSENCE_WARNING_THRESHOLD = 2
ABSENCE_BLOCK_THRESHOLD = 4
USE_DEFAULT_SCHEDULE = False

CRON_SECRET = os.getenv("CRON_SECRET", "test-cron-secret")

MAIL_SERVER = "localhost"
MAIL_PORT = 25
MAIL_USE_TLS = False
MAIL_USERNAME = None
MAIL_PASSWORD = None
MAIL_DEFAULT_SENDER = "attendance@test.local"
MAIL_SUPPRESS_SEND = True
