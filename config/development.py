import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "batch_attendance"),
}

DEBUG = True

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# Institution clock: fixed offset from UTC in minutes (UTC+3 by default)
UTC_OFFSET_MINUTES = int(os.getenv("UTC_OFFSET_MINUTES", "180"))
CHECKIN_OPEN_MINUTES = int(os.getenv("CHECKIN_OPEN_MINUTES", "30"))
ABSENCE_WARNING_THRESHOLD = int(os.getenv("ABSENCE_WARNING_THRESHOLD", "2"))
ABSENCE_BLOCK_THRESHOLD = int(os.getenv("ABSENCE_BLOCK_THRESHOLD", "4"))
# Courses stored without a schedule get Mon/Wed 09:00-11:00 instead of free-form check-in
USE_DEFAULT_SCHEDULE = bool(int(os.getenv("USE_DEFAULT_SCHEDULE", "1")))

# Empty secret disables the Authorization check on the cron endpoint
CRON_SECRET = os.getenv("CRON_SECRET", "")

MAIL_SERVER = os.getenv("MAIL_SERVER", "localhost")
MAIL_PORT = int(os.getenv("MAIL_PORT", "25"))
MAIL_USE_TLS = bool(int(os.getenv("MAIL_USE_TLS", "0")))
MAIL_USERNAME = os.getenv("MAIL_USERNAME")
MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
MAIL_DEFAULT_SENDER = os.getenv("MAIL_DEFAULT_SENDER", "attendance@localhost")
MAIL_SUPPRESS_SEND = bool(int(os.getenv("MAIL_SUPPRESS_SEND", "1")))
