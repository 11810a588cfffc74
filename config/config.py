import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "attendance-bot-secret"
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # DB
    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", "attendance_bot")

    AUTO_INIT_DB = bool(int(os.environ.get("AUTO_INIT_DB", "0")))

    # Messaging + classifier
    LINE_CHANNEL_ACCESS_TOKEN = os.environ.get("LINE_CHANNEL_ACCESS_TOKEN", "")
    LINE_CHANNEL_SECRET = os.environ.get("LINE_CHANNEL_SECRET", "")
    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-1.5-pro")

    # Calendar
    HOLIDAY_SOURCE_URL = os.environ.get(
        "HOLIDAY_SOURCE_URL", "https://cdn.jsdelivr.net/gh/ruyut/TaiwanCalendar/data/{year}.json"
    )
    HOLIDAY_REFRESH_HOURS = int(os.environ.get("HOLIDAY_REFRESH_HOURS", "24"))
    TIMEZONE = os.environ.get("TIMEZONE", "Asia/Taipei")

    # Work rules
    STANDARD_SHIFT_HOURS = int(os.environ.get("STANDARD_SHIFT_HOURS", "9"))
    BREAK_START = os.environ.get("BREAK_START", "12:00")
    BREAK_END = os.environ.get("BREAK_END", "13:00")
    OVERTIME_MIN_MINUTES = int(os.environ.get("OVERTIME_MIN_MINUTES", "30"))
    DEFAULT_OVERTIME_MULTIPLIER = os.environ.get("DEFAULT_OVERTIME_MULTIPLIER", "1.33")
    HOURLY_BREAK_THRESHOLD_MINUTES = int(os.environ.get("HOURLY_BREAK_THRESHOLD_MINUTES", "301"))
    HOURLY_BREAK_MINUTES = int(os.environ.get("HOURLY_BREAK_MINUTES", "60"))
    SPECIAL_LEAVE_LABEL = os.environ.get("SPECIAL_LEAVE_LABEL", "special")
    # (months of service, days)
    SPECIAL_LEAVE_TABLE = ((6, 3), (12, 7), (24, 10), (36, 14), (60, 15), (120, 16))
    REPORT_PREVIEW_LIMIT = int(os.environ.get("REPORT_PREVIEW_LIMIT", "3800"))
    MAX_LEAVE_RANGE_DAYS = int(os.environ.get("MAX_LEAVE_RANGE_DAYS", "62"))


SECRET_KEY = Config.SECRET_KEY
LOG_LEVEL = Config.LOG_LEVEL
DB_CONFIG = {
    "host": Config.DB_HOST,
    "port": Config.DB_PORT,
    "user": Config.DB_USER,
    "password": Config.DB_PASSWORD,
    "database": Config.DB_NAME,
}
AUTO_INIT_DB = Config.AUTO_INIT_DB

LINE_CHANNEL_ACCESS_TOKEN = Config.LINE_CHANNEL_ACCESS_TOKEN
LINE_CHANNEL_SECRET = Config.LINE_CHANNEL_SECRET
GEMINI_API_KEY = Config.GEMINI_API_KEY
GEMINI_MODEL = Config.GEMINI_MODEL

HOLIDAY_SOURCE_URL = Config.HOLIDAY_SOURCE_URL
HOLIDAY_REFRESH_HOURS = Config.HOLIDAY_REFRESH_HOURS
TIMEZONE = Config.TIMEZONE

STANDARD_SHIFT_HOURS = Config.STANDARD_SHIFT_HOURS
BREAK_START = Config.BREAK_START
BREAK_END = Config.BREAK_END
OVERTIME_MIN_MINUTES = Config.OVERTIME_MIN_MINUTES
DEFAULT_OVERTIME_MULTIPLIER = Config.DEFAULT_OVERTIME_MULTIPLIER
HOURLY_BREAK_THRESHOLD_MINUTES = Config.HOURLY_BREAK_THRESHOLD_MINUTES
HOURLY_BREAK_MINUTES = Config.HOURLY_BREAK_MINUTES
SPECIAL_LEAVE_LABEL = Config.SPECIAL_LEAVE_LABEL
SPECIAL_LEAVE_TABLE = Config.SPECIAL_LEAVE_TABLE
REPORT_PREVIEW_LIMIT = Config.REPORT_PREVIEW_LIMIT
MAX_LEAVE_RANGE_DAYS = Config.MAX_LEAVE_RANGE_DAYS

DEBUG = bool(int(os.environ.get("DEBUG", "1")))
