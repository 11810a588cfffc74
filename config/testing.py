from config.config import *  # noqa: F401,F403

SECRET_KEY = "test-secret"
LOG_LEVEL = "WARNING"

LINE_CHANNEL_ACCESS_TOKEN = "test-access-token"
LINE_CHANNEL_SECRET = "test-channel-secret"
GEMINI_API_KEY = ""

DEBUG = False
TESTING = True

AUTO_INIT_DB = False
