import os

SECRET_KEY = os.environ["SECRET_KEY"]

DEBUG = False
TESTING = False

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SESSION_DAYS = int(os.getenv("SESSION_DAYS", "7"))

SEED_DEMO_DATA = bool(int(os.getenv("SEED_DEMO_DATA", "0")))
