SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

LOG_LEVEL = "WARNING"
SESSION_DAYS = 1

SEED_DEMO_DATA = False
