import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")

BATCH_MAX_WORKERS = 1

ROUND_RELATIVE_TO_PLAN = bool(int(os.getenv("ROUND_RELATIVE_TO_PLAN", "0")))

DEBUG = False
TESTING = True
