import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

BATCH_MAX_WORKERS = int(os.getenv("BATCH_MAX_WORKERS", "8"))

ROUND_RELATIVE_TO_PLAN = bool(int(os.getenv("ROUND_RELATIVE_TO_PLAN", "0")))

DEBUG = False
