import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

BATCH_MAX_WORKERS = int(os.getenv("BATCH_MAX_WORKERS", "2"))

# Rounding grids anchored at the plan's come_from unless a config says otherwise
ROUND_RELATIVE_TO_PLAN = bool(int(os.getenv("ROUND_RELATIVE_TO_PLAN", "0")))

DEBUG = True
