import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# "file" keeps one JSON file per collection under STORAGE_DIR; "memory" is lost on exit
STORAGE_BACKEND = os.getenv("STORAGE_BACKEND", "file")
STORAGE_DIR = os.getenv("STORAGE_DIR", "data")

LOW_ATTENDANCE_THRESHOLD = int(os.getenv("LOW_ATTENDANCE_THRESHOLD", "80"))

# Optional: add the demo roster on startup when the store is empty
AUTO_SEED_DEMO = bool(int(os.getenv("AUTO_SEED_DEMO", "0")))
