SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

STORAGE_BACKEND = "memory"
STORAGE_DIR = ""

LOW_ATTENDANCE_THRESHOLD = 80

AUTO_SEED_DEMO = False
