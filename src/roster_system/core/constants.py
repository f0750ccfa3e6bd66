"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

STUDENTS_KEY = "students"
ATTENDANCE_KEY = "attendance"

STUDENT_ID_PREFIX = "STU_"
STUDENT_ID_RANDOM_LENGTH = 9

LOW_ATTENDANCE_THRESHOLD = 80
RECENT_ACTIVITY_LIMIT = 3

WEEK_DAYS = 7
MONTH_MONTHS = 1
SEMESTER_MONTHS = 6

EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
REQUIRED_STUDENT_FIELDS = ("firstName", "lastName", "email", "grade")

EXPORT_FILENAME_TEMPLATE = "student-report-{date}.json"
