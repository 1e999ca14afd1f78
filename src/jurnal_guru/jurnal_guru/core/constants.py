"""Constants and defaults.

Note: Keep constants here to avoid magic values spread across code.
"""

DEFAULT_SESSION_DAYS = 7

USERNAME_PATTERN = r"^[A-Za-z][A-Za-z0-9_]{2,19}$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
NIP_PATTERN = r"^[0-9]{18}$"

AUTH_CODE_MIN_LENGTH = 4
GENERATED_AUTH_CODE_LENGTH = 8

PASSWORD_SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

# Kurikulum Merdeka; urutan dipertahankan untuk ditampilkan di form.
VALID_SUBJECTS = (
    "Informatika",
    "Matematika",
    "Fisika",
    "Kimia",
    "Biologi",
    "Bahasa Indonesia",
    "Bahasa Inggris",
    "Sejarah",
    "Geografi",
    "Seni Budaya",
    "Pendidikan Jasmani",
    "Agama Islam",
    "Agama Kristen",
    "Agama Hindu",
    "Agama Buddha",
    "Pendidikan Kewarganegaraan",
    "Ekonomi",
)

# Keys of the persisted JSON document.
REGISTERED_USERS_KEY = "registeredUsers"
AUTH_CODES_KEY = "authCodes"
