import os

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


# Persistent store (QSettings scope + the single key holding the saved form)
SETTINGS_ORG = os.getenv("FORM_BUILDER_SETTINGS_ORG", "FormBuilder")
SETTINGS_APP = os.getenv("FORM_BUILDER_SETTINGS_APP", "FormBuilder")
STORE_KEY = os.getenv("FORM_BUILDER_STORE_KEY", "formBuilder")

# How long success notices stay visible
NOTICE_TIMEOUT_MS = _env_int("FORM_BUILDER_NOTICE_MS", 3000)

LOG_LEVEL = os.getenv("FORM_BUILDER_LOG_LEVEL", "INFO").upper()

# --- Export file names ---
HTML_EXPORT_NAME = "form.html"
JSON_EXPORT_NAME = "form-structure.json"
PDF_EXPORT_NAME = "form.pdf"
