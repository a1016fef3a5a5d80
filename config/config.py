"""
Configuration management for the faculty profile service.
Handles spreadsheet, credential and refresh settings that can be changed without code changes.
Reads from both .env files and Streamlit secrets (st.secrets).
"""
import os
import json
import base64
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Load environment variables
CONFIG_DIR = Path(__file__).parent.absolute()
PROJECT_ROOT = CONFIG_DIR.parent
load_dotenv(CONFIG_DIR / ".env")

DEFAULT_SHEET_RANGE = "A1:Z100"
DEFAULT_DATA_PATH = PROJECT_ROOT / "data" / "facultyData.json"

# Document section key -> worksheet name in the spreadsheet
SHEETS: Dict[str, str] = {
    "links": "Links",
    "experience": "Experience",
    "education": "Education",
    "courses": "Courses",
    "researchInterests": "Research_Interests",
    "fundingInfo": "Funding_Info",
    "fundingRequirements": "Funding_Requirements",
    "patents": "Patents",
    "journals": "Journals",
    "conferences": "Conferences",
    "bookChapters": "Book_Chapters",
    "talks": "Talks",
    "studentInstructions": "Student_Instructions",
    "currentStudents": "Current_Students",
    "graduatedStudents": "Graduated_Students",
    "personalInfo": "Personal_Info",
    "about": "About",
    "researchPositions": "Research_Positions",
    "news": "News",
    "image": "Image",
}

def _get_config_value(key: str, default: Any = None) -> Any:
    """
    Get configuration value from Streamlit secrets first, then environment variables.
    Falls back to default if neither is available.

    Priority:
    1. st.secrets (Streamlit Cloud/local secrets.toml)
    2. os.getenv (environment variables/.env file)
    3. default value

    This function is called lazily (when needed), so st.secrets will be available.
    """
    value = None

    # Try Streamlit secrets first (only available when running in Streamlit)
    try:
        import streamlit as st
        if hasattr(st, 'secrets'):
            try:
                secrets_dict = st.secrets
                if key in secrets_dict:
                    value = secrets_dict[key]
            except Exception:
                # no secrets.toml outside of Streamlit
                pass
    except (ImportError, RuntimeError, AttributeError):
        pass

    if value is None:
        value = os.getenv(key, default)

    return value

def get_spreadsheet_id() -> Optional[str]:
    """Google spreadsheet holding the faculty worksheets."""
    return _get_config_value("GOOGLE_SPREADSHEET_ID")

def get_sheet_range() -> str:
    return _get_config_value("SHEET_RANGE", DEFAULT_SHEET_RANGE)

def get_refresh_secret() -> Optional[str]:
    """Shared secret guarding the refresh endpoint. Refresh is disabled when unset."""
    return _get_config_value("REFRESH_SECRET_KEY")

def get_data_path() -> Path:
    """Location of the cached faculty JSON; relative paths resolve against the project root."""
    raw = _get_config_value("FACULTY_DATA_PATH")
    if not raw:
        return DEFAULT_DATA_PATH
    path = Path(raw)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path

def get_port() -> int:
    raw = _get_config_value("PORT", "5000")
    try:
        return int(raw)
    except (TypeError, ValueError):
        return 5000

def get_google_credentials_info() -> Dict[str, Any]:
    """
    Service-account credentials as a dict.

    Uses the base64-encoded JSON in GOOGLE_SERVICE_ACCOUNT_BASE64 when present (hosted
    deployments), otherwise reads the key file named by GOOGLE_CREDENTIALS_FILE.
    """
    encoded = _get_config_value("GOOGLE_SERVICE_ACCOUNT_BASE64")
    if encoded:
        print("[INFO] Using Google credentials from environment variable")
        return json.loads(base64.b64decode(encoded).decode("utf-8"))

    key_file = Path(_get_config_value("GOOGLE_CREDENTIALS_FILE", "service_account.json"))
    if not key_file.is_absolute():
        key_file = PROJECT_ROOT / key_file
    if not key_file.exists():
        raise FileNotFoundError(
            f"Google credentials file not found: {key_file}. Add the credentials file "
            "or set GOOGLE_SERVICE_ACCOUNT_BASE64."
        )
    print(f"[INFO] Using Google credentials from file {key_file.name}")
    with open(key_file, "r", encoding="utf-8") as f:
        return json.load(f)

def __getattr__(name: str):
    if name == "REFRESH_SECRET_KEY":
        return get_refresh_secret()
    elif name == "SPREADSHEET_ID":
        return get_spreadsheet_id()
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
