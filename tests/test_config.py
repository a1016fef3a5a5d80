"""
Configuration lookups read from the environment when no Streamlit secrets exist.
"""

import base64
import json
import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from config import config


def test_sheet_names_cover_every_section():
    assert config.SHEETS["personalInfo"] == "Personal_Info"
    assert config.SHEETS["links"] == "Links"
    assert config.SHEETS["talks"] == "Talks"
    assert len(set(config.SHEETS.values())) == len(config.SHEETS)


def test_data_path_default(monkeypatch):
    monkeypatch.delenv("FACULTY_DATA_PATH", raising=False)
    assert config.get_data_path() == config.PROJECT_ROOT / "data" / "facultyData.json"


def test_data_path_relative_to_project_root(monkeypatch):
    monkeypatch.setenv("FACULTY_DATA_PATH", "cache/out.json")
    assert config.get_data_path() == config.PROJECT_ROOT / "cache" / "out.json"


def test_port_falls_back_on_garbage(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")
    assert config.get_port() == 5000


def test_credentials_from_base64(monkeypatch):
    info = {"type": "service_account", "client_email": "bot@example.iam.gserviceaccount.com"}
    encoded = base64.b64encode(json.dumps(info).encode("utf-8")).decode("ascii")
    monkeypatch.setenv("GOOGLE_SERVICE_ACCOUNT_BASE64", encoded)

    assert config.get_google_credentials_info() == info


def test_credentials_file_missing(monkeypatch, tmp_path):
    monkeypatch.delenv("GOOGLE_SERVICE_ACCOUNT_BASE64", raising=False)
    monkeypatch.setenv("GOOGLE_CREDENTIALS_FILE", str(tmp_path / "missing.json"))

    with pytest.raises(FileNotFoundError):
        config.get_google_credentials_info()


def test_module_attribute_reads_env(monkeypatch):
    monkeypatch.setenv("REFRESH_SECRET_KEY", "s3cret")
    assert config.REFRESH_SECRET_KEY == "s3cret"
