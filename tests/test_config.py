from winter_xlsx.config import Settings


def test_defaults():
    settings = Settings()
    assert settings.fetch_timeout == 30.0
    assert settings.default_file_name == "winter_fg.xlsx"


def test_env_override(monkeypatch):
    monkeypatch.setenv("WINTER_XLSX_FETCH_TIMEOUT", "5")
    monkeypatch.setenv("WINTER_XLSX_DEFAULT_FILE_NAME", "rapport.xlsx")
    settings = Settings()
    assert settings.fetch_timeout == 5.0
    assert settings.default_file_name == "rapport.xlsx"
