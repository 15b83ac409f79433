import pytest


@pytest.fixture(autouse=True)
def isolated_error_logs(tmp_path, monkeypatch):
    """Keep error report files written during tests out of notifications/logs."""
    monkeypatch.setenv("NOTIFICATION_LOG_DIR", str(tmp_path / "logs"))
    return tmp_path / "logs"
