import pytest


@pytest.fixture
def state_file(tmp_path, monkeypatch):
    """Redirect the persisted state file into a temporary directory."""
    path = tmp_path / ".quotation_sheet_state.json"
    monkeypatch.setattr("quotation_sheet.config.STATE_FILE", path)
    monkeypatch.setattr("quotation_sheet.app.STATE_FILE", path)
    return path
