"""Tests for the command-line entry point."""

import json

import httpx
import pytest

from handlecheck import config as config_module
from handlecheck import main as main_module


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    monkeypatch.setattr(config_module, "load_dotenv", lambda *args, **kwargs: False)
    monkeypatch.setenv("CONFIG_DIR", str(tmp_path))
    monkeypatch.setenv("SOCIAL_PROVIDER_API_KEY", "")
    monkeypatch.delenv("DEFAULT_PLATFORMS", raising=False)

    def offline_client(*args, **kwargs):
        raise httpx.ConnectError("offline")

    monkeypatch.setattr(httpx, "AsyncClient", offline_client)


def test_invalid_handle_exits_2(capsys):
    assert main_module.main(["not a handle!"]) == main_module.EXIT_INVALID_HANDLE
    assert capsys.readouterr().out == ""


def test_prints_json_result(capsys):
    assert main_module.main(["@zz", "--platform", "github", "-p", "reddit"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["base_handle"] == "zz"
    assert [p["platform"] for p in data["platforms"]] == ["github", "reddit"]
    assert data["overall_score"] == 0
    assert "variations" not in data


def test_variations_flag(capsys):
    assert main_module.main(["zz", "-p", "github", "--variations"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert [v["base_handle"] for v in data["variations"]] == ["zz2024", "zz1", "zz_official"]


def test_unknown_platform_rejected_by_parser():
    with pytest.raises(SystemExit):
        main_module.main(["zz", "--platform", "myspace"])
