import json

import pytest
import yaml

from karmank.cli.__main__ import build_parser, main


def test_parser_requires_subcommand() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_report_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["report", "--name", "Asha", "--dob", "22/04/1987", "--json"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["grid"]["basic"] == 4
    assert payload["grid"]["destiny"] == 6
    assert [yoga["id"] for yoga in payload["yogas"]] == ["vipreet_raj_yoga"]


def test_report_text_with_prompt(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["report", "--name", "Asha", "--dob", "1987-04-22", "--prompt"]) == 0
    out = capsys.readouterr().out
    assert "Basic number: 4" in out
    assert "Vipreet Raj Yoga" in out
    assert "You are a Vedic numerologist." in out


def test_report_rejects_bad_date(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["report", "--name", "Asha", "--dob", "1987/04/22"]) == 2
    assert "unrecognised date format" in capsys.readouterr().err


def test_narrate_without_backend_prints_no_narrative(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("KARMANK_OPENAI_KEY", raising=False)
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    assert main(["report", "--name", "Asha", "--dob", "22/04/1987", "--json", "--narrate"]) == 0
    assert json.loads(capsys.readouterr().out)["narrative"] == ""


def test_dasha_json(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["dasha", "--dob", "22/04/1987", "--date", "2024-05-01", "--json"])
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["numbers"] == {"maha": 9, "yearly": 7, "monthly": 7, "daily": 3}
    assert payload["summary"].startswith("For 01 May 2024")


def test_dasha_text_view(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["dasha", "--dob", "22/04/1987", "--date", "2024-05-01", "--view", "maha"]) == 0
    out = capsys.readouterr().out
    assert "maha view" in out
    assert "yearly" not in out.split("\n\n")[0]


def test_dasha_uses_config_file(tmp_path, capsys: pytest.CaptureFixture[str]) -> None:
    config = tmp_path / "config.yaml"
    config.write_text(yaml.safe_dump({"numerology": {"language": "hi"}}), encoding="utf-8")
    code = main(
        ["--config", str(config), "dasha", "--dob", "22/04/1987", "--date", "2024-05-01", "--json"]
    )
    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["recurrences"][0]["digit"] == 9


def test_dasha_rejects_bad_target_date() -> None:
    with pytest.raises(SystemExit):
        main(["dasha", "--dob", "22/04/1987", "--date", "01/05/2024"])
