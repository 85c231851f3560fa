"""Replay tool tests."""

import json

import pytest

from a2ui_engine.__main__ import build_parser, main


def write_transcript(path, *messages):
    path.write_text("".join(json.dumps(m) + "\n" for m in messages))
    return path


@pytest.fixture(autouse=True)
def plain_logs(monkeypatch):
    monkeypatch.delenv("A2UI_JSON_LOGS", raising=False)


@pytest.mark.unit
def test_parser_defaults(tmp_path):
    """Test replay arguments and defaults."""
    args = build_parser().parse_args(["replay", str(tmp_path / "t.jsonl")])

    assert args.command == "replay"
    assert args.surfaces is None
    assert args.chunk_size == 64
    assert not args.render


@pytest.mark.unit
def test_catalog_command(capsys):
    """Test the catalog command prints catalog metadata."""
    assert main(["catalog"]) == 0

    metadata = json.loads(capsys.readouterr().out)
    assert metadata["catalogId"] == "common-origin.design-system:v2.4"


@pytest.mark.unit
def test_replay_renders_surface(tmp_path, capsys):
    """Test a transcript is replayed and the render tree printed."""
    transcript = write_transcript(
        tmp_path / "t.jsonl",
        {"createSurface": {"surfaceId": "main", "catalogId": "common-origin.design-system:v2.4"}},
        {"updateComponents": {"surfaceId": "main", "components": [{"id": "root", "component": "Text", "text": {"path": "/greeting"}}]}},
        {"updateDataModel": {"surfaceId": "main", "value": {"greeting": "Hi"}}},
        {"paint": {}},
    )

    code = main(["replay", str(transcript), "--chunk-size", "5", "--render"])

    output = json.loads(capsys.readouterr().out)
    assert code == 0
    assert output["report"]["applied"] == 3
    assert output["report"]["rejected"][0]["kind"] == "unknown_message_type"
    assert output["surfaces"]["main"]["render"]["props"] == {"text": "Hi"}


@pytest.mark.unit
def test_replay_without_root(tmp_path, capsys):
    """Test a surface with no root reports a render error instead of failing."""
    transcript = write_transcript(tmp_path / "t.jsonl", {"updateDataModel": {"surfaceId": "main", "value": {"a": 1}}})

    code = main(["replay", str(transcript), "--render"])

    entry = json.loads(capsys.readouterr().out)["surfaces"]["main"]
    assert code == 0
    assert entry["render"] is None
    assert "renderError" in entry


@pytest.mark.unit
def test_replay_missing_file(tmp_path):
    """Test an unreadable transcript exits with status 2."""
    assert main(["replay", str(tmp_path / "absent.jsonl")]) == 2
