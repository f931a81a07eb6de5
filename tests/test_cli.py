from __future__ import annotations

from typer.testing import CliRunner

from omnistore import cli


def test_run_reads_stdin(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    path = tmp_path / "omniStore"
    runner = CliRunner()
    result = runner.invoke(
        cli.app,
        ["run", "--store-path", str(path)],
        input="savedata a:1\nloaddata a\ndeletedata nope\n",
    )
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["1"]
    assert path.read_bytes() == b"a:1\n"


def test_run_quiet_suppresses_loads(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    path = tmp_path / "omniStore"
    path.write_bytes(b"a:1\n")
    runner = CliRunner()
    result = runner.invoke(
        cli.app,
        ["run", "--store-path", str(path), "--quiet", "--no-atomic"],
        input="loaddata a\n",
    )
    assert result.exit_code == 0
    assert result.stdout == ""


def test_run_verbose_prints_settings(monkeypatch, tmp_path):
    captured: dict[str, object] = {}

    def fake_run(lines, settings, echo):
        captured["settings"] = settings

    monkeypatch.setattr("omnistore.app.run", fake_run)
    runner = CliRunner()
    result = runner.invoke(
        cli.app,
        ["run", "--store-path", str(tmp_path / "s"), "--no-atomic", "--verbose"],
        input="",
    )
    assert result.exit_code == 0
    settings = captured["settings"]
    assert settings.store_path == tmp_path / "s"
    assert settings.atomic_writes is False
    assert "atomic_writes" in result.stdout


def test_exec_and_dump(monkeypatch, tmp_path):
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    path = tmp_path / "omniStore"
    runner = CliRunner()
    result = runner.invoke(
        cli.app,
        ["exec", "savedata b:2", "savedata a:1", "loaddata b", "--store-path", str(path)],
    )
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["2"]

    result = runner.invoke(cli.app, ["dump", "--store-path", str(path)])
    assert result.exit_code == 0
    assert result.stdout.splitlines() == ["a:1", "b:2"]


def test_dump_missing_file_is_empty(tmp_path):
    runner = CliRunner()
    result = runner.invoke(cli.app, ["dump", "--store-path", str(tmp_path / "none")])
    assert result.exit_code == 0
    assert result.stdout == ""
    assert not (tmp_path / "none").exists()
