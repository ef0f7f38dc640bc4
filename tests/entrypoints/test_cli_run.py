from typer.testing import CliRunner

from copilot_agent_util.application.config_loading import CONFIG_FILE_NAME
from copilot_agent_util.entrypoints.cli import app


def _log_files(path):
    return sorted((path / "logs").glob("*.log"))


def test_exec_echo_succeeds_and_writes_log(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(app, ["exec", "echo", "hello"])
    assert result.exit_code == 0
    assert "hello" in result.output
    assert "Command completed successfully" in result.output
    [log] = _log_files(tmp_path)
    assert log.name.startswith("echo_")
    assert log.read_text().endswith("hello\nCommand completed successfully\n")


def test_exec_false_exits_one(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(app, ["exec", "false"])
    assert result.exit_code == 1
    [log] = _log_files(tmp_path)
    assert log.read_text().splitlines()[-1] == "Command failed: exit status 1"


def test_exec_passes_option_like_arguments_through(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(app, ["exec", "sh", "-c", "echo passthrough"])
    assert result.exit_code == 0
    assert "passthrough" in result.output


def test_log_dir_option(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(app, ["--log-dir", "captured", "file", "ls"])
    assert result.exit_code == 0
    [log] = sorted((tmp_path / "captured").glob("ls_*.log"))
    assert log.read_text().startswith("Command: ls -la .\n")


def test_file_cat_shows_contents(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "notes.txt").write_text("remember me\n")
    result = CliRunner().invoke(app, ["file", "cat", "notes.txt"])
    assert result.exit_code == 0
    assert "remember me" in result.output


def test_invalid_config_file_exits_one(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / CONFIG_FILE_NAME).write_text("verbose: maybe\n")
    result = CliRunner().invoke(app, ["exec", "echo", "x"])
    assert result.exit_code == 1
    assert not (tmp_path / "logs").exists()


def test_uncreatable_log_dir_exits_one(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "logs").write_text("in the way")
    result = CliRunner().invoke(app, ["exec", "echo", "never"])
    assert result.exit_code == 1
    assert "Executing" not in result.output
    assert "failed to create log directory" in result.output


def test_missing_program_exits_one(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = CliRunner().invoke(app, ["exec", "no-such-program-xyz"])
    assert result.exit_code == 1
    [log] = _log_files(tmp_path)
    assert "executable file not found" in log.read_text().splitlines()[-1]
