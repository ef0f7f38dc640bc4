import io

from copilot_agent_util.application.dispatch import dispatch
from copilot_agent_util.domain.run_config import RunnerConfig
from copilot_agent_util.ports.command_runner import Terminal


class _RecordingRunner:
    def __init__(self):
        self.calls = []

    def run(self, name, args, cwd, log_sink, terminal):
        self.calls.append((name, args))
        return 0


def _terminal():
    return Terminal(stdout=io.BytesIO(), stderr=io.BytesIO())


def test_dispatch_builds_arguments_from_table(tmp_path):
    runner = _RecordingRunner()
    config = RunnerConfig.for_directory(tmp_path)
    result = dispatch(config, "git.push", [], {"force_with_lease": True}, runner=runner, terminal=_terminal())
    assert result.exit_code == 0
    assert runner.calls == [("git", ["push", "--force-with-lease"])]
    assert result.value.log_path.name.startswith("git_")


def test_dispatch_unknown_command(tmp_path):
    result = dispatch(RunnerConfig.for_directory(tmp_path), "hg.commit")
    assert result.exit_code == 1
    assert result.diagnostics[0].code == "COMMAND_UNKNOWN"
    assert not (tmp_path / "logs").exists()


def test_dispatch_bad_arguments_do_not_run(tmp_path):
    runner = _RecordingRunner()
    result = dispatch(RunnerConfig.for_directory(tmp_path), "file.cat", ["a", "b"], runner=runner)
    assert result.diagnostics[0].code == "COMMAND_ARGS_INVALID"
    assert runner.calls == []
