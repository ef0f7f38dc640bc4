from copilot_agent_util.domain.diagnostics import Diagnostic, Severity
from copilot_agent_util.domain.result import Result


def test_exit_code_zero_without_errors():
    r = Result(diagnostics=[Diagnostic(code="W", rule="r", severity=Severity.WARN, message="w")])
    assert r.exit_code == 0


def test_any_error_exits_one():
    r = Result(diagnostics=[
        Diagnostic(code="SETUP", rule="r", severity=Severity.ERROR, message="s"),
        Diagnostic(code="EXEC", rule="r", severity=Severity.ERROR, message="e", is_execution=True),
    ])
    assert r.exit_code == 1
    assert len(r.errors) == 2
