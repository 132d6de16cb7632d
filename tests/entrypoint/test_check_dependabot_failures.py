from unittest.mock import Mock

from dependabot_alerts.infrastructure.actions_toolkit import ActionsToolkit
from dependabot_alerts.infrastructure.github_client import RateLimitExceeded
from scripts import check_dependabot_failures


def make_env(tmp_path, **inputs) -> dict:
    env = {
        "INPUT_GITHUB_TOKEN": "fake-token",
        "GITHUB_REPOSITORY": "case/dependabot-error-alerts",
        "GITHUB_OUTPUT": str(tmp_path / "output"),
    }
    env.update({f"INPUT_{k.upper()}": v for k, v in inputs.items()})
    return env


def client_factory_returning(runs=None, error=None) -> Mock:
    client = Mock()
    if error is not None:
        client.list_workflow_runs.side_effect = error
    else:
        client.list_workflow_runs.return_value = runs or []
    return Mock(return_value=client)


def test_main_success_without_failures(tmp_path, capsys) -> None:
    toolkit = ActionsToolkit(environ=make_env(tmp_path))

    exit_code = check_dependabot_failures.main(toolkit, client_factory_returning([]))

    assert exit_code == 0
    out = capsys.readouterr().out
    assert "::add-mask::fake-token" in out
    assert "No Dependabot workflow failures found" in out
    assert "has_failures<<" in (tmp_path / "output").read_text(encoding="utf-8")


def test_main_fails_when_fail_on_error(tmp_path, capsys, failures_response) -> None:
    toolkit = ActionsToolkit(environ=make_env(tmp_path, fail_on_error="true"))
    factory = client_factory_returning(failures_response["workflow_runs"])

    exit_code = check_dependabot_failures.main(toolkit, factory)

    assert exit_code == 1
    out = capsys.readouterr().out
    assert "::warning::Found 3 Dependabot workflow failure(s)" in out
    assert "::error::Found 3 Dependabot workflow failure(s)" in out
    assert "failures_json<<" in (tmp_path / "output").read_text(encoding="utf-8")


def test_main_reports_invalid_lookback_days(tmp_path, capsys) -> None:
    toolkit = ActionsToolkit(environ=make_env(tmp_path, lookback_days="not-a-number"))
    factory = client_factory_returning([])

    exit_code = check_dependabot_failures.main(toolkit, factory)

    assert exit_code == 1
    factory.assert_not_called()
    assert '::error::Invalid lookback_days: "not-a-number" - must be a positive integer' in capsys.readouterr().out
    assert not (tmp_path / "output").exists()


def test_main_reports_api_error_message(tmp_path, capsys) -> None:
    toolkit = ActionsToolkit(environ=make_env(tmp_path))
    factory = client_factory_returning(error=RateLimitExceeded("API rate limit exceeded", 403))

    exit_code = check_dependabot_failures.main(toolkit, factory)

    assert exit_code == 1
    assert "::error::API rate limit exceeded" in capsys.readouterr().out
    assert not (tmp_path / "output").exists()


def test_main_uses_repr_for_exceptions_without_message(tmp_path, capsys) -> None:
    toolkit = ActionsToolkit(environ=make_env(tmp_path))
    factory = client_factory_returning(error=KeyError())

    exit_code = check_dependabot_failures.main(toolkit, factory)

    assert exit_code == 1
    assert "::error::KeyError()" in capsys.readouterr().out


def test_main_requires_token(tmp_path, capsys) -> None:
    env = make_env(tmp_path)
    del env["INPUT_GITHUB_TOKEN"]

    exit_code = check_dependabot_failures.main(ActionsToolkit(environ=env), client_factory_returning([]))

    assert exit_code == 1
    assert "Input required and not supplied: github_token" in capsys.readouterr().out
