"""
Tests for the command line entry point and its exit codes.
"""

from unittest.mock import patch

import pytest

from conftest import BASE_ENV, sent_titles
from trellobot import cli
from trellobot.pipelines import RunAborted


@pytest.fixture
def env(monkeypatch, tmp_path):
    """Run from an empty directory with the base environment set."""
    monkeypatch.chdir(tmp_path)
    for name, value in BASE_ENV.items():
        monkeypatch.setenv(name, value)
    monkeypatch.delenv("TRELLOBOT_ENV", raising=False)
    return monkeypatch


@pytest.fixture
def notifier():
    with patch("trellobot.cli.Notifier") as mock_notifier_class:
        yield mock_notifier_class.from_config.return_value


@pytest.fixture(autouse=True)
def quiet_startup():
    with patch("trellobot.cli.load_dotenv"), patch("trellobot.cli.setup_logging"):
        yield


@pytest.fixture
def providers():
    with patch("trellobot.cli.get_provider") as get_provider, \
         patch("trellobot.cli.get_optional_provider") as get_optional_provider:
        yield get_provider, get_optional_provider


@patch("trellobot.cli.replies.run_reply_classifier")
def test_replies_success(mock_run, env, notifier, providers):
    assert cli.main(["replies"]) == 0

    mock_run.assert_called_once()
    _, get_optional_provider = providers
    assert mock_run.call_args.args[3] is get_optional_provider.return_value
    assert mock_run.call_args.args[4] is notifier


@patch("trellobot.cli.jobs.run_job_checker")
def test_jobs_success(mock_run, env, notifier, providers):
    get_provider, _ = providers

    assert cli.main(["jobs"]) == 0

    assert mock_run.call_args.args[2] is get_provider.return_value


@patch("trellobot.cli.replies.run_reply_classifier")
def test_crash_is_notified(mock_run, env, notifier, providers):
    mock_run.side_effect = KeyError("payload")

    assert cli.main(["replies"]) == 1

    assert sent_titles(notifier) == ["Trello Bot: CRITICAL ERROR"]
    assert notifier.send.call_args.args[1].startswith("Script crashed: ")


@patch("trellobot.cli.jobs.run_job_checker")
def test_jobs_crash_is_notified(mock_run, env, notifier, providers):
    mock_run.side_effect = RuntimeError("boom")

    assert cli.main(["jobs"]) == 1

    notifier.send.assert_called_once_with("Job Checker: CRITICAL ERROR", "Script crashed: boom")


@patch("trellobot.cli.replies.run_reply_classifier")
def test_missing_env_is_notified(mock_run, env, notifier, providers):
    env.delenv("TRELLO_TOKEN")
    env.delenv("MY_EMAIL")

    assert cli.main(["replies"]) == 1

    mock_run.assert_not_called()
    notifier.send.assert_called_once_with(
        "Trello Bot Error", "Missing required environment variables: TRELLO_TOKEN, MY_EMAIL"
    )


@patch("trellobot.cli.jobs.run_job_checker")
def test_jobs_require_ai_key(mock_run, env, notifier, providers):
    env.delenv("GROQ_API_KEY")

    assert cli.main(["jobs"]) == 1

    mock_run.assert_not_called()
    assert sent_titles(notifier) == ["Job Checker Error"]
    assert "GROQ_API_KEY" in notifier.send.call_args.args[1]


@patch("trellobot.cli.replies.run_reply_classifier")
def test_aborted_run_is_not_notified_twice(mock_run, env, notifier, providers):
    mock_run.side_effect = RunAborted("Failed to connect to Gmail: invalid_grant")

    assert cli.main(["replies"]) == 1

    notifier.send.assert_not_called()


def test_missing_config_file(env, notifier, tmp_path):
    assert cli.main(["--config", str(tmp_path / "nope.yaml"), "replies"]) == 1

    notifier.send.assert_not_called()


def test_invalid_config_file(env, notifier, tmp_path):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("checker:\n  delay_seconds: -1\n")

    assert cli.main(["--config", str(config_path), "jobs"]) == 1


@patch("trellobot.server.serve")
def test_serve_passes_port(mock_serve, env):
    assert cli.main(["serve", "--port", "8080"]) == 0

    assert mock_serve.call_args.kwargs["port"] == 8080


def test_command_is_required():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


@patch("trellobot.cli.replies.run_reply_classifier")
def test_replies_run_without_ai_on_unknown_provider(mock_run, env, notifier, tmp_path):
    (tmp_path / "config.yaml").write_text("ai:\n  provider: openai\n")

    assert cli.main(["replies"]) == 0

    mock_run.assert_called_once()
    assert mock_run.call_args.args[3] is None
    notifier.send.assert_not_called()


@patch("trellobot.cli.jobs.run_job_checker")
def test_jobs_unknown_provider_is_a_config_error(mock_run, env, notifier, tmp_path):
    (tmp_path / "config.yaml").write_text("ai:\n  provider: openai\n")

    assert cli.main(["jobs"]) == 1

    mock_run.assert_not_called()
    assert sent_titles(notifier) == ["Job Checker Error"]
    assert "Unknown AI provider: 'openai'" in notifier.send.call_args.args[1]
