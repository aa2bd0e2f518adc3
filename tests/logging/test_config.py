import pytest

import s3handler.logging.config as log_config


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("INFO", "INFO"),
        ("debug", "DEBUG"),
        ("1", "INFO"),
        ("2", "DEBUG"),
        ("", "INFO"),
        ("off", ""),
        ("0", ""),
        ("SILENT", ""),
    ],
)
def test_resolve_log_level(raw, expected):
    assert log_config.resolve_log_level(raw) == expected


def test_setup_logging_silenced(monkeypatch, mocker):
    monkeypatch.setattr(log_config, "LOG_LEVEL", "OFF")
    mocker.patch.object(log_config.logger, "remove")
    add = mocker.patch.object(log_config.logger, "add")

    log_config.setup_logging()

    add.assert_not_called()


def test_setup_logging_serializes_on_lambda(monkeypatch, mocker):
    monkeypatch.setattr(log_config, "LOG_LEVEL", "INFO")
    monkeypatch.setenv("AWS_LAMBDA_FUNCTION_NAME", "s3-object-handler")
    mocker.patch.object(log_config.logger, "remove")
    add = mocker.patch.object(log_config.logger, "add")

    log_config.setup_logging()

    assert add.call_args.kwargs["serialize"] is True
    assert add.call_args.kwargs["diagnose"] is False
    assert add.call_args.kwargs["level"] == "INFO"
