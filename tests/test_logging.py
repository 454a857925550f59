import logging

import pytest

from karmank.boot.logging import CLIENT_LOGGERS, configure_logging


@pytest.fixture(autouse=True)
def _restore_levels(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("KARMANK_LOG_LEVEL", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    loggers = [logging.getLogger(), *(logging.getLogger(name) for name in CLIENT_LOGGERS)]
    levels = [logger.level for logger in loggers]
    yield
    for logger, level in zip(loggers, levels):
        logger.setLevel(level)


def test_explicit_level_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert configure_logging(level="debug", verbosity=1) == logging.DEBUG
    assert logging.getLogger().level == logging.DEBUG


@pytest.mark.parametrize(
    ("value", "expected"),
    [("warning", logging.WARNING), ("15", 15), ("nonsense", logging.INFO), ("", logging.INFO)],
)
def test_level_from_environment(monkeypatch: pytest.MonkeyPatch, value: str, expected: int) -> None:
    monkeypatch.setenv("LOG_LEVEL", value)
    assert configure_logging() == expected


def test_project_variable_takes_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.setenv("KARMANK_LOG_LEVEL", "warning")
    assert configure_logging() == logging.WARNING


def test_unset_environment_defaults_to_info() -> None:
    assert configure_logging() == logging.INFO


@pytest.mark.parametrize(("count", "expected"), [(1, logging.INFO), (3, logging.DEBUG)])
def test_verbosity_overrides_environment(
    monkeypatch: pytest.MonkeyPatch, count: int, expected: int
) -> None:
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    assert configure_logging(verbosity=count) == expected


def test_client_loggers_quiet_unless_debugging() -> None:
    configure_logging(verbosity=1)
    assert logging.getLogger("openai").level == logging.WARNING
    configure_logging(verbosity=2)
    assert logging.getLogger("httpx").level == logging.DEBUG
