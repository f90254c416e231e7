import logging

import pytest

from pillsplit_core.config import DEFAULT_CONFIG, DEFAULT_PALETTE, SplitterConfig
from pillsplit_core.logging_config import PACKAGE_LOGGERS, setup_logging


def test_defaults_match_documented_constants():
    assert DEFAULT_CONFIG.min_size == 40
    assert DEFAULT_CONFIG.corner_radius == 20
    assert DEFAULT_CONFIG.split_margin == 20
    assert DEFAULT_CONFIG.nudge_gap == 10
    assert DEFAULT_CONFIG.draw_threshold == 5
    assert DEFAULT_CONFIG.palette == DEFAULT_PALETTE
    assert len(DEFAULT_PALETTE) == 6


def test_from_env_applies_overrides():
    config = SplitterConfig.from_env(
        {
            "PILLSPLIT_MIN_SIZE": "50",
            "PILLSPLIT_RESET_DELAY_MS": "25",
            "PILLSPLIT_PALETTE": "#000000, #ffffff",
            "PILLSPLIT_SPLIT_MARGIN": "",
        }
    )
    assert config.min_size == 50
    assert config.reset_delay_ms == 25
    assert config.palette == ("#000000", "#ffffff")
    assert config.split_margin == 20


def test_from_env_without_variables_gives_defaults():
    assert SplitterConfig.from_env({}) == DEFAULT_CONFIG


@pytest.mark.parametrize(
    "overrides",
    [{"min_size": 0}, {"split_margin": 0}, {"corner_radius": -1}, {"palette": ()}, {"reset_delay_ms": -5}],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValueError):
        SplitterConfig(**overrides)


def test_from_env_rejects_garbage():
    with pytest.raises(ValueError):
        SplitterConfig.from_env({"PILLSPLIT_NUDGE_GAP": "wide"})


def test_setup_logging_writes_to_file(tmp_path):
    log_file = tmp_path / "pills.log"
    handlers = setup_logging(logging.DEBUG, str(log_file))
    logging.getLogger("pillsplit_core.geometry").info("split happened")
    logging.getLogger("pillsplit_playground.widgets").info("repainted")
    for handler in handlers:
        handler.flush()

    text = log_file.read_text(encoding="utf-8")
    assert "pillsplit_core.geometry: split happened" in text
    assert "repainted" in text


def test_setup_logging_replaces_previous_handlers():
    first = setup_logging()
    second = setup_logging(logging.WARNING)

    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        assert logger.handlers == second
        assert logger.level == logging.WARNING
    assert not set(first) & set(second)


def test_setup_logging_limited_to_given_namespaces():
    setup_logging(namespaces=("pillsplit_core",))
    assert len(logging.getLogger("pillsplit_core").handlers) == 1
    assert logging.getLogger("pillsplit_playground").handlers == []
