"""Tests for tagged, colored console logging.

These tests assert that:
- World traces ([•]) appear only when TREASURE_VERBOSE is set
- TREASURE_NO_COLOR strips ANSI escapes but keeps the tag
- Every helper prefixes its line with its tag
"""

from __future__ import annotations

import pytest

from treasureseeker.logging_utils import (
    LOG_TAG_DETERMINISTIC,
    LOG_TAG_ERROR,
    LOG_TAG_INFO,
    LOG_TAG_NOTICE,
    LOG_TAG_SUCCESS,
    Color,
    colored,
    is_verbose,
    log_deterministic,
    log_error,
    log_info,
    log_notice,
    log_success,
)


def test_deterministic_traces_hidden_by_default(capsys):
    assert is_verbose() is False

    log_deterministic("[Spawn] Cache at 0:1 with 3 coin(s)")

    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("value", ["1", "true", "YES"])
def test_deterministic_traces_shown_when_verbose(monkeypatch, capsys, value):
    monkeypatch.setenv("TREASURE_VERBOSE", value)

    log_deterministic("[Spawn] Cache at 0:1 with 3 coin(s)")

    assert capsys.readouterr().out == "[•] [Spawn] Cache at 0:1 with 3 coin(s)\n"


def test_verbose_ignores_other_values(monkeypatch):
    monkeypatch.setenv("TREASURE_VERBOSE", "0")
    assert is_verbose() is False


def test_colored_output_wraps_in_ansi(monkeypatch, capsys):
    monkeypatch.delenv("TREASURE_NO_COLOR", raising=False)

    assert colored("hi", Color.RED) == "\033[91mhi\033[0m"
    assert colored("hi", Color.GREEN, bold=True) == "\033[1m\033[92mhi\033[0m"

    log_error("bad save")
    assert capsys.readouterr().out == f"\033[91m{LOG_TAG_ERROR} bad save\033[0m\n"


def test_no_color_output_is_plain(capsys):
    # conftest sets TREASURE_NO_COLOR for every test
    assert colored("hi", Color.RED, bold=True) == "hi"

    log_error("bad save")
    out = capsys.readouterr().out
    assert out == "[!] bad save\n"
    assert "\033[" not in out


@pytest.mark.parametrize(
    "log, tag",
    [
        (log_notice, LOG_TAG_NOTICE),
        (log_error, LOG_TAG_ERROR),
        (log_success, LOG_TAG_SUCCESS),
        (log_info, LOG_TAG_INFO),
    ],
)
def test_each_helper_prefixes_its_tag(capsys, log, tag):
    log("message")

    assert capsys.readouterr().out == f"{tag} message\n"


def test_tags_are_distinct():
    tags = [LOG_TAG_DETERMINISTIC, LOG_TAG_NOTICE, LOG_TAG_ERROR, LOG_TAG_SUCCESS, LOG_TAG_INFO]
    assert len(set(tags)) == len(tags)
