"""Tests for -v flag handling."""

from __future__ import annotations

import logging

import pytest

from torrentsmith.cli.verbosity import VerbosityLevel, VerbosityManager, get_verbosity_from_ctx
from torrentsmith.models import LogLevel

pytestmark = [pytest.mark.unit, pytest.mark.cli]


class TestVerbosityManager:
    """Mapping of flag counts to logging levels."""

    @pytest.mark.parametrize(
        ("count", "level", "logging_level", "override"),
        [
            (0, VerbosityLevel.NORMAL, logging.WARNING, None),
            (1, VerbosityLevel.VERBOSE, logging.INFO, LogLevel.INFO),
            (2, VerbosityLevel.DEBUG, logging.DEBUG, LogLevel.DEBUG),
            (3, VerbosityLevel.TRACE, logging.DEBUG, LogLevel.DEBUG),
        ],
    )
    def test_levels(self, count, level, logging_level, override):
        manager = VerbosityManager.from_count(count)

        assert manager.level is level
        assert manager.logging_level == logging_level
        assert manager.log_level() == override

    def test_count_is_clamped(self):
        assert VerbosityManager(7).level is VerbosityLevel.TRACE
        assert VerbosityManager(-2).level is VerbosityLevel.NORMAL

    def test_stack_traces_only_at_trace(self):
        assert not VerbosityManager(2).should_show_stack_trace()
        assert VerbosityManager(3).should_show_stack_trace()

    def test_should_log(self):
        manager = VerbosityManager(1)
        assert manager.should_log(logging.INFO)
        assert not manager.should_log(logging.DEBUG)


class TestGetVerbosityFromCtx:
    """Reading verbosity from the click context object."""

    def test_missing_object(self):
        assert get_verbosity_from_ctx(None).level is VerbosityLevel.NORMAL

    def test_manager_in_object(self):
        manager = VerbosityManager(2)
        assert get_verbosity_from_ctx({"verbosity_manager": manager}) is manager

    def test_count_in_object(self):
        assert get_verbosity_from_ctx({"verbosity": 1}).level is VerbosityLevel.VERBOSE
