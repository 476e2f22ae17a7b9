# tests/unit/commands/test_events.py — v1
"""Tests for commands/events.py — failure-domain classifier."""

from __future__ import annotations

import itertools

import pytest

from buildcore.commands.events import (
    is_eligible,
    is_post_deploy,
    runs_also_on_build_failure,
    runs_only_on_build_failure,
)
from buildcore.core.models import Event

SUCCESS_ONLY = [Event.PRE_BUILD, Event.BUILD, Event.POST_BUILD, Event.SUCCESS]


class TestEventCategories:
    def test_only_on_error_runs_only_on_failure(self):
        assert [e for e in Event if runs_only_on_build_failure(e)] == [Event.ERROR]

    def test_error_and_end_run_also_on_failure(self):
        assert {e for e in Event if runs_also_on_build_failure(e)} == {Event.ERROR, Event.END}

    def test_post_deploy_events(self):
        assert {e for e in Event if is_post_deploy(e)} == {Event.ERROR, Event.SUCCESS, Event.END}

    def test_accepts_string_values(self):
        assert runs_only_on_build_failure("onError") is True
        assert is_post_deploy("onBuild") is False

    def test_unknown_event_raises(self):
        with pytest.raises(ValueError, match="Unknown build event"):
            is_eligible("onDeploy", None, False, frozenset())


class TestIsEligible:
    @pytest.mark.parametrize(
        "event,has_error",
        list(itertools.product(list(Event), [False, True])),
    )
    def test_failed_plugin_never_runs(self, event, has_error):
        assert is_eligible(event, "plugin-a", has_error, {"plugin-a"}) is False

    @pytest.mark.parametrize("event", SUCCESS_ONLY)
    def test_success_only_events_skip_after_build_failure(self, event):
        assert is_eligible(event, None, True, set()) is False
        assert is_eligible(event, "plugin-a", True, set()) is False

    @pytest.mark.parametrize("event", SUCCESS_ONLY)
    def test_success_only_events_run_on_healthy_build(self, event):
        assert is_eligible(event, "plugin-a", False, set()) is True

    def test_on_error_only_after_build_failure(self):
        assert is_eligible(Event.ERROR, "plugin-a", False, set()) is False
        assert is_eligible(Event.ERROR, "plugin-a", True, set()) is True

    @pytest.mark.parametrize("has_error", [False, True])
    def test_on_end_always_runs(self, has_error):
        assert is_eligible(Event.END, "plugin-a", has_error, set()) is True

    def test_other_plugin_failure_does_not_matter(self):
        assert is_eligible(Event.BUILD, "plugin-b", False, {"plugin-a"}) is True

    def test_core_and_build_commands_ignore_failed_plugins(self):
        assert is_eligible(Event.BUILD, None, False, {"plugin-a"}) is True

    @pytest.mark.parametrize(
        "event,package,has_error,failed",
        list(itertools.product(list(Event), [None, "p"], [False, True], [set(), {"p"}])),
    )
    def test_cross_product_matches_rules(self, event, package, has_error, failed):
        expected = not (package is not None and package in failed)
        if expected:
            if has_error:
                expected = event in (Event.ERROR, Event.END)
            else:
                expected = event != Event.ERROR
        assert is_eligible(event, package, has_error, failed) is expected
