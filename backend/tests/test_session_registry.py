"""
Tests for the in-memory session registry behind the HTTP API.
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from domain.constants import ACTIVE, GAME_OVER, INACTIVE  # noqa: E402
from services.session_registry import SessionNotFound, SessionRegistry  # noqa: E402


class TestSessionRegistry:
    """Tests for SessionRegistry."""

    def test_create_starts_session(self):
        registry = SessionRegistry()
        entry = registry.create(now=250, seed=4)

        assert entry.game_id in registry
        assert entry.seed == 4
        assert entry.session.phase == ACTIVE
        assert entry.session.last_advance == 250
        assert registry.get(entry.game_id) is entry

    def test_unknown_id_raises(self):
        registry = SessionRegistry()
        with pytest.raises(SessionNotFound):
            registry.get("missing")
        with pytest.raises(SessionNotFound):
            registry.remove("missing")

    def test_remove_tears_down(self):
        registry = SessionRegistry()
        entry = registry.create()

        registry.remove(entry.game_id)

        assert entry.game_id not in registry
        assert entry.session.phase == INACTIVE

    def test_full_registry_of_running_sessions_refuses(self):
        registry = SessionRegistry(max_sessions=2)
        registry.create()
        registry.create()

        with pytest.raises(RuntimeError):
            registry.create()
        assert len(registry) == 2

    def test_finished_sessions_are_evicted_when_full(self):
        registry = SessionRegistry(max_sessions=2)
        over = registry.create()
        over.session.phase = GAME_OVER
        torn_down = registry.create()
        torn_down.session.teardown()

        fresh = registry.create()

        assert len(registry) == 1
        assert fresh.game_id in registry
        assert over.game_id not in registry
        assert torn_down.game_id not in registry

    def test_finished_sessions_kept_while_there_is_room(self):
        registry = SessionRegistry(max_sessions=3)
        over = registry.create()
        over.session.phase = GAME_OVER

        registry.create()

        assert over.game_id in registry
        assert len(registry) == 2

    def test_eviction_keeps_running_sessions(self):
        registry = SessionRegistry(max_sessions=2)
        running = registry.create()
        over = registry.create()
        over.session.phase = GAME_OVER

        registry.create()

        assert running.game_id in registry
        assert over.game_id not in registry

    def test_clear(self):
        registry = SessionRegistry()
        entry = registry.create()

        registry.clear()

        assert len(registry) == 0
        assert entry.session.phase == INACTIVE
