"""
Unit tests for session token state.

Tests SessionState and the header injection policy.
"""
import threading

import pytest

from biostarpy.core.api.session import SessionState, SESSION_HEADER


class TestSessionState:
    """Tests for SessionState."""

    def test_initially_unauthenticated(self):
        state = SessionState()

        assert state.is_authenticated() is False
        assert state.token is None

    def test_set_token(self):
        state = SessionState()
        state.set_token('abc123')

        assert state.is_authenticated() is True
        assert state.token == 'abc123'

    def test_set_empty_token_raises(self):
        state = SessionState()

        with pytest.raises(ValueError):
            state.set_token('')

    def test_clear_token(self):
        state = SessionState()
        state.set_token('abc123')
        state.clear_token()

        assert state.is_authenticated() is False

    def test_header_for_attaches_token(self):
        state = SessionState()
        state.set_token('abc123')

        headers = state.header_for({'Content-Type': 'application/json'})

        assert headers == {'Content-Type': 'application/json', SESSION_HEADER: 'abc123'}

    def test_header_for_without_token_is_unchanged(self):
        state = SessionState()
        original = {'Content-Type': 'application/json'}

        headers = state.header_for(original)

        assert headers == original
        assert headers is not original

    def test_header_for_removes_stale_header(self):
        """A header left over from an earlier session is not sent."""
        state = SessionState()

        headers = state.header_for({SESSION_HEADER: 'old'})

        assert SESSION_HEADER not in headers

    def test_prepare_returns_generation(self):
        state = SessionState()
        state.set_token('abc123')

        headers, generation = state.prepare()

        assert headers[SESSION_HEADER] == 'abc123'
        assert generation == state.snapshot()[1]


class TestInvalidation:
    """Tests for generation-checked invalidation."""

    def test_invalidate_current_generation(self):
        state = SessionState()
        state.set_token('abc123')
        _, generation = state.snapshot()

        assert state.invalidate(generation) is True
        assert state.is_authenticated() is False

    def test_stale_invalidate_keeps_newer_token(self):
        """A 401 from an old request does not clobber a fresh login."""
        state = SessionState()
        state.set_token('old')
        _, stale_generation = state.snapshot()

        state.set_token('new')

        assert state.invalidate(stale_generation) is False
        assert state.token == 'new'

    def test_instances_are_independent(self):
        first = SessionState()
        second = SessionState()
        first.set_token('abc123')

        assert second.is_authenticated() is False

    def test_concurrent_readers_see_whole_tokens(self):
        state = SessionState()
        tokens = {'a' * 64, 'b' * 64}
        seen = set()
        stop = threading.Event()

        def writer():
            while not stop.is_set():
                for token in tokens:
                    state.set_token(token)

        def reader():
            for _ in range(2000):
                token = state.token
                if token is not None:
                    seen.add(token)

        thread = threading.Thread(target=writer)
        thread.start()
        try:
            reader()
        finally:
            stop.set()
            thread.join()

        assert seen <= tokens
