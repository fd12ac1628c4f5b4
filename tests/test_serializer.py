"""Tests for riverspec.serializer."""

from __future__ import annotations

import threading
import time

import pytest

from riverspec.serializer import MutationSerializer, NullSerializer


class TestMutationSerializer:
    def test_returns_result_unchanged(self):
        s = MutationSerializer()
        marker = object()
        assert s.run(lambda: marker) is marker

    def test_error_propagates_and_releases_lock(self):
        s = MutationSerializer()

        def boom():
            raise RuntimeError("500 Internal Server Error")

        with pytest.raises(RuntimeError, match="500"):
            s.run(boom)

        # lock must be free again
        assert s.run(lambda: "ok") == "ok"

    def test_shared_is_singleton(self):
        assert MutationSerializer.shared() is MutationSerializer.shared()

    def test_instances_are_independent(self):
        assert MutationSerializer() is not MutationSerializer.shared()

    def test_concurrent_ops_never_overlap(self):
        s = MutationSerializer()
        intervals: list[tuple[float, float]] = []
        record = threading.Lock()

        def op():
            start = time.monotonic()
            time.sleep(0.01)
            end = time.monotonic()
            with record:
                intervals.append((start, end))

        threads = [threading.Thread(target=s.run, args=(op,)) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(intervals) == 8
        ordered = sorted(intervals)
        for (_, prev_end), (next_start, _) in zip(ordered, ordered[1:]):
            assert prev_end <= next_start


class TestNullSerializer:
    def test_runs_op(self):
        assert NullSerializer().run(lambda: 42) == 42

    def test_allows_overlap(self):
        s = NullSerializer()
        inside = threading.Event()
        release = threading.Event()

        def blocker():
            inside.set()
            release.wait(1)

        t = threading.Thread(target=s.run, args=(blocker,))
        t.start()
        assert inside.wait(1)
        # a second op runs while the first is still inside
        assert s.run(lambda: "second") == "second"
        release.set()
        t.join()
