"""Unit tests for Resolver – severity choice and record shaping."""

from __future__ import annotations

import itertools
import threading
from typing import Any

import pytest

from reqlog.host import LifecycleEvent
from reqlog.observability.logging import LevelMap, Resolver, Severity


def make_event(tags: Any, data: Any = None) -> LifecycleEvent:
    return LifecycleEvent.create(tags, data)


# ---------------------------------------------------------------------------
# Severity choice
# ---------------------------------------------------------------------------


class TestSeverityChoice:
    def test_highest_mapped_tag_wins(self) -> None:
        resolver = Resolver(LevelMap.build({"db": "debug", "auth": "warn"}))
        assert resolver.severity_of(["db", "auth", "custom"]) is Severity.WARN

    def test_builtin_tags(self) -> None:
        resolver = Resolver(LevelMap.build())
        assert resolver.severity_of(["trace", "error"]) is Severity.ERROR

    def test_empty_tags_use_fallback(self) -> None:
        resolver = Resolver(LevelMap.build({}, "debug"))
        assert resolver.severity_of([]) is Severity.DEBUG

    def test_unmapped_tags_use_fallback(self) -> None:
        resolver = Resolver(LevelMap.build({}, "warn"))
        assert resolver.severity_of(["foo", "bar"]) is Severity.WARN

    def test_unmapped_tags_ignored_next_to_mapped(self) -> None:
        resolver = Resolver(LevelMap.build({"db": "debug"}, "error"))
        assert resolver.severity_of(["foo", "db", "bar"]) is Severity.DEBUG

    def test_tag_match_beats_higher_fallback(self) -> None:
        resolver = Resolver(LevelMap.build({"db": "trace"}, "error"))
        assert resolver.severity_of(["db"]) is Severity.TRACE

    def test_tag_match_beats_lower_fallback(self) -> None:
        resolver = Resolver(LevelMap.build({"db": "warn"}, "trace"))
        assert resolver.severity_of(["db"]) is Severity.WARN

    def test_several_tags_same_severity(self) -> None:
        resolver = Resolver(LevelMap.build({"a": "warn", "b": "warn"}))
        assert resolver.severity_of(["a", "b"]) is Severity.WARN

    def test_order_independent(self) -> None:
        resolver = Resolver(LevelMap.build({"db": "debug", "auth": "warn", "pay": "error"}, "trace"))
        tags = ["db", "auth", "pay", "unknown", "info"]
        results = {resolver.severity_of(perm) for perm in itertools.permutations(tags)}
        assert results == {Severity.ERROR}

    def test_accepts_any_iterable(self) -> None:
        resolver = Resolver(LevelMap.build({"db": "debug"}))
        assert resolver.severity_of({"db"}) is Severity.DEBUG
        assert resolver.severity_of(iter(["db", "warn"])) is Severity.WARN

    def test_matches_max_over_random_tag_sets(self) -> None:
        import random

        rng = random.Random(1234)
        overrides = {f"t{i}": rng.choice([s.label for s in Severity]) for i in range(12)}
        levels = LevelMap.build(overrides, "info")
        resolver = Resolver(levels)
        universe = list(overrides) + ["x", "y", "z"]
        for _ in range(200):
            tags = rng.sample(universe, rng.randint(0, len(universe)))
            mapped = [levels.rank_of(t) for t in tags if levels.rank_of(t) > 0]
            expected = max(mapped) if mapped else levels.fallback_rank
            assert int(resolver.severity_of(tags)) == expected


# ---------------------------------------------------------------------------
# Record shape
# ---------------------------------------------------------------------------


class TestRecordShape:
    def test_merge_wraps_string_payload(self) -> None:
        resolver = Resolver(LevelMap.build(), merge=True)
        _, record = resolver.resolve(make_event(["app"], "hello"))
        assert record == {"tags": ("app",), "msg": "hello"}

    def test_no_merge_nests_payload(self) -> None:
        resolver = Resolver(LevelMap.build(), merge=False)
        _, record = resolver.resolve(make_event(["app"], "hello"))
        assert record == {"tags": ("app",), "data": "hello"}

    def test_shape_with_list_tags(self) -> None:
        assert Resolver(LevelMap.build(), merge=True).shape(["app"], "hello") == {"tags": ["app"], "msg": "hello"}
        assert Resolver(LevelMap.build()).shape(["app"], "hello") == {"tags": ["app"], "data": "hello"}

    def test_merge_flattens_mapping(self) -> None:
        resolver = Resolver(LevelMap.build(), merge=True)
        record = resolver.shape(("a",), {"user": 1, "msg": "hi"})
        assert record == {"tags": ("a",), "user": 1, "msg": "hi"}

    def test_no_merge_keeps_mapping_nested(self) -> None:
        resolver = Resolver(LevelMap.build())
        record = resolver.shape(("a",), {"user": 1})
        assert record == {"tags": ("a",), "data": {"user": 1}}

    def test_merge_without_data(self) -> None:
        resolver = Resolver(LevelMap.build(), merge=True)
        assert resolver.shape(("a",), None) == {"tags": ("a",)}

    def test_merge_non_mapping_payload_stays_nested(self) -> None:
        resolver = Resolver(LevelMap.build(), merge=True)
        assert resolver.shape(("a",), [1, 2]) == {"tags": ("a",), "data": [1, 2]}

    def test_merge_does_not_mutate_payload(self) -> None:
        payload = {"user": 1}
        Resolver(LevelMap.build(), merge=True).shape(("a",), payload)
        assert payload == {"user": 1}


# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------


class TestLog:
    def test_calls_method_named_after_severity(self, recording_logger: Any) -> None:
        resolver = Resolver(LevelMap.build({"db": "debug"}))
        severity = resolver.log(recording_logger, make_event(["db"], "query"))
        assert severity is Severity.DEBUG
        assert recording_logger.records == [("debug", {"tags": ("db",), "data": "query"}, None, {})]

    def test_fallback_method(self, recording_logger: Any) -> None:
        resolver = Resolver(LevelMap.build({}, "warn"), merge=True)
        resolver.log(recording_logger, make_event(["custom"], "x"))
        assert recording_logger.records == [("warn", {"tags": ("custom",), "msg": "x"}, None, {})]

    def test_concurrent_resolution(self, recording_logger: Any) -> None:
        resolver = Resolver(LevelMap.build({"db": "debug", "auth": "error"}))
        errors: list[BaseException] = []

        def worker(tags: list[str], expected: Severity) -> None:
            try:
                for _ in range(500):
                    assert resolver.severity_of(tags) is expected
            except BaseException as exc:  # noqa: BLE001
                errors.append(exc)

        threads = [
            threading.Thread(target=worker, args=(["db"], Severity.DEBUG)),
            threading.Thread(target=worker, args=(["auth", "db"], Severity.ERROR)),
            threading.Thread(target=worker, args=(["nothing"], Severity.INFO)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert errors == []

    def test_properties(self) -> None:
        levels = LevelMap.build()
        resolver = Resolver(levels, merge=True)
        assert resolver.level_map is levels
        assert resolver.merge is True


@pytest.mark.parametrize("merge", [True, False])
def test_resolve_returns_fresh_record(merge: bool) -> None:
    resolver = Resolver(LevelMap.build(), merge=merge)
    event = make_event(["a"], {"k": "v"})
    _, first = resolver.resolve(event)
    _, second = resolver.resolve(event)
    assert first == second
    assert first is not second
