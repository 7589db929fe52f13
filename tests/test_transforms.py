"""
Unit tests for engine.transforms module.
"""

from conftest import gist

from gistsync.engine.transforms import ActivityTransformer
from gistsync.models import Activity


class TestFlatten:
    """Tests for ActivityTransformer.flatten."""

    def test_preserves_user_then_gist_order(self) -> None:
        batch = [[gist("a1", "a"), gist("a2", "a")], [], [gist("c1", "c")]]
        flat = ActivityTransformer.flatten(batch)
        assert [g.id for g in flat] == ["a1", "a2", "c1"]

    def test_empty_batch(self) -> None:
        assert ActivityTransformer.flatten([]) == []
        assert ActivityTransformer.flatten([[], []]) == []


class TestTransform:
    """Tests for ActivityTransformer.transform."""

    def test_single_gist_activity(self) -> None:
        activities = ActivityTransformer.transform([[gist("g1", "a")]])
        assert activities == [
            Activity(subject="g1", note="http://x/g1; Owner: a", type="Task", done=0)
        ]
        assert activities[0].model_dump() == {
            "subject": "g1",
            "note": "http://x/g1; Owner: a",
            "type": "Task",
            "done": 0,
        }

    def test_one_activity_per_gist(self) -> None:
        batch = [[gist("a1", "a"), gist("a2", "a")], [gist("b1", "b")]]
        activities = ActivityTransformer.transform(batch)
        assert [a.subject for a in activities] == ["a1", "a2", "b1"]
        assert all(a.type == "Task" and a.done == 0 for a in activities)

    def test_deterministic(self) -> None:
        batch = [[gist("a1", "a")], [gist("b1", "b"), gist("b2", "b")]]
        assert ActivityTransformer.transform(batch) == ActivityTransformer.transform(batch)

    def test_does_not_mutate_input(self) -> None:
        batch = [[gist("a1", "a")], [gist("b1", "b")]]
        snapshot = [[g.model_dump() for g in gists] for gists in batch]
        ActivityTransformer.transform(batch)
        assert [[g.model_dump() for g in gists] for gists in batch] == snapshot
