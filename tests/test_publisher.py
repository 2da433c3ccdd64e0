import pytest

from prediction.collision import CollisionWarning
from prediction.publisher import WarningsPublisher


def test_empty_before_first_publish():
    publisher = WarningsPublisher()
    assert dict(publisher.current()) == {}
    assert publisher.count() == 0


def test_publish_replaces_whole_snapshot():
    publisher = WarningsPublisher()
    publisher.publish({"a": CollisionWarning("b", 1.0, 2.0), "b": CollisionWarning("a", 1.0, 2.0)})
    first = publisher.current()

    publisher.publish({"c": CollisionWarning("d", 3.0, 4.0)})

    assert set(first) == {"a", "b"}
    assert set(publisher.current()) == {"c"}
    assert publisher.count() == 1


def test_published_snapshot_is_read_only_and_detached():
    publisher = WarningsPublisher()
    source = {"a": CollisionWarning("b", 1.0, 2.0)}
    publisher.publish(source)

    source["x"] = CollisionWarning("y", 0.0, 0.0)
    assert "x" not in publisher.current()

    with pytest.raises(TypeError):
        publisher.current()["z"] = CollisionWarning("a", 0.0, 0.0)


def test_clear():
    publisher = WarningsPublisher()
    publisher.publish({"a": CollisionWarning("b", 1.0, 2.0)})
    publisher.clear()
    assert publisher.count() == 0
