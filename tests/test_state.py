"""Tests for walletfeed.services.state."""

from walletfeed.services.state import ActivitySnapshot, Snapshot


class TestActivitySnapshot:
    def test_begin_sets_loading(self) -> None:
        snap: ActivitySnapshot[list[int]] = ActivitySnapshot()
        snap.begin()
        assert snap.current.loading
        assert snap.current.value is None

    def test_complete_publishes(self) -> None:
        snap: ActivitySnapshot[list[int]] = ActivitySnapshot()
        token = snap.begin()
        assert snap.complete(token, [1, 2])
        assert snap.current == Snapshot(loading=False, value=[1, 2], token=token)

    def test_stale_result_discarded(self) -> None:
        snap: ActivitySnapshot[str] = ActivitySnapshot()
        older = snap.begin()
        newer = snap.begin()
        assert snap.complete(newer, "fresh")
        assert not snap.complete(older, "stale")
        assert snap.current.value == "fresh"

    def test_fail_keeps_previous_value(self) -> None:
        snap: ActivitySnapshot[str] = ActivitySnapshot()
        snap.complete(snap.begin(), "ok")
        token = snap.begin()
        assert snap.fail(token, "feed down")
        assert snap.current.value == "ok"
        assert snap.current.error == "feed down"
        assert not snap.current.loading

    def test_stale_failure_ignored(self) -> None:
        snap: ActivitySnapshot[str] = ActivitySnapshot()
        older = snap.begin()
        snap.begin()
        assert not snap.fail(older, "late error")
        assert snap.current.loading

    def test_subscribers_notified(self) -> None:
        snap: ActivitySnapshot[str] = ActivitySnapshot()
        seen: list[Snapshot[str]] = []
        unsubscribe = snap.subscribe(seen.append)
        snap.complete(snap.begin(), "v1")
        assert [s.loading for s in seen] == [True, False]
        unsubscribe()
        snap.begin()
        assert len(seen) == 2
