from __future__ import annotations

from hud_config.history import DEFAULT_HISTORY_LIMIT, HistoryManager


def _doc(value: int) -> dict:
    return {"sec": {"$value": value}}


def test_commit_undo_redo_cycle():
    history = HistoryManager(_doc(0))
    history.commit(_doc(1))
    history.commit(_doc(2))

    assert history.undo() is True
    assert history.current == _doc(1)
    assert history.redo() is True
    assert history.current == _doc(2)
    assert history.redo() is False


def test_past_is_bounded_to_limit():
    history = HistoryManager(_doc(0))
    for value in range(1, 26):
        history.commit(_doc(value))

    assert DEFAULT_HISTORY_LIMIT == 20
    assert len(history.past) == 20
    assert history.past[0] == _doc(5)


def test_new_commit_clears_redo_stack():
    history = HistoryManager(_doc(0))
    history.commit(_doc(1))
    history.undo()
    history.commit(_doc(2))

    assert history.can_redo() is False
    assert history.future == []


def test_undo_on_empty_history_is_noop():
    history = HistoryManager(_doc(0))
    assert history.undo() is False
    assert history.current == _doc(0)


def test_silent_commits_fold_into_next_recorded_commit():
    history = HistoryManager(_doc(0))
    for value in range(1, 6):
        history.silent_commit(_doc(value))
    assert history.past == []
    assert history.current == _doc(5)

    history.commit(_doc(6))
    assert len(history.past) == 1
    history.undo()
    assert history.current == _doc(0)


def test_checkpoint_records_pending_silent_run():
    history = HistoryManager(_doc(0))
    history.silent_commit(_doc(1))
    history.silent_commit(_doc(2))

    assert history.checkpoint() is True
    assert history.checkpoint() is False
    history.undo()
    assert history.current == _doc(0)
    history.redo()
    assert history.current == _doc(2)


def test_snapshots_are_independent_copies():
    source = _doc(1)
    history = HistoryManager(_doc(0))
    history.commit(source)
    source["sec"]["$value"] = 99
    assert history.current == _doc(1)

    history.undo()
    history.current["sec"]["$value"] = 42
    history.redo()
    assert history.current == _doc(1)
    assert history.past == [_doc(42)]


def test_reset_clears_stacks_and_pending_silent():
    history = HistoryManager(_doc(0))
    history.commit(_doc(1))
    history.silent_commit(_doc(2))
    history.reset(_doc(9))

    assert history.current == _doc(9)
    assert history.can_undo() is False
    assert history.has_pending_silent is False
