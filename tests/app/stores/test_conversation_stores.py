"""Tests for the conversation store backends."""

import threading
from datetime import timedelta

from app.constants.conversation import OPEN_STATUSES, MessageRole, SessionStatus
from app.stores.memory import InMemoryConversationStore
from app.utils.time import as_utc, utcnow


def test_transition_only_from_expected_status(store):
    session = store.create_session(user_id=None, metadata=None, started_at=utcnow())
    assert store.transition_status(
        session.id, [SessionStatus.ACTIVE], SessionStatus.ENDED
    ) is False
    assert store.get_session(session.id).status == SessionStatus.CREATED
    assert store.transition_status(
        session.id, OPEN_STATUSES, SessionStatus.ENDED, ended_at=utcnow()
    ) is True
    assert store.get_session(session.id).status == SessionStatus.ENDED


def test_append_refused_after_end(store):
    session = store.create_session(user_id=None, metadata=None, started_at=utcnow())
    store.transition_status(
        session.id, OPEN_STATUSES, SessionStatus.ENDED, ended_at=utcnow()
    )
    msg = store.append_message(session.id, MessageRole.USER, "hi", None, utcnow())
    assert msg is None
    assert store.count_messages(session.id) == 0


def test_created_at_never_goes_backwards(store):
    session = store.create_session(user_id=None, metadata=None, started_at=utcnow())
    now = utcnow()
    first = store.append_message(session.id, MessageRole.USER, "a", None, now)
    second = store.append_message(
        session.id, MessageRole.USER, "b", None, now - timedelta(seconds=5)
    )
    assert as_utc(second.created_at) >= as_utc(first.created_at)
    assert second.sequence == first.sequence + 1


def test_save_credits_keeps_first_record(store):
    session = store.create_session(user_id=None, metadata=None, started_at=utcnow())
    first = store.save_credits(session.id, ["first"], 0, 0, utcnow())
    second = store.save_credits(session.id, ["second"], 0, 0, utcnow())
    assert first.lines == ["first"]
    assert second.lines == ["first"]
    assert store.get_credits(session.id).lines == ["first"]


def test_list_sessions_newest_first(store):
    start = utcnow()
    older = store.create_session(user_id="u", metadata=None, started_at=start)
    newer = store.create_session(
        user_id="u", metadata=None, started_at=start + timedelta(seconds=1)
    )
    items, total = store.list_sessions(user_id="u")
    assert total == 2
    assert [s.id for s in items] == [newer.id, older.id]


def test_memory_store_concurrent_appends_and_end():
    """Appends racing an end either land before it or are refused; none are lost."""
    store = InMemoryConversationStore()
    session = store.create_session(user_id=None, metadata=None, started_at=utcnow())
    accepted = []
    refused = []
    barrier = threading.Barrier(9)

    def writer(n):
        barrier.wait()
        for i in range(50):
            msg = store.append_message(
                session.id, MessageRole.USER, f"{n}-{i}", None, utcnow()
            )
            (accepted if msg is not None else refused).append(msg)

    def ender():
        barrier.wait()
        store.transition_status(
            session.id, OPEN_STATUSES, SessionStatus.ENDED, ended_at=utcnow()
        )

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
    threads.append(threading.Thread(target=ender))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    messages = store.list_messages(session.id)
    assert len(accepted) + len(refused) == 400
    assert len(messages) == len(accepted)
    assert [m.sequence for m in messages] == list(range(1, len(messages) + 1))
    assert store.get_session(session.id).status == SessionStatus.ENDED
    assert store.append_message(session.id, MessageRole.USER, "x", None, utcnow()) is None
