import threading
from uuid import UUID

from ..core.locks import AccountLocks


LOW = UUID("00000000-0000-4000-8000-000000000001")
HIGH = UUID("ffffffff-ffff-4fff-bfff-ffffffffffff")


def test_ordered_sorts_and_deduplicates() -> None:
    assert AccountLocks.ordered(HIGH, LOW, HIGH) == [LOW, HIGH]


def test_hold_same_account_twice_does_not_block() -> None:
    locks = AccountLocks()
    with locks.hold(LOW, LOW):
        pass
    with locks.hold(LOW):
        pass


def test_hold_excludes_other_threads_until_released() -> None:
    locks = AccountLocks()
    entered = threading.Event()

    def _contender() -> None:
        with locks.hold(HIGH, LOW):
            entered.set()

    with locks.hold(LOW):
        worker = threading.Thread(target=_contender)
        worker.start()
        assert not entered.wait(timeout=0.2)

    worker.join(timeout=5)
    assert entered.is_set()


def test_registry_is_empty_after_release() -> None:
    locks = AccountLocks()
    with locks.hold(LOW, HIGH):
        assert len(locks) == 2
    assert len(locks) == 0


def test_registry_keeps_entry_while_contended() -> None:
    locks = AccountLocks()
    waiting = threading.Event()
    done = threading.Event()

    def _contender() -> None:
        waiting.set()
        with locks.hold(LOW):
            done.set()

    with locks.hold(LOW):
        worker = threading.Thread(target=_contender)
        worker.start()
        waiting.wait(timeout=5)

    worker.join(timeout=5)
    assert done.is_set()
    assert len(locks) == 0
