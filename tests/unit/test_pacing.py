import threading

from tests.helpers.crawler_imports import Pacer
from tests.helpers.fakes import RecordingSleep


def test_first_wait_is_free_and_later_waits_sleep():
    sleep = RecordingSleep()
    pacer = Pacer(1.024, sleep=sleep)

    for _ in range(3):
        pacer.wait()

    assert sleep.calls == [1.024, 1.024]


def test_reset_makes_the_next_wait_free_again():
    sleep = RecordingSleep()
    pacer = Pacer(0.5, sleep=sleep)
    pacer.wait()
    pacer.reset()

    pacer.wait()

    assert sleep.calls == []


def test_zero_delay_never_sleeps():
    sleep = RecordingSleep()
    pacer = Pacer(0, sleep=sleep)

    pacer.wait()
    pacer.wait()

    assert sleep.calls == []


def test_cancel_event_interrupts_the_wait():
    cancel_event = threading.Event()
    cancel_event.set()
    sleep = RecordingSleep()
    pacer = Pacer(60, sleep=sleep, cancel_event=cancel_event)

    pacer.wait()
    pacer.wait()

    assert sleep.calls == []
