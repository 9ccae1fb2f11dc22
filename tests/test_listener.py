# The device itself can't be opened in tests, so the listener gets a fake one.
from __future__ import annotations

import collections
import contextlib
import datetime
import pathlib

import pytest
import trio
import trio.testing

import shuttlemap.device.shuttle  # important to preserve the namespace for monkeypatching
from shuttlemap.device.eventsource import Event, EventType, RelCode
from shuttlemap.device.hwtypes import DeviceDisconnectedError, DeviceGrabError
from shuttlemap.device.shuttle import ShuttleListener, find_shuttle_device

pytestmark = pytest.mark.trio

DEVICE_PATH = pathlib.Path("/dev/input/by-id/usb-Contour_Design_ShuttlePRO_v2-event-if00")


class FakeEventDevice(contextlib.AbstractContextManager):
    def __init__(self, device_path: pathlib.Path):
        self.device_path = device_path
        self.eventqueue = collections.deque()
        self.grabbed = False
        self.grabs = 0
        self.refuse_grab = False
        self.throw_next_time = False

    def grab(self):
        if self.refuse_grab:
            raise DeviceGrabError(f"{self.device_path} is grabbed by someone else")
        self.grabbed = True
        self.grabs += 1

    def ungrab(self):
        self.grabbed = False
        self.throw_next_time = False

    def __enter__(self):
        self.grab()
        return self

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.ungrab()
        return False

    def events(self):
        if not self.grabbed:
            return
        while True:
            if self.throw_next_time:
                raise DeviceDisconnectedError(str(self.device_path))
            try:
                yield self.eventqueue.popleft()
            except IndexError:
                return


class RecordingDispatcher:
    def __init__(self):
        self.events = []

    def handle_event(self, event: Event):
        self.events.append(event)


def dial(value, clock: trio.testing.MockClock):
    return Event(type=EventType.EV_REL, code=RelCode.REL_DIAL, value=value, timestamp=datetime.timedelta(seconds=clock.current_time()))


@pytest.fixture(autouse=True)
def fake_device(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(shuttlemap.device.shuttle, "EventDevice", FakeEventDevice)


async def test_events_are_dispatched_in_order(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    dispatcher = RecordingDispatcher()
    listener = ShuttleListener(DEVICE_PATH, dispatcher)
    await nursery.start(listener.run)
    assert listener.device.grabbed

    sent = [dial(n, autojump_clock) for n in (1, 2, 3)]
    listener.device.eventqueue.extend(sent)
    await trio.sleep(1)
    assert dispatcher.events == sent


async def test_reopens_after_disconnect(nursery: trio.Nursery, autojump_clock: trio.testing.MockClock):
    dispatcher = RecordingDispatcher()
    listener = ShuttleListener(DEVICE_PATH, dispatcher, reopen_delay=datetime.timedelta(seconds=1))
    await nursery.start(listener.run)
    device = listener.device

    device.throw_next_time = True
    await trio.sleep(0.5)
    assert not device.grabbed
    await trio.sleep(1)
    assert device.grabbed
    assert device.grabs == 2

    sent = dial(7, autojump_clock)
    device.eventqueue.append(sent)
    await trio.sleep(1)
    assert dispatcher.events == [sent]


async def test_first_open_failure_is_fatal(autojump_clock: trio.testing.MockClock):
    listener = ShuttleListener(DEVICE_PATH, RecordingDispatcher())
    listener.device.refuse_grab = True
    with pytest.raises(DeviceGrabError):
        await listener.run()


async def test_find_shuttle_device(tmp_path: pathlib.Path):
    assert find_shuttle_device(tmp_path) is None
    (tmp_path / "usb-Logitech_Mouse-event-mouse").touch()
    (tmp_path / "usb-Contour_Design_ShuttlePRO_v2-event-if00").touch()
    assert find_shuttle_device(tmp_path) == tmp_path / "usb-Contour_Design_ShuttlePRO_v2-event-if00"
