from __future__ import annotations

import datetime
import logging
import pathlib
import typing

import trio

from .deviceutil import EventDevice
from .hwtypes import DeviceDisconnectedError, DeviceGrabError

if typing.TYPE_CHECKING:
    from ..dispatch import Dispatcher

logger = logging.getLogger(__name__)

BY_ID_PATH = pathlib.Path("/dev/input/by-id")
SHUTTLE_DEVICE_GLOB = "usb-Contour_Design_Shuttle*-event-if*"
POLL_INTERVAL = 1 / 120


def find_shuttle_device(by_id: pathlib.Path = BY_ID_PATH) -> typing.Optional[pathlib.Path]:
    try:
        found = sorted(by_id.glob(SHUTTLE_DEVICE_GLOB))
    except OSError:
        logger.debug("Unable to scan %s", by_id, exc_info=True)
        return None
    if not found:
        return None
    logger.info("found shuttle device: %s", found[0])
    return found[0]


class ShuttleListener:
    """Read the shuttle device and hand every event to the dispatcher, in order.

    If the device can't be opened the first time, that's fatal. If it goes away
    later (unplugged, suspended), we wait and reopen it, forever.
    """

    def __init__(
        self,
        device_path: pathlib.Path,
        dispatcher: Dispatcher,
        reopen_delay: datetime.timedelta = datetime.timedelta(seconds=1),
    ):
        self.device = EventDevice(device_path)
        self.dispatcher = dispatcher
        self.reopen_delay = reopen_delay
        self.cancel_scope = trio.CancelScope()

    async def run(self, *, task_status=trio.TASK_STATUS_IGNORED):
        started = False
        with self.cancel_scope:
            while True:
                try:
                    with self.device:
                        logger.debug("Getting events for %r", self.device.device_path)
                        if not started:
                            started = True
                            task_status.started()
                        await self.pump()
                except (DeviceDisconnectedError, DeviceGrabError, OSError) as exc:
                    if not started:
                        raise
                    logger.warning("Lost %s (%s); reopening in %s", self.device.device_path, exc, self.reopen_delay)
                await trio.sleep(self.reopen_delay.total_seconds())

    async def pump(self):
        while True:
            for evt in self.device.events():
                self.dispatcher.handle_event(evt)
                await trio.lowlevel.checkpoint()
            await trio.sleep(POLL_INTERVAL)
