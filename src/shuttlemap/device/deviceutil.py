import collections.abc
import contextlib
import errno
import fcntl
import os
import pathlib

from ..commontypes import NotInContextError
from .eventsource import Event
from .hwtypes import DeviceDisconnectedError, DeviceGrabError


@contextlib.contextmanager
def reporting_disconnects(device_path: pathlib.Path):
    "Turn ENODEV from the kernel into DeviceDisconnectedError; other OSErrors pass through."
    try:
        yield
    except OSError as exc:
        if exc.errno == errno.ENODEV:
            raise DeviceDisconnectedError(f"{device_path} went away") from exc
        raise


class EventDevice(contextlib.AbstractContextManager):
    """One evdev node, opened non-blocking and grabbed exclusively.

    While grabbed, the shuttle's buttons and wheel events reach only us and
    not the desktop. Use it as a context manager; events() only works inside.
    """

    def __init__(self, device_path: str | pathlib.Path):
        device_path = pathlib.Path(device_path)
        if not device_path.is_absolute():
            raise ValueError("Device path must be absolute")
        self.device_path = device_path
        self._file = None
        self._device = None

    @property
    def is_open(self):
        return self._device is not None

    def open(self):
        import libevdev

        self._file = self.device_path.open("rb", buffering=0)
        try:
            with reporting_disconnects(self.device_path):
                fcntl.fcntl(self._file, fcntl.F_SETFL, os.O_NONBLOCK)
                self._device = libevdev.Device(self._file)
                self._device.grab()
        except libevdev.device.DeviceGrabError as exc:
            self.close()
            raise DeviceGrabError(f"{self.device_path} is grabbed by another program") from exc
        except BaseException:
            self.close()
            raise

    def close(self):
        # the grab ends with the file descriptor
        if self._file is not None:
            self._file.close()
        self._file = None
        self._device = None

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, _exc_type, _exc_value, _traceback):
        self.close()
        return False

    def events(self) -> collections.abc.Iterator[Event]:
        """Yield the events already queued by the kernel and return when there are none left.

        If the kernel's buffer overflowed (SYN_DROPPED), the partial packet is
        dropped: everything through the next SYN_REPORT is skipped.
        """
        import libevdev

        if not self.is_open:
            raise NotInContextError()
        pending = self._device.events()
        while True:
            with reporting_disconnects(self.device_path):
                try:
                    evt = next(pending)
                except StopIteration:
                    return
                except libevdev.EventsDroppedException:
                    # the old generator is finished once it has raised
                    pending = self._device.events()
                    if not self._skip_to_report(pending):
                        return
                    continue
            yield Event.from_libevdev_event(evt)

    @staticmethod
    def _skip_to_report(pending) -> bool:
        import libevdev

        for evt in pending:
            if evt.matches(libevdev.EV_SYN.SYN_REPORT):
                return True
        return False
