import argparse
import functools
import logging
import pathlib
import sys

import trio

from .commontypes import DebugFlags
from .compiler import compile_config
from .device.deviceutil import EventDevice
from .device.eventsource import EventType
from .device.shuttle import POLL_INTERVAL, find_shuttle_device
from .dispatch import Dispatcher
from .interpreter import SignalInterpreter
from .keysyms import default_resolver
from .loader import TableLoader
from .strokes import Slot

check_config_parser = argparse.ArgumentParser(prog="shuttlemap-check")
check_config_parser.add_argument("config", type=pathlib.Path)
check_config_parser.add_argument("-q", "--quiet", action="store_true", help="only report problems")


def check_config(path: pathlib.Path, quiet: bool = False) -> int:
    resolver = default_resolver()
    result = compile_config(path.read_text(encoding="utf-8"), resolver)
    for diagnostic in result.diagnostics:
        print(f"{path}: {diagnostic}", file=sys.stderr)
    if not quiet:
        for section in result.table:
            label = "(default)" if section.is_default else section.pattern.pattern
            print(f"[{section.name}] {label}")
            for slot in Slot.all():
                sequence = section.binding(slot)
                if sequence is not None:
                    print(f"    {slot}: {resolver.format_ops(sequence)}")
    return 1 if result.diagnostics else 0


def check_config_cli():
    args = check_config_parser.parse_args()
    logging.basicConfig(level=logging.ERROR)
    sys.exit(check_config(args.config, args.quiet))


shuttle_events_parser = argparse.ArgumentParser(prog="shuttlemap-events")
shuttle_events_parser.add_argument("device", nargs="?", type=pathlib.Path)


class _NoFocus:
    def current_focused_window_text(self):
        return None


class _NoOutput:
    def emit(self, symbol, pressed):
        pass

    def flush(self):
        pass


def print_shuttle_events():
    device_path = shuttle_events_parser.parse_args().device or find_shuttle_device()
    if device_path is None:
        print("No shuttle device found", file=sys.stderr)
        sys.exit(1)
    logging.basicConfig(level=logging.INFO)

    # an empty rule set, so every increment slot counts as unbound
    loader = TableLoader(pathlib.Path("/dev/null"), debug=DebugFlags())
    dispatcher = Dispatcher(loader, _NoFocus(), _NoOutput(), interpreter=SignalInterpreter())
    is_bound = functools.partial(loader.table.is_bound, None)

    async def runner():
        with EventDevice(device_path) as device:
            print(f"Reading {device_path}")
            while True:
                for evt in device.events():
                    print(evt.to_log())
                    if evt.type in (EventType.EV_KEY, EventType.EV_REL):
                        for slot in dispatcher.interpret(evt, is_bound):
                            print(f"    -> {slot}")
                await trio.sleep(POLL_INTERVAL)

    trio.run(runner)
