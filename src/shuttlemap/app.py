# SPDX-FileCopyrightText: 2026 shuttlemap contributors
#
# SPDX-License-Identifier: GPL-3.0-or-later
from __future__ import annotations

import argparse
import logging
import pathlib
import sys

import trio

from .commontypes import ShuttlemapError
from .device.shuttle import ShuttleListener, find_shuttle_device
from .dispatch import Dispatcher
from .interpreter import SignalInterpreter
from .loader import TableLoader
from .settings import Settings, settings_converter
from .x11 import XTestSink, XWindowFocus, open_display

logger = logging.getLogger(__name__)


async def run_daemon(settings: Settings, *, task_status=trio.TASK_STATUS_IGNORED):
    display = open_display()
    try:
        loader = TableLoader(settings.config_path, debug=settings.debug)
        dispatcher = Dispatcher(
            loader,
            XWindowFocus(display),
            XTestSink(display),
            interpreter=SignalInterpreter(settings.shuttle_center_timeout),
        )
        # load once up front so rule file problems are reported at startup
        loader.refresh()
        listener = ShuttleListener(settings.device_path, dispatcher, reopen_delay=settings.reopen_delay)
        logger.info("Listening to %s with rules from %s", settings.device_path, settings.config_path)
        await listener.run(task_status=task_status)
    finally:
        display.close()
    logger.debug("goodbye")


parser = argparse.ArgumentParser(prog="shuttlemap", description="Map Contour ShuttlePRO input to X11 keystrokes.")
parser.add_argument("-r", dest="config", type=pathlib.Path, help="rule file (default $SHUTTLE_CONFIG_FILE or ~/.shuttlerc)")
parser.add_argument(
    "-d",
    dest="debug",
    nargs="?",
    const="rsk",
    default="",
    metavar="[rsk]",
    help="trace regex matches (r), compiled strokes (s) and emitted keys (k); all three if no letters are given",
)
parser.add_argument("-v", "--verbose", action="store_true", help="log internal details")
parser.add_argument("device", nargs="?", type=pathlib.Path, help="event device (default: search /dev/input/by-id)")


def main(argv=sys.argv):
    """
    Args:
        argv (list): List of arguments

    Returns:
        int: A return code
    """
    parsed = parser.parse_args(argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format="%(message)s" if not parsed.verbose else "%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = Settings.from_args(parsed)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    if settings.device_path is None:
        device_path = find_shuttle_device()
        if device_path is None:
            logger.error("No shuttle device found; pass its event device path on the command line")
            return 1
        settings = settings.with_device(device_path)
    logger.debug("settings: %r", settings_converter.unstructure(settings))

    try:
        trio.run(run_daemon, settings)
    except (ShuttlemapError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        logger.debug("interrupted")
    return 0


if __name__ == "__main__":
    sys.exit(main())
