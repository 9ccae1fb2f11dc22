import argparse
import dataclasses
import datetime
import os
import pathlib
import typing

import cattrs

from .commontypes import DebugFlags
from .durations import format_duration, parse_duration

CONFIG_FILE_VARIABLE = "SHUTTLE_CONFIG_FILE"
CENTER_TIMEOUT_VARIABLE = "SHUTTLE_CENTER_TIMEOUT"
DEFAULT_CONFIG_NAME = ".shuttlerc"
DEFAULT_CENTER_TIMEOUT = "5ms"
DEFAULT_REOPEN_DELAY = "1s"


def timedelta_value(value: datetime.timedelta | int | float | str):
    if isinstance(value, datetime.timedelta):
        return value
    if isinstance(value, (int, float)):
        return datetime.timedelta(seconds=value)
    return parse_duration(value)


settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(datetime.timedelta, format_duration)
settings_converter.register_structure_hook(datetime.timedelta, lambda v, _: timedelta_value(v))
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v).expanduser())


def default_config_path(environ: typing.Mapping[str, str]) -> pathlib.Path:
    override = environ.get(CONFIG_FILE_VARIABLE)
    if override:
        return pathlib.Path(override)
    home = environ.get("HOME")
    if home:
        return pathlib.Path(home) / DEFAULT_CONFIG_NAME
    return pathlib.Path.home() / DEFAULT_CONFIG_NAME


@dataclasses.dataclass(kw_only=True)
class Settings:
    config_path: pathlib.Path
    device_path: typing.Optional[pathlib.Path] = None
    debug: DebugFlags = dataclasses.field(default_factory=DebugFlags)
    shuttle_center_timeout: datetime.timedelta = datetime.timedelta(milliseconds=5)
    reopen_delay: datetime.timedelta = datetime.timedelta(seconds=1)

    def with_device(self, device_path: pathlib.Path):
        return dataclasses.replace(self, device_path=device_path)

    @classmethod
    def from_args(cls, args: argparse.Namespace, environ: typing.Mapping[str, str] = os.environ):
        """Settings from parsed command line arguments, with environment fallbacks.

        Raises ValueError for an unknown debug category or a bad duration.
        """
        raw = {
            "config_path": args.config if args.config is not None else default_config_path(environ),
            "device_path": args.device,
            "debug": settings_converter.unstructure(DebugFlags.from_letters(args.debug or "")),
            "shuttle_center_timeout": environ.get(CENTER_TIMEOUT_VARIABLE) or DEFAULT_CENTER_TIMEOUT,
            "reopen_delay": DEFAULT_REOPEN_DELAY,
        }
        try:
            return settings_converter.structure(raw, cls)
        except cattrs.BaseValidationError as exc:
            raise ValueError("; ".join(cattrs.transform_error(exc))) from exc

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "config_path": "test.shuttlerc",
                "device_path": "/dev/input/test-shuttle",
                "debug": {"regex": False, "strokes": False, "keys": False},
                "shuttle_center_timeout": "5ms",
                "reopen_delay": "10ms",
            },
            cls,
        )
