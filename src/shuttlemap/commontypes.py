import dataclasses


@dataclasses.dataclass(frozen=True)
class DebugFlags:
    regex: bool = False
    strokes: bool = False
    keys: bool = False

    @classmethod
    def from_letters(cls, letters: str):
        unknown = set(letters) - set("rsk")
        if unknown:
            raise ValueError(f"unknown debugging option {''.join(sorted(unknown))!r}, must be r, s or k")
        return cls(regex="r" in letters, strokes="s" in letters, keys="k" in letters)

    @classmethod
    def everything(cls):
        return cls(regex=True, strokes=True, keys=True)


class ShuttlemapError(Exception):
    pass


class NotInContextError(ShuttlemapError):
    def __init__(self):
        return super().__init__("Must be inside an appropriate context manager")
