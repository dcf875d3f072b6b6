from typing import TypedDict


class StatResult(TypedDict):
    is_dir: bool
    size: int
    modified_at: float
