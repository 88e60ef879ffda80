from __future__ import annotations

from typing import Protocol


class ThrottlePort(Protocol):
    def after_result(self) -> None:
        ...

    def after_keyword(self) -> None:
        ...
