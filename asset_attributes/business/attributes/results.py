from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from asset_attributes.business.attributes.errors import AttributeErrorKind


@dataclass(frozen=True)
class Ok:
    value: Any = None

    ok = True

    def __bool__(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    kind: AttributeErrorKind
    field_label: str | None = None

    ok = False

    def __bool__(self) -> bool:
        return False
