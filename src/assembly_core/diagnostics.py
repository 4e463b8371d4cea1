from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DiagnosticCode(str, Enum):
    MISSING_CATALOG_ENTRY = "missing_catalog_entry"
    INVALID_ORDER_LINE = "invalid_order_line"
    UNPLACEABLE_INSTANCE = "unplaceable_instance"


class AssemblyStatus(str, Enum):
    OK = "ok"
    EMPTY_ORDER_SET = "empty_order_set"
    EMPTY_INSTANCE_SET = "empty_instance_set"


@dataclass(frozen=True)
class Diagnostic:
    code: DiagnosticCode
    message: str
    sku: str = ""
    box_type_key: str = ""
    line_index: int = -1

    def to_dict(self) -> dict:
        return {
            "code": self.code.value,
            "message": self.message,
            "sku": self.sku,
            "boxType": self.box_type_key,
            "line": self.line_index,
        }
