"""Borsh layouts for greeting account state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

from borsh_construct import CStruct, String, U32
from construct import ConstructError

from .constants import U32_MAX
from .errors import SchemaError


@dataclass(frozen=True)
class GreetingLayout:
    """Fixed-size borsh struct with a single field.

    The encoded length of ``sample`` is the account size: it is what gets
    allocated on chain, and every later encode/decode must produce or consume
    exactly that many bytes.
    """

    name: str
    field_name: str
    struct: CStruct
    sample: Any
    carries_payload: bool = True
    size: int = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "size", len(self.struct.build({self.field_name: self.sample})))

    def encode(self, value: Any) -> bytes:
        self._check_value(value)
        try:
            data = self.struct.build({self.field_name: value})
        except ConstructError as exc:
            raise SchemaError(f"{self.name} greeting {value!r} cannot be encoded: {exc}") from exc
        if len(data) != self.size:
            raise SchemaError(
                f"{self.name} greeting {value!r} encodes to {len(data)} bytes; "
                f"account holds exactly {self.size}"
            )
        return data

    def decode(self, data: bytes) -> Any:
        data = bytes(data)
        if len(data) != self.size:
            raise SchemaError(
                f"{self.name} account data is {len(data)} bytes; expected {self.size}"
            )
        try:
            parsed = self.struct.parse(data)
        except (ConstructError, UnicodeDecodeError) as exc:
            raise SchemaError(f"{self.name} account data does not decode: {exc}") from exc
        value = parsed[self.field_name]
        consumed = len(self.struct.build({self.field_name: value}))
        if consumed != len(data):
            raise SchemaError(
                f"{self.name} account data has {len(data) - consumed} unexpected trailing bytes"
            )
        return value

    def _check_value(self, value: Any) -> None:
        if isinstance(self.sample, str):
            if not isinstance(value, str):
                raise SchemaError(f"{self.name} greeting must be a string")
            return
        if isinstance(value, bool) or not isinstance(value, int):
            raise SchemaError(f"{self.name} greeting must be an integer")
        if value < 0 or value > U32_MAX:
            raise SchemaError(f"{self.name} greeting must be within u32 range")


# Twelve characters: the length every message sent to the text program must have.
TEXT_SAMPLE = "000000000000"

TEXT_LAYOUT = GreetingLayout(
    name="text",
    field_name="txt",
    struct=CStruct("txt" / String),
    sample=TEXT_SAMPLE,
)

# The counter program ignores instruction data and increments on every call.
COUNTER_LAYOUT = GreetingLayout(
    name="counter",
    field_name="counter",
    struct=CStruct("counter" / U32),
    sample=0,
    carries_payload=False,
)

LAYOUTS: Dict[str, GreetingLayout] = {
    TEXT_LAYOUT.name: TEXT_LAYOUT,
    COUNTER_LAYOUT.name: COUNTER_LAYOUT,
}


def layout_for(name: str) -> GreetingLayout:
    try:
        return LAYOUTS[name.strip().lower()]
    except KeyError:
        raise ValueError(f"unknown greeting layout '{name}' (expected text|counter)") from None


def text_capacity(layout: GreetingLayout = TEXT_LAYOUT) -> int:
    """Number of UTF-8 bytes a text greeting must occupy."""
    return len(layout.sample.encode("utf-8"))
