"""Parsing of parenthesized Solidity tuple signatures.

A tuple signature is the textual form ``(uint256 a, (address b, bool c) inner)``.
``parse_type_signature`` splits it into ordered ``Field`` records; nested
tuples stay as a single field whose ``type`` is the nested signature, so the
same function can be applied again one level down.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from abi_forms.core.types import Field

TYPE_QUALIFIERS = ("memory", "storage", "calldata", "payable", "internal", "external")

_ARRAY_SUFFIX_RE = re.compile(r"\[\d*\]$")


def _matching_close(text: str, start: int, open_ch: str, close_ch: str) -> int:
    depth = 0
    for i in range(start, len(text)):
        ch = text[i]
        if ch == open_ch:
            depth += 1
        elif ch == close_ch:
            depth -= 1
            if depth == 0:
                return i
    return -1


def parse_type_and_name(item: str) -> Field:
    """Split one tuple member such as ``uint256[] amounts`` into type and name."""
    item = item.strip()
    if not item:
        return Field("", "")

    if item.startswith("("):
        end = _matching_close(item, 0, "(", ")")
        if end == -1:
            # Unbalanced, keep everything as the type
            return Field(item, "")
        if end == len(item) - 1:
            return Field(item, "")

        rest = item[end + 1 :].strip()
        if rest.startswith("["):
            array_start = item.index("[", end + 1)
            array_end = array_start
            # Consume consecutive dimensions, e.g. ``[2][]``
            while array_end < len(item) and item[array_end] == "[":
                close = _matching_close(item, array_end, "[", "]")
                if close == -1:
                    return Field(item, "")
                array_end = close + 1
            tuple_type = item[: end + 1] + item[array_start:array_end]
            return Field(tuple_type, item[array_end:].strip())

        return Field(item[: end + 1], " ".join(rest.split()))

    words = item.split()
    if len(words) == 1:
        return Field(words[0], "")
    if words[-1] in TYPE_QUALIFIERS:
        return Field(" ".join(words), "")
    return Field(" ".join(words[:-1]), words[-1])


def split_fields(content: str) -> list[str]:
    """Split on top-level commas, ignoring commas inside nested parentheses."""
    items: list[str] = []
    depth = 0
    current: list[str] = []
    for ch in content:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == "," and depth == 0:
            items.append("".join(current))
            current = []
            continue
        current.append(ch)
    items.append("".join(current))
    return items


def parse_type_signature(signature: str) -> list[Field]:
    """Parse ``(type name, ...)`` into ordered fields.

    Anything that is not wrapped in parentheses is not a tuple and yields an
    empty list.
    """
    if not signature or not signature.startswith("(") or not signature.endswith(")"):
        return []

    content = signature[1:-1].strip()
    if not content:
        return []

    return [
        parse_type_and_name(raw.strip()) for raw in split_fields(content) if raw.strip()
    ]


def format_type_signature(fields: list[Field]) -> str:
    return "(" + ", ".join(f"{f.type} {f.name}".strip() for f in fields) + ")"


def synthetic_name(index: int) -> str:
    return f"param{index}"


def member_keys(names: Sequence[str]) -> list[str]:
    """Mapping keys for a parameter list: declared names, else ``param{index}``.

    A synthetic key never shadows a declared name or an earlier key; on a
    clash it gets a ``_1``, ``_2``, ... suffix.
    """
    taken = {name for name in names if name}
    keys: list[str] = []
    for index, name in enumerate(names):
        if name:
            keys.append(name)
            continue
        key = synthetic_name(index)
        suffix = 0
        while key in taken:
            suffix += 1
            key = f"{synthetic_name(index)}_{suffix}"
        taken.add(key)
        keys.append(key)
    return keys


def is_tuple_signature(type_str: str) -> bool:
    return type_str.startswith("(") and type_str.endswith(")")


def is_array_type(type_str: str) -> bool:
    return _ARRAY_SUFFIX_RE.search(type_str) is not None


def split_array_suffix(type_str: str) -> tuple[str, str]:
    """Split off the LAST array dimension: ``uint8[2][]`` -> ``("uint8[2]", "[]")``."""
    match = _ARRAY_SUFFIX_RE.search(type_str)
    if not match:
        return type_str, ""
    return type_str[: match.start()], match.group(0)


def base_type(type_str: str) -> str:
    return split_array_suffix(type_str)[0]


def array_length(suffix: str) -> int | None:
    """``[3]`` -> 3, ``[]`` -> None."""
    inner = suffix[1:-1]
    return int(inner) if inner else None


def strip_tuple_suffix(type_str: str) -> tuple[str, str]:
    """Split an expanded tuple type into its ``(...)`` part and all array dimensions."""
    if not type_str.startswith("("):
        return type_str, ""
    end = _matching_close(type_str, 0, "(", ")")
    if end == -1:
        return type_str, ""
    return type_str[: end + 1], type_str[end + 1 :]
