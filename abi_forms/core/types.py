from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Field:
    type: str
    name: str = ""


@dataclass(frozen=True)
class ParameterNode:
    type: str
    name: str = ""
    components: tuple[ParameterNode, ...] | None = None

    @property
    def is_tuple(self) -> bool:
        return self.type == "tuple" or self.type.startswith("tuple[")

    @property
    def array_suffix(self) -> str:
        idx = self.type.find("[")
        return self.type[idx:] if idx >= 0 else ""

    def canonical_type(self) -> str:
        """Type as it appears in a selector signature, e.g. ``(uint256,address)[]``."""
        if not self.is_tuple:
            return self.type
        inner = ",".join(c.canonical_type() for c in self.components or ())
        return f"({inner}){self.array_suffix}"

    def to_abi(self) -> dict[str, Any]:
        entry: dict[str, Any] = {"name": self.name, "type": self.type}
        if self.components is not None:
            entry["components"] = [c.to_abi() for c in self.components]
        return entry

    @classmethod
    def from_abi(cls, entry: dict[str, Any]) -> ParameterNode:
        components = entry.get("components")
        return cls(
            type=str(entry.get("type") or "").strip(),
            name=str(entry.get("name") or "").strip(),
            components=(
                tuple(cls.from_abi(c) for c in components)
                if isinstance(components, list)
                else None
            ),
        )


@dataclass(frozen=True)
class FunctionDescriptor:
    name: str
    inputs: tuple[ParameterNode, ...] = ()
    outputs: tuple[ParameterNode, ...] = ()
    state_mutability: str = "nonpayable"

    @property
    def selector_signature(self) -> str:
        return f"{self.name}({','.join(i.canonical_type() for i in self.inputs)})"

    def to_abi(self) -> dict[str, Any]:
        return {
            "type": "function",
            "name": self.name,
            "inputs": [i.to_abi() for i in self.inputs],
            "outputs": [o.to_abi() for o in self.outputs],
            "stateMutability": self.state_mutability,
        }

    @classmethod
    def from_abi(cls, fn_abi: dict[str, Any]) -> FunctionDescriptor:
        inputs = fn_abi.get("inputs") if isinstance(fn_abi.get("inputs"), list) else []
        outputs = (
            fn_abi.get("outputs") if isinstance(fn_abi.get("outputs"), list) else []
        )
        return cls(
            name=str(fn_abi.get("name") or "").strip(),
            inputs=tuple(ParameterNode.from_abi(i) for i in inputs),
            outputs=tuple(ParameterNode.from_abi(o) for o in outputs),
            state_mutability=str(fn_abi.get("stateMutability") or "nonpayable"),
        )


@dataclass(frozen=True)
class LinearizedParameter:
    type: str  # tuples carry their fully expanded signature
    name: str
    depth: int = 0
    path: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "name": self.name,
            "depth": self.depth,
            "path": self.path,
        }


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    error: str | None = None

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(True, None)

    @classmethod
    def invalid(cls, reason: str) -> ValidationResult:
        return cls(False, reason)


@dataclass(frozen=True)
class CallPreview:
    function_signature: str = ""
    value_preview: str = ""
    bytecode: str = ""
    is_valid: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "functionSignature": self.function_signature,
            "valuePreview": self.value_preview,
            "bytecode": self.bytecode,
            "isValid": self.is_valid,
        }

