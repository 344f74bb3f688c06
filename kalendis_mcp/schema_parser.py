"""Parse catalog type expressions and project them to TypeScript.

Handles:
- Bare scalar names (string, number, boolean, DaysOfWeek, ...)
- Registered domain types (User, Booking, ...) -> Types.<Name>
- Collection suffix (Name[]) and generic wrapper (Array<Domain>)
- Inline structural literals ({...}), passed through verbatim
- Anything else, passed through verbatim

Type expressions are parsed once when the catalog loads. Projection is then a
total function over the closed variant set below, with no string matching.
Domain names nested inside inline structural types are NOT rewritten.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

NAMESPACE = "Types"

DOMAIN_TYPES: frozenset[str] = frozenset({
    "User",
    "Availability",
    "RecurringAvailability",
    "AvailabilityException",
    "Booking",
    "Account",
})

# Enums whose arrays are namespaced in request bodies
ENUM_TYPES: frozenset[str] = frozenset({"DaysOfWeek"})

SCALAR_KINDS: frozenset[str] = frozenset({"string", "number", "boolean"})

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class Scalar:
    name: str


@dataclass(frozen=True)
class DomainRef:
    name: str


@dataclass(frozen=True)
class ArrayOf:
    item: Union[Scalar, DomainRef]


@dataclass(frozen=True)
class InlineStruct:
    raw: str


@dataclass(frozen=True)
class Verbatim:
    raw: str


TypeExpr = Union[Scalar, DomainRef, ArrayOf, InlineStruct, Verbatim]


def is_domain_type(name: str) -> bool:
    """Check if a bare name is in the domain-type registry."""
    return name in DOMAIN_TYPES


def _parse_name(name: str) -> Scalar | DomainRef:
    return DomainRef(name) if is_domain_type(name) else Scalar(name)


def parse_type_expr(expr: str) -> TypeExpr:
    """Parse a catalog type expression into its variant."""
    text = expr.strip()

    if text.endswith("[]") and _NAME_RE.match(text[:-2]):
        return ArrayOf(_parse_name(text[:-2]))

    if text.startswith("Array<") and text.endswith(">"):
        inner = text[len("Array<"):-1].strip()
        if is_domain_type(inner):
            return ArrayOf(DomainRef(inner))
        return Verbatim(text)

    if text.startswith("{") and text.endswith("}"):
        return InlineStruct(text)

    if _NAME_RE.match(text):
        return _parse_name(text)

    return Verbatim(text)


def _qualify(name: str, use_namespace: bool) -> str:
    return f"{NAMESPACE}.{name}" if use_namespace else name


def project(type_expr: TypeExpr, use_namespace: bool = True) -> str:
    """Render a parsed type expression as a TypeScript type string."""
    if isinstance(type_expr, DomainRef):
        return _qualify(type_expr.name, use_namespace)
    if isinstance(type_expr, Scalar):
        return type_expr.name
    if isinstance(type_expr, ArrayOf):
        return f"{project(type_expr.item, use_namespace)}[]"
    if isinstance(type_expr, (InlineStruct, Verbatim)):
        return type_expr.raw
    raise TypeError(f"Not a type expression: {type_expr!r}")


def project_type(type_expr: str | TypeExpr, use_namespace: bool = True) -> str:
    """Project a raw or parsed type expression to a TypeScript type string.

    project_type("User")             -> "Types.User"
    project_type("Booking[]")        -> "Types.Booking[]"
    project_type("Array<Account>")   -> "Types.Account[]"
    project_type("string[]")         -> "string[]"
    project_type("{count: number}")  -> "{count: number}"

    Generic arrays always come back in suffix form, so with
    use_namespace=False "Array<User>" renders as "User[]". The two spell the
    same TypeScript type.
    """
    if isinstance(type_expr, str):
        type_expr = parse_type_expr(type_expr)
    return project(type_expr, use_namespace)


def _scalar_type(type_expr: TypeExpr) -> str:
    """Map a field kind to number/boolean, falling back to string."""
    if isinstance(type_expr, Scalar) and type_expr.name in ("number", "boolean"):
        return type_expr.name
    return "string"


def _optional(ts_type: str, required: bool) -> str:
    return ts_type if required else f"{ts_type} | undefined"


def generate_param_type(kind: TypeExpr, required: bool) -> str:
    """TypeScript type of a query parameter."""
    return _optional(_scalar_type(kind), required)


def generate_body_type(kind: TypeExpr, required: bool) -> str:
    """TypeScript type of a request body field.

    Arrays keep their unqualified item name, except enum arrays which are
    always namespaced (DaysOfWeek[] -> Types.DaysOfWeek[]).
    """
    if isinstance(kind, ArrayOf):
        item = kind.item.name
        ts_type = f"{NAMESPACE}.{item}[]" if item in ENUM_TYPES else f"{item}[]"
        return _optional(ts_type, required)
    return _optional(_scalar_type(kind), required)

