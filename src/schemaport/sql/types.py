"""
Type mapping registry.

Translates an abstract column type plus its options into a dialect type
declaration. Each platform owns one ``TypeMapping`` built at construction
from a table of renderers; the table is frozen afterwards.

A renderer returns ``None`` when a required parameter (the length of a
variable-length string or binary column) is missing; the registry turns
that into ``ColumnLengthRequired`` instead of guessing a default.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional

from schemaport.exceptions import ColumnLengthRequired, UnknownColumnType, UnsupportedFeature
from schemaport.schema.core import Column, ColumnType

Renderer = Callable[["TypeOptions"], Optional[str]]


@dataclass(frozen=True)
class TypeOptions:
    """Options that shape a type declaration."""

    length: Optional[int] = None
    fixed: bool = False
    precision: int = 10
    scale: int = 0
    autoincrement: bool = False

    @classmethod
    def from_column(cls, column: Column, autoincrement: Optional[bool] = None) -> "TypeOptions":
        return cls(
            length=column.length,
            fixed=column.fixed,
            precision=column.precision,
            scale=column.scale,
            autoincrement=column.autoincrement if autoincrement is None else autoincrement,
        )


class TypeMapping:
    """Immutable abstract-type to declaration mapping for one platform."""

    def __init__(
        self,
        platform_name: str,
        renderers: Mapping[ColumnType, Renderer],
        native_types: Optional[Mapping[str, ColumnType]] = None,
    ):
        self._platform_name = platform_name
        self._renderers = MappingProxyType(dict(renderers))
        self._native_types = MappingProxyType(
            {name.lower(): column_type for name, column_type in (native_types or {}).items()}
        )

    @property
    def native_types(self) -> Mapping[str, ColumnType]:
        return self._native_types

    def supports(self, column_type: ColumnType) -> bool:
        return column_type in self._renderers

    def declaration_sql(
        self,
        column_type: ColumnType,
        options: Optional[TypeOptions] = None,
        column_name: Optional[str] = None,
    ) -> str:
        """
        Render the type declaration for ``column_type``.

        Raises:
            ColumnLengthRequired: The dialect needs a length that was not given
            UnsupportedFeature: The dialect has no declaration for the type
        """
        renderer = self._renderers.get(column_type)
        if renderer is None:
            raise UnsupportedFeature(self._platform_name, f"{column_type.value} column type")
        declaration = renderer(options or TypeOptions())
        if declaration is None:
            raise ColumnLengthRequired(self._platform_name, column_type.value, column=column_name)
        return declaration

    def has_native_type(self, native_type: str) -> bool:
        return native_type.lower() in self._native_types

    def abstract_type_for(self, native_type: str) -> ColumnType:
        """Map a native type name as reported by the database to an abstract type."""
        try:
            return self._native_types[native_type.lower()]
        except KeyError:
            raise UnknownColumnType(
                f"Unknown database type '{native_type}' requested for platform '{self._platform_name}'"
            ) from None


# Renderer builders shared by the dialect tables


def constant(token: str) -> Renderer:
    return lambda options: token


def sized(variable: str, fixed_token: str) -> Renderer:
    """``VARCHAR(n)``/``CHAR(n)`` style with a required length."""

    def render(options: TypeOptions) -> Optional[str]:
        if options.length is None:
            return None
        token = fixed_token if options.fixed else variable
        return f"{token}({options.length})"

    return render


def sized_or_bare(variable: str, fixed_token: str) -> Renderer:
    """Like ``sized`` but a missing length renders the bare token."""

    def render(options: TypeOptions) -> Optional[str]:
        token = fixed_token if options.fixed else variable
        return token if options.length is None else f"{token}({options.length})"

    return render


def numeric(token: str) -> Renderer:
    return lambda options: f"{token}({options.precision}, {options.scale})"


def integer(token: str, identity_suffix: str = "") -> Renderer:
    """Integer declaration; ``identity_suffix`` is appended for autoincrement columns."""
    return lambda options: f"{token}{identity_suffix}" if options.autoincrement else token


def build_type_mapping(
    platform_name: str,
    renderers: Dict[ColumnType, Renderer],
    native_types: Optional[Dict[str, ColumnType]] = None,
) -> TypeMapping:
    missing = [t.value for t in ColumnType if t not in renderers]
    if missing:
        raise ValueError(f"Type mapping for {platform_name} is missing {missing}")
    return TypeMapping(platform_name, renderers, native_types)


__all__ = [
    "TypeOptions",
    "TypeMapping",
    "Renderer",
    "constant",
    "sized",
    "sized_or_bare",
    "numeric",
    "integer",
    "build_type_mapping",
]
