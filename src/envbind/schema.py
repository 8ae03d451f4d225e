"""Schema model: field specs and the dataclass declaration surface.

A schema is declared on a dataclass. Fields bound to a source key use
:func:`env`; dataclass-typed fields without ``env(...)`` are nested
schemas loaded recursively:

    >>> @dataclass(frozen=True)
    ... class Database:
    ...     url: str = env("DB_URL", default="sqlite://test.db")
    ...     pool_size: int = env("DB_POOL_SIZE", default="5")
    ...
    >>> @dataclass(frozen=True)
    ... class AppConfig:
    ...     app_name: str = env("APP_NAME", required=True)
    ...     features: list[str] = env("FEATURES", default="foo,bar", split=",")
    ...     db: Database
    ...
    >>> schema = schema_for(AppConfig)
    >>> [spec.name for spec in schema]
    ['app_name', 'features', 'db']

Schemas are built once per class and cached.
"""

import dataclasses
import types
from dataclasses import dataclass
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    Optional,
    Tuple,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from pydantic import BaseModel, ConfigDict, ValidationError, model_validator

from envbind.errors import SchemaError
from envbind.parsing import DEFAULT_DELIMITER, get_parser

# Key under which env(...) stores its binding in dataclass field metadata
ENV_METADATA_KEY = "envbind"


class FieldKind(str, Enum):
    """How a field obtains its value."""

    SCALAR = "scalar"
    LIST = "list"
    NESTED = "nested"


class FieldSpec(BaseModel):
    """Normalized binding rule for one field.

    Attributes:
        name: Attribute name on the target class.
        kind: Binding strategy.
        source_key: Key looked up in the source environment.
        default: Textual default, parsed like a source value.
        required: Fail when the key is missing and no default exists.
        delimiter: Item separator for list fields.
        target_type: Scalar type, or item type for list fields.
        container: Sequence type produced by list fields.
        zero: Factory for the value bound when the key is missing,
            no default exists and the field is not required.
        nested: Schema of a nested field.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: FieldKind
    source_key: Optional[str] = None
    default: Optional[str] = None
    required: bool = False
    delimiter: str = DEFAULT_DELIMITER
    target_type: Any = None
    container: Any = list
    zero: Any = None
    nested: Any = None

    @model_validator(mode="after")
    def validate_kind_requirements(self) -> "FieldSpec":
        """Validate the attributes each kind needs or forbids."""
        if self.kind == FieldKind.NESTED:
            if not isinstance(self.nested, Schema):
                raise ValueError("nested field requires a nested schema")
            if self.source_key is not None or self.default is not None or self.required:
                raise ValueError(
                    "nested field cannot declare source_key, default or required"
                )
            return self

        if not self.source_key:
            raise ValueError(f"{self.kind.value} field requires a source_key")
        if self.nested is not None:
            raise ValueError(f"{self.kind.value} field cannot have a nested schema")
        if self.target_type is None:
            raise ValueError(f"{self.kind.value} field requires a target_type")
        if self.kind == FieldKind.LIST and self.container not in (list, tuple):
            raise ValueError("list field container must be list or tuple")
        if self.zero is not None and not callable(self.zero):
            raise ValueError("zero must be a callable")
        if not self.required and self.default is None and self.zero is None:
            raise ValueError(
                "field without default or required=True needs a zero value "
                "for its type; declare a default or mark it required"
            )
        return self


@dataclass(frozen=True)
class Schema:
    """Ordered field specs plus the callable that assembles the value.

    Attributes:
        target: Called with the bound fields as keyword arguments.
        fields: Field specs in declaration order.
    """

    target: Callable[..., Any]
    fields: Tuple[FieldSpec, ...] = ()

    @property
    def name(self) -> str:
        return getattr(self.target, "__qualname__", repr(self.target))

    def __iter__(self) -> Iterator[FieldSpec]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    def field(self, name: str) -> FieldSpec:
        """Get a field spec by attribute name.

        Raises:
            KeyError: If the schema has no such field.
        """
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(f"Schema {self.name} has no field '{name}'")

    def build(self, values: Dict[str, Any]) -> Any:
        """Assemble the configuration value from bound fields."""
        return self.target(**values)


@dataclass(frozen=True)
class EnvBinding:
    """Binding attributes attached to a dataclass field by :func:`env`."""

    key: str
    default: Optional[str] = None
    required: bool = False
    split: str = DEFAULT_DELIMITER


def env(
    key: str,
    *,
    default: Optional[str] = None,
    required: bool = False,
    split: str = DEFAULT_DELIMITER,
    **field_kwargs: Any,
) -> Any:
    """Bind a dataclass field to a source key.

    Args:
        key: Key looked up in the source environment.
        default: Textual default, parsed with the field's type when the
            key is missing or blank.
        required: Fail the load when the key is missing or blank and no
            default is declared.
        split: Item delimiter, used by list and tuple fields.
        **field_kwargs: Passed through to ``dataclasses.field``.

    Returns:
        A ``dataclasses.field`` carrying the binding in its metadata.
    """
    metadata = dict(field_kwargs.pop("metadata", None) or {})
    metadata[ENV_METADATA_KEY] = EnvBinding(
        key=key, default=default, required=required, split=split
    )
    return dataclasses.field(metadata=metadata, **field_kwargs)


# =============================================================================
# Reflection
# =============================================================================

_schema_registry: Dict[type, Schema] = {}


def schema_for(cls: type) -> Schema:
    """Return the (cached) schema of a dataclass.

    Nested dataclasses are reflected recursively. Self-referencing
    dataclasses are not supported.

    Raises:
        SchemaError: If a field cannot be bound.
    """
    schema = _schema_registry.get(cls)
    if schema is None:
        schema = _build_schema(cls)
        _schema_registry[cls] = schema
    return schema


def clear_schema_cache() -> None:
    """Forget all cached schemas."""
    _schema_registry.clear()


def _is_dataclass_type(tp: Any) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def _build_schema(cls: type) -> Schema:
    if not _is_dataclass_type(cls):
        raise SchemaError(f"{cls!r} is not a dataclass")

    try:
        hints = get_type_hints(cls)
    except (NameError, TypeError) as e:
        raise SchemaError(f"Cannot resolve annotations of {cls.__qualname__}: {e}") from e

    specs = []
    for f in dataclasses.fields(cls):
        if not f.init:
            continue

        annotation = hints.get(f.name, f.type)
        binding = f.metadata.get(ENV_METADATA_KEY)
        where = f"{cls.__qualname__}.{f.name}"

        if binding is not None:
            specs.append(_bound_field_spec(where, f.name, annotation, binding))
        elif _is_dataclass_type(annotation):
            specs.append(_field_spec(
                where,
                name=f.name,
                kind=FieldKind.NESTED,
                nested=schema_for(annotation),
            ))
        elif f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            raise SchemaError(
                f"Field '{where}' has no env() binding, is not a nested "
                f"dataclass and has no default"
            )

    return Schema(target=cls, fields=tuple(specs))


def _bound_field_spec(
    where: str,
    name: str,
    annotation: Any,
    binding: EnvBinding,
) -> FieldSpec:
    inner, optional = _unwrap_optional(annotation)
    origin = get_origin(inner)

    if inner in (list, tuple) or origin in (list, tuple):
        container = inner if origin is None else origin
        args = get_args(inner)
        if container is tuple and args and (len(args) != 2 or args[1] is not Ellipsis):
            raise SchemaError(
                f"Field '{where}': only variable-length tuple[T, ...] is supported"
            )
        item_type = args[0] if args else str
        _check_parser(where, item_type)
        return _field_spec(
            where,
            name=name,
            kind=FieldKind.LIST,
            source_key=binding.key,
            default=binding.default,
            required=binding.required,
            delimiter=binding.split,
            target_type=item_type,
            container=container,
            zero=_none if optional else container,
        )

    _check_parser(where, inner)
    return _field_spec(
        where,
        name=name,
        kind=FieldKind.SCALAR,
        source_key=binding.key,
        default=binding.default,
        required=binding.required,
        target_type=inner,
        zero=_none if optional else _zero_factory(inner),
    )


def _field_spec(where: str, **kwargs: Any) -> FieldSpec:
    try:
        return FieldSpec(**kwargs)
    except ValidationError as e:
        raise SchemaError(f"Invalid binding for field '{where}': {e}") from e


def _check_parser(where: str, target_type: Any) -> None:
    try:
        get_parser(target_type)
    except SchemaError as e:
        raise SchemaError(f"Field '{where}': {e}") from e


def _unwrap_optional(annotation: Any) -> Tuple[Any, bool]:
    """Split ``Optional[T]`` into ``(T, True)``; other types pass through."""
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1 and len(get_args(annotation)) == 2:
            return args[0], True
    return annotation, False


def _none() -> None:
    return None


def _zero_factory(target_type: Any) -> Optional[Callable[[], Any]]:
    """Return the type's no-argument constructor if it has one."""
    if not isinstance(target_type, type):
        return None
    try:
        target_type()
    except Exception:
        return None
    return target_type
