"""Python annotation to type descriptor normalization."""

from __future__ import annotations

import collections
import collections.abc
import dataclasses
import datetime
import decimal
import ipaddress
import pathlib
import types
import typing
import uuid
from enum import Enum
from typing import Any, Literal, Union, get_args, get_origin

from schema_reflector.errors import UnsupportedTypeError

from .type_descriptors import RecordField, TypeDescriptor, TypeKind

_NONE_TYPE = type(None)

_PRIMITIVE_TYPES: tuple[type, ...] = (
    bool,
    int,
    float,
    decimal.Decimal,
    str,
    bytes,
    bytearray,
    datetime.datetime,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    uuid.UUID,
    ipaddress.IPv4Address,
    ipaddress.IPv6Address,
    pathlib.PurePath,
)

_SEQUENCE_ORIGINS = frozenset(
    {
        list,
        collections.deque,
        collections.abc.Sequence,
        collections.abc.MutableSequence,
        collections.abc.Collection,
    }
)
_SET_ORIGINS = frozenset(
    {set, frozenset, collections.abc.Set, collections.abc.MutableSet}
)
_MAPPING_ORIGINS = frozenset(
    {
        dict,
        collections.OrderedDict,
        collections.defaultdict,
        collections.abc.Mapping,
        collections.abc.MutableMapping,
    }
)
_UNWRAPPED_ORIGINS = frozenset({typing.Annotated, typing.Required, typing.NotRequired})


def describe_type(annotation: Any) -> TypeDescriptor:
    """Normalize one annotation into a type descriptor."""
    annotation = _strip_wrappers(annotation)

    if annotation is Any or annotation is object:
        return TypeDescriptor(kind=TypeKind.ANY, annotation=annotation)
    if annotation is None or annotation is _NONE_TYPE:
        return TypeDescriptor(kind=TypeKind.NULL, annotation=annotation)

    origin = get_origin(annotation)
    if origin is not None:
        return _describe_parameterized(annotation, origin, get_args(annotation))

    if isinstance(annotation, type):
        return _describe_class(annotation)

    if isinstance(annotation, (str, typing.ForwardRef)):
        raise UnsupportedTypeError(annotation, "unresolved forward reference")
    raise UnsupportedTypeError(annotation, "not a type")


def is_record_type(candidate: Any) -> bool:
    return isinstance(candidate, type) and (
        dataclasses.is_dataclass(candidate) or typing.is_typeddict(candidate)
    )


def qualified_name_of(python_type: type) -> str:
    return f"{python_type.__module__}.{python_type.__qualname__}"


def primitive_base(python_type: type) -> type:
    """Return the known primitive a class derives from, most specific first."""
    for candidate in python_type.__mro__:
        if candidate in _PRIMITIVE_TYPES:
            return candidate
    raise UnsupportedTypeError(python_type, "not a primitive type")


def record_fields(descriptor: TypeDescriptor) -> list[RecordField]:
    """Return the public fields of a record type in declaration order."""
    record_type = descriptor.python_type
    if descriptor.kind is not TypeKind.RECORD or record_type is None:
        raise UnsupportedTypeError(descriptor.annotation, "not a record type")

    try:
        hints = typing.get_type_hints(record_type, include_extras=True)
    except (NameError, TypeError) as exc:
        raise UnsupportedTypeError(record_type, f"cannot resolve annotations: {exc}") from exc

    if typing.is_typeddict(record_type):
        required_keys = getattr(record_type, "__required_keys__", frozenset())
        return [
            RecordField(
                attribute=name,
                annotation=annotation,
                declared_required=name in required_keys,
            )
            for name, annotation in hints.items()
            if not name.startswith("_")
        ]

    return [
        RecordField(
            attribute=record_field.name,
            annotation=hints.get(record_field.name, record_field.type),
            metadata=dict(record_field.metadata),
        )
        for record_field in dataclasses.fields(record_type)
        if not record_field.name.startswith("_")
    ]


def _strip_wrappers(annotation: Any) -> Any:
    while True:
        if get_origin(annotation) in _UNWRAPPED_ORIGINS:
            annotation = get_args(annotation)[0]
        elif isinstance(annotation, typing.NewType):
            annotation = annotation.__supertype__
        else:
            return annotation


def _describe_parameterized(annotation: Any, origin: Any, args: tuple[Any, ...]) -> TypeDescriptor:
    if origin in (Union, types.UnionType):
        members = tuple(arg for arg in args if arg is not _NONE_TYPE)
        if len(members) < len(args):
            inner = members[0] if len(members) == 1 else Union[members]  # noqa: UP007
            return TypeDescriptor(kind=TypeKind.OPTIONAL, annotation=annotation, elements=(inner,))
        return TypeDescriptor(kind=TypeKind.UNION, annotation=annotation, elements=members)

    if origin is Literal:
        return TypeDescriptor(kind=TypeKind.LITERAL, annotation=annotation, literal_values=args)

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return TypeDescriptor(
                kind=TypeKind.SEQUENCE, annotation=annotation, python_type=tuple, elements=args[:1]
            )
        return TypeDescriptor(
            kind=TypeKind.SEQUENCE,
            annotation=annotation,
            python_type=tuple,
            elements=args,
            fixed_length=True,
        )

    if origin in _SEQUENCE_ORIGINS or origin in _SET_ORIGINS:
        return TypeDescriptor(
            kind=TypeKind.SEQUENCE,
            annotation=annotation,
            python_type=origin,
            elements=args[:1],
            unique_items=origin in _SET_ORIGINS,
        )

    if origin in _MAPPING_ORIGINS:
        key, value = args if len(args) == 2 else (str, Any)
        _require_string_keys(annotation, key)
        return TypeDescriptor(
            kind=TypeKind.MAPPING, annotation=annotation, python_type=origin, elements=(value,)
        )

    raise UnsupportedTypeError(annotation, f"unsupported generic origin {origin!r}")


def _describe_class(python_type: type) -> TypeDescriptor:
    if is_record_type(python_type):
        return TypeDescriptor(
            kind=TypeKind.RECORD,
            annotation=python_type,
            python_type=python_type,
            qualified_name=qualified_name_of(python_type),
        )
    if issubclass(python_type, Enum):
        return TypeDescriptor(
            kind=TypeKind.ENUM,
            annotation=python_type,
            python_type=python_type,
            qualified_name=qualified_name_of(python_type),
            literal_values=tuple(member.value for member in python_type),
        )
    if python_type in (list, tuple, set, frozenset):
        return TypeDescriptor(
            kind=TypeKind.SEQUENCE,
            annotation=python_type,
            python_type=python_type,
            unique_items=python_type in (set, frozenset),
        )
    if python_type is dict:
        return TypeDescriptor(kind=TypeKind.MAPPING, annotation=python_type, python_type=dict)
    if issubclass(python_type, _PRIMITIVE_TYPES):
        return TypeDescriptor(
            kind=TypeKind.PRIMITIVE, annotation=python_type, python_type=python_type
        )
    raise UnsupportedTypeError(python_type, "not a dataclass, TypedDict, enum or primitive")


def _require_string_keys(annotation: Any, key: Any) -> None:
    key = _strip_wrappers(key)
    if key is Any or (isinstance(key, type) and issubclass(key, str)):
        return
    if get_origin(key) is Literal and all(isinstance(value, str) for value in get_args(key)):
        return
    raise UnsupportedTypeError(annotation, f"mapping keys must be strings, not {key!r}")
