import json
import types
from collections import defaultdict
from dataclasses import is_dataclass, Field, fields, asdict
from datetime import date, datetime, time, timezone
from functools import cached_property
from typing import TypeVar, Generic, Mapping, Any, get_args, get_origin, ClassVar, get_type_hints, NamedTuple
from typing_extensions import Self
import dateutil.parser

T = TypeVar('T')


def _fix_field_types(cls):
    hints = get_type_hints(cls, globalns=None, localns=None)
    for field in fields(cls):
        field.type = hints[field.name]


class _FieldWrapper(Generic[T]):
    cls: type[T]

    _instances: ClassVar[dict[type, Self]] = {}

    @classmethod
    def for_cls(cls, cls_: type[T]) -> Self:
        if cls_ not in cls._instances:
            cls._instances[cls_] = cls(cls_)
        return cls._instances[cls_]

    def __init__(self, cls: type[T]):
        if not is_dataclass(cls):
            raise TypeError('cls of FieldWrapper needs to be a dataclass')
        self.cls = cls

    @cached_property
    def _fields(self) -> Mapping[str, Field]:
        return {f.name: f for f in fields(self.cls)}

    def __getattr__(self, item: str) -> tuple[type[T], Field]:
        if item not in self._fields:
            raise AttributeError(f'{item} not an attribute of {self.cls}')
        return self.cls, self._fields[item]


def into(cls: type[T]) -> T:
    return _FieldWrapper.for_cls(cls)


class JsonMapper(Generic[T]):
    """
    Maps decoded json (dicts and lists) into dataclass instances of `cls`.

    The mapping mirrors the shape of the input. Leaves are `into(SomeClass).field`,
    lists are `[item_mapping, into(Parent).field]`. Missing keys map to None.
    A mapper collects state while walking, use one instance per input.
    """
    class _MappingItem(NamedTuple):
        cls: type
        field: Field

    @classmethod
    def _mapping_item(cls, cls_: type | str, field: Field) -> _MappingItem:
        # constructor for _MappingItem (NamedTuples can't have an __init__)
        if isinstance(field.type, str):
            # convert deferred type hint strings to real types for this dataclass
            _fix_field_types(cls_)
        return cls._MappingItem(cls_, field)

    _init_kwargs: dict[type, dict[str, Any]]

    cls: type[T]
    mapping: dict

    def __init__(self, cls: type[T], mapping: dict):
        self.cls = cls
        self.mapping = mapping
        self._init_kwargs = defaultdict(dict)

    def _build(self, cls: type) -> object:
        return cls(**self._init_kwargs.pop(cls))

    def _factory(self, t: type, input: Any) -> Any:
        if get_origin(t) is types.UnionType:
            # handle optional types (str | None)
            args = get_args(t)
            if len(args) == 2 and types.NoneType in args:
                # false, 0 and empty containers count as absent, like javascript falsy values
                if input is None or (not input and not isinstance(input, str)):
                    return None
                t = args[0] if args[1] is types.NoneType else args[1]
        if input is None:
            raise DecodingError(f'instance of {t} must not be None')
        if t is datetime:
            # empty strings count as absent
            return _to_datetime(input) if input != '' else None
        return t(input)

    def _walk(self, mapping: dict | list, input: object) -> None:
        if isinstance(mapping, list):
            if len(mapping) != 2:
                raise DecodingError('Wrong list size')
            if input is None:
                self._walk(mapping[1], None)
                return
            if not isinstance(input, (list, tuple)):
                raise DecodingError(f'expected a list, got {type(input).__name__}')
            mapping_item = self._mapping_item(*mapping[1])
            type_in_list = get_args(_strip_optional(mapping_item.field.type))[0]
            result_objects = []
            for item in input:
                self._walk(mapping[0], item)
                result_objects.append(self._build(type_in_list))
            self._walk(mapping[1], result_objects)
        elif isinstance(mapping, dict):
            if input is None:
                input = {}
            if not isinstance(input, Mapping):
                raise DecodingError(f'expected an object, got {type(input).__name__}')
            for k, v in mapping.items():
                self._walk(v, input.get(k))
        else:
            # we got a field
            mapping_item = self._mapping_item(*mapping)
            try:
                value = self._factory(mapping_item.field.type, input)
            except DecodingError as e:
                raise DecodingError(f'{mapping_item.field.name}: {e}') from e
            self._init_kwargs[mapping_item.cls][mapping_item.field.name] = value

    def __call__(self, input: object) -> T:
        self._walk(self.mapping, input)
        return self._build(self.cls)


class DecodingError(Exception): pass


def _strip_optional(t: type) -> type:
    args = get_args(t)
    if get_origin(t) is types.UnionType and types.NoneType in args:
        return next(arg for arg in args if arg is not types.NoneType)
    return t

def _to_datetime(input: object) -> datetime:
    if isinstance(input, datetime):
        return input
    if isinstance(input, date):
        return datetime.combine(input, time())
    if isinstance(input, (int, float)) and not isinstance(input, bool):
        # milliseconds since the epoch, like a javascript Date
        try:
            return datetime.fromtimestamp(input / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise DecodingError(f'timestamp {input!r} out of range') from e
    if isinstance(input, str):
        try:
            return dateutil.parser.parse(input)
        except (ValueError, OverflowError) as e:
            raise DecodingError(f'invalid date {input!r}') from e
    raise DecodingError(f'{type(input).__name__} is not a date')


class JSONEncoder(json.JSONEncoder):
    def default(self, o):
        if is_dataclass(o):
            return asdict(o)
        if isinstance(o, datetime):
            return o.isoformat()
        return super().default(o)

def dumps(o: object) -> str:
    return json.dumps(o, cls=JSONEncoder)
