"""Various utility functions"""
from __future__ import annotations
import os, logging
from enum import Enum, IntEnum
from typing import Any, Type, TypeVar, Union

from cattrs.preconf.json import make_converter as make_json_converter


log = logging.getLogger(__name__)


class DicomDataError(Exception):
    """Base class for exceptions from erroneous dicom data"""


class InexistentTagError(DicomDataError, KeyError):
    """The requested tag is not present in the map"""

    def __init__(self, tag: Any):
        super().__init__(tag)
        self.tag = tag

    def __str__(self) -> str:
        return "Inexistent tag: %s" % (self.tag,)


class DicomValueTypeError(DicomDataError, TypeError):
    """A value can't be used or represented in the requested way"""


json_serializer = make_json_converter()
"""JSON (de)serializer

Handles most classes automatically, otherwise classes should provide
`to_json_dict` / `from_json_dict` methods and be decorated with
`json_serializable`.
"""


JS = TypeVar("JS")


def json_serializable(cls: Type[JS]) -> Type[JS]:
    """Class decorator hooking `to_json_dict` / `from_json_dict` into `json_serializer`"""
    json_serializer.register_structure_hook(
        cls, lambda v, t: t.from_json_dict(v)  # type: ignore
    )
    json_serializer.register_unstructure_hook(
        cls, lambda i: i.to_json_dict()  # type: ignore
    )
    return cls


def _flexible_enum_struct(data: Any, cls: Type[Enum]) -> Enum:
    """More flexible Enum structuring hook allows names as well as values"""
    for e in cls:
        if data == e.value:
            return e
    if isinstance(data, str):
        for e in cls:
            if data.upper() == e.name:
                return e
    raise ValueError(f"Unable to convert '{data}' to {cls.__name__}")


# Convert Enums to name and allow name or value as input
json_serializer.register_structure_hook(Enum, _flexible_enum_struct)
json_serializer.register_unstructure_hook(Enum, lambda v: v.name)
json_serializer.register_structure_hook(IntEnum, _flexible_enum_struct)
json_serializer.register_unstructure_hook(IntEnum, lambda v: v.name)


PathInputType = Union[str, "os.PathLike"]
