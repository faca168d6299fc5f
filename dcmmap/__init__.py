"""This package provides typed, hierarchical DICOM meta data maps"""
from . import info, tag, value, hierarchy, dicom_map, normalize, diff, util
from .tag import make_tag, str_to_tag, tag_to_str
from .value import DicomValue, DicomString, DicomBinary, DicomSequence
from .hierarchy import QueryLevel
from .dicom_map import DicomMap, setup_find_template
from .util import DicomDataError, InexistentTagError, DicomValueTypeError


__version__ = info.VERSION


__all__ = [
    "tag",
    "value",
    "hierarchy",
    "dicom_map",
    "normalize",
    "diff",
    "util",
    "make_tag",
    "str_to_tag",
    "tag_to_str",
    "DicomValue",
    "DicomString",
    "DicomBinary",
    "DicomSequence",
    "QueryLevel",
    "DicomMap",
    "setup_find_template",
    "DicomDataError",
    "InexistentTagError",
    "DicomValueTypeError",
]
