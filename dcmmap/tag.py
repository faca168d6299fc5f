'''Tag identifiers and the well known tags we reference by name

Tags are represented with `pydicom.tag.BaseTag`, an `int` holding the group in
the upper 16 bits and the element in the lower 16 bits. Ordering of the
integers is thus "group first, then element".
'''
from __future__ import annotations
from typing import Tuple, Union

from pydicom.tag import BaseTag, Tag
from pydicom.datadict import keyword_for_tag, tag_for_keyword


TagInputType = Union[BaseTag, int, Tuple[int, int], str]


def make_tag(group: int, element: int) -> BaseTag:
    '''Build a tag from its `group` and `element` numbers'''
    if not 0 <= group <= 0xFFFF or not 0 <= element <= 0xFFFF:
        raise ValueError("Tag group and element must be 16-bit unsigned "
                         "integers, got (%s, %s)" % (group, element))
    return Tag(group, element)


def str_to_tag(in_str: str) -> BaseTag:
    '''Convert string representation to a tag

    The string can be a keyword, or two hex numbers separated by a comma
    '''
    in_str = in_str.strip()
    if ',' not in in_str:
        res = tag_for_keyword(in_str)
        if res is None:
            raise ValueError("Invalid element ID: %s" % in_str)
        return Tag(res)
    try:
        group_num, elem_num = [int(x.strip(), 16) for x in in_str.split(",")]
    except Exception:
        raise ValueError("Invalid element ID: %s" % in_str)
    return make_tag(group_num, elem_num)


def tag_to_str(tag: BaseTag) -> str:
    '''Get the keyword for the `tag`, or 'gggg,eeee' if it has none

    Repeater group tags (e.g. 60xx,3000) have a keyword that doesn't map back
    to a single tag, so those also use the numeric form.
    '''
    keyword = keyword_for_tag(tag)
    if keyword and tag_for_keyword(keyword) == tag:
        return keyword
    return '%04x,%04x' % (tag.group, tag.element)


def as_tag(val: TagInputType) -> BaseTag:
    '''Convert any supported tag representation into a `BaseTag`'''
    if isinstance(val, BaseTag):
        return val
    if isinstance(val, str):
        return str_to_tag(val)
    if isinstance(val, tuple):
        return make_tag(*val)
    if isinstance(val, int):
        return make_tag(val >> 16, val & 0xFFFF)
    raise TypeError("Can't convert %r to a tag" % (val,))


# Patient level
PATIENT_NAME = make_tag(0x0010, 0x0010)
PATIENT_ID = make_tag(0x0010, 0x0020)
PATIENT_BIRTH_DATE = make_tag(0x0010, 0x0030)
PATIENT_SEX = make_tag(0x0010, 0x0040)
OTHER_PATIENT_IDS = make_tag(0x0010, 0x1000)

# Study level
STUDY_DATE = make_tag(0x0008, 0x0020)
STUDY_TIME = make_tag(0x0008, 0x0030)
ACCESSION_NUMBER = make_tag(0x0008, 0x0050)
STUDY_DESCRIPTION = make_tag(0x0008, 0x1030)
STUDY_INSTANCE_UID = make_tag(0x0020, 0x000d)
STUDY_ID = make_tag(0x0020, 0x0010)

# Series level
SERIES_DATE = make_tag(0x0008, 0x0021)
SERIES_TIME = make_tag(0x0008, 0x0031)
MODALITY = make_tag(0x0008, 0x0060)
MANUFACTURER = make_tag(0x0008, 0x0070)
STATION_NAME = make_tag(0x0008, 0x1010)
SERIES_DESCRIPTION = make_tag(0x0008, 0x103e)
BODY_PART_EXAMINED = make_tag(0x0018, 0x0015)
SEQUENCE_NAME = make_tag(0x0018, 0x0024)
PROTOCOL_NAME = make_tag(0x0018, 0x1030)
SERIES_INSTANCE_UID = make_tag(0x0020, 0x000e)
SERIES_NUMBER = make_tag(0x0020, 0x0011)
IMAGES_IN_ACQUISITION = make_tag(0x0020, 0x1002)
NUMBER_OF_SLICES = make_tag(0x0054, 0x0081)

# Instance level
INSTANCE_CREATION_DATE = make_tag(0x0008, 0x0012)
INSTANCE_CREATION_TIME = make_tag(0x0008, 0x0013)
SOP_INSTANCE_UID = make_tag(0x0008, 0x0018)
ACQUISITION_NUMBER = make_tag(0x0020, 0x0012)
INSTANCE_NUMBER = make_tag(0x0020, 0x0013)
NUMBER_OF_FRAMES = make_tag(0x0028, 0x0008)
IMAGE_INDEX = make_tag(0x0054, 0x1330)

# Aliases matching the short names used around the query model
STUDY_UID = STUDY_INSTANCE_UID
SERIES_UID = SERIES_INSTANCE_UID
