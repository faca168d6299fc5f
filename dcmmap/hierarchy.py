'''The patient/study/series/instance hierarchy and the tags on each level
'''
from __future__ import annotations
from enum import IntEnum
from itertools import chain
from types import MappingProxyType
from typing import Mapping, Tuple

from pydicom.tag import BaseTag
from typing_extensions import Final

from . import tag as t


class QueryLevel(IntEnum):
    '''Represents the depth for a query, with larger values meaning more detail
    '''
    PATIENT = 0
    STUDY = 1
    SERIES = 2
    IMAGE = 3


PATIENT_TAGS: Final[Tuple[BaseTag, ...]] = (
    t.PATIENT_NAME,
    t.PATIENT_ID,
    t.PATIENT_BIRTH_DATE,
    t.PATIENT_SEX,
    t.OTHER_PATIENT_IDS,
)
'''Tags holding patient level information'''


STUDY_TAGS: Final[Tuple[BaseTag, ...]] = (
    t.STUDY_DATE,
    t.STUDY_TIME,
    t.ACCESSION_NUMBER,
    t.STUDY_DESCRIPTION,
    t.STUDY_INSTANCE_UID,
    t.STUDY_ID,
)
'''Tags holding study level information'''


SERIES_TAGS: Final[Tuple[BaseTag, ...]] = (
    t.SERIES_DATE,
    t.SERIES_TIME,
    t.MODALITY,
    t.MANUFACTURER,
    t.STATION_NAME,
    t.SERIES_DESCRIPTION,
    t.BODY_PART_EXAMINED,
    t.SEQUENCE_NAME,
    t.PROTOCOL_NAME,
    t.SERIES_INSTANCE_UID,
    t.SERIES_NUMBER,
    t.IMAGES_IN_ACQUISITION,
    t.NUMBER_OF_SLICES,
)
'''Tags holding series level information'''


INSTANCE_TAGS: Final[Tuple[BaseTag, ...]] = (
    t.INSTANCE_CREATION_DATE,
    t.INSTANCE_CREATION_TIME,
    t.SOP_INSTANCE_UID,
    t.ACQUISITION_NUMBER,
    t.INSTANCE_NUMBER,
    t.NUMBER_OF_FRAMES,
    t.IMAGE_INDEX,
)
'''Tags holding instance level information'''


level_tags: Mapping[QueryLevel, Tuple[BaseTag, ...]] = MappingProxyType(
    {QueryLevel.PATIENT : PATIENT_TAGS,
     QueryLevel.STUDY : STUDY_TAGS,
     QueryLevel.SERIES : SERIES_TAGS,
     QueryLevel.IMAGE : INSTANCE_TAGS,
    }
)
'''Map QueryLevels to the tags that belong on that level'''


level_keys: Mapping[QueryLevel, Tuple[BaseTag, ...]] = MappingProxyType(
    {QueryLevel.PATIENT : (),
     QueryLevel.STUDY : (t.ACCESSION_NUMBER, t.PATIENT_ID),
     QueryLevel.SERIES : (t.STUDY_INSTANCE_UID,),
     QueryLevel.IMAGE : (t.SERIES_INSTANCE_UID,),
    }
)
'''Identifying keys first required when querying at each level

These accumulate, a query on any level also needs the keys from all the
levels above it.
'''


def get_ancestor_keys(level: QueryLevel) -> Tuple[BaseTag, ...]:
    '''Get the keys needed to scope a query at `level` by its ancestors'''
    return tuple(chain.from_iterable(level_keys[lvl]
                                     for lvl in QueryLevel
                                     if lvl <= level)
                )


def get_template_tags(level: QueryLevel) -> Tuple[BaseTag, ...]:
    '''Get all the tags that go into a find template for `level`

    The level's own tags come first, followed by any ancestor keys not
    already included.
    '''
    res = list(level_tags[level])
    for key in get_ancestor_keys(level):
        if key not in res:
            res.append(key)
    return tuple(res)
