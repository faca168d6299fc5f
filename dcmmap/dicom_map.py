'''Hierarchical map of DICOM tags to owned values

The `DicomMap` is the core data model: it stores the attributes of a record
and can derive the subset of them belonging to one level of the
patient/study/series/instance hierarchy, or build the templates needed to
query for data on a given level.
'''
from __future__ import annotations
import logging
from operator import itemgetter
from typing import (Any, Dict, Iterable, Iterator, List, Optional, Tuple,
                    Union)

from pydicom.dataset import Dataset
from pydicom.dataelem import DataElement
from pydicom.datadict import dictionary_VR, keyword_for_tag
from pydicom.multival import MultiValue
from pydicom.sequence import Sequence
from pydicom.tag import BaseTag
from tree_format import format_tree

from .tag import TagInputType, as_tag, str_to_tag
from .value import DicomValue, DicomString, DicomBinary, DicomSequence
from .hierarchy import QueryLevel, level_tags, get_template_tags
from .util import InexistentTagError, DicomValueTypeError, json_serializable


log = logging.getLogger(__name__)


ValueInputType = Union[DicomValue, str, bytes]


def _as_value(value: ValueInputType) -> DicomValue:
    if isinstance(value, DicomValue):
        return value
    if isinstance(value, str):
        return DicomString(value)
    if isinstance(value, (bytes, bytearray)):
        return DicomBinary(value)
    raise DicomValueTypeError("Can't store value of type %s" % type(value))


_int_vrs = frozenset(('US', 'SS', 'UL', 'SL', 'UV', 'SV'))

_float_vrs = frozenset(('FL', 'FD'))


def _lookup_vr(tag: BaseTag, value: DicomValue) -> str:
    if value.is_sequence:
        return 'SQ'
    try:
        vr = dictionary_VR(tag)
    except KeyError:
        vr = None
    if vr is None or ' or ' in vr:
        return 'UN' if value.is_binary else 'LO'
    return vr


def _element_from_value(tag: BaseTag, value: DicomValue) -> DataElement:
    vr = _lookup_vr(tag, value)
    if value.is_sequence:
        return DataElement(tag, vr, Sequence([item.to_dataset()
                                              for item in value.content]))
    if value.is_binary:
        return DataElement(tag, vr, value.content)
    text = value.as_string()
    if text == '':
        return DataElement(tag, vr, None)
    if vr == 'AT':
        vals = [str_to_tag(x) for x in text.split('\\')]
        return DataElement(tag, vr, vals[0] if len(vals) == 1 else vals)
    if vr in _int_vrs or vr in _float_vrs:
        conv = int if vr in _int_vrs else float
        vals = [conv(x) for x in text.split('\\')]
        return DataElement(tag, vr, vals[0] if len(vals) == 1 else vals)
    return DataElement(tag, vr, text)


def _format_at(val: Any) -> str:
    tag = as_tag(val)
    return '%04x,%04x' % (tag.group, tag.element)


def _value_from_element(elem: DataElement) -> DicomValue:
    if elem.VR == 'SQ':
        return DicomSequence(DicomMap.from_dataset(item) for item in elem.value)
    val = elem.value
    if val is None:
        return DicomString('')
    if isinstance(val, (bytes, bytearray)):
        return DicomBinary(val)
    if elem.VR == 'AT':
        if not isinstance(val, (MultiValue, list, tuple)):
            val = [val]
        return DicomString('\\'.join(_format_at(x) for x in val))
    if isinstance(val, (MultiValue, list, tuple)):
        return DicomString('\\'.join(str(x) for x in val))
    return DicomString(str(val))


def _shorten_bytes(val: bytes, max_len: int = 16) -> str:
    if len(val) > max_len:
        return '*%d bytes*' % len(val)
    return repr(val)


@json_serializable
class DicomMap:
    '''Map DICOM tags to the values the map owns

    Any value stored in the map belongs to the map from then on. Values
    coming from another map must first be cloned, which `copy_tag_if_exists`
    and the extraction methods do automatically.

    Instances are not thread safe, concurrent modification of the same map
    must be prevented by the caller.

    Parameters
    ----------
    values : dict
        Optional initial values, passed through `set_value`
    '''

    def __init__(self,
                 values: Optional[Dict[TagInputType, ValueInputType]] = None):
        self._map: Dict[BaseTag, DicomValue] = {}
        if values is not None:
            for tag, value in values.items():
                self.set_value(tag, value)

    def set_value(self, tag: TagInputType, value: ValueInputType) -> None:
        '''Store `value` under `tag`, replacing any existing value

        Plain `str` and `bytes` are wrapped into a `DicomString` or
        `DicomBinary`.
        '''
        tag = as_tag(tag)
        value = _as_value(value)
        if tag in self._map:
            del self._map[tag]
        self._map[tag] = value

    def get_value(self, tag: TagInputType) -> DicomValue:
        '''Get the value stored under `tag`

        Raises an `InexistentTagError` if the tag isn't present. The result
        stays owned by this map.
        '''
        tag = as_tag(tag)
        try:
            return self._map[tag]
        except KeyError:
            raise InexistentTagError(tag) from None

    def find_value(self,
                   tag: TagInputType,
                   default: Optional[DicomValue] = None) -> Optional[DicomValue]:
        '''Like `get_value` but returns `default` for a missing tag'''
        return self._map.get(as_tag(tag), default)

    def get_string(self, tag: TagInputType) -> str:
        '''Shortcut for `get_value(tag).as_string()`'''
        return self.get_value(tag).as_string()

    def has_tag(self, tag: TagInputType) -> bool:
        return as_tag(tag) in self._map

    def remove(self, tag: TagInputType) -> None:
        '''Remove the value for `tag`, does nothing if it isn't present'''
        self._map.pop(as_tag(tag), None)

    def clear(self) -> None:
        self._map.clear()

    def clone(self) -> DicomMap:
        '''Make a deep copy, sharing no values with this map'''
        res = DicomMap()
        for tag, value in self._map.items():
            res._map[tag] = value.clone()
        return res

    def copy_tag_if_exists(self, source: DicomMap, tag: TagInputType) -> None:
        '''Copy the value for `tag` from `source`, if it has one'''
        tag = as_tag(tag)
        if source.has_tag(tag):
            self.set_value(tag, source.get_value(tag).clone())

    def tags(self) -> Iterator[BaseTag]:
        '''Generate the contained tags in ascending order'''
        for tag in sorted(self._map):
            yield tag

    def items(self) -> Iterator[Tuple[BaseTag, DicomValue]]:
        '''Generate (tag, value) pairs in ascending tag order'''
        for tag in self.tags():
            yield tag, self._map[tag]

    def __len__(self) -> int:
        return len(self._map)

    def __iter__(self) -> Iterator[BaseTag]:
        return self.tags()

    def __contains__(self, tag: TagInputType) -> bool:
        return self.has_tag(tag)

    def __getitem__(self, tag: TagInputType) -> DicomValue:
        return self.get_value(tag)

    def __setitem__(self, tag: TagInputType, value: ValueInputType) -> None:
        self.set_value(tag, value)

    def __delitem__(self, tag: TagInputType) -> None:
        tag = as_tag(tag)
        if tag not in self._map:
            raise InexistentTagError(tag)
        del self._map[tag]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DicomMap):
            return NotImplemented
        return self._map == other._map

    __hash__ = None  # type: ignore

    def __copy__(self) -> DicomMap:
        return self.clone()

    def __deepcopy__(self, memo: Dict[int, Any]) -> DicomMap:
        return self.clone()

    def __repr__(self) -> str:
        return 'DicomMap({%s})' % ', '.join('%s: %r' % (tag, val)
                                            for tag, val in self.items())

    def extract_tags(self,
                     tags: Iterable[TagInputType],
                     result: Optional[DicomMap] = None) -> DicomMap:
        '''Copy the values for `tags` we have into `result`

        The `result` is cleared first, or created if it is None. Tags we
        don't have are skipped.
        '''
        if result is None:
            result = DicomMap()
        result.clear()
        for tag in tags:
            tag = as_tag(tag)
            value = self._map.get(tag)
            if value is not None:
                result.set_value(tag, value.clone())
        log.debug("Extracted %d elements", len(result))
        return result

    def extract_level_information(self,
                                  level: QueryLevel,
                                  result: Optional[DicomMap] = None) -> DicomMap:
        '''Extract the tags that belong on the given `level`'''
        return self.extract_tags(level_tags[level], result)

    def extract_patient_information(self,
                                    result: Optional[DicomMap] = None) -> DicomMap:
        return self.extract_level_information(QueryLevel.PATIENT, result)

    def extract_study_information(self,
                                  result: Optional[DicomMap] = None) -> DicomMap:
        return self.extract_level_information(QueryLevel.STUDY, result)

    def extract_series_information(self,
                                   result: Optional[DicomMap] = None) -> DicomMap:
        return self.extract_level_information(QueryLevel.SERIES, result)

    def extract_instance_information(self,
                                     result: Optional[DicomMap] = None) -> DicomMap:
        return self.extract_level_information(QueryLevel.IMAGE, result)

    @staticmethod
    def setup_find_level_template(level: QueryLevel,
                                  result: Optional[DicomMap] = None) -> DicomMap:
        '''Build the template for a find request on the given `level`

        Includes the level's own tags plus the identifying keys of every
        level above it.
        '''
        return setup_find_template(get_template_tags(level), result)

    @staticmethod
    def setup_find_patient_template(result: Optional[DicomMap] = None) -> DicomMap:
        return DicomMap.setup_find_level_template(QueryLevel.PATIENT, result)

    @staticmethod
    def setup_find_study_template(result: Optional[DicomMap] = None) -> DicomMap:
        return DicomMap.setup_find_level_template(QueryLevel.STUDY, result)

    @staticmethod
    def setup_find_series_template(result: Optional[DicomMap] = None) -> DicomMap:
        return DicomMap.setup_find_level_template(QueryLevel.SERIES, result)

    @staticmethod
    def setup_find_instance_template(result: Optional[DicomMap] = None) -> DicomMap:
        return DicomMap.setup_find_level_template(QueryLevel.IMAGE, result)

    @classmethod
    def from_dataset(cls, data_set: Dataset) -> DicomMap:
        '''Convert a pydicom `Dataset` into a DicomMap'''
        res = cls()
        for elem in data_set:
            try:
                res._map[elem.tag] = _value_from_element(elem)
            except Exception as e:
                log.warning("Skipping element %s: %s", elem.tag, e)
        return res

    def to_dataset(self) -> Dataset:
        '''Convert to a pydicom `Dataset`

        Elements that can't be converted are skipped with a warning.
        '''
        ds = Dataset()
        for tag, value in self.items():
            try:
                ds.add(_element_from_value(tag, value))
            except Exception as e:
                log.warning("Skipping element %s: %s", tag, e)
        return ds

    def to_json_dict(self) -> Dict[str, Any]:
        from .normalize import normalize
        return dict(normalize(self))

    @classmethod
    def from_json_dict(cls, json_dict: Dict[str, Any]) -> DicomMap:
        from .normalize import denormalize
        return denormalize(json_dict)

    def _tree_nodes(self) -> List[Tuple[str, List[Any]]]:
        nodes: List[Tuple[str, List[Any]]] = []
        for tag, value in self.items():
            label = '%s %s' % (tag, keyword_for_tag(tag) or '<unknown>')
            if value.is_sequence:
                children = [('Item %d' % (idx + 1), item._tree_nodes())
                            for idx, item in enumerate(value.content)]
                nodes.append(('%s: %d item(s)' % (label, len(children)),
                              children))
            elif value.is_binary:
                nodes.append(('%s: %s' % (label, _shorten_bytes(value.content)),
                              []))
            else:
                nodes.append(('%s: %s' % (label, value.as_string()), []))
        return nodes

    def to_tree(self, title: str = 'DicomMap') -> str:
        '''Produce a formatted text tree representation'''
        root = ('%s (%d elements)' % (title, len(self)), self._tree_nodes())
        return format_tree(root, itemgetter(0), itemgetter(1))


def setup_find_template(tags: Iterable[TagInputType],
                        result: Optional[DicomMap] = None) -> DicomMap:
    '''Fill `result` with an empty string for every tag in `tags`

    The `result` is cleared first, or created if it is None.
    '''
    if result is None:
        result = DicomMap()
    result.clear()
    for tag in tags:
        result.set_value(tag, DicomString(''))
    log.debug("Built find template with %d elements", len(result))
    return result
