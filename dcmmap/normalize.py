'''Convert DicomMaps to just dict/list/tuple/str

Results can be easily serialized and converted back with `denormalize`
'''
from collections import OrderedDict
from base64 import b64encode, b64decode
from typing import Any, Callable, Dict, Optional, Tuple

from pydicom.tag import BaseTag

from .tag import tag_to_str, str_to_tag
from .value import DicomValue, DicomString, DicomBinary, DicomSequence
from .dicom_map import DicomMap
from .util import DicomValueTypeError


ElemFilter = Callable[[BaseTag, DicomValue], bool]


def norm_value(value: DicomValue) -> Any:
    if value.is_sequence:
        return [normalize(item) for item in value.content]
    if value.is_binary:
        return (b64encode(value.content).decode(),)
    return value.as_string()


def normalize(dmap: DicomMap,
              elem_filter: Optional[ElemFilter] = None) -> Dict[str, Any]:
    '''Convert a DicomMap into basic python types that can be serialized

    Keys are DICOM keywords where available, otherwise 'gggg,eeee'. Binary
    values become a one element tuple with the base64 encoded content.
    '''
    res = OrderedDict()
    for tag, value in dmap.items():
        if elem_filter is not None and not elem_filter(tag, value):
            continue
        res[tag_to_str(tag)] = norm_value(value)
    return res


def denorm_value(val: Any) -> DicomValue:
    if isinstance(val, str):
        return DicomString(val)
    if isinstance(val, (list, tuple)):
        if len(val) == 1 and isinstance(val[0], str):
            return DicomBinary(b64decode(val[0]))
        if all(isinstance(v, dict) for v in val):
            return DicomSequence(denormalize(v) for v in val)
    raise DicomValueTypeError("Can't convert normalized value: %r" % (val,))


def denormalize(data: Dict[str, Any]) -> DicomMap:
    '''Convert the output of `normalize` back into a DicomMap'''
    res = DicomMap()
    for key, val in data.items():
        res.set_value(str_to_tag(key), denorm_value(val))
    return res
