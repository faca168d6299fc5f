'''Logic for comparing DicomMaps'''

from hashlib import sha256
from typing import Optional, List

from pydicom.tag import BaseTag

from .tag import tag_to_str
from .value import DicomValue
from .dicom_map import DicomMap


def _format_value(value: DicomValue) -> str:
    if value.is_sequence:
        return '<sequence with %d items>' % len(value.content)
    if value.is_binary:
        val = value.content
        if len(val) > 16:
            return ('*%d bytes, hash = %s*' %
                    (len(val), sha256(val).hexdigest())
                   )
        return repr(val)
    return value.as_string()


class DataDiff(object):

    default_elem_fmt = '{tag} {name: <35}: {value}'

    def __init__(self,
                 tag: BaseTag,
                 l_value: Optional[DicomValue],
                 r_value: Optional[DicomValue],
                 elem_fmt: str = default_elem_fmt):
        self.tag = tag
        self.l_value = None if l_value is None else l_value.clone()
        self.r_value = None if r_value is None else r_value.clone()
        self.elem_fmt = elem_fmt

    def _format_elem(self, value: DicomValue) -> str:
        return self.elem_fmt.format(tag=self.tag,
                                    name=tag_to_str(self.tag),
                                    value=_format_value(value))

    def __str__(self) -> str:
        res = []
        if self.l_value is not None:
            res.append('< %s' % self._format_elem(self.l_value))
        if self.r_value is not None:
            res.append('> %s' % self._format_elem(self.r_value))
        return '\n'.join(res)


def diff_maps(left: DicomMap, right: DicomMap) -> List[DataDiff]:
    '''Get list of all differences between `left` and `right` maps'''
    diffs = []
    for tag in sorted(set(left.tags()) | set(right.tags())):
        l_value = left.find_value(tag)
        r_value = right.find_value(tag)
        if l_value != r_value:
            diffs.append(DataDiff(tag, l_value, r_value))
    return diffs
