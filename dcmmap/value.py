'''Values that can be stored in a `DicomMap`

Each value is exclusively owned by the map it is stored in. Use `clone` to get
an independent copy that can be given to another map.
'''
from __future__ import annotations
from abc import ABC, abstractmethod
from base64 import b64encode
from typing import Any, List, TYPE_CHECKING

from .util import DicomValueTypeError

if TYPE_CHECKING:
    from .dicom_map import DicomMap


class DicomValue(ABC):
    '''Abstract value associated with a single tag'''

    is_binary = False

    is_sequence = False

    @property
    @abstractmethod
    def content(self) -> Any:
        '''The underlying content'''

    @abstractmethod
    def clone(self) -> DicomValue:
        '''Make a new, independent, value with identical content'''

    @abstractmethod
    def as_string(self) -> str:
        '''Get a textual representation of the content'''

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        assert isinstance(other, DicomValue)
        return bool(self.content == other.content)

    def __repr__(self) -> str:
        return '%s(%r)' % (type(self).__name__, self.content)

    __hash__ = None  # type: ignore


class DicomString(DicomValue):
    '''Textual value, multiple values are separated with a backslash'''

    def __init__(self, content: str = ''):
        if not isinstance(content, str):
            raise DicomValueTypeError("Expected a str, got %s" % type(content))
        self._content = content

    @property
    def content(self) -> str:
        return self._content

    def clone(self) -> DicomString:
        return DicomString(self._content)

    def as_string(self) -> str:
        return self._content

    def is_empty(self) -> bool:
        return self._content == ''


class DicomBinary(DicomValue):
    '''Raw binary value'''

    is_binary = True

    def __init__(self, content: bytes = b''):
        if not isinstance(content, (bytes, bytearray)):
            raise DicomValueTypeError("Expected bytes, got %s" % type(content))
        self._content = bytes(content)

    @property
    def content(self) -> bytes:
        return self._content

    def clone(self) -> DicomBinary:
        return DicomBinary(self._content)

    def as_string(self) -> str:
        '''The base64 encoding of the content'''
        return b64encode(self._content).decode()


class DicomSequence(DicomValue):
    '''Sequence of nested maps

    The sequence owns its items, cloning it clones every item.
    '''

    is_sequence = True

    def __init__(self, items: Any = None):
        self._items: List[DicomMap] = [] if items is None else list(items)

    @property
    def content(self) -> List[DicomMap]:
        return self._items

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, idx: int) -> DicomMap:
        return self._items[idx]

    def append(self, item: DicomMap) -> None:
        self._items.append(item)

    def clone(self) -> DicomSequence:
        return DicomSequence(item.clone() for item in self._items)

    def as_string(self) -> str:
        raise DicomValueTypeError("A sequence has no string representation")

    def __repr__(self) -> str:
        return 'DicomSequence(<%d items>)' % len(self._items)
