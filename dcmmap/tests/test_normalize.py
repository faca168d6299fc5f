import json

import pytest

from ..tag import make_tag
from ..value import DicomBinary
from ..dicom_map import DicomMap
from ..normalize import normalize, denormalize
from ..util import json_serializer, DicomValueTypeError


def test_normalize(dicom_map):
    norm = normalize(dicom_map)
    assert norm["PatientID"] == "P1"
    assert norm["EncryptedContent"] == ("AAECAw==",)
    assert norm["ReferencedImageSequence"] == [
        {"ReferencedSOPInstanceUID": "1.2.3.4.5.7"}
    ]
    assert list(norm)[0] == "ImageType"


def test_normalize_filter(dicom_map):
    norm = normalize(dicom_map, lambda tag, value: not value.is_binary)
    assert "EncryptedContent" not in norm
    assert "PatientID" in norm


def test_denormalize(dicom_map):
    private = make_tag(0x0009, 0x1001)
    dicom_map.set_value(private, DicomBinary(b"abc"))
    norm = normalize(dicom_map)
    assert norm["0009,1001"] == ("YWJj",)
    assert denormalize(norm) == dicom_map
    assert denormalize(json.loads(json.dumps(norm))) == dicom_map
    with pytest.raises(DicomValueTypeError):
        denormalize({"PatientID": 12})


def test_json_serializer(dicom_map):
    json_str = json_serializer.dumps(dicom_map)
    assert json.loads(json_str)["Modality"] == "CT"
    assert json_serializer.loads(json_str, DicomMap) == dicom_map


def test_repeater_tags_round_trip():
    dmap = DicomMap({make_tag(0x6000, 0x3000): b"\x00\x01",
                     make_tag(0x6002, 0x3000): b"\x02\x03",
                     "PatientID": "P1"})
    norm = normalize(dmap)
    assert norm["6002,3000"] == ("AgM=",)
    assert denormalize(norm) == dmap
    assert json_serializer.loads(json_serializer.dumps(dmap), DicomMap) == dmap
