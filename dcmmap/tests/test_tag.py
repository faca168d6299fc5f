import pytest
from pydicom.tag import Tag

from ..tag import (make_tag, str_to_tag, tag_to_str, as_tag, PATIENT_ID,
                   ACCESSION_NUMBER, STUDY_INSTANCE_UID, SERIES_INSTANCE_UID)


def test_make_tag():
    tag = make_tag(0x0010, 0x0020)
    assert tag.group == 0x0010
    assert tag.element == 0x0020
    assert tag == Tag("PatientID") == PATIENT_ID
    assert make_tag(0xFFFF, 0xFFFF).element == 0xFFFF
    for bad in ((-1, 0), (0, -1), (0x10000, 0), (0, 0x10000)):
        with pytest.raises(ValueError):
            make_tag(*bad)


def test_tag_order():
    assert make_tag(0x0008, 0xFFFF) < make_tag(0x0010, 0x0000)
    assert make_tag(0x0010, 0x0010) < make_tag(0x0010, 0x0020)
    tags = [SERIES_INSTANCE_UID, PATIENT_ID, STUDY_INSTANCE_UID, ACCESSION_NUMBER]
    assert sorted(tags) == [ACCESSION_NUMBER, PATIENT_ID, STUDY_INSTANCE_UID,
                            SERIES_INSTANCE_UID]
    assert len({make_tag(0x0010, 0x0020), PATIENT_ID}) == 1


def test_str_to_tag():
    assert str_to_tag("PatientID") == PATIENT_ID
    assert str_to_tag("0010,0020") == PATIENT_ID
    assert str_to_tag("0x0010, 0x0020") == PATIENT_ID
    assert str_to_tag("0009,0010") == make_tag(0x0009, 0x0010)
    for bad in ("NotAKeyword", "10", "zz,00", "1,2,3"):
        with pytest.raises(ValueError):
            str_to_tag(bad)


def test_tag_to_str():
    assert tag_to_str(ACCESSION_NUMBER) == "AccessionNumber"
    private = make_tag(0x0009, 0x1001)
    assert tag_to_str(private) == "0009,1001"
    assert str_to_tag(tag_to_str(private)) == private


def test_as_tag():
    assert as_tag(PATIENT_ID) is PATIENT_ID
    assert as_tag(0x00100020) == PATIENT_ID
    assert as_tag((0x0010, 0x0020)) == PATIENT_ID
    assert as_tag("PatientID") == PATIENT_ID
    with pytest.raises(ValueError):
        as_tag(0x1FFFFFFFF)
    with pytest.raises(TypeError):
        as_tag(1.5)


def test_repeater_tags_round_trip():
    for tag in (make_tag(0x6000, 0x3000), make_tag(0x6002, 0x3000),
                make_tag(0x5002, 0x3000)):
        assert str_to_tag(tag_to_str(tag)) == tag
    assert tag_to_str(make_tag(0x6002, 0x3000)) == "6002,3000"


def test_uppercase_hex():
    assert str_to_tag("FFFE,E000") == make_tag(0xFFFE, 0xE000)
    assert str_to_tag("0x7FE0, 0x0010") == make_tag(0x7FE0, 0x0010)
