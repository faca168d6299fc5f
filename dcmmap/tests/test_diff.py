import random

from ..tag import PATIENT_ID
from ..value import DicomBinary
from ..diff import diff_maps


def test_diff_maps(dicom_map):
    other = dicom_map.clone()
    diffs = diff_maps(dicom_map, other)
    assert len(diffs) == 0
    other.set_value("PatientID", "Johnny Doe")
    diffs = diff_maps(dicom_map, other)
    assert len(diffs) == 1
    assert diffs[0].tag == PATIENT_ID
    assert diffs[0].l_value.content == "P1"
    assert diffs[0].r_value.content == "Johnny Doe"
    str_diff_lines = str(diffs[0]).split("\n")
    assert len(str_diff_lines) == 2
    assert str_diff_lines[0][0] == "<"
    assert str_diff_lines[1][0] == ">"
    dicom_map.set_value("PatientAge", "030Y")
    diffs = diff_maps(dicom_map, other)
    assert len(diffs) == 2
    assert str(diffs[1]).startswith("<")
    other.set_value("Signature",
                    DicomBinary(bytes(random.getrandbits(8) for _ in range(512))))
    diffs = diff_maps(dicom_map, other)
    assert len(diffs) == 3
    sig_diff = str(diffs[-1])
    assert sig_diff.startswith(">")
    assert "512 bytes" in sig_diff
    dicom_map.set_value("Signature", other.get_value("Signature").clone())
    assert len(diff_maps(dicom_map, other)) == 2
    other.get_value("ReferencedImageSequence")[0].set_value(
        "ReferencedSOPInstanceUID", "9.9")
    assert len(diff_maps(dicom_map, other)) == 3
