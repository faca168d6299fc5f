from pytest import fixture
from pydicom.dataset import Dataset
from pydicom.sequence import Sequence
from pydicom.data import get_testdata_file

from ..dicom_map import DicomMap
from ..value import DicomString


def make_dataset(attrs=None):
    '''Build a small dataset touching every level of the hierarchy'''
    ds = Dataset()
    ds.PatientName = "Doe^John"
    ds.PatientID = "P1"
    ds.PatientSex = "M"
    ds.StudyDate = "20230101"
    ds.StudyInstanceUID = "1.2.3.4"
    ds.AccessionNumber = "ACC1"
    ds.SeriesInstanceUID = "1.2.3.4.5"
    ds.SeriesDescription = "CT"
    ds.SeriesNumber = 3
    ds.Modality = "CT"
    ds.SOPInstanceUID = "1.2.3.4.5.6"
    ds.InstanceNumber = 12
    ds.ImageType = ["ORIGINAL", "PRIMARY"]
    ds.Rows = 64
    ds.EncryptedContent = b'\x00\x01\x02\x03'
    ref = Dataset()
    ref.ReferencedSOPInstanceUID = "1.2.3.4.5.7"
    ds.ReferencedImageSequence = Sequence([ref])
    if attrs is not None:
        for key, val in attrs.items():
            setattr(ds, key, val)
    return ds


class TrackedString(DicomString):
    '''String value that counts how often it was cloned'''

    n_clones = 0

    def clone(self):
        TrackedString.n_clones += 1
        return TrackedString(self.content)


@fixture
def data_set():
    return make_dataset()


@fixture
def dicom_map(data_set):
    return DicomMap.from_dataset(data_set)


@fixture
def ct_path():
    return get_testdata_file("CT_small.dcm")


@fixture
def mr_path():
    return get_testdata_file("MR_small.dcm")


@fixture
def make_dcmmap_config_file(tmp_path):
    '''Factory fixture to write config files'''
    def _make_config_file(contents=None):
        config_path = tmp_path / "dcmmap_conf.toml"
        if contents is not None:
            config_path.write_text(contents)
        return str(config_path)

    return _make_config_file
