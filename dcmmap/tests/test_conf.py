'''Tests for the dcmmap.conf module'''
from pathlib import Path

import pytest

from ..conf import _default_conf, DcmMapConfig, InvalidConfigError


def test_load_default(make_dcmmap_config_file):
    config_path = make_dcmmap_config_file()
    with pytest.raises(FileNotFoundError):
        DcmMapConfig(config_path)
    config = DcmMapConfig(config_path, create_if_missing=True)
    assert Path(config_path).read_text() == _default_conf
    assert config.out_format == 'tree'
    assert config.json_indent == 4


def test_uncommented_default(make_dcmmap_config_file):
    # Load uncommented version of default config str
    contents = []
    for line in _default_conf.split('\n'):
        if line != '' and line[0] == '#':
            contents.append(line[1:])
        else:
            contents.append(line)
    contents = '\n'.join(contents)
    config = DcmMapConfig(make_dcmmap_config_file(contents))
    assert config.out_format == 'json'
    assert config.json_indent == 2


@pytest.mark.parametrize("contents",
                         ['[output]\nformat = "xml"\n',
                          '[output]\njson_indent = "wide"\n',
                          '[output]\ncolor = true\n',
                          'output = 1\n',
                          '[output\n',
                         ])
def test_invalid(make_dcmmap_config_file, contents):
    with pytest.raises(InvalidConfigError):
        DcmMapConfig(make_dcmmap_config_file(contents))
