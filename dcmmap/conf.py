# Config parsing
import logging
from pathlib import Path
from typing import Any, Dict, MutableMapping

import toml
import click

from .util import PathInputType


log = logging.getLogger(__name__)


class InvalidConfigError(Exception):
    '''Raised if invalid configuration is detected'''


_default_conf = \
'''
########################################################
## Output Configuration
########################################################

## Uncomment to change how the command line tools print meta data

#[output]
#
#  # Either "tree" or "json"
#  format = "json"
#
#  # Indentation used for JSON output
#  json_indent = 2
'''


CONF_PATH = Path(click.get_app_dir('dcmmap')) / 'dcmmap_conf.toml'


OUT_FORMATS = ('tree', 'json')


_default_output: Dict[str, Any] = {'format' : 'tree',
                                   'json_indent' : 4,
                                  }


class DcmMapConfig:
    '''Configuration for the command line tools

    Parameters
    ----------
    config_path
        Path to the TOML config file

    create_if_missing
        Write the default (fully commented) config if the file is missing
    '''
    def __init__(self,
                 config_path: PathInputType = CONF_PATH,
                 create_if_missing: bool = False):
        self._config_path = Path(config_path)
        if not self._config_path.exists():
            if create_if_missing:
                config_dir = self._config_path.parent
                config_dir.mkdir(parents=True, exist_ok=True)
                with self._config_path.open('w') as f:
                    f.write(_default_conf)
                conf_str = _default_conf
            else:
                raise FileNotFoundError(self._config_path)
        else:
            with self._config_path.open('r') as f:
                conf_str = f.read()

        try:
            self._raw_conf: MutableMapping[str, Any] = toml.loads(conf_str)
        except toml.decoder.TomlDecodeError as e:
            raise InvalidConfigError(f"Error parsing config file: {e}")

        raw_output = self._raw_conf.get('output', {})
        if not isinstance(raw_output, dict):
            raise InvalidConfigError("The 'output' section must be a table")
        unknown = set(raw_output) - set(_default_output)
        if unknown:
            raise InvalidConfigError(f"Unknown 'output' options: {unknown}")
        self._output = dict(_default_output)
        self._output.update(raw_output)
        if self._output['format'] not in OUT_FORMATS:
            raise InvalidConfigError(f"Invalid output format: {self._output['format']}")
        indent = self._output['json_indent']
        if not isinstance(indent, int) or isinstance(indent, bool) or indent < 0:
            raise InvalidConfigError(f"Invalid json_indent: {indent}")
        log.debug("Loaded config from %s", self._config_path)

    @property
    def config_path(self) -> Path:
        return self._config_path

    @property
    def out_format(self) -> str:
        '''Default output format for the command line tools'''
        return self._output['format']

    @property
    def json_indent(self) -> int:
        return self._output['json_indent']
