'''Command line interface'''
from __future__ import annotations
import sys, os, logging

import pydicom
import click
import toml
from rich.logging import RichHandler

from .conf import DcmMapConfig, InvalidConfigError, OUT_FORMATS
from .util import json_serializer
from .tag import str_to_tag
from .hierarchy import QueryLevel
from .dicom_map import DicomMap
from .diff import diff_maps


log = logging.getLogger('dcmmap.cli')


def cli_error(msg, exit_code=1):
    '''Print msg to stderr and exit with non-zero exit code'''
    click.secho(msg, err=True, fg='red')
    sys.exit(exit_code)


@click.group()
@click.option('--config',
              type=click.Path(dir_okay=False,
                              readable=True,
                              resolve_path=True),
              envvar='DCMMAP_CONFIG_PATH',
              default=os.path.join(click.get_app_dir('dcmmap'), 'dcmmap_conf.toml'),
              help="Path to TOML config file",
             )
@click.option('--log-path',
              type=click.Path(dir_okay=False,
                              readable=True,
                              writable=True,
                              resolve_path=True),
              envvar='DCMMAP_LOG_PATH',
              help="Save logging output to this file")
@click.option('--file-log-level',
              type=click.Choice(['DEBUG', 'INFO', 'WARN', 'ERROR'],
                                case_sensitive=False),
              default='INFO',
              help="Log level to use when logging to a file")
@click.option('--verbose', '-v',
              is_flag=True,
              default=False,
              help="Print INFO log messages")
@click.option('--debug',
              is_flag=True,
              default=False,
              help="Print DEBUG log messages")
@click.option('--quiet',
              is_flag=True,
              default=False,
              help="Hide WARNING and below log messages")
@click.pass_context
def cli(ctx, config, log_path, file_log_level, verbose, debug, quiet):
    '''Inspect DICOM meta data and build query templates
    '''
    if quiet:
        if verbose or debug:
            cli_error("Can't mix --quiet with --verbose/--debug")

    # Setup logging
    LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'
    def_formatter = logging.Formatter(LOG_FORMAT)
    root_logger = logging.getLogger('')
    root_logger.setLevel(logging.DEBUG)
    stream_formatter = logging.Formatter('%(name)s %(message)s')
    stream_handler = RichHandler(enable_link_path=False)
    stream_handler.setFormatter(stream_formatter)
    if debug:
        stream_handler.setLevel(logging.DEBUG)
    elif verbose:
        stream_handler.setLevel(logging.INFO)
    elif quiet:
        stream_handler.setLevel(logging.ERROR)
    else:
        stream_handler.setLevel(logging.WARN)
    root_logger.addHandler(stream_handler)
    if log_path is not None:
        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(def_formatter)
        file_handler.setLevel(getattr(logging, file_log_level.upper()))
        root_logger.addHandler(file_handler)

    # Create global param dict for subcommands to use
    ctx.obj = {}
    ctx.obj['config_path'] = config
    try:
        ctx.obj['config'] = DcmMapConfig(config, create_if_missing=True)
    except InvalidConfigError as e:
        cli_error(str(e))


@click.command()
@click.pass_obj
@click.option('--show', is_flag=True,
              help="Just print the current config contents")
@click.option('--path', is_flag=True,
              help="Just print the current config path")
def conf(params, show, path):
    '''Open the config file with your $EDITOR'''
    config_path = params['config_path']
    if path:
        click.echo(config_path)
    if show:
        with open(config_path, 'r') as f:
            click.echo(f.read())
    if path or show:
        return
    err = False
    while True:
        click.edit(filename=config_path)
        try:
            with open(config_path, 'r') as f:
                _ = toml.load(f)
        except toml.decoder.TomlDecodeError as e:
            err = True
            click.echo("The config file contains an error: %s" % e)
            click.echo("The editor will be reopened so you can correct the error")
            click.pause()
        else:
            if err:
                click.echo("Config file is now valid")
            break


def _parse_level(level):
    level = level.upper()
    for q_lvl in QueryLevel:
        if q_lvl.name == level:
            return q_lvl
    if level == 'INSTANCE':
        return QueryLevel.IMAGE
    cli_error("Invalid level: %s" % level)


def _get_out_format(params, out_format):
    if out_format is None:
        out_format = params['config'].out_format
    if out_format not in OUT_FORMATS:
        cli_error("Invalid out-format: %s" % out_format)
    return out_format


def _echo_map(params, dmap, out_format, title='DicomMap'):
    if out_format == 'tree':
        click.echo(dmap.to_tree(title))
    else:
        click.echo(json_serializer.dumps(dmap,
                                         indent=params['config'].json_indent))


def _read_map(pth):
    try:
        ds = pydicom.dcmread(pth)
    except Exception as e:
        cli_error("Unable to read DICOM file '%s': %s" % (pth, e))
    log.debug("Read %d elements from %s", len(ds), pth)
    return DicomMap.from_dataset(ds)


out_format_opt = click.option('--out-format',
                              default=None,
                              help="Output format: tree/json")


@click.command()
@click.pass_obj
@click.argument('dcm_files',
                type=click.Path(exists=True, readable=True),
                nargs=-1)
@out_format_opt
def dump(params, dcm_files, out_format):
    '''Dump contents of DICOM files'''
    out_format = _get_out_format(params, out_format)
    for pth in dcm_files:
        _echo_map(params, _read_map(pth), out_format, title=pth)


@click.command()
@click.pass_obj
@click.argument('level')
@click.argument('dcm_files',
                type=click.Path(exists=True, readable=True),
                nargs=-1)
@out_format_opt
def extract(params, level, dcm_files, out_format):
    '''Print the meta data of DICOM files that belongs to the given level

    The `level` can be one of patient/study/series/image.
    '''
    level = _parse_level(level)
    out_format = _get_out_format(params, out_format)
    for pth in dcm_files:
        lvl_info = _read_map(pth).extract_level_information(level)
        _echo_map(params, lvl_info, out_format, title=pth)


@click.command()
@click.pass_obj
@click.argument('level')
@click.argument('query', nargs=-1)
@out_format_opt
def template(params, level, query, out_format):
    '''Print the template for a find request on the given level

    Additional 'Attr=value' arguments fill in values for the template,
    adding the attribute if needed.
    '''
    level = _parse_level(level)
    out_format = _get_out_format(params, out_format)
    tmpl = DicomMap.setup_find_level_template(level)
    for query_input in query:
        try:
            q_attr, q_val = query_input.split('=')
            tag = str_to_tag(q_attr)
        except Exception:
            cli_error(f"Invalid query input string: {query_input}")
        tmpl.set_value(tag, q_val)
    _echo_map(params, tmpl, out_format, title='%s template' % level.name)


@click.command()
@click.pass_obj
@click.argument('left')
@click.argument('right')
def diff(params, left, right):
    '''Show differences between two data sets'''
    diffs = diff_maps(_read_map(left), _read_map(right))
    for d in diffs:
        click.echo(str(d))


# Add our subcommands to the CLI
cli.add_command(conf)
cli.add_command(dump)
cli.add_command(extract)
cli.add_command(template)
cli.add_command(diff)


# Entry point
if __name__ == '__main__':
    cli()
