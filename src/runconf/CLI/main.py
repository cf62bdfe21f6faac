"""
Command Line Interface for runconf.
"""
import json

import click

from ..errors import RunConfigError
from ..MANAGERS.comparator import compare as compare_configs
from ..MANAGERS.reconciler import merge as merge_configs
from ..MODELS.container_config import to_document
from ..PARSERS.config_decoder import ConfigDecoder
from ..PARSERS.run_args_parser import RunArgumentParser, RunFlags
from ..UTILS.log import set_debug


def _echo_document(config, host):
    click.echo(json.dumps(to_document(config, host), indent=2))


def _decode(path):
    try:
        return ConfigDecoder.decode_file(path)
    except RunConfigError as e:
        raise click.ClickException(f"{path}: {e}") from e


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, debug):
    """
    runconf - normalize container run configurations.

    Turns `docker run` flags or config documents into a canonical
    container/host configuration, and merges or compares them.
    """
    ctx.ensure_object(dict)
    if debug:
        set_debug(True)


@cli.command(context_settings={'allow_interspersed_args': False})
@click.option('--attach', '-a', multiple=True, help='Attach to stdin, stdout or stderr')
@click.option('--detach', '-d', is_flag=True, help='Run container in background')
@click.option('--rm', 'auto_remove', is_flag=True, help='Remove the container when it exits')
@click.option('--volume', '-v', 'volumes', multiple=True, help='Bind mount or named volume')
@click.option('--link', 'links', multiple=True, help='Link to another container (name:alias)')
@click.option('--env', '-e', multiple=True, help='Set an environment variable')
@click.option('--env-file', 'env_files', multiple=True, help='Read environment variables from a file')
@click.option('--expose', multiple=True, help='Expose a port or a range of ports')
@click.option('--publish', '-p', multiple=True, help="Publish a container's port to the host")
@click.option('--memory', '-m', default=None, help='Memory limit, e.g. 512m')
@click.option('--memory-swap', default=None, help='Total memory plus swap, -1 for unlimited')
@click.option('--cpu-shares', '-c', default=0, type=int, help='CPU shares (relative weight)')
@click.option('--cpuset-cpus', default='', help='CPUs in which to allow execution')
@click.option('--hostname', default='', help='Container host name')
@click.option('--domainname', default='', help='Container domain name')
@click.option('--user', '-u', default='', help='Username or UID')
@click.option('--workdir', '-w', 'working_dir', default='', help='Working directory inside the container')
@click.option('--tty', '-t', is_flag=True, help='Allocate a pseudo-TTY')
@click.option('--interactive', '-i', is_flag=True, help='Keep STDIN open even if not attached')
@click.option('--entrypoint', default=None, help='Overwrite the default entrypoint of the image')
@click.option('--label', '-l', 'labels', multiple=True, help='Set meta data on the container')
@click.argument('image')
@click.argument('command', nargs=-1, type=click.UNPROCESSED)
def run(**options):
    """Normalize `run` flags for IMAGE into a config document."""
    try:
        flags = RunFlags(**options)
        config, host = RunArgumentParser().parse(flags)
    except RunConfigError as e:
        raise click.ClickException(str(e)) from e
    _echo_document(config, host)


@cli.command()
@click.argument('path', type=click.Path(exists=True, dir_okay=False))
def decode(path):
    """Decode a config document of any supported version."""
    config, host = _decode(path)
    _echo_document(config, host)


@cli.command()
@click.argument('user_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('image_path', type=click.Path(exists=True, dir_okay=False))
def merge(user_path, image_path):
    """Merge image defaults from IMAGE_PATH into the config at USER_PATH."""
    config, host = _decode(user_path)
    image_config, _ = _decode(image_path)
    try:
        merge_configs(config, image_config)
    except RunConfigError as e:
        raise click.ClickException(str(e)) from e
    _echo_document(config, host)


@cli.command()
@click.argument('path_a', type=click.Path(exists=True, dir_okay=False))
@click.argument('path_b', type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def compare(ctx, path_a, path_b):
    """Check whether two config documents are equivalent."""
    config_a, host_a = _decode(path_a)
    config_b, host_b = _decode(path_b)
    if compare_configs(config_a, config_b) and compare_configs(host_a, host_b):
        click.echo("equivalent")
        ctx.exit(0)
    click.echo("different")
    ctx.exit(1)


def main():
    """
    Main entry point for the CLI.
    """
    cli(obj={})


if __name__ == '__main__':
    main()
