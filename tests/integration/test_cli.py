"""
Integration tests for the runconf command line.
"""
import json
import os

from click.testing import CliRunner

from runconf.CLI.main import cli

FIXTURES = os.path.join(os.path.dirname(__file__), '..', 'fixtures')


def test_cli_help():
    runner = CliRunner()
    result = runner.invoke(cli, ['--help'])
    assert result.exit_code == 0
    assert 'normalize container run configurations' in result.output


def test_run_help():
    runner = CliRunner()
    result = runner.invoke(cli, ['run', '--help'])
    assert result.exit_code == 0
    assert '--volume' in result.output


def test_run_document():
    runner = CliRunner()
    result = runner.invoke(cli, [
        'run', '-v', '/tmp', '-v', '/host:/container:ro', '--link', 'a:b',
        '-e', 'A=1', '-p', '8080:80', '-m', '1k', 'ubuntu', 'bash', '-c', 'ls',
    ])
    assert result.exit_code == 0, result.output
    document = json.loads(result.output)
    assert document['Image'] == 'ubuntu'
    assert document['Cmd'] == ['bash', '-c', 'ls']
    assert document['Volumes'] == {'/tmp': {}}
    assert document['Env'] == ['A=1']
    assert document['ExposedPorts'] == {'80/tcp': {}}
    assert document['AttachStdout'] is True
    assert document['AttachStdin'] is False
    assert document['HostConfig']['Binds'] == ['/host:/container:ro']
    assert document['HostConfig']['Links'] == ['a:b']
    assert document['HostConfig']['Memory'] == 1024


def test_run_without_binds_prints_null():
    runner = CliRunner()
    result = runner.invoke(cli, ['run', 'ubuntu'])
    assert result.exit_code == 0, result.output
    assert json.loads(result.output)['HostConfig']['Binds'] is None


def test_run_conflicting_flags():
    runner = CliRunner()
    result = runner.invoke(cli, ['run', '-a', 'stdin', '-d', 'ubuntu'])
    assert result.exit_code == 1
    assert 'Conflicting options' in result.output


def test_run_detach_rm():
    runner = CliRunner()
    result = runner.invoke(cli, ['run', '-d', '--rm', 'ubuntu'])
    assert result.exit_code == 1


def test_run_invalid_volume():
    runner = CliRunner()
    result = runner.invoke(cli, ['run', '-v', '/', 'ubuntu'])
    assert result.exit_code == 1
    assert 'Error:' in result.output


def test_run_attach_missing_value():
    runner = CliRunner()
    result = runner.invoke(cli, ['run', '-a'])
    assert result.exit_code != 0


def test_decode():
    runner = CliRunner()
    result = runner.invoke(cli, ['decode', os.path.join(FIXTURES, 'container_config_1_14.json')])
    assert result.exit_code == 0, result.output
    document = json.loads(result.output)
    assert document['HostConfig']['Memory'] == 1000
    assert document['Entrypoint'] is None


def test_merge():
    runner = CliRunner()
    result = runner.invoke(cli, [
        'merge',
        os.path.join(FIXTURES, 'container_config_1_19.json'),
        os.path.join(FIXTURES, 'image_config.yaml'),
    ])
    assert result.exit_code == 0, result.output
    document = json.loads(result.output)
    assert document['Cmd'] == ['date']
    assert document['WorkingDir'] == '/srv'
    assert document['ExposedPorts'] == {'22/tcp': {}, '80/tcp': {}}
    assert document['Volumes'] == {'/tmp': {}, '/var/lib/data': {}}
    assert document['Env'][1] == 'LANG=C.UTF-8'


def test_compare(tmp_path):
    runner = CliRunner()
    path = os.path.join(FIXTURES, 'container_config_1_19.json')
    result = runner.invoke(cli, ['compare', path, path])
    assert result.exit_code == 0
    assert 'equivalent' in result.output

    other = tmp_path / 'other.json'
    other.write_text(json.dumps({'Image': 'ubuntu'}))
    result = runner.invoke(cli, ['compare', path, str(other)])
    assert result.exit_code == 1
    assert 'different' in result.output


def test_decode_invalid_document(tmp_path):
    bad = tmp_path / 'bad.json'
    bad.write_text('{"Cmd": "bash"}')
    runner = CliRunner()
    result = runner.invoke(cli, ['decode', str(bad)])
    assert result.exit_code == 1
    assert 'no Image' in result.output
