from pathlib import Path

from click.testing import CliRunner

from mininip.cli import cli


def write_ini(tmp_path: Path, text: str) -> str:
    path = tmp_path / 'config.ini'
    path.write_text(text, encoding='utf-8')
    return str(path)


SAMPLE = """\
author = Ada
[db]
host = localhost
port = 5432 ; default postgres port
greeting = "hello\\tworld"
"""


def test_show(tmp_path):
    runner = CliRunner()
    res = runner.invoke(cli, ['show', write_ini(tmp_path, SAMPLE)])
    assert res.exit_code == 0, res.output
    lines = res.output.splitlines()
    assert lines == [
        'author = Ada  ; raw',
        '[db]',
        'host = localhost  ; raw',
        'port = 5432  ; integer',
        'greeting = "hello\\tworld"  ; string',
    ]


def test_show_skips_empty_global_section(tmp_path):
    runner = CliRunner()
    res = runner.invoke(cli, ['show', write_ini(tmp_path, '[s]\nk = yes\n')])
    assert res.exit_code == 0, res.output
    assert res.output.splitlines() == ['[s]', 'k = yes  ; boolean']


def test_get(tmp_path):
    path = write_ini(tmp_path, SAMPLE)
    runner = CliRunner()

    res = runner.invoke(cli, ['get', path, 'port', '--section', 'db'])
    assert res.exit_code == 0, res.output
    assert res.output == '5432\n'

    res = runner.invoke(cli, ['get', path, 'author'])
    assert res.exit_code == 0, res.output
    assert res.output == 'Ada\n'

    res = runner.invoke(cli, ['get', path, 'greeting', '-s', 'db', '-t', 'string'])
    assert res.exit_code == 0, res.output
    assert res.output == 'hello\tworld\n'


def test_get_failures(tmp_path):
    path = write_ini(tmp_path, SAMPLE)
    runner = CliRunner()

    res = runner.invoke(cli, ['get', path, 'host', '-s', 'db', '--type', 'string'])
    assert res.exit_code == 1
    assert 'not found' in res.output

    res = runner.invoke(cli, ['get', path, 'user', '-s', 'db'])
    assert res.exit_code == 1


def test_parse_error(tmp_path):
    runner = CliRunner()
    res = runner.invoke(cli, ['show', write_ini(tmp_path, '[db\nhost = x\n')])
    assert res.exit_code == 2
    assert 'error (parse): line 1' in res.output


def test_missing_file(tmp_path):
    runner = CliRunner()
    res = runner.invoke(cli, ['get', str(tmp_path / 'nope.ini'), 'key'])
    assert res.exit_code == 2
    assert 'error (io)' in res.output


def test_unknown_encoding(tmp_path):
    runner = CliRunner()
    res = runner.invoke(
        cli, ['--encoding', 'bogus', 'get', write_ini(tmp_path, 'a = 1\n'), 'a'])
    assert res.exit_code == 2
    assert 'error (runtime)' in res.output
    assert 'bogus' in res.output
