"""Tests for the command-line interface."""

import json

import pandas as pd
import pytest
from click.testing import CliRunner

from digipin import __version__
from digipin.cli import cli


@pytest.fixture
def runner():
    return CliRunner()


def _lines(result):
    return [line for line in result.output.splitlines() if line.strip()]


class TestEncodeCommand:

    def test_encode(self, runner):
        result = runner.invoke(cli, ['encode', '28.6139', '77.2090'])

        assert result.exit_code == 0
        assert '39J-438-TJC7' in _lines(result)

    def test_out_of_range(self, runner):
        result = runner.invoke(cli, ['encode', '45.0', '77.0'])

        assert result.exit_code == 1
        assert '❌' in result.output
        assert 'Latitude' in result.output

    def test_non_numeric_argument(self, runner):
        result = runner.invoke(cli, ['encode', 'north', '77.0'])

        assert result.exit_code == 2


class TestDecodeCommand:

    def test_decode(self, runner):
        result = runner.invoke(cli, ['decode', '39J-438-TJC7'])

        assert result.exit_code == 0
        lines = _lines(result)
        assert '28.613901, 77.208998' in lines
        assert any(line.startswith('cell: lat ') for line in lines)

    def test_decode_geojson(self, runner):
        result = runner.invoke(cli, ['decode', '4P3-JK8-52C9', '--geojson'])

        assert result.exit_code == 0
        feature = json.loads(next(line for line in _lines(result) if line.startswith('{')))
        assert feature['type'] == 'Feature'
        assert feature['geometry']['type'] == 'Polygon'
        assert feature['properties']['digipin'] == '4P3-JK8-52C9'

    def test_decode_invalid(self, runner):
        result = runner.invoke(cli, ['decode', 'A9J-438-TJC7'])

        assert result.exit_code == 1
        assert "Invalid character 'A'" in result.output

    def test_config_precision(self, runner, tmp_path):
        config_file = tmp_path / 'config.yml'
        config_file.write_text('output:\n  coordinate_precision: 3\n')

        result = runner.invoke(cli, ['--config', str(config_file), 'decode', '39J-438-TJC7'])

        assert result.exit_code == 0
        assert '28.614, 77.209' in _lines(result)


class TestBatchCommand:

    def test_batch_encode(self, runner, tmp_path, sample_points):
        source = tmp_path / 'points.csv'
        target = tmp_path / 'coded.csv'
        pd.DataFrame([
            {'latitude': lat, 'longitude': lon} for (lat, lon), _ in sample_points.values()
        ]).to_csv(source, index=False)

        result = runner.invoke(cli, ['batch', str(source), str(target)])

        assert result.exit_code == 0
        assert f"Wrote {len(sample_points)} rows" in result.output
        coded = pd.read_csv(target)
        assert coded['digipin'].tolist() == [code for _, code in sample_points.values()]

    def test_batch_decode_coerce(self, runner, tmp_path):
        source = tmp_path / 'codes.csv'
        target = tmp_path / 'decoded.csv'
        pd.DataFrame({'pin': ['39J-438-TJC7', 'XYZ']}).to_csv(source, index=False)

        result = runner.invoke(cli, [
            'batch', str(source), str(target),
            '--mode', 'decode', '--code-col', 'pin', '--errors', 'coerce'
        ])

        assert result.exit_code == 0
        decoded = pd.read_csv(target)
        assert decoded.loc[0, 'latitude'] == pytest.approx(28.613901, abs=5e-7)
        assert pd.isna(decoded.loc[1, 'latitude'])
        assert decoded.loc[1, 'error'] == 'invalid_code_length'

    def test_batch_failure(self, runner, tmp_path):
        source = tmp_path / 'points.csv'
        pd.DataFrame({'latitude': [60.0], 'longitude': [77.0]}).to_csv(source, index=False)

        result = runner.invoke(cli, ['batch', str(source), str(tmp_path / 'out.csv')])

        assert result.exit_code == 1
        assert 'Batch encode failed' in result.output
        assert not (tmp_path / 'out.csv').exists()

    def test_batch_missing_column(self, runner, tmp_path):
        source = tmp_path / 'points.csv'
        pd.DataFrame({'lat': [20.0], 'lon': [80.0]}).to_csv(source, index=False)

        result = runner.invoke(cli, ['batch', str(source), str(tmp_path / 'out.csv')])

        assert result.exit_code == 1
        assert 'Column not found' in result.output


class TestMiscCommands:

    def test_info(self, runner):
        result = runner.invoke(cli, ['info'])

        assert result.exit_code == 0
        assert 'Levels: 10' in result.output
        assert 'F C 9 8' in result.output
        assert 'L M P T' in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_serve_uses_configured_address(self, runner, monkeypatch):
        calls = {}

        def fake_run(app, **kwargs):
            calls['app'] = app
            calls.update(kwargs)

        monkeypatch.setattr('uvicorn.run', fake_run)

        result = runner.invoke(cli, ['serve', '--port', '8123'])

        assert result.exit_code == 0
        assert calls['host'] == '127.0.0.1'
        assert calls['port'] == 8123
        assert calls['log_config'] is None
        assert calls['app'].title == 'DIGIPIN API'

    def test_serve_reload_uses_factory(self, runner, monkeypatch):
        calls = {}

        def fake_run(app, **kwargs):
            calls['app'] = app
            calls.update(kwargs)

        monkeypatch.setattr('uvicorn.run', fake_run)

        result = runner.invoke(cli, ['serve', '--reload'])

        assert result.exit_code == 0
        assert calls['app'] == 'digipin.api.app:create_app'
        assert calls['factory'] is True
        assert calls['reload'] is True
