#!/usr/bin/env python3
"""
DIGIPIN command-line tool.

Encode and decode single codes, process CSV files in bulk and run the HTTP
service.
"""

import json
from pathlib import Path

import click
import pandas as pd
from shapely.geometry import mapping

from . import __version__
from .abstractions.types import Failure
from .config import Config
from .grid_systems import DIGIPIN, try_encode, try_decode, DigipinError
from .infrastructure.logging import get_logger, setup_logging, command_scope

logger = get_logger(__name__)


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose output')
@click.option('--config', 'config_path', type=click.Path(exists=True, dir_okay=False),
              help='YAML config file overriding the defaults')
@click.version_option(__version__, prog_name='digipin')
@click.pass_context
def cli(ctx, verbose, config_path):
    """DIGIPIN grid code tool."""
    settings = Config(Path(config_path)) if config_path else Config()
    setup_logging(settings, log_level='DEBUG' if verbose else None)
    ctx.obj = settings


@cli.command()
@click.argument('latitude', type=float)
@click.argument('longitude', type=float)
def encode(latitude, longitude):
    """Encode LATITUDE LONGITUDE into a DIGIPIN."""
    with command_scope('encode'):
        outcome = try_encode(latitude, longitude)
        if isinstance(outcome, Failure):
            click.echo(f"❌ {outcome.message}", err=True)
            raise click.Abort()
        click.echo(outcome.value)


@cli.command()
@click.argument('code')
@click.option('--geojson', is_flag=True, help='Print the cell as a GeoJSON feature')
@click.pass_obj
def decode(settings, code, geojson):
    """Decode CODE into the center and bounds of its cell."""
    with command_scope('decode'):
        outcome = try_decode(code)
        if isinstance(outcome, Failure):
            click.echo(f"❌ {outcome.message}", err=True)
            raise click.Abort()

        location = outcome.value
        precision = settings.get('output.coordinate_precision', 6)

        if geojson:
            feature = {
                'type': 'Feature',
                'geometry': mapping(location.bounds.polygon),
                'properties': {
                    'digipin': location.code,
                    'latitude': round(location.latitude, precision),
                    'longitude': round(location.longitude, precision),
                }
            }
            click.echo(json.dumps(feature))
            return

        data = location.to_dict(precision=precision)
        click.echo(f"{data['latitude']}, {data['longitude']}")
        bounds = location.bounds
        click.echo(f"cell: lat {bounds.min_lat:.{precision}f}..{bounds.max_lat:.{precision}f}, "
                   f"lon {bounds.min_lon:.{precision}f}..{bounds.max_lon:.{precision}f}")


@cli.command()
@click.argument('input_path', type=click.Path(exists=True, dir_okay=False))
@click.argument('output_path', type=click.Path(dir_okay=False))
@click.option('--mode', type=click.Choice(['encode', 'decode']), default='encode',
              help='Add codes to coordinates, or coordinates to codes')
@click.option('--lat-col', help='Latitude column')
@click.option('--lon-col', help='Longitude column')
@click.option('--code-col', help='Code column')
@click.option('--errors', type=click.Choice(['raise', 'coerce']),
              help='Fail on the first bad row, or mark bad rows and continue')
@click.pass_obj
def batch(settings, input_path, output_path, mode, lat_col, lon_col, code_col, errors):
    """Process a CSV file from INPUT_PATH into OUTPUT_PATH."""
    # Imported here so single encode/decode calls stay light
    from .processors import encode_frame, decode_frame

    batch_settings = settings.batch
    lat_col = lat_col or batch_settings['latitude_column']
    lon_col = lon_col or batch_settings['longitude_column']
    code_col = code_col or batch_settings['code_column']
    errors = errors or batch_settings['errors']
    error_col = batch_settings.get('error_column', 'error')

    with command_scope(f'batch-{mode}'):
        df = pd.read_csv(input_path, dtype={code_col: str} if mode == 'decode' else None)
        try:
            if mode == 'encode':
                result = encode_frame(df, lat_col=lat_col, lon_col=lon_col, code_col=code_col,
                                      errors=errors, error_col=error_col)
            else:
                result = decode_frame(df, code_col=code_col, lat_col=lat_col, lon_col=lon_col,
                                      errors=errors, error_col=error_col)
        except (DigipinError, KeyError, ValueError) as e:
            click.echo(f"❌ Batch {mode} failed: {e}", err=True)
            raise click.Abort()

        result.to_csv(output_path, index=False)
        click.echo(f"✅ Wrote {len(result)} rows to {output_path}")


@cli.command()
@click.option('--host', help='Bind address (service.host if not given)')
@click.option('--port', type=int, help='Port (service.port if not given)')
@click.option('--reload', is_flag=True, help='Restart on code changes (development only)')
@click.pass_obj
def serve(settings, host, port, reload):
    """Run the HTTP service."""
    import uvicorn
    from .api import create_app

    host = host or settings.get('service.host', '127.0.0.1')
    port = port or settings.get('service.port', 3000)

    logger.info(f"Starting DIGIPIN service on {host}:{port}")
    # log_config=None keeps the structured handlers installed by setup_logging
    if reload:
        # The reloader re-imports the app, so it is built from the global config
        uvicorn.run('digipin.api.app:create_app', factory=True, reload=True,
                    host=host, port=port, log_config=None)
    else:
        uvicorn.run(create_app(settings), host=host, port=port, log_config=None)


@cli.command()
def info():
    """Show the grid definition."""
    spec = DIGIPIN.to_dict()
    root = spec['root']
    click.echo(f"Root region: lat {root['min_lat']}..{root['max_lat']}, "
               f"lon {root['min_lon']}..{root['max_lon']}")
    click.echo(f"Levels: {spec['levels']} (separator '{spec['separator']}' "
               f"after {', '.join(str(p) for p in spec['separator_after'])})")
    click.echo("Symbols:")
    for row in spec['symbols']:
        click.echo(f"  {' '.join(row)}")
    click.echo(f"Cell size: {spec['cell_lat_span']:.3e}° lat x {spec['cell_lon_span']:.3e}° lon")


def main():
    cli()


if __name__ == '__main__':
    main()
