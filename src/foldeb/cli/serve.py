"""CLI command to start the web API server"""

import click

from foldeb.utils import setup_shutdown_filter


@click.command('serve')
@click.option('--host', default='127.0.0.1', help='Host to bind to (default: 127.0.0.1)')
@click.option('--port', type=int, default=8000, help='Port to bind to (default: 8000)')
@click.option('--reload', is_flag=True, help='Reload on code changes (development only)')
def serve_command(host: str, port: int, reload: bool):
    """Start the foldeb web API server.

    \b
    Examples:
        foldeb serve
        foldeb serve --host 0.0.0.0 --port 9000

    \b
    Environment:
        FOLDEB_DEPTH_GATE       Enable the depth gate by default (true/false)
        FOLDEB_DEPTH_THRESHOLD  Depth gate threshold (default: 4)
        FOLDEB_LOG_LEVEL        Log level (default: INFO)
    """
    import uvicorn

    setup_shutdown_filter()
    click.echo(f'Starting foldeb server on http://{host}:{port} (docs at /docs)')
    uvicorn.run('foldeb.web:app', host=host, port=port, reload=reload)
