"""Run the HTTP API."""

import cyclopts
import uvicorn

from emcs.application.api.rest.app import create_app
from emcs.cli.console import get_console
from emcs.config import Config

app = cyclopts.App(name="server", help="Run the EMCS API server")


@app.default
def start(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Start the API server in the foreground.

    Args:
        host: Host to bind to.
        port: Port to listen on.
    """
    config = Config()  # type: ignore[call-arg]
    get_console().success(f"Serving {config.server.name} on http://{host}:{port}")
    uvicorn.run(create_app(config), host=host, port=port, log_config=None)
