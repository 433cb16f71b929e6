from __future__ import annotations

import typer

from eqn.api.app import create_app
from eqn.util.config import load_server_config
from eqn.util.logging import configure_logging, get_logger

app = typer.Typer(add_completion=False)


def run_server(flask_app, host: str, port: int, debug: bool) -> None:
    flask_app.run(host=host, port=port, debug=debug)


@app.command()
def main(
    config: str = "",
    host: str | None = typer.Option(None, "--host"),
    port: int | None = typer.Option(None, "--port"),
    debug: bool | None = typer.Option(None, "--debug/--no-debug"),
    log_level: str | None = typer.Option(None, "--log-level"),
) -> None:
    cfg = load_server_config(config or None, host=host, port=port, debug=debug, log_level=log_level)
    configure_logging(cfg.log_level)
    logger = get_logger(__name__)
    logger.info(
        "serve host=%s port=%d debug=%s config=%s",
        cfg.host,
        cfg.port,
        str(cfg.debug).lower(),
        config or "none",
    )
    run_server(create_app(), cfg.host, cfg.port, cfg.debug)


if __name__ == "__main__":
    app()
