"""Main CLI application using Cyclopts."""

import cyclopts

from emcs.cli.commands import arc, document, duty, server

app = cyclopts.App(
    name="emcs",
    help="Excise movement consignment ledger - CLI",
)

app.command(arc.app, name="arc")
app.command(document.app, name="document")
app.command(duty.app, name="duty")
app.command(server.app, name="server")


def main() -> None:
    app()
