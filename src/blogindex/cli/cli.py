"""CLI entrypoint: Typer app definition and command registration"""

import typer

from blogindex.cli.commands import index_cmd, list_cmd, main_cmd


app = typer.Typer(name="blogindex", help="Static blog posts indexer")

app.callback(invoke_without_command=True)(main_cmd)
app.command(name="index")(index_cmd)
app.command(name="list")(list_cmd)
