import typer
from rbexport.commands.export import app as export_app
from rbexport.commands import logs
from rbexport.logging import setup_logging, get_logger

app = typer.Typer(
    help="[bold blue]rbexport[/bold blue] - Bulk export of Rebrandly links to CSV",
    rich_markup_mode="rich",
)

# Add command groups
app.add_typer(export_app, name="export")
app.add_typer(logs.app, name="logs")


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]rbexport[/bold blue] - Bulk export of Rebrandly links to CSV

    Pages through every link of your workspaces and writes one CSV per workspace.
    """
    if not ctx.invoked_subcommand:
        print("Welcome to rbexport! To proceed type rbexport --help")


def main():
    setup_logging()
    logger = get_logger("rbexport.main")
    logger.info("rbexport CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.info("rbexport CLI finished")


if __name__ == "__main__":
    main()
