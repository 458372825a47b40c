"""mediaupload CLI - Main commands."""
import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn, TaskProgressColumn
from rich.table import Table

from mediaupload import MediaClient, APIConfig, MediaUploadException, setup_logging
from mediaupload.core.upload import UploadProgress, ProcessingInfo

app = typer.Typer(
    name="mediaupload",
    help="Chunked media upload CLI",
    add_completion=False
)
console = Console()


def run_async(coro):
    """Run async function."""
    return asyncio.run(coro)


@app.command()
def upload(
    file_path: Path = typer.Argument(..., help="Local file to upload", exists=True, dir_okay=False),
    token: Optional[str] = typer.Option(None, "--token", "-t", envvar="MEDIAUPLOAD_TOKEN", help="Bearer token"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Upload API base URL"),
    max_checks: Optional[int] = typer.Option(None, "--max-checks", help="Give up after this many processing status checks"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
):
    """Upload a file and print its media id."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
        setup_logging(logging.DEBUG)
    
    if not token:
        token = typer.prompt("Token", hide_input=True)
    
    config = APIConfig.with_token(token)
    if base_url:
        config.base_url = base_url
    
    async def do_upload():
        async with MediaClient(config=config) as client:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                BarColumn(),
                TaskProgressColumn(),
                console=console
            ) as progress:
                task = progress.add_task(f"Uploading {file_path.name}", total=100)
                
                def on_progress(p: UploadProgress):
                    progress.update(task, completed=p.percentage)
                
                def on_processing(info: ProcessingInfo):
                    percent = info.progress_percent or 0
                    progress.update(task, description=f"Processing {file_path.name}", completed=percent)
                
                return await client.upload(
                    file_path,
                    progress_callback=on_progress,
                    processing_callback=on_processing,
                    max_status_checks=max_checks
                )
    
    try:
        result = run_async(do_upload())
    except MediaUploadException as e:
        console.print(f"[red]Upload failed: {e}[/red]")
        raise typer.Exit(1)
    
    console.print(f"[green]Uploaded:[/green] {file_path.name}")
    console.print(f"Media id: {result.media_id}")
    info = result.processing_info
    if info:
        console.print(f"Processing: {info.state}")


@app.command()
def classify(
    file_path: Path = typer.Argument(..., help="Local file to inspect", exists=True, dir_okay=False),
):
    """Show media type, size limit and category for a file."""
    client = MediaClient()
    try:
        descriptor = client.classify(file_path)
    except MediaUploadException as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    
    table = Table()
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Media type", descriptor.media_type)
    table.add_row("Size", f"{descriptor.size_bytes:,} bytes")
    table.add_row("Limit", f"{descriptor.max_allowed_bytes:,} bytes")
    table.add_row("Category", descriptor.category.value if descriptor.category else "-")
    console.print(table)


def main():
    app()


if __name__ == "__main__":
    main()
