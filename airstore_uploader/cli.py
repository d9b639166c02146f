"""Airstore Uploader CLI for working with a storage container from a terminal.

Every option falls back to the matching AIRSTORE_* environment variable.

Usage:
    airstore-uploader [options] [command] [arguments]

Examples:
    # Upload local files into a directory
    airstore-uploader --container demo --upload-key KEY \\
      --upload-path https://api.filerobot.com/demo/v3/upload upload a.jpg b.png --dir /photos

    # Let the service fetch files from URLs
    airstore-uploader upload --url https://example.com/cat.jpg

    # Browse and search
    airstore-uploader list --dir /photos
    airstore-uploader search "red shoes"
"""

import json

import click
from rich.console import Console
from rich.table import Table

from .api.config import UploaderConfig
from .api.models import LocalFile
from .api.sync_client import UploaderSyncClient
from .config.constants import (
  DEFAULT_LANGUAGE,
  DEFAULT_TAGGING_CONFIDENCE,
  DEFAULT_TAGGING_LIMIT,
  DEFAULT_TAGGING_PROVIDER,
  FILES_FIELD,
  FILES_URL_FIELD,
  JSON_DATA_TYPE,
  PLATFORM_AIRSTORE,
  PLATFORM_FILEROBOT,
)
from .exceptions import UploaderError, classify_error
from .logger import get_logger, log_error, setup_logging

logger = get_logger(__name__)
console = Console()


def _console_alert(title: str, message: str, level: str = "error") -> None:
  color = "red" if level == "error" else "yellow"
  console.print(f"[{color}]{title or level.capitalize()}:[/{color}] {message}")


def _run(action: str, func, *args, **kwargs):
  """Call a client method, turning uploader errors into click errors."""
  try:
    return func(*args, **kwargs)
  except UploaderError as e:
    log_error(logger, e, "cli", action, error_category=classify_error(e).value)
    raise click.ClickException(str(e))


def _files_table(title: str, files) -> Table:
  table = Table(title=title, show_header=True, header_style="bold cyan")
  table.add_column("ID", no_wrap=True)
  table.add_column("Name", overflow="fold")
  table.add_column("Size", justify="right")
  table.add_column("Public link", overflow="fold")

  for file in files or []:
    table.add_row(
      str(file.get("id", "")),
      str(file.get("name", "")),
      str(file.get("size", "")),
      str(file.get("public_link", "")),
    )
  return table


def _parse_properties(pairs):
  properties = {}
  for pair in pairs:
    if "=" not in pair:
      raise click.BadParameter(f"Expected KEY=VALUE, got '{pair}'")
    key, value = pair.split("=", 1)
    properties[key] = value
  return properties


@click.group()
@click.option(
  "--platform",
  envvar="AIRSTORE_PLATFORM",
  default=PLATFORM_FILEROBOT,
  show_default=True,
  type=click.Choice([PLATFORM_FILEROBOT, PLATFORM_AIRSTORE]),
  help="API dialect of the storage service",
)
@click.option("--container", envvar="AIRSTORE_CONTAINER", default="", help="Container (tenant) name")
@click.option("--upload-key", envvar="AIRSTORE_UPLOAD_KEY", default="", help="Secret upload key")
@click.option("--upload-path", envvar="AIRSTORE_UPLOAD_PATH", default="", help="Upload endpoint URL")
@click.pass_context
def cli(ctx, platform, container, upload_key, upload_path):
  """Airstore Uploader - upload, browse and annotate files in a storage container."""
  setup_logging()
  client = UploaderSyncClient(
    UploaderConfig(
      platform=platform,
      container=container,
      upload_key=upload_key,
      upload_path=upload_path,
    ),
    show_alert=_console_alert,
  )
  ctx.obj = client
  ctx.call_on_close(client.close)


@cli.command("upload")
@click.argument("sources", nargs=-1, required=True)
@click.option("--dir", "directory", default=None, help="Target directory")
@click.option("--url", "from_urls", is_flag=True, help="Treat SOURCES as URLs to fetch")
@click.option("--json", "as_json", is_flag=True, help="Send URLs as a JSON body (with --url)")
@click.pass_obj
def upload(client, sources, directory, from_urls, as_json):
  """Upload local files or URLs."""
  if as_json and not from_urls:
    raise click.UsageError("--json only applies to URL uploads, add --url")

  if from_urls:
    files = list(sources)
    data_type = JSON_DATA_TYPE if as_json else FILES_URL_FIELD
  else:
    try:
      files = [LocalFile.from_path(source) for source in sources]
    except OSError as e:
      raise click.ClickException(f"Cannot read file: {e}")
    data_type = FILES_FIELD

  result = _run(
    "upload", client.upload_files, files, data_type=data_type, directory=directory
  )

  console.print()
  console.print(_files_table("Uploaded files", result.files))
  if result.is_duplicate:
    console.print("[yellow]Duplicate:[/yellow] the content already existed in storage")
  if result.is_replacing_data:
    console.print("[yellow]Replaced:[/yellow] existing content was overwritten")


@cli.command("list")
@click.option("--dir", "directory", default="", help="Directory to list")
@click.option("--offset", default=0, show_default=True, help="Pagination offset")
@click.pass_obj
def list_files(client, directory, offset):
  """List files and sub-directories of a directory."""
  result = _run("list", client.get_list_files, directory=directory, offset=offset)

  console.print()
  console.print(_files_table(f"Files in {directory or '/'}", result.files))
  for folder in result.directories or []:
    name = folder.get("name", folder) if isinstance(folder, dict) else folder
    console.print(f"[bold]DIR[/bold] {name}")
  console.print(f"\n[bold]Total:[/bold] {result.files_count} files")


@cli.command("search")
@click.argument("query")
@click.option("--offset", default=0, show_default=True, help="Pagination offset")
@click.pass_obj
def search(client, query, offset):
  """Search files in the container."""
  result = _run("search", client.search_files, query=query, offset=offset)

  console.print()
  console.print(_files_table(f"Results for '{query}'", result.files))
  console.print(f"\n[bold]Total:[/bold] {result.total_files_count} files")


@cli.command("tags")
@click.argument("image_url")
@click.option("--key", default="", help="Tagging provider key")
@click.option("--provider", default=DEFAULT_TAGGING_PROVIDER, show_default=True)
@click.option("--confidence", default=DEFAULT_TAGGING_CONFIDENCE, show_default=True)
@click.option("--limit", default=DEFAULT_TAGGING_LIMIT, show_default=True)
@click.option("--language", default=DEFAULT_LANGUAGE, show_default=True)
@click.pass_obj
def tags(client, image_url, key, provider, confidence, limit, language):
  """Generate tags for an image."""
  response = _run(
    "tags",
    client.generate_tags,
    image_url,
    auto_tagging={
      "key": key,
      "provider": provider,
      "confidence": confidence,
      "limit": limit,
    },
    language=language,
  )
  console.print_json(data=response)


@cli.command("settings")
@click.pass_obj
def settings(client):
  """Show token settings."""
  token_settings = _run("settings", client.get_token_settings)
  state = "[green]enabled[/green]" if token_settings.products_enabled else "[red]disabled[/red]"
  console.print(f"Products: {state}")


@cli.command("set-meta")
@click.argument("file_id")
@click.argument("properties", nargs=-1, required=True)
@click.pass_obj
def set_meta(client, file_id, properties):
  """Save file properties given as KEY=VALUE pairs."""
  response = _run(
    "set_meta", client.save_meta_data, file_id, _parse_properties(properties)
  )
  console.print_json(data=response)


@cli.command("set-product")
@click.argument("file_id")
@click.argument("product_json")
@click.pass_obj
def set_product(client, file_id, product_json):
  """Attach product data (a JSON object) to a file."""
  try:
    product = json.loads(product_json)
  except json.JSONDecodeError as e:
    raise click.BadParameter(f"Invalid JSON: {e}")

  response = _run("set_product", client.update_product, file_id, product)
  console.print_json(data=response)


if __name__ == "__main__":
  cli()
