"""filedrop CLI tool."""

import asyncio
import logging
import sys

import click

from filedrop.client.form import FormState, SelectedFile, UploadForm
from filedrop.client.http import DEFAULT_API_URL, UploadClient
from filedrop.core.client import S3ClientManager, check_bucket
from filedrop.core.exceptions import FileDropError
from filedrop.core.settings import FileDropSettings


def _load_settings(**overrides) -> FileDropSettings:
    values = {k: v for k, v in overrides.items() if v is not None}
    settings = FileDropSettings(**values)
    try:
        settings.validate_required()
    except FileDropError as e:
        raise click.ClickException(str(e))
    return settings


def _build_client(api_url: str) -> UploadClient:
    return UploadClient(api_url)


@click.group()
def cli():
    """filedrop CLI - upload files to S3 and share their URLs."""
    pass


@cli.command()
@click.option("--host", default=None, help="Interface to bind (default: HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="Port to listen on (default: PORT or 5000)")
@click.option("--bucket", default=None, help="S3 bucket name (default: AWS_BUCKET_NAME)")
@click.option("--endpoint", default=None, help="S3 endpoint URL (for LocalStack)")
def serve(host, port, bucket, endpoint):
    """Run the upload API."""
    import uvicorn

    from filedrop.fastapi.app import create_filedrop_app

    settings = _load_settings(
        host=host,
        port=port,
        aws_bucket_name=bucket,
        aws_url=endpoint,
    )
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_filedrop_app(settings=settings)
    click.echo(f"🚀 Server starting on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


@cli.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--api-url",
    envvar="FILEDROP_API_URL",
    default=DEFAULT_API_URL,
    show_default=True,
    help="Base URL of the filedrop API",
)
@click.option("--open", "open_url", is_flag=True, help="Open the uploaded file in a browser")
def upload(path, api_url, open_url):
    """Upload a file and print its public URL."""
    with _build_client(api_url) as client:
        form = UploadForm(client)
        form.select(SelectedFile.from_path(path))
        state = form.upload()

    if state is FormState.FAILED:
        click.echo(f"❌ {form.error}", err=True)
        sys.exit(1)

    click.echo("✅ File uploaded!")
    click.echo(form.file_url)

    if open_url:
        form.download()


@cli.command("check-bucket")
@click.option("--bucket", default=None, help="S3 bucket name (default: AWS_BUCKET_NAME)")
@click.option("--endpoint", default=None, help="S3 endpoint URL (for LocalStack)")
def check_bucket_cmd(bucket, endpoint):
    """Check that the upload bucket exists and is reachable."""
    settings = _load_settings(aws_bucket_name=bucket, aws_url=endpoint)

    async def _check():
        manager = S3ClientManager(settings)
        async with manager.get_async_client() as s3_client:
            await check_bucket(s3_client, settings.aws_bucket_name)

    try:
        asyncio.run(_check())
    except FileDropError as e:
        click.echo(f"❌ {e}", err=True)
        sys.exit(1)

    click.echo(f"✅ Bucket '{settings.aws_bucket_name}' is reachable")


@cli.command()
def version():
    """Show filedrop version."""
    from filedrop import __version__

    click.echo(f"filedrop version: {__version__}")


if __name__ == "__main__":
    cli()
