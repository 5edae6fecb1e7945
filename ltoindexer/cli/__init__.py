"""
LTO Chain Indexer CLI Tool

This module provides the command-line interface of the indexer: running the
block monitor, serving the read API, and inspecting or resetting the
processing height checkpoint.
"""

import asyncio
import logging
import sys

import click

from ltoindexer.config.settings import get_settings
from ltoindexer.core.errors import IndexerError
from ltoindexer.core.secure_logging import setup_logging
from ltoindexer.indexer.dispatcher import TransactionDispatcher
from ltoindexer.indexer.monitor import BlockMonitor
from ltoindexer.node.client import NodeClient
from ltoindexer.storage import create_storage_service

logger = logging.getLogger(__name__)


async def _run_monitor(settings):
    storage = create_storage_service(settings)
    node = NodeClient(**settings.get_node_config())
    monitor = BlockMonitor(settings, node, storage, TransactionDispatcher.create(storage, settings))
    try:
        await monitor.start()
    finally:
        await node.close()
        await storage.close()


async def _with_storage(settings, action):
    storage = create_storage_service(settings)
    try:
        return await action(storage)
    finally:
        await storage.close()


@click.group()
@click.option('--log-level', default=None, help='Override LOG_LEVEL')
@click.pass_context
def lto_indexer(ctx, log_level):
    """LTO Chain Indexer CLI"""
    ctx.ensure_object(dict)
    settings = get_settings()
    setup_logging(log_level or settings.LOG_LEVEL, settings.LOG_FORMAT)

    errors = settings.validate_config()
    if errors:
        for error in errors:
            click.echo(f"Configuration error: {error}", err=True)
        ctx.exit(2)

    ctx.obj['settings'] = settings


@lto_indexer.command()
@click.pass_context
def monitor(ctx):
    """Follow the chain and index new blocks"""
    settings = ctx.obj['settings']
    try:
        asyncio.run(_run_monitor(settings))
    except KeyboardInterrupt:
        click.echo("Monitor stopped")
    except IndexerError as e:
        logger.error(f"Monitor stopped: {e}")
        sys.exit(1)


@lto_indexer.command()
@click.pass_context
def serve(ctx):
    """Serve the read-only API"""
    from ltoindexer.api.server import run_server
    run_server(ctx.obj['settings'])


@lto_indexer.group()
def height():
    """Inspect or reset the processing height"""
    pass


@height.command('show')
@click.pass_context
def show_height(ctx):
    """Show the last fully processed block height"""
    value = asyncio.run(_with_storage(ctx.obj['settings'], lambda s: s.get_processing_height()))
    click.echo("No processing height saved" if value is None else f"Processing height: {value}")


@height.command('set')
@click.argument('value', type=click.IntRange(min=0))
@click.pass_context
def set_height(ctx, value):
    """Set the processing height; the monitor resumes at VALUE + 1"""
    asyncio.run(_with_storage(ctx.obj['settings'], lambda s: s.save_processing_height(value)))
    click.echo(f"Processing height set to {value}")


@height.command('clear')
@click.pass_context
def clear_height(ctx):
    """Clear the processing height; the monitor restarts from NODE_STARTING_BLOCK"""
    asyncio.run(_with_storage(ctx.obj['settings'], lambda s: s.clear_processing_height()))
    click.echo("Processing height cleared")


if __name__ == '__main__':
    lto_indexer()
