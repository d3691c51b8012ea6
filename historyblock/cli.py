"""Flask CLI commands for HistoryBlock.

Usage:
    flask --app run blacklist show
    flask --app run blacklist add '^https://evil\\.com'
    flask --app run blacklist import 'a,b,c'
    flask --app run blacklist mode whitelist
    flask --app run blacklist check https://evil.com/x
"""

import click
from flask.cli import AppGroup

from historyblock.core.blocking.history_block import get_history_block
from historyblock.models.blacklist import ListMode

blacklist_cli = AppGroup('blacklist', help='Manage the history blacklist.')


@blacklist_cli.command('show')
def show_command():
    """Print the list mode and patterns."""
    state = get_history_block().store.load()
    click.echo(f'mode: {state.mode.value}')
    for pattern in state.patterns:
        click.echo(pattern)


@blacklist_cli.command('add')
@click.argument('pattern')
def add_command(pattern):
    """Add a pattern."""
    if get_history_block().store.add(pattern):
        click.echo(f'added: {pattern.strip()}')
    else:
        click.echo('unchanged (empty or already present)')


@blacklist_cli.command('remove')
@click.argument('pattern')
def remove_command(pattern):
    """Remove a pattern."""
    if get_history_block().store.remove(pattern):
        click.echo(f'removed: {pattern.strip()}')
    else:
        click.echo('unchanged (not present)')


@blacklist_cli.command('import')
@click.argument('patterns')
def import_command(patterns):
    """Import comma-separated patterns."""
    added = get_history_block().store.import_many(patterns)
    click.echo(f'imported: {added}')


@blacklist_cli.command('export')
def export_command():
    """Print the patterns comma-separated."""
    click.echo(get_history_block().store.export())


@blacklist_cli.command('clear')
@click.confirmation_option(prompt='Clear every pattern?')
def clear_command():
    """Remove every pattern, keeping the list mode."""
    get_history_block().store.clear()
    click.echo('cleared')


@blacklist_cli.command('mode')
@click.argument('list_mode', type=click.Choice([m.value for m in ListMode]))
def mode_command(list_mode):
    """Switch between blacklist and whitelist mode."""
    get_history_block().store.set_mode(list_mode)
    click.echo(f'mode: {list_mode}')


@blacklist_cli.command('check')
@click.argument('url')
def check_command(url):
    """Show the decision for a URL without purging it."""
    history_block = get_history_block()
    decision = history_block.visit_filter.decide(url, history_block.store.load())
    verdict = 'purge' if decision.purge else 'retain'
    click.echo(f'{verdict} (mode={decision.mode.value}, pattern={decision.matched_pattern})')
