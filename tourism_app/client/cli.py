# tourism_app/client/cli.py
# Использование: flask --app tourism_app client find-attractions --province ontario --city toronto

import functools

import click
from flask import current_app
from flask.cli import AppGroup, with_appcontext

from tourism_app.client.api_client import (
    ClientError, TourismClient, EXPERIENCE_LABELS
)
from tourism_app.client.table import render_table

client_cli = AppGroup('client', help="Запросы к API достопримечательностей.")


def _client():
    return TourismClient(current_app.config['API_BASE_URL'])


def reports_errors(command):
    """Ошибки клиента выводятся как сообщение CLI с ненулевым кодом выхода."""
    @functools.wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except (ClientError, ValueError) as e:
            raise click.ClickException(str(e))
    return wrapper


@client_cli.command('check')
@reports_errors
def check():
    click.echo(_client().check_db_connection())


@client_cli.command('find-attractions')
@click.option('--province', required=True)
@click.option('--city', required=True)
@reports_errors
def find_attractions(province, city):
    rows = _client().get_attractions(province, city)
    click.echo(render_table(['Attraction Name', 'Attraction ID'], [[name, id_] for id_, name in rows]))


@client_cli.command('add-attraction')
@click.option('--name', required=True)
@click.option('--description', default='')
@click.option('--open', 'open_hour', default='')
@click.option('--close', 'close_hour', default='')
@click.option('--lat', type=float, required=True)
@click.option('--long', 'long_', type=float, required=True)
@click.option('--category', default='')
@click.option('--province', required=True)
@click.option('--city', required=True)
@reports_errors
def add_attraction(name, description, open_hour, close_hour, lat, long_, category, province, city):
    added = _client().add_attraction(
        name, description, open_hour, close_hour, lat, long_, category, province, city
    )
    if not added:
        raise click.ClickException("failed to insert data")
    click.echo("New attraction added!")


@client_cli.command('count-attractions')
@click.option('--province', required=True)
@click.option('--city', required=True)
@reports_errors
def count_attractions(province, city):
    count = _client().count_attractions(province, city)
    click.echo(f"There are {count} attractions in {city}, {province}.")


@client_cli.command('count-having')
@click.option('--min-count', type=int, default=2, show_default=True)
@click.option('--province')
@click.option('--city')
@reports_errors
def count_having(min_count, province, city):
    rows = _client().count_attractions_having(min_count, province, city)
    click.echo(render_table(['Province', 'City', 'Attractions'], rows))


@client_cli.command('avg-per-province')
@reports_errors
def avg_per_province():
    rows = _client().avg_attractions_per_province()
    click.echo(render_table(['Province', 'Average per City'], [[p, f"{avg:.2f}"] for p, avg in rows]))


@client_cli.command('update-attraction')
@click.argument('attraction_id', type=int)
@click.option('--name')
@click.option('--lat', type=float)
@click.option('--long', 'long_', type=float)
@click.option('--open', 'open_hour')
@click.option('--close', 'close_hour')
@click.option('--description')
@click.option('--category')
@reports_errors
def update_attraction(attraction_id, name, lat, long_, open_hour, close_hour, description, category):
    _client().update_attraction(
        attraction_id, name=name, lat=lat, long=long_, open=open_hour,
        close=close_hour, description=description, category=category
    )
    click.echo("Attraction info successfully updated")


@client_cli.command('delete-attraction')
@click.argument('attraction_id', type=int)
@reports_errors
def delete_attraction(attraction_id):
    _client().delete_attraction(attraction_id)
    click.echo("Attraction deleted!")


@client_cli.command('filter-experiences')
@click.option('--price', type=float, required=True)
@click.option('--comparison', type=click.Choice(['<', '<=', '=', '>=', '>']), default='<=', show_default=True)
@reports_errors
def filter_experiences(price, comparison):
    rows = _client().filter_experiences(price, comparison)
    click.echo(render_table(['Experience ID', 'Experience Name', 'Price'], rows))


@client_cli.command('project-experiences')
@click.argument('attraction_id', type=int)
@click.option('--column', 'columns', multiple=True, type=click.Choice(list(EXPERIENCE_LABELS)))
@reports_errors
def project_experiences(attraction_id, columns):
    rows = _client().project_experiences(attraction_id, columns)
    click.echo(render_table([EXPERIENCE_LABELS[c] for c in columns], rows))


@client_cli.command('find-completionists')
@click.argument('attraction_id', type=int)
@reports_errors
def find_completionists(attraction_id):
    rows = _client().find_completionists(attraction_id)
    click.echo(render_table(['User ID', 'Username'], rows))


@client_cli.command('repopulate')
@reports_errors
def repopulate():
    rows = _client().repopulate()
    click.echo(render_table(['Attraction ID', 'Attraction Name'], rows))
    click.echo("Data repopulated!")


@click.command('seed')
@click.option('--seed-dir', default=None, help="Каталог с CSV (по умолчанию SEED_DATA_DIR)")
@with_appcontext
def seed_command(seed_dir):
    """Загрузить начальные данные прямо в БД, минуя HTTP."""
    from tourism_app.services.load_data import load_seed_data

    counts = load_seed_data(seed_dir or current_app.config['SEED_DATA_DIR'])
    for table, count in counts.items():
        click.echo(f"{table}: {count}")
