"""Graph commands: replay, active, neighborhood, trend."""
import sys
import time

import click

from .output import error_box, print_json, success_box, table
from .replay import ReplayError, parse_instant, replay


def _load(file: str):
    try:
        return replay(file)
    except ReplayError as e:
        error_box("Replay: FAILED", str(e), "fix the line and rerun")
        sys.exit(1)


@click.group()
def graph():
    """Temporal social graph operations."""
    pass


@graph.command('replay')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
def replay_cmd(file: str):
    """Apply a JSONL operation log and summarize it."""
    t0 = time.perf_counter()
    try:
        result = _load(file)
        registry = result.registry
        elapsed_ms = int((time.perf_counter() - t0) * 1000)

        rows = [
            ("File", file),
            ("Operations", str(result.applied)),
            ("Identities", str(registry.node_count())),
            ("Links", str(registry.edge_count())),
        ]
        rows += [(status, str(count)) for status, count in sorted(result.statuses.items())]
        rows.append(("Duration", f"{elapsed_ms}ms"))

        success_box("Graph Replay: SUCCESS", rows, f"linkedwith graph neighborhood {file} <id>")

    except Exception as e:
        error_box("Graph Replay: ERROR", str(e))
        sys.exit(2)


@graph.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.argument('first_id')
@click.argument('second_id')
@click.option('--at', 'at', required=True, help='ISO-8601 instant to check')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON')
def active(file: str, first_id: str, second_id: str, at: str, as_json: bool):
    """Check whether a link was active at an instant."""
    try:
        registry = _load(file).registry
        when = parse_instant(at)
        is_active = registry.is_edge_active([first_id, second_id], when)

        if as_json:
            print_json({"ids": sorted([first_id, second_id]), "at": when, "active": is_active})
        else:
            success_box("Link Status", [
                ("Link", f"{first_id} <-> {second_id}"),
                ("At", str(when)),
                ("Active", "yes" if is_active else "no"),
            ], f"linkedwith graph neighborhood {file} {first_id} --at {at}")

    except ReplayError as e:
        error_box("Link Status: FAILED", str(e))
        sys.exit(1)
    except Exception as e:
        error_box("Link Status: ERROR", str(e))
        sys.exit(2)


@graph.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.argument('origin_id')
@click.option('--at', 'at', required=True, help='ISO-8601 instant to evaluate links at')
@click.option('--max-distance', type=int, default=None, help='Largest distance to include')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON')
def neighborhood(file: str, origin_id: str, at: str, max_distance: int | None, as_json: bool):
    """List identities reachable from ORIGIN_ID through active links."""
    try:
        registry = _load(file).registry
        outcome = registry.neighborhood(origin_id, parse_instant(at), max_distance)

        if not outcome.ok:
            error_box("Neighborhood: FAILED", outcome.status.name)
            sys.exit(1)

        friends = sorted(outcome.value, key=lambda f: (f.distance, f.id))
        if as_json:
            print_json([{"id": f.id, "distance": f.distance} for f in friends])
        else:
            table(["ID", "Distance"], [[f.id, str(f.distance)] for f in friends])
            click.echo(f"Next: linkedwith graph trend {file} {origin_id}")

    except ReplayError as e:
        error_box("Neighborhood: FAILED", str(e))
        sys.exit(1)
    except Exception as e:
        error_box("Neighborhood: ERROR", str(e))
        sys.exit(2)


@graph.command()
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.argument('origin_id')
@click.option('--now', 'now', default=None, help='ISO-8601 instant treated as now')
@click.option('--json', 'as_json', is_flag=True, help='Print JSON')
def trend(file: str, origin_id: str, now: str | None, as_json: bool):
    """Show how the neighborhood of ORIGIN_ID grew and shrank."""
    try:
        registry = _load(file).registry
        outcome = registry.neighborhood_trend(origin_id, parse_instant(now) if now else None)

        if not outcome.ok:
            error_box("Trend: FAILED", outcome.status.name)
            sys.exit(1)

        if as_json:
            print_json([{"at": date, "size": size} for date, size in outcome.value.items()])
        else:
            table(["Date", "Size"], [[str(date), str(size)] for date, size in outcome.value.items()])

    except ReplayError as e:
        error_box("Trend: FAILED", str(e))
        sys.exit(1)
    except Exception as e:
        error_box("Trend: ERROR", str(e))
        sys.exit(2)
