"""nmsdash CLI - query the monitoring backend through the dashboard store."""

import asyncio
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Awaitable, Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nmsdash import __version__
from nmsdash.config import DashboardSettings, load_settings
from nmsdash.core.adapters import AiohttpRestClient, RestMonitoringApiAdapter
from nmsdash.core.domain.envelopes import PageEnvelope
from nmsdash.core.domain.models import NmsDashError
from nmsdash.core.domain.query import AlarmModificationQueryVariable, QueryParameters
from nmsdash.logging_config import configure_logging
from nmsdash.store import Store, create_store

console = Console()


@asynccontextmanager
async def _open_store(settings: DashboardSettings) -> AsyncIterator[Store]:
    client = AiohttpRestClient(settings.rest_client_config())
    try:
        yield create_store(RestMonitoringApiAdapter(client))
    finally:
        await client.close()


def _run(coro: Awaitable[Any]) -> Any:
    try:
        return asyncio.run(coro)  # type: ignore[arg-type]
    except NmsDashError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)


def _query(
    settings: DashboardSettings,
    limit: Optional[int],
    offset: int,
    order_by: Optional[str],
    order: Optional[str],
    search: Optional[str],
) -> QueryParameters:
    return QueryParameters(
        limit=limit if limit is not None else settings.default_page_size,
        offset=offset,
        order_by=order_by,
        order=order if order_by else None,
        search=search,
    )


def _print_page_footer(page: PageEnvelope) -> None:
    if page.count == 0:
        console.print("[yellow]No results[/yellow]")
        return
    first = page.offset + 1
    last = page.offset + page.count
    console.print(f"Showing {first}-{last} of {page.total_count}")


def _query_options(func: Any) -> Any:
    func = click.option("--filter", "-s", "search", default=None, help="Filter expression (_s)")(func)
    func = click.option(
        "--order", type=click.Choice(["asc", "desc"]), default="asc", help="Sort direction"
    )(func)
    func = click.option("--order-by", default=None, help="Field to sort by")(func)
    func = click.option("--offset", default=0, type=click.IntRange(min=0), help="Page offset")(func)
    func = click.option("--limit", "-l", default=None, type=click.IntRange(min=0), help="Page size")(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="nmsdash")
@click.option("--config", "-c", "config_path", default=None, help="Settings file (.yaml/.json)")
@click.option("--base-url", default=None, help="Backend base URL")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], base_url: Optional[str], verbose: bool) -> None:
    """Network monitoring dashboard client."""
    try:
        settings = load_settings(config_path)
    except (NmsDashError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    if base_url:
        settings = settings.model_copy(update={"base_url": base_url})

    configure_logging("DEBUG" if verbose else settings.log_level, settings.log_json)
    ctx.obj = settings


@main.command()
@_query_options
@click.pass_obj
def nodes(
    settings: DashboardSettings,
    limit: Optional[int],
    offset: int,
    order_by: Optional[str],
    order: str,
    search: Optional[str],
) -> None:
    """List nodes."""
    query = _query(settings, limit, offset, order_by, order, search)

    async def run() -> Any:
        async with _open_store(settings) as store:
            return await store.dispatch("nodes/get_nodes", query)

    page = _run(run())

    table = Table(title="Nodes")
    table.add_column("ID", style="cyan")
    table.add_column("Label", style="green")
    table.add_column("Location")
    table.add_column("Foreign Source")
    table.add_column("Categories")

    for node in page.nodes:
        table.add_row(
            node.id,
            node.label or "",
            node.location or "",
            node.foreign_source or "",
            ", ".join(c.name or str(c.id) for c in node.categories),
        )

    console.print(table)
    _print_page_footer(page)


@main.command()
@_query_options
@click.pass_obj
def events(
    settings: DashboardSettings,
    limit: Optional[int],
    offset: int,
    order_by: Optional[str],
    order: str,
    search: Optional[str],
) -> None:
    """List events."""
    query = _query(settings, limit, offset, order_by, order, search)

    async def run() -> Any:
        async with _open_store(settings) as store:
            return await store.dispatch("events/get_events", query)

    page = _run(run())

    table = Table(title="Events")
    table.add_column("ID", style="cyan")
    table.add_column("Severity")
    table.add_column("Node")
    table.add_column("UEI")
    table.add_column("Message", style="white")

    for event in page.events:
        table.add_row(
            str(event.id),
            event.severity or "",
            event.node_label or str(event.node_id),
            event.uei or "",
            event.log_message or "",
        )

    console.print(table)
    _print_page_footer(page)


@main.command()
@_query_options
@click.pass_obj
def services(
    settings: DashboardSettings,
    limit: Optional[int],
    offset: int,
    order_by: Optional[str],
    order: str,
    search: Optional[str],
) -> None:
    """List monitored interface services."""
    query = _query(settings, limit, offset, order_by, order, search)

    async def run() -> Any:
        async with _open_store(settings) as store:
            return await store.dispatch("interface-services/get_if_services", query)

    page = _run(run())

    table = Table(title="Monitored Services")
    table.add_column("ID", style="cyan")
    table.add_column("Node")
    table.add_column("IP Address")
    table.add_column("Service")
    table.add_column("Status")

    for service in page.services:
        status = "[red]down[/red]" if service.is_down else "[green]up[/green]"
        table.add_row(
            service.id,
            service.node or "",
            service.ip_address or "",
            service.service_name or "",
            status,
        )

    console.print(table)
    _print_page_footer(page)


@main.command()
@click.argument("term")
@click.pass_obj
def search(settings: DashboardSettings, term: str) -> None:
    """Search nodes, services and other backend resources."""

    async def run() -> Any:
        async with _open_store(settings) as store:
            return await store.dispatch("search/search", term)

    groups = _run(run())

    if not groups:
        console.print("[yellow]No results[/yellow]")
        return

    for group in groups:
        table = Table(title=group.label or group.context.name)
        table.add_column("Label", style="green")
        table.add_column("Identifier", style="cyan")
        table.add_column("URL")
        for result in group.results:
            table.add_row(result.label or "", result.identifier, result.url or "")
        console.print(table)
        if group.more:
            console.print("  [dim]more results available[/dim]")


@main.group()
def alarm() -> None:
    """Alarm actions."""
    pass


def _modify_alarm(settings: DashboardSettings, variable: AlarmModificationQueryVariable) -> None:
    async def run() -> None:
        async with _open_store(settings) as store:
            if store.api is None:
                raise click.ClickException("No monitoring API configured")
            await store.api.modify_alarm(variable)

    _run(run())
    action_name = next(iter(variable.query_parameters.to_params()))
    console.print(f"[green]Alarm {variable.path_variable}: {action_name} applied[/green]")


@alarm.command("ack")
@click.argument("alarm_id")
@click.pass_obj
def ack_alarm(settings: DashboardSettings, alarm_id: str) -> None:
    """Acknowledge an alarm."""
    _modify_alarm(settings, AlarmModificationQueryVariable.acknowledge(alarm_id))


@alarm.command("unack")
@click.argument("alarm_id")
@click.pass_obj
def unack_alarm(settings: DashboardSettings, alarm_id: str) -> None:
    """Remove an alarm acknowledgement."""
    _modify_alarm(settings, AlarmModificationQueryVariable.unacknowledge(alarm_id))


@alarm.command("clear")
@click.argument("alarm_id")
@click.pass_obj
def clear_alarm(settings: DashboardSettings, alarm_id: str) -> None:
    """Clear an alarm."""
    _modify_alarm(settings, AlarmModificationQueryVariable.clear(alarm_id))


@alarm.command("escalate")
@click.argument("alarm_id")
@click.pass_obj
def escalate_alarm(settings: DashboardSettings, alarm_id: str) -> None:
    """Escalate an alarm."""
    _modify_alarm(settings, AlarmModificationQueryVariable.escalate(alarm_id))


@main.command()
@click.pass_obj
def info(settings: DashboardSettings) -> None:
    """Show client configuration."""
    table = Table(title="nmsdash")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    table.add_row("Version", __version__)
    table.add_row("Python", sys.version.split()[0])
    table.add_row("Backend", settings.base_url)
    table.add_row("User", settings.username or "-")
    table.add_row("Page size", str(settings.default_page_size))
    table.add_row("Verify SSL", "yes" if settings.verify_ssl else "no")
    table.add_row("State modules", ", ".join(create_store().keys))

    console.print(table)


if __name__ == "__main__":
    main()
