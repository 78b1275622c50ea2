"""CLI entry point for Pancake Lab."""

from __future__ import annotations

import functools
from typing import Any, Callable

import click

from .api.facade import PancakeLab
from .api.views import OrderView
from .core.config import Settings, load_settings
from .core.enums import StoreBackend
from .core.errors import PancakeLabError
from .observability.logger import command_context, get_logger, setup_logging
from .service.coordinator import OrderCoordinator
from .storage.factory import build_store
from .storage.memory_store import InMemoryOrderStore

logger = get_logger(__name__)

_ACTIONS: dict[str, tuple[str, str]] = {
    # action -> (facade method, acting role)
    "complete": ("complete_order", "requester"),
    "cancel": ("cancel_order", "requester"),
    "prepare": ("start_preparing", "preparer"),
    "ready": ("mark_ready_for_delivery", "preparer"),
    "deliver": ("deliver_order", "deliverer"),
}


def _settings(ctx: click.Context) -> Settings:
    """Settings for one-shot commands; a memory backend is swapped for the file journal."""
    obj = ctx.ensure_object(dict)
    settings = load_settings(obj.get("config"))
    store = settings.store
    if store.backend == StoreBackend.MEMORY:
        store = store.model_copy(update={"backend": StoreBackend.FILE})
    if obj.get("store_path"):
        store = store.model_copy(update={"path": obj["store_path"]})
    return settings.model_copy(update={"store": store})


def _open_lab(ctx: click.Context) -> PancakeLab:
    settings = _settings(ctx)
    setup_logging(settings.observability)
    store = build_store(settings)
    logger.debug(
        "store_opened",
        backend=settings.store.backend.value,
        lock_strategy=settings.lock_strategy.value,
    )
    return PancakeLab(OrderCoordinator.from_settings(settings, store))


def _domain_errors(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Report domain failures as click errors (exit code 1)."""

    @functools.wraps(fn)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return fn(*args, **kwargs)
        except PancakeLabError as exc:
            raise click.ClickException(f"{type(exc).__name__}: {exc}") from exc

    return wrapper


def _echo_order(view: OrderView) -> None:
    click.echo(f"Order {view.id}")
    click.echo(f"  Address: {view.delivery_address}")
    click.echo(f"  Status:  {view.status}")
    click.echo(f"  Pancakes: {view.pancake_count}")
    for p in view.pancakes:
        click.echo(f"    - [{p.id}] {p.description} (valid: {p.is_valid})")


@click.group()
@click.option("--config", default=None, help="TOML config file path")
@click.option("--store-path", default=None, help="Order journal path override")
@click.pass_context
def main(ctx: click.Context, config: str | None, store_path: str | None) -> None:
    """Pancake Lab order coordination."""
    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["store_path"] = store_path


@main.command()
@click.pass_context
@_domain_errors
def demo(ctx: click.Context) -> None:
    """Run the full order lifecycle against an in-memory store."""
    settings = load_settings(ctx.ensure_object(dict).get("config"))
    setup_logging(settings.observability)
    lab = PancakeLab(OrderCoordinator(InMemoryOrderStore()))

    with command_context("demo"):
        order_id = lab.create_order("BuildingA", "101")
        click.echo(f"1. Order created: {order_id}")

        sweet = lab.add_pancake(order_id)
        savory = lab.add_pancake(order_id)
        click.echo(f"2. Pancakes added: {sweet}, {savory}")

        for name, category in (
            ("Flour", "flour"),
            ("Egg", "egg"),
            ("Sugar", "sugar"),
            ("Chocolate", "sweet_topping"),
        ):
            lab.add_ingredient(order_id, sweet, name, category)
        for name, category in (
            ("Flour", "flour"),
            ("Egg", "egg"),
            ("Salt", "salt"),
            ("Cheese", "savory_topping"),
        ):
            lab.add_ingredient(order_id, savory, name, category)
        click.echo("3. Ingredients added")

        try:
            lab.add_ingredient(order_id, sweet, "Mustard", "condiment")
        except PancakeLabError as exc:
            click.echo(f"   Rejected as expected: {exc}")

        view = lab.get_order(order_id)
        if view is not None:
            _echo_order(view)

        lab.complete_order(order_id)
        click.echo("4. Order completed")
        lab.start_preparing(order_id)
        click.echo("5. Preparing")
        lab.mark_ready_for_delivery(order_id)
        click.echo("6. Ready for delivery")
        lab.deliver_order(order_id)
        click.echo("7. Delivered")

        click.echo(f"Active orders remaining: {len(lab.get_active_orders())}")


@main.command("create-order")
@click.argument("building")
@click.argument("room")
@click.pass_context
@_domain_errors
def create_order(ctx: click.Context, building: str, room: str) -> None:
    """Create an order for BUILDING / ROOM and print its id."""
    lab = _open_lab(ctx)
    with command_context("create-order", actor="requester"):
        click.echo(lab.create_order(building, room))


@main.command("add-pancake")
@click.argument("order_id")
@click.pass_context
@_domain_errors
def add_pancake(ctx: click.Context, order_id: str) -> None:
    """Add an empty pancake to ORDER_ID and print its id."""
    lab = _open_lab(ctx)
    with command_context("add-pancake", actor="requester", order_id=order_id):
        click.echo(lab.add_pancake(order_id))


@main.command("remove-pancake")
@click.argument("order_id")
@click.argument("pancake_id")
@click.pass_context
@_domain_errors
def remove_pancake(ctx: click.Context, order_id: str, pancake_id: str) -> None:
    """Remove PANCAKE_ID from ORDER_ID."""
    lab = _open_lab(ctx)
    with command_context("remove-pancake", actor="requester", order_id=order_id):
        lab.remove_pancake(order_id, pancake_id)


@main.command("add-ingredient")
@click.argument("order_id")
@click.argument("pancake_id")
@click.argument("name")
@click.argument("category")
@click.pass_context
@_domain_errors
def add_ingredient(
    ctx: click.Context, order_id: str, pancake_id: str, name: str, category: str
) -> None:
    """Add ingredient NAME of CATEGORY to a pancake."""
    lab = _open_lab(ctx)
    with command_context("add-ingredient", actor="requester", order_id=order_id):
        lab.add_ingredient(order_id, pancake_id, name, category)


@main.command("remove-ingredient")
@click.argument("order_id")
@click.argument("pancake_id")
@click.argument("name")
@click.pass_context
@_domain_errors
def remove_ingredient(
    ctx: click.Context, order_id: str, pancake_id: str, name: str
) -> None:
    """Remove ingredient NAME from a pancake."""
    lab = _open_lab(ctx)
    with command_context("remove-ingredient", actor="requester", order_id=order_id):
        lab.remove_ingredient(order_id, pancake_id, name)


@main.command()
@click.argument("order_id")
@click.argument("action", type=click.Choice(sorted(_ACTIONS)))
@click.pass_context
@_domain_errors
def advance(ctx: click.Context, order_id: str, action: str) -> None:
    """Move ORDER_ID along its lifecycle."""
    method, actor = _ACTIONS[action]
    lab = _open_lab(ctx)
    with command_context(f"advance:{action}", actor=actor, order_id=order_id):
        getattr(lab, method)(order_id)
        view = lab.get_order(order_id)
    if view is not None:
        click.echo(view.status)


@main.command()
@click.argument("order_id")
@click.option("--json", "as_json", is_flag=True, help="Print the raw JSON snapshot")
@click.pass_context
@_domain_errors
def show(ctx: click.Context, order_id: str, as_json: bool) -> None:
    """Show one order."""
    lab = _open_lab(ctx)
    view = lab.get_order(order_id)
    if view is None:
        raise click.ClickException(f"Order not found: {order_id}")
    if as_json:
        click.echo(view.model_dump_json(indent=2))
    else:
        _echo_order(view)


@main.command("list")
@click.option("--status", default=None, help="Only orders in this status")
@click.pass_context
@_domain_errors
def list_orders(ctx: click.Context, status: str | None) -> None:
    """List active orders, or orders in --status."""
    lab = _open_lab(ctx)
    views = lab.get_orders_by_status(status) if status else lab.get_active_orders()
    for view in sorted(views, key=lambda v: v.created_at):
        click.echo(
            f"{view.id}  {view.status:<18}  {view.delivery_address}  "
            f"({view.pancake_count} pancakes)"
        )


if __name__ == "__main__":
    main()
