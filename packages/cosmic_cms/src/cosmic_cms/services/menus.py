"""
Menus and their embedded items.
"""

import logging

from cosmic_db import DoesNotExistError
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Menu, MenuItem
from ..schemas import MenuItemCreate, MenuItemUpdate

logger = logging.getLogger(__name__)


async def _reload(db: AsyncSession, menu: Menu) -> Menu:
    await db.refresh(menu, attribute_names=["items"])
    return menu


async def _get_item(db: AsyncSession, menu: Menu, item_id: int) -> MenuItem:
    item = await MenuItem.objects.get_or_none(db, id=item_id, menu_id=menu.id)
    if item is None:
        msg = "Menu item not found"
        raise DoesNotExistError(msg, model_name="MenuItem")
    return item


async def add_item(db: AsyncSession, menu_id: int, payload: MenuItemCreate) -> Menu:
    """
    Append an item; without an explicit order it goes after the last one.
    """
    menu = await Menu.objects.get_by_pk(db, menu_id)
    values = payload.model_dump()
    if values["order"] is None:
        values["order"] = len(menu.items)
    await MenuItem.objects.create(db, menu_id=menu.id, **values)
    logger.info("Added item to menu %s", menu.id)
    return await _reload(db, menu)


async def update_item(
    db: AsyncSession, menu_id: int, item_id: int, payload: MenuItemUpdate
) -> Menu:
    menu = await Menu.objects.get_by_pk(db, menu_id)
    item = await _get_item(db, menu, item_id)
    await MenuItem.objects.update(
        db, item.id, **payload.model_dump(exclude_unset=True)
    )
    return await _reload(db, menu)


async def delete_item(db: AsyncSession, menu_id: int, item_id: int) -> Menu:
    menu = await Menu.objects.get_by_pk(db, menu_id)
    item = await _get_item(db, menu, item_id)
    await MenuItem.objects.delete_by_pk(db, item.id)
    return await _reload(db, menu)


async def reorder_items(db: AsyncSession, menu_id: int, item_ids: list[int]) -> Menu:
    """
    Set each listed item's order to its position in ``item_ids``.

    Raises:
        DoesNotExistError: If an id does not belong to the menu.
    """
    menu = await Menu.objects.get_by_pk(db, menu_id)
    items = {item.id: item for item in menu.items}
    for position, item_id in enumerate(item_ids):
        if item_id not in items:
            msg = "Menu item not found"
            raise DoesNotExistError(msg, model_name="MenuItem")
        items[item_id].order = position
    await Menu.objects.save(db, menu)
    return await _reload(db, menu)
