"""Menu catalog"""

from storefront.menu.catalog import MenuItem, MenuCatalog, MENU, CATEGORY_ORDER, catalog

__all__ = ["MenuItem", "MenuCatalog", "MENU", "CATEGORY_ORDER", "catalog"]
