"""Client for reading the hosted menu table."""

import logging
from decimal import Decimal
from typing import Any

import httpx
from pydantic import ValidationError

from catering_inquiry_service.models.menu_models import MenuCategory, MenuItem

logger = logging.getLogger(__name__)

# Display sequence of the menu sections
CATEGORY_ORDER = {category: position for position, category in enumerate(MenuCategory)}


class MenuServiceClient:
    """HTTP client for fetching available menu items.

    The menu lives in a hosted Postgres table exposed over a REST interface;
    the client authenticates with the project's anonymous API key.
    """

    def __init__(self, base_url: str, api_key: str) -> None:
        """Initialize the menu client.

        Args:
            base_url: Base URL of the hosted backend (e.g., "https://project.example.co")
            api_key: Anonymous API key for read access
        """
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key

    def _headers(self) -> dict[str, str]:
        return {"apikey": self.api_key, "Authorization": f"Bearer {self.api_key}"}

    async def _fetch(self, params: dict[str, str]) -> list[MenuItem] | None:
        url = f"{self.base_url}/rest/v1/menu_items"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(url, params=params, headers=self._headers())
                response.raise_for_status()
                payload: Any = response.json()

        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.error(f"Failed to fetch menu items: {e}")
            return None

        except ValueError as e:
            # Maintenance pages and proxy errors can arrive with a 200 status
            logger.error(f"Menu service returned a non-JSON body: {e}")
            return None

        if not isinstance(payload, list):
            logger.error(f"Menu service returned {type(payload).__name__}, expected a list of rows")
            return None

        rows: list[dict[str, Any]] = payload

        items = []
        for row in rows:
            if not isinstance(row, dict):
                logger.warning(f"Skipping menu row that is not an object: {row!r}")
                continue
            try:
                # Numeric columns arrive as JSON floats
                row["price"] = Decimal(str(row["price"]))
                items.append(MenuItem(**row))
            except (KeyError, ArithmeticError, ValidationError) as e:
                logger.warning(f"Skipping malformed menu item {row.get('id')}: {e}")

        return items

    async def list_available_menu_items(self) -> list[MenuItem] | None:
        """Fetch every available menu item, ordered by category.

        Returns:
            List of MenuItem objects, empty list if none are available, or None on failure
        """
        items = await self._fetch(
            {"select": "*", "available": "eq.true", "order": "category.asc"}
        )
        if items is None:
            return None

        available = [item for item in items if item.available]
        return sorted(available, key=lambda item: CATEGORY_ORDER[item.category])

    async def get_menu_item(self, item_id: str) -> MenuItem | None:
        """Fetch a single available menu item.

        Args:
            item_id: The menu item identifier

        Returns:
            The MenuItem if it exists and is available, None otherwise
        """
        items = await self._fetch({"select": "*", "id": f"eq.{item_id}", "available": "eq.true"})
        if not items:
            return None

        return items[0] if items[0].available else None
