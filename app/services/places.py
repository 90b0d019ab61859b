"""Places autocomplete integration.

The map widget runs in the browser; all the server sees is the selected
place's formatted address. ``PlacesPicker`` is the seam between that callback
and whatever consumes it (the report draft).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from app.services.page_state import PageState


@dataclass(frozen=True)
class Address:
    formatted_address: str


AddressHandler = Callable[[Address], None]


class PlacesPicker:
    def __init__(self):
        self._handlers: list[AddressHandler] = []

    def on_select(self, handler: AddressHandler) -> None:
        self._handlers.append(handler)

    def select(self, formatted_address: str | None) -> Address:
        """Deliver a widget selection to every registered handler."""
        address = Address(formatted_address=formatted_address or "")
        for handler in self._handlers:
            handler(address)
        return address


def picker_for(page: PageState) -> PlacesPicker:
    """A picker whose selections land in the page's draft location."""
    picker = PlacesPicker()
    picker.on_select(lambda address: page.set_location(address.formatted_address))
    return picker
