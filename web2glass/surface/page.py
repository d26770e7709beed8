"""Glasses page layout elements and container serialization"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Union


@dataclass(frozen=True)
class TextElement:
    """Positioned text block on the glasses page"""
    element_id: int
    name: str
    content: str
    x: int
    y: int
    width: int
    height: int
    event_capture: bool = False

    def container_build(self) -> Dict[str, Any]:
        """
        Build bridge text container description

        Returns:
            Container dictionary in the bridge's field naming.
        """
        return {
            "containerID": self.element_id,
            "containerName": self.name,
            "content": self.content,
            "xPosition": self.x,
            "yPosition": self.y,
            "width": self.width,
            "height": self.height,
            "isEventCapture": int(self.event_capture),
        }


@dataclass(frozen=True)
class ListElement:
    """Selectable list on the glasses page"""
    element_id: int
    name: str
    items: tuple[str, ...]
    selected_index: int
    x: int
    y: int
    width: int
    height: int
    item_width: int
    select_border: bool = True
    event_capture: bool = True

    def container_build(self) -> Dict[str, Any]:
        """
        Build bridge list container description

        Returns:
            Container dictionary in the bridge's field naming.
        """
        return {
            "containerID": self.element_id,
            "containerName": self.name,
            "itemContainer": {
                "itemCount": len(self.items),
                "itemWidth": self.item_width,
                "isItemSelectBorderEn": int(self.select_border),
                "itemName": list(self.items),
            },
            "isEventCapture": int(self.event_capture),
            "xPosition": self.x,
            "yPosition": self.y,
            "width": self.width,
            "height": self.height,
        }


PageElement = Union[TextElement, ListElement]


@dataclass(frozen=True)
class PageLayout:
    """Complete glasses page: text blocks plus selectable lists"""
    texts: tuple[TextElement, ...]
    lists: tuple[ListElement, ...] = ()

    def elements(self) -> tuple[PageElement, ...]:
        """All elements, texts first"""
        return (*self.texts, *self.lists)

    def element_get(self, name: str) -> Optional[PageElement]:
        """Find element by container name"""
        for element in self.elements():
            if element.name == name:
                return element
        return None

    def selectedItem_get(self) -> int:
        """Selected row of the first list, 0 when there is none"""
        if not self.lists:
            return 0
        return self.lists[0].selected_index

    def changedElements_get(self, previous: Optional["PageLayout"]) -> list[PageElement]:
        """
        Elements whose content differs from a previously submitted layout

        Args:
            previous: Last layout sent to the glasses, or None.

        Returns:
            Changed or new elements, in layout order.
        """
        if previous is None:
            return list(self.elements())
        return [
            element
            for element in self.elements()
            if previous.element_get(element.name) != element
        ]

    def container_build(self) -> Dict[str, Any]:
        """
        Build full create/rebuild request body

        Returns:
            Page container dictionary in the bridge's field naming.
        """
        return {
            "containerTotalNum": len(self.elements()),
            "textObject": [text.container_build() for text in self.texts],
            "listObject": [item_list.container_build() for item_list in self.lists],
            "currentSelectedItem": self.selectedItem_get(),
        }
