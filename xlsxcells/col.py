"""Column definitions and a store that keeps their ranges disjoint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional

from .types import GENERAL_FORMAT, INT_FORMAT, STRING_FORMAT, CellType

COL_WIDTH = 9.5
EXCEL_2006_MAX_ROW_COUNT = 1048576
EXCEL_2006_MAX_ROW_INDEX = EXCEL_2006_MAX_ROW_COUNT - 1

_FORMAT_FOR_TYPE = {
    CellType.STRING: STRING_FORMAT,
    CellType.NUMERIC: INT_FORMAT,
    CellType.BOOL: GENERAL_FORMAT,
    CellType.INLINE: STRING_FORMAT,
    CellType.ERROR: GENERAL_FORMAT,
    # Date cells are not really supported; dates belong in numeric cells.
    CellType.DATE: GENERAL_FORMAT,
    CellType.STRING_FORMULA: STRING_FORMAT,
}


@dataclass
class Col:
    """Settings shared by the columns min..max (inclusive)."""

    min: int = 0
    max: int = 0
    hidden: Optional[bool] = None
    width: Optional[float] = None
    collapsed: Optional[bool] = None
    outline_level: Optional[int] = None
    best_fit: Optional[bool] = None
    custom_width: Optional[bool] = None
    phonetic: Optional[bool] = None
    num_fmt: str = ""
    parsed_num_fmt: Any = None
    style: Any = None
    out_xf_id: int = 0

    def set_width(self, width: float) -> None:
        """Set a custom width, in characters of the widest digit."""
        self.width = width
        self.custom_width = True

    def set_type(self, cell_type: CellType) -> None:
        """Choose the column's number format from a cell type."""
        fmt = _FORMAT_FOR_TYPE.get(cell_type)
        if fmt is not None:
            self.num_fmt = fmt

    def set_outline_level(self, outline_level: int) -> None:
        self.outline_level = outline_level

    def copy_to_range(self, min_col: int, max_col: int) -> "Col":
        """A copy of this Col covering a different range."""
        return Col(
            min=min_col,
            max=max_col,
            hidden=self.hidden,
            width=self.width,
            collapsed=self.collapsed,
            outline_level=self.outline_level,
            best_fit=self.best_fit,
            custom_width=self.custom_width,
            phonetic=self.phonetic,
            num_fmt=self.num_fmt,
            parsed_num_fmt=self.parsed_num_fmt,
            style=self.style,
        )


def new_col_for_range(min_col: int, max_col: int) -> Col:
    """A Col for the given range, with the bounds swapped if reversed."""
    if max_col < min_col:
        return Col(min=max_col, max=min_col)
    return Col(min=min_col, max=max_col)


@dataclass(eq=False)
class ColStoreNode:
    """A link in the ColStore's ordered chain."""

    col: Col
    prev: Optional["ColStoreNode"] = field(default=None, repr=False)
    next: Optional["ColStoreNode"] = field(default=None, repr=False)

    def find_node_for_col_num(self, num: int) -> Optional["ColStoreNode"]:
        """Search outward from this node for the node covering num."""
        node: Optional[ColStoreNode] = self
        while node is not None:
            col = node.col
            if col.min <= num <= col.max:
                return node
            if num < col.min:
                prev = node.prev
                if prev is None or prev.col.max < num:
                    return None
                node = prev
            else:
                nxt = node.next
                if nxt is None or nxt.col.min > num:
                    return None
                node = nxt
        return None


class ColStore:
    """Col definitions in order, trimmed and split so that none overlap."""

    def __init__(self) -> None:
        self.root: Optional[ColStoreNode] = None
        self.length = 0

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[Col]:
        node = self.root
        if node is None:
            return
        while node.prev is not None:
            node = node.prev
        while node is not None:
            yield node.col
            node = node.next

    def add(self, col: Col) -> ColStoreNode:
        """Add a Col, trimming or splitting any it overlaps."""
        new_node = ColStoreNode(col)
        if self.root is None:
            self.root = new_node
            self.length = 1
            return new_node
        self._make_way(self.root, new_node)
        return new_node

    def find_col_by_index(self, index: int) -> Optional[Col]:
        node = self.find_node_for_col_num(index)
        return node.col if node is not None else None

    def find_node_for_col_num(self, num: int) -> Optional[ColStoreNode]:
        if self.root is None:
            return None
        return self.root.find_node_for_col_num(num)

    def remove_node(self, node: ColStoreNode) -> None:
        """Unlink a node from the chain."""
        if node.prev is not None:
            node.prev.next = node.next
        if node.next is not None:
            node.next.prev = node.prev
        if self.root is node:
            if node.prev is not None:
                self.root = node.prev
            elif node.next is not None:
                self.root = node.next
            else:
                self.root = None
        node.next = None
        node.prev = None
        self.length -= 1

    def _add_node(
        self,
        prev: Optional[ColStoreNode],
        this: ColStoreNode,
        nxt: Optional[ColStoreNode],
    ) -> None:
        if prev is not None:
            prev.next = this
        this.prev = prev
        this.next = nxt
        if nxt is not None:
            nxt.prev = this
        self.length += 1

    def _make_way(self, node1: ColStoreNode, node2: ColStoreNode) -> None:
        """Adjust node1 (and its neighbours) to make room for node2."""
        c1, c2 = node1.col, node2.col

        if c1.max < c2.min:
            # node2 starts after node1 ends.
            nxt = node1.next
            if nxt is not None:
                if nxt.col.min <= c2.max:
                    self._make_way(nxt, node2)
                    return
                self._add_node(node1, node2, nxt)
                return
            self._add_node(node1, node2, None)
            return

        if c1.min > c2.max:
            # node2 ends before node1 begins.
            prev = node1.prev
            if prev is not None:
                if prev.col.max >= c2.min:
                    self._make_way(prev, node2)
                    return
                self._add_node(prev, node2, node1)
                return
            self._add_node(None, node2, node1)
            return

        if c1.min == c2.min and c1.max == c2.max:
            # Exact match: node2 replaces node1.
            prev, nxt = node1.prev, node1.next
            self.remove_node(node1)
            self._add_node(prev, node2, nxt)
            if self.root is None:
                self.root = node2
            return

        if c1.min > c2.min and c1.max < c2.max:
            # node2 envelopes node1.
            prev, nxt = node1.prev, node1.next
            self.remove_node(node1)
            if prev is node2:
                node2.next = nxt
            elif nxt is node2:
                node2.prev = prev
            else:
                self._add_node(prev, node2, nxt)
            if node2.prev is not None and node2.prev.col.max >= c2.min:
                self._make_way(prev, node2)
            if node2.next is not None and node2.next.col.min <= c2.max:
                self._make_way(nxt, node2)
            if self.root is None:
                self.root = node2
            return

        if c1.min < c2.min and c1.max > c2.max:
            # node2 bisects node1.
            tail = ColStoreNode(c1.copy_to_range(c2.max + 1, c1.max))
            self._add_node(node1, tail, node1.next)
            c1.max = c2.min - 1
            self._add_node(node1, node2, tail)
            return

        if c1.max >= c2.min and c1.min < c2.min:
            # node2 overlaps the top of node1.
            nxt = node1.next
            c1.max = c2.min - 1
            if nxt is node2:
                return
            self._add_node(node1, node2, nxt)
            if nxt is not None and nxt.col.min <= c2.max:
                self._make_way(nxt, node2)
            return

        if c1.min <= c2.max and c1.min > c2.min:
            # node2 overlaps the bottom of node1.
            prev = node1.prev
            c1.min = c2.max + 1
            if prev is node2:
                return
            self._add_node(prev, node2, node1)
            if prev is not None and prev.col.max >= c2.min:
                self._make_way(node1.prev, node2)
            return

    def get_or_make_cols_for_range(
        self, start: Optional[ColStoreNode], min_col: int, max_col: int
    ) -> list[Col]:
        """The Cols covering min_col..max_col, creating any that are missing."""
        cols: list[Col] = []
        while True:
            if start is None:
                node = self.add(new_col_for_range(min_col, max_col))
            elif start.col.min <= min_col <= start.col.max:
                node = start
            elif start.col.min < min_col and start.col.max < min_col:
                if start.next is not None:
                    start = start.next
                    continue
                node = self.add(new_col_for_range(min_col, max_col))
            else:
                upper = max_col if start.col.min > max_col else start.col.min - 1
                node = self.add(new_col_for_range(min_col, upper))

            cols.append(node.col)
            if node.col.max >= max_col:
                return cols
            start, min_col = node.next, node.col.max + 1

    def for_each(self, fn: Callable[[int, Col], Any]) -> None:
        """Call fn(index, col) for every Col in order.

        The last Col is passed an index one past its position.
        """
        cols = list(self)
        if not cols:
            return
        for index, col in enumerate(cols[:-1]):
            fn(index, col)
        fn(len(cols), cols[-1])