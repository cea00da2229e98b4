"""Wrap rendered tables in a horizontally scrollable container."""

from __future__ import annotations

import xml.etree.ElementTree as etree

from markdown.treeprocessors import Treeprocessor

from dashboard_cms._constants import TABLE_WRAPPER_CLASS


def _is_wrapper(element: etree.Element) -> bool:
    return element.tag == "div" and element.get("class") == TABLE_WRAPPER_CLASS


def wrap_tables(root: etree.Element) -> etree.Element:
    """Wrap every ``<table>`` under ``root`` in a scroll container.

    Tables that already sit alone inside a wrapper are left alone, so
    applying the transform twice produces the same tree as applying it once.
    Sibling order and table contents are unchanged.
    """
    parents = [
        (parent, child)
        for parent in root.iter()
        for child in parent
        if child.tag == "table"
    ]
    for parent, table in parents:
        if _is_wrapper(parent) and len(parent) == 1:
            continue
        index = list(parent).index(table)
        wrapper = etree.Element("div")
        wrapper.set("class", TABLE_WRAPPER_CLASS)
        wrapper.tail = table.tail
        table.tail = None
        parent.remove(table)
        wrapper.append(table)
        parent.insert(index, wrapper)
    return root


class TableWrapTreeprocessor(Treeprocessor):
    """Apply :func:`wrap_tables` to the parsed document."""

    def run(self, root: etree.Element) -> etree.Element:
        """Return ``root`` with every table wrapped."""
        return wrap_tables(root)


__all__ = ["TableWrapTreeprocessor", "wrap_tables"]
