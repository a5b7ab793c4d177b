"""Helpers for handling paginated views."""

from __future__ import annotations

from typing import Dict, List, Union

from flask import request

ELLIPSIS = "..."


def get_page(param: str = "page") -> int:
    """Return the requested page number, falling back to ``1``.

    Non-numeric and non-positive values are treated as the first page.
    """

    value = request.args.get(param, type=int)
    if value is None or value < 1:
        return 1
    return value


def generate_pagination(
    current_page: int, total_pages: int
) -> List[Union[int, str]]:
    """Return the page links to show for ``current_page``.

    Parameters
    ----------
    current_page:
        The page being viewed (1-based).
    total_pages:
        Number of pages available.

    Returns
    -------
    list
        Page numbers with :data:`ELLIPSIS` markers where ranges are elided.
        Seven or fewer pages are listed in full.
    """

    if total_pages <= 7:
        return list(range(1, total_pages + 1))
    if current_page <= 3:
        return [1, 2, 3, ELLIPSIS, total_pages - 1, total_pages]
    if current_page >= total_pages - 2:
        return [1, 2, ELLIPSIS, total_pages - 2, total_pages - 1, total_pages]
    return [
        1,
        ELLIPSIS,
        current_page - 1,
        current_page,
        current_page + 1,
        ELLIPSIS,
        total_pages,
    ]


def build_pagination_args(
    *, page_param: str = "page"
) -> Dict[str, Union[str, List[str]]]:
    """Assemble the current query arguments for pagination links.

    The page parameter itself is dropped so templates can supply their own.
    """

    args: Dict[str, Union[str, List[str]]] = {}
    for key, values in request.args.lists():
        if key == page_param or not values:
            continue
        if len(values) == 1:
            args[key] = values[0]
        else:
            args[key] = values
    return args
