"""NextToken pagination for MWS list operations.

A paginated fetch moves between two states. ``FIRST_PAGE`` sends the
operation's own action with the caller's filters; ``NextPage(cursor)`` sends
the ``...ByNextToken`` action with the cursor as its only parameter. After
each response :func:`next_state` decides whether to continue. The transition
functions are pure so they can be tested without network access.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple, Union

from .utils.xml_tools import get_path, normalize_items

logger = logging.getLogger(__name__)

NEXT_TOKEN = "NextToken"


@dataclass(frozen=True)
class FirstPage:
    """Initial state: no cursor yet."""


@dataclass(frozen=True)
class NextPage:
    """Continuation state holding the cursor from the previous response."""

    cursor: str


PageState = Union[FirstPage, NextPage]

FIRST_PAGE = FirstPage()


@dataclass(frozen=True)
class PagedOperation:
    """Describes where a paginated operation keeps its results.

    Results live at ``<Action>Result/<container>/<item>`` and the cursor at
    ``<Action>Result/NextToken``.
    """

    action: str
    next_action: str
    container: str
    item: str
    id_field: str

    def result_key(self, action: str) -> str:
        return f"{action}Result"


def request_for(
    operation: PagedOperation, state: PageState, first_params: Mapping[str, Any]
) -> Tuple[str, Dict[str, Any]]:
    """Return the (action, params) pair to send in ``state``."""
    if isinstance(state, NextPage):
        return operation.next_action, {NEXT_TOKEN: state.cursor}
    return operation.action, dict(first_params)


def page_items(operation: PagedOperation, action: str, document: Any) -> List[Any]:
    """Extract the result items of one page as a list."""
    node = get_path(document, operation.result_key(action), operation.container, operation.item)
    return normalize_items(node, operation.id_field)


def next_state(
    operation: PagedOperation, action: str, document: Any, fetch_all: bool
) -> Optional[NextPage]:
    """Return the next state, or ``None`` when the fetch is finished."""
    if not fetch_all:
        return None
    cursor = get_path(document, operation.result_key(action), NEXT_TOKEN)
    if isinstance(cursor, str) and cursor:
        return NextPage(cursor)
    return None


def paginate(
    execute: Callable[[str, Dict[str, Any]], Any],
    operation: PagedOperation,
    first_params: Mapping[str, Any],
    fetch_all: bool = True,
) -> List[Any]:
    """Walk all pages of an operation and concatenate their items.

    Pages are requested one after another; an error on any page propagates
    and no partial result is returned.

    Args:
        execute: Callable sending ``(action, params)`` and returning the parsed document
        operation: Operation description
        first_params: Filters for the first page
        fetch_all: Follow NextToken cursors; when False only the first page is fetched

    Returns:
        Items from every page, in page order
    """
    results: List[Any] = []
    state: Optional[PageState] = FIRST_PAGE
    pages = 0

    while state is not None:
        action, params = request_for(operation, state, first_params)
        document = execute(action, params)
        items = page_items(operation, action, document)
        results.extend(items)
        pages += 1
        logger.debug(f"{operation.action}: page {pages} returned {len(items)} item(s)")
        state = next_state(operation, action, document, fetch_all)

    logger.info(f"{operation.action}: retrieved {len(results)} item(s) in {pages} page(s)")
    return results
