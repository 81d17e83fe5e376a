"""Approximate title matching used to jump to a node by typed text.

The distance is an edit distance with asymmetric costs: characters of the
title that the query has not covered are free (``INSERT_COST = 0``), so a
query that is a prefix, or any partial typing, of a title scores 0.  Deleting
or replacing a query character costs 1.

Candidates are nodes whose distance is strictly below the match threshold.
Titles are not length-normalised.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from taskgraph.config import settings
from taskgraph.models import Node
from taskgraph.store import GraphStore

logger = logging.getLogger(__name__)

INSERT_COST = 0
DELETE_COST = 1
REPLACE_COST = 1


def edit_distance(query: str, title: str) -> int:
    """Two-row dynamic-programming distance from ``query`` to ``title``.

    Operates on code points, not bytes.
    """
    last_row = [j * INSERT_COST for j in range(len(title) + 1)]
    this_row = [0] * (len(title) + 1)

    for i, q in enumerate(query):
        this_row[0] = i + 1
        for j, t in enumerate(title):
            deletion = last_row[j + 1] + DELETE_COST
            insertion = this_row[j] + INSERT_COST
            if q == t:
                replacement = last_row[j]
            else:
                replacement = last_row[j] + REPLACE_COST
            this_row[j + 1] = min(deletion, insertion, replacement)
        last_row, this_row = this_row, last_row

    return last_row[len(title)]


def find_candidates(
    store: GraphStore,
    query: str,
    *,
    threshold: Optional[int] = None,
    is_active: Optional[Callable[[Node], bool]] = None,
) -> list[tuple[Node, int]]:
    """Score every active node's title against ``query``.

    Args:
        store: Graph store to search.
        query: Text typed by the user.
        threshold: Exclusive upper bound on the distance.  Defaults to
            ``settings.match_threshold``.
        is_active: Predicate selecting the nodes to search.  All nodes are
            searched when omitted.

    Returns:
        ``(node, distance)`` pairs in store order; sorting is left to the caller.
    """
    limit = settings.match_threshold if threshold is None else threshold

    candidates: list[tuple[Node, int]] = []
    for node in store.list_nodes():
        if is_active is not None and not is_active(node):
            continue
        distance = edit_distance(query, node.title)
        if distance < limit:
            candidates.append((node, distance))

    logger.debug("find %r matched %d node(s)", query, len(candidates))
    return candidates
