"""Gapless child identifiers.

A parent hands out its current counter value as the new child's index and
then advances the counter by one, so the first child is 0 and the children
of one parent are exactly ``0 .. count - 1``. The index is also the seed of
the child's address, which makes every child recomputable from
``(parent, index)`` without a lookup table.

Two scopes exist: ``Group.post_count`` for root posts and
``Post.reply_count`` for replies to that post, so threads form a tree.
"""

from core.exceptions import CounterOverflowError
from domain.constants import U32_MAX
from domain.entities.group import Group
from domain.entities.post import Post


def current_count(parent: Group | Post) -> int:
    if isinstance(parent, Group):
        return parent.post_count
    return parent.reply_count


def next_index(parent: Group | Post) -> tuple[int, int]:
    """Assign the next child index of ``parent``.

    Returns ``(assigned_index, updated_counter)`` and stores the updated
    counter on ``parent``. The caller persists the parent in the same unit
    of work as the child.

    Raises:
        CounterOverflowError: The counter cannot advance within a u32. The
            parent is left unchanged.
    """
    assigned = current_count(parent)
    if assigned >= U32_MAX:
        raise CounterOverflowError(str(parent.address))

    updated = assigned + 1
    if isinstance(parent, Group):
        parent.post_count = updated
    else:
        parent.reply_count = updated
    return assigned, updated
