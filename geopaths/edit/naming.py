"""
Naming Service - collision-free default names and renames.
"""

import logging
from typing import Iterable, Optional

from geopaths.model import PathCollection
from geopaths.edit.constants import DEFAULT_NAME_PREFIX, DEFAULT_NAME_START

logger = logging.getLogger(__name__)


def default_name(existing_names: Iterable[str]) -> str:
    """
    Lowest-numbered free "Unnamed path N".

    Always computed from the names passed in, so callers must hand over the
    current collection's names rather than a cached set.
    """
    taken = set(existing_names)
    index = DEFAULT_NAME_START
    while f"{DEFAULT_NAME_PREFIX} {index}" in taken:
        index += 1
    return f"{DEFAULT_NAME_PREFIX} {index}"


def is_name_taken(collection: PathCollection, name: str, exclude_index: Optional[int] = None) -> bool:
    """Check whether another path already uses name."""
    return any(
        path.name == name
        for i, path in enumerate(collection)
        if i != exclude_index
    )


def rename(collection: PathCollection, index: int, proposed_name: str) -> PathCollection:
    """
    Apply proposed_name to the path at index.

    The name is applied unconditionally: unlike creation, a rename may produce
    two paths with the same name.
    """
    if is_name_taken(collection, proposed_name, exclude_index=index):
        logger.warning(f"Renaming path {index} to duplicate name {proposed_name!r}")
    return collection.rename(index, proposed_name)
