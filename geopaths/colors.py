from typing import List

# Display palette for paths. A path's color comes from its color_key, not its
# position, so colors stay put when other paths are removed.
PATH_COLORS: List[str] = [
    '#e6194b',
    '#3cb44b',
    '#4363d8',
    '#f58231',
    '#911eb4',
    '#42d4f4',
    '#f032e6',
    '#9a6324',
    '#469990',
    '#000075',
]

SELECTED_BACKGROUND = '#c0c0c0'


def color_for_key(color_key: int) -> str:
    """Stable color for a path's color key."""
    return PATH_COLORS[color_key % len(PATH_COLORS)]
