"""Assign discovered colour keys to the palette in round-robin order.

Every six-hex-digit segment found in a Style or StyleMap ID is a colour
key. The distinct keys are sorted and handed out in COLOUR_ORDER:
blue, cyan, teal, lime, green, yellow, orange, deeporange, red, pink,
purple, deeppurple, brown, gray, bluegray, lightblue. A document with
more than sixteen keys wraps around to blue again.

The actual colours never matter, only how many distinct ones there are,
so a map always gets visually distinct markers.

Example:
    kml-restyler --policy discovered mymap.kml mymap-omaps.kml
"""

from kml_restyler.core.palette import COLOUR_ORDER
from kml_restyler.core.types import Policy

policy = Policy(
    name='discovered',
    help='Sort the colour keys found in the document, assign palette colours round-robin.',
)


@policy.assign
def assign(colour_keys: list[str]) -> dict[str, str]:
    return {key: COLOUR_ORDER[i % len(COLOUR_ORDER)] for i, key in enumerate(sorted(colour_keys))}
