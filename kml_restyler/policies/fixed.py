"""Map known Google My Maps icon colours through a static table.

    0288D1 -> placemark-blue        673AB7 -> placemark-purple
    0097A7 -> placemark-cyan        795548 -> placemark-brown
    097138 -> placemark-teal        880E4F -> placemark-deeppurple
    558B2F -> placemark-green       F9A825 -> placemark-yellow
    FF5252 -> placemark-red

The result does not depend on which other colours share the document.
Any style whose ID contains none of these codes becomes placemark-blue.

Example:
    kml-restyler --policy fixed mymap.kml mymap-omaps.kml
"""

from kml_restyler.core.palette import FIXED_COLOUR_TABLE
from kml_restyler.core.types import Policy

policy = Policy(
    name='fixed',
    help='Static table of nine known My Maps colours; anything else becomes blue.',
)


@policy.assign
def assign(colour_keys: list[str]) -> dict[str, str]:
    # The whole table takes part in matching, not only the keys found
    return dict(sorted(FIXED_COLOUR_TABLE.items()))
