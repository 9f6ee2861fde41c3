"""Report builder: text and JSON summaries of a restyle run.

Mappings are always printed sorted by key so output is reproducible.
"""

import json
from typing import Any

from kml_restyler.core.types import Resolution, RewriteStats


def format_text(
    resolution: Resolution,
    stats: RewriteStats,
    input_path: str = '',
    output_path: str = '',
) -> str:
    """Format the run summary as human-readable text."""
    lines = []
    if input_path or output_path:
        lines.append(f'kml-restyler: converted {input_path} to {output_path} (policy: {resolution.policy})')
    else:
        lines.append(f'kml-restyler: policy {resolution.policy}')
    lines.append('')

    lines.append(f'── colour mapping ({len(resolution.colour_mapping)})')
    for code, palette_id in sorted(resolution.colour_mapping.items()):
        lines.append(f'  {code} -> {palette_id}')
    lines.append('')

    lines.append(f'── style mapping ({len(resolution.style_mapping)})')
    for style_id, palette_id in sorted(resolution.style_mapping.items()):
        lines.append(f'  {style_id} -> {palette_id}')
    lines.append('')

    lines.append(f'placemarks: {stats.rewritten} restyled, {stats.untouched} unchanged')
    for style_url in sorted(set(stats.unresolved)):
        lines.append(f'  unresolved: {style_url or "(no styleUrl)"}')
    return '\n'.join(lines)


def format_json(
    resolution: Resolution,
    stats: RewriteStats,
    input_path: str = '',
    output_path: str = '',
) -> str:
    """Format the run summary as JSON."""
    obj: dict[str, Any] = {
        'input': input_path,
        'output': output_path,
        'policy': resolution.policy,
        'colour_mapping': dict(sorted(resolution.colour_mapping.items())),
        'style_mapping': dict(sorted(resolution.style_mapping.items())),
        'placemarks': {
            'restyled': stats.rewritten,
            'unchanged': stats.untouched,
            'unresolved': sorted(set(stats.unresolved)),
        },
    }
    return json.dumps(obj, indent=2)
