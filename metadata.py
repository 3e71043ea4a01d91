"""Editing metadata records and print-source selection."""

import json
from datetime import datetime, timezone

from models import PageState

# Layout field -> persisted key
_LAYOUT_KEYS = {
    'album_width_px': 'albumWidthPx',
    'album_height_px': 'albumHeightPx',
    'padding_px': 'paddingPx',
    'text_area_percent': 'textAreaPercent',
    'text_area_height': 'textAreaHeight',
    'draw_width': 'drawWidth',
    'draw_height': 'drawHeight',
    'base_target_width': 'baseTargetWidth',
    'base_target_height': 'baseTargetHeight',
    'base_offset_x': 'baseOffsetX',
    'base_offset_y': 'baseOffsetY',
    'target_width': 'targetWidth',
    'target_height': 'targetHeight',
    'offset_x': 'offsetX',
    'offset_y': 'offsetY',
    'scale': 'scale',
}


def build_editing_metadata(state: PageState, generated_at: datetime | None = None) -> dict:
    """Snapshot a page's file names and layout as a JSON-ready dict."""
    layout = state.layout.as_dict()
    when = generated_at or datetime.now(timezone.utc)
    return {
        'originalFileName': state.photo.name,
        'preparedFileName': state.prepared_name,
        'layout': {key: layout[name] for name, key in _LAYOUT_KEYS.items()},
        'generatedAt': when.isoformat(),
    }


def metadata_to_json(record: dict) -> str:
    return json.dumps(record, indent=2, ensure_ascii=False)


def select_print_source(item):
    """The edited render if there is one, else the original photo, else None."""
    if item is None:
        return None
    return getattr(item, 'print_data', None) or getattr(item, 'photo', None) or None
