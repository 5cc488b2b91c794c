"""
Region catalogue served to the region selector.
"""

from django.conf import settings
from django.db.models import Q

AVAILABLE_REGIONS = {
    '동탄 1신도시': [
        {'id': 'dongtan1', 'name': '동탄1동', 'district': '화성시'},
        {'id': 'dongtan2', 'name': '동탄2동', 'district': '화성시'},
        {'id': 'dongtan3', 'name': '동탄3동', 'district': '화성시'},
    ],
    '동탄 2신도시': [
        {'id': 'dongtan4', 'name': '동탄4동', 'district': '화성시'},
        {'id': 'dongtan5', 'name': '동탄5동', 'district': '화성시'},
        {'id': 'dongtan6', 'name': '동탄6동', 'district': '화성시'},
        {'id': 'dongtan7', 'name': '동탄7동', 'district': '화성시'},
        {'id': 'dongtan8', 'name': '동탄8동', 'district': '화성시'},
        {'id': 'dongtan9', 'name': '동탄9동', 'district': '화성시'},
    ],
}

ALL_REGIONS = [region for regions in AVAILABLE_REGIONS.values() for region in regions]
ALL_REGION_IDS = [region['id'] for region in ALL_REGIONS]


def is_valid_region(region_id: str) -> bool:
    return region_id in ALL_REGION_IDS


def region_filter(region_id: str, field: str = 'target_regions') -> Q:
    """
    Narrow a JSON region list column to rows that may contain `region_id`

    Matches the quoted id inside the stored JSON text, so it works on
    backends without JSON containment lookups. Callers still confirm
    membership on the loaded rows.
    """
    return Q(**{f'{field}__icontains': f'"{region_id}"'})


def resolve_region(region_id) -> str:
    """Requested region, or the configured default when none is given."""
    return region_id or settings.DEFAULT_REGION
