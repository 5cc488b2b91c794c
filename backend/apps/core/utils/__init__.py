"""
Core utility functions shared by the marketplace apps.
"""

from .business_number import (
    extract_numbers,
    format_business_number,
    validate_business_number,
    normalize_business_number,
)
from .codes import generate_code
from .regions import AVAILABLE_REGIONS, ALL_REGION_IDS, is_valid_region
from .schedule import parse_schedule, build_schedule, normalize_schedule
from .tags import calculate_match_score, validate_preference_tags

__all__ = [
    'extract_numbers',
    'format_business_number',
    'validate_business_number',
    'normalize_business_number',
    'generate_code',
    'AVAILABLE_REGIONS',
    'ALL_REGION_IDS',
    'is_valid_region',
    'parse_schedule',
    'build_schedule',
    'normalize_schedule',
    'calculate_match_score',
    'validate_preference_tags',
]
