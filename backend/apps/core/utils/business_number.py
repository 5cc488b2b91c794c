"""
Korean business registration number (사업자등록번호) helpers.

Format: XXX-XX-XXXXX, ten digits, the last one a weighted check digit.
"""

import re
from dataclasses import dataclass
from typing import Optional

CHECKSUM_WEIGHTS = (1, 3, 7, 1, 3, 7, 1, 3, 5)

ERROR_EMPTY = '사업자등록번호를 입력해주세요'
ERROR_LENGTH = '사업자등록번호는 10자리입니다'
ERROR_CHECKSUM = '유효하지 않은 사업자등록번호입니다'


@dataclass(frozen=True)
class BusinessNumberCheck:
    is_valid: bool
    error: Optional[str] = None


def extract_numbers(value: str) -> str:
    """Keep digits only."""
    return re.sub(r'[^0-9]', '', value or '')


def format_business_number(value: str) -> str:
    """
    Format partial or complete input as XXX-XX-XXXXX.

    Anything past the tenth digit is dropped.
    """
    numbers = extract_numbers(value)

    if len(numbers) <= 3:
        return numbers
    if len(numbers) <= 5:
        return f'{numbers[:3]}-{numbers[3:]}'
    return f'{numbers[:3]}-{numbers[3:5]}-{numbers[5:10]}'


def validate_business_number(value: str) -> BusinessNumberCheck:
    numbers = extract_numbers(value)

    if not numbers:
        return BusinessNumberCheck(False, ERROR_EMPTY)

    if len(numbers) != 10:
        return BusinessNumberCheck(False, ERROR_LENGTH)

    digits = [int(d) for d in numbers]
    total = sum(d * w for d, w in zip(digits, CHECKSUM_WEIGHTS))
    # The ninth digit contributes again through the tens of digit * 5
    total += (digits[8] * 5) // 10

    checksum = (10 - total % 10) % 10
    if checksum != digits[9]:
        return BusinessNumberCheck(False, ERROR_CHECKSUM)

    return BusinessNumberCheck(True)


def normalize_business_number(value: str) -> str:
    """
    Validate and return the canonical XXX-XX-XXXXX form.

    Raises:
        ValueError: With the Korean validation message
    """
    check = validate_business_number(value)
    if not check.is_valid:
        raise ValueError(check.error)
    return format_business_number(value)
