"""
Property-based tests for business registration number helpers.

Formatting only ever keeps digits, caps at ten of them and inserts dashes
after the third and fifth; validation accepts exactly the numbers whose
check digit matches the weighted checksum.
"""

import pytest
from hypothesis import given, strategies as st

from apps.core.utils.business_number import (
    CHECKSUM_WEIGHTS,
    ERROR_CHECKSUM,
    ERROR_EMPTY,
    ERROR_LENGTH,
    extract_numbers,
    format_business_number,
    normalize_business_number,
    validate_business_number,
)

VALID_NUMBERS = ['2208162517', '1248100998']


def check_digit(first_nine: str) -> int:
    digits = [int(d) for d in first_nine]
    total = sum(d * w for d, w in zip(digits, CHECKSUM_WEIGHTS))
    total += (digits[8] * 5) // 10
    return (10 - total % 10) % 10


nine_digits = st.text(alphabet='0123456789', min_size=9, max_size=9)


class TestFormatting:

    @pytest.mark.parametrize('raw,expected', [
        ('', ''),
        ('12', '12'),
        ('123', '123'),
        ('1234', '123-4'),
        ('12345', '123-45'),
        ('123456', '123-45-6'),
        ('1234567890', '123-45-67890'),
        ('123-45-678901234', '123-45-67890'),
        ('abc12de3', '123'),
    ])
    def test_format_examples(self, raw, expected):
        assert format_business_number(raw) == expected

    @given(st.text(max_size=30))
    def test_extract_keeps_digits_only(self, value):
        assert extract_numbers(value).isdigit() or extract_numbers(value) == ''
        assert len(extract_numbers(value)) == sum(1 for c in value if c in '0123456789')

    @given(st.text(alphabet='0123456789-', max_size=20))
    def test_formatted_digits_are_a_prefix(self, value):
        digits = extract_numbers(value)
        formatted = format_business_number(value)
        assert extract_numbers(formatted) == digits[:10]

    @given(st.text(alphabet='0123456789', min_size=6, max_size=14))
    def test_long_input_has_two_dashes(self, value):
        formatted = format_business_number(value)
        assert formatted[3] == '-' and formatted[6] == '-'
        assert len(formatted) == 6 + min(len(value), 10) - 4


class TestValidation:

    @pytest.mark.parametrize('number', VALID_NUMBERS)
    def test_known_valid_numbers(self, number):
        assert validate_business_number(number).is_valid
        assert validate_business_number(format_business_number(number)).is_valid

    def test_empty(self):
        check = validate_business_number('')
        assert not check.is_valid
        assert check.error == ERROR_EMPTY

    def test_wrong_length(self):
        assert validate_business_number('123-45-678').error == ERROR_LENGTH

    def test_bad_checksum(self):
        assert validate_business_number('2208162518').error == ERROR_CHECKSUM

    @given(nine_digits)
    def test_matching_check_digit_is_valid(self, first_nine):
        number = first_nine + str(check_digit(first_nine))
        assert validate_business_number(number).is_valid

    @given(nine_digits, st.integers(min_value=1, max_value=9))
    def test_any_other_check_digit_is_invalid(self, first_nine, offset):
        wrong = (check_digit(first_nine) + offset) % 10
        check = validate_business_number(first_nine + str(wrong))
        assert not check.is_valid
        assert check.error == ERROR_CHECKSUM

    def test_normalize_returns_formatted(self):
        assert normalize_business_number('2208162517') == '220-81-62517'

    def test_normalize_raises_with_message(self):
        with pytest.raises(ValueError, match='10자리'):
            normalize_business_number('12345')
