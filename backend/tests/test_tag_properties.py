"""
Property-based tests for the tag dictionary and the match scorer.

Scores stay within 0..100, non-zero scores of well-tagged academies are
clamped into [50, 95], sparse academies lose 20 points, and reasons never
exceed three entries.
"""

import pytest
from hypothesis import given, strategies as st, settings

from apps.core.utils.tags import (
    PARENT_TEST_QUESTIONS,
    TAG_CATEGORIES,
    TAG_OPTIONS,
    calculate_match_score,
    get_all_tags,
    get_tag_category,
    get_tag_label,
    validate_preference_tags,
)

ALL_TAG_KEYS = [option.key for option in get_all_tags()]

tag_lists = st.lists(st.sampled_from(ALL_TAG_KEYS), max_size=15)


class TestTagDictionary:

    def test_label_lookup(self):
        assert get_tag_label('subject:math') == '수학'
        assert get_tag_label('class_size:1on1') == '1:1 개인'

    def test_unknown_label_falls_back_to_key(self):
        assert get_tag_label('subject:astrology') == 'subject:astrology'

    def test_category_is_prefix(self):
        assert get_tag_category('mgmt:homework') == 'mgmt'
        assert get_tag_category('nocolon') == 'nocolon'

    def test_every_option_belongs_to_its_category(self):
        for category, options in TAG_OPTIONS.items():
            assert category in TAG_CATEGORIES
            for option in options:
                assert get_tag_category(option.key) == category

    def test_category_weights(self):
        weights = {key: c.weight for key, c in TAG_CATEGORIES.items()}
        assert weights == {
            'grade': 15, 'subject': 25, 'goal': 20, 'style': 15, 'class_size': 10,
            'delivery': 5, 'mgmt': 10, 'shuttle': 5, 'budget': 5,
        }

    def test_preference_test_has_eight_questions(self):
        assert [q.id for q in PARENT_TEST_QUESTIONS] == [f'Q{i}' for i in range(1, 9)]
        assert not PARENT_TEST_QUESTIONS[-1].required


class TestMatchScore:

    def test_empty_inputs_score_zero(self):
        assert calculate_match_score([], ['subject:math']).score == 0
        assert calculate_match_score(['subject:math'], []).score == 0

    def test_full_match_is_capped_at_95(self):
        tags = ['grade:mid_2', 'subject:math', 'goal:school_exam']
        result = calculate_match_score(tags, tags)
        assert result.score == 95
        assert result.reasons == ['중2', '수학', '내신 대비']
        assert result.matched_categories == ['grade', 'subject', 'goal']

    def test_partial_multi_select_match(self):
        # subject 25 * 1/2 + grade 15 = 27.5 of 40 -> 68.75 -> 69
        parent = ['grade:mid_2', 'subject:math', 'subject:english']
        academy = ['grade:mid_2', 'subject:math', 'goal:university']
        assert calculate_match_score(parent, academy).score == 69

    def test_low_score_is_raised_to_floor(self):
        # only delivery (5 of 45) matches -> 11 -> clamped to 50
        parent = ['grade:mid_1', 'subject:korean', 'delivery:online']
        academy = ['grade:high_1', 'subject:math', 'delivery:online']
        assert calculate_match_score(parent, academy).score == 50

    def test_sparse_academy_penalty(self):
        tags = ['grade:mid_2', 'subject:math']
        assert calculate_match_score(tags, tags).score == 75

    def test_no_overlap_scores_zero(self):
        parent = ['grade:mid_1', 'subject:korean', 'goal:habit']
        academy = ['grade:high_3', 'subject:math', 'goal:university']
        result = calculate_match_score(parent, academy)
        assert result.score == 0
        assert result.reasons == []

    @given(parent=tag_lists, academy=tag_lists)
    @settings(max_examples=200)
    def test_score_bounds(self, parent, academy):
        """Score is always within 0..100 and reasons hold at most three labels."""
        result = calculate_match_score(parent, academy)
        assert 0 <= result.score <= 100
        assert len(result.reasons) <= 3

    @given(parent=tag_lists, academy=st.lists(st.sampled_from(ALL_TAG_KEYS), min_size=3, max_size=15))
    @settings(max_examples=200)
    def test_non_zero_scores_are_clamped(self, parent, academy):
        score = calculate_match_score(parent, academy).score
        assert score == 0 or 50 <= score <= 95

    @given(parent=tag_lists, academy=tag_lists)
    @settings(max_examples=100)
    def test_matched_categories_follow_category_order(self, parent, academy):
        matched = calculate_match_score(parent, academy).matched_categories
        order = list(TAG_CATEGORIES)
        assert matched == sorted(matched, key=order.index)


class TestPreferenceValidation:

    ANSWERS = [
        'grade:mid_2', 'subject:math', 'subject:english', 'goal:school_exam',
        'style:balanced', 'class_size:small', 'delivery:offline', 'mgmt:homework',
    ]

    def test_valid_answers_pass(self):
        assert validate_preference_tags(self.ANSWERS) == self.ANSWERS

    def test_budget_is_optional(self):
        assert 'budget:mid' in validate_preference_tags(self.ANSWERS + ['budget:mid'])

    def test_duplicates_are_dropped(self):
        assert validate_preference_tags(self.ANSWERS + ['subject:math']) == self.ANSWERS

    def test_unknown_tag_rejected(self):
        with pytest.raises(ValueError):
            validate_preference_tags(self.ANSWERS + ['subject:astrology'])

    def test_missing_required_answer_rejected(self):
        with pytest.raises(ValueError):
            validate_preference_tags([t for t in self.ANSWERS if not t.startswith('goal:')])

    def test_single_select_limit(self):
        with pytest.raises(ValueError):
            validate_preference_tags(self.ANSWERS + ['grade:mid_3'])

    def test_multi_select_limit(self):
        with pytest.raises(ValueError):
            validate_preference_tags(self.ANSWERS + ['subject:korean', 'subject:science'])
