"""
Tag dictionary and preference matching.

Tags are `category:value` strings. Parents pick them in the preference
test, academies advertise them (`tags` / `target_tags`), and
`calculate_match_score` compares the two sets category by category.
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class TagCategory:
    key: str
    label: str
    weight: int
    required: bool = True
    multi_select: bool = False
    max_select: Optional[int] = None


@dataclass(frozen=True)
class TagOption:
    key: str
    label: str
    category: str


@dataclass
class MatchResult:
    score: int
    reasons: List[str] = field(default_factory=list)
    matched_categories: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'score': self.score,
            'reasons': self.reasons,
            'matchedCategories': self.matched_categories,
        }


TAG_CATEGORIES: Dict[str, TagCategory] = {
    'grade': TagCategory('grade', '학년', 15),
    'subject': TagCategory('subject', '과목', 25, multi_select=True, max_select=3),
    'goal': TagCategory('goal', '학습 목표', 20),
    'style': TagCategory('style', '학습 스타일', 15),
    'class_size': TagCategory('class_size', '수업 규모', 10),
    'delivery': TagCategory('delivery', '수업 형태', 5),
    'mgmt': TagCategory('mgmt', '관리 선호', 10, multi_select=True, max_select=2),
    'shuttle': TagCategory('shuttle', '셔틀/거리', 5),
    'budget': TagCategory('budget', '예산', 5, required=False),
}


def _options(category: str, pairs) -> List[TagOption]:
    return [TagOption(f'{category}:{value}', label, category) for value, label in pairs]


TAG_OPTIONS: Dict[str, List[TagOption]] = {
    'grade': _options('grade', [
        ('elem_3_4', '초등 3~4학년'),
        ('elem_5_6', '초등 5~6학년'),
        ('mid_1', '중1'),
        ('mid_2', '중2'),
        ('mid_3', '중3'),
        ('high_1', '고1'),
        ('high_2', '고2'),
        ('high_3', '고3/N수'),
    ]),
    'subject': _options('subject', [
        ('math', '수학'),
        ('english', '영어'),
        ('korean', '국어'),
        ('science', '과학/탐구'),
        ('social', '사회/탐구'),
        ('coding', '코딩/정보'),
        ('essay', '논술'),
        ('art', '예체능'),
    ]),
    'goal': _options('goal', [
        ('school_exam', '내신 대비'),
        ('university', '수능/대입'),
        ('competition', '경시/올림피아드'),
        ('foundation', '기초 다지기'),
        ('advanced', '선행/심화'),
        ('habit', '학습 습관 형성'),
    ]),
    'style': _options('style', [
        ('self_directed', '자기주도형'),
        ('balanced', '균형형'),
        ('interactive', '소통중심형'),
        ('mentored', '밀착관리형'),
    ]),
    'class_size': _options('class_size', [
        ('1on1', '1:1 개인'),
        ('small', '소수정예 (2~5명)'),
        ('medium', '중규모 (6~15명)'),
        ('large', '대형 강의 (16명+)'),
    ]),
    'delivery': _options('delivery', [
        ('offline', '오프라인'),
        ('online', '온라인'),
        ('hybrid', '혼합형'),
    ]),
    'mgmt': _options('mgmt', [
        ('homework', '숙제 관리'),
        ('attendance', '출결 관리'),
        ('feedback', '학습 피드백'),
        ('test', '정기 테스트'),
        ('counsel', '상담/소통'),
    ]),
    'shuttle': _options('shuttle', [
        ('need', '셔틀 필요'),
        ('not_need', '셔틀 불필요'),
        ('walk', '도보 거리 선호'),
    ]),
    'budget': _options('budget', [
        ('low', '30만원 이하'),
        ('mid', '30~50만원'),
        ('high', '50~80만원'),
        ('premium', '80만원 이상'),
    ]),
}

_LABELS: Dict[str, str] = {
    option.key: option.label
    for options in TAG_OPTIONS.values()
    for option in options
}

# Shown as a reason only while fewer than this many are collected
MAX_REASONS = 3
MIN_ACADEMY_TAGS = 3
SPARSE_TAG_PENALTY = 20
SCORE_FLOOR = 50
SCORE_CEILING = 95


def get_tag_label(tag_key: str) -> str:
    """Korean display label for a tag key, or the key itself when unknown."""
    return _LABELS.get(tag_key, tag_key)


def get_tag_category(tag_key: str) -> str:
    return tag_key.split(':')[0]


def get_all_tags() -> List[TagOption]:
    return [option for options in TAG_OPTIONS.values() for option in options]


def is_known_tag(tag_key: str) -> bool:
    return tag_key in _LABELS


def _group_by_category(tags: List[str]) -> Dict[str, List[str]]:
    grouped: Dict[str, List[str]] = {}
    for tag in tags:
        grouped.setdefault(get_tag_category(tag), []).append(tag)
    return grouped


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def calculate_match_score(parent_tags: List[str], academy_tags: List[str]) -> MatchResult:
    """
    Score how well an academy's tags match a parent's preference tags.

    Only categories the parent answered count towards the total. A
    multi-select category earns credit in proportion to how many of the
    parent's picks the academy covers; single-select categories are all
    or nothing. Non-zero scores are clamped into [50, 95] and academies
    with fewer than three tags lose 20 points.

    Args:
        parent_tags: Tags chosen in the preference test
        academy_tags: Tags advertised by the academy

    Returns:
        MatchResult with score 0..100, up to three reason labels and the
        matched category keys in category order
    """
    if not parent_tags or not academy_tags:
        return MatchResult(score=0)

    parent_by_category = _group_by_category(parent_tags)
    academy_by_category = _group_by_category(academy_tags)

    total_weight = 0
    earned_weight = 0.0
    reasons: List[str] = []
    matched_categories: List[str] = []

    for category_key, category in TAG_CATEGORIES.items():
        parent_cat_tags = parent_by_category.get(category_key, [])
        if not parent_cat_tags:
            continue

        total_weight += category.weight

        academy_cat_tags = academy_by_category.get(category_key, [])
        matches = [tag for tag in parent_cat_tags if tag in academy_cat_tags]
        if not matches:
            continue

        ratio = len(matches) / len(parent_cat_tags) if category.multi_select else 1
        earned_weight += category.weight * ratio
        matched_categories.append(category_key)

        if len(reasons) < MAX_REASONS:
            reasons.append(get_tag_label(matches[0]))

    score = _round_half_up(earned_weight / total_weight * 100) if total_weight > 0 else 0

    if score > 0:
        score = max(SCORE_FLOOR, min(SCORE_CEILING, score))

    if len(academy_tags) < MIN_ACADEMY_TAGS:
        score = max(0, score - SPARSE_TAG_PENALTY)

    return MatchResult(score=score, reasons=reasons, matched_categories=matched_categories)


@dataclass(frozen=True)
class PreferenceQuestion:
    id: str
    question: str
    category: str
    multi_select: bool
    required: bool
    description: Optional[str] = None
    max_select: Optional[int] = None
    skip_label: Optional[str] = None

    @property
    def options(self) -> List[TagOption]:
        return TAG_OPTIONS[self.category]

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'question': self.question,
            'description': self.description,
            'category': self.category,
            'multiSelect': self.multi_select,
            'maxSelect': self.max_select,
            'required': self.required,
            'skipLabel': self.skip_label,
            'options': [
                {'key': option.key, 'label': option.label, 'category': option.category}
                for option in self.options
            ],
        }


PARENT_TEST_QUESTIONS: List[PreferenceQuestion] = [
    PreferenceQuestion('Q1', '자녀의 학년을 선택해주세요', 'grade', False, True),
    PreferenceQuestion(
        'Q2', '어떤 과목을 배우고 싶으신가요?', 'subject', True, True,
        description='최대 3개까지 선택 가능합니다', max_select=3,
    ),
    PreferenceQuestion('Q3', '학습의 주요 목표는 무엇인가요?', 'goal', False, True),
    PreferenceQuestion(
        'Q4', '자녀에게 맞는 학습 스타일은?', 'style', False, True,
        description='아이의 성향에 맞는 스타일을 선택해주세요',
    ),
    PreferenceQuestion('Q5', '선호하는 수업 규모는?', 'class_size', False, True),
    PreferenceQuestion('Q6', '수업 형태를 선택해주세요', 'delivery', False, True),
    PreferenceQuestion(
        'Q7', '중요하게 생각하는 관리 항목은?', 'mgmt', True, True,
        description='최대 2개까지 선택 가능합니다', max_select=2,
    ),
    PreferenceQuestion(
        'Q8', '예산 범위를 선택해주세요', 'budget', False, False,
        description='월 기준 수업료입니다 (선택사항)', skip_label='나중에 선택',
    ),
]


def validate_preference_tags(tags: List[str]) -> List[str]:
    """
    Check a submitted preference test answer set.

    Raises:
        ValueError: On unknown tags, unanswered required questions or
            too many picks in one category

    Returns:
        The tags with duplicates removed, in submission order
    """
    unique_tags = list(dict.fromkeys(tags))

    unknown = [tag for tag in unique_tags if not is_known_tag(tag)]
    if unknown:
        raise ValueError(f'Unknown tags: {", ".join(unknown)}')

    grouped = _group_by_category(unique_tags)

    for question in PARENT_TEST_QUESTIONS:
        picked = grouped.get(question.category, [])
        if question.required and not picked:
            raise ValueError(f'Question {question.id} ({question.category}) requires an answer')

    for category_key, picked in grouped.items():
        category = TAG_CATEGORIES[category_key]
        limit = category.max_select if category.multi_select else 1
        if len(picked) > limit:
            raise ValueError(f'At most {limit} tag(s) allowed for {category_key}')

    return unique_tags


def validate_academy_tags(tags: List[str]) -> List[str]:
    """Academy tag sets only need known keys; there is no per-category limit."""
    unique_tags = list(dict.fromkeys(tags))
    unknown = [tag for tag in unique_tags if not is_known_tag(tag)]
    if unknown:
        raise ValueError(f'Unknown tags: {", ".join(unknown)}')
    return unique_tags
