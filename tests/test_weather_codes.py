import pytest

from tripview.weather.codes import ConditionCategory, classify_condition, condition_label


@pytest.mark.parametrize(
    "code, expected",
    [
        (0, ConditionCategory.CLEAR),
        (1, ConditionCategory.PARTLY_CLOUDY),
        (2, ConditionCategory.PARTLY_CLOUDY),
        (3, ConditionCategory.OVERCAST),
        (45, ConditionCategory.OVERCAST),
        (48, ConditionCategory.OVERCAST),
        (51, ConditionCategory.RAIN),
        (61, ConditionCategory.RAIN),
        (67, ConditionCategory.RAIN),
        (71, ConditionCategory.SNOW),
        (77, ConditionCategory.SNOW),
        (80, ConditionCategory.RAIN),
        (82, ConditionCategory.RAIN),
        (85, ConditionCategory.SNOW),
        (86, ConditionCategory.SNOW),
        (95, ConditionCategory.THUNDERSTORM),
        (99, ConditionCategory.THUNDERSTORM),
    ],
)
def test_classify_condition_known_codes(code, expected):
    assert classify_condition(code) is expected


@pytest.mark.parametrize("code", [-5, 4, 20, 68, 90, 100, 150])
def test_classify_condition_unexpected_codes_fall_back_to_unsettled(code):
    assert classify_condition(code) is ConditionCategory.UNSETTLED


def test_classify_condition_is_total_and_labelled():
    for code in range(-20, 200):
        category = classify_condition(code)
        assert isinstance(category, ConditionCategory)
        assert condition_label(category)
