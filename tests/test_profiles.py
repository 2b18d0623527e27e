import pytest

from exceptions import ClientInputError, UnknownCompressionLevel
from profiles import DEFAULT_LEVEL, available_levels, get_profile


def test_three_distinct_profiles_with_increasing_resolution():
    low, medium, high = get_profile('low'), get_profile('medium'), get_profile('high')

    assert len({low, medium, high}) == 3
    assert low.image_resolution < medium.image_resolution < high.image_resolution
    assert (low.pdf_settings, medium.pdf_settings, high.pdf_settings) == ('/screen', '/ebook', '/printer')
    assert (low.image_resolution, medium.image_resolution, high.image_resolution) == (72, 150, 300)


@pytest.mark.parametrize('level', [None, '', '   '])
def test_missing_level_uses_middle_tier(level):
    assert DEFAULT_LEVEL == 'medium'
    assert get_profile(level) == get_profile('medium')


def test_lookup_ignores_case_and_whitespace():
    assert get_profile(' HIGH ') == get_profile('high')


def test_original_form_names_are_accepted():
    assert get_profile('little') == get_profile('low')
    assert get_profile('middle') == get_profile('medium')


def test_unknown_level_is_a_client_error():
    with pytest.raises(UnknownCompressionLevel) as excinfo:
        get_profile('bogus')

    assert isinstance(excinfo.value, ClientInputError)
    assert excinfo.value.status_code == 400
    assert excinfo.value.level == 'bogus'
    assert 'low, medium, high' in excinfo.value.message


def test_available_levels():
    assert available_levels() == ['low', 'medium', 'high']
