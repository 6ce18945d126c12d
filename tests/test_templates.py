# tests/test_templates.py

import pytest

from qr_styling.errors import ConfigurationError
from qr_styling.models import StylingOptions
from qr_styling.pipeline import render_content
from qr_styling.templates import (
    TEMPLATES,
    apply_template,
    get_template,
    list_templates,
    recommend_templates,
    template_preview,
)


def test_list_templates() -> None:
    listed = list_templates()
    assert [t['key'] for t in listed] == list(TEMPLATES)
    assert all(t['name'] and t['description'] for t in listed)


@pytest.mark.parametrize("name", ['gradient-modern', 'Gradient Modern', 'GRADIENT_MODERN'])
def test_lookup_is_forgiving(name: str) -> None:
    assert get_template(name)['name'] == 'Gradient Modern'


def test_unknown_template() -> None:
    with pytest.raises(ConfigurationError) as info:
        get_template('neon')
    assert info.value.field == 'template'


def test_overrides_win_and_templates_stay_pristine() -> None:
    opts = apply_template('minimalist', {'frameText': 'Menu', 'style': 'dots', 'margin': None})
    assert opts['style'] == 'dots'
    assert opts['frameText'] == 'Menu'
    assert opts['margin'] == 4
    assert TEMPLATES['MINIMALIST']['customization']['style'] == 'square'


def test_template_preview() -> None:
    preview = template_preview('vibrant')
    assert preview['settings']['hasGradient']
    assert preview['settings']['hasFrame']
    assert preview['settings']['colors']['background'] == '#FFF5E6'


def test_recommendations() -> None:
    assert recommend_templates('WiFi') == ['WIFI_SHARING', 'MINIMALIST']
    assert recommend_templates('unknown') == ['MINIMALIST', 'CORPORATE']
    assert all(key in TEMPLATES for keys in map(recommend_templates, ['url', 'vcard', 'event', 'social'])
               for key in keys)


@pytest.mark.parametrize("key", list(TEMPLATES))
def test_every_template_parses_and_renders(key: str) -> None:
    options = apply_template(key)
    StylingOptions.from_dict(options)

    result = render_content("https://example.com/t", options, item_id=key)
    assert result.success, result.message
    assert result.diagnostics == [], [e.to_dict() for e in result.diagnostics]
