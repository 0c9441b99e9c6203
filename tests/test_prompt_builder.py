import pytest

from services.prompt_builder import (
    STYLE_DIRECTIVES,
    SYSTEM_PROMPT,
    ContentRequest,
    ContentType,
    Festival,
    Language,
    Tone,
    build_prompt,
    format_content_type,
)


def make_request(**overrides) -> ContentRequest:
    fields = {
        "product_service": "Diwali Thali",
        "content_type": "social_media_post",
        "language": "Hindi",
        "tone": "exciting",
    }
    fields.update(overrides)
    return ContentRequest(**fields)


def test_diwali_thali_social_post():
    prompt = build_prompt(make_request(festival_context="Diwali"))

    assert "social media post" in prompt
    assert "Hindi" in prompt
    assert "Diwali Thali" in prompt
    assert "exciting" in prompt
    assert "Diwali festival" in prompt
    assert "hashtags and emojis" in prompt
    assert "280 characters" in prompt


def test_clause_order():
    prompt = build_prompt(
        make_request(
            key_message="20% off",
            target_audience="Families",
            festival_context="Diwali",
        )
    )

    assert prompt.startswith('Write a social media post in Hindi for "Diwali Thali"')
    positions = [
        prompt.index('with the key message: "20% off"'),
        prompt.index("targeting Families"),
        prompt.index("for Diwali festival"),
        prompt.index("Make it exciting, culturally relevant for Indian customers"),
        prompt.index(STYLE_DIRECTIVES["social_media_post"]),
        prompt.index("Use proper Hindi script"),
    ]
    assert positions == sorted(positions)
    assert prompt.endswith("ensure cultural sensitivity for Indian markets.")


def test_optional_clauses_omitted_when_blank():
    prompt = build_prompt(make_request(key_message="", target_audience="   ", festival_context=None))

    assert "key message" not in prompt
    assert "targeting" not in prompt
    assert "festival" not in prompt


@pytest.mark.parametrize("content_type", [item.value for item in ContentType])
def test_each_content_type_gets_exactly_its_directive(content_type):
    prompt = build_prompt(make_request(content_type=content_type))

    for mapped_type, directive in STYLE_DIRECTIVES.items():
        if mapped_type == content_type:
            assert prompt.count(directive) == 1
        else:
            assert directive not in prompt


def test_unknown_content_type_skips_directive_but_keeps_mandatory_clauses():
    prompt = build_prompt(make_request(content_type="press_release"))

    assert not any(directive in prompt for directive in STYLE_DIRECTIVES.values())
    assert prompt.startswith('Write a press release in Hindi for "Diwali Thali"')
    assert "Make it exciting" in prompt
    assert "Use proper Hindi script" in prompt


def test_prompt_is_deterministic():
    request = make_request(key_message="Free delivery")
    assert build_prompt(request) == build_prompt(request)


def test_enumerations_are_closed_sets():
    assert len(ContentType) == 5
    assert len(Language) == 7
    assert len(Tone) == 5
    assert len(Festival) == 9
    assert set(STYLE_DIRECTIVES) == {item.value for item in ContentType}


def test_system_prompt_mentions_regional_languages():
    assert "Indian regional languages" in SYSTEM_PROMPT


def test_format_content_type():
    assert format_content_type("social_media_post") == "Social Media Post"
    assert format_content_type("ad_copy") == "Ad Copy"
