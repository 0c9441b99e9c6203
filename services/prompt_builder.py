from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

SYSTEM_PROMPT = (
    "You are an expert marketing content creator specializing in Indian regional languages "
    "and cultural contexts. You understand local business needs, festivals, cultural nuances, "
    "and create engaging content that resonates with Indian audiences. Always write in the "
    "requested Indian regional language using proper script and cultural references."
)


class ContentType(str, Enum):
    social_media_post = "social_media_post"
    product_description = "product_description"
    ad_copy = "ad_copy"
    whatsapp_message = "whatsapp_message"
    email_campaign = "email_campaign"


class Language(str, Enum):
    hindi = "Hindi"
    tamil = "Tamil"
    telugu = "Telugu"
    marathi = "Marathi"
    bengali = "Bengali"
    gujarati = "Gujarati"
    kannada = "Kannada"


class Tone(str, Enum):
    friendly = "friendly"
    professional = "professional"
    exciting = "exciting"
    urgent = "urgent"
    warm = "warm"


class Festival(str, Enum):
    diwali = "Diwali"
    holi = "Holi"
    eid = "Eid"
    durga_puja = "Durga Puja"
    ganesh_chaturthi = "Ganesh Chaturthi"
    karva_chauth = "Karva Chauth"
    dussehra = "Dussehra"
    christmas = "Christmas"
    new_year = "New Year"


STYLE_DIRECTIVES: dict[str, str] = {
    ContentType.social_media_post.value: (
        "Include relevant hashtags and emojis. Keep it under 280 characters for better engagement."
    ),
    ContentType.whatsapp_message.value: (
        "Keep it personal and conversational, suitable for WhatsApp Business. "
        "Use appropriate emojis."
    ),
    ContentType.product_description.value: (
        "Highlight key features and benefits. Make it compelling for online listings."
    ),
    ContentType.ad_copy.value: (
        "Create urgency and highlight the main benefit. Include a clear call-to-action."
    ),
    ContentType.email_campaign.value: (
        "Include a compelling subject line and clear call-to-action. "
        "Make it professional yet warm."
    ),
}

LANGUAGE_LABELS: dict[str, str] = {
    Language.hindi.value: "हिंदी (Hindi)",
    Language.tamil.value: "தமிழ் (Tamil)",
    Language.telugu.value: "తెలుగు (Telugu)",
    Language.marathi.value: "मराठी (Marathi)",
    Language.bengali.value: "বাংলা (Bengali)",
    Language.gujarati.value: "ગુજરાતી (Gujarati)",
    Language.kannada.value: "ಕನ್ನಡ (Kannada)",
}

TONE_LABELS: dict[str, str] = {
    Tone.friendly.value: "Friendly & Warm",
    Tone.professional.value: "Professional",
    Tone.exciting.value: "Exciting & Fun",
    Tone.urgent.value: "Urgent & Action",
    Tone.warm.value: "Warm & Personal",
}

CONTENT_TYPE_LABELS: dict[str, str] = {
    ContentType.social_media_post.value: "Social Media Post",
    ContentType.product_description.value: "Product Description",
    ContentType.ad_copy.value: "Advertisement Copy",
    ContentType.whatsapp_message.value: "WhatsApp Message",
    ContentType.email_campaign.value: "Email Campaign",
}


@dataclass(frozen=True)
class ContentRequest:
    product_service: str
    content_type: str
    language: str
    tone: str
    key_message: str | None = None
    target_audience: str | None = None
    festival_context: str | None = None


def _present(value: str | None) -> str | None:
    if value is None:
        return None
    cleaned = value.strip()
    return cleaned or None


def format_content_type(content_type: str) -> str:
    """Human readable content type: ``social_media_post`` -> ``Social Media Post``."""
    return content_type.replace("_", " ").title()


def build_prompt(request: ContentRequest) -> str:
    content_type = request.content_type.strip()
    language = request.language.strip()

    prompt = (
        f"Write a {content_type.replace('_', ' ')} in {language} "
        f'for "{request.product_service.strip()}"'
    )

    key_message = _present(request.key_message)
    if key_message:
        prompt += f' with the key message: "{key_message}"'

    audience = _present(request.target_audience)
    if audience:
        prompt += f" targeting {audience}"

    festival = _present(request.festival_context)
    if festival:
        prompt += f" for {festival} festival"

    prompt += (
        f". Make it {request.tone.strip()}, culturally relevant for Indian customers, "
        "and engaging for local businesses. "
    )

    # Unmapped content types get no stylistic directive.
    prompt += STYLE_DIRECTIVES.get(content_type, "")

    prompt += f" Use proper {language} script and ensure cultural sensitivity for Indian markets."
    return prompt
