from typing import Dict, List, Tuple

from kisan_saathi.models.chat_session import Intent, QuickAction

# Checked top to bottom; the first rule with any keyword hit wins.
INTENT_RULES: List[Tuple[Tuple[str, ...], Intent]] = [
    (("weather",), Intent.WEATHER),
    (("price", "market"), Intent.MARKET_PRICE),
    (("crop", "plant"), Intent.CROP_PLANNING),
    (("soil",), Intent.SOIL_HEALTH),
    (("pest", "disease"), Intent.PEST_DISEASE),
    (("fertilizer",), Intent.FERTILIZER),
]

RESPONSES: Dict[Intent, str] = {
    Intent.WEATHER: (
        "I'll get you the latest weather information for your location. "
        "Please share your location or specify the area you're interested in. "
        "Check the Weather Alerts section for detailed forecasts and farming "
        "recommendations."
    ),
    Intent.MARKET_PRICE: (
        "I can help you with current market prices for various crops. "
        "Which crop are you interested in selling or buying? You can also "
        "check the Market Prices section for live updates from APMCs across "
        "India."
    ),
    Intent.CROP_PLANNING: (
        "I'd be happy to help with crop recommendations! What's your location "
        "and what season are you planning for? I can suggest the best crops "
        "based on your soil type, climate, and market demand."
    ),
    Intent.SOIL_HEALTH: (
        "For soil health analysis, I can provide recommendations based on "
        "your soil type and crop requirements. Do you have any recent soil "
        "test reports? I can help interpret the results and suggest "
        "improvements."
    ),
    Intent.PEST_DISEASE: (
        "I can help identify pests and diseases! Please describe the symptoms "
        "you're seeing, or if you have images, I can analyze them. Early "
        "detection is key to effective treatment."
    ),
    Intent.FERTILIZER: (
        "For fertilizer recommendations, I need to know your crop type, "
        "growth stage, and soil conditions. NPK requirements vary by crop and "
        "season. What specific crop are you growing?"
    ),
    Intent.UNKNOWN: (
        "That's a great question! I'm here to help with all aspects of "
        "farming. Could you provide more specific details so I can give you "
        "the most accurate advice?"
    ),
}

WELCOME_MESSAGE = """Namaste! 🙏 I'm your AI Crop Advisor. I'm here to help you with:

• Crop selection and planning
• Weather-based alerts
• Pest and disease identification
• Soil health recommendations
• Market prices
• Fertilizer guidance

How can I assist you today?"""

QUICK_ACTIONS: List[QuickAction] = [
    QuickAction(
        id="weather",
        label="Weather Forecast",
        prompt="Show me the weather forecast for my area",
    ),
    QuickAction(
        id="crops",
        label="Seasonal Crops",
        prompt="What crops should I plant this season?",
    ),
    QuickAction(
        id="prices",
        label="Market Prices",
        prompt="Show me current market prices",
    ),
    QuickAction(
        id="soil",
        label="Soil Health",
        prompt="Help me with soil health recommendations",
    ),
]


def classify(text: str) -> Intent:
    """
    Maps free text to a single intent using a fixed keyword decision list.

    Matching is a case-insensitive substring test, so "planting" hits the
    "plant" keyword. There is no scoring or negation handling: a message
    naming both a crop and the soil is a crop-planning question because that
    rule is checked first.
    """
    lowered = text.lower()
    for keywords, intent in INTENT_RULES:
        if any(keyword in lowered for keyword in keywords):
            return intent
    return Intent.UNKNOWN


def respond(text: str) -> str:
    """Returns the canned reply for the intent of `text`."""
    return RESPONSES[classify(text)]


def get_quick_action_prompt(action_id: str) -> str | None:
    for action in QUICK_ACTIONS:
        if action.id == action_id:
            return action.prompt
    return None
