# =============================================================================
# core/greeting.py  —  Multilingual greeting
# =============================================================================
# Unsupported language codes never get here: the input model only accepts
# the keys of GREETINGS.
# =============================================================================

from core.models import ToolResult

GREETINGS: dict[str, str] = {
    "ko": "안녕하세요, {name}님!",
    "en": "Hey there, {name}! 👋 Nice to meet you!",
    "ja": "こんにちは、{name}さん！",
    "zh": "你好，{name}！",
    "es": "¡Hola, {name}! ¿Qué tal?",
    "fr": "Bonjour, {name} ! Enchanté(e) !",
    "de": "Hallo, {name}! Freut mich!",
}

DEFAULT_LANGUAGE = "en"


def greet(name: str, language: str = DEFAULT_LANGUAGE) -> str:
    # names are substituted verbatim, braces included
    template = GREETINGS.get(language, GREETINGS[DEFAULT_LANGUAGE])
    return template.replace("{name}", name)


def handle_greet(args) -> ToolResult:
    return ToolResult.text(greet(args.name, args.language))
