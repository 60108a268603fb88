from groq_chat.prompts import LANGUAGE_SYSTEM_PROMPTS, SUPPORTED_LANGUAGES, get_system_prompt, language_name
from groq_chat.providers.registry import (
    DEFAULT_MODEL,
    MODELS,
    display_name,
    get_model_descriptor,
    is_known_model,
    list_models,
)


def test_model_registry():
    assert DEFAULT_MODEL == "llama3-70b-8192"
    assert [m.id for m in list_models()] == [
        "llama3-70b-8192",
        "llama3-70b-8192-instruct",
        "mixtral-8x7b-32768",
        "gemma-7b-it",
    ]
    mixtral = get_model_descriptor("mixtral-8x7b-32768")
    assert mixtral.context_window_tokens == 32768
    assert mixtral.display_name == "Mixtral (8x7B)"
    assert get_model_descriptor("unknown") is None
    assert not is_known_model("unknown")
    assert all(k == v.id for k, v in MODELS.items())


def test_display_name_falls_back_to_default():
    assert display_name("gemma-7b-it") == "Gemma (7B)"
    assert display_name("nope") == "Llama 3 (70B)"


def test_every_language_has_a_prompt():
    assert set(SUPPORTED_LANGUAGES) == set(LANGUAGE_SYSTEM_PROMPTS)
    assert get_system_prompt("fr").startswith("Vous êtes")
    assert get_system_prompt("xx") == LANGUAGE_SYSTEM_PROMPTS["en"]
    assert language_name("zh") == "Chinese"
    assert language_name("xx") == "English"
