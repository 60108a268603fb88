"""按语言选择系统提示词。

系统提示词只在构造请求时注入，不会写入会话存储。
请求的语言不在表中时回退到英文。
"""

from typing import Mapping


DEFAULT_LANGUAGE = "en"

SUPPORTED_LANGUAGES: Mapping[str, str] = {
    "en": "English",
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "zh": "Chinese",
    "ja": "Japanese",
    "ko": "Korean",
    "ar": "Arabic",
    "hi": "Hindi",
    "ru": "Russian",
}

LANGUAGE_SYSTEM_PROMPTS: Mapping[str, str] = {
    "en": "You are a helpful, multilingual AI assistant powered by Groq. Respond in English.",
    "es": "Eres un asistente de IA multilingüe útil desarrollado por Groq. Responde en español.",
    "fr": "Vous êtes un assistant IA multilingue utile alimenté par Groq. Répondez en français.",
    "de": "Sie sind ein hilfreicher, mehrsprachiger KI-Assistent, der von Groq entwickelt wurde. Antworten Sie auf Deutsch.",
    "zh": "您是由Groq提供支持的多语言AI助手。请用中文回答。",
    "ja": "あなたはGroqを搭載した役立つ多言語AIアシスタントです。日本語で回答してください。",
    "ko": "당신은 Groq에서 제공하는 다국어 AI 어시스턴트입니다. 한국어로 대답해주세요.",
    "ar": "أنت مساعد ذكاء اصطناعي متعدد اللغات مفيد مدعوم من Groq. الرجاء الرد باللغة العربية.",
    "hi": "आप Groq द्वारा संचालित एक सहायक, बहुभाषी AI सहायक हैं। कृपया हिंदी में उत्तर दें।",
    "ru": "Вы полезный многоязычный ИИ-ассистент, работающий на Groq. Пожалуйста, отвечайте на русском языке.",
}


def get_system_prompt(language: str = DEFAULT_LANGUAGE) -> str:
    """返回指定语言的系统提示词，未知语言回退到英文。"""

    return LANGUAGE_SYSTEM_PROMPTS.get(language) or LANGUAGE_SYSTEM_PROMPTS[DEFAULT_LANGUAGE]


def language_name(code: str) -> str:
    return SUPPORTED_LANGUAGES.get(code) or SUPPORTED_LANGUAGES[DEFAULT_LANGUAGE]
