"""
Interface strings in English and Russian.
"""

from typing import Dict

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "GrammarGuard",
        "input_text": "Input Text",
        "upload_file": "Upload File",
        "corrected_text": "Corrected Text",
        "analysis_results": "Analysis Results",
        "shortened_text": "Shortened Text",
        "history": "History",
        "settings": "Settings",
        "issues_found": "Potential issues found",
        "enter_text": "Enter or paste your text here...",
        "no_analysis": "Enter text to see corrected version",
        "no_text": "No text to show",
        "no_history": "No history available",
        "delete": "Delete",
        "load": "Load",
        "history_loaded": "Text loaded from history",
        "history_deleted": "History entry deleted",
        "theme": "Theme",
        "dark_mode": "Dark mode",
        "language": "Language",
        "font_size": "Font Size",
        "auto_apply": "Apply corrections automatically",
        "reset": "Reset to Defaults",
        "word_stats": "Word Stats",
        "words": "Words",
        "characters": "Characters",
        "sentences": "Sentences",
        "average_word_length": "Average Word Length",
        "long_words": "Long Words",
        "no_long_words": "No long words found.",
        "common_words": "Common Words",
        "no_common_words": "No common words found.",
        "check": "Check",
        "file_error": "Could not read the file",
    },
    "ru": {
        "title": "ГраммарГард",
        "input_text": "Ввод текста",
        "upload_file": "Загрузить файл",
        "corrected_text": "Исправленный текст",
        "analysis_results": "Результаты анализа",
        "shortened_text": "Сокращенный текст",
        "history": "История",
        "settings": "Настройки",
        "issues_found": "Потенциальных проблем найдено",
        "enter_text": "Введите или вставьте текст сюда...",
        "no_analysis": "Введите текст для просмотра исправленной версии",
        "no_text": "Текст для показа отсутствует",
        "no_history": "История отсутствует",
        "delete": "Удалить",
        "load": "Открыть",
        "history_loaded": "Текст загружен из истории",
        "history_deleted": "Запись истории удалена",
        "theme": "Тема",
        "dark_mode": "Темный режим",
        "language": "Язык",
        "font_size": "Размер шрифта",
        "auto_apply": "Применять исправления автоматически",
        "reset": "Сбросить настройки",
        "word_stats": "Статистика слов",
        "words": "Слов",
        "characters": "Символов",
        "sentences": "Предложений",
        "average_word_length": "Средняя длина слова",
        "long_words": "Длинные слова",
        "no_long_words": "Длинные слова не найдены.",
        "common_words": "Частые слова",
        "no_common_words": "Частые слова не найдены.",
        "check": "Проверить",
        "file_error": "Не удалось прочитать файл",
    },
}


def translate(language: str, key: str) -> str:
    """Look up ``key`` for ``language``, falling back to English, then to the key."""
    strings = TRANSLATIONS.get(language, TRANSLATIONS["en"])
    return strings.get(key, TRANSLATIONS["en"].get(key, key))
