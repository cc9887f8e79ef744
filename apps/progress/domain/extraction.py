# apps/progress/domain/extraction.py
"""
Wyciąganie zadań z wpisu w dzienniku postępów.

Najpierw pytamy model przez Anthropic Messages API (jedno wywołanie, bez
ponowień). Brak klucza, błąd HTTP/sieci albo nieczytelna odpowiedź kończą się
prostą ekstrakcją regexami.
"""
import json
import logging
import re
from typing import List, Optional

import requests

logger = logging.getLogger(__name__)

ANTHROPIC_URL = "https://api.anthropic.com/v1/messages"
ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 1024

PROMPT_TEMPLATE = """Extract actionable tasks from the following progress update. Return ONLY a JSON array of task titles (strings). If there are no clear actionable tasks, return an empty array [].

Progress update: "{text}"

Rules:
- Each task should be a clear, actionable item
- Keep task titles concise (under 100 characters)
- Focus on TODO items, action items, or things that need to be done
- Don't include tasks that are already completed
- Return valid JSON array only, no other text

JSON array:"""

TASK_PATTERNS = [
    re.compile(r'(?:need to|have to|should|must|todo:|to-do:|action:)\s*([^.!?\n]+)', re.IGNORECASE),
    re.compile(r'^\s*[-*•]\s*([^.!?\n]+)', re.MULTILINE),
    re.compile(r'^\s*\d+[.)]\s*([^.!?\n]+)', re.MULTILINE),
]
JSON_ARRAY = re.compile(r'\[[\s\S]*\]')

MIN_TASK_LENGTH = 4
MAX_TASK_LENGTH = 150
MAX_CLAUSE_LENGTH = 100


def extract_tasks_fallback(text: str) -> List[str]:
    tasks: List[str] = []

    for pattern in TASK_PATTERNS:
        for match in pattern.finditer(text):
            task = match.group(1).strip()
            if MIN_TASK_LENGTH <= len(task) < MAX_TASK_LENGTH and task not in tasks:
                tasks.append(task)

    # Bez wzorców: może to po prostu lista po przecinkach
    if not tasks and ',' in text:
        parts = [p.strip() for p in text.split(',')]
        parts = [p for p in parts if MIN_TASK_LENGTH <= len(p) < MAX_CLAUSE_LENGTH]
        if len(parts) >= 2:
            return list(dict.fromkeys(parts))

    return tasks


def parse_model_reply(content: str) -> Optional[List[str]]:
    """Tablica JSON z odpowiedzi modelu albo None, gdy nie da się jej odczytać."""
    match = JSON_ARRAY.search(content or '')
    if not match:
        return None
    try:
        tasks = json.loads(match.group(0))
    except ValueError:
        return None
    if not isinstance(tasks, list):
        return None

    cleaned: List[str] = []
    for task in tasks:
        if isinstance(task, str) and task.strip() and task.strip() not in cleaned:
            cleaned.append(task.strip())
    return cleaned


class TaskExtractor:
    def __init__(self, api_key: Optional[str], model: str, timeout: float = 20, session=None):
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self.session = session or requests

    def extract(self, text: str) -> List[str]:
        if not text or not isinstance(text, str) or not text.strip():
            raise ValueError("Text is required")

        if not self.api_key:
            return extract_tasks_fallback(text)

        try:
            resp = self.session.post(
                ANTHROPIC_URL,
                headers={
                    "Content-Type": "application/json",
                    "x-api-key": self.api_key,
                    "anthropic-version": ANTHROPIC_VERSION,
                },
                json={
                    "model": self.model,
                    "max_tokens": MAX_TOKENS,
                    "messages": [{"role": "user", "content": PROMPT_TEMPLATE.format(text=text)}],
                },
                timeout=self.timeout,
            )
        except requests.RequestException:
            logger.exception("Task extraction request failed")
            return extract_tasks_fallback(text)

        if not resp.ok:
            logger.error("Task extraction API error %s: %s", resp.status_code, resp.text)
            return extract_tasks_fallback(text)

        try:
            content = resp.json().get("content") or []
            reply = content[0].get("text", "[]") if content else "[]"
        except (ValueError, AttributeError, IndexError):
            reply = None

        tasks = parse_model_reply(reply)
        if tasks is None:
            logger.warning("Could not parse task extraction reply: %r", reply)
            return extract_tasks_fallback(text)
        return tasks
