"""
Service IA - appels HTTP au modèle de génération (API compatible Ollama)

Chaque action d'écriture a son template de prompt. En cas d'échec on ne
plante pas: on renvoie un texte de repli et ok=False pour que l'UI
affiche l'erreur.
"""

import requests
import itertools
import logging
import threading
from datetime import datetime
from typing import Optional
from notebase.core.config import settings
from notebase.core.errors import ExternalServiceError, ValidationError
from notebase.schemas.assist import AssistResponse

logger = logging.getLogger(__name__)

PROMPTS = {
    "summarize": "Summarize the following note concisely:\n\n{content}",
    "improve": (
        "Improve the writing of the following text, fixing grammar and making it more "
        "professional. Return ONLY the improved text:\n\n{content}"
    ),
    "translate": "Translate the following text into {language}. Return ONLY the translation:\n\n{content}",
    "shorten": "Rewrite the following text to be shorter while keeping its meaning. Return ONLY the rewritten text:\n\n{content}",
    "expand": "Expand the following text with more detail. Return ONLY the expanded text:\n\n{content}",
    "continue": "Continue writing the following text in the same style. Return ONLY the continuation:\n\n{content}",
    "ask": (
        "You are a helpful assistant inside a note-taking workspace.\n\n"
        "Context:\n{context}\n\nQuestion:\n{content}\n\nAnswer:"
    ),
}

SUMMARY_FAILURE = "Failed to generate summary."
CHAT_FAILURE = "Sorry, I encountered an error."


def is_ai_available() -> bool:
    try:
        response = requests.get(f"{settings.AI_BASE_URL}/api/tags", timeout=5)
        return response.status_code == 200
    except requests.RequestException as e:
        logger.warning(f"AI service not reachable: {e}")
        return False


def build_prompt(action: str, content: str, language: Optional[str] = None, context: Optional[str] = None) -> str:
    if action not in PROMPTS:
        raise ValidationError(f"Unknown assist action '{action}'")
    return PROMPTS[action].format(
        content=content,
        language=language or "English",
        context=context or "No context provided."
    )


def _count(value) -> int:
    return value if isinstance(value, int) and not isinstance(value, bool) else 0


def generate(prompt: str, model: Optional[str] = None) -> tuple[str, int, int]:
    """Appel bloquant, borné par AI_TIMEOUT. Renvoie (texte, tokens, durée ms)"""
    model = model or settings.AI_MODEL

    try:
        start_time = datetime.utcnow()

        response = requests.post(
            f"{settings.AI_BASE_URL}/api/generate",
            json={"model": model, "prompt": prompt, "stream": False},
            timeout=settings.AI_TIMEOUT
        )

        response.raise_for_status()
        data = response.json()

    except requests.Timeout as e:
        logger.error(f"AI request timed out: {e}")
        raise ExternalServiceError(f"AI request timed out after {settings.AI_TIMEOUT:g}s")
    except (requests.RequestException, ValueError) as e:
        logger.error(f"AI request failed: {e}")
        raise ExternalServiceError(f"AI request failed: {e}")

    if not isinstance(data, dict) or not isinstance(data.get("response"), str):
        logger.error(f"AI service returned an unexpected payload: {data!r:.200}")
        raise ExternalServiceError("AI service returned an unexpected payload")

    text = data["response"].strip()
    tokens = _count(data.get("prompt_eval_count")) + _count(data.get("eval_count"))
    elapsed_ms = int((datetime.utcnow() - start_time).total_seconds() * 1000)

    return text, tokens, elapsed_ms


def fallback_text(action: str, content: str) -> str:
    if action == "summarize":
        return SUMMARY_FAILURE
    if action == "ask":
        return CHAT_FAILURE
    # improve, translate...: on rend le texte d'origine inchangé
    return content


class AssistTracker:
    """Dernier appel en cours par session: un appel plus récent rend les autres obsolètes.

    Une session n'est suivie que tant qu'un appel est en cours.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._tickets = itertools.count(1)
        self._latest = {}

    def __len__(self):
        with self._lock:
            return len(self._latest)

    def begin(self, session_key: str) -> int:
        with self._lock:
            ticket = next(self._tickets)
            self._latest[session_key] = ticket
            return ticket

    def is_current(self, session_key: str, ticket: int) -> bool:
        with self._lock:
            return self._latest.get(session_key) == ticket

    def finish(self, session_key: str, ticket: int) -> bool:
        """True si l'appel était le plus récent; la session est alors oubliée"""
        with self._lock:
            if self._latest.get(session_key) != ticket:
                return False
            del self._latest[session_key]
            return True


tracker = AssistTracker()


def run_assist(
    action: str,
    content: str,
    language: Optional[str] = None,
    context: Optional[str] = None,
    session_key: Optional[str] = None
) -> AssistResponse:
    prompt = build_prompt(action, content, language, context)
    ticket = tracker.begin(session_key) if session_key else None

    try:
        text, tokens, elapsed_ms = generate(prompt)
        result = AssistResponse(
            action=action,
            ok=True,
            text=text,
            model=settings.AI_MODEL,
            tokens_used=tokens,
            execution_time_ms=elapsed_ms
        )
    except ExternalServiceError as e:
        result = AssistResponse(
            action=action,
            ok=False,
            text=fallback_text(action, content),
            error=e.detail,
            model=settings.AI_MODEL
        )

    # résultat d'un appel dépassé: jeté, jamais fusionné
    if session_key and not tracker.finish(session_key, ticket):
        logger.info(f"Discarding stale '{action}' result for session {session_key}")
        return AssistResponse(action=action, ok=result.ok, discarded=True, model=settings.AI_MODEL)

    return result
