"""
Router pour l'assistant d'écriture IA.

Endpoints:
- GET /assist/status - le modèle est-il joignable
- POST /assist/{action} - summarize, improve, translate, shorten, expand, continue, ask

Les handlers sont des ``def`` synchrones: FastAPI les exécute dans son
threadpool, un appel lent au modèle ne bloque pas les autres requêtes.
"""

from fastapi import APIRouter
from notebase.core.config import settings
from notebase.schemas.assist import AssistRequest, AssistResponse, AssistStatus
from notebase.services.ai_service import is_ai_available, run_assist

router = APIRouter(prefix="/assist", tags=["assist"])


@router.get("/status", response_model=AssistStatus)
def assist_status():
    return AssistStatus(available=is_ai_available(), model=settings.AI_MODEL)


@router.post("/{action}", response_model=AssistResponse)
def assist(action: str, request: AssistRequest):
    """
    Exemple:
    POST /api/assist/translate
    {"content": "Bonjour", "language": "English", "sessionKey": "page-42"}
    ->
    {"action": "translate", "ok": true, "text": "Hello", ...}

    Si le modèle échoue: ok=false, error renseigné, text = texte de repli.
    """
    return run_assist(action, request.content, request.language, request.context, request.session_key)
