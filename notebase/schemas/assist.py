from typing import Optional
from notebase.schemas.base import CamelModel

# Schemas assistant IA

class AssistRequest(CamelModel):
    content: str = ""
    language: Optional[str] = None  # pour "translate"
    context: Optional[str] = None  # pour "ask"
    session_key: Optional[str] = None  # un nouvel appel rend les précédents obsolètes

class AssistResponse(CamelModel):
    action: str
    ok: bool
    text: Optional[str] = None
    error: Optional[str] = None
    discarded: bool = False
    model: Optional[str] = None
    tokens_used: int = 0
    execution_time_ms: int = 0

class AssistStatus(CamelModel):
    available: bool
    model: str
