import logging
from functools import lru_cache
from typing import Any, Dict, Optional

from langchain_groq import ChatGroq # type: ignore

from hvac_diag.config import GROQ_API_KEY, GROQ_MODEL, LLM_MAX_TOKENS, LLM_TIMEOUT_SECONDS
from hvac_diag.agent.costs import with_cost_estimates
from hvac_diag.agent.normalizer import normalize_response
from hvac_diag.agent.prompts.diagnosis_prompt import build_diagnosis_prompt
from hvac_diag.models.diagnosis import DiagnosisResult

log = logging.getLogger(__name__)


class CompletionError(Exception):
    """
    Completion provider unreachable, misconfigured or failing.
    """

    def __init__(self, message: str, status_code: int = 500):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


@lru_cache(maxsize=4)
def get_llm(model: str = GROQ_MODEL) -> ChatGroq:
    if not GROQ_API_KEY:
        raise CompletionError("GROQ_API_KEY not set", status_code=503)

    return ChatGroq(
        api_key=GROQ_API_KEY,
        model=model,
        temperature=0.2,
        max_tokens=LLM_MAX_TOKENS,
        timeout=LLM_TIMEOUT_SECONDS,
        max_retries=0,
    )


def complete(messages, model: str = GROQ_MODEL) -> str:
    llm = get_llm(model)

    try:
        response = llm.invoke(messages)
    except TimeoutError as exc:
        raise CompletionError(f"Completion timed out: {exc}", status_code=503) from exc
    except Exception as exc:
        log.exception("Completion request failed")
        if "timeout" in type(exc).__name__.lower():
            raise CompletionError(f"Completion timed out: {exc}", status_code=503) from exc
        raise CompletionError(str(exc) or type(exc).__name__) from exc

    content = response.content
    if isinstance(content, list):
        content = "".join(
            part.get("text", "") if isinstance(part, dict) else str(part)
            for part in content
        )
    return content or ""


def run_diagnosis(
    system_type: Optional[str],
    system_info: Optional[Dict[str, Any]],
    symptoms: str,
) -> DiagnosisResult:

    # 1️⃣ Build prompt
    messages = build_diagnosis_prompt(system_type, system_info, symptoms)

    # 2️⃣ Call LLM
    ai_text = complete(messages)
    log.debug("Completion returned %d characters", len(ai_text))

    # 3️⃣ Normalise; provenance is only ever set by the offline path
    result = normalize_response(ai_text).model_copy(update={"source": None, "note": None})

    # 4️⃣ Attach the rule-based cost estimate
    return with_cost_estimates(result)
