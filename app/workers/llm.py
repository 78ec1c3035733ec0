from __future__ import annotations

from typing import Any, List, Optional

from pydantic_ai import Agent
from pydantic_ai.messages import (
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    UserPromptPart,
)
from pydantic_ai.models.openai import OpenAIChatModel
from pydantic_ai.providers.litellm import LiteLLMProvider

from app.adapters.base import BaseTextGenerator
from app.config import get_settings
from app.constants.default_system_prompt import DefaultSystemPrompt
from app.exceptions import UpstreamUnavailableError
from app.infra.logging_config import get_logger

logger = get_logger()


def _history_to_message_list(history: List[dict[str, str]]) -> List[Any]:
    """Convert list of {role, content} to pydantic_ai ModelMessage list for message_history."""
    out: List[Any] = []
    for item in history:
        role = (item.get("role") or "user").lower()
        content = (item.get("content") or "").strip()
        if not content:
            continue
        if role == "user":
            out.append(ModelRequest(parts=[UserPromptPart(content=content)]))
        elif role == "assistant":
            out.append(ModelResponse(parts=[TextPart(content=content)]))
        elif role == "system":
            out.append(ModelRequest(parts=[SystemPromptPart(content=content)]))
    return out


def _message_list_with_system_prompt(
    system_prompt: str,
    history: List[dict[str, str]],
) -> List[Any]:
    """Build message_history with system prompt always first, then conversation history."""

    # https://github.com/pydantic/pydantic-ai/issues/4039
    # https://ai.pydantic.dev/agent/#system-prompts
    system_message = ModelRequest(parts=[SystemPromptPart(content=system_prompt)])
    rest = _history_to_message_list(history)
    return [system_message] + rest


def _split_lines(text: str) -> List[str]:
    lines = []
    for raw in text.splitlines():
        line = raw.strip().lstrip("-*•").strip()
        if line:
            lines.append(line)
    return lines


class LLMTextGenerator(BaseTextGenerator):
    """Generates replies and ending credits with a LiteLLM-backed chat model."""

    name = "llm"

    def __init__(
        self,
        model_name: str,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        timeout: float = 30.0,
        system_prompt: Optional[str] = None,
        summary_prompt: Optional[str] = None,
    ) -> None:
        provider = LiteLLMProvider(api_key=api_key, api_base=api_base)
        model = OpenAIChatModel(model_name, provider=provider)
        logger.info(f"Initializing LLM text generator with model {model_name}")
        self._system_prompt = system_prompt or DefaultSystemPrompt.CONTENT
        self._summary_prompt = summary_prompt or DefaultSystemPrompt.SUMMARY
        self._timeout = timeout
        self._agent = Agent(model)

    def reply(
        self,
        content: str,
        session_id: str,
        character: Optional[str] = None,
    ) -> str:
        system_prompt = self._system_prompt
        if character:
            system_prompt = (
                system_prompt.rstrip() + f"\n\nRespond in the voice of {character}."
            )
        output = self._run(content, _message_list_with_system_prompt(system_prompt, []))
        if not output.strip():
            raise UpstreamUnavailableError("LLM returned an empty reply")
        return output.strip()

    def summarize(
        self,
        session_id: str,
        messages: list[dict[str, str]],
        count: int,
    ) -> list[str]:
        prompt = (
            f"Write the ending credits for the conversation above in {count} lines."
        )
        output = self._run(
            prompt, _message_list_with_system_prompt(self._summary_prompt, messages)
        )
        return _split_lines(output)

    def _run(self, prompt: str, message_history: List[Any]) -> str:
        try:
            result = self._agent.run_sync(
                prompt,
                message_history=message_history,
                model_settings={"timeout": self._timeout},
            )
        except Exception as e:
            # Provider, transport and timeout errors all mean "no text".
            raise UpstreamUnavailableError(f"LLM call failed: {e}") from e
        return str(result.output)


def build_llm_generator_from_env() -> LLMTextGenerator:
    settings = get_settings()
    logger.info(
        "LLM generator config: model=%s, api_key=%s, api_base=%s",
        settings.llm_model,
        "set" if settings.litellm_api_key else "not set",
        settings.litellm_api_base or "(default)",
    )
    if not settings.litellm_api_key:
        logger.warning(
            "LITELLM_API_KEY is not set; set it to a valid OpenAI or LiteLLM API key to avoid 401 errors."
        )

    return LLMTextGenerator(
        model_name=settings.llm_model,
        api_key=settings.litellm_api_key,
        api_base=settings.litellm_api_base,
        timeout=settings.rag_timeout_seconds,
    )
