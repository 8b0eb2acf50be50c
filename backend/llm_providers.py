import os
from json.decoder import JSONDecodeError
from typing import Any, Dict, Optional

from openai import OpenAI

DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"

# Player config keys that describe the player, not the request
PLAYER_FIELDS = {'name', 'provider', 'kwargs', 'model_name'}


def _sanitize_env_value(value: Optional[str]) -> Optional[str]:
    """
    Trim whitespace and one pair of matching surrounding quotes.

    Values exported as OPENROUTER_API_KEY="sk-or-..." keep their quotes in some
    shells, and the SDK would send them verbatim.
    """
    if value is None:
        return None
    cleaned = value.strip()
    if len(cleaned) >= 2 and cleaned[0] == cleaned[-1] and cleaned[0] in ('"', "'"):
        cleaned = cleaned[1:-1].strip()
    return cleaned


def _openrouter_headers(explicit: Optional[Dict[str, str]]) -> Optional[Dict[str, str]]:
    """Attribution headers from OPENROUTER_SITE_URL / OPENROUTER_SITE_NAME, overridden by `explicit`."""
    headers: Dict[str, str] = {}
    referer = os.getenv("OPENROUTER_SITE_URL")
    title = os.getenv("OPENROUTER_SITE_NAME", "Toroid Snake")
    if referer:
        headers["HTTP-Referer"] = referer
    if title:
        headers["X-Title"] = title
    headers.update(explicit or {})
    return headers or None


class LLMProviderInterface:
    """
    What an LLM player needs from a backend: one prompt in, text and token usage out.
    """
    def get_response(self, prompt: str) -> Dict[str, Any]:
        raise NotImplementedError("Subclasses should implement this method.")

    @staticmethod
    def extract_api_kwargs(config: Dict[str, Any]) -> Dict[str, Any]:
        """
        Request options from a player config.

        The nested 'kwargs' dict is merged first; any other top-level key that
        is not a player field (temperature, max_tokens, ...) is passed through.
        """
        api_kwargs = dict(config.get('kwargs', {}))
        for field_name, value in config.items():
            if field_name not in PLAYER_FIELDS:
                api_kwargs[field_name] = value
        return api_kwargs


class OpenRouterProvider(LLMProviderInterface):
    def __init__(self, api_key: str, config: Dict[str, Any]):
        base_url = _sanitize_env_value(os.getenv("OPENROUTER_BASE_URL")) or DEFAULT_OPENROUTER_BASE_URL
        self.client = OpenAI(api_key=_sanitize_env_value(api_key) or api_key, base_url=base_url)
        self.model_name = config['model_name']
        self.api_kwargs = self.extract_api_kwargs(config)
        self.extra_headers = _openrouter_headers(self.api_kwargs.pop('extra_headers', None))

    def get_response(self, prompt: str) -> Dict[str, Any]:
        request_kwargs = dict(self.api_kwargs)
        if self.extra_headers:
            request_kwargs['extra_headers'] = self.extra_headers

        try:
            response = self.client.chat.completions.create(
                model=self.model_name,
                messages=[{"role": "user", "content": prompt}],
                **request_kwargs,
            )
        except JSONDecodeError as exc:
            raise ValueError(
                f"OpenRouter returned a non-JSON payload for '{self.model_name}'. "
                "The model slug is probably wrong, or the request hit an HTML error page."
            ) from exc

        usage = getattr(response, 'usage', None)
        return {
            "text": (response.choices[0].message.content or "").strip(),
            "input_tokens": usage.prompt_tokens if usage else 0,
            "output_tokens": usage.completion_tokens if usage else 0,
        }


def create_llm_provider(player_config: Dict[str, Any]) -> LLMProviderInterface:
    """
    Build the provider for an LLM player. Every model is served through OpenRouter.

    Raises:
        ValueError: if OPENROUTER_API_KEY is missing or blank.
    """
    api_key = _sanitize_env_value(os.getenv("OPENROUTER_API_KEY"))
    if not api_key:
        raise ValueError("OPENROUTER_API_KEY is not set in the environment variables.")
    return OpenRouterProvider(api_key=api_key, config=player_config)
