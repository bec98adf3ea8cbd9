"""
Remote response provider backed by an OpenAI-compatible chat-completions endpoint.
"""

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Sequence, Union

import httpx

from domain import Participant, Turn
from exceptions import ProviderError

from .base import ResponseProvider, conversational_turns

if TYPE_CHECKING:
    from orchestration.registry import ParticipantRegistry

logger = logging.getLogger("RemoteProvider")

ApiKeySource = Union[str, Callable[[], Optional[str]]]


def history_to_messages(history: Sequence[Turn]) -> List[Dict[str, str]]:
    """
    Convert the transcript into role-tagged messages.

    User turns become 'user', participant turns 'assistant'. Marker turns are
    UI notices and are left out.
    """
    return [
        {"role": "user" if turn.is_user else "assistant", "content": turn.content}
        for turn in conversational_turns(history)
    ]


def extract_reply(payload: Any, participant_id: Optional[str] = None) -> str:
    """
    Pull choices[0].message.content out of a response payload.

    A null content counts as an empty reply; anything else that is not a
    string is a malformed payload.

    Raises:
        ProviderError: If the payload does not have the expected shape
    """
    try:
        content = payload["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise ProviderError(f"Malformed completion payload: {e!r}", participant_id=participant_id) from e

    if content is None:
        return ""
    if not isinstance(content, str):
        raise ProviderError(
            f"Completion content is {type(content).__name__}, expected str", participant_id=participant_id
        )
    return content


class RemoteResponseProvider(ResponseProvider):
    """
    One POST per participant turn.

    Args:
        registry: Participant registry (model reference and display name)
        api_key: Bearer credential, or a callable returning the current one
        endpoint: Chat-completions URL
        persona_prompt: System prompt template with a '{name}' placeholder
        max_tokens: Completion budget per reply
        timeout: Transport timeout in seconds
        app_title: Sent as X-Title
        referer: Sent as HTTP-Referer when set
        client: Optional shared httpx.AsyncClient (owned by the caller)
    """

    def __init__(
        self,
        registry: "ParticipantRegistry",
        api_key: ApiKeySource,
        endpoint: str,
        persona_prompt: str,
        max_tokens: int = 300,
        timeout: float = 60.0,
        app_title: Optional[str] = None,
        referer: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.registry = registry
        self._api_key = api_key
        self.endpoint = endpoint
        self.persona_prompt = persona_prompt
        self.max_tokens = max_tokens
        self.timeout = timeout
        self.app_title = app_title
        self.referer = referer
        self._client = client
        self._owns_client = client is None

    @property
    def api_key(self) -> Optional[str]:
        return self._api_key() if callable(self._api_key) else self._api_key

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    def build_headers(self) -> Dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        if self.referer:
            headers["HTTP-Referer"] = self.referer
        if self.app_title:
            headers["X-Title"] = self.app_title
        return headers

    def build_payload(self, participant: Participant, history: Sequence[Turn]) -> Dict[str, Any]:
        try:
            system_prompt = self.persona_prompt.format(name=participant.display_name)
        except (KeyError, IndexError, ValueError) as e:
            raise ProviderError(f"Invalid persona prompt template: {e!r}", participant_id=participant.id) from e
        return {
            "model": participant.backend_model_ref,
            "messages": [{"role": "system", "content": system_prompt}, *history_to_messages(history)],
            "max_tokens": self.max_tokens,
        }

    async def generate(self, participant_id: str, history: Sequence[Turn]) -> str:
        participant = self.registry.lookup(participant_id)
        if not self.api_key:
            raise ProviderError("No API key configured", participant_id=participant_id)

        payload = self.build_payload(participant, history)
        logger.debug(f"📤 Requesting {participant.backend_model_ref} | {len(payload['messages'])} message(s)")

        try:
            response = await self._get_client().post(self.endpoint, json=payload, headers=self.build_headers())
        except httpx.HTTPError as e:
            raise ProviderError(f"Transport error: {e}", participant_id=participant_id) from e

        if not response.is_success:
            raise ProviderError(
                f"API returned {response.status_code}",
                participant_id=participant_id,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(f"Response is not JSON: {e}", participant_id=participant_id) from e

        return extract_reply(data, participant_id)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
