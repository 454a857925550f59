"""Client for the external text-generation backend with graceful fallbacks."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Any

from ..errors import ExternalGenerationFailure
from .prompts import rephrase_prompt

if TYPE_CHECKING:  # pragma: no cover
    from ..config.settings import NarrativeCfg

LOG = logging.getLogger(__name__)

__all__ = ["GPTNarrativeClient", "PromptSlot", "narrate", "rephrase"]

DEFAULT_MODEL = "gpt-4o-mini"


class GPTNarrativeClient:
    """Wrapper around OpenAI-compatible chat completion APIs.

    ``transport`` replaces the network call entirely and receives
    ``(prompt, model=..., temperature=...)``.
    """

    def __init__(
        self,
        api_key: str | None = None,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        transport: Callable[..., str] | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url
        self._transport = transport
        self._openai: Any | None = None
        if transport is None and api_key:
            try:  # pragma: no cover - requires optional dependency
                from openai import OpenAI
            except ImportError as exc:  # pragma: no cover
                LOG.warning("OpenAI client unavailable: %s", exc)
            else:
                client_kwargs: dict[str, Any] = {"api_key": api_key}
                if base_url:
                    client_kwargs["base_url"] = base_url
                self._openai = OpenAI(**client_kwargs)

    @classmethod
    def from_env(
        cls,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str | None = None,
        transport: Callable[..., str] | None = None,
    ) -> GPTNarrativeClient:
        api_key = os.getenv("KARMANK_OPENAI_KEY") or os.getenv("OPENAI_API_KEY")
        return cls(
            api_key,
            model=os.getenv("KARMANK_OPENAI_MODEL") or model,
            base_url=os.getenv("KARMANK_OPENAI_BASE_URL") or os.getenv("OPENAI_BASE_URL") or base_url,
            transport=transport,
        )

    @classmethod
    def from_settings(
        cls, cfg: NarrativeCfg, *, transport: Callable[..., str] | None = None
    ) -> GPTNarrativeClient:
        return cls.from_env(model=cfg.model, base_url=cfg.base_url, transport=transport)

    @property
    def available(self) -> bool:
        """Return ``True`` if a remote backend or transport is configured."""

        return self._transport is not None or self._openai is not None

    def summarize(
        self,
        prompt: str,
        *,
        temperature: float = 0.2,
        cancel: threading.Event | None = None,
    ) -> str:
        """Return the backend's response to ``prompt``.

        When ``cancel`` is set before dispatch no request is made; a custom
        transport also receives it as ``cancel=`` so it can stop early. The
        OpenAI SDK call itself runs to completion, but a reply arriving after
        ``cancel`` was set is dropped. Every failure, cancellation included,
        is raised as :class:`~karmank.errors.ExternalGenerationFailure`.
        """

        if not self.available:
            raise ExternalGenerationFailure("no text-generation backend configured")
        if cancel is not None and cancel.is_set():
            raise ExternalGenerationFailure("request cancelled before dispatch")
        try:
            if self._transport is not None:
                extra = {"cancel": cancel} if cancel is not None else {}
                reply = self._transport(
                    prompt, model=self.model, temperature=temperature, **extra
                )
            else:
                reply = _reply_text(
                    self._openai.chat.completions.create(  # type: ignore[union-attr]
                        model=self.model,
                        messages=[{"role": "user", "content": prompt}],
                        temperature=temperature,
                    )
                )
        except Exception as exc:
            raise ExternalGenerationFailure(f"text generation failed: {exc}") from exc
        if cancel is not None and cancel.is_set():
            raise ExternalGenerationFailure("request cancelled while in flight")
        return reply


def _field(obj: Any, name: str) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name)
    return getattr(obj, name, None)


def _reply_text(response: Any) -> str:
    """Text of the first chat completion choice; content parts are concatenated."""

    choices = _field(response, "choices") or []
    if not choices:
        return ""
    content = _field(_field(choices[0], "message"), "content")
    if isinstance(content, list):
        content = "".join(
            part if isinstance(part, str) else str(_field(part, "text") or "")
            for part in content
        )
    return str(content or "").strip()


def narrate(
    client: GPTNarrativeClient | None, prompt: str, *, temperature: float = 0.2
) -> str:
    """Return the backend reply to ``prompt``; empty when unavailable or failing."""

    if not prompt or client is None or not client.available:
        return ""
    try:
        return client.summarize(prompt, temperature=temperature)
    except ExternalGenerationFailure as exc:
        LOG.warning("narrative generation failed: %s", exc)
        return ""


def rephrase(
    client: GPTNarrativeClient | None,
    text: str,
    locale: str = "en",
    *,
    temperature: float = 0.2,
    cancel: threading.Event | None = None,
) -> str:
    """Return a plain-language version of ``text``, or ``text`` itself on failure."""

    if not text or client is None or not client.available:
        return text
    try:
        result = client.summarize(
            rephrase_prompt(text, locale), temperature=temperature, cancel=cancel
        )
    except ExternalGenerationFailure as exc:
        if cancel is not None and cancel.is_set():
            LOG.debug("rephrase cancelled: %s", exc)
        else:
            LOG.warning("rephrase failed, keeping original text: %s", exc)
        return text
    return result.strip() or text


class PromptSlot:
    """Tracks the newest request for one prompt slot.

    Beginning a request cancels the previous one for the same slot: its
    cancel event is set, so it is skipped if not yet dispatched and its
    reply is dropped otherwise.
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._lock = threading.Lock()
        self._token = 0
        self._cancel = threading.Event()

    def _start(self) -> tuple[int, threading.Event]:
        with self._lock:
            self._cancel.set()
            self._cancel = threading.Event()
            self._token += 1
            return self._token, self._cancel

    def begin(self) -> int:
        return self._start()[0]

    def is_current(self, token: int) -> bool:
        with self._lock:
            return token == self._token

    def rephrase(
        self,
        client: GPTNarrativeClient | None,
        text: str,
        locale: str = "en",
        *,
        temperature: float = 0.2,
    ) -> str | None:
        """Rephrase ``text``; ``None`` when a newer request superseded this one."""

        token, cancel = self._start()
        result = rephrase(client, text, locale, temperature=temperature, cancel=cancel)
        if not self.is_current(token):
            LOG.debug("discarding superseded response for slot %s", self.name)
            return None
        return result
