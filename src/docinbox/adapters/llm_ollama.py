from __future__ import annotations

import requests

from docinbox.domain.dates import parse_inferred_date
from docinbox.domain.errors import DateInferenceError
from docinbox.ports.date_inference_port import DateInferencePort
from docinbox.settings import DEFAULT_OLLAMA_MODEL, DEFAULT_OLLAMA_URL

MAX_PROMPT_CHARS = 2000

_PROMPT_TEMPLATE = (
    "Extract the document date from the following text. The document date is the date "
    "the document was created, issued, or refers to (e.g. invoice date, letter date, "
    "statement date). Return ONLY the date in YYYY-MM-DD format. If no date can be "
    'determined, return "NONE".\n\n'
    "Text:\n"
    "{text}\n\n"
    "Date:"
)


class OllamaDateInferenceAdapter(DateInferencePort):
    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float = 60.0,
    ) -> None:
        self._base_url = (base_url or DEFAULT_OLLAMA_URL).rstrip("/")
        self._model = model or DEFAULT_OLLAMA_MODEL
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def model(self) -> str:
        return self._model

    def infer_date(self, text: str) -> str | None:
        prompt = self.build_prompt(text)
        try:
            response = requests.post(
                f"{self._base_url}/api/generate",
                json={"model": self._model, "prompt": prompt, "stream": False},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise DateInferenceError(f"Ollama request failed: {exc}") from exc
        if response.status_code != 200:
            raise DateInferenceError(f"Ollama returned status {response.status_code}")
        try:
            payload = response.json()
        except ValueError as exc:
            raise DateInferenceError("Failed to decode Ollama response.") from exc
        if not isinstance(payload, dict):
            raise DateInferenceError("Unexpected Ollama response shape.")
        raw = payload.get("response")
        return parse_inferred_date(raw if isinstance(raw, str) else None)

    @staticmethod
    def build_prompt(text: str) -> str:
        return _PROMPT_TEMPLATE.format(text=(text or "")[:MAX_PROMPT_CHARS])
