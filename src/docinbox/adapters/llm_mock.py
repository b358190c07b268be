from __future__ import annotations

from docinbox.ports.date_inference_port import DateInferencePort


class NullDateInferenceAdapter(DateInferencePort):
    def infer_date(self, text: str) -> str | None:
        _ = text
        return None
