from __future__ import annotations

import logging
import os
import tempfile

from docinbox.domain.dates import parse_inferred_date
from docinbox.domain.errors import UnsupportedDocumentTypeError
from docinbox.domain.models import EnrichmentOutcome
from docinbox.domain.stages import Stage
from docinbox.ports.date_inference_port import DateInferencePort
from docinbox.ports.ocr_port import OCRPort
from docinbox.ports.store_port import DocumentStorePort
from docinbox.services.background import BackgroundRunner
from docinbox.services.stage_tracker import StageTracker
from docinbox.services.triage_state import ProvenanceRegistry

logger = logging.getLogger(__name__)

INFERENCE_TEXT_LIMIT = 2000


class EnrichmentService:
    """
    Background OCR -> text upload -> date inference -> date upload.

    A run is admitted only through `StageTracker.try_claim`, and the claim is
    released on every exit path. Failures are logged and reported through
    the returned outcome; nothing is raised to the caller.
    """

    def __init__(
        self,
        store: DocumentStorePort,
        ocr: OCRPort,
        date_inference: DateInferencePort,
        tracker: StageTracker,
        provenance: ProvenanceRegistry,
        runner: BackgroundRunner | None = None,
    ) -> None:
        self._store = store
        self._ocr = ocr
        self._date_inference = date_inference
        self._tracker = tracker
        self._provenance = provenance
        self._runner = runner

    def trigger(self, doc_id: str, doc_type: str) -> bool:
        if not self._tracker.try_claim(doc_id):
            return False
        if self._runner is None:
            self._tracker.release(doc_id)
            raise RuntimeError("EnrichmentService has no background runner configured.")
        future = self._runner.submit(f"enrich:{doc_id}", self._run_claimed, doc_id, doc_type)
        if future is None:
            self._tracker.release(doc_id)
            return False
        return True

    def process(self, doc_id: str, doc_type: str) -> EnrichmentOutcome | None:
        """Claim and run synchronously; None if another run already holds the claim."""
        if not self._tracker.try_claim(doc_id):
            return None
        return self._run_claimed(doc_id, doc_type)

    def _run_claimed(self, doc_id: str, doc_type: str) -> EnrichmentOutcome:
        try:
            outcome = self._run(doc_id, doc_type)
        except Exception:
            logger.exception("OCR: unexpected failure for %s", doc_id)
            outcome = EnrichmentOutcome.OCR_FAILED
        finally:
            self._tracker.release(doc_id)
        logger.info("OCR: pipeline for %s finished: %s", doc_id, outcome.value)
        return outcome

    def _run(self, doc_id: str, doc_type: str) -> EnrichmentOutcome:
        logger.info("OCR: starting for %s (type=%s)", doc_id, doc_type)
        try:
            data, _ = self._store.download_document(doc_id)
        except Exception as exc:
            logger.warning("OCR: download failed for %s: %s", doc_id, exc)
            return EnrichmentOutcome.DOWNLOAD_FAILED

        text_or_outcome = self._extract(doc_id, doc_type, data)
        if isinstance(text_or_outcome, EnrichmentOutcome):
            return text_or_outcome
        text = text_or_outcome
        logger.info("OCR: extracted %d chars for %s", len(text), doc_id)

        try:
            self._store.upload_document_text(doc_id, text)
        except Exception as exc:
            logger.warning("OCR: upload text failed for %s: %s", doc_id, exc)
            return EnrichmentOutcome.TEXT_UPLOAD_FAILED

        self._tracker.advance(doc_id, Stage.DATE_INFERENCE)
        return self._infer_and_store_date(doc_id, text)

    def _extract(self, doc_id: str, doc_type: str, data: bytes) -> str | EnrichmentOutcome:
        with tempfile.NamedTemporaryFile(
            prefix="docinbox-ocr-", suffix=doc_type or "", delete=False
        ) as handle:
            scratch_path = handle.name
        try:
            try:
                with open(scratch_path, "wb") as handle:
                    handle.write(data)
            except OSError as exc:
                logger.warning("OCR: write failed for %s: %s", doc_id, exc)
                return EnrichmentOutcome.OCR_FAILED
            try:
                text = self._ocr.extract_text(scratch_path, doc_type)
            except UnsupportedDocumentTypeError as exc:
                # retried on every view while text is missing; expected, not an error
                logger.info("OCR: skipping %s: %s", doc_id, exc)
                return EnrichmentOutcome.UNSUPPORTED_TYPE
            except Exception as exc:
                logger.warning("OCR: extraction failed for %s: %s", doc_id, exc)
                return EnrichmentOutcome.OCR_FAILED
        finally:
            _remove_quietly(scratch_path)
        if not text or not text.strip():
            logger.info("OCR: no text extracted for %s", doc_id)
            return EnrichmentOutcome.NO_TEXT
        return text

    def _infer_and_store_date(self, doc_id: str, text: str) -> EnrichmentOutcome:
        try:
            date = parse_inferred_date(
                self._date_inference.infer_date(text[:INFERENCE_TEXT_LIMIT])
            )
        except Exception as exc:
            logger.warning("OCR: date inference failed for %s: %s", doc_id, exc)
            return EnrichmentOutcome.INFERENCE_FAILED
        if not date:
            logger.info("OCR: no date inferred for %s", doc_id)
            return EnrichmentOutcome.NO_DATE

        logger.info("OCR: inferred date %s for %s", date, doc_id)
        try:
            self._store.update_document_date(doc_id, date)
        except Exception as exc:
            logger.warning("OCR: update date failed for %s: %s", doc_id, exc)
            return EnrichmentOutcome.DATE_UPLOAD_FAILED
        self._provenance.mark(doc_id)
        return EnrichmentOutcome.DATE_SET


def _remove_quietly(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("could not remove scratch file %s: %s", path, exc)
