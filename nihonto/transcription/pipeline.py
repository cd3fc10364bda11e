"""Three-stage transcription of one setsumei image: OCR, correction, translation."""

import base64
import io
import logging
import tempfile
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Literal, Optional
from urllib.parse import unquote, urlparse

import requests
from PIL import Image, UnidentifiedImageError

from ..catalog.models import CatalogError, CatalogItem, ItemId
from ..catalog.repository import CatalogRepository
from .completion import CompletionClient, user_message
from .errors import FetchError, TranscriptionError
from .ocr import VisionOcr
from .prompts import (
    CORRECTION_MAX_TOKENS,
    CORRECTION_TEMPERATURE,
    TRANSLATION_MAX_TOKENS,
    TRANSLATION_TEMPERATURE,
    build_correction_prompt,
    build_translation_prompt,
)


logger = logging.getLogger(__name__)

Stage = Literal["fetch", "ocr", "correct", "translate", "persist"]
ResultStatus = Literal["DONE", "FAILED"]


@dataclass
class TranscriptionResult:
    """Outcome for one catalog item."""

    item_id: ItemId
    volume: int
    item_number: int
    status: ResultStatus
    error: Optional[str] = None
    stage: Optional[Stage] = None  # stage that failed

    @property
    def success(self) -> bool:
        return self.status == "DONE"


def fetch_image(url: str, dest: Path, session=requests, timeout: float = 60) -> bytes:
    """Download the image at url to dest and return its bytes.

    Raises:
        FetchError: If the download fails or the content is not an image.
    """
    parsed = urlparse(url)
    try:
        if parsed.scheme == "file":
            content = Path(unquote(parsed.path)).read_bytes()
        else:
            response = session.get(url, timeout=timeout)
            response.raise_for_status()
            content = response.content
    except (requests.RequestException, OSError) as e:
        raise FetchError(f"Failed to download {url}: {e}") from e

    try:
        with Image.open(io.BytesIO(content)) as img:
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise FetchError(f"Downloaded content is not an image: {url}") from e

    dest.write_bytes(content)
    return content


def image_reference(url: str, content: bytes) -> str:
    """URL the completion service can load: the public URL, or an inline data URL for local files."""
    if urlparse(url).scheme in ("http", "https"):
        return url
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:image/jpeg;base64,{encoded}"


def correct_ocr(client: CompletionClient, model: str, raw_ocr: str, image_url: str) -> str:
    """Ask a vision model to fix the OCR text against the page image."""
    logger.info("Correcting OCR with LLM + vision...")
    return client.complete(
        model=model,
        messages=[user_message(build_correction_prompt(raw_ocr), image_url=image_url)],
        max_tokens=CORRECTION_MAX_TOKENS,
        temperature=CORRECTION_TEMPERATURE,
    )


def translate_to_markdown(client: CompletionClient, model: str, corrected_ocr: str) -> str:
    """Translate corrected Japanese text into the sectioned English Markdown layout."""
    logger.info("Translating to English Markdown...")
    return client.complete(
        model=model,
        messages=[user_message(build_translation_prompt(corrected_ocr))],
        max_tokens=TRANSLATION_MAX_TOKENS,
        temperature=TRANSLATION_TEMPERATURE,
    )


class TranscriptionPipeline:
    """Runs fetch → OCR → correct → translate → persist for one item at a time."""

    def __init__(
        self,
        ocr: VisionOcr,
        completion: CompletionClient,
        catalog: CatalogRepository,
        vision_model: str,
        text_model: str,
        session=requests,
    ):
        self.ocr = ocr
        self.completion = completion
        self.catalog = catalog
        self.vision_model = vision_model
        self.text_model = text_model
        self.session = session

    def process(self, item: CatalogItem) -> TranscriptionResult:
        """Transcribe one item; failures come back as a FAILED result, never raised.

        The catalog is only touched after all three service stages succeed.
        """
        stage: Stage = "fetch"
        try:
            with tempfile.TemporaryDirectory(prefix="setsumei_") as tmpdir:
                image_path = Path(tmpdir) / f"setsumei_{item.id}.jpg"
                logger.info(f"Downloading {item.setsumei_url}")
                content = fetch_image(item.setsumei_url, image_path, session=self.session)

                stage = "ocr"
                raw_ocr = self.ocr.detect_text(image_path.read_bytes())

                stage = "correct"
                corrected = correct_ocr(
                    self.completion,
                    self.vision_model,
                    raw_ocr,
                    image_reference(item.setsumei_url, content),
                )

                stage = "translate"
                markdown = translate_to_markdown(self.completion, self.text_model, corrected)

                stage = "persist"
                self.catalog.update(
                    item.id,
                    {
                        "setsumei_japanese": corrected,
                        "setsumei_english": markdown,
                        "translated_at": datetime.now(timezone.utc).isoformat(),
                    },
                )
        except (TranscriptionError, CatalogError) as e:
            logger.error(f"Error processing {item.label} at {stage}: {e}")
            return self._result(item, "FAILED", error=str(e), stage=stage)
        except Exception as e:
            logger.exception(f"Unexpected error processing {item.label} at {stage}")
            return self._result(item, "FAILED", error=str(e) or type(e).__name__, stage=stage)

        logger.info(f"{item.label} translation complete")
        return self._result(item, "DONE")

    @staticmethod
    def _result(item: CatalogItem, status: ResultStatus, error: Optional[str] = None, stage: Optional[Stage] = None) -> TranscriptionResult:
        return TranscriptionResult(
            item_id=item.id,
            volume=item.volume,
            item_number=item.item_number,
            status=status,
            error=error,
            stage=stage,
        )
