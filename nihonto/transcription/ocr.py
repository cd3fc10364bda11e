"""Google Cloud Vision text detection."""

import logging

from google.api_core import exceptions as google_exceptions
from google.cloud import vision

from .errors import NoTextDetectedError, OcrError


logger = logging.getLogger(__name__)


class VisionOcr:
    """OCR using the Cloud Vision ImageAnnotator.

    Credentials come from the standard Google application-default chain
    (GOOGLE_APPLICATION_CREDENTIALS or gcloud login).
    """

    def __init__(self, client=None):
        self._client = client

    @property
    def client(self):
        if self._client is None:
            self._client = vision.ImageAnnotatorClient()
        return self._client

    def detect_text(self, image_data: bytes) -> str:
        """Return the full text of the image.

        Raises:
            NoTextDetectedError: If no text region was found.
            OcrError: If the service call failed.
        """
        try:
            response = self.client.text_detection(image=vision.Image(content=image_data))
        except google_exceptions.GoogleAPICallError as e:
            raise OcrError(f"Vision API request failed: {e}") from e

        if response.error.message:
            raise OcrError(f"Vision API error: {response.error.message}")

        annotations = response.text_annotations
        if not annotations:
            raise NoTextDetectedError("No text detected in image")

        # first annotation holds the whole page
        full_text = annotations[0].description
        logger.info(f"Extracted {len(full_text)} characters")
        return full_text
