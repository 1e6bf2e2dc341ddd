"""
Where the flight CSV comes from.

Every source exposes ``fetch()`` returning the CSV text, or ``None`` when the
source is unavailable. Blank content is reported as unavailable too.
"""

import logging
import os
import tempfile
from typing import Optional

import requests

logger = logging.getLogger(__name__)


def _non_blank(text: Optional[str]) -> Optional[str]:
    if text is None or not text.strip():
        return None
    return text


class FileCsvSource:
    def __init__(self, path: str):
        self.path = path

    def fetch(self) -> Optional[str]:
        if not os.path.isfile(self.path):
            logger.info("Flight CSV %s not found", self.path)
            return None
        with open(self.path, "r", encoding="utf-8-sig") as f:
            return _non_blank(f.read())

    def save(self, text: str) -> None:
        """Replace the file contents; written to a temp file then renamed."""
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".csv.tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(text)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise

    def __repr__(self):
        return f"<FileCsvSource {self.path}>"


class HttpCsvSource:
    """Remote export behind a pre-signed URL."""

    def __init__(self, url: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self) -> Optional[str]:
        try:
            response = self.session.get(self.url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning("Failed to fetch flight CSV: %s", e)
            return None
        if response.encoding is None:
            response.encoding = "utf-8"
        return _non_blank(response.text)

    def __repr__(self):
        # the query string carries the signature
        return f"<HttpCsvSource {self.url.split('?', 1)[0]}>"


class TextCsvSource:
    def __init__(self, text: Optional[str]):
        self.text = text

    def fetch(self) -> Optional[str]:
        return _non_blank(self.text)

    def __repr__(self):
        return "<TextCsvSource>"


def source_from_settings(settings):
    if settings.FLIGHT_CSV_URL:
        return HttpCsvSource(settings.FLIGHT_CSV_URL, timeout=settings.FLIGHT_CSV_TIMEOUT)
    return FileCsvSource(settings.FLIGHT_CSV_PATH)
