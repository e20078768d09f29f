
"""Flavor-text coach.

Commentary is fetched on a daemon thread per request and handed back to the
game loop through a queue.  Each request gets an increasing id and only the
answer to the most recent one is shown; anything older is dropped when it
finally arrives.  The fetch never raises: every failure turns into
``FALLBACK``.
"""
import logging
import queue
import threading
from typing import Callable, Optional

from google import genai
from google.genai import types

from stacker_config import CONFIG, coach_api_key

logger = logging.getLogger(__name__)

FALLBACK = "Keep stacking those bytes, runner."
READY = "System Ready. Calibrate field dimensions to begin."
TERMINATED = "Session terminated. Awaiting new calibration."

PROMPT = (
    "The player is playing Tetris.\n"
    "Current Stats: Score: {score}, Lines: {lines}, Level: {level}, Game Status: {status}.\n"
    'Provide a very short (max 15 words) and witty or encouraging piece of commentary as a "Cyberpunk Game Coach".'
)

Backend = Callable[[int, int, int, str], str]


class GeminiCommentary:
    """Commentary backend on the Gemini API."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 timeout_ms: Optional[int] = None):
        self.api_key = api_key or coach_api_key()
        self.model = model or CONFIG["COACH_MODEL"]
        self.timeout_ms = timeout_ms or CONFIG["COACH_TIMEOUT_MS"]
        self._client = None

    def client(self):
        if self._client is None:
            self._client = genai.Client(
                api_key=self.api_key,
                http_options=types.HttpOptions(timeout=self.timeout_ms),
            )
        return self._client

    def __call__(self, score: int, lines: int, level: int, status: str) -> str:
        response = self.client().models.generate_content(
            model=self.model,
            contents=PROMPT.format(score=score, lines=lines, level=level, status=status),
            config=types.GenerateContentConfig(temperature=0.8, top_p=0.9),
        )
        return (response.text or "").strip()


def get_commentary(backend: Backend, score: int, lines: int, level: int, status: str) -> str:
    try:
        text = backend(score, lines, level, status)
    except Exception:
        logger.exception("coach backend failed")
        return FALLBACK
    return text or FALLBACK


class Coach:
    def __init__(self, backend: Optional[Backend] = None, enabled: bool = True):
        self.backend = backend if backend is not None else GeminiCommentary()
        self.enabled = enabled
        self.comment = READY
        self.request_id = 0
        self.results = queue.Queue()

    def say(self, text: str):
        """Show a fixed line now; answers still in flight become stale."""
        self.request_id += 1
        self.comment = text

    def request(self, score: int, lines: int, level: int, status: str) -> Optional[threading.Thread]:
        self.request_id += 1
        rid = self.request_id
        if not self.enabled:
            self.results.put((rid, FALLBACK))
            return None
        logger.debug("commentary #%d requested (%s, level %d)", rid, status, level)
        th = threading.Thread(target=self._fetch, args=(rid, score, lines, level, status), daemon=True)
        th.start()
        return th

    def _fetch(self, rid, score, lines, level, status):
        self.results.put((rid, get_commentary(self.backend, score, lines, level, status)))

    def poll(self) -> bool:
        """Apply the latest answer, if it arrived; True when the comment changed."""
        changed = False
        while True:
            try:
                rid, text = self.results.get_nowait()
            except queue.Empty:
                return changed
            if rid != self.request_id:
                logger.debug("dropped stale commentary #%d", rid)
                continue
            self.comment = text
            changed = True
