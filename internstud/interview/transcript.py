"""
Answer buffer fed by a speech-to-text stream.

Speech engines report a cumulative transcript for the current capture
("I", "I think", "I think so"). Only the part not seen before is appended,
so the answer never contains the same segment twice.
"""

import os


class ListeningError(Exception):
    """Manual edit attempted while speech capture is active."""


class TranscriptBuffer:
    """
    Holds the answer text and merges streamed transcripts into it.

    Typing is blocked while listening: the tail of the buffer is then always
    the transcript consumed so far, which lets a revised transcript replace
    its own previous output.
    """

    def __init__(self, text: str = ""):
        self.text = text
        self.listening = False
        self._seen = ""

    def start_listening(self):
        """Begin a capture. Existing text is kept; the new transcript starts empty."""
        self.listening = True
        self._seen = ""

    def stop_listening(self):
        self.listening = False
        self._seen = ""

    def feed(self, transcript: str) -> str:
        """
        Merge the engine's cumulative transcript. Returns the appended part.
        Ignored while not listening.
        """
        if not self.listening:
            return ""

        if transcript.startswith(self._seen):
            segment = transcript[len(self._seen):]
            self.text += segment
        else:
            # Engine revised earlier words: rewrite everything after the common prefix
            keep = len(os.path.commonprefix([self._seen, transcript]))
            self.text = self.text[:len(self.text) - len(self._seen) + keep]
            segment = transcript[keep:]
            self.text += segment

        self._seen = transcript
        return segment

    def set_text(self, text: str):
        """Replace the answer with typed text."""
        if self.listening:
            raise ListeningError("Stop speech capture before editing the answer")
        self.text = text

    def clear(self):
        self.text = ""
        self._seen = ""

    def is_blank(self) -> bool:
        return not self.text.strip()
